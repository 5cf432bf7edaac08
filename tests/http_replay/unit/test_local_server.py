"""Local test server wiring tests."""

from __future__ import annotations

import sys
import textwrap
from collections.abc import Iterator
from pathlib import Path

import pytest
from forum_auth_tester.configuration.runtime_settings import TargetSettings
from forum_auth_tester.http_replay.local_server import (
    IN_PROCESS_BASE_URL,
    TargetServerError,
    load_wsgi_app,
    open_test_server,
)

FORUM_MODULE = textwrap.dedent(
    """
    from urllib.parse import parse_qs


    def _broken_body():
        yield b"partial"
        raise RuntimeError("body crashed")


    def application(environ, start_response):
        length = int(environ.get("CONTENT_LENGTH") or 0)
        form = parse_qs(environ["wsgi.input"].read(length).decode("utf-8"))
        if environ["PATH_INFO"] == "/boom":
            raise RuntimeError("handler crashed")
        if environ["PATH_INFO"] == "/stream-boom":
            start_response("200 OK", [("Content-Type", "text/plain")])
            return _broken_body()
        if form.get("email") == ["alice@example.com"]:
            start_response("303 See Other", [("Location", "/")])
            return [b""]
        start_response("400 Bad Request", [("Content-Type", "text/plain")])
        return [b"invalid credentials"]


    not_callable = 42
    """
)


@pytest.fixture
def forum_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    module_name = "fake_forum_local_server"
    (tmp_path / f"{module_name}.py").write_text(FORUM_MODULE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    yield module_name
    sys.modules.pop(module_name, None)


def _target(**overrides) -> TargetSettings:
    defaults: dict = {
        "wsgi_app": None,
        "base_url": None,
        "signup_path": "/signup",
        "login_path": "/login",
        "timeout_seconds": 5.0,
    }
    defaults.update(overrides)
    return TargetSettings(**defaults)


def test_load_wsgi_app_resolves_attribute(forum_module: str) -> None:
    app = load_wsgi_app(f"{forum_module}:application")

    assert callable(app)


@pytest.mark.parametrize(
    ("suffix", "message"),
    [
        (":missing", "has no attribute"),
        (":not_callable", "is not callable"),
        ("", "must look like 'module:attribute'"),
    ],
)
def test_load_wsgi_app_errors(forum_module: str, suffix: str, message: str) -> None:
    with pytest.raises(TargetServerError, match=message):
        load_wsgi_app(f"{forum_module}{suffix}")


def test_load_wsgi_app_reports_import_failures() -> None:
    with pytest.raises(TargetServerError, match="Cannot import WSGI module"):
        load_wsgi_app("definitely_not_a_module_here:app")


def test_open_test_server_serves_wsgi_app_in_process(forum_module: str) -> None:
    target = _target(wsgi_app=f"{forum_module}:application")

    with open_test_server(target) as client:
        ok = client.post("/login", data={"email": "alice@example.com", "password": "x"})
        rejected = client.post("/login", data={"email": "eve@example.com", "password": "x"})
        crashed = client.post("/boom", data={})
        crashed_while_streaming = client.post("/stream-boom", data={})
        after_crash = client.post("/login", data={"email": "alice@example.com", "password": "x"})

    assert str(client.base_url).rstrip("/") == IN_PROCESS_BASE_URL
    assert ok.status_code == 303
    assert ok.headers["location"] == "/"
    assert rejected.status_code == 400
    assert rejected.text == "invalid credentials"
    assert crashed.status_code == 500
    assert crashed_while_streaming.status_code == 500
    assert crashed_while_streaming.text == "Internal Server Error"
    assert after_crash.status_code == 303
    assert client.is_closed


def test_open_test_server_uses_base_url() -> None:
    target = _target(base_url="http://127.0.0.1:8080")

    with open_test_server(target) as client:
        assert str(client.base_url).rstrip("/") == "http://127.0.0.1:8080"
        assert client.follow_redirects is False
    assert client.is_closed


def test_open_test_server_requires_a_target() -> None:
    with pytest.raises(TargetServerError):
        with open_test_server(_target()):
            pass
