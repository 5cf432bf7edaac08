"""run-browser orchestration tests with a fake remote session."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from forum_auth_tester.cli import cli, main
from forum_auth_tester.configuration.runtime_settings import BrowserSettings
from openpyxl import Workbook, load_workbook
from selenium.webdriver.common.by import By

LOGIN_URL = "http://forum.test/login"
ACCOUNTS = {"alice@example.com": "Secret123"}


class _Input:
    def __init__(self, page: _ForumLoginPage, name: str) -> None:
        self._page = page
        self._name = name

    def clear(self) -> None:
        self._page.fields[self._name] = ""

    def send_keys(self, *value: str) -> None:
        self._page.fields[self._name] += "".join(value)

    def click(self) -> None:
        self._page.submit()


class _ForumLoginPage:
    """Remote session whose login page accepts the accounts above."""

    def __init__(self) -> None:
        self.fields: dict[str, str] = {}
        self.visited: list[str] = []
        self.submitted = False
        self.logged_in = False
        self.quit_called = False

    def get(self, url: str) -> None:
        self.visited.append(url)
        self.fields = {"email": "", "password": ""}
        self.submitted = False
        self.logged_in = False

    def find_element(self, by: str, value: str) -> _Input:
        return _Input(self, "login" if by == By.XPATH else value)

    def find_elements(self, by: str, value: str) -> list[str]:
        if not self.submitted:
            return []
        if (by, value) == (By.ID, "user-home") and self.logged_in:
            return ["user-home"]
        if (by, value) == (By.NAME, "email") and not self.logged_in:
            return ["email"]
        return []

    def submit(self) -> None:
        self.submitted = True
        self.logged_in = ACCOUNTS.get(self.fields["email"]) == self.fields["password"]

    def quit(self) -> None:
        self.quit_called = True


@pytest.fixture
def remote_session(monkeypatch: pytest.MonkeyPatch) -> list[_ForumLoginPage]:
    sessions: list[_ForumLoginPage] = []

    def create_remote_driver(settings: BrowserSettings) -> Any:
        session = _ForumLoginPage()
        sessions.append(session)
        return session

    monkeypatch.setattr(
        "forum_auth_tester.run_execution.replay_run_use_case.create_remote_driver",
        create_remote_driver,
    )
    return sessions


def _write_login_fixture(path: Path, rows: list[tuple]) -> None:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Sheet1"
    sheet.append(["Name", "Email", "Password", "WantCode"])
    for row in rows:
        sheet.append(list(row))
    workbook.save(path)


def _write_config(tmp_path: Path) -> Path:
    config = {
        "fixtures": {"login": "login.xlsx"},
        "browser": {
            "hub_url": "http://hub.test/wd/hub",
            "username": "bs-user",
            "access_key": "bs-key",
            "login_url": LOGIN_URL,
            "page_settle_seconds": 0,
            "marker_timeout_seconds": 0.3,
            "poll_interval_seconds": 0.1,
        },
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path


def test_run_browser_replays_login_fixture_and_prints_results_path(
    tmp_path: Path, remote_session: list[_ForumLoginPage]
) -> None:
    _write_login_fixture(
        tmp_path / "login.xlsx",
        [
            ("valid", "alice@example.com", "Secret123", 303),
            ("wrong password", "alice@example.com", "nope", 400),
        ],
    )
    config_path = _write_config(tmp_path)

    result = CliRunner().invoke(cli, ["run-browser", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    written = list(tmp_path.glob("login-browser-results-*.xlsx"))
    assert len(written) == 1
    assert written[0].name in result.output
    assert len(remote_session) == 1
    assert remote_session[0].visited == [LOGIN_URL, LOGIN_URL]
    assert remote_session[0].quit_called
    rows = list(load_workbook(written[0])["Results"].iter_rows(values_only=True))
    assert [row[5] for row in rows[1:]] == ["PASSED", "PASSED"]


def test_run_browser_exits_non_zero_when_a_marker_never_appears(
    tmp_path: Path, remote_session: list[_ForumLoginPage], capsys
) -> None:
    _write_login_fixture(
        tmp_path / "login.xlsx",
        [
            ("valid", "alice@example.com", "Secret123", 303),
            ("expects success with bad password", "alice@example.com", "nope", 303),
        ],
    )
    config_path = _write_config(tmp_path)
    output_dir = tmp_path / "results"

    exit_code = main(
        ["run-browser", "--config", str(config_path), "--output-dir", str(output_dir)]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "1 of 2 cases failed." in captured.err
    written = list(output_dir.glob("login-browser-results-*.xlsx"))
    assert len(written) == 1
    assert written[0].name in captured.out
    assert remote_session[0].quit_called
    rows = list(load_workbook(written[0])["Results"].iter_rows(values_only=True))
    assert [row[5] for row in rows[1:]] == ["PASSED", "FAILED"]
    assert rows[2][6].startswith("Expected successful login")
