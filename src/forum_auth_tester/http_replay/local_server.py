"""Local test server wiring for HTTP replay."""

from __future__ import annotations

import importlib
import logging
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import httpx

from forum_auth_tester.configuration.runtime_settings import TargetSettings

logger = logging.getLogger(__name__)

IN_PROCESS_BASE_URL = "http://testserver"


class TargetServerError(Exception):
    """Raised when the forum under test cannot be reached or loaded."""


def load_wsgi_app(import_string: str) -> Callable[..., Any]:
    """Resolve a ``module:attribute`` string to a WSGI application."""
    module_name, _, attribute_path = import_string.partition(":")
    if not module_name or not attribute_path:
        raise TargetServerError(f"WSGI app must look like 'module:attribute', got {import_string!r}")
    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise TargetServerError(f"Cannot import WSGI module '{module_name}': {exc}") from exc
    for attribute in attribute_path.split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError as exc:
            raise TargetServerError(
                f"Module '{module_name}' has no attribute '{attribute_path}'"
            ) from exc
    if not callable(target):
        raise TargetServerError(f"WSGI app '{import_string}' is not callable")
    return target


def serve_errors_as_500(app: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap a WSGI app so an unhandled exception becomes a 500 response.

    The body is read inside the wrapper so errors raised while it streams are
    caught as well.
    """

    def application(environ: dict[str, Any], start_response: Callable[..., Any]) -> Any:
        try:
            body = app(environ, start_response)
            try:
                return list(body)
            finally:
                if hasattr(body, "close"):
                    body.close()
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception(
                "Unhandled error for %s %s",
                environ.get("REQUEST_METHOD"),
                environ.get("PATH_INFO"),
            )
            start_response(
                "500 Internal Server Error",
                [("Content-Type", "text/plain; charset=utf-8")],
                sys.exc_info(),
            )
            return [b"Internal Server Error"]

    return application


@contextmanager
def open_test_server(target: TargetSettings) -> Iterator[httpx.Client]:
    """Yield an HTTP client bound to the forum under test.

    A configured WSGI application is served in-process; otherwise the client
    talks to the configured base URL. Redirects are never followed.
    """
    if target.wsgi_app:
        app = load_wsgi_app(target.wsgi_app)
        client = httpx.Client(
            transport=httpx.WSGITransport(
                app=serve_errors_as_500(app), raise_app_exceptions=False
            ),
            base_url=IN_PROCESS_BASE_URL,
            timeout=target.timeout_seconds,
            follow_redirects=False,
        )
        logger.info("Serving %s in-process at %s", target.wsgi_app, IN_PROCESS_BASE_URL)
    elif target.base_url:
        client = httpx.Client(
            base_url=target.base_url,
            timeout=target.timeout_seconds,
            follow_redirects=False,
        )
        logger.info("Replaying against %s", target.base_url)
    else:
        raise TargetServerError("target requires either wsgi_app or base_url")
    with client:
        yield client
