"""Logging setup tests."""

from __future__ import annotations

import io
import logging

import pytest
from forum_auth_tester.configuration.log_setup import PACKAGE_LOGGER_NAME, configure_logging


@pytest.fixture(autouse=True)
def _restore_package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


def test_configure_logging_writes_timestamped_lines() -> None:
    stream = io.StringIO()

    configure_logging("INFO", stream=stream)
    logging.getLogger("forum_auth_tester.http_replay").info("Signup test PASSED")

    line = stream.getvalue().strip()
    assert line.endswith("INFO forum_auth_tester.http_replay: Signup test PASSED")
    assert line[:4].isdigit()


def test_configure_logging_respects_level() -> None:
    stream = io.StringIO()

    configure_logging("warning", stream=stream)
    logger = logging.getLogger("forum_auth_tester.run_execution")
    logger.info("hidden")
    logger.warning("shown")

    assert "hidden" not in stream.getvalue()
    assert "shown" in stream.getvalue()


def test_configure_logging_twice_keeps_one_handler() -> None:
    first = io.StringIO()
    second = io.StringIO()

    configure_logging("INFO", stream=first)
    configure_logging("INFO", stream=second)
    logging.getLogger(PACKAGE_LOGGER_NAME).info("once")

    assert first.getvalue() == ""
    assert second.getvalue().count("once") == 1


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        configure_logging("LOUD")
