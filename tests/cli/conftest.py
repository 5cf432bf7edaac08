"""Shared fixtures for CLI tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from forum_auth_tester.configuration.log_setup import PACKAGE_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)
