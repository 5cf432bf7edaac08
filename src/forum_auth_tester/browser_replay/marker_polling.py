"""Fixed-interval polling for page markers."""

from __future__ import annotations

from typing import Any

from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.support.ui import WebDriverWait


class MarkerTimeoutError(Exception):
    """Raised when a page marker does not appear before the deadline."""


def wait_for_marker(
    driver: Any,
    locator: tuple[str, str],
    description: str,
    timeout: float,
    interval: float = 1.0,
) -> list[Any]:
    """Poll ``driver.find_elements(*locator)`` every ``interval`` seconds.

    Returns the matched elements. A driver error raised by a probe means the
    marker is not there yet.
    """
    wait = WebDriverWait(
        driver,
        timeout,
        poll_frequency=interval,
        ignored_exceptions=(WebDriverException,),
    )
    try:
        return wait.until(lambda current: current.find_elements(*locator))
    except TimeoutException as exc:
        raise MarkerTimeoutError(f"timeout waiting for {description}") from exc
