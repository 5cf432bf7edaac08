"""Remote browser replay of login fixture cases."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.common.options import ArgOptions

from forum_auth_tester.configuration.runtime_settings import BrowserSettings
from forum_auth_tester.fixture_ingestion.fixture_models import LoginCase
from forum_auth_tester.http_replay.replay_outcomes import CaseOutcome

from .marker_polling import MarkerTimeoutError, wait_for_marker

logger = logging.getLogger(__name__)

EMAIL_FIELD_NAME = "email"
PASSWORD_FIELD_NAME = "password"
LOGIN_BUTTON_XPATH = "//input[@type='submit' and @value='Login']"
USER_HOME_ID = "user-home"

_OPTIONS_BY_BROWSER: dict[str, Callable[[], ArgOptions]] = {
    "chrome": webdriver.ChromeOptions,
    "firefox": webdriver.FirefoxOptions,
    "edge": webdriver.EdgeOptions,
    "microsoftedge": webdriver.EdgeOptions,
}


class BrowserCaseAborted(Exception):
    """Raised when a browser step fails and the case cannot continue."""


class WebElementProtocol(Protocol):
    """Subset of the Selenium element API used by the replayer."""

    def clear(self) -> None: ...

    def send_keys(self, *value: str) -> None: ...

    def click(self) -> None: ...


class WebDriverProtocol(Protocol):
    """Subset of the Selenium driver API used by the replayer."""

    def get(self, url: str) -> None: ...

    def find_element(self, by: str = ..., value: str | None = None) -> Any: ...

    def find_elements(self, by: str = ..., value: str | None = None) -> list[Any]: ...

    def quit(self) -> None: ...


def build_browser_options(settings: BrowserSettings) -> ArgOptions:
    """Translate configured capabilities and credentials into driver options."""
    browser_name = str(settings.capabilities.get("browserName", "chrome"))
    options_factory = _OPTIONS_BY_BROWSER.get(browser_name.lower().replace(" ", ""))
    options = options_factory() if options_factory else ArgOptions()
    for key, value in settings.capabilities.items():
        options.set_capability(key, value)
    if settings.username:
        options.set_capability("browserstack.user", settings.username)
    if settings.access_key:
        options.set_capability("browserstack.key", settings.access_key)
    return options


def create_remote_driver(settings: BrowserSettings) -> WebDriverProtocol:
    """Open a remote WebDriver session on the configured hub."""
    logger.info("Opening remote browser session on %s", settings.hub_url)
    return webdriver.Remote(
        command_executor=settings.hub_url,
        options=build_browser_options(settings),
    )


class LoginPageReplayer:
    """Drives the login page of a deployed forum through one browser session."""

    def __init__(
        self,
        driver: WebDriverProtocol,
        settings: BrowserSettings,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._driver = driver
        self._settings = settings
        self._sleep = sleep

    def replay_all(self, cases: Sequence[LoginCase]) -> list[CaseOutcome]:
        return [self.replay(case) for case in cases]

    def replay(self, case: LoginCase) -> CaseOutcome:
        """Fill and submit the login form, then wait for the expected page marker."""
        logger.info("Running browser login test case: %r", case.name)
        try:
            self._submit_login_form(case)
        except BrowserCaseAborted as exc:
            logger.error("Browser login test ABORTED for %r: %s", case.name, exc)
            return CaseOutcome.aborted(case.name, case.row_number, case.want_code, str(exc))

        expect_success = case.want_code == self._settings.success_status
        try:
            if expect_success:
                self._wait_for(By.ID, USER_HOME_ID, "element id=user-home")
            else:
                self._wait_for(By.NAME, EMAIL_FIELD_NAME, "any error message to appear")
        except MarkerTimeoutError as exc:
            expectation = (
                "Expected successful login, but user-home element did not appear"
                if expect_success
                else "Expected an error message to appear, but it did not"
            )
            logger.error("Browser login test FAILED for %r: %s: %s", case.name, expectation, exc)
            return CaseOutcome.failed(
                case.name, case.row_number, case.want_code, None, f"{expectation}: {exc}"
            )

        logger.info("Browser login test PASSED for %r", case.name)
        return CaseOutcome.passed(case.name, case.row_number, case.want_code)

    def _submit_login_form(self, case: LoginCase) -> None:
        try:
            self._driver.get(self._settings.login_url)
        except WebDriverException as exc:
            raise BrowserCaseAborted(f"Failed to navigate to login page: {exc.msg}") from exc

        self._sleep(self._settings.page_settle_seconds)

        email_input = self._find(By.NAME, EMAIL_FIELD_NAME, "email input")
        password_input = self._find(By.NAME, PASSWORD_FIELD_NAME, "password input")
        try:
            email_input.clear()
            email_input.send_keys(case.email)
            password_input.clear()
            password_input.send_keys(case.password)
        except WebDriverException as exc:
            raise BrowserCaseAborted(f"Failed to fill login form: {exc.msg}") from exc

        login_button = self._find(By.XPATH, LOGIN_BUTTON_XPATH, "login button")
        try:
            login_button.click()
        except WebDriverException as exc:
            raise BrowserCaseAborted(f"Failed to click login button: {exc.msg}") from exc

    def _find(self, by: str, value: str, label: str) -> WebElementProtocol:
        try:
            return self._driver.find_element(by, value)
        except WebDriverException as exc:
            raise BrowserCaseAborted(f"Failed to find {label}: {exc.msg}") from exc

    def _wait_for(self, by: str, value: str, description: str) -> None:
        wait_for_marker(
            self._driver,
            (by, value),
            description,
            timeout=self._settings.marker_timeout_seconds,
            interval=self._settings.poll_interval_seconds,
        )
