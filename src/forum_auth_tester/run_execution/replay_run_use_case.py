"""Run execution use-case service."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from contextlib import AbstractContextManager
from datetime import UTC, datetime

import httpx

from forum_auth_tester.browser_replay.login_page_driver import (
    LoginPageReplayer,
    WebDriverProtocol,
    create_remote_driver,
)
from forum_auth_tester.configuration import ConfigurationError, load_configuration
from forum_auth_tester.configuration.runtime_settings import BrowserSettings, TargetSettings
from forum_auth_tester.fixture_ingestion import FixtureKind, FixtureLoadError, load_cases
from forum_auth_tester.http_replay import (
    CaseOutcome,
    FormSubmitter,
    TargetServerError,
    open_test_server,
    replay_login_cases,
    replay_signup_cases,
)
from forum_auth_tester.results_writing import (
    ReplayChannel,
    RunMetadata,
    resolve_output_path,
    write_results_workbook,
)

from .run_contracts import RunArtifacts, RunOutcome, RunRequest

logger = logging.getLogger(__name__)

ClientFactory = Callable[[TargetSettings], AbstractContextManager[httpx.Client]]
DriverFactory = Callable[[BrowserSettings], WebDriverProtocol]


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_http_replay_run(
    request: RunRequest,
    *,
    client_factory: ClientFactory | None = None,
) -> RunOutcome:
    """Replay signup and login fixtures as form posts against the test server."""
    resolved_client_factory = client_factory or open_test_server
    artifacts = _load_run_artifacts(request.config_path, request.kinds)
    target = artifacts.configuration.target
    if target is None:
        raise RunExecutionError("Configuration section 'target' is required for HTTP replay.")

    logger.info("=== Starting HTTP replay against %s ===", target.description)
    run_start = datetime.now(UTC)
    outcomes_by_kind: dict[FixtureKind, list[CaseOutcome]] = {}
    try:
        with resolved_client_factory(target) as client:
            submitter = FormSubmitter(client)
            for kind, fixture in artifacts.fixtures.items():
                logger.info("Starting fixture-driven tests for %s", _route_for(target, kind))
                if kind is FixtureKind.SIGNUP:
                    outcomes = replay_signup_cases(submitter, fixture.cases, target.signup_path)
                else:
                    outcomes = replay_login_cases(submitter, fixture.cases, target.login_path)
                outcomes_by_kind[kind] = outcomes
                logger.info("Completed fixture-driven tests for %s", _route_for(target, kind))
    except TargetServerError as exc:
        raise RunExecutionError(str(exc)) from exc

    outcome = _write_results(
        artifacts,
        outcomes_by_kind,
        channel=ReplayChannel.HTTP,
        target_label=target.description,
        run_start=run_start,
        output_dir=request.output_dir,
    )
    logger.info(
        "=== HTTP replay completed: %d passed, %d failed ===", outcome.passed, outcome.failed
    )
    return outcome


def execute_browser_replay_run(
    request: RunRequest,
    *,
    driver_factory: DriverFactory | None = None,
    replayer_cls: type[LoginPageReplayer] = LoginPageReplayer,
) -> RunOutcome:
    """Replay login fixtures through a remote browser session."""
    resolved_driver_factory = driver_factory or create_remote_driver
    artifacts = _load_run_artifacts(request.config_path, (FixtureKind.LOGIN,))
    browser = artifacts.configuration.browser
    if browser is None:
        raise RunExecutionError("Configuration section 'browser' is required for browser replay.")

    logger.info("=== Starting browser replay against %s ===", browser.login_url)
    run_start = datetime.now(UTC)
    try:
        driver = resolved_driver_factory(browser)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        raise RunExecutionError(f"Failed to create remote WebDriver: {exc}") from exc
    try:
        replayer = replayer_cls(driver, browser)
        outcomes = replayer.replay_all(artifacts.fixtures[FixtureKind.LOGIN].cases)
    finally:
        driver.quit()

    outcome = _write_results(
        artifacts,
        {FixtureKind.LOGIN: outcomes},
        channel=ReplayChannel.BROWSER,
        target_label=browser.login_url,
        run_start=run_start,
        output_dir=request.output_dir,
    )
    logger.info(
        "=== Browser replay completed: %d passed, %d failed ===", outcome.passed, outcome.failed
    )
    return outcome


def _load_run_artifacts(config_path: str, kinds: Sequence[FixtureKind]) -> RunArtifacts:
    try:
        configuration = load_configuration(config_path)
    except (ConfigurationError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc

    artifacts = RunArtifacts(configuration=configuration)
    fixture_settings = configuration.fixtures
    for kind in kinds:
        path = (
            fixture_settings.signup_path
            if kind is FixtureKind.SIGNUP
            else fixture_settings.login_path
        )
        if path is None:
            raise RunExecutionError(f"fixtures.{kind.value} is required for this run.")
        try:
            fixture = load_cases(kind, path, fixture_settings.sheet_name)
        except FixtureLoadError as exc:
            raise RunExecutionError(f"Error loading {kind.value} test data: {exc}") from exc
        artifacts.fixtures[kind] = fixture
        artifacts.fixture_paths[kind] = path
    return artifacts


# pylint: disable=too-many-arguments
def _write_results(
    artifacts: RunArtifacts,
    outcomes_by_kind: dict[FixtureKind, list[CaseOutcome]],
    *,
    channel: ReplayChannel,
    target_label: str,
    run_start: datetime,
    output_dir: str | None,
) -> RunOutcome:
    output_paths = []
    total = 0
    passed = 0
    for kind, outcomes in outcomes_by_kind.items():
        fixture_path = artifacts.fixture_paths[kind]
        output_path = resolve_output_path(fixture_path, channel, output_dir)
        try:
            written = write_results_workbook(
                kind,
                artifacts.fixtures[kind].cases,
                outcomes,
                output_path,
                RunMetadata(
                    run_start=run_start,
                    channel=channel,
                    fixture_path=fixture_path,
                    target=target_label,
                ),
            )
        except OSError as exc:
            raise RunExecutionError(f"Failed to write results workbook: {exc}") from exc
        output_paths.append(written)
        total += len(outcomes)
        passed += sum(1 for outcome in outcomes if outcome.ok)
    return RunOutcome(output_paths=tuple(output_paths), total=total, passed=passed)


def _route_for(target: TargetSettings, kind: FixtureKind) -> str:
    return target.signup_path if kind is FixtureKind.SIGNUP else target.login_path
