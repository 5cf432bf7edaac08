"""Form payload building and HTTP replay of fixture cases."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import httpx

from forum_auth_tester.fixture_ingestion.fixture_models import LoginCase, SignupCase

from .replay_outcomes import CaseOutcome

logger = logging.getLogger(__name__)

FormData = Mapping[str, str | list[str]]


@dataclass(frozen=True)
class FormResponse:
    """Status, headers and body returned for one form submission."""

    status_code: int
    headers: Mapping[str, str]
    body: str


class FormSubmitter:  # pylint: disable=too-few-public-methods
    """Posts url-encoded forms through an httpx client."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def post_form(self, path: str, form: FormData) -> FormResponse:
        response = self._client.post(path, data=dict(form), follow_redirects=False)
        return FormResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.text,
        )


def build_signup_form(case: SignupCase) -> dict[str, str | list[str]]:
    """Signup form; the password field carries the password and then its confirmation."""
    return {
        "name": case.username,
        "email": case.email,
        "password": [case.password, case.password_again],
    }


def build_login_form(case: LoginCase) -> dict[str, str | list[str]]:
    return {"email": case.email, "password": case.password}


def replay_signup_cases(
    submitter: FormSubmitter, cases: Sequence[SignupCase], path: str = "/signup"
) -> list[CaseOutcome]:
    """Post every signup case in order and compare the returned status code."""
    outcomes = []
    for case in cases:
        outcome = _replay_case(submitter, "Signup", path, case, build_signup_form(case))
        outcomes.append(outcome)
    return outcomes


def replay_login_cases(
    submitter: FormSubmitter, cases: Sequence[LoginCase], path: str = "/login"
) -> list[CaseOutcome]:
    """Post every login case in order and compare the returned status code."""
    outcomes = []
    for case in cases:
        outcome = _replay_case(submitter, "Login", path, case, build_login_form(case))
        outcomes.append(outcome)
    return outcomes


def _replay_case(
    submitter: FormSubmitter,
    label: str,
    path: str,
    case: SignupCase | LoginCase,
    form: FormData,
) -> CaseOutcome:
    name = case.name
    logger.info("Running %s test case: %r", label.lower(), name)
    try:
        response = submitter.post_form(path, form)
    except httpx.HTTPError as exc:
        logger.error("%s test ERROR for %r: %s", label, name, exc)
        return CaseOutcome.errored(name, case.row_number, case.want_code, exc)

    code = response.status_code
    if code != case.want_code:
        logger.error(
            "%s test FAILED for %r: got code %d, want %d", label, name, code, case.want_code
        )
        return CaseOutcome.failed(
            name, case.row_number, case.want_code, code, f"got code {code}, want {case.want_code}"
        )
    logger.info("%s test PASSED for %r: got code %d (as expected)", label, name, code)
    return CaseOutcome.passed(name, case.row_number, case.want_code, code)
