"""HTTP replay exports."""

from .form_submission import (
    FormResponse,
    FormSubmitter,
    build_login_form,
    build_signup_form,
    replay_login_cases,
    replay_signup_cases,
)
from .replay_outcomes import CaseOutcome, CaseStatus
from .local_server import TargetServerError, load_wsgi_app, open_test_server

__all__ = [
    "CaseOutcome",
    "CaseStatus",
    "FormResponse",
    "FormSubmitter",
    "build_login_form",
    "build_signup_form",
    "replay_login_cases",
    "replay_signup_cases",
    "TargetServerError",
    "load_wsgi_app",
    "open_test_server",
]
