"""Fixture ingestion exports."""

from .fixture_models import FixtureCase, FixtureKind, FixtureReadResult, LoginCase, SignupCase
from .workbook_reader import FixtureLoadError, load_cases, load_login_cases, load_signup_cases

__all__ = [
    "FixtureCase",
    "FixtureKind",
    "FixtureReadResult",
    "LoginCase",
    "SignupCase",
    "FixtureLoadError",
    "load_cases",
    "load_login_cases",
    "load_signup_cases",
]
