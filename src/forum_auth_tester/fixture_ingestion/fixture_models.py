"""Fixture ingestion entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FixtureKind(str, Enum):
    """Which endpoint a fixture workbook drives."""

    SIGNUP = "signup"
    LOGIN = "login"


@dataclass(frozen=True)
class SignupCase:
    """One signup fixture row."""

    row_number: int
    name: str
    username: str
    email: str
    password: str
    password_again: str
    want_code: int


@dataclass(frozen=True)
class LoginCase:
    """One login fixture row."""

    row_number: int
    name: str
    email: str
    password: str
    want_code: int


FixtureCase = SignupCase | LoginCase


@dataclass(frozen=True)
class FixtureReadResult:
    """Result of ingesting a fixture workbook."""

    kind: FixtureKind
    cases: tuple[FixtureCase, ...]
    skipped_rows: tuple[int, ...] = ()
