"""Fixture generation exports."""

from .constants import DEFAULT_SHEET_NAME, LOGIN_COLUMNS, SIGNUP_COLUMNS
from .fixture_workbook_builder import columns_for, generate_fixture_workbook

__all__ = [
    "DEFAULT_SHEET_NAME",
    "SIGNUP_COLUMNS",
    "LOGIN_COLUMNS",
    "columns_for",
    "generate_fixture_workbook",
]
