"""Shared fixture workbook constants."""

from __future__ import annotations

DEFAULT_SHEET_NAME = "Sheet1"

SIGNUP_COLUMNS: tuple[str, ...] = (
    "Name",
    "Username",
    "Email",
    "Password",
    "PasswordAgain",
    "WantCode",
)
LOGIN_COLUMNS: tuple[str, ...] = ("Name", "Email", "Password", "WantCode")
