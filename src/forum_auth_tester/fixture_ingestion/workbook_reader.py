"""Fixture workbook ingestion service."""

from __future__ import annotations

import logging
import re
import zipfile
from collections.abc import Sequence
from pathlib import Path

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from forum_auth_tester.fixture_generation.constants import (
    DEFAULT_SHEET_NAME,
    LOGIN_COLUMNS,
    SIGNUP_COLUMNS,
)

from .fixture_models import FixtureCase, FixtureKind, FixtureReadResult, LoginCase, SignupCase

logger = logging.getLogger(__name__)

_WANT_CODE_PATTERN = re.compile(r"[+-]?[0-9]+")

SIGNUP_COLUMN_COUNT = len(SIGNUP_COLUMNS)
LOGIN_COLUMN_COUNT = len(LOGIN_COLUMNS)


class FixtureLoadError(Exception):
    """Raised when a fixture workbook cannot be turned into test cases."""


def load_signup_cases(
    fixture_path: Path | str, sheet_name: str = DEFAULT_SHEET_NAME
) -> FixtureReadResult:
    """Read signup cases: name, username, email, password, password again, want code."""
    return load_cases(FixtureKind.SIGNUP, fixture_path, sheet_name)


def load_login_cases(
    fixture_path: Path | str, sheet_name: str = DEFAULT_SHEET_NAME
) -> FixtureReadResult:
    """Read login cases: name, email, password, want code."""
    return load_cases(FixtureKind.LOGIN, fixture_path, sheet_name)


def load_cases(
    kind: FixtureKind, fixture_path: Path | str, sheet_name: str = DEFAULT_SHEET_NAME
) -> FixtureReadResult:
    """Read every data row of a fixture sheet.

    The first row is a header. Rows shorter than the required column count are
    skipped; the first row whose expected status is not an integer aborts the
    whole load.
    """
    rows = _read_sheet_rows(Path(fixture_path), sheet_name)
    required = SIGNUP_COLUMN_COUNT if kind is FixtureKind.SIGNUP else LOGIN_COLUMN_COUNT

    cases: list[FixtureCase] = []
    skipped: list[int] = []
    for row_number, row in enumerate(rows, start=1):
        if row_number == 1:
            continue
        if not row:
            continue
        if len(row) < required:
            logger.warning(
                "Skipping %s fixture row %d: %d columns, need %d",
                kind.value,
                row_number,
                len(row),
                required,
            )
            skipped.append(row_number)
            continue
        cases.append(_build_case(kind, row_number, row))

    logger.info("Loaded %d %s cases from %s", len(cases), kind.value, fixture_path)
    return FixtureReadResult(kind=kind, cases=tuple(cases), skipped_rows=tuple(skipped))


def _read_sheet_rows(path: Path, sheet_name: str) -> list[tuple[object, ...]]:
    if not path.exists():
        raise FixtureLoadError(f"failed to open file {path}: file not found")
    try:
        workbook = load_workbook(path, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
        raise FixtureLoadError(f"failed to open file {path}: {exc}") from exc
    if sheet_name not in workbook.sheetnames:
        raise FixtureLoadError(f"failed to get rows from sheet {sheet_name}: sheet not found")
    sheet = workbook[sheet_name]
    return [_trim_trailing_empty(row) for row in sheet.iter_rows(values_only=True)]


def _trim_trailing_empty(row: Sequence[object]) -> tuple[object, ...]:
    end = len(row)
    while end > 0 and _is_empty(row[end - 1]):
        end -= 1
    return tuple(row[:end])


def _build_case(kind: FixtureKind, row_number: int, row: Sequence[object]) -> FixtureCase:
    if kind is FixtureKind.SIGNUP:
        return SignupCase(
            row_number=row_number,
            name=_cell_text(row[0]),
            username=_cell_text(row[1]),
            email=_cell_text(row[2]),
            password=_cell_text(row[3]),
            password_again=_cell_text(row[4]),
            want_code=_parse_want_code(row[5], row_number),
        )
    return LoginCase(
        row_number=row_number,
        name=_cell_text(row[0]),
        email=_cell_text(row[1]),
        password=_cell_text(row[2]),
        want_code=_parse_want_code(row[3], row_number),
    )


def _parse_want_code(value: object, row_number: int) -> int:
    if isinstance(value, bool):
        raise FixtureLoadError(f"invalid expected status in row {row_number}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if _WANT_CODE_PATTERN.fullmatch(text):
            return int(text)
    raise FixtureLoadError(f"invalid expected status in row {row_number}: {value!r}")


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_empty(value: object) -> bool:
    return value is None or (isinstance(value, str) and value == "")
