"""Excel fixture workbook generation service."""

from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from forum_auth_tester.fixture_ingestion.fixture_models import FixtureKind

from .constants import DEFAULT_SHEET_NAME, LOGIN_COLUMNS, SIGNUP_COLUMNS


def columns_for(kind: FixtureKind) -> tuple[str, ...]:
    """Return the ordered fixture columns of one fixture kind."""
    if kind is FixtureKind.SIGNUP:
        return SIGNUP_COLUMNS
    return LOGIN_COLUMNS


def generate_fixture_workbook(
    kind: FixtureKind,
    output_path: Path | str,
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> Path:
    """Create an empty fixture workbook holding only the header row."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = sheet_name

    for column_index, name in enumerate(columns_for(kind), start=1):
        cell = sheet.cell(row=1, column=column_index, value=name)
        cell.style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 10, 40)
        )
    sheet.freeze_panes = "A2"

    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(destination)
    return destination.resolve()
