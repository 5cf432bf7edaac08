"""Results workbook writer service."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import astuple
from datetime import UTC, datetime
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from forum_auth_tester.fixture_generation import columns_for
from forum_auth_tester.fixture_ingestion.fixture_models import FixtureCase, FixtureKind
from forum_auth_tester.http_replay.replay_outcomes import CaseOutcome, CaseStatus

from .report_models import ReplayChannel, RunMetadata

RESULTS_SHEET_NAME = "Results"
RUN_INFO_SHEET_NAME = "RunInfo"
OUTCOME_COLUMNS: tuple[str, ...] = ("GotCode", "Result", "Detail")


def resolve_output_path(
    fixture_path: Path | str, channel: ReplayChannel, output_dir: Path | str | None
) -> Path:
    """Place results next to the fixture unless an output directory is given."""
    fixture = Path(fixture_path)
    destination = Path(output_dir) if output_dir else fixture.parent
    timestamp = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    return destination / f"{fixture.stem}-{channel.value}-results-{timestamp}.xlsx"


def write_results_workbook(
    kind: FixtureKind,
    cases: Sequence[FixtureCase],
    outcomes: Sequence[CaseOutcome],
    output_path: Path | str,
    run_metadata: RunMetadata,
) -> Path:
    """Write one row per fixture case followed by its observed outcome."""
    if len(cases) != len(outcomes):
        raise ValueError("Every fixture case needs exactly one outcome.")

    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    sheet.title = RESULTS_SHEET_NAME

    headers = columns_for(kind) + OUTCOME_COLUMNS
    for column_index, name in enumerate(headers, start=1):
        sheet.cell(row=1, column=column_index, value=name).style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 10, 40)
        )
    sheet.column_dimensions[get_column_letter(len(headers))].width = 60

    for row_index, (case, outcome) in enumerate(zip(cases, outcomes), start=2):
        fixture_values = astuple(case)[1:]
        outcome_values = (outcome.got_code, outcome.status.value, outcome.detail or None)
        for column_index, value in enumerate(fixture_values + outcome_values, start=1):
            sheet.cell(row=row_index, column=column_index, value=value)

    _write_run_info_sheet(workbook, kind, outcomes, run_metadata)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_run_info_sheet(
    workbook: Workbook,
    kind: FixtureKind,
    outcomes: Sequence[CaseOutcome],
    run_metadata: RunMetadata,
) -> None:
    sheet = workbook.create_sheet(RUN_INFO_SHEET_NAME)
    passed = sum(1 for outcome in outcomes if outcome.status is CaseStatus.PASSED)
    entries = (
        ("run_start", run_metadata.run_start.isoformat()),
        ("channel", run_metadata.channel.value),
        ("kind", kind.value),
        ("fixture_path", str(run_metadata.fixture_path)),
        ("target", run_metadata.target),
        ("total", len(outcomes)),
        ("passed", passed),
        ("failed", len(outcomes) - passed),
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)
