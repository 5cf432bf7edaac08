"""Results writing domain exports."""

from .report_models import ReplayChannel, RunMetadata
from .run_report_writer import resolve_output_path, write_results_workbook

__all__ = [
    "ReplayChannel",
    "RunMetadata",
    "resolve_output_path",
    "write_results_workbook",
]
