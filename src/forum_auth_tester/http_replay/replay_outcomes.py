"""Replay outcome entities shared by the HTTP and browser channels."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CaseStatus(str, Enum):
    """Outcome of replaying one fixture case."""

    PASSED = "PASSED"
    FAILED = "FAILED"
    ERROR = "ERROR"
    ABORTED = "ABORTED"


@dataclass(frozen=True)
class CaseOutcome:
    """Observed result of one replayed fixture case."""

    case_name: str
    row_number: int
    want_code: int
    got_code: int | None
    status: CaseStatus
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status is CaseStatus.PASSED

    @staticmethod
    def passed(
        case_name: str, row_number: int, want_code: int, got_code: int | None = None
    ) -> CaseOutcome:
        return CaseOutcome(
            case_name=case_name,
            row_number=row_number,
            want_code=want_code,
            got_code=got_code,
            status=CaseStatus.PASSED,
        )

    @staticmethod
    def failed(
        case_name: str, row_number: int, want_code: int, got_code: int | None, detail: str
    ) -> CaseOutcome:
        return CaseOutcome(
            case_name=case_name,
            row_number=row_number,
            want_code=want_code,
            got_code=got_code,
            status=CaseStatus.FAILED,
            detail=detail,
        )

    @staticmethod
    def errored(case_name: str, row_number: int, want_code: int, error: Exception) -> CaseOutcome:
        return CaseOutcome(
            case_name=case_name,
            row_number=row_number,
            want_code=want_code,
            got_code=None,
            status=CaseStatus.ERROR,
            detail=str(error),
        )

    @staticmethod
    def aborted(case_name: str, row_number: int, want_code: int, detail: str) -> CaseOutcome:
        return CaseOutcome(
            case_name=case_name,
            row_number=row_number,
            want_code=want_code,
            got_code=None,
            status=CaseStatus.ABORTED,
            detail=detail,
        )
