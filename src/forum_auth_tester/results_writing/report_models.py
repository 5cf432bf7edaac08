"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


class ReplayChannel(str, Enum):
    """How fixture cases were replayed."""

    HTTP = "http"
    BROWSER = "browser"


@dataclass(frozen=True)
class RunMetadata:
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    channel: ReplayChannel
    fixture_path: Path
    target: str
