"""Run execution domain exports."""

from .replay_run_use_case import (
    RunExecutionError,
    execute_browser_replay_run,
    execute_http_replay_run,
)
from .run_contracts import RunArtifacts, RunOutcome, RunRequest

__all__ = [
    "RunRequest",
    "RunOutcome",
    "RunArtifacts",
    "RunExecutionError",
    "execute_browser_replay_run",
    "execute_http_replay_run",
]
