"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from forum_auth_tester.configuration.runtime_settings import Configuration
from forum_auth_tester.fixture_ingestion.fixture_models import FixtureKind, FixtureReadResult


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one run."""

    config_path: str
    kinds: tuple[FixtureKind, ...] = (FixtureKind.SIGNUP, FixtureKind.LOGIN)
    output_dir: str | None = None


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    output_paths: tuple[Path, ...]
    total: int
    passed: int

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def succeeded(self) -> bool:
        return self.failed == 0


@dataclass(frozen=True)
class RunArtifacts:
    """Loaded domain artifacts required during run execution."""

    configuration: Configuration
    fixtures: dict[FixtureKind, FixtureReadResult] = field(default_factory=dict)
    fixture_paths: dict[FixtureKind, Path] = field(default_factory=dict)
