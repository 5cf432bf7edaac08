"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FixtureSettings:
    """Locations of the signup and login fixture workbooks."""

    signup_path: Path | None
    login_path: Path | None
    sheet_name: str


@dataclass(frozen=True)
class TargetSettings:
    """Forum instance that receives the replayed form submissions."""

    wsgi_app: str | None
    base_url: str | None
    signup_path: str
    login_path: str
    timeout_seconds: float

    @property
    def description(self) -> str:
        if self.wsgi_app:
            return f"wsgi:{self.wsgi_app}"
        return self.base_url or ""


@dataclass(frozen=True)
class BrowserSettings:  # pylint: disable=too-many-instance-attributes
    """Remote browser session and login page settings."""

    hub_url: str
    username: str | None
    access_key: str | None
    login_url: str
    capabilities: Mapping[str, object]
    page_settle_seconds: float
    marker_timeout_seconds: float
    poll_interval_seconds: float
    success_status: int


@dataclass(frozen=True)
class LoggingSettings:
    """Log output settings."""

    level: str


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    fixtures: FixtureSettings
    target: TargetSettings | None
    browser: BrowserSettings | None
    logging: LoggingSettings
