"""Configuration loader service."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    BrowserSettings,
    Configuration,
    FixtureSettings,
    LoggingSettings,
    TargetSettings,
)

DEFAULT_SHEET_NAME = "Sheet1"
DEFAULT_CAPABILITIES: Mapping[str, object] = {
    "browserName": "Chrome",
    "browser_version": "latest",
    "os": "Windows",
    "os_version": "10",
}
USERNAME_ENV_VAR = "BROWSERSTACK_USERNAME"
ACCESS_KEY_ENV_VAR = "BROWSERSTACK_ACCESS_KEY"


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")
    if not path.is_file():
        raise ConfigurationError(f"Configuration path is not a file: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Failed to read configuration file {path}: {exc}") from exc

    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    fixtures = _parse_fixtures_section(parsed.get("fixtures"), path.parent)
    target = _parse_target_section(parsed.get("target"))
    browser = _parse_browser_section(parsed.get("browser"))
    logging_settings = _parse_logging_section(parsed.get("logging"))

    return Configuration(
        path=path,
        fixtures=fixtures,
        target=target,
        browser=browser,
        logging=logging_settings,
    )


def _parse_fixtures_section(value: Any, base_path: Path) -> FixtureSettings:
    section = _require_mapping(value, "fixtures")
    signup = _optional_string(section.get("signup"), "fixtures.signup")
    login = _optional_string(section.get("login"), "fixtures.login")
    if signup is None and login is None:
        raise ConfigurationError("fixtures must name a signup or login workbook.")
    sheet_name = section.get("sheet", DEFAULT_SHEET_NAME)
    return FixtureSettings(
        signup_path=_resolve_path(base_path, signup) if signup else None,
        login_path=_resolve_path(base_path, login) if login else None,
        sheet_name=_require_non_empty_string(sheet_name, "fixtures.sheet"),
    )


def _parse_target_section(value: Any) -> TargetSettings | None:
    if value is None:
        return None
    section = _require_mapping(value, "target")
    wsgi_app = _optional_string(section.get("wsgi_app"), "target.wsgi_app")
    base_url = _optional_string(section.get("base_url"), "target.base_url")
    if (wsgi_app is None) == (base_url is None):
        raise ConfigurationError("target requires exactly one of wsgi_app or base_url.")
    if wsgi_app is not None and ":" not in wsgi_app:
        raise ConfigurationError("target.wsgi_app must look like 'module:attribute'.")
    return TargetSettings(
        wsgi_app=wsgi_app,
        base_url=base_url.rstrip("/") if base_url else None,
        signup_path=_require_route(section.get("signup_path", "/signup"), "target.signup_path"),
        login_path=_require_route(section.get("login_path", "/login"), "target.login_path"),
        timeout_seconds=_require_positive_number(
            section.get("timeout_seconds", 10), "target.timeout_seconds"
        ),
    )


def _parse_browser_section(value: Any) -> BrowserSettings | None:
    if value is None:
        return None
    section = _require_mapping(value, "browser")
    hub_url = _require_non_empty_string(section.get("hub_url"), "browser.hub_url")
    login_url = _require_non_empty_string(section.get("login_url"), "browser.login_url")
    username = _optional_string(section.get("username"), "browser.username") or _env_value(
        USERNAME_ENV_VAR
    )
    access_key = _optional_string(section.get("access_key"), "browser.access_key") or _env_value(
        ACCESS_KEY_ENV_VAR
    )
    capabilities = section.get("capabilities")
    if capabilities is None:
        capabilities = DEFAULT_CAPABILITIES
    if not isinstance(capabilities, Mapping):
        raise ConfigurationError("browser.capabilities must be a mapping.")
    if not isinstance(capabilities.get("browserName"), str):
        raise ConfigurationError("browser.capabilities.browserName must be a string.")
    return BrowserSettings(
        hub_url=hub_url,
        username=username,
        access_key=access_key,
        login_url=login_url,
        capabilities=dict(capabilities),
        page_settle_seconds=_require_non_negative_number(
            section.get("page_settle_seconds", 3), "browser.page_settle_seconds"
        ),
        marker_timeout_seconds=_require_positive_number(
            section.get("marker_timeout_seconds", 10), "browser.marker_timeout_seconds"
        ),
        poll_interval_seconds=_require_positive_number(
            section.get("poll_interval_seconds", 1), "browser.poll_interval_seconds"
        ),
        success_status=_require_positive_int(
            section.get("success_status", 303), "browser.success_status"
        ),
    )


def _parse_logging_section(value: Any) -> LoggingSettings:
    if value is None:
        return LoggingSettings(level="INFO")
    section = _require_mapping(value, "logging")
    level = _require_non_empty_string(section.get("level", "INFO"), "logging.level").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"logging.level '{level}' is not a known log level.")
    return LoggingSettings(level=level)


def _env_value(name: str) -> str | None:
    value = os.environ.get(name, "").strip()
    return value or None


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_route(value: Any, field_name: str) -> str:
    route = _require_non_empty_string(value, field_name)
    if not route.startswith("/"):
        raise ConfigurationError(f"{field_name} must start with '/'.")
    return route


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value


def _require_positive_number(value: Any, field_name: str) -> float:
    number = _require_number(value, field_name)
    if number <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return number


def _require_non_negative_number(value: Any, field_name: str) -> float:
    number = _require_number(value, field_name)
    if number < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return number


def _require_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ConfigurationError(f"{field_name} must be a number.")
    return float(value)
