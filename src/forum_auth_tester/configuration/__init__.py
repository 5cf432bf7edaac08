"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration
from .log_setup import configure_logging
from .runtime_settings import (
    BrowserSettings,
    Configuration,
    FixtureSettings,
    LoggingSettings,
    TargetSettings,
)

__all__ = [
    "BrowserSettings",
    "Configuration",
    "FixtureSettings",
    "LoggingSettings",
    "TargetSettings",
    "ConfigurationError",
    "load_configuration",
    "configure_logging",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
