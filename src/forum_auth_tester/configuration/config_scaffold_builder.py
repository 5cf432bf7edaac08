"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Test configuration template for forum-auth-tester.
# Replace every <REQUIRED> placeholder before running run-http or run-browser.
# Replace <OPTIONAL> placeholders only when your setup needs them.

fixtures:
  # Workbook paths are resolved relative to this file. Provide at least one.
  signup: "testdata_signup.xlsx"
  login: "testdata_login.xlsx"
  sheet: "Sheet1"

target:
  # Choose exactly one: an importable WSGI application served in-process,
  # or the base URL of a running forum instance.
  wsgi_app: "<REQUIRED>"
  # base_url: "http://127.0.0.1:8080"
  signup_path: "/signup"
  login_path: "/login"
  timeout_seconds: 10

browser:
  hub_url: "http://hub-cloud.browserstack.com/wd/hub"
  # Falls back to BROWSERSTACK_USERNAME / BROWSERSTACK_ACCESS_KEY when unset.
  username: "<OPTIONAL>"
  access_key: "<OPTIONAL>"
  login_url: "<REQUIRED>"
  capabilities:
    browserName: "Chrome"
    browser_version: "latest"
    os: "Windows"
    os_version: "10"
  page_settle_seconds: 3
  marker_timeout_seconds: 10
  poll_interval_seconds: 1
  # Expected status meaning "login succeeded, user home is shown".
  success_status: 303

logging:
  level: "INFO"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML test configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder test configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Test configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
