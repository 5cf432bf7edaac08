"""Command line interface entry point."""

from __future__ import annotations

import sys

import click

from forum_auth_tester.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    configure_logging,
    load_configuration,
    write_placeholder_configuration,
)
from forum_auth_tester.fixture_generation import DEFAULT_SHEET_NAME, generate_fixture_workbook
from forum_auth_tester.fixture_ingestion import FixtureKind
from forum_auth_tester.run_execution import (
    RunExecutionError,
    RunOutcome,
    RunRequest,
    execute_browser_replay_run,
    execute_http_replay_run,
)

_KIND_CHOICES = ("signup", "login", "all")


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="forum-auth-tester")
def cli() -> None:
    """Spreadsheet-driven signup and login replay harness."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML test configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML test configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate-fixture")
@click.option(
    "--kind",
    required=True,
    type=click.Choice([kind.value for kind in FixtureKind]),
    help="Which endpoint the fixture workbook drives",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the fixture workbook to write",
)
@click.option(
    "--sheet",
    "sheet_name",
    default=DEFAULT_SHEET_NAME,
    show_default=True,
    help="Name of the fixture sheet",
)
def generate_fixture(kind: str, output_path: str, sheet_name: str) -> None:
    """Generate an empty fixture workbook with the header row for one endpoint."""
    try:
        written = generate_fixture_workbook(FixtureKind(kind), output_path, sheet_name)
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(written))


@cli.command(name="run-http")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON test configuration file",
)
@click.option(
    "--kind",
    default="all",
    show_default=True,
    type=click.Choice(_KIND_CHOICES),
    help="Which fixture workbooks to replay",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Optional directory for storing result workbooks",
)
def run_http(config_path: str, kind: str, output_dir: str | None) -> None:
    """Replay fixtures as form posts against the forum's /signup and /login."""
    _configure_logging_from(config_path)
    kinds = (
        (FixtureKind.SIGNUP, FixtureKind.LOGIN) if kind == "all" else (FixtureKind(kind),)
    )
    try:
        outcome = execute_http_replay_run(
            RunRequest(config_path=config_path, kinds=kinds, output_dir=output_dir)
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    _report(outcome)


@cli.command(name="run-browser")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON test configuration file",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Optional directory for storing result workbooks",
)
def run_browser(config_path: str, output_dir: str | None) -> None:
    """Replay login fixtures through a remote browser session."""
    _configure_logging_from(config_path)
    try:
        outcome = execute_browser_replay_run(
            RunRequest(config_path=config_path, kinds=(FixtureKind.LOGIN,), output_dir=output_dir)
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    _report(outcome)


def _configure_logging_from(config_path: str) -> None:
    try:
        level = load_configuration(config_path).logging.level
    except ConfigurationError:
        level = "INFO"
    configure_logging(level)


def _report(outcome: RunOutcome) -> None:
    for output_path in outcome.output_paths:
        click.echo(str(output_path))
    if not outcome.succeeded:
        raise CliError(f"{outcome.failed} of {outcome.total} cases failed.")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
