"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from forum_auth_tester.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["run-http"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_fixture_kind_returns_clean_click_error(capsys) -> None:
    exit_code = main(["generate-fixture", "--kind", "logout", "--output", "x.xlsx"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Invalid value for '--kind'" in captured.err
    assert "Traceback" not in captured.err


def test_missing_configuration_file_returns_exit_code_one(tmp_path: Path, capsys) -> None:
    exit_code = main(["run-http", "--config", str(tmp_path / "missing.yaml")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Configuration file not found" in captured.err
    assert "Traceback" not in captured.err


def test_generate_config_refuses_to_overwrite(tmp_path: Path, capsys) -> None:
    existing = tmp_path / "config.yaml"
    existing.write_text("keep: me\n", encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(existing)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "already exists" in captured.err
    assert existing.read_text(encoding="utf-8") == "keep: me\n"


def test_configuration_directory_returns_exit_code_one(tmp_path: Path, capsys) -> None:
    exit_code = main(["run-http", "--config", str(tmp_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Configuration path is not a file" in captured.err
    assert "Traceback" not in captured.err


def test_undecodable_configuration_returns_exit_code_one(tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_bytes(b"\xff\xfe\x00garbage")

    exit_code = main(["run-browser", "--config", str(config_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Failed to read configuration file" in captured.err
    assert "Traceback" not in captured.err
