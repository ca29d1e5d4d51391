"""Integration tests for the convert CLI against real files."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from line_converter.cli import cli as cli_module

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_convert_default_text_file_without_settings(
    workdir: Path, write_lines: Callable[[str, list[str]], Path]
) -> None:
    """Convert ./text.txt with default settings when settings.xml is absent."""
    write_lines("text.txt", ["2020-01-01", "3.14", "1 abc", ""])

    result = runner.invoke(cli_module.app, ["convert"])

    assert result.exit_code == 0, result.output
    assert (workdir / "text.txt.out").read_text(encoding="utf-8").splitlines() == [
        "19 01/01/2020 00:00:00",
        "4 3.14",
        "1 b",
        "1 3",
    ]


def test_convert_reads_settings_from_working_directory(
    workdir: Path,
    write_lines: Callable[[str, list[str]], Path],
    write_settings: Callable[..., Path],
) -> None:
    """Use SourceCultureName from ./settings.xml."""
    write_settings(culture="de-DE")
    write_lines("text.txt", ["24.12.2021", "2,5"])

    result = runner.invoke(cli_module.app, ["convert"])

    assert result.exit_code == 0, result.output
    assert (workdir / "text.txt.out").read_text(encoding="utf-8").splitlines() == [
        "19 12/24/2021 00:00:00",
        "3 2.5",
        "1 2",
    ]


def test_convert_many_files_reports_failures(
    workdir: Path, write_lines: Callable[[str, list[str]], Path]
) -> None:
    """Convert good files, skip bad ones and exit with 1."""
    write_lines("a.txt", ["3.14"])
    write_lines("b.txt", ["not a line we know"])

    result = runner.invoke(
        cli_module.app, ["convert", "a.txt", "b.txt", "missing.txt", "--max-workers", "2"]
    )

    assert result.exit_code == 1
    assert (workdir / "a.txt.out").exists()
    assert not (workdir / "b.txt.out").exists()
    assert "2 of 3 file(s) failed" in result.output


def test_convert_tolerates_failures_when_asked(
    workdir: Path, write_lines: Callable[[str, list[str]], Path]
) -> None:
    """Exit with 0 on per-file failures with --no-fail-on-error."""
    write_lines("a.txt", ["3.14"])

    result = runner.invoke(
        cli_module.app, ["convert", "a.txt", "missing.txt", "--no-fail-on-error"]
    )

    assert result.exit_code == 0
    assert (workdir / "a.txt.out").exists()


def test_convert_invalid_settings_is_fatal(
    workdir: Path,
    write_lines: Callable[[str, list[str]], Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Exit with 2 and convert nothing when settings.xml is invalid."""
    (workdir / "settings.xml").write_text(
        "<Settings><SourceCultureName>zz-ZZ</SourceCultureName></Settings>",
        encoding="utf-8",
    )
    write_lines("text.txt", ["3.14"])

    result = runner.invoke(cli_module.app, ["convert"])

    assert result.exit_code == 2
    assert not (workdir / "text.txt.out").exists()
    assert any("Unable to read settings file" in r.getMessage() for r in caplog.records)
