"""End-to-end smoke tests for the installed CLI."""

from __future__ import annotations

import subprocess
from pathlib import Path

import line_converter


def test_package_import_smoke() -> None:
    """Ensure package can be imported in the test process."""
    assert line_converter.__version__


def test_cli_help_smoke() -> None:
    """Ensure the installed CLI entrypoint responds to --help."""
    result = subprocess.run(
        ["convert-lines", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr
    assert "Convert text files line by line" in result.stdout


def test_cli_converts_text_file_in_working_directory(tmp_path: Path) -> None:
    """Convert ./text.txt through the entrypoint, as a user would."""
    (tmp_path / "settings.xml").write_text(
        "<Settings><SourceCultureName>ru-RU</SourceCultureName>"
        "<Verbose>true</Verbose></Settings>",
        encoding="utf-8",
    )
    (tmp_path / "text.txt").write_text("12.03.2021\n3,5\n\n2 abc\n", encoding="utf-8")

    result = subprocess.run(
        ["convert-lines", "convert"],
        capture_output=True,
        text=True,
        check=False,
        cwd=tmp_path,
    )

    assert result.returncode == 0, result.stderr
    assert (tmp_path / "text.txt.out").read_text(encoding="utf-8").splitlines() == [
        "19 03/12/2021 00:00:00",
        "3 3.5",
        "1 c",
        "1 3",
    ]
    assert "Source culture ru_RU" in result.stderr


def test_cli_missing_input_fails_cleanly(tmp_path: Path) -> None:
    """Report a missing input file and exit with 1."""
    result = subprocess.run(
        ["convert-lines", "convert", "absent.txt"],
        capture_output=True,
        text=True,
        check=False,
        cwd=tmp_path,
    )

    assert result.returncode == 1
    assert "Input file not found" in result.stderr
