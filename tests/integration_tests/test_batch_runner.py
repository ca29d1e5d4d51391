"""Integration tests for concurrent batch conversion."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest

from line_converter.adapters.line_sources import TextFileLineSource
from line_converter.adapters.writers import AtomicTextWriter
from line_converter.application.options import RunOptions
from line_converter.application.results import SourceLine
from line_converter.application.use_cases import run_all
from line_converter.errors import InputFileNotFoundError, MalformedLineError
from line_converter.schemas import Settings


def _error_records(caplog: pytest.LogCaptureFixture) -> list[logging.LogRecord]:
    return [record for record in caplog.records if record.levelno == logging.ERROR]


def test_missing_file_does_not_stop_siblings(
    tmp_path: Path,
    write_lines: Callable[[str, list[str]], Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Convert the good file and log exactly one error for the missing one."""
    caplog.set_level(logging.ERROR, logger="line_converter")
    good = write_lines("good.txt", ["1 abc"])
    missing = tmp_path / "missing.txt"

    report = run_all([missing, good], Settings())

    assert good.with_name("good.txt.out").read_text(encoding="utf-8") == "1 b\n1 1\n"
    assert not tmp_path.joinpath("missing.txt.out").exists()
    assert [outcome.source_path for outcome in report.outcomes] == [missing, good]
    assert isinstance(report.failed[0].errors[0], InputFileNotFoundError)
    records = _error_records(caplog)
    assert len(records) == 1
    assert "missing.txt" in records[0].getMessage()
    assert records[0].exc_info is not None


def test_malformed_file_is_isolated(
    write_lines: Callable[[str, list[str]], Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Keep converting siblings of a file with malformed lines."""
    caplog.set_level(logging.ERROR, logger="line_converter")
    bad = write_lines("bad.txt", ["3.14", "???", "!!!"])
    good = write_lines("good.txt", ["2020-01-01"])

    report = run_all([bad, good], Settings(), options=RunOptions(max_workers=2))

    assert not bad.with_name("bad.txt.out").exists()
    assert good.with_name("good.txt.out").exists()
    assert [outcome.ok for outcome in report.outcomes] == [False, True]
    assert all(isinstance(error, MalformedLineError) for error in report.errors)
    assert len(_error_records(caplog)) == 2


def test_files_are_converted_concurrently(
    write_lines: Callable[[str, list[str]], Path],
) -> None:
    """Run files on separate workers at the same time."""
    paths = [write_lines(f"f{index}.txt", ["3.14"]) for index in range(3)]
    barrier = threading.Barrier(len(paths), timeout=10)

    class _MeetingSource(TextFileLineSource):
        def read(self, path: Path) -> list[SourceLine]:
            barrier.wait()
            return super().read(path)

    report = run_all(
        paths,
        Settings(),
        options=RunOptions(max_workers=len(paths)),
        source=_MeetingSource(),
    )

    assert report.ok, report.errors
    assert all(path.with_name(path.name + ".out").exists() for path in paths)


def test_unexpected_worker_error_becomes_failed_outcome(
    write_lines: Callable[[str, list[str]], Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Capture errors outside the expected set as a failed outcome."""
    caplog.set_level(logging.ERROR, logger="line_converter")
    path = write_lines("text.txt", ["3.14"])

    class _ExplodingWriter(AtomicTextWriter):
        def write(self, path: Path, lines: Iterable[str]) -> Path:
            raise RuntimeError("writer exploded")

    report = run_all([path], Settings(), writer=_ExplodingWriter())

    assert not report.ok
    assert isinstance(report.errors[0], RuntimeError)
    assert "writer exploded" in _error_records(caplog)[0].getMessage()


def test_duplicate_filenames_are_converted_once(
    write_lines: Callable[[str, list[str]], Path],
) -> None:
    """Treat repeated filenames as one unit of work."""
    path = write_lines("text.txt", ["3.14"])

    report = run_all([path, str(path), path], Settings())

    assert len(report.outcomes) == 1
    assert report.ok


def test_empty_batch_returns_empty_report() -> None:
    """Return an empty, successful report when no files are given."""
    report = run_all([], Settings())
    assert report.outcomes == ()
    assert report.ok


def test_verbose_notices_are_logged_per_file(
    write_lines: Callable[[str, list[str]], Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Log both verbose notices for every processed file."""
    caplog.set_level(logging.INFO, logger="line_converter")
    paths = [write_lines(name, ["3,5"]) for name in ("a.txt", "b.txt")]

    report = run_all(paths, Settings(SourceCultureName="de-DE", Verbose=True))

    assert report.ok
    messages = [record.getMessage() for record in caplog.records]
    for path in paths:
        assert f"Processing file {path}" in messages
    assert messages.count("Source culture de_DE") == 2
