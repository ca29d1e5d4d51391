"""Public conversion API (delegates to application use-cases)."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from line_converter.application.options import RunOptions
from line_converter.application.results import BatchReport, FileOutcome
from line_converter.application.use_cases import convert_file as _convert_file
from line_converter.application.use_cases import run_all
from line_converter.culture import DEFAULT_CULTURE_NAME, Culture
from line_converter.rules.registry import create_default_registry
from line_converter.schemas import Settings


def convert_line(line: str, culture_name: str = DEFAULT_CULTURE_NAME) -> str:
    """Convert a single line as it would appear in an output file (without length).

    Raises
    ------
    MalformedLineError
        If the line is blank or no rule accepts it.
    UnknownCultureError
        If ``culture_name`` cannot be resolved.
    """
    return create_default_registry().convert(line.strip(), Culture.from_name(culture_name))


def convert_file(path: str | Path, settings: Settings | None = None) -> FileOutcome:
    """Convert one file into ``<path>.out``."""
    return _convert_file(path, settings or Settings())


def convert_files(
    filenames: Iterable[str | Path],
    settings: Settings | None = None,
    max_workers: int | None = None,
) -> BatchReport:
    """Convert files concurrently; failures are logged and reported, not raised."""
    return run_all(
        filenames,
        settings or Settings(),
        options=RunOptions(max_workers=max_workers),
    )
