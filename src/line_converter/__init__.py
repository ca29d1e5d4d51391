"""Top-level API for shape-based line conversion."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from line_converter.application.results import BatchReport, FileOutcome
    from line_converter.schemas import Settings

__version__ = "0.1.0"


def convert_line(line: str, culture_name: str = "en-US") -> str:
    """Convert a single line under ``culture_name``.

    Parameters
    ----------
    line : str
        Input line; surrounding whitespace is ignored.
    culture_name : str, default="en-US"
        Locale used to parse dates and numbers.

    Returns
    -------
    str
        Converted text.
    """
    from .api import convert_line as _impl

    return _impl(line, culture_name)


def convert_file(path: str | Path, settings: Settings | None = None) -> FileOutcome:
    """Convert ``path`` into ``<path>.out``.

    Parameters
    ----------
    path : str | Path
        Input text file.
    settings : Settings | None, optional
        Run settings; defaults apply when omitted.

    Returns
    -------
    FileOutcome
        Converted lines or the captured errors.
    """
    from .api import convert_file as _impl

    return _impl(path, settings)


def convert_files(
    filenames: Iterable[str | Path],
    settings: Settings | None = None,
    max_workers: int | None = None,
) -> BatchReport:
    """Convert several files concurrently.

    Parameters
    ----------
    filenames : Iterable[str | Path]
        Input files; duplicates are converted once.
    settings : Settings | None, optional
        Run settings shared by every file.
    max_workers : int | None, optional
        Thread pool size.

    Returns
    -------
    BatchReport
        Per-file outcomes in input order.
    """
    from .api import convert_files as _impl

    return _impl(filenames, settings, max_workers=max_workers)


def load_settings(path: str | Path = "settings.xml") -> Settings:
    """Load settings from an XML file, falling back to defaults if it is missing."""
    from .infrastructure.settings import load_settings as _impl

    return _impl(Path(path))


__all__ = [
    "__version__",
    "convert_file",
    "convert_files",
    "convert_line",
    "load_settings",
]
