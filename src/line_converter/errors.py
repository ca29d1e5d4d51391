"""Exception hierarchy for line conversion."""

from __future__ import annotations

from pathlib import Path


class ConversionError(Exception):
    """Base error for line conversion failures."""

    exit_code: int = 1


class ConfigLoadError(ConversionError):
    """Settings file exists but cannot be read or validated."""

    exit_code = 2


class UnknownCultureError(ConversionError):
    """Locale identifier cannot be resolved."""


class InputFileNotFoundError(ConversionError):
    """A requested input file does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Input file not found: {path}")
        self.path = path


class MalformedLineError(ConversionError):
    """A line matches none of the conversion rules.

    Parameters
    ----------
    line : str
        Offending line content.
    path : Path | None, default=None
        File the line was read from, when known.
    line_number : int | None, default=None
        One-based line number inside ``path``.
    """

    def __init__(
        self,
        line: str,
        *,
        path: Path | None = None,
        line_number: int | None = None,
    ) -> None:
        location = ""
        if path is not None:
            location = f"{path}:{line_number}: " if line_number else f"{path}: "
        super().__init__(f"{location}malformed line {line!r}")
        self.line = line
        self.path = path
        self.line_number = line_number
