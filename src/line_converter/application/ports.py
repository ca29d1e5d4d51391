"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Protocol

from line_converter.application.results import SourceLine
from line_converter.culture import Culture
from line_converter.types import RuleMatch


class LineSource(Protocol):
    """Read the classified lines of an input file."""

    def read(self, path: Path) -> Sequence[SourceLine]:
        """Return trimmed non-empty lines followed by the count trailer."""


class LineConverter(Protocol):
    """Classify and convert a single line."""

    def try_convert(self, line: str, culture: Culture) -> RuleMatch | None:
        """Return ``(rule_name, converted)`` or ``None``."""


class OutputWriter(Protocol):
    """Persist converted lines."""

    def write(self, path: Path, lines: Iterable[str]) -> Path:
        """Write all lines to ``path`` as a whole and return it."""
