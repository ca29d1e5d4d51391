"""Application-layer use-cases and option objects."""

from __future__ import annotations

from line_converter.application.options import RunOptions
from line_converter.application.ports import LineConverter, LineSource, OutputWriter
from line_converter.application.results import (
    BatchReport,
    ConvertedLine,
    FileOutcome,
    SourceLine,
)

__all__ = [
    "BatchReport",
    "ConvertedLine",
    "FileOutcome",
    "LineConverter",
    "LineSource",
    "OutputWriter",
    "RunOptions",
    "SourceLine",
]
