"""File-system adapters for reading input lines and writing output."""

from .line_sources import TextFileLineSource, iter_source_lines
from .writers import AtomicTextWriter

__all__ = ["AtomicTextWriter", "TextFileLineSource", "iter_source_lines"]
