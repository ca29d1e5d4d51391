"""Input line sources."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from line_converter.application.results import SourceLine


def iter_source_lines(raw_lines: Iterable[str]) -> Iterator[SourceLine]:
    """Yield trimmed non-empty lines, then one trailer holding their count.

    Parameters
    ----------
    raw_lines : Iterable[str]
        Raw lines, with or without line terminators.

    Yields
    ------
    SourceLine
        Content lines numbered by their physical position, then the trailer
        numbered one past the last physical line.
    """
    count = 0
    number = 0
    for number, raw in enumerate(raw_lines, start=1):
        text = raw.strip()
        if not text:
            continue
        count += 1
        yield SourceLine(number=number, text=text)
    yield SourceLine(number=number + 1, text=str(count), is_trailer=True)


class TextFileLineSource:
    """Read lines from a text file into memory."""

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self.encoding = encoding

    def read(self, path: Path) -> list[SourceLine]:
        """Read ``path`` fully; the list ends with the count trailer.

        Raises
        ------
        OSError
            If the file cannot be opened or read.
        UnicodeDecodeError
            If the file is not valid text in ``encoding``.
        """
        with path.open(encoding=self.encoding) as handle:
            return list(iter_source_lines(handle))
