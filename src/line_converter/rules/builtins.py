"""Built-in conversion rules."""

from __future__ import annotations

import re
from datetime import date

from line_converter.culture import (
    Culture,
    format_invariant_datetime,
    format_invariant_number,
    parse_datetime,
    parse_number,
)

_INDEX_RE = re.compile(r"[+-]?\d+", re.ASCII)


class DateTimeRule:
    """Re-render date/time lines in the invariant format.

    Parameters
    ----------
    today : date | None, optional
        Date given to time-only lines; the current date when omitted.
    """

    name = "datetime"

    def __init__(self, today: date | None = None) -> None:
        self.today = today

    def try_convert(self, line: str, culture: Culture) -> str | None:
        value = parse_datetime(line, culture, today=self.today)
        if value is None:
            return None
        return format_invariant_datetime(value)


class DecimalRule:
    """Re-render floating-point lines in the invariant format."""

    name = "decimal"

    def try_convert(self, line: str, culture: Culture) -> str | None:
        value = parse_number(line, culture)
        if value is None:
            return None
        return format_invariant_number(value)


class CharIndexLookupRule:
    """Pick one character out of a word: ``"<index> <word>"`` -> ``word[index]``.

    Notes
    -----
    Tokens after the second one are ignored. The culture is not used.
    """

    name = "char_index"

    def try_convert(self, line: str, culture: Culture) -> str | None:
        del culture
        tokens = line.split()
        if len(tokens) < 2 or not _INDEX_RE.fullmatch(tokens[0]):
            return None
        index, word = int(tokens[0]), tokens[1]
        if not 0 <= index < len(word):
            return None
        return word[index]
