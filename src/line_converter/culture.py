"""Culture-aware parsing and invariant rendering of dates and numbers.

Parsing always takes an explicit :class:`Culture`; nothing here reads or
mutates process-wide locale state, so concurrent callers can use different
cultures safely.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time
from functools import lru_cache

from babel import Locale, UnknownLocaleError
from babel.dates import (
    get_date_format,
    get_month_names,
    get_period_names,
    get_time_format,
)
from babel.numbers import NumberFormatError, parse_decimal

from line_converter.errors import UnknownCultureError

INVARIANT_CULTURE_NAME = "invariant"
DEFAULT_CULTURE_NAME = "en-US"

_INVARIANT_LOCALE = "en_US"
_DATE_WIDTHS = ("short", "medium", "long")
_TIME_WIDTHS = ("short", "medium")
_TWO_DIGIT_YEAR_MAX = 2049
_MAX_PLAIN_INTEGER = 1e15

_ISO_DATETIME_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?)?",
    re.ASCII,
)
_ASCII_DIGIT_RE = re.compile(r"[0-9]")
_DATE_TIME_SEPARATOR_RE = re.compile(r"\s*,\s*|\s+|T")
_PATTERN_TOKEN_RE = re.compile(r"'(?:[^']|'')*'|([A-Za-z])\1*|.", re.DOTALL)


@dataclass(frozen=True)
class Culture:
    """Locale conventions used to parse input lines.

    Parameters
    ----------
    name : str
        Identifier as configured by the user (``ru-RU``, ``de_DE``, ``invariant``).
    locale : babel.Locale
        Resolved Babel locale.
    """

    name: str
    locale: Locale

    @property
    def identifier(self) -> str:
        """Canonical Babel identifier, e.g. ``ru_RU``."""
        return str(self.locale)

    @classmethod
    def from_name(cls, name: str) -> Culture:
        """Resolve a locale identifier into a culture.

        Parameters
        ----------
        name : str
            BCP-47 (``ru-RU``) or POSIX (``ru_RU``) style identifier. Empty
            strings and ``invariant`` select the invariant culture.

        Returns
        -------
        Culture
            Resolved culture.

        Raises
        ------
        UnknownCultureError
            If Babel has no data for the identifier.
        """
        raw = name.strip()
        if not raw or raw.lower() == INVARIANT_CULTURE_NAME:
            return INVARIANT_CULTURE
        try:
            locale = Locale.parse(raw.replace("-", "_"))
        except (UnknownLocaleError, ValueError, TypeError) as exc:
            raise UnknownCultureError(f"Unknown culture '{name}': {exc}") from exc
        return cls(name=raw, locale=locale)


INVARIANT_CULTURE = Culture(
    name=INVARIANT_CULTURE_NAME,
    locale=Locale.parse(_INVARIANT_LOCALE),
)


@dataclass(frozen=True)
class _CompiledPattern:
    regex: re.Pattern[str]
    month_names: Mapping[str, int] = field(default_factory=dict)
    period_names: Mapping[str, str] = field(default_factory=dict)
    twelve_hour: bool = False


def _tokenize(pattern: str) -> list[tuple[bool, str]]:
    """Split a CLDR pattern into ``(is_field, text)`` tokens."""
    tokens: list[tuple[bool, str]] = []
    for match in _PATTERN_TOKEN_RE.finditer(pattern):
        token = match.group(0)
        if match.group(1):
            tokens.append((True, token))
        elif token.startswith("'") and len(token) > 1:
            tokens.append((False, token[1:-1].replace("''", "'") or "'"))
        else:
            tokens.append((False, token))
    return tokens


def _literal_regex(text: str) -> str:
    return "".join(r"\s*" if ch.isspace() else re.escape(ch) for ch in text)


def _alternation(names: list[str]) -> str:
    unique = sorted({name for name in names if name}, key=len, reverse=True)
    return "|".join(re.escape(name) for name in unique)


def _assemble(parts: list[tuple[bool, str]]) -> re.Pattern[str]:
    """Join regex parts, making literals after the last field optional."""
    last_field = max(
        (index for index, (is_field, _) in enumerate(parts) if is_field),
        default=-1,
    )
    head = "".join(text for _, text in parts[: last_field + 1])
    tail = "".join(text for _, text in parts[last_field + 1 :])
    if tail:
        head += f"(?:{tail})?"
    return re.compile(head, re.IGNORECASE)


def _compile_date_pattern(pattern: str, locale: Locale) -> _CompiledPattern | None:
    parts: list[tuple[bool, str]] = []
    month_names: dict[str, int] = {}
    seen: set[str] = set()
    for is_field, token in _tokenize(pattern):
        if not is_field:
            parts.append((False, _literal_regex(token)))
            continue
        letter, width = token[0], len(token)
        if letter in "yu":
            group = "year"
            regex = r"(?P<year>[0-9]{1,4})"
        elif letter in "ML" and width <= 2:
            group = "month"
            regex = r"(?P<month>[0-9]{1,2})"
        elif letter in "ML":
            group = "month"
            names = get_month_names(
                "abbreviated" if width == 3 else "wide",
                context="format" if letter == "M" else "stand-alone",
                locale=locale,
            )
            month_names.update({name.casefold(): number for number, name in names.items()})
            regex = f"(?P<month_name>{_alternation(list(names.values()))})"
        elif letter == "d":
            group = "day"
            regex = r"(?P<day>[0-9]{1,2})"
        else:
            return None
        if group in seen:
            return None
        seen.add(group)
        parts.append((True, regex))
    if seen != {"year", "month", "day"}:
        return None
    return _CompiledPattern(regex=_assemble(parts), month_names=month_names)


def _compile_time_pattern(pattern: str, locale: Locale) -> _CompiledPattern | None:
    parts: list[tuple[bool, str]] = []
    period_names: dict[str, str] = {}
    twelve_hour = False
    seen: set[str] = set()
    for is_field, token in _tokenize(pattern):
        if not is_field:
            parts.append((False, _literal_regex(token)))
            continue
        letter = token[0]
        if letter in "HkhK":
            group = "hour"
            twelve_hour = letter in "hK"
            regex = r"(?P<hour>[0-9]{1,2})"
        elif letter == "m":
            group = "minute"
            regex = r"(?P<minute>[0-9]{2})"
        elif letter == "s":
            group = "second"
            regex = r"(?P<second>[0-9]{2})"
        elif letter in "abB":
            group = "period"
            names = get_period_names(width="abbreviated", context="format", locale=locale)
            period_names = {"am": "am", "pm": "pm"}
            for key in ("am", "pm"):
                if key in names:
                    period_names[names[key].casefold()] = key
            regex = f"(?P<period>{_alternation(list(period_names))})?"
        else:
            return None
        if group in seen:
            return None
        seen.add(group)
        parts.append((True, regex))
    if not {"hour", "minute"} <= seen:
        return None
    return _CompiledPattern(
        regex=_assemble(parts),
        period_names=period_names,
        twelve_hour=twelve_hour,
    )


@lru_cache(maxsize=None)
def _patterns_for(
    identifier: str,
) -> tuple[tuple[_CompiledPattern, ...], tuple[_CompiledPattern, ...]]:
    """Compile the date and time patterns of a locale once."""
    locale = Locale.parse(identifier)
    dates = (
        _compile_date_pattern(get_date_format(width, locale=locale).pattern, locale)
        for width in _DATE_WIDTHS
    )
    times = (
        _compile_time_pattern(get_time_format(width, locale=locale).pattern, locale)
        for width in _TIME_WIDTHS
    )
    return (
        tuple(pattern for pattern in dates if pattern is not None),
        tuple(pattern for pattern in times if pattern is not None),
    )


def _expand_year(raw: str) -> int:
    value = int(raw)
    if len(raw) > 2:
        return value
    century = (_TWO_DIGIT_YEAR_MAX // 100) * 100
    year = century + value
    return year if year <= _TWO_DIGIT_YEAR_MAX else year - 100


def _build_date(match: re.Match[str], pattern: _CompiledPattern) -> date | None:
    groups = match.groupdict()
    if groups.get("month_name") is not None:
        month = pattern.month_names.get(groups["month_name"].casefold())
        if month is None:
            return None
    else:
        month = int(groups["month"])
    try:
        return date(_expand_year(groups["year"]), month, int(groups["day"]))
    except ValueError:
        return None


def _build_time(match: re.Match[str], pattern: _CompiledPattern) -> time | None:
    groups = match.groupdict()
    hour = int(groups["hour"])
    period = groups.get("period")
    if period and pattern.twelve_hour:
        hour = hour % 12 + (12 if pattern.period_names.get(period.casefold()) == "pm" else 0)
    try:
        return time(hour, int(groups["minute"]), int(groups.get("second") or 0))
    except ValueError:
        return None


def _match_time(
    text: str, time_patterns: tuple[_CompiledPattern, ...]
) -> time | None:
    for time_pattern in time_patterns:
        time_match = time_pattern.regex.fullmatch(text)
        if time_match is None:
            continue
        moment = _build_time(time_match, time_pattern)
        if moment is not None:
            return moment
    return None


def parse_datetime(
    text: str, culture: Culture, *, today: date | None = None
) -> datetime | None:
    """Parse a date and/or a time under ``culture``.

    ISO 8601 calendar dates are accepted in every culture. Otherwise the
    culture's short, medium and long date patterns are tried, each optionally
    followed by a time in the culture's short or medium time pattern. A time
    on its own is placed on ``today``.

    Parameters
    ----------
    text : str
        Trimmed input line.
    culture : Culture
        Culture whose patterns are tried.
    today : date | None, optional
        Date used for time-only input; ``date.today()`` when omitted.

    Returns
    -------
    datetime | None
        Parsed value, or ``None`` when ``text`` is not a date/time.
    """
    if _ISO_DATETIME_RE.fullmatch(text):
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None

    date_patterns, time_patterns = _patterns_for(culture.identifier)
    for date_pattern in date_patterns:
        match = date_pattern.regex.match(text)
        if match is None:
            continue
        day = _build_date(match, date_pattern)
        if day is None:
            continue
        rest = text[match.end() :]
        if not rest:
            return datetime.combine(day, time())
        separator = _DATE_TIME_SEPARATOR_RE.match(rest)
        if separator is None:
            continue
        moment = _match_time(rest[separator.end() :], time_patterns)
        if moment is not None:
            return datetime.combine(day, moment)

    moment = _match_time(text, time_patterns)
    if moment is None:
        return None
    return datetime.combine(today or date.today(), moment)


def parse_number(text: str, culture: Culture) -> float | None:
    """Parse a finite floating-point number using the culture's symbols.

    Grouping is checked strictly, so ``3.14`` is rejected under ``de-DE``
    where ``.`` is the group separator. Only ASCII digits are accepted.
    """
    if not _ASCII_DIGIT_RE.search(text) or any(
        ch.isdigit() and not ch.isascii() for ch in text
    ):
        return None
    try:
        value = parse_decimal(text, locale=culture.locale, strict=True)
    except NumberFormatError:
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def format_invariant_datetime(value: datetime) -> str:
    """Render ``value`` as ``MM/dd/yyyy HH:mm:ss``."""
    return (
        f"{value.month:02d}/{value.day:02d}/{value.year:04d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )


def format_invariant_number(value: float) -> str:
    """Render ``value`` without locale grouping or decimal comma.

    Whole numbers below 1e15 print as integers; from 1e15 up they use the
    shortest round-tripping exponent form (``1e+15``). Everything else is
    ``repr(value)``.
    """
    if not value.is_integer():
        return repr(value)
    if abs(value) < _MAX_PLAIN_INTEGER:
        return str(int(value))
    text = repr(value)
    if "e" in text:
        return text
    sign, digits = ("-", text[1:-2]) if text.startswith("-") else ("", text[:-2])
    mantissa = digits.rstrip("0")
    fraction = f".{mantissa[1:]}" if len(mantissa) > 1 else ""
    return f"{sign}{mantissa[0]}{fraction}e+{len(digits) - 1:02d}"
