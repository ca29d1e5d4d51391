"""Ordered rule registry used to classify and convert lines."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from line_converter.culture import Culture
from line_converter.errors import ConversionError, MalformedLineError
from line_converter.rules.base import ConversionRule
from line_converter.rules.builtins import (
    CharIndexLookupRule,
    DateTimeRule,
    DecimalRule,
)
from line_converter.types import RuleMatch


class RuleRegistry:
    """Conversion rules tried in registration order; first match wins."""

    def __init__(self, rules: Iterable[ConversionRule] = ()) -> None:
        self._rules: list[ConversionRule] = []
        for rule in rules:
            self.register(rule)

    def register(self, rule: ConversionRule) -> None:
        """Append a rule after the already registered ones.

        Parameters
        ----------
        rule : ConversionRule
            Rule instance to register.

        Raises
        ------
        ConversionError
            If the rule has no name or the name is already taken.
        """
        name = getattr(rule, "name", "").strip()
        if not name:
            raise ConversionError("Rule must define a non-empty 'name'.")
        if name in self.names():
            raise ConversionError(f"Rule '{name}' is already registered.")
        self._rules.append(rule)

    def names(self) -> list[str]:
        """Return rule names in priority order."""
        return [rule.name for rule in self._rules]

    def try_convert(self, line: str, culture: Culture) -> RuleMatch | None:
        """Return ``(rule_name, converted)`` for the first matching rule.

        Parameters
        ----------
        line : str
            Trimmed, non-empty input line.
        culture : Culture
            Culture used by rules that parse the line.

        Returns
        -------
        tuple[str, str] | None
            Name of the matching rule and the converted text, or ``None``
            when no rule applies.
        """
        for rule in self._rules:
            converted = rule.try_convert(line, culture)
            if converted is not None:
                return rule.name, converted
        return None

    def convert(self, line: str, culture: Culture) -> str:
        """Convert ``line`` or raise :class:`MalformedLineError`."""
        match = self.try_convert(line, culture)
        if match is None:
            raise MalformedLineError(line)
        return match[1]


def create_default_registry(today: date | None = None) -> RuleRegistry:
    """Create the registry with the built-in rules in priority order.

    Parameters
    ----------
    today : date | None, optional
        Date given to time-only lines; the current date when omitted.

    Returns
    -------
    RuleRegistry
        Date/time first, then decimal, then character-index lookup.
    """
    return RuleRegistry([DateTimeRule(today), DecimalRule(), CharIndexLookupRule()])
