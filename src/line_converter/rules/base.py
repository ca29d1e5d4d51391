"""Rule protocol for line conversion."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from line_converter.culture import Culture


@runtime_checkable
class ConversionRule(Protocol):
    """Protocol implemented by line conversion rules."""

    name: str

    def try_convert(self, line: str, culture: Culture) -> str | None:
        """Convert ``line`` if this rule applies to it.

        Parameters
        ----------
        line : str
            Trimmed, non-empty input line.
        culture : Culture
            Culture used to parse the line.

        Returns
        -------
        str | None
            Converted text, or ``None`` when the rule does not apply.
        """
