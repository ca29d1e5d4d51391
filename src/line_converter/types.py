"""Shared type aliases for converter modules."""

from __future__ import annotations

from typing import TypeAlias

RuleMatch: TypeAlias = tuple[str, str]
