"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_OUTPUT_SUFFIX = ".out"


@dataclass(frozen=True)
class RunOptions:
    """Run-level knobs that are not part of the settings file."""

    max_workers: int | None = None
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX
