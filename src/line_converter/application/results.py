"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SourceLine:
    """Trimmed non-empty input line, or the synthetic count trailer."""

    number: int
    text: str
    is_trailer: bool = False


@dataclass(frozen=True)
class ConvertedLine:
    """Converted text with its length prefix."""

    text: str

    @property
    def length(self) -> int:
        return len(self.text)

    def render(self) -> str:
        """Return the output form ``"<length> <text>"``."""
        return f"{self.length} {self.text}"


@dataclass(frozen=True)
class FileOutcome:
    """Structured per-file conversion outcome."""

    source_path: Path
    lines: tuple[ConvertedLine, ...] = ()
    errors: tuple[Exception, ...] = ()
    output_path: Path | None = None

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def success(
        cls, source_path: Path, output_path: Path, lines: tuple[ConvertedLine, ...]
    ) -> FileOutcome:
        return cls(source_path=source_path, lines=lines, output_path=output_path)

    @classmethod
    def failure(cls, source_path: Path, *errors: Exception) -> FileOutcome:
        return cls(source_path=source_path, errors=tuple(errors))


@dataclass(frozen=True)
class BatchReport:
    """Outcomes of a batch run, in submission order."""

    outcomes: tuple[FileOutcome, ...] = ()

    @property
    def succeeded(self) -> tuple[FileOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> tuple[FileOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.ok)

    @property
    def errors(self) -> tuple[Exception, ...]:
        return tuple(error for outcome in self.outcomes for error in outcome.errors)

    @property
    def ok(self) -> bool:
        return not self.failed
