"""Application use-cases orchestrating line conversion workflows."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path

from line_converter.adapters.line_sources import TextFileLineSource
from line_converter.adapters.writers import AtomicTextWriter
from line_converter.application.options import DEFAULT_OUTPUT_SUFFIX, RunOptions
from line_converter.application.ports import LineConverter, LineSource, OutputWriter
from line_converter.application.results import (
    BatchReport,
    ConvertedLine,
    FileOutcome,
    SourceLine,
)
from line_converter.culture import Culture
from line_converter.errors import (
    ConversionError,
    InputFileNotFoundError,
    MalformedLineError,
)
from line_converter.rules.registry import create_default_registry
from line_converter.schemas import Settings

logger = logging.getLogger(__name__)


def output_path_for(path: Path, suffix: str = DEFAULT_OUTPUT_SUFFIX) -> Path:
    """Return the output location for ``path`` (``text.txt`` -> ``text.txt.out``)."""
    return path.with_name(path.name + suffix)


def _wrapped(message: str, cause: BaseException) -> ConversionError:
    error = ConversionError(f"{message}: {cause}")
    error.__cause__ = cause
    return error


def convert_lines(
    lines: Sequence[SourceLine],
    culture: Culture,
    *,
    converter: LineConverter,
    path: Path | None = None,
) -> tuple[list[ConvertedLine], list[MalformedLineError]]:
    """Convert every line in order, collecting one error per malformed line.

    Parameters
    ----------
    lines : Sequence[SourceLine]
        Lines to convert, trailer included.
    culture : Culture
        Culture used to parse dates and numbers.
    converter : LineConverter
        Rule registry applied to each line.
    path : Path | None, default=None
        Source file, used only to locate errors.

    Returns
    -------
    tuple[list[ConvertedLine], list[MalformedLineError]]
        Converted lines and the errors of lines no rule accepted.
    """
    converted: list[ConvertedLine] = []
    errors: list[MalformedLineError] = []
    for line in lines:
        match = converter.try_convert(line.text, culture)
        if match is None:
            errors.append(
                MalformedLineError(line.text, path=path, line_number=line.number)
            )
            continue
        converted.append(ConvertedLine(match[1]))
    return converted, errors


def convert_file(
    path: str | Path,
    settings: Settings,
    *,
    options: RunOptions | None = None,
    converter: LineConverter | None = None,
    source: LineSource | None = None,
    writer: OutputWriter | None = None,
) -> FileOutcome:
    """Use-case: convert one input file into ``<path>.out``.

    Expected failures (missing file, unreadable file, malformed lines,
    failed write) are returned in the outcome instead of being raised. The
    output file is only written when every line converted.
    """
    path = Path(path)
    options = options or RunOptions()
    if not path.is_file():
        return FileOutcome.failure(path, InputFileNotFoundError(path))

    culture = settings.culture
    if settings.verbose:
        logger.info("Processing file %s", path)
        logger.info("Source culture %s", culture.identifier)

    converter = converter or create_default_registry()
    source = source or TextFileLineSource()
    writer = writer or AtomicTextWriter()

    try:
        lines = source.read(path)
    except (OSError, UnicodeDecodeError) as exc:
        return FileOutcome.failure(path, _wrapped(f"Unable to read {path}", exc))

    converted, errors = convert_lines(lines, culture, converter=converter, path=path)
    if errors:
        return FileOutcome.failure(path, *errors)

    output_path = output_path_for(path, options.output_suffix)
    try:
        writer.write(output_path, [line.render() for line in converted])
    except OSError as exc:
        return FileOutcome.failure(path, _wrapped(f"Unable to write {output_path}", exc))
    logger.debug("Wrote %d line(s) to %s", len(converted), output_path)
    return FileOutcome.success(path, output_path, tuple(converted))


def report_outcome(outcome: FileOutcome) -> None:
    """Log every error of ``outcome`` individually, with stack context."""
    for error in outcome.errors:
        logger.error(
            "Failed to convert %s: %s",
            outcome.source_path,
            error,
            exc_info=error,
        )


def _default_workers() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


def run_all(
    filenames: Iterable[str | Path],
    settings: Settings,
    *,
    options: RunOptions | None = None,
    converter: LineConverter | None = None,
    source: LineSource | None = None,
    writer: OutputWriter | None = None,
) -> BatchReport:
    """Use-case: convert files concurrently, isolating per-file failures.

    Each distinct filename becomes one unit of work on a shared thread pool.
    All units run to completion; every error is logged via
    :func:`report_outcome` and nothing aborts sibling files.

    Returns
    -------
    BatchReport
        Outcomes in the order filenames were first given.
    """
    options = options or RunOptions()
    paths = list(dict.fromkeys(Path(name) for name in filenames))
    if not paths:
        return BatchReport()

    converter = converter or create_default_registry()
    workers = min(options.max_workers or _default_workers(), len(paths))
    outcomes: dict[Path, FileOutcome] = {}
    with ThreadPoolExecutor(
        max_workers=workers, thread_name_prefix="line-converter"
    ) as executor:
        futures: dict[Future[FileOutcome], Path] = {
            executor.submit(
                convert_file,
                path,
                settings,
                options=options,
                converter=converter,
                source=source,
                writer=writer,
            ): path
            for path in paths
        }
        for future in as_completed(futures):
            path = futures[future]
            try:
                outcome = future.result()
            except Exception as exc:
                outcome = FileOutcome.failure(path, exc)
            report_outcome(outcome)
            outcomes[path] = outcome
    return BatchReport(tuple(outcomes[path] for path in paths))
