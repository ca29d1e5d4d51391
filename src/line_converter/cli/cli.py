#!/usr/bin/env python3
"""
line_converter.cli.cli

Typer-based CLI for converting text files line by line.

Each input line is rewritten according to its shape: date/time values and
numbers are parsed in the configured source culture and re-rendered in a fixed
invariant form, ``"<index> <word>"`` lines become ``word[index]``. Every file
``F`` produces ``F.out`` with ``"<length> <text>"`` lines, followed by a line
for the number of non-empty input lines.

Examples
--------
Convert the default ``text.txt`` using ``settings.xml`` from the current
directory:

    convert-lines convert

Convert several files with an explicit settings file:

    convert-lines convert a.txt b.txt --settings conf/settings.xml

Try a single line:

    convert-lines line "12.03.2021" --culture ru-RU
"""

from __future__ import annotations

import logging
import traceback
from pathlib import Path

import typer

from line_converter.errors import ConfigLoadError, MalformedLineError, UnknownCultureError

logger = logging.getLogger("line_converter.cli")

app = typer.Typer(
    name="convert-lines",
    help="Convert text files line by line (dates, numbers, character lookups).",
    no_args_is_help=True,
)

DEFAULT_INPUT_FILENAME = "text.txt"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"


def _configure_logging(debug: bool) -> None:
    """Send log records to stderr; DEBUG when ``debug`` is set."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
    )


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly conversion error.

    Parameters
    ----------
    exc : Exception
        Exception raised during conversion.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"[red]✗ {type(exc).__name__}:[/red] {exc}", err=True)
    if debug:
        typer.echo("\n[dim]Traceback:[/dim]", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show debug logs and full tracebacks."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug output.
    """
    ctx.obj = {"debug": debug}
    _configure_logging(debug)


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    files: list[Path] | None = typer.Argument(
        None,
        help=f"Input text files (default: {DEFAULT_INPUT_FILENAME}).",
        show_default=False,
    ),
    settings_path: Path = typer.Option(
        Path("settings.xml"),
        "--settings",
        help="Settings XML with SourceCultureName and Verbose.",
    ),
    max_workers: int | None = typer.Option(
        None, "--max-workers", min=1, help="Number of files converted in parallel."
    ),
    fail_on_error: bool = typer.Option(
        True,
        "--fail-on-error/--no-fail-on-error",
        help="Exit with code 1 when any file fails to convert.",
    ),
) -> None:
    """Convert files into ``<file>.out``.

    Parameters
    ----------
    files : list[Path] | None
        Input files; ``text.txt`` when omitted.
    settings_path : Path
        Settings file; defaults are used (with a warning) when it is missing.
    max_workers : int | None
        Thread pool size.
    fail_on_error : bool, default=True
        Whether per-file failures change the exit code.

    Notes
    -----
    - Per-file failures are logged and never stop other files.
    - An unreadable or invalid settings file stops the run with exit code 2.
    """
    from line_converter.application.options import RunOptions
    from line_converter.application.use_cases import run_all
    from line_converter.infrastructure.settings import load_settings

    try:
        settings = load_settings(settings_path)
    except ConfigLoadError as exc:
        logger.error("%s", exc, exc_info=exc)
        raise typer.Exit(code=exc.exit_code)

    report = run_all(
        files or [Path(DEFAULT_INPUT_FILENAME)],
        settings,
        options=RunOptions(max_workers=max_workers),
    )
    for outcome in report.succeeded:
        typer.echo(f"[green]✓ Saved:[/green] {outcome.output_path}")
    if report.failed:
        typer.echo(
            f"[red]✗ {len(report.failed)} of {len(report.outcomes)} file(s) failed.[/red]",
            err=True,
        )
        if fail_on_error:
            raise typer.Exit(code=1)


@app.command("line")
def line_cmd(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Line to convert."),
    culture: str = typer.Option(
        "en-US", "--culture", help="Source culture used to parse dates and numbers."
    ),
) -> None:
    """Convert a single line and print it with its length prefix."""
    debug: bool = bool(ctx.obj.get("debug", False))

    from line_converter.application.results import ConvertedLine
    from line_converter.culture import Culture
    from line_converter.rules.registry import create_default_registry

    try:
        resolved = Culture.from_name(culture)
    except UnknownCultureError as exc:
        raise typer.BadParameter(str(exc), param_hint="--culture") from exc

    line = text.strip()
    match = create_default_registry().try_convert(line, resolved) if line else None
    if match is None:
        raise typer.Exit(code=_print_conversion_error(MalformedLineError(text), debug))
    rule_name, converted = match
    typer.echo(ConvertedLine(converted).render())
    typer.echo(f"rule: {rule_name}", err=True)


if __name__ == "__main__":
    app()
