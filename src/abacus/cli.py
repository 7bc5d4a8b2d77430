"""
abacus command line interface.

Commands:
  repl  Interactive prompt (default when no command is given)
  run   Evaluate a file line by line
  eval  Evaluate a single statement
"""

from __future__ import annotations

import logging
import platform
import sys
from collections.abc import Iterable
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from abacus import __version__
from abacus.core.config import OutputStyle, SessionConfig, load_config, log_level_from_env
from abacus.core.errors import AbacusError
from abacus.core.formatting import format_error, format_outcome
from abacus.core.session import Outcome, Session

logger = logging.getLogger(__name__)

console = Console()

LOG_FORMAT = "[%(asctime)s] %(name)s - %(levelname)s - %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"abacus version {__version__}")
        typer.echo(
            f"  Python:        {platform.python_implementation()} {platform.python_version()}"
        )
        raise typer.Exit()


app = typer.Typer(
    help="""abacus: calculator language with an automatic numeric tower

Numbers: 2, 3//4, 1.5, 2.5i
Operators: + - * / %, comparisons, & | ^ !
Functions: fn inc(num) { num + 1 }
Conditionals: if x < 3 { 1 } else { 2 }
""",
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: ABACUS_LOG_LEVEL or WARNING)",
    ),
) -> None:
    """abacus CLI main callback for global options."""
    configure_logging(log_level or log_level_from_env())
    if ctx.invoked_subcommand is None:
        repl_command(config_path=None, style=None)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def _load(config_path: Path | None, style: OutputStyle | None) -> SessionConfig:
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {escape(str(config_path))}[/red]")
        raise typer.Exit(2)
    except ValueError as e:
        # tomllib.TOMLDecodeError is a ValueError
        console.print(f"[red]Invalid config file: {escape(str(e))}[/red]")
        raise typer.Exit(2)
    return config.with_overrides(output_style=style)


def _print_outcome(outcome: Outcome, style: OutputStyle) -> None:
    text = format_outcome(outcome, style)
    if text is not None:
        console.print(text, markup=False, highlight=False)


def _print_error(error: AbacusError) -> None:
    console.print(f"[red]{escape(format_error(error))}[/red]", highlight=False)


def _report(outcomes: Iterable[Outcome], style: OutputStyle) -> int:
    failed = 0
    for outcome in outcomes:
        if outcome.error is not None:
            _print_error(outcome.error)
            failed += 1
        else:
            _print_outcome(outcome, style)
    return failed


@app.command(name="repl")
def repl_command(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to abacus.toml (default: ./abacus.toml if present)",
    ),
    style: OutputStyle | None = typer.Option(
        None,
        "--style",
        "-s",
        help="Output style: plain or marked",
    ),
) -> None:
    """Start an interactive prompt. Ctrl-D exits, Ctrl-C drops the open statement."""
    config = _load(config_path, style)
    session = Session(config)

    while True:
        prompt = config.continuation_prompt if session.pending else config.prompt
        try:
            line = console.input(escape(prompt))
        except EOFError:
            break
        except KeyboardInterrupt:
            console.print()
            session.cancel()
            continue

        try:
            outcome = session.push(line)
        except AbacusError as e:
            _print_error(e)
            continue
        if outcome is not None:
            _print_outcome(outcome, config.output_style)

    try:
        session.finish()
    except AbacusError as e:
        _print_error(e)


@app.command(name="run")
def run_command(
    file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Source file, one statement per line (blocks may span lines)",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to abacus.toml (default: ./abacus.toml if present)",
    ),
    style: OutputStyle | None = typer.Option(
        None,
        "--style",
        "-s",
        help="Output style: plain or marked",
    ),
) -> None:
    """Evaluate every statement in FILE. Exits non-zero if any statement failed."""
    config = _load(config_path, style)
    session = Session(config)

    lines = file.read_text(encoding="utf-8").splitlines()
    failed = _report(session.run(lines), config.output_style)
    if failed:
        logger.info("%d statement(s) failed in %s", failed, file)
        raise typer.Exit(1)


@app.command(name="eval")
def eval_command(
    expression: str = typer.Argument(..., help="Statement to evaluate"),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to abacus.toml (default: ./abacus.toml if present)",
    ),
    style: OutputStyle | None = typer.Option(
        None,
        "--style",
        "-s",
        help="Output style: plain or marked",
    ),
) -> None:
    """Evaluate a single statement and print its result."""
    config = _load(config_path, style)
    session = Session(config)

    try:
        outcome = session.execute(expression)
    except AbacusError as e:
        _print_error(e)
        raise typer.Exit(1)
    _print_outcome(outcome, config.output_style)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
