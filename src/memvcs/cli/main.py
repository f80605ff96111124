"""Main CLI entry point for MemVCS.

The engine keeps everything in memory, so each invocation runs a whole
session of commands against one fresh repository: either a script file
(``memvcs run``) or an interactive prompt (``memvcs shell``).
"""

import logging
import sys
from pathlib import Path
from typing import Iterable

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from memvcs.cli.script import ScriptError, ScriptRunner
from memvcs.constants import (
    DEFAULT_BRANCH,
    EXIT_INTERRUPTED,
    EXIT_SCRIPT_ERROR,
    EXIT_SUCCESS,
    EXIT_USER_ERROR,
    SHELL_EXIT_COMMANDS,
    SHELL_PROMPT,
)
from memvcs.core import OperationResult, Repository

console = Console()
app = typer.Typer(
    name="memvcs",
    help="In-memory version control engine",
    add_completion=False,
)


def configure_logging(verbose: bool) -> None:
    """Send memvcs debug logging to the console when ``verbose`` is set."""
    if not verbose:
        return
    logger = logging.getLogger("memvcs")
    logger.setLevel(logging.DEBUG)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))


def render_result(result: OperationResult) -> None:
    """Print a command result, green on success and yellow on failure."""
    style = "green" if result.success else "yellow"
    console.print(result.message.rstrip("\n"), style=style, markup=False, highlight=False)


def run_lines(runner: ScriptRunner, lines: Iterable[str], strict: bool) -> None:
    """Execute script lines, stopping on script errors (and failures if strict)."""
    for number, line in enumerate(lines, start=1):
        try:
            result = runner.execute(line)
        except ScriptError as e:
            console.print(f"[bold red]Error:[/bold red] line {number}: {escape(str(e))}", style="red")
            raise typer.Exit(EXIT_SCRIPT_ERROR)

        if result is None:
            continue
        render_result(result)
        if strict and result.is_error():
            console.print(
                f"[bold red]Stopped:[/bold red] line {number} failed (--strict)",
                style="red",
            )
            raise typer.Exit(EXIT_USER_ERROR)


@app.command()
def version() -> None:
    """Show MemVCS version."""
    from memvcs import __version__
    typer.echo(f"MemVCS version {__version__}")


@app.command()
def run(
    script: str = typer.Argument(..., help="Script file to execute ('-' for stdin)"),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Stop at the first failed command",
    ),
    default_branch: str = typer.Option(
        DEFAULT_BRANCH,
        "--default-branch",
        help="Name of the initial branch",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show engine debug logging",
    ),
) -> None:
    """Run a command script against a fresh repository."""
    configure_logging(verbose)

    if script == "-":
        content = sys.stdin.read()
    else:
        script_path = Path(script)
        if not script_path.is_file():
            console.print(
                f"[bold red]Error:[/bold red] Script not found: {escape(script)}",
                style="red",
            )
            raise typer.Exit(EXIT_USER_ERROR)
        content = script_path.read_text(encoding="utf-8")

    runner = ScriptRunner(Repository(default_branch=default_branch))
    run_lines(runner, content.splitlines(), strict)


@app.command()
def shell(
    default_branch: str = typer.Option(
        DEFAULT_BRANCH,
        "--default-branch",
        help="Name of the initial branch",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show engine debug logging",
    ),
) -> None:
    """Start an interactive session against a fresh repository."""
    configure_logging(verbose)
    runner = ScriptRunner(Repository(default_branch=default_branch))
    console.print(
        f"[dim]Commands: {', '.join(runner.commands)}. Type 'exit' to quit.[/dim]"
    )

    while True:
        try:
            line = console.input(SHELL_PROMPT)
        except EOFError:
            break
        except KeyboardInterrupt:
            console.print()
            raise typer.Exit(EXIT_INTERRUPTED)
        if line.strip() in SHELL_EXIT_COMMANDS:
            raise typer.Exit(EXIT_SUCCESS)

        try:
            result = runner.execute(line)
        except ScriptError as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", style="red")
            continue
        if result is not None:
            render_result(result)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
