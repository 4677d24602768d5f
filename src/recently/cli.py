"""recently command-line interface."""

from __future__ import annotations

import asyncio
import logging
import signal
from pathlib import Path

import typer
from rich.logging import RichHandler

from recently import __version__
from recently.errors import RecentlyError
from recently.main import lint_recently
from recently.options import RunOptions, default_max_arg_length
from recently.ui import ConsoleLogger, error_console

cli = typer.Typer(
    name="recently",
    help="Run commands against files changed in recent git history.",
    add_completion=False,
)


def parse_concurrent(value: str) -> bool | int:
    """Parse `true`, `false` or a positive integer."""
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        parsed = int(lowered)
    except ValueError:
        raise typer.BadParameter("expected true, false or a positive integer") from None
    if parsed < 1:
        raise typer.BadParameter("expected true, false or a positive integer")
    return parsed


def configure_logging(debug: bool) -> None:
    """Send `recently.*` debug logs to stderr when --debug is given."""
    if not debug:
        return
    package_logger = logging.getLogger("recently")
    package_logger.setLevel(logging.DEBUG)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=error_console, show_path=False))


def _ignore_sigint(signum: int, frame: object) -> None:
    """Keep running on Ctrl-C so collected output is not lost."""


def _version_option_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.command()
def run(
    concurrent: str = typer.Option(
        "true",
        "--concurrent",
        "-p",
        help="Number of tasks to run concurrently, or false to run tasks serially.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a configuration file.",
    ),
    cwd: Path | None = typer.Option(
        None,
        "--cwd",
        help="Working directory to run in.",
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Print additional debug information."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Disable recently's own console output."),
    relative: bool = typer.Option(False, "--relative", "-r", help="Pass relative file paths to tasks."),
    shell: bool = typer.Option(False, "--shell", "-x", help="Run tasks through the system shell."),
    shell_path: Path | None = typer.Option(
        None,
        "--shell-path",
        help="Run tasks through the shell binary at this path.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show task output even when tasks succeed.",
    ),
    max_arg_length: int | None = typer.Option(
        None,
        "--max-arg-length",
        help="Maximum length of the file argument string per command (defaults to half the platform limit).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show recently version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    """Run configured commands against files changed in the last days of git history."""
    _ = version
    configure_logging(debug)

    options = RunOptions(
        concurrent=parse_concurrent(concurrent),
        config_path=config,
        cwd=cwd,
        debug=debug,
        max_arg_length=max_arg_length if max_arg_length is not None else default_max_arg_length(),
        quiet=quiet,
        relative=relative,
        shell=str(shell_path) if shell_path is not None else shell,
        verbose=verbose,
    )
    logging.getLogger(__name__).debug("Options parsed from command-line: %s", options)

    previous = signal.signal(signal.SIGINT, _ignore_sigint)
    try:
        passed = asyncio.run(lint_recently(options, ConsoleLogger()))
    except RecentlyError:
        raise typer.Exit(1) from None
    finally:
        signal.signal(signal.SIGINT, previous)

    raise typer.Exit(0 if passed else 1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
