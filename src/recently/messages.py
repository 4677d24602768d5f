"""User-facing status lines (rich markup)."""

from __future__ import annotations

from rich.markup import escape

ERROR = "✖"
INFO = "ℹ"
WARNING = "⚠"

NOT_GIT_REPO = f"[bright_red]{ERROR} Current directory is not a git directory![/bright_red]"

FAILED_GET_RECENT_FILES = f"[bright_red]{ERROR} Failed to get recent files![/bright_red]"

NO_RECENT_FILES = f"{INFO} No recent files found."

NO_TASKS = f"{INFO} No recent files match any configured task."

TASK_ERROR = "Skipped because of errors from tasks."

CONFIG_NOT_FOUND = "Config could not be found."


def incorrect_braces(before: str, after: str) -> str:
    return (
        f"[yellow]{WARNING} Detected incorrect braces with only single value: "
        f"`{escape(before)}`. Reformatted as: `{escape(after)}`[/yellow]\n"
    )


def invalid_option(name: str, value: str, message: str) -> str:
    return (
        f"[bright_red]{ERROR} Validation Error:[/bright_red]\n\n"
        f"  Invalid value for option '[bold]{escape(name)}[/bold]': [bold]{escape(value)}[/bold]\n\n"
        f"  {escape(message)}\n\n"
        "See `recently --help` for the available command-line flags."
    )


def config_error(message: str) -> str:
    return f"[bright_red]{ERROR} Could not parse recently config.[/bright_red]\n\n{escape(message)}"


def task_output_title(command: str, is_error: bool) -> str:
    if is_error:
        return f"[bright_red]{ERROR} {escape(command)}:[/bright_red]"
    return f"{INFO} {escape(command)}:"


def task_failed_without_output(command: str, tag: str) -> str:
    return f"[bright_red]\n{ERROR} {escape(command)} failed without output ({escape(tag)}).[/bright_red]"


def unbalanced_brackets(pattern: str) -> str:
    return (
        f"[yellow]{WARNING} Pattern `{escape(pattern)}` has unbalanced brackets; "
        "they are matched as literal characters.[/yellow]\n"
    )
