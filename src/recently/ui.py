"""Console output: loggers, progress renderers and collected task output."""

from __future__ import annotations

import os
import shutil
from collections.abc import Mapping
from typing import TYPE_CHECKING, Literal, Protocol

from rich.console import Console
from rich.text import Text

if TYPE_CHECKING:
    from recently.context import RunContext

console = Console(highlight=False)
error_console = Console(stderr=True, highlight=False)

RendererName = Literal["silent", "verbose", "update"]

STDOUT_COLUMNS_DEFAULT = 80

# Width taken in front of a task title by each renderer.
RENDERER_PREFIX_LENGTH: dict[str, int] = {
    "update": len("    X "),
    "verbose": len("[STARTED] "),
}


class Logger(Protocol):
    """Sink for status lines printed outside of task progress."""

    def error(self, message: str) -> None: ...

    def log(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...


class Renderer(Protocol):
    """Receives progress events for plan nodes."""

    def started(self, title: str, depth: int) -> None: ...

    def succeeded(self, title: str, depth: int) -> None: ...

    def skipped(self, title: str, depth: int, reason: str) -> None: ...

    def failed(self, title: str, depth: int, error: BaseException) -> None: ...


class ConsoleLogger:
    """Logger writing rich markup to stdout (log) and stderr (warn, error)."""

    def __init__(self, out: Console | None = None, err: Console | None = None) -> None:
        self.out = out or console
        self.err = err or error_console

    def error(self, message: str) -> None:
        self.err.print(message)

    def log(self, message: str) -> None:
        self.out.print(message)

    def warn(self, message: str) -> None:
        self.err.print(message)


def print_task_output(ctx: RunContext, log: Logger) -> None:
    """Print collected output, through `log.error` when the run has errors."""
    emit = log.error if ctx.failed else log.log
    for line in ctx.output:
        emit(line)


def get_renderer(debug: bool, quiet: bool, env: Mapping[str, str] | None = None) -> RendererName:
    """Pick the progress renderer for the current terminal."""
    environ = os.environ if env is None else env
    if quiet:
        return "silent"
    # Dumb terminals and CI logs cannot redraw lines.
    if debug or environ.get("TERM") == "dumb" or environ.get("CI"):
        return "verbose"
    return "update"


def title_width(renderer: str, columns: int | None = None) -> int:
    if columns is None:
        columns = shutil.get_terminal_size((STDOUT_COLUMNS_DEFAULT, 24)).columns
    return (columns or STDOUT_COLUMNS_DEFAULT) - RENDERER_PREFIX_LENGTH.get(renderer, 0)


def truncate_title(title: str, renderer: str, columns: int | None = None) -> str:
    """Truncate a task title to a single terminal line."""
    width = max(title_width(renderer, columns), 1)
    first_line = title.splitlines()[0] if title else title
    text = Text(first_line)
    text.truncate(width, overflow="ellipsis")
    return text.plain


class SilentRenderer:
    """Renderer that prints nothing."""

    def started(self, title: str, depth: int) -> None:
        pass

    def succeeded(self, title: str, depth: int) -> None:
        pass

    def skipped(self, title: str, depth: int, reason: str) -> None:
        pass

    def failed(self, title: str, depth: int, error: BaseException) -> None:
        pass


class ConsoleRenderer:
    """Line-oriented progress renderer.

    `verbose` prints one `[EVENT] title` line per event. `update` prints
    indented status symbols instead.
    """

    LABELS = {"started": "STARTED", "succeeded": "SUCCESS", "skipped": "SKIPPED", "failed": "FAILED"}
    SYMBOLS = {"started": "❯", "succeeded": "✔", "skipped": "↓", "failed": "✖"}
    STYLES = {"started": "yellow", "succeeded": "green", "skipped": "yellow", "failed": "red"}

    def __init__(self, style: RendererName = "verbose", out: Console | None = None) -> None:
        self.style = style
        self.out = out or console

    def _emit(self, event: str, title: str, depth: int, detail: str | None = None) -> None:
        line = Text()
        if self.style == "verbose":
            line.append(f"[{self.LABELS[event]}] ")
            line.append(title)
            if detail:
                line.append(f" ({detail})", style="dim")
        else:
            line.append("  " * depth)
            line.append(f"{self.SYMBOLS[event]} ", style=self.STYLES[event])
            line.append(title)
            if detail:
                line.append(f" [{detail}]", style="dim")
        self.out.print(line)

    def started(self, title: str, depth: int) -> None:
        self._emit("started", title, depth)

    def succeeded(self, title: str, depth: int) -> None:
        self._emit("succeeded", title, depth)

    def skipped(self, title: str, depth: int, reason: str) -> None:
        self._emit("skipped", title, depth, reason)

    def failed(self, title: str, depth: int, error: BaseException) -> None:
        self._emit("failed", title, depth, str(error))


def make_renderer(name: RendererName) -> Renderer:
    if name == "silent":
        return SilentRenderer()
    return ConsoleRenderer(style=name)
