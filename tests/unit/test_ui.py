"""Tests for renderer selection, title truncation and output printing."""

from __future__ import annotations

import io

from rich.console import Console

from recently.context import ErrorTag, RunContext
from recently.ui import ConsoleRenderer, SilentRenderer, get_renderer, make_renderer, print_task_output, truncate_title


def test_get_renderer() -> None:
    assert get_renderer(debug=False, quiet=True, env={}) == "silent"
    assert get_renderer(debug=True, quiet=True, env={}) == "silent"
    assert get_renderer(debug=True, quiet=False, env={}) == "verbose"
    assert get_renderer(debug=False, quiet=False, env={"TERM": "dumb"}) == "verbose"
    assert get_renderer(debug=False, quiet=False, env={"CI": "true"}) == "verbose"
    assert get_renderer(debug=False, quiet=False, env={"TERM": "xterm"}) == "update"


def test_make_renderer() -> None:
    assert isinstance(make_renderer("silent"), SilentRenderer)
    renderer = make_renderer("update")
    assert isinstance(renderer, ConsoleRenderer)
    assert renderer.style == "update"


def test_truncate_title() -> None:
    assert truncate_title("eslint --fix", "verbose", columns=80) == "eslint --fix"
    long = "x" * 100
    truncated = truncate_title(long, "update", columns=40)
    assert len(truncated) == 40 - len("    X ")
    assert truncated.endswith("…")
    assert truncate_title("first\nsecond", "update", columns=80) == "first"


def test_print_task_output_routes_by_errors(logger) -> None:
    ctx = RunContext(output=["one", "two"])
    print_task_output(ctx, logger)
    assert logger.logs == ["one", "two"]
    assert logger.errors == []

    ctx.add_error(ErrorTag.TASK_ERROR)
    print_task_output(ctx, logger)
    assert logger.errors == ["one", "two"]


def test_console_renderer_verbose_lines() -> None:
    buffer = io.StringIO()
    renderer = ConsoleRenderer("verbose", out=Console(file=buffer, width=120, color_system=None))
    renderer.started("eslint", 0)
    renderer.skipped("Running tasks for *.md", 0, "No recent files match *.md")
    lines = buffer.getvalue().splitlines()
    assert lines == ["[STARTED] eslint", "[SKIPPED] Running tasks for *.md (No recent files match *.md)"]


def test_run_context_failed_follows_errors() -> None:
    ctx = RunContext()
    assert not ctx.failed
    ctx.add_error(ErrorTag.GIT_REPO_ERROR)
    assert ctx.failed
