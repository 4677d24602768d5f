"""Exception types raised by recently."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recently.context import RunContext


class RecentlyError(RuntimeError):
    """Base class for recently errors."""


class GitCommandError(RecentlyError):
    """Raised when a git subprocess fails, is killed or cannot be spawned."""

    def __init__(self, args: list[str], output: str, returncode: int | None = None):
        rendered = " ".join(args)
        super().__init__(f"git command failed ({returncode}): git {rendered}\n{output.strip()}")
        self.git_args = tuple(args)
        self.output = output
        self.returncode = returncode


class InvalidOptionsError(RecentlyError):
    """Raised when run options fail validation."""


class ConfigNotFoundError(RecentlyError):
    """Raised when no configuration could be discovered."""

    def __init__(self, message: str = "Config could not be found"):
        super().__init__(message)


class ConfigError(RecentlyError):
    """Raised when configuration is malformed or fails schema validation."""


class TaskError(RecentlyError):
    """Raised by a command task that failed; `tag` is a short failure label."""

    def __init__(self, command: str, tag: str):
        super().__init__(f"{command} [{tag}]")
        self.command = command
        self.tag = tag


class RunAllError(RecentlyError):
    """Raised when a run fails; carries the run context for rendering."""

    def __init__(self, ctx: RunContext):
        super().__init__("recently failed")
        self.ctx = ctx
