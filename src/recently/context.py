"""Run context: result accumulator shared by every task of a run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorTag(str, Enum):
    """Kinds of failure recorded on a run; membership only, no payload."""

    GIT_REPO_ERROR = "GitRepoError"
    GET_RECENT_FILES_ERROR = "GetRecentFilesError"
    TASK_ERROR = "TaskError"


@dataclass
class RunContext:
    """Errors and output collected during one run.

    Mutated only from coroutines on the run's event loop, so appends
    interleave at await points and need no lock.
    """

    quiet: bool = False
    errors: set[ErrorTag] = field(default_factory=set)
    output: list[str] = field(default_factory=list)

    def add_error(self, tag: ErrorTag) -> None:
        self.errors.add(tag)

    def append_output(self, line: str) -> None:
        self.output.append(line)

    @property
    def failed(self) -> bool:
        return bool(self.errors)
