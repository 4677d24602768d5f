"""Git command runner."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from pathlib import Path

from recently.errors import GitCommandError

logger = logging.getLogger(__name__)

# Never recurse into submodules, whatever the local or global config says.
NO_SUBMODULE_RECURSE = ["-c", "submodule.recurse=false"]

GIT_GLOBAL_OPTIONS = [*NO_SUBMODULE_RECURSE]

# These would redirect or reinterpret every git call we make.
_SANITIZED_VARS = {
    "GIT_DIR",
    "GIT_WORK_TREE",
    "GIT_LITERAL_PATHSPECS",
}


def sanitize_environment(additional: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return the process environment without git location overrides."""
    env = dict(os.environ)
    for key in _SANITIZED_VARS:
        if key in env:
            logger.debug("Unset %s (was `%s`)", key, env[key])
            env.pop(key)
    if additional:
        env.update(additional)
    return env


def strip_final_newline(text: str) -> str:
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


def run_git(
    args: list[str],
    *,
    cwd: Path | str | None = None,
    env: Mapping[str, str] | None = None,
) -> str:
    """Run a git command and return its stdout.

    Raises:
        GitCommandError: If git exits non-zero, dies from a signal or cannot start.
            The error carries stdout and stderr combined.
    """
    argv = ["git", *GIT_GLOBAL_OPTIONS, *args]
    workdir = Path(cwd) if cwd is not None else Path.cwd()
    logger.debug("Running git command: %s", args)
    try:
        completed = subprocess.run(
            argv,
            cwd=workdir,
            env=sanitize_environment(env),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise GitCommandError(args, str(exc)) from exc

    if completed.returncode != 0:
        combined = "\n".join(part for part in (completed.stdout, completed.stderr) if part)
        raise GitCommandError(args, strip_final_newline(combined), completed.returncode)
    return strip_final_newline(completed.stdout)
