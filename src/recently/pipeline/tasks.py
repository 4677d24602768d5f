"""Map configured glob patterns onto concrete file lists."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from wcmatch import glob

from recently.utils.paths import normalize_path, relative_path, resolve_path

logger = logging.getLogger(__name__)

BASE_GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB | glob.DOTMATCH


@dataclass(frozen=True)
class TaskDescriptor:
    """Commands for one pattern together with the files it matched in one chunk."""

    pattern: str
    commands: str | list[str]
    file_list: list[str] = field(default_factory=list)


def glob_flags(pattern: str) -> int:
    # Without a slash the pattern matches basenames in every directory,
    # so `*.js` matches `test.js` and `sub/test.js`.
    if "/" not in pattern:
        return BASE_GLOB_FLAGS | glob.MATCHBASE
    return BASE_GLOB_FLAGS


def match_files(files: Sequence[str], pattern: str) -> list[str]:
    """Return the members of `files` matched by `pattern`, keeping their order."""
    flags = glob_flags(pattern)
    return [file for file in files if glob.globmatch(file, pattern, flags=flags)]


def generate_tasks(
    patterns: Mapping[str, str | list[str]],
    files: Sequence[str],
    cwd: Path | str,
    git_dir: Path | str,
    relative: bool = False,
) -> list[TaskDescriptor]:
    """Build one task per pattern, in mapping order, for the given chunk of files."""
    logger.debug("Generating linter tasks")

    absolute_files = [resolve_path(git_dir, file) for file in files]
    relative_files = [relative_path(cwd, file) for file in absolute_files]

    tasks: list[TaskDescriptor] = []
    for pattern, commands in patterns.items():
        is_parent_dir_pattern = pattern.startswith("../")

        # Only children of cwd are candidates, unless the pattern
        # explicitly points at a parent directory.
        candidates = [
            file
            for file in relative_files
            if is_parent_dir_pattern or (not file.startswith("..") and not os.path.isabs(file))
        ]

        matches = match_files(candidates, pattern)
        file_list = [file if relative else resolve_path(cwd, file) for file in matches]
        task = TaskDescriptor(pattern=pattern, commands=commands, file_list=[normalize_path(f) for f in file_list])
        logger.debug("Generated task: %s", task)
        tasks.append(task)

    return tasks
