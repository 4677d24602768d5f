"""Commit and repository queries built on `run_git`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from recently.errors import GitCommandError
from recently.git.exec import run_git
from recently.utils.paths import normalize_path

logger = logging.getLogger(__name__)

# Round-trips through `git log --before`, see recent.py
GIT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class GitRepo:
    """Resolved repository locations."""

    root: Path
    config_dir: Path


def latest_commit_date(cwd: Path | str, path: str = "HEAD") -> str:
    """Return the committer date of the newest commit on `path`, or '' if there is none."""
    try:
        return run_git(
            ["log", "-1", f"--date=format:{GIT_DATE_FORMAT}", "--pretty=format:%cd", path],
            cwd=cwd,
        ).strip()
    except GitCommandError as exc:
        logger.debug("No commit date for %s: %s", path, exc)
        return ""


def latest_commit_hash(cwd: Path | str, path: str = "HEAD") -> str:
    """Return the hash of the newest commit on `path`, or '' if there is none."""
    try:
        return run_git(["log", "-1", "--pretty=format:%H", path], cwd=cwd).strip()
    except GitCommandError as exc:
        logger.debug("No commit hash for %s: %s", path, exc)
        return ""


def root_dir(cwd: Path | str) -> Path:
    """Return the absolute top-level directory of the repository containing `cwd`."""
    out = run_git(["rev-parse", "--show-toplevel"], cwd=cwd).strip()
    if not out:
        raise GitCommandError(["rev-parse", "--show-toplevel"], "empty output")
    return Path(normalize_path(out)).resolve()


def has_commits(cwd: Path | str) -> bool:
    """Return True when HEAD points at at least one commit."""
    try:
        run_git(["log", "-1"], cwd=cwd)
    except GitCommandError:
        return False
    return True


def resolve_git_config_dir(root: Path) -> Path:
    """Resolve the `.git` directory, following `gitdir:` files used by worktrees and submodules."""
    default_dir = root / ".git"
    if default_dir.is_dir():
        return default_dir
    content = default_dir.read_text(encoding="utf-8").strip()
    if content.startswith("gitdir: "):
        content = content[len("gitdir: "):]
    return (root / content.strip()).resolve()


def resolve_git_repo(cwd: Path | str | None = None) -> GitRepo | None:
    """Resolve the repository root and git config dir, or None outside a repository."""
    probe = Path(cwd) if cwd is not None else Path.cwd()
    logger.debug("Resolving git repo from `%s`", probe)
    try:
        root = root_dir(probe)
        config_dir = resolve_git_config_dir(root)
    except (GitCommandError, OSError) as exc:
        logger.debug("Failed to resolve git repo: %s", exc)
        return None

    logger.debug("Resolved git directory to be `%s`", root)
    logger.debug("Resolved git config directory to be `%s`", config_dir)
    return GitRepo(root=root, config_dir=config_dir)
