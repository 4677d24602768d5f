"""Pytest configuration and fixtures for recently tests."""
from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pytest


class RecordingLogger:
    """Logger double that keeps every message."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.logs: list[str] = []
        self.warnings: list[str] = []

    def error(self, message: str) -> None:
        self.errors.append(message)

    def log(self, message: str) -> None:
        self.logs.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)


def git(cwd: Path, *args: str, date: str | None = None) -> str:
    env = dict(os.environ)
    for key in ("GIT_DIR", "GIT_WORK_TREE", "GIT_LITERAL_PATHSPECS"):
        env.pop(key, None)
    if date is not None:
        env["GIT_AUTHOR_DATE"] = date
        env["GIT_COMMITTER_DATE"] = date
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
        env=env,
    )
    return result.stdout.strip()


def commit_files(repo: Path, files: dict[str, str], date: str, message: str = "change") -> str:
    """Write `files` (path -> content) and commit them at `date`; returns the commit hash."""
    for name, content in files.items():
        path = repo / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        git(repo, "add", "--", name)
    git(repo, "commit", "-m", message, date=date)
    return git(repo, "rev-parse", "HEAD")


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def empty_repo(tmp_path: Path) -> Path:
    """Create a git repository without any commits."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init")
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "user.name", "Test User")
    return repo


@pytest.fixture
def git_repo(empty_repo: Path) -> Path:
    """Repository with an old commit and a commit ten days later touching `a.js`."""
    commit_files(empty_repo, {"README.md": "# test\n"}, "2024-01-01T12:00:00", "initial")
    commit_files(empty_repo, {"a.js": "console.log(1)\n"}, "2024-01-11T12:00:00", "add a.js")
    return empty_repo
