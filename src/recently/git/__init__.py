"""Read-only git plumbing used to resolve recently changed files."""

from recently.git.exec import run_git, sanitize_environment
from recently.git.queries import GitRepo, has_commits, latest_commit_date, latest_commit_hash, resolve_git_repo, root_dir
from recently.git.recent import recent_files

__all__ = [
    "GitRepo",
    "has_commits",
    "latest_commit_date",
    "latest_commit_hash",
    "recent_files",
    "resolve_git_repo",
    "root_dir",
    "run_git",
    "sanitize_environment",
]
