"""Resolve files changed within a window of recent git history."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path

from recently.git.exec import run_git
from recently.git.queries import GIT_DATE_FORMAT, latest_commit_date, latest_commit_hash

logger = logging.getLogger(__name__)

DEFAULT_DAYS = 3

# git reads `--before` dates earlier than the Unix epoch as "now"; a day of
# slack covers commit time zones.
EARLIEST_WINDOW_START = datetime(1970, 1, 2)


def window_start(commit_date: str, days: int) -> str | None:
    """Start of the window ending at `commit_date`, or None when it predates the epoch."""
    latest = datetime.strptime(commit_date, GIT_DATE_FORMAT)
    try:
        start = latest - timedelta(days=days)
    except OverflowError:
        return None
    if start < EARLIEST_WINDOW_START:
        return None
    return start.strftime(GIT_DATE_FORMAT)


def root_commit_hash(cwd: Path | str) -> str:
    """Return the root commit of HEAD, the first one when there are several."""
    roots = run_git(["rev-list", "--max-parents=0", "HEAD"], cwd=cwd).split()
    return roots[0] if roots else ""


def commit_hash_before(cwd: Path | str, date_before: str | None) -> str:
    """Return the newest commit strictly older than `date_before`, else the root commit."""
    if date_before is not None:
        found = run_git(
            ["log", "-1", "--date-order", f"--before={date_before}", "--pretty=format:%H"],
            cwd=cwd,
        ).strip()
        if found:
            return found

    # The whole history is younger than the window: diff from the root commit.
    root = root_commit_hash(cwd)
    logger.debug("No commit before %s, falling back to root commit %s", date_before, root)
    return root


def parse_nul_list(output: str) -> list[str]:
    """Split `-z` output into entries, dropping the trailing empty token."""
    if not output:
        return []
    if output.endswith("\0"):
        output = output[:-1]
    return output.split("\0")


def recent_files(cwd: Path | str, days: int = DEFAULT_DAYS) -> list[str]:
    """Return repo-relative paths added, copied, modified or renamed in the last `days` days.

    The window is measured back from the newest commit on HEAD, not from now.
    An empty history yields an empty list.
    """
    logger.debug("Resolving recent files in %s for %d day(s)", cwd, days)
    date_latest = latest_commit_date(cwd)
    if not date_latest:
        return []

    date_before = window_start(date_latest, days)
    hash_latest = latest_commit_hash(cwd)
    hash_before = commit_hash_before(cwd, date_before)
    logger.debug("Diffing %s..%s (latest commit at %s, window start %s)", hash_before, hash_latest, date_latest, date_before)

    # Deleted files are excluded since there is nothing left to run commands on.
    output = run_git(
        ["--no-pager", "diff", "--diff-filter=ACMR", "--name-only", "-z", hash_before, hash_latest],
        cwd=cwd,
    )
    return parse_nul_list(output)
