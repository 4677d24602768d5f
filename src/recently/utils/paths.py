"""Path normalization helpers."""

from __future__ import annotations

import os
import posixpath
from pathlib import Path


def normalize_path(path: str | Path) -> str:
    """Normalize a path to forward slashes, collapsing redundant separators."""
    text = str(path).replace("\\", "/")
    if not text:
        return text
    return posixpath.normpath(text)


def resolve_path(base: str | Path, path: str | Path) -> str:
    """Resolve `path` against `base` (unless already absolute) and normalize it."""
    return normalize_path(os.path.join(os.path.abspath(base), path))


def relative_path(start: str | Path, path: str | Path) -> str:
    """Return `path` relative to `start` in forward-slash form."""
    try:
        return normalize_path(os.path.relpath(path, start))
    except ValueError:
        # different drives on Windows; no relative form exists
        return normalize_path(path)
