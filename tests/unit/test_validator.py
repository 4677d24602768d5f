"""Tests for option validation and brace repair."""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

import pytest

from recently.errors import InvalidOptionsError
from recently.validator import (
    has_unbalanced_brackets,
    validate_and_fix_braces,
    validate_concurrent,
    validate_shell,
    warn_unbalanced_brackets,
    without_incorrect_braces,
)


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("*.{js,ts}", "*.{js,ts}"),
        ("file_{1..10}.css", "file_{1..10}.css"),
        ("*.{js}", "*.js"),
        ("{src}/**/*.{js}", "src/**/*.js"),
        ("*.{js,{ts}}", "*.{js,ts}"),
        (r"*.\{js\}", r"*.\{js\}"),
        ("*.${js}", "*.${js}"),
        (r"*.{js\,ts}", r"*.js\,ts"),
        ("*.js", "*.js"),
    ],
)
def test_without_incorrect_braces(pattern: str, expected: str) -> None:
    assert without_incorrect_braces(pattern) == expected


def test_fix_braces_warns_only_when_changed(logger) -> None:
    assert validate_and_fix_braces("*.{js,ts}", logger) == "*.{js,ts}"
    assert logger.warnings == []

    assert validate_and_fix_braces("*.{js}", logger) == "*.js"
    assert len(logger.warnings) == 1
    assert "Reformatted as: `*.js`" in logger.warnings[0]


def test_validate_shell_accepts_booleans(logger) -> None:
    validate_shell(True, logger)
    validate_shell(False, logger)
    assert logger.errors == []


def test_validate_shell_missing_file(tmp_path: Path, logger) -> None:
    missing = str(tmp_path / "nope")
    with pytest.raises(InvalidOptionsError, match="No such file"):
        validate_shell(missing, logger)
    assert "Invalid value for option" in logger.errors[0]


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
def test_validate_shell_requires_executable(tmp_path: Path, logger) -> None:
    script = tmp_path / "sh"
    script.write_text("#!/bin/sh\n", encoding="utf-8")
    script.chmod(stat.S_IRUSR | stat.S_IWUSR)
    if os.access(script, os.X_OK):
        pytest.skip("running with privileges that ignore file modes")
    with pytest.raises(InvalidOptionsError, match="not executable"):
        validate_shell(str(script), logger)

    script.chmod(stat.S_IRWXU)
    validate_shell(str(script), logger)


@pytest.mark.parametrize("value", [True, False, 1, 8])
def test_validate_concurrent_accepts(value, logger) -> None:
    validate_concurrent(value, logger)
    assert logger.errors == []


@pytest.mark.parametrize("value", [0, -1, 1.5, "2"])
def test_validate_concurrent_rejects(value, logger) -> None:
    with pytest.raises(InvalidOptionsError):
        validate_concurrent(value, logger)
    assert len(logger.errors) == 1


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("*.[jt]s", False),
        ("[]ab].js", False),
        ("[!]].js", False),
        (r"\[draft\].md", False),
        ("*.js", False),
        ("*.[jt", True),
        ("a].js", True),
        ("[!].js", True),
    ],
)
def test_has_unbalanced_brackets(pattern: str, expected: bool) -> None:
    assert has_unbalanced_brackets(pattern) is expected


def test_warn_unbalanced_brackets(logger) -> None:
    warn_unbalanced_brackets("*.[jt]s", logger)
    assert logger.warnings == []

    warn_unbalanced_brackets("src/[a.js", logger)
    assert len(logger.warnings) == 1
    assert "unbalanced brackets" in logger.warnings[0]
