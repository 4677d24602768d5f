"""Tests for the command-line interface."""

from __future__ import annotations

import json
import shlex
import sys
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from recently import __version__
from recently.cli import cli, parse_concurrent

runner = CliRunner()

ECHO = f"{shlex.quote(sys.executable)} -c {shlex.quote('import sys; print(*sys.argv[1:])')}"
FAIL = f"{shlex.quote(sys.executable)} -c {shlex.quote('import sys; sys.exit(1)')}"


def _write_config(repo: Path, command: str) -> None:
    (repo / ".recentlyrc.json").write_text(json.dumps({"patterns": {"*.js": command}}), encoding="utf-8")


@pytest.mark.parametrize(("value", "expected"), [("true", True), ("FALSE", False), ("4", 4)])
def test_parse_concurrent(value: str, expected) -> None:
    assert parse_concurrent(value) == expected


@pytest.mark.parametrize("value", ["0", "-2", "many"])
def test_parse_concurrent_rejects(value: str) -> None:
    with pytest.raises(typer.BadParameter):
        parse_concurrent(value)


def test_version() -> None:
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_passing_run_exits_zero(git_repo: Path) -> None:
    _write_config(git_repo, ECHO)
    result = runner.invoke(cli, ["--cwd", str(git_repo), "--quiet"])
    assert result.exit_code == 0


def test_failing_run_exits_one(git_repo: Path) -> None:
    _write_config(git_repo, FAIL)
    result = runner.invoke(cli, ["--cwd", str(git_repo), "--quiet"])
    assert result.exit_code == 1


def test_missing_config_exits_one(tmp_path: Path) -> None:
    result = runner.invoke(cli, ["--cwd", str(tmp_path), "--config", str(tmp_path / "nope.json")])
    assert result.exit_code == 1


def test_bad_concurrent_is_a_usage_error(git_repo: Path) -> None:
    _write_config(git_repo, ECHO)
    result = runner.invoke(cli, ["--cwd", str(git_repo), "--concurrent", "0"])
    assert result.exit_code == 2
