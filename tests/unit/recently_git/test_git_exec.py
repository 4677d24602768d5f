"""Tests for the git command runner."""

from __future__ import annotations

from pathlib import Path

import pytest

from recently.errors import GitCommandError
from recently.git.exec import GIT_GLOBAL_OPTIONS, run_git, sanitize_environment, strip_final_newline


def test_run_git_returns_stdout_without_final_newline(git_repo: Path) -> None:
    out = run_git(["rev-parse", "--show-toplevel"], cwd=git_repo)
    assert not out.endswith("\n")
    assert Path(out).resolve() == git_repo.resolve()


def test_run_git_raises_with_combined_output(git_repo: Path) -> None:
    with pytest.raises(GitCommandError) as excinfo:
        run_git(["rev-parse", "--verify", "no-such-ref"], cwd=git_repo)
    assert excinfo.value.returncode != 0
    assert excinfo.value.git_args == ("rev-parse", "--verify", "no-such-ref")
    assert excinfo.value.output


def test_run_git_outside_repository_fails(tmp_path: Path) -> None:
    with pytest.raises(GitCommandError):
        run_git(["rev-parse", "--show-toplevel"], cwd=tmp_path)


def test_run_git_prepends_submodule_option(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    seen: list[list[str]] = []

    class _Completed:
        returncode = 0
        stdout = "ok\n"
        stderr = ""

    def _fake_run(argv, **kwargs):
        seen.append(argv)
        return _Completed()

    monkeypatch.setattr("recently.git.exec.subprocess.run", _fake_run)
    assert run_git(["status"], cwd=tmp_path) == "ok"
    assert seen == [["git", *GIT_GLOBAL_OPTIONS, "status"]]
    assert GIT_GLOBAL_OPTIONS == ["-c", "submodule.recurse=false"]


def test_sanitize_environment_strips_git_location(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GIT_DIR", "/elsewhere/.git")
    monkeypatch.setenv("GIT_WORK_TREE", "/elsewhere")
    monkeypatch.setenv("GIT_LITERAL_PATHSPECS", "1")
    env = sanitize_environment({"EXTRA": "1"})
    assert "GIT_DIR" not in env
    assert "GIT_WORK_TREE" not in env
    assert "GIT_LITERAL_PATHSPECS" not in env
    assert env["EXTRA"] == "1"


def test_run_git_ignores_ambient_git_dir(monkeypatch: pytest.MonkeyPatch, git_repo: Path, tmp_path: Path) -> None:
    monkeypatch.setenv("GIT_DIR", str(tmp_path / "not-a-repo"))
    out = run_git(["rev-parse", "--show-toplevel"], cwd=git_repo)
    assert Path(out).resolve() == git_repo.resolve()


def test_strip_final_newline() -> None:
    assert strip_final_newline("a\n") == "a"
    assert strip_final_newline("a\r\n") == "a"
    assert strip_final_newline("a\n\n") == "a\n"
    assert strip_final_newline("a\0") == "a\0"
