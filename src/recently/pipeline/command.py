"""Turn configured command strings into runnable task functions."""

from __future__ import annotations

import asyncio
import errno
import logging
import re
import shlex
import signal
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from recently.errors import TaskError
from recently.git.exec import sanitize_environment, strip_final_newline
from recently.messages import task_failed_without_output, task_output_title
from recently.context import ErrorTag, RunContext
from recently.pipeline.plan import Unit
from recently.ui import truncate_title

logger = logging.getLogger(__name__)

TaskFn = Callable[[RunContext], Awaitable[None]]

GIT_BINARY_RE = re.compile(r"git(\.exe)?", re.IGNORECASE)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one spawned command."""

    command: str
    returncode: int | None
    stdout: str
    stderr: str
    spawn_error: str | None = None

    @property
    def signal(self) -> str | None:
        if self.returncode is None or self.returncode >= 0:
            return None
        try:
            return signal.Signals(-self.returncode).name
        except ValueError:
            return f"SIG{-self.returncode}"

    @property
    def failed(self) -> bool:
        return self.spawn_error is not None or self.returncode != 0


def get_tag(result: CommandResult) -> str:
    """Short label for a failure: signal name, spawn errno, exit code or FAILED."""
    if result.signal:
        return result.signal
    if result.spawn_error:
        return result.spawn_error
    if result.returncode:
        return str(result.returncode)
    return "FAILED"


def handle_output(command: str, result: CommandResult, ctx: RunContext, is_error: bool = False) -> None:
    has_output = bool(result.stderr) or bool(result.stdout)
    if has_output:
        lines: list[str] = [] if ctx.quiet else ["", task_output_title(command, is_error)]
        if result.stderr:
            lines.append(escape(result.stderr))
        if result.stdout:
            lines.append(escape(result.stdout))
        ctx.append_output("\n".join(lines))
    elif is_error and not ctx.quiet:
        # No output to show, so say at least how it failed.
        ctx.append_output(task_failed_without_output(command, get_tag(result)))


def make_error(command: str, result: CommandResult, ctx: RunContext) -> TaskError:
    ctx.add_error(ErrorTag.TASK_ERROR)
    handle_output(command, result, ctx, is_error=True)
    return TaskError(command, get_tag(result))


def resolve_workdir(cmd: str, git_dir: Path | str, cwd: Path | str, relative: bool) -> Path:
    """Pick the working directory for a command.

    Only the git binary runs from the repository root, so that tools such as
    npm or make keep the caller's directory.
    """
    if relative:
        return Path(cwd)
    if GIT_BINARY_RE.fullmatch(cmd) and Path(git_dir).resolve() != Path(cwd).resolve():
        return Path(git_dir)
    return Path(cwd)


async def spawn(
    command: str,
    argv: Sequence[str] | None,
    *,
    cwd: Path,
    shell: bool | str,
) -> CommandResult:
    """Run `argv` directly, or `command` through a shell when `argv` is None."""
    env = sanitize_environment()
    try:
        if argv is None:
            process = await asyncio.create_subprocess_shell(
                command,
                cwd=cwd,
                env=env,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                executable=shell if isinstance(shell, str) else None,
            )
        else:
            process = await asyncio.create_subprocess_exec(
                *argv,
                cwd=cwd,
                env=env,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
    except OSError as exc:
        code = errno.errorcode.get(exc.errno, "FAILED") if exc.errno else "FAILED"
        return CommandResult(command=command, returncode=None, stdout="", stderr=str(exc), spawn_error=code)

    stdout_bytes, stderr_bytes = await process.communicate()
    return CommandResult(
        command=command,
        returncode=process.returncode,
        stdout=strip_final_newline(stdout_bytes.decode("utf-8", errors="replace")),
        stderr=strip_final_newline(stderr_bytes.decode("utf-8", errors="replace")),
    )


def split_command(command: str) -> list[str]:
    """Split `command` like a POSIX shell, or on whitespace when its quoting is unbalanced."""
    try:
        return shlex.split(command)
    except ValueError as exc:
        logger.debug("Could not tokenize `%s` (%s), splitting on whitespace", command, exc)
        return command.split()


def resolve_task_fn(
    command: str,
    files: Sequence[str],
    git_dir: Path | str,
    *,
    cwd: Path | str,
    relative: bool = False,
    shell: bool | str = False,
    verbose: bool = False,
) -> TaskFn:
    """Return a coroutine function running `command` against `files`.

    Without `shell` the command is split like a POSIX shell would and the
    files are passed as separate arguments, so nothing is interpolated.
    With `shell` the raw command string goes to the shell with the files
    joined onto it; the tokens only pick the working directory.

    The returned function records failures on the context and raises
    `TaskError`; with `verbose` it also records output of successful runs.
    """
    cmd, *args = split_command(command) or [command]
    logger.debug("cmd: %s", cmd)
    logger.debug("args: %s", args)

    workdir = resolve_workdir(cmd, git_dir, cwd, relative)
    logger.debug("workdir: %s", workdir)

    async def task(ctx: RunContext) -> None:
        if shell:
            result = await spawn(f"{command} {' '.join(files)}", None, cwd=workdir, shell=shell)
        else:
            result = await spawn(command, [cmd, *args, *files], cwd=workdir, shell=False)

        if result.failed:
            raise make_error(command, result, ctx)

        if verbose:
            handle_output(command, result, ctx)

    return task


def make_cmd_tasks(
    commands: str | Sequence[str],
    files: Sequence[str],
    git_dir: Path | str,
    *,
    cwd: Path | str,
    renderer: str,
    relative: bool = False,
    shell: bool | str = False,
    verbose: bool = False,
) -> list[Unit]:
    """Create one plan unit per command, titled with the command itself."""
    logger.debug("Creating tasks for commands %s", commands)
    command_list = [commands] if isinstance(commands, str) else list(commands)
    units: list[Unit] = []
    for command in command_list:
        run = resolve_task_fn(
            command,
            files,
            git_dir,
            cwd=cwd,
            relative=relative,
            shell=shell,
            verbose=verbose,
        )
        units.append(Unit(title=truncate_title(command, renderer), run=run))
    return units
