"""Run configured commands against recently changed files."""

from __future__ import annotations

import logging

from recently.config import Config
from recently.context import ErrorTag, RunContext
from recently.errors import GitCommandError, RunAllError
from recently.git.queries import has_commits, resolve_git_repo
from recently.git.recent import recent_files
from recently.messages import FAILED_GET_RECENT_FILES, NO_RECENT_FILES, NO_TASKS, NOT_GIT_REPO
from recently.options import RunOptions
from recently.pipeline.chunk import chunk_files
from recently.pipeline.command import make_cmd_tasks
from recently.pipeline.plan import Group, Node, SkipFn, all_skipped, concurrency_limit, run_plan
from recently.pipeline.tasks import TaskDescriptor, generate_tasks
from recently.ui import get_renderer, make_renderer

logger = logging.getLogger(__name__)


def _no_match_reason(task: TaskDescriptor) -> SkipFn:
    def skip() -> str | None:
        if not task.file_list:
            return f"No recent files match {task.pattern}"
        return None

    return skip


def _no_tasks_reason(children: list[Node]) -> SkipFn:
    def skip() -> str | None:
        if all_skipped(children):
            return "No tasks to run."
        return None

    return skip


async def run_all(options: RunOptions, config: Config) -> RunContext:
    """Resolve recent files, match them to patterns and run the commands.

    Returns the run context when everything passed, or when there was
    nothing to do (no commits, no recent files, no matching pattern).

    Raises:
        RunAllError: Carrying the context, when not in a git repository, when
            the recent files cannot be resolved, or when any command failed.
    """
    logger.debug("Running all linter scripts")
    ctx = RunContext(quiet=options.quiet)
    cwd = options.resolved_cwd()

    repo = resolve_git_repo(cwd)
    if repo is None:
        if not ctx.quiet:
            ctx.append_output(NOT_GIT_REPO)
        ctx.add_error(ErrorTag.GIT_REPO_ERROR)
        raise RunAllError(ctx)
    git_dir = repo.root

    # An unborn branch has no history to look at.
    if not has_commits(git_dir):
        if not ctx.quiet:
            ctx.append_output(NO_RECENT_FILES)
        return ctx

    try:
        files = recent_files(git_dir, config.days)
    except GitCommandError as exc:
        logger.debug("Failed to get recent files: %s", exc)
        if not ctx.quiet:
            ctx.append_output(FAILED_GET_RECENT_FILES)
        ctx.add_error(ErrorTag.GET_RECENT_FILES_ERROR)
        raise RunAllError(ctx) from exc
    logger.debug("Loaded list of recent files in git: %s", files)

    if not files:
        if not ctx.quiet:
            ctx.append_output(NO_RECENT_FILES)
        return ctx

    chunks = chunk_files(
        files,
        base_dir=git_dir,
        relative=options.relative,
        max_arg_length=options.max_arg_length,
    )
    chunk_count = len(chunks)
    if chunk_count > 1:
        logger.debug("Chunked recent files into %d parts", chunk_count)

    renderer_name = get_renderer(options.debug, ctx.quiet)
    limit = concurrency_limit(options.concurrent)

    chunk_groups: list[Group] = []
    for index, chunk in enumerate(chunks):
        tasks = generate_tasks(config.patterns, chunk, cwd, git_dir, relative=options.relative)
        pattern_groups: list[Group] = []
        for task in tasks:
            units = make_cmd_tasks(
                task.commands,
                task.file_list,
                git_dir,
                cwd=cwd,
                renderer=renderer_name,
                relative=options.relative,
                shell=options.shell,
                verbose=options.verbose,
            )
            # Commands for one pattern may depend on each other (lint then
            # format), so they run in order and stop at the first failure.
            pattern_groups.append(
                Group(
                    title=f"Running tasks for {task.pattern}",
                    children=list(units),
                    concurrency=1,
                    exit_on_error=True,
                    skip=_no_match_reason(task),
                )
            )

        chunk_groups.append(
            Group(
                # No need to number chunks when there is only one
                title=f"Running tasks (chunk {index + 1}/{chunk_count})..." if chunk_count > 1 else "Running tasks...",
                children=list(pattern_groups),
                concurrency=limit,
                exit_on_error=False,
                skip=_no_tasks_reason(pattern_groups),
            )
        )

    if all_skipped(chunk_groups):
        if not ctx.quiet:
            ctx.append_output(NO_TASKS)
        return ctx

    root = Group(title="", children=list(chunk_groups), concurrency=limit, exit_on_error=False)
    await run_plan(root, ctx, make_renderer(renderer_name))

    if ctx.failed:
        raise RunAllError(ctx)
    return ctx
