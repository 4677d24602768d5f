"""Execution plans: a tree of groups and units, each group with its own policy."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from recently.errors import TaskError
from recently.messages import TASK_ERROR
from recently.context import RunContext
from recently.ui import Renderer

logger = logging.getLogger(__name__)

SkipFn = Callable[[], str | None]


@dataclass
class Unit:
    """A leaf of the plan: one command to run."""

    title: str
    run: Callable[[RunContext], Awaitable[None]]
    skip: SkipFn | None = None


@dataclass
class Group:
    """Children run under a concurrency limit.

    `concurrency` of None means unlimited and 1 means serial. With
    `exit_on_error` the first failing child stops children that have not
    started yet and the group itself fails; otherwise failures stay
    isolated to the child that raised them.
    """

    title: str
    children: list[Node] = field(default_factory=list)
    concurrency: int | None = None
    exit_on_error: bool = False
    skip: SkipFn | None = None


Node = Unit | Group


def concurrency_limit(concurrent: bool | int) -> int | None:
    """Translate the `concurrent` option into a group limit."""
    if concurrent is True:
        return None
    if concurrent is False:
        return 1
    if concurrent < 1:
        raise ValueError(f"concurrent must be a boolean or a positive integer, got {concurrent}")
    return concurrent


def skip_reason(node: Node) -> str | None:
    return node.skip() if node.skip is not None else None


def all_skipped(nodes: list[Node]) -> bool:
    return all(skip_reason(node) for node in nodes)


class PlanRunner:
    """Runs a plan tree against one run context, reporting progress to a renderer."""

    def __init__(self, ctx: RunContext, renderer: Renderer) -> None:
        self.ctx = ctx
        self.renderer = renderer

    async def run(self, node: Node, depth: int = 0) -> None:
        """Run `node`; raises TaskError when it fails in a way its parent must see."""
        reason = skip_reason(node)
        if reason:
            self.renderer.skipped(node.title, depth, reason)
            return

        self.renderer.started(node.title, depth)
        if isinstance(node, Unit):
            try:
                await node.run(self.ctx)
            except TaskError as exc:
                self.renderer.failed(node.title, depth, exc)
                raise
            self.renderer.succeeded(node.title, depth)
            return

        failures = await self.run_children(node, depth + 1)
        if not failures:
            self.renderer.succeeded(node.title, depth)
            return
        self.renderer.failed(node.title, depth, failures[0])
        if node.exit_on_error:
            raise failures[0]

    async def run_children(self, group: Group, depth: int) -> list[TaskError]:
        failures: list[TaskError] = []

        async def run_child(child: Node) -> None:
            if failures and group.exit_on_error:
                self.renderer.skipped(child.title, depth, TASK_ERROR)
                return
            try:
                await self.run(child, depth)
            except TaskError as exc:
                logger.debug("Task `%s` failed: %s", child.title, exc)
                failures.append(exc)

        limit = group.concurrency
        if limit == 1:
            for child in group.children:
                await run_child(child)
            return failures

        semaphore = asyncio.Semaphore(limit) if limit else None

        async def bounded(child: Node) -> None:
            if semaphore is None:
                await run_child(child)
                return
            async with semaphore:
                await run_child(child)

        await asyncio.gather(*(bounded(child) for child in group.children))
        return failures


async def run_plan(root: Group, ctx: RunContext, renderer: Renderer) -> None:
    """Run the children of `root` under its policy without rendering `root` itself.

    Failures below an isolating group do not propagate.
    """
    runner = PlanRunner(ctx, renderer)
    failures = await runner.run_children(root, 0)
    if failures:
        # The context already holds the failures; the caller inspects it.
        logger.debug("Plan finished with %d failed group(s)", len(failures))
