"""Task graph and execution."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import replace
from functools import partial
from typing import Any

from tasker.core.adapter import adapt_work
from tasker.core.dag.task import TaskNode
from tasker.core.errors import (
    CycleError,
    ExecutionInProgressError,
    TaskExistsError,
    TaskNotFoundError,
)
from tasker.core.run_logging import (
    generate_run_id,
    log_complete,
    log_error,
    log_info,
    log_start,
)
from tasker.core.types import RunnerOptions, TaskWork
from tasker.core.validation import normalize_dependencies, require_dependencies, require_name

logger = logging.getLogger(__name__)


class TaskRunner:
    """A named task tree with dependency-ordered async execution.

    Build the tree first, then run a task by name. The task and all of its
    transitive dependencies are executed asynchronously, each at most once
    per run, and a task's work only starts after all of its dependencies
    completed. Tasks receive the results of their direct dependencies.

    The tree cannot be modified while a run is in progress, and only one
    run may be in progress at a time.

    Supported task work:
    - Synchronous functions
    - Coroutine functions, or functions returning an awaitable
    - Functions taking a ``done(error, result)`` callback

    Example:
        >>> runner = TaskRunner()
        >>>
        >>> runner.add_task("compile", work=lambda: "c")
        >>> runner.add_task(
        ...     "bundle",
        ...     ["compile"],
        ...     lambda results: f"bundled {results['compile']}",
        ... )
        >>>
        >>> await runner.run("bundle")
        'bundled c'
    """

    def __init__(self, options: RunnerOptions | None = None, **overrides: Any) -> None:
        """Create a runner.

        Args:
            options: Runner options. Defaults to RunnerOptions().
            **overrides: Individual RunnerOptions fields, applied on top
                of options (e.g. ``throw_on_overwrite=False``).
        """
        options = options or RunnerOptions()
        if overrides:
            options = replace(options, **overrides)
        self.options = options
        self._tasks: dict[str, TaskNode] = {}
        self._in_progress = False

    @property
    def in_progress(self) -> bool:
        """Whether a run is currently executing."""
        return self._in_progress

    # ------------------------------------------------------------------
    # Tree mutation
    # ------------------------------------------------------------------

    def add_task(
        self,
        name: str,
        dependencies: str | Iterable[str] | TaskWork | None = None,
        work: TaskWork | None = None,
    ) -> TaskRunner:
        """Add a task to the tree.

        Dependencies do not have to exist yet; they are looked up when a
        run reaches them. ``add_task(name, work)`` is accepted as a short
        form for tasks without dependencies.

        Args:
            name: Unique task name.
            dependencies: None, a single task name, or an iterable of names.
            work: The task's work. None adds a no-op task.

        Returns:
            Self for chaining.

        Raises:
            ValueError: If name is missing or work is not callable.
            ExecutionInProgressError: If a run is in progress.
            TaskExistsError: If the task exists and throw_on_overwrite is set.
        """
        require_name(name)
        self._raise_if_in_progress()

        if self.options.throw_on_overwrite and name in self._tasks:
            raise TaskExistsError(name)

        if callable(dependencies) and work is None:
            dependencies, work = None, dependencies

        self._tasks[name] = TaskNode(
            name=name,
            work=adapt_work(work),
            dependencies=normalize_dependencies(dependencies),  # type: ignore[arg-type]
        )
        logger.debug("[%s] task_added: depends_on=%s", name, self._tasks[name].dependencies)
        return self

    def remove_task(self, name: str) -> TaskRunner:
        """Remove a task from the tree.

        Tasks depending on it keep their dependency link, so a later run
        reaching that link fails with TaskNotFoundError. Does nothing if the
        task does not exist.

        Raises:
            ValueError: If name is missing.
            ExecutionInProgressError: If a run is in progress.
        """
        require_name(name)
        self._raise_if_in_progress()
        if self._tasks.pop(name, None) is not None:
            logger.debug("[%s] task_removed", name)
        return self

    def add_dependencies(self, name: str, dependencies: str | Iterable[str]) -> TaskRunner:
        """Add one or more dependencies to an existing task.

        The parent task must exist; the dependencies do not have to exist
        until a run needs them. Links already in place are left alone.

        Raises:
            ValueError: If name or dependencies are missing.
            ExecutionInProgressError: If a run is in progress.
            TaskNotFoundError: If the parent task does not exist.
        """
        require_name(name)
        added = require_dependencies(dependencies)
        self._raise_if_in_progress()

        task = self._tasks.get(name)
        if task is None:
            raise TaskNotFoundError(name, f"Can't add dependency for missing task '{name}'")

        for dependency in added:
            if dependency not in task.dependencies:
                task.dependencies.append(dependency)
        return self

    def remove_dependencies(self, name: str, dependencies: str | Iterable[str]) -> TaskRunner:
        """Remove one or more dependency links from a task.

        Only the links are removed, never the dependency tasks. Does nothing
        if the task or a link does not exist.

        Raises:
            ValueError: If name or dependencies are missing.
            ExecutionInProgressError: If a run is in progress.
        """
        require_name(name)
        removed = require_dependencies(dependencies)
        self._raise_if_in_progress()

        task = self._tasks.get(name)
        if task is not None:
            task.dependencies = [d for d in task.dependencies if d not in removed]
        return self

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def list_tasks(self) -> dict[str, list[str]]:
        """Map every task name to its dependency names.

        Allowed at any time, including while a run is in progress.
        """
        return {name: list(task.dependencies) for name, task in self._tasks.items()}

    def get_task(self, name: str) -> TaskNode | None:
        """Get a task by name, or None if not found."""
        return self._tasks.get(name)

    def execution_order(self, name: str) -> list[str]:
        """Order in which a run of ``name`` could complete its tasks.

        Walks the same paths as run() without executing anything, so it
        fails on the same missing task or cycle.

        Returns:
            ``name`` and its transitive dependencies, dependencies first.

        Raises:
            ValueError: If name is missing.
            TaskNotFoundError: If a reachable task does not exist.
            CycleError: If a cycle is reachable from name.
        """
        require_name(name)
        order: list[str] = []
        placed: set[str] = set()
        path: set[str] = set()

        def enter(current: str) -> tuple[str, Iterator[str]]:
            if current not in self._tasks:
                raise TaskNotFoundError(current)
            if current in path:
                raise CycleError(current)
            path.add(current)
            return current, iter(self._tasks[current].dependencies)

        stack = [enter(name)]
        while stack:
            current, remaining = stack[-1]
            dependency = next(remaining, None)
            if dependency is None:
                stack.pop()
                path.discard(current)
                placed.add(current)
                order.append(current)
            elif dependency not in placed:
                stack.append(enter(dependency))
        return order

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)

    def __repr__(self) -> str:
        return f"TaskRunner({list(self._tasks)})"

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def run(self, name: str) -> Any:
        """Run a task and every task it depends on.

        Returns or raises as soon as the task itself settles. Siblings of a
        failed dependency are left running; their outcomes are discarded.

        Args:
            name: The task to run.

        Returns:
            The task's own result.

        Raises:
            ValueError: If name is missing.
            ExecutionInProgressError: If a run is already in progress.
            TaskNotFoundError: If the task or a dependency does not exist.
            CycleError: If a dependency cycle is reachable from the task.
            Exception: Whatever a task's work raised, unmodified.
        """
        require_name(name)
        self._raise_if_in_progress()
        self._in_progress = True

        run_id = generate_run_id()
        start_mono = time.monotonic()
        log_start(logger, name, "run_start", run_id=run_id)

        try:
            results = await self._resolve(name)
        except Exception as e:
            log_error(logger, name, "run_failed", e, run_id=run_id)
            raise
        finally:
            self._reset()

        log_complete(logger, name, "run_complete", time.monotonic() - start_mono, run_id=run_id)
        return results[name]

    def _resolve(self, name: str) -> asyncio.Future[dict[str, Any]]:
        """Start (or join) execution of a task within the current run.

        The whole reachable tree is walked depth-first here, with an
        explicit stack and before any work runs, so every task is either
        reused via in_flight or found on the visiting path. A task's future
        is created once each of its dependencies has one.

        Returns:
            Future resolving to ``{name: result}``.
        """
        found = self._lookup(name)
        if not isinstance(found, TaskNode):
            return found

        stack = [self._enter(found)]
        while True:
            task, remaining, pending = stack[-1]
            dependency = next(remaining, None)
            if dependency is not None:
                found = self._lookup(dependency)
                if isinstance(found, TaskNode):
                    stack.append(self._enter(found))
                else:
                    pending.append(found)
                continue

            stack.pop()
            future = self._schedule(task, pending)
            if not stack:
                return future
            stack[-1][2].append(future)

    def _lookup(self, name: str) -> asyncio.Future[dict[str, Any]] | TaskNode:
        """Future to wait on for name, or the task if it still has to start."""
        task = self._tasks.get(name)
        if task is None:
            return self._failed(TaskNotFoundError(name))
        if task.visiting:
            return self._failed(CycleError(name))
        if task.in_flight is not None:
            return task.in_flight
        return task

    def _enter(
        self, task: TaskNode
    ) -> tuple[TaskNode, Iterator[str], list[asyncio.Future[dict[str, Any]]]]:
        log_start(logger, task.name, "task_start", depends_on=task.dependencies)
        self._notify(self.options.on_task_start, task.name, list(task.dependencies))
        task.visiting = True
        return task, iter(task.dependencies), []

    def _schedule(
        self,
        task: TaskNode,
        pending: list[asyncio.Future[dict[str, Any]]],
    ) -> asyncio.Future[dict[str, Any]]:
        task.visiting = False
        future = asyncio.ensure_future(self._execute(task, pending))
        task.in_flight = future
        future.add_done_callback(partial(self._settled, task))
        future.add_done_callback(_retrieve)
        return future

    async def _execute(
        self,
        task: TaskNode,
        pending: list[asyncio.Future[dict[str, Any]]],
    ) -> dict[str, Any]:
        results: dict[str, Any] = {}
        if pending:
            try:
                settled = await asyncio.gather(*pending)
            except Exception as e:
                log_info(logger, task.name, "task_cancelled", reason=e)
                self._notify(self.options.on_task_cancel, task.name)
                raise
            for mapping in settled:
                results.update(mapping)

        start_mono = time.monotonic()
        try:
            result = await task.work(results)
        except Exception as e:
            log_error(
                logger,
                task.name,
                "task_failed",
                e,
                duration_s=f"{time.monotonic() - start_mono:.1f}",
            )
            self._notify(self.options.on_task_fail, task.name)
            raise

        log_complete(logger, task.name, "task_complete", time.monotonic() - start_mono)
        self._notify(self.options.on_task_end, task.name)
        return {task.name: result}

    def _settled(self, task: TaskNode, future: asyncio.Future[dict[str, Any]]) -> None:
        # A later run may already own the task
        if task.in_flight is future:
            task.in_flight = None

    def _failed(self, error: Exception) -> asyncio.Future[dict[str, Any]]:
        future: asyncio.Future[dict[str, Any]] = asyncio.get_running_loop().create_future()
        future.set_exception(error)
        future.add_done_callback(_retrieve)
        return future

    def _reset(self) -> None:
        for task in self._tasks.values():
            task.reset()
        self._in_progress = False

    def _notify(self, observer: Callable[..., None] | None, *args: Any) -> None:
        if observer is None:
            return
        try:
            observer(*args)
        except Exception:
            # Observers never change what a run returns or raises
            logger.exception("Task observer %r failed for %s", observer, args[0])

    def _raise_if_in_progress(self) -> None:
        if self._in_progress:
            raise ExecutionInProgressError()


def _retrieve(future: asyncio.Future[Any]) -> None:
    # Outcomes settling after run() returned have no other reader
    if not future.cancelled():
        future.exception()
