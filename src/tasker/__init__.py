"""Tasker - dependency-ordered async task execution.

Register named tasks, declare which tasks they depend on, then run one by
name. The task and its whole dependency tree run asynchronously, each task
once, dependencies first.

Layers:
    core/       Task runner, work adapter, errors, logging helpers
    frontends/  The ``tasker`` command line

Quick Start:
    >>> import asyncio
    >>> from tasker import TaskRunner
    >>>
    >>> runner = TaskRunner()
    >>> runner.add_task("compile", work=lambda: "c")
    >>> runner.add_task("bundle", "compile", lambda results: results["compile"] + "b")
    >>> asyncio.run(runner.run("bundle"))
    'cb'

Callback-style work:
    >>> def deploy(results, done):
    ...     upload(results["bundle"], on_complete=lambda err: done(err, "deployed"))
    >>> runner.add_task("deploy", ["bundle"], deploy)
"""

from tasker.__version__ import __version__
from tasker.core import (
    AdaptedWork,
    CycleError,
    ExecutionInProgressError,
    RunnerOptions,
    TaskerError,
    TaskExistsError,
    TaskNode,
    TaskNotFoundError,
    TaskRunner,
    WorkShape,
    adapt_work,
)

__all__ = [
    "__version__",
    "TaskRunner",
    "TaskNode",
    "RunnerOptions",
    "AdaptedWork",
    "WorkShape",
    "adapt_work",
    "TaskerError",
    "ExecutionInProgressError",
    "TaskExistsError",
    "TaskNotFoundError",
    "CycleError",
]
