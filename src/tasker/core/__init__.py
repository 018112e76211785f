"""Core - the task runner and its building blocks.

This module contains no knowledge of:
- The command line
- How logging is configured
- Where task definitions come from

Architecture:
    dag/            TaskRunner (task tree + execution) and TaskNode
    adapter         Normalizes sync, awaitable and callback-style work
    errors          Error taxonomy
    types           Options and shared type aliases
    validation      Argument checks
    logging_config  Application-level logging setup
    run_logging     Run IDs and log line helpers
"""

from tasker.core.adapter import AdaptedWork, adapt_work
from tasker.core.dag import TaskNode, TaskRunner
from tasker.core.errors import (
    CycleError,
    ExecutionInProgressError,
    TaskerError,
    TaskExistsError,
    TaskNotFoundError,
)
from tasker.core.types import RunnerOptions, WorkShape

__all__ = [
    # Engine
    "TaskRunner",
    "TaskNode",
    "RunnerOptions",
    # Work adaptation
    "AdaptedWork",
    "WorkShape",
    "adapt_work",
    # Errors
    "TaskerError",
    "ExecutionInProgressError",
    "TaskExistsError",
    "TaskNotFoundError",
    "CycleError",
]
