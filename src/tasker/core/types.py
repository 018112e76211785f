"""Pure data types for tasker.core.

These are simple dataclasses and aliases with no behavior coupling.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

# Mapping of dependency name -> that dependency's result
Results = dict[str, Any]

# Completion signal handed to callback-style work: done(error, result)
DoneCallback = Callable[..., None]

# Any callable accepted as task work (zero, one or two positional args)
TaskWork = Callable[..., Any]

StartObserver = Callable[[str, list[str]], None]
TaskObserver = Callable[[str], None]


class WorkShape(Enum):
    """How a task's work signals completion.

    Decided once when the task is registered.
    """

    NOOP = "noop"  # No work given, resolves with None
    PLAIN = "plain"  # Returns a value or an awaitable
    CALLBACK = "callback"  # Takes a done(error, result) callback


@dataclass(frozen=True)
class RunnerOptions:
    """TaskRunner configuration.

    Attributes:
        throw_on_overwrite: Raise TaskExistsError when adding a task whose
            name is already registered. If False, the task is replaced.
        on_task_start: Called before a task resolves its dependencies,
            with the task name and its dependency list.
        on_task_end: Called after a task's work has completed.
        on_task_fail: Called after a task's work has failed.
        on_task_cancel: Called when a task is skipped because one of its
            dependencies failed.
    """

    throw_on_overwrite: bool = True
    on_task_start: StartObserver | None = None
    on_task_end: TaskObserver | None = None
    on_task_fail: TaskObserver | None = None
    on_task_cancel: TaskObserver | None = None
