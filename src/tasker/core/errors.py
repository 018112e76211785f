"""Task runner error types.

Custom exceptions for graph state conflicts and integrity failures.
Invalid arguments raise the built-in ValueError; errors raised by task
work are propagated unmodified.
"""

from __future__ import annotations


class TaskerError(Exception):
    """Base error for task runner operations."""


class ExecutionInProgressError(TaskerError):
    """The task tree was modified, or run again, while a run is in progress."""

    def __init__(self) -> None:
        super().__init__("You cannot modify the task tree while execution is in progress.")


class TaskExistsError(TaskerError):
    """A task with the same name is already registered.

    Raised by TaskRunner.add_task() unless the runner was created with
    throw_on_overwrite=False.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Task '{name}' already exists.")
        self.name = name


class TaskNotFoundError(TaskerError):
    """A task could not be found in the task tree.

    Raised when:
    - Dependencies are added to a task that does not exist
    - A run reaches a task (or dependency) that is not registered
    """

    def __init__(self, name: str, message: str | None = None) -> None:
        super().__init__(message or f"Task '{name}' not found")
        self.name = name


class CycleError(TaskerError):
    """A dependency cycle was reached during a run.

    The name is the task that was found twice on the active resolution path.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Cycle found at '{name}'")
        self.name = name
