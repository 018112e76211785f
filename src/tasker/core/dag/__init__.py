"""Dependency-ordered task execution.

Pure execution engine - no CLI, no logging configuration, no persistence.
Just named tasks, dependency links, and runs.

Classes:
    TaskRunner: The task tree and its executor.
    TaskNode: A single registered task.

Example:
    >>> from tasker.core.dag import TaskRunner
    >>>
    >>> runner = TaskRunner()
    >>> runner.add_task("fetch", work=fetch_data)
    >>> runner.add_task("process", ["fetch"], lambda results: process(results["fetch"]))
    >>>
    >>> output = await runner.run("process")
"""

from tasker.core.dag.graph import TaskRunner
from tasker.core.dag.task import TaskNode

__all__ = ["TaskRunner", "TaskNode"]
