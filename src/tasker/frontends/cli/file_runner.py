"""Taskfile loading and execution for the CLI.

A taskfile is a plain Python file. It is executed with a ready-made
``runner`` in its namespace and is expected to register tasks on it:

    # tasks.py
    runner.add_task("compile", work=lambda: "compiled")
    runner.add_task("bundle", ["compile"], lambda results: results["compile"] + "+bundled")
"""

from __future__ import annotations

import asyncio
import time
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from tasker.core import RunnerOptions, TaskerError, TaskRunner


class TaskfileError(TaskerError):
    """A taskfile could not be loaded or defines no runner."""


class ConsoleReporter:
    """Prints task lifecycle events to a rich console.

    Its methods are passed to TaskRunner as observers.
    """

    def __init__(self, console: Console) -> None:
        self.console = console
        self._started: dict[str, float] = {}

    def options(self) -> RunnerOptions:
        return RunnerOptions(
            on_task_start=self.on_task_start,
            on_task_end=self.on_task_end,
            on_task_fail=self.on_task_fail,
            on_task_cancel=self.on_task_cancel,
        )

    def on_task_start(self, name: str, dependencies: list[str]) -> None:
        self._started[name] = time.monotonic()
        suffix = f" [dim](after {escape(', '.join(dependencies))})[/]" if dependencies else ""
        self.console.print(f"[cyan]start[/]   {escape(name)}{suffix}")

    def on_task_end(self, name: str) -> None:
        self.console.print(f"[green]done[/]    {escape(name)} [dim]{self._elapsed(name)}[/]")

    def on_task_fail(self, name: str) -> None:
        self.console.print(f"[bold red]failed[/]  {escape(name)} [dim]{self._elapsed(name)}[/]")

    def on_task_cancel(self, name: str) -> None:
        self.console.print(f"[yellow]skipped[/] {escape(name)}")

    def _elapsed(self, name: str) -> str:
        started = self._started.pop(name, None)
        if started is None:
            return ""
        return f"({time.monotonic() - started:.1f}s)"


def load_taskfile(filepath: str | Path, runner: TaskRunner | None = None) -> TaskRunner:
    """Execute a taskfile and return the runner it populated.

    Args:
        filepath: Path to the taskfile.
        runner: Runner exposed to the file as ``runner``. A fresh
            TaskRunner is created if omitted.

    Returns:
        The namespace's ``runner`` after the file ran. The file may
        replace it with its own TaskRunner.

    Raises:
        TaskfileError: If the file does not exist, fails while loading, or
            leaves no TaskRunner in ``runner``.
        TaskerError: If the file misuses the runner (e.g. duplicate tasks).
    """
    path = Path(filepath)
    if not path.is_file():
        raise TaskfileError(f"File not found: {path}")

    namespace: dict[str, Any] = {
        "asyncio": asyncio,
        "TaskRunner": TaskRunner,
        "RunnerOptions": RunnerOptions,
        "runner": runner if runner is not None else TaskRunner(),
        "__name__": "__tasker_taskfile__",
        "__file__": str(path),
    }

    code = path.read_text()
    try:
        exec(compile(code, str(path), "exec"), namespace)
    except TaskerError:
        raise
    except Exception as e:
        raise TaskfileError(f"Error loading {path}: {type(e).__name__}: {e}") from e

    loaded = namespace.get("runner")
    if not isinstance(loaded, TaskRunner):
        raise TaskfileError(f"No TaskRunner named 'runner' found in {path}")
    return loaded


async def run_from_file(
    filepath: str | Path,
    task: str,
    console: Console,
    dry_run: bool = False,
) -> Any:
    """Load a taskfile and run one of its tasks.

    Args:
        filepath: Path to the taskfile.
        task: Name of the task to run.
        console: Console that receives progress output.
        dry_run: If True, only print the execution order.

    Returns:
        The task's result (None on a dry run).
    """
    reporter = ConsoleReporter(console)
    runner = load_taskfile(filepath, TaskRunner(reporter.options()))

    if dry_run:
        from tasker.frontends.cli.output import print_order

        print_order(console, runner.execution_order(task))
        return None

    return await runner.run(task)
