"""Output formatting utilities for CLI commands."""

from __future__ import annotations

import json
import sys
from typing import Any, NoReturn

from rich.console import Console
from rich.markup import escape
from rich.table import Table


def print_task_table(console: Console, tasks: dict[str, list[str]]) -> None:
    """Print tasks and their dependencies as a table.

    Args:
        console: Rich console for output.
        tasks: Dict of task name -> dependency names.
    """
    if not tasks:
        console.print("[dim]No tasks defined[/]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Task", style="cyan", no_wrap=True)
    table.add_column("Depends on")
    for name, dependencies in tasks.items():
        deps = ", ".join(escape(d) for d in dependencies) if dependencies else "[dim]-[/]"
        table.add_row(escape(name), deps)
    console.print(table)


def print_order(console: Console, order: list[str]) -> None:
    """Print a dry-run execution order."""
    console.print("[bold]DRY RUN[/]")
    for i, name in enumerate(order, 1):
        console.print(f"  [{i}] {name}", markup=False, highlight=False)


def output_json(data: Any, indent: int = 2) -> None:
    """Output data as formatted JSON on stdout."""
    sys.stdout.write(json.dumps(data, indent=indent, default=str) + "\n")


def error_exit(console: Console, message: str, code: int = 1) -> NoReturn:
    """Print error message and exit with code."""
    console.print(f"[bold red]Error:[/] {escape(message)}")
    sys.exit(code)
