"""CLI entry point."""

from __future__ import annotations

import asyncio
import sys

from tasker.core.logging_config import configure_logging


def main() -> None:
    """Main entry point for the CLI."""
    import importlib.util

    if importlib.util.find_spec("rich_click") is None:
        print("CLI dependencies not installed. Run: pip install tasker-lib[cli]")
        sys.exit(1)

    build_cli()()


def build_cli():
    """Build the ``tasker`` command group."""
    import rich_click as click
    from rich.console import Console
    from rich.markup import escape

    from tasker.core import TaskerError
    from tasker.frontends.cli.file_runner import load_taskfile, run_from_file
    from tasker.frontends.cli.output import error_exit, output_json, print_task_table

    click.rich_click.USE_RICH_MARKUP = True
    click.rich_click.USE_MARKDOWN = True
    click.rich_click.SHOW_ARGUMENTS = True
    click.rich_click.ERRORS_SUGGESTION = "Try running '--help' for more information."
    click.rich_click.MAX_WIDTH = 100

    @click.group()
    @click.version_option(package_name="tasker-lib")
    def cli():
        """Tasker - run dependency-ordered tasks.

        Tasks are defined in a Python **taskfile** that registers them on
        the pre-defined `runner`:

            runner.add_task("compile", work=compile_sources)

            runner.add_task("bundle", ["compile"], bundle)
        """

    @cli.command()
    @click.argument("file")
    @click.argument("task")
    @click.option("--dry-run", "-d", is_flag=True, help="Show execution order without running")
    @click.option("--json", "-j", "json_output", is_flag=True, help="Print the result as JSON")
    @click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
    def run(file: str, task: str, dry_run: bool, json_output: bool, verbose: bool):
        """Run TASK and everything it depends on.

        **Examples:**

            tasker run tasks.py bundle

            tasker run tasks.py bundle --dry-run
        """
        configure_logging(level="DEBUG" if verbose else None)
        console = Console()
        err_console = Console(stderr=True)

        try:
            result = asyncio.run(run_from_file(file, task, console, dry_run=dry_run))
        except (TaskerError, ValueError) as e:
            error_exit(err_console, str(e))
        except Exception as e:
            error_exit(err_console, f"Task '{task}' failed: {type(e).__name__}: {e}")

        if dry_run:
            return
        if json_output:
            output_json(result)
        elif result is not None:
            console.print(f"[bold]{escape(task)}[/] -> {escape(repr(result))}")

    @cli.command(name="list")
    @click.argument("file")
    @click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON")
    def list_tasks(file: str, json_output: bool):
        """List the tasks in FILE and their dependencies."""
        configure_logging()
        err_console = Console(stderr=True)

        try:
            runner = load_taskfile(file)
        except TaskerError as e:
            error_exit(err_console, str(e))

        tasks = runner.list_tasks()
        if json_output:
            output_json(tasks)
        else:
            print_task_table(Console(), tasks)

    return cli


if __name__ == "__main__":
    main()
