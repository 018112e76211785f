"""CLI frontend for tasker.

Commands:
    tasker run      Run a task defined in a taskfile
    tasker list     Show the tasks defined in a taskfile

Example:
    $ tasker list tasks.py
    $ tasker run tasks.py bundle
    $ tasker run tasks.py bundle --dry-run
"""

from tasker.frontends.cli.main import main

__all__ = ["main"]
