#!/usr/bin/env python3
"""Using TaskRunner directly from Python.

Usage:
    python examples/embedded.py
"""

import asyncio

from tasker import TaskRunner
from tasker.core.logging_config import configure_logging


async def main():
    runner = TaskRunner(
        on_task_start=lambda name, deps: print(f"start {name} after {deps}"),
        on_task_end=lambda name: print(f"end   {name}"),
        on_task_cancel=lambda name: print(f"skip  {name}"),
    )

    async def fetch():
        await asyncio.sleep(0.1)
        return {"users": 3}

    runner.add_task("fetch", work=fetch)
    runner.add_task("count", "fetch", lambda results: results["fetch"]["users"])
    runner.add_task("report", ["count"], lambda results: f"{results['count']} users")

    print(runner.execution_order("report"))
    print(await runner.run("report"))

    # The runner is reusable; tasks run again on every run
    print(await runner.run("count"))


if __name__ == "__main__":
    configure_logging(level="DEBUG")
    asyncio.run(main())
