"""Example taskfile for the tasker CLI.

Usage:
    tasker list examples/taskfile.py
    tasker run examples/taskfile.py release
    tasker run examples/taskfile.py release --dry-run
"""

# `runner` and `asyncio` are provided by the CLI


def clean():
    return "dist/ cleaned"


async def compile_sources(results):
    await asyncio.sleep(0.2)
    return ["app.js", "vendor.js"]


async def lint():
    await asyncio.sleep(0.1)
    return "0 warnings"


def bundle(results):
    return f"bundle of {len(results['compile'])} files"


def upload(results, done):
    # Callback style: report completion later
    asyncio.get_running_loop().call_later(0.1, done, None, f"uploaded {results['bundle']}")


runner.add_task("clean", work=clean)
runner.add_task("compile", "clean", compile_sources)
runner.add_task("lint", work=lint)
runner.add_task("bundle", ["compile", "lint"], bundle)
runner.add_task("release", "bundle", upload)
