"""CLI test fixtures."""

from __future__ import annotations

import importlib
import textwrap

import pytest

# The package re-exports the main() function under the same name, so
# attribute lookup on tasker.frontends.cli would find the function
cli_main = importlib.import_module("tasker.frontends.cli.main")


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep CLI commands from reconfiguring logging or emitting colors."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.setattr(cli_main, "configure_logging", lambda *args, **kwargs: None)


@pytest.fixture
def write_taskfile(tmp_path):
    """Write a taskfile and return its path."""

    def write(source: str, name: str = "tasks.py"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(source))
        return path

    return write


@pytest.fixture
def taskfile(write_taskfile):
    """A small compile -> bundle taskfile."""
    return write_taskfile(
        """
        def compile_sources():
            return "compiled"

        def bundle(results):
            return results["compile"] + "+bundled"

        def broken():
            raise RuntimeError("boom")

        runner.add_task("compile", work=compile_sources)
        runner.add_task("bundle", ["compile"], bundle)
        runner.add_task("broken", work=broken)
        runner.add_task("after-broken", "broken")
        """
    )
