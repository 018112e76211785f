"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from tasker.core import RunnerOptions, TaskRunner


class ObserverRecorder:
    """Records task lifecycle notifications in the order they fire."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []
        self.start_dependencies: dict[str, list[str]] = {}

    def options(self, **overrides) -> RunnerOptions:
        return RunnerOptions(
            on_task_start=self.on_task_start,
            on_task_end=lambda name: self.events.append(("end", name)),
            on_task_fail=lambda name: self.events.append(("fail", name)),
            on_task_cancel=lambda name: self.events.append(("cancel", name)),
            **overrides,
        )

    def on_task_start(self, name: str, dependencies: list[str]) -> None:
        self.events.append(("start", name))
        self.start_dependencies[name] = dependencies

    def names(self, kind: str) -> list[str]:
        return [name for event, name in self.events if event == kind]


@pytest.fixture
def runner():
    """A TaskRunner with default options."""
    return TaskRunner()


@pytest.fixture
def recorder():
    """Observer recorder; pass recorder.options() to TaskRunner."""
    return ObserverRecorder()
