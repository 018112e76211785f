"""Task node definition."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from tasker.core.adapter import AdaptedWork


@dataclass(eq=False)
class TaskNode:
    """A registered task in the task tree.

    Nodes are plain records; the TaskRunner owns them and drives
    their transient execution state.

    Attributes:
        name: Unique name of the task.
        work: The task's work, adapted to ``async (results) -> result``.
        dependencies: Names of tasks that must complete first. Order is
            kept for introspection only.
        in_flight: Shared future of this task while a run is executing it.
        visiting: True while this task's dependencies are being resolved
            on the current path. Used for cycle detection.
    """

    name: str
    work: AdaptedWork
    dependencies: list[str] = field(default_factory=list)

    # Execution-scoped state, reset after every run
    in_flight: asyncio.Future[dict[str, Any]] | None = field(default=None, repr=False)
    visiting: bool = field(default=False, repr=False)

    def reset(self) -> None:
        """Return execution-scoped state to rest."""
        self.in_flight = None
        self.visiting = False
