"""Data models for orchestrated background tasks."""

from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaskState(Enum):
    """Lifecycle state of a submitted task."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskState.COMPLETED, TaskState.FAILED, TaskState.CANCELLED)


@dataclass
class Task:
    """A unit of work running on its own worker thread.

    The terminal state, result and error are written once by the worker;
    callbacks are invoked later on the control thread.
    """

    id: int
    description: str
    on_complete: Callable[[Any], None] | None = None
    on_error: Callable[[str], None] | None = None
    state: TaskState = TaskState.PENDING
    result: Any = None
    error: str | None = None
    future: Future = field(default_factory=Future, repr=False)

    @property
    def is_ready(self) -> bool:
        """Zero-wait readiness check."""
        return self.future.done()

    def __str__(self) -> str:
        return f"Task #{self.id} '{self.description}' ({self.state.value})"
