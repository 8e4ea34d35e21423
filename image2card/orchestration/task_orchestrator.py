"""Background task execution with ordered callback delivery."""

import itertools
import logging
import threading
from collections import deque
from collections.abc import Callable
from concurrent import futures
from dataclasses import dataclass, field
from typing import Any

from image2card.exceptions import TaskCancelledError
from image2card.models import Task, TaskState

logger = logging.getLogger(__name__)


@dataclass
class OrchestratorState:
    """Busy flags and the cooperative cancellation flag shared with task work.

    Work functions receive this object explicitly instead of reading
    globals. The busy flags are a caller-side convention; the orchestrator
    itself allows any number of tasks in flight.
    """

    scanning: bool = False
    processing: bool = False
    cancel_event: threading.Event = field(default_factory=threading.Event, repr=False)

    @property
    def cancel_requested(self) -> bool:
        return self.cancel_event.is_set()

    def request_cancel(self) -> None:
        self.cancel_event.set()

    def check_cancelled(self, description: str = "Task") -> None:
        """Raise TaskCancelledError if cancellation has been requested.

        Called by work at stage boundaries, before starting a remote call.
        """
        if self.cancel_event.is_set():
            raise TaskCancelledError(f"{description} cancelled")

    def reset(self) -> None:
        """Clear the busy flags and the cancellation flag."""
        self.scanning = False
        self.processing = False
        self.cancel_event.clear()


def normalize_error(description: str, error: BaseException) -> str:
    """Turn an exception from task work into a short user-facing message."""
    message = str(error).strip().splitlines()[0] if str(error).strip() else type(error).__name__
    return f"{description} failed: {message}"


class TaskOrchestrator:
    """Run each submitted task on its own thread; deliver callbacks in order.

    submit() starts work immediately on a new daemon thread. poll() is called
    from the control thread once per tick: it never blocks, and it delivers
    callbacks strictly in submission order, so a finished task waits behind
    an earlier one that is still running.
    """

    def __init__(self, state: OrchestratorState | None = None):
        self.state = state or OrchestratorState()
        self._queue: deque[Task] = deque()
        self._lock = threading.Lock()
        self._ids = itertools.count(1)

    @property
    def pending(self) -> int:
        """Number of tasks whose callbacks have not been delivered yet."""
        with self._lock:
            return len(self._queue)

    def is_idle(self) -> bool:
        return self.pending == 0

    def submit(
        self,
        description: str,
        work: Callable[[OrchestratorState], Any],
        on_complete: Callable[[Any], None] | None = None,
        on_error: Callable[[str], None] | None = None,
    ) -> Task:
        """Queue a task and start its work right away.

        Args:
            description: Human-readable task name used in logs and messages
            work: Callable run on the worker thread with the orchestrator state
            on_complete: Called on the control thread with the work's return value
            on_error: Called on the control thread with a short error message

        Returns:
            The queued Task
        """
        task = Task(
            id=next(self._ids),
            description=description,
            on_complete=on_complete,
            on_error=on_error,
        )
        with self._lock:
            self._queue.append(task)

        worker = threading.Thread(
            target=self._run,
            args=(task, work),
            name=f"image2card-task-{task.id}",
            daemon=True,
        )
        worker.start()
        logger.debug(f"Submitted {task}")
        return task

    def _run(self, task: Task, work: Callable[[OrchestratorState], Any]) -> None:
        """Worker thread body. Sets the task's terminal state exactly once."""
        task.state = TaskState.RUNNING
        try:
            result = work(self.state)
        except TaskCancelledError as e:
            task.state = TaskState.CANCELLED
            task.error = f"{task.description} cancelled"
            task.future.set_exception(e)
        except Exception as e:
            logger.debug(f"Task '{task.description}' raised", exc_info=True)
            task.state = TaskState.FAILED
            task.error = normalize_error(task.description, e)
            task.future.set_exception(e)
        else:
            task.state = TaskState.COMPLETED
            task.result = result
            task.future.set_result(result)

    def poll(self) -> int:
        """Deliver callbacks of finished tasks at the head of the queue.

        Stops at the first task that is still running. Safe to call on an
        empty queue.

        Returns:
            Number of callbacks delivered
        """
        delivered = 0
        while True:
            with self._lock:
                if not self._queue or not self._queue[0].is_ready:
                    break
                task = self._queue.popleft()
            self._deliver(task)
            delivered += 1
        return delivered

    def _deliver(self, task: Task) -> None:
        if task.state is TaskState.COMPLETED:
            logger.info(f"Task completed: {task.description}")
            callback, argument = task.on_complete, task.result
        else:
            if task.state is TaskState.CANCELLED:
                logger.info(task.error)
            else:
                logger.error(task.error)
            callback, argument = task.on_error, task.error

        if callback is None:
            return
        try:
            callback(argument)
        except Exception as e:
            logger.error(f"Callback for '{task.description}' raised: {e}", exc_info=True)

    def cancel_all(self, per_task_timeout: float = 5.0) -> int:
        """Request cancellation and wait for queued tasks to finish.

        Each unfinished task gets up to per_task_timeout seconds. Tasks still
        running afterwards are abandoned; their daemon threads may keep
        running until they return. No callbacks are delivered. The busy and
        cancellation flags are cleared afterwards.

        Args:
            per_task_timeout: Seconds to wait for each task

        Returns:
            Number of abandoned tasks
        """
        self.state.request_cancel()
        with self._lock:
            tasks = list(self._queue)
            self._queue.clear()

        abandoned = 0
        for task in tasks:
            if task.is_ready:
                continue
            _, not_done = futures.wait([task.future], timeout=per_task_timeout)
            if not_done:
                abandoned += 1
                logger.warning(
                    f"Task '{task.description}' did not finish within {per_task_timeout}s, abandoning"
                )

        self.state.reset()
        if tasks:
            logger.info(f"Cancelled {len(tasks)} task(s), {abandoned} abandoned")
        return abandoned
