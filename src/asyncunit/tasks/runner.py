"""Single-task runner with timeout race and cancellation.

The runner schedules its task on the asyncio event loop and guarantees that
exactly one of the owner's continuations fires, exactly once. The first of
success, failure or timeout wins; the runner then detaches the task and both
continuations, so any later signal finds nothing attached.
"""

import asyncio
from typing import Any, Optional

from asyncunit.errors import TaskContractError, TaskTimeoutError, UnattributedTaskError
from asyncunit.logs import get_logger
from asyncunit.tasks.base import (
    AsyncTask,
    FailureKind,
    RunnerFailure,
    RunnerSuccess,
    TaskFailure,
    TaskRunner,
    TaskState,
)

logger = get_logger(__name__)


class AsyncTaskRunner(TaskRunner):
    """Drives one task through its lifecycle."""

    def __init__(
        self,
        task: Optional[AsyncTask],
        on_success: Optional[RunnerSuccess] = None,
        on_failure: Optional[RunnerFailure] = None,
    ):
        """Initialize the runner.

        Args:
            task: The task to run
            on_success: Called as ``on_success(task, result)`` on success
            on_failure: Called as ``on_failure(task, failure)`` on error or timeout
        """
        self._task = task
        self._on_success = on_success
        self._on_failure = on_failure
        self._time_limit: float = 0
        self._start_handle: Optional[asyncio.Handle] = None
        self._timeout_handle: Optional[asyncio.TimerHandle] = None

    @property
    def task(self) -> Optional[AsyncTask]:
        """The attached task, or None once the runner has finished."""
        return self._task

    def run_async(self, time_limit: float = 0, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Schedule the task on the next loop turn.

        Args:
            time_limit: Seconds before the task is failed with a timeout; 0 disables it
            loop: Event loop to schedule on (default: the running loop)

        Raises:
            TaskContractError: If no task is attached, it has no ``run`` method,
                or the runner is already working
            RuntimeError: If no loop is given and none is running
        """
        if self._task is None:
            raise TaskContractError("Task can't be None.")

        if not callable(getattr(self._task, "run", None)):
            raise TaskContractError(f"Task {type(self._task).__name__} has no 'run' method.")

        if self.is_working():
            raise TaskContractError("Task is already running.")

        if loop is None:
            loop = asyncio.get_running_loop()

        self._task.state = TaskState.NEW
        self._time_limit = time_limit or 0

        if self._time_limit > 0:
            self._timeout_handle = loop.call_later(self._time_limit, self._internal_on_timeout)

        self._start_handle = loop.call_soon(self._internal_run)
        self._task.state = TaskState.WORKING
        logger.debug("Scheduled %s (time limit: %ss)", type(self._task).__name__, self._time_limit)

    def kill(self) -> None:
        """Cancel the timer and mark the task killed; no continuation fires."""
        self._cancel_timeout()
        if self._task is None:
            return

        self._task.state = TaskState.FINISHED_KILLED
        logger.debug("Killed %s", type(self._task).__name__)
        self._clean_up()

    def is_working(self) -> bool:
        """Check if the task is scheduled or running."""
        return self._task is not None and self._task.state == TaskState.WORKING

    def _internal_run(self) -> None:
        self._start_handle = None
        if self._task is None:
            return

        logger.debug("Started %s", type(self._task).__name__)
        try:
            self._task.run(self._worker_success, self._worker_failure)
        except Exception as e:
            self._internal_on_failure(TaskFailure(FailureKind.ERROR, str(e), e))

    def _worker_success(self, result: Any = None) -> None:
        self._internal_on_success(result)

    def _worker_failure(self, message: Any = None, detail: Any = None) -> None:
        if isinstance(message, BaseException) and detail is None:
            detail = message
        if message is not None and not isinstance(message, str):
            message = str(message)
        self._internal_on_failure(TaskFailure(FailureKind.ERROR, message or "", detail))

    def _internal_on_success(self, result: Any) -> None:
        self._cancel_timeout()
        if self._task is None:
            return

        task = self._task
        on_success = self._on_success

        self._clean_up()

        task.state = TaskState.FINISHED_SUCCESS
        logger.debug("%s finished successfully", type(task).__name__)
        if on_success is not None:
            on_success(task, result)

    def _internal_on_failure(self, failure: TaskFailure) -> None:
        self._cancel_timeout()
        if self._task is None:
            self._escalate(failure)
            return

        task = self._task
        on_failure = self._on_failure

        self._clean_up()

        task.state = TaskState.FINISHED_TIMEOUT if failure.is_timeout else TaskState.FINISHED_ERROR
        logger.debug("%s failed (%s): %s", type(task).__name__, failure.kind.value, failure.message)
        if on_failure is not None:
            on_failure(task, failure)

    def _internal_on_timeout(self) -> None:
        self._timeout_handle = None
        if self._task is None:
            return

        error = TaskTimeoutError(f"[timeout] {self._time_limit} seconds.", self._time_limit)
        self._internal_on_failure(TaskFailure(FailureKind.TIMEOUT, str(error), error))

    def _escalate(self, failure: TaskFailure) -> None:
        """Re-raise an error that arrived after the runner finished.

        Late timeouts are dropped; late errors have nowhere to be reported,
        so they are raised to whoever delivered them.
        """
        if failure.kind == FailureKind.TIMEOUT:
            logger.debug("Dropped late timeout signal")
            return

        logger.warning("Failure signal after completion: %s", failure.message or "Unknown error")
        if isinstance(failure.detail, BaseException):
            raise failure.detail
        if failure.message:
            raise UnattributedTaskError(failure.message)
        raise UnattributedTaskError("Unknown error")

    def _cancel_timeout(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

    def _clean_up(self) -> None:
        self._cancel_timeout()
        if self._start_handle is not None:
            self._start_handle.cancel()
            self._start_handle = None

        self._task = None
        self._time_limit = 0
        self._on_success = None
        self._on_failure = None
