"""Task adapters for plain functions, and runners built on them."""

import asyncio
from typing import Callable, Optional

from asyncunit.tasks.base import (
    AsyncTask,
    RunnerFailure,
    RunnerSuccess,
    TaskFailureCallback,
    TaskRunner,
    TaskSuccess,
)
from asyncunit.tasks.runner import AsyncTaskRunner

AsyncWorker = Callable[[TaskSuccess, TaskFailureCallback], None]
SyncWorker = Callable[[], None]


class AsyncMethodTask(AsyncTask):
    """Wraps a callback-style worker taking ``(on_success, on_failure)``."""

    def __init__(self, worker: AsyncWorker):
        self.worker = worker

    def run(self, on_success: TaskSuccess, on_failure: TaskFailureCallback) -> None:
        self.worker(on_success, on_failure)


class SyncMethodTask(AsyncTask):
    """Wraps a zero-argument procedure; succeeds once it returns.

    Exceptions are left to the runner, which turns them into failures.
    """

    def __init__(self, worker: SyncWorker):
        self.worker = worker

    def run(self, on_success: TaskSuccess, on_failure: TaskFailureCallback) -> None:
        self.worker()
        on_success(None)


class _DelegatingRunner(TaskRunner):
    def __init__(
        self,
        task: AsyncTask,
        on_success: Optional[RunnerSuccess],
        on_failure: Optional[RunnerFailure],
    ):
        self._runner = AsyncTaskRunner(task, on_success, on_failure)

    def run_async(self, time_limit: float = 0, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._runner.run_async(time_limit, loop)

    def kill(self) -> None:
        self._runner.kill()

    def is_working(self) -> bool:
        return self._runner.is_working()


class AsyncMethodRunner(_DelegatingRunner):
    """Runs a callback-style worker function."""

    def __init__(
        self,
        worker: AsyncWorker,
        on_success: Optional[RunnerSuccess] = None,
        on_failure: Optional[RunnerFailure] = None,
    ):
        super().__init__(AsyncMethodTask(worker), on_success, on_failure)


class SyncMethodRunner(_DelegatingRunner):
    """Runs a plain procedure on the next loop turn."""

    def __init__(
        self,
        worker: SyncWorker,
        on_success: Optional[RunnerSuccess] = None,
        on_failure: Optional[RunnerFailure] = None,
    ):
        super().__init__(SyncMethodTask(worker), on_success, on_failure)
