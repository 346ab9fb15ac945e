"""Task and runner interfaces."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional


class TaskState(str, Enum):
    """Lifecycle state of a task driven by a runner."""

    NEW = "new"
    WORKING = "working"
    FINISHED_SUCCESS = "finished_success"
    FINISHED_ERROR = "finished_error"
    FINISHED_TIMEOUT = "finished_timeout"
    FINISHED_KILLED = "finished_killed"


class FailureKind(str, Enum):
    """Why a task failed."""

    ERROR = "error"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class TaskFailure:
    """Failure payload handed to a runner's failure continuation."""

    kind: FailureKind
    message: str = ""
    detail: Any = None

    @property
    def is_timeout(self) -> bool:
        return self.kind == FailureKind.TIMEOUT


# Continuations seen by a task worker
TaskSuccess = Callable[..., None]
TaskFailureCallback = Callable[..., None]

# Continuations seen by the owner of a runner
RunnerSuccess = Callable[["AsyncTask", Optional[Any]], None]
RunnerFailure = Callable[["AsyncTask", TaskFailure], None]


class AsyncTask(ABC):
    """Unit of work that reports completion through continuations."""

    state: Optional[TaskState] = None

    @abstractmethod
    def run(self, on_success: TaskSuccess, on_failure: TaskFailureCallback) -> None:
        """Start the work.

        Args:
            on_success: Call with an optional result once the work is done
            on_failure: Call with a message and optional detail if it failed
        """
        pass


class TaskRunner(ABC):
    """Abstract base class for objects that drive a single task."""

    @abstractmethod
    def run_async(self, time_limit: float = 0, loop=None) -> None:
        """Schedule the task, racing it against ``time_limit`` seconds."""
        pass

    @abstractmethod
    def kill(self) -> None:
        """Cancel the task without invoking any continuation."""
        pass

    @abstractmethod
    def is_working(self) -> bool:
        """Check if the task has started and not yet finished."""
        pass
