"""Data models for test results and their aggregation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional


class AsyncSetUpState(str, Enum):
    """State of a group's async set up."""

    SETTING_UP = "setting_up"
    DONE = "done"
    FAILED = "failed"


OK_MESSAGE = "OK"


@dataclass(frozen=True)
class TestDescription:
    """Outcome of one test execution, or of a failed group set up."""

    __test__ = False

    group_name: str
    test_name: Optional[str] = None
    parameter_set_index: Optional[int] = None
    message: str = OK_MESSAGE

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "group_name": self.group_name,
            "test_name": self.test_name,
            "parameter_set_index": self.parameter_set_index,
            "message": self.message,
        }


@dataclass(frozen=True)
class AsyncSetUpInfo:
    """Async set up status of one group."""

    state: AsyncSetUpState
    error_message: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"state": self.state.value, "error_message": self.error_message}


@dataclass
class TestResult:
    """Everything recorded during one engine run."""

    __test__ = False

    passes: list[TestDescription] = field(default_factory=list)
    errors: list[TestDescription] = field(default_factory=list)
    async_set_up: dict[str, AsyncSetUpInfo] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.passes) + len(self.errors)

    @property
    def all_passed(self) -> bool:
        return not self.errors

    @property
    def is_settled(self) -> bool:
        """Check that no group is still setting up."""
        return all(info.state != AsyncSetUpState.SETTING_UP for info in self.async_set_up.values())

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "passed": len(self.passes),
            "failed": len(self.errors),
            "passes": [d.to_dict() for d in self.passes],
            "errors": [d.to_dict() for d in self.errors],
            "async_set_up": {name: info.to_dict() for name, info in self.async_set_up.items()},
        }


ResultObserver = Callable[[TestResult], None]


class ResultAggregator:
    """Sole writer of a run's TestResult.

    Every mutation appends (or sets a group's set up status) and then calls
    the observer with the whole result.
    """

    def __init__(self, observer: Optional[ResultObserver] = None):
        self.result = TestResult()
        self.observer = observer

    def set_async_set_up_state(
        self, group_name: str, state: AsyncSetUpState, error_message: str = ""
    ) -> None:
        self.result.async_set_up[group_name] = AsyncSetUpInfo(state, error_message)
        self._notify()

    def add_pass(self, group_name: str, test_name: str, parameter_set_index: Optional[int] = None) -> None:
        self.result.passes.append(TestDescription(group_name, test_name, parameter_set_index, OK_MESSAGE))
        self._notify()

    def add_error(
        self,
        group_name: str,
        test_name: Optional[str],
        parameter_set_index: Optional[int],
        message: str,
    ) -> None:
        self.result.errors.append(TestDescription(group_name, test_name, parameter_set_index, message))
        self._notify()

    def _notify(self) -> None:
        if self.observer is not None:
            self.observer(self.result)
