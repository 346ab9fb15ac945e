"""Test engine: runs registered groups and publishes results."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from asyncunit.core.groups import DEFAULT_PRIVATE_PREFIX, AsyncSetUpTestGroup, TestGroup, has_async_set_up
from asyncunit.core.results import AsyncSetUpState, ResultAggregator, ResultObserver, TestResult
from asyncunit.core.selection import RunAllSelection, SelectionFilter
from asyncunit.logs import get_logger
from asyncunit.tasks.adapters import AsyncMethodRunner
from asyncunit.tasks.base import AsyncTask, TaskFailure

if TYPE_CHECKING:
    from asyncunit.config import EngineConfig

logger = get_logger(__name__)

GroupRegistration = Union[TestGroup, tuple[str, TestGroup]]


def _describe_error(error: Exception) -> str:
    return f"{type(error).__name__}: {error}"


class TestDefinition:
    """A registered group and the name it reports under."""

    __test__ = False

    def __init__(self, group: TestGroup, name: str):
        self.group = group
        self.name = name


class AsyncSetUpRunner:
    """Runs one group's async set up and reports back to the engine."""

    def __init__(
        self,
        group: AsyncSetUpTestGroup,
        group_name: str,
        on_ready: Callable[[AsyncSetUpTestGroup, str], None],
        on_failure: Callable[[AsyncSetUpTestGroup, str, str], None],
    ):
        self.group = group
        self.group_name = group_name
        self._on_ready = on_ready
        self._on_failure = on_failure
        self._runner: Optional[AsyncMethodRunner] = None

    def run_async(self, time_limit: float, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        if self._runner is not None:
            self._runner.kill()
        self._runner = AsyncMethodRunner(self.group.async_set_up, self._succeeded, self._failed)
        self._runner.run_async(time_limit, loop)

    def kill(self) -> None:
        if self._runner is not None:
            self._runner.kill()

    def _succeeded(self, task: AsyncTask, result: Any) -> None:
        self._on_ready(self.group, self.group_name)

    def _failed(self, task: AsyncTask, failure: TaskFailure) -> None:
        self._on_failure(self.group, self.group_name, failure.message)


class TestEngine:
    """Runs registered test groups and reports results to an observer.

    Plain groups run synchronously inside ``run()``. Groups with an async set
    up are scheduled on the event loop; their tests run once the set up
    succeeds, so ``run()`` must be called with a loop running (or given one)
    when such groups are registered.
    """

    __test__ = False

    def __init__(self, *groups: GroupRegistration, config: Optional["EngineConfig"] = None):
        self.on_result_change: Optional[ResultObserver] = None
        self.private_member_prefix = DEFAULT_PRIVATE_PREFIX
        self.default_set_up_time_limit: float = 0
        self.default_selection: SelectionFilter = RunAllSelection()

        if config is not None:
            self.private_member_prefix = config.private_member_prefix
            self.default_set_up_time_limit = config.default_set_up_time_limit
            self.default_selection = config.build_selection()

        self.tests: list[TestDefinition] = []
        self._aggregator: Optional[ResultAggregator] = None
        self._pending: set[AsyncSetUpRunner] = set()
        self._idle: Optional[asyncio.Event] = None

        for group in groups:
            if isinstance(group, tuple):
                name, group = group
                self.add_test_group(group, name)
            else:
                self.add_test_group(group)

    @property
    def test_result(self) -> Optional[TestResult]:
        """Result of the latest run, or None before the first one."""
        return self._aggregator.result if self._aggregator is not None else None

    def add_test_group(self, group: TestGroup, name: Optional[str] = None) -> None:
        """Register a group; it reports under its class name unless named."""
        if name is None:
            name = type(group).__name__ or "Tests"
        self.tests.append(TestDefinition(group, name))

    def pending_count(self) -> int:
        """Number of async set ups still in flight."""
        return len(self._pending)

    def run(
        self,
        selection: Optional[SelectionFilter] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> TestResult:
        """Run every selected group.

        Args:
            selection: What to run (default: ``default_selection``)
            loop: Loop for async set ups (default: the running loop)

        Returns:
            The fresh result for this run; groups with async set up keep
            adding to it after this returns
        """
        self.cancel()
        if selection is None:
            selection = self.default_selection

        aggregator = ResultAggregator(self._notify)
        self._aggregator = aggregator

        for definition in self.tests:
            group = definition.group
            group_name = definition.name

            if not selection.is_group_active(group_name):
                continue

            if has_async_set_up(group):
                self._start_async_set_up(aggregator, group, group_name, selection, loop)
            else:
                self.execute_test_group(aggregator, group, group_name, selection)

        return aggregator.result

    async def run_until_complete(self, selection: Optional[SelectionFilter] = None) -> TestResult:
        """Run and wait until no async set up is pending.

        A set up without a time limit that never reports back keeps this
        waiting forever.
        """
        result = self.run(selection)
        if self._pending:
            self._idle = asyncio.Event()
            await self._idle.wait()
        return result

    def cancel(self) -> None:
        """Kill every pending async set up; their groups stay SETTING_UP."""
        pending = list(self._pending)
        self._pending.clear()
        for set_up_runner in pending:
            set_up_runner.kill()
        if pending:
            logger.info("Cancelled %d pending async set up(s)", len(pending))
        self._wake_waiters()

    def execute_test_group(
        self,
        aggregator: ResultAggregator,
        group: TestGroup,
        group_name: str,
        selection: SelectionFilter,
    ) -> None:
        """Run the selected tests of one group, recording each outcome."""
        for test_name in group.test_names(self.private_member_prefix):
            method = getattr(group, test_name)
            parameters = getattr(method, "parameters", None)

            if parameters is not None:
                for index in range(len(parameters)):
                    if not selection.is_parameter_set_active(index):
                        continue
                    if not selection.is_test_active(test_name):
                        break
                    self._run_single_test(aggregator, group, group_name, test_name, parameters[index], index)
            elif selection.is_test_active(test_name):
                self._run_single_test(aggregator, group, group_name, test_name)

    def _run_single_test(
        self,
        aggregator: ResultAggregator,
        group: TestGroup,
        group_name: str,
        test_name: str,
        args: tuple = (),
        parameter_set_index: Optional[int] = None,
    ) -> None:
        """Run one test between set_up and tear_down and record one outcome.

        A failing set_up skips both the body and tear_down. A failing
        tear_down turns a pass into an error, or is appended to the body's.
        """
        try:
            group.set_up()
        except Exception as e:
            aggregator.add_error(group_name, test_name, parameter_set_index, f"set_up: {_describe_error(e)}")
            return

        error: Optional[str] = None
        try:
            getattr(group, test_name)(*args)
        except Exception as e:
            error = _describe_error(e)

        try:
            group.tear_down()
        except Exception as e:
            tear_down_error = f"tear_down: {_describe_error(e)}"
            error = f"{error}; {tear_down_error}" if error else tear_down_error

        if error is None:
            aggregator.add_pass(group_name, test_name, parameter_set_index)
        else:
            aggregator.add_error(group_name, test_name, parameter_set_index, error)

    def _start_async_set_up(
        self,
        aggregator: ResultAggregator,
        group: AsyncSetUpTestGroup,
        group_name: str,
        selection: SelectionFilter,
        loop: Optional[asyncio.AbstractEventLoop],
    ) -> None:
        set_up_runner: Optional[AsyncSetUpRunner] = None

        def on_ready(ready_group: AsyncSetUpTestGroup, name: str) -> None:
            self._finish(set_up_runner)
            logger.info("Async set up of %s done", name)
            aggregator.set_async_set_up_state(name, AsyncSetUpState.DONE)
            self.execute_test_group(aggregator, ready_group, name, selection)

        def on_failure(failed_group: AsyncSetUpTestGroup, name: str, message: str) -> None:
            self._finish(set_up_runner)
            logger.warning("Async set up of %s failed: %s", name, message)
            aggregator.set_async_set_up_state(name, AsyncSetUpState.FAILED, message)
            aggregator.add_error(name, None, None, message)

        aggregator.set_async_set_up_state(group_name, AsyncSetUpState.SETTING_UP)
        logger.info("Async set up of %s started", group_name)

        time_limit = group.set_up_time_limit or self.default_set_up_time_limit
        set_up_runner = AsyncSetUpRunner(group, group_name, on_ready, on_failure)
        self._pending.add(set_up_runner)
        try:
            set_up_runner.run_async(time_limit, loop)
        except Exception:
            self._pending.discard(set_up_runner)
            raise

    def _finish(self, set_up_runner: Optional[AsyncSetUpRunner]) -> None:
        self._pending.discard(set_up_runner)
        if not self._pending:
            self._wake_waiters()

    def _wake_waiters(self) -> None:
        if self._idle is not None:
            self._idle.set()
            self._idle = None

    def _notify(self, result: TestResult) -> None:
        if self.on_result_change is not None:
            self.on_result_change(result)
