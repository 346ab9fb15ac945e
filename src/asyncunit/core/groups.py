"""Test group base classes and registration helpers."""

import inspect
from types import ModuleType
from typing import Any, Callable, Iterable, Sequence

from asyncunit.tasks.base import TaskFailureCallback, TaskSuccess

DEFAULT_PRIVATE_PREFIX = "_"


def parameterize(*parameter_sets: Sequence[Any]) -> Callable:
    """Attach parameter sets to a test method.

    The engine runs the test once per set, passing the set as positional
    arguments:

        @parameterize([1, 2, 3], [4, 5, 9])
        def test_add(self, a, b, expected):
            ...
    """

    def decorator(method: Callable) -> Callable:
        method.parameters = [tuple(p) for p in parameter_sets]
        return method

    return decorator


class TestGroup:
    """A named collection of test methods sharing set up and tear down.

    Every public callable defined in a subclass body is a test, in the
    order it was declared.
    """

    __test__ = False

    def set_up(self) -> None:
        """Called before each test."""
        pass

    def tear_down(self) -> None:
        """Called after each test, even if it failed."""
        pass

    @staticmethod
    def parameterize_unit_test(method: Callable, parameter_sets: Iterable[Sequence[Any]]) -> None:
        """Attach parameter sets to an already defined test function."""
        target = getattr(method, "__func__", method)
        target.parameters = [tuple(p) for p in parameter_sets]

    def test_names(self, private_prefix: str = DEFAULT_PRIVATE_PREFIX) -> list[str]:
        """List this group's test names in declaration order."""
        names: list[str] = []
        for cls in reversed(type(self).__mro__):
            if cls is object:
                continue
            for name in vars(cls):
                if name in names or name.startswith("__"):
                    continue
                if name in RESERVED_NAMES or (private_prefix and name.startswith(private_prefix)):
                    continue
                if not callable(getattr(self, name, None)):
                    continue
                names.append(name)
        return names


class AsyncSetUpTestGroup(TestGroup):
    """A test group that must finish an asynchronous set up before its tests run."""

    set_up_time_limit: float = 0

    def async_set_up(self, on_success: TaskSuccess, on_failure: TaskFailureCallback) -> None:
        """Prepare the group, then call ``on_success()`` or ``on_failure(message)``."""
        raise NotImplementedError("async_set_up is not implemented")


RESERVED_NAMES = frozenset(
    name
    for cls in (TestGroup, AsyncSetUpTestGroup)
    for name in vars(cls)
    if not name.startswith("_")
)


def has_async_set_up(group: TestGroup) -> bool:
    return isinstance(group, AsyncSetUpTestGroup)


def load_groups(module: ModuleType) -> list[tuple[str, TestGroup]]:
    """Instantiate every test group class defined in a module.

    Returns:
        ``(class name, instance)`` pairs in definition order
    """
    groups = []
    for name, value in vars(module).items():
        if not inspect.isclass(value) or not issubclass(value, TestGroup):
            continue
        if value in (TestGroup, AsyncSetUpTestGroup) or value.__module__ != module.__name__:
            continue
        groups.append((name, value()))
    return groups
