"""Selection of groups, tests and parameter sets to run.

A selector string names what to run:

    Group               every test of one group
    Group/test          one test of one group
    Group/test(N)       parameter set N of one test

A leading ``#`` is accepted. An empty selector (or a bare ``#``) selects
everything.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from asyncunit.errors import SelectorError

SELECTOR_PATTERN = re.compile(r"^#?([_a-zA-Z0-9]+)((/([_a-zA-Z0-9]+))(\(([0-9]+)\))?)?$")


class SelectionFilter(ABC):
    """Decides what runs, one level at a time.

    The three checks are independent; the engine asks each at the matching
    point of its iteration.
    """

    @abstractmethod
    def is_group_active(self, group_name: str) -> bool:
        pass

    @abstractmethod
    def is_test_active(self, test_name: str) -> bool:
        pass

    @abstractmethod
    def is_parameter_set_active(self, parameter_set_index: int) -> bool:
        pass


class RunAllSelection(SelectionFilter):
    """Selects everything."""

    def is_group_active(self, group_name: str) -> bool:
        return True

    def is_test_active(self, test_name: str) -> bool:
        return True

    def is_parameter_set_active(self, parameter_set_index: int) -> bool:
        return True


@dataclass(frozen=True)
class TestSelection(SelectionFilter):
    """Exact-match selection; a None level does not restrict."""

    __test__ = False

    group_name: Optional[str] = None
    test_name: Optional[str] = None
    parameter_set_index: Optional[int] = None

    def is_group_active(self, group_name: str) -> bool:
        if self.group_name is None:
            return True
        return self.group_name == group_name

    def is_test_active(self, test_name: str) -> bool:
        if self.test_name is None:
            return True
        return self.test_name == test_name

    def is_parameter_set_active(self, parameter_set_index: int) -> bool:
        if self.parameter_set_index is None:
            return True
        return self.parameter_set_index == parameter_set_index

    @classmethod
    def from_selector(cls, selector: Optional[str]) -> "TestSelection":
        return parse_selector(selector)

    def to_selector(self) -> str:
        return format_selector(self.group_name, self.test_name, self.parameter_set_index)


def parse_selector(selector: Optional[str]) -> TestSelection:
    """Parse a selector string into a TestSelection.

    Raises:
        SelectorError: If the string does not follow the selector grammar
    """
    if selector is None:
        return TestSelection()

    selector = selector.strip()
    if selector in ("", "#"):
        return TestSelection()

    match = SELECTOR_PATTERN.match(selector)
    if match is None:
        raise SelectorError(f"Invalid selector: {selector!r}")

    index = match.group(6)
    return TestSelection(
        group_name=match.group(1),
        test_name=match.group(4),
        parameter_set_index=int(index, 10) if index is not None else None,
    )


def format_selector(
    group_name: Optional[str],
    test_name: Optional[str] = None,
    parameter_set_index: Optional[int] = None,
) -> str:
    """Build the selector string for a group, test or parameter set."""
    if group_name is None:
        return ""

    selector = group_name
    if test_name is not None:
        selector += f"/{test_name}"
        if parameter_set_index is not None:
            selector += f"({parameter_set_index})"
    return selector
