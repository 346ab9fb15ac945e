"""Core test engine functionality."""

from asyncunit.core.engine import TestEngine
from asyncunit.core.groups import AsyncSetUpTestGroup, TestGroup, load_groups, parameterize
from asyncunit.core.results import AsyncSetUpState, TestDescription, TestResult
from asyncunit.core.selection import RunAllSelection, SelectionFilter, TestSelection, parse_selector

__all__ = [
    "TestEngine",
    "TestGroup",
    "AsyncSetUpTestGroup",
    "load_groups",
    "parameterize",
    "AsyncSetUpState",
    "TestDescription",
    "TestResult",
    "SelectionFilter",
    "RunAllSelection",
    "TestSelection",
    "parse_selector",
]
