"""Tests for test group definitions."""

import types

import pytest

from asyncunit.core.groups import (
    RESERVED_NAMES,
    AsyncSetUpTestGroup,
    TestGroup,
    has_async_set_up,
    load_groups,
    parameterize,
)


class Calculator(TestGroup):
    limit = 10

    def test_add(self):
        pass

    def _helper(self):
        pass

    @parameterize([1, 2, 3], [4, 5, 9])
    def test_sum(self, a, b, expected):
        pass

    def another(self):
        pass


class ExtendedCalculator(Calculator):
    def test_mul(self):
        pass

    def test_add(self):
        pass


class TestTestNames:
    """Tests for test enumeration."""

    def test_declaration_order(self):
        """Test that tests come in declaration order without private or plain members."""
        assert Calculator().test_names() == ["test_add", "test_sum", "another"]

    def test_subclass_appends_after_base(self):
        """Test that overriding keeps the base position."""
        assert ExtendedCalculator().test_names() == ["test_add", "test_sum", "another", "test_mul"]

    def test_custom_private_prefix(self):
        """Test a different private member prefix."""
        names = Calculator().test_names(private_prefix="test_")
        assert names == ["_helper", "another"]

    def test_reserved_names_excluded(self):
        """Test that lifecycle members are never tests."""

        class Group(AsyncSetUpTestGroup):
            def test_one(self):
                pass

        assert Group().test_names() == ["test_one"]
        assert {"set_up", "tear_down", "async_set_up", "set_up_time_limit"} <= RESERVED_NAMES


class TestParameterize:
    """Tests for parameter sets."""

    def test_decorator_attaches_sets(self):
        """Test that the decorator stores argument tuples."""
        assert Calculator.test_sum.parameters == [(1, 2, 3), (4, 5, 9)]
        assert Calculator().test_sum.parameters == [(1, 2, 3), (4, 5, 9)]

    def test_parameterize_unit_test(self):
        """Test attaching parameter sets at runtime."""

        class Group(TestGroup):
            def test_values(self, value):
                pass

        group = Group()
        group.parameterize_unit_test(group.test_values, [[1], [2]])
        assert group.test_values.parameters == [(1,), (2,)]


class TestAsyncSetUpGroup:
    """Tests for the async set up capability."""

    def test_capability_marker(self):
        """Test that only async groups have async set up."""
        assert has_async_set_up(AsyncSetUpTestGroup())
        assert not has_async_set_up(Calculator())

    def test_default_async_set_up_raises(self):
        """Test that the base async set up must be overridden."""
        with pytest.raises(NotImplementedError):
            AsyncSetUpTestGroup().async_set_up(None, None)

    def test_default_time_limit(self):
        """Test the default set up time limit."""
        assert AsyncSetUpTestGroup.set_up_time_limit == 0


class TestLoadGroups:
    """Tests for loading groups from a module."""

    def test_load_groups(self):
        """Test that only groups defined in the module are loaded, in order."""
        module = types.ModuleType("sample_tests")

        class First(TestGroup):
            pass

        class Second(AsyncSetUpTestGroup):
            pass

        First.__module__ = "sample_tests"
        Second.__module__ = "sample_tests"
        module.First = First
        module.TestGroup = TestGroup
        module.Imported = Calculator
        module.Second = Second
        module.value = 3

        groups = load_groups(module)

        assert [name for name, _ in groups] == ["First", "Second"]
        assert isinstance(groups[0][1], First)
        assert isinstance(groups[1][1], Second)
