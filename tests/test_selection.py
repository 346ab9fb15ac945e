"""Tests for test selection."""

import pytest

from asyncunit.core.selection import RunAllSelection, TestSelection, format_selector, parse_selector
from asyncunit.errors import SelectorError


class TestTestSelection:
    """Tests for the three selection levels."""

    def test_empty_selection_allows_everything(self):
        """Test that unset levels do not restrict."""
        selection = TestSelection()
        assert selection.is_group_active("Any")
        assert selection.is_test_active("any_test")
        assert selection.is_parameter_set_active(7)

    def test_exact_match(self):
        """Test exact matching at each level."""
        selection = TestSelection("Suite2", "test_add", 1)
        assert selection.is_group_active("Suite2")
        assert not selection.is_group_active("Suite1")
        assert selection.is_test_active("test_add")
        assert not selection.is_test_active("test_sub")
        assert selection.is_parameter_set_active(1)
        assert not selection.is_parameter_set_active(0)

    def test_levels_are_independent(self):
        """Test that a test selector alone does not restrict groups."""
        selection = TestSelection(test_name="test_add")
        assert selection.is_group_active("Whatever")
        assert not selection.is_test_active("other")

    def test_run_all(self):
        """Test the unconditional selection."""
        selection = RunAllSelection()
        assert selection.is_group_active("x")
        assert selection.is_test_active("y")
        assert selection.is_parameter_set_active(0)


class TestParseSelector:
    """Tests for the selector grammar."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Suite", TestSelection("Suite")),
            ("#Suite", TestSelection("Suite")),
            ("Suite/test_add", TestSelection("Suite", "test_add")),
            ("#Suite/test_add(12)", TestSelection("Suite", "test_add", 12)),
            ("", TestSelection()),
            ("#", TestSelection()),
            (None, TestSelection()),
        ],
    )
    def test_valid(self, text, expected):
        """Test parsing valid selectors."""
        assert parse_selector(text) == expected

    @pytest.mark.parametrize("text", ["Suite(1)", "Suite/", "Su-ite", "Suite/test(x)", "a/b/c"])
    def test_invalid(self, text):
        """Test that malformed selectors are rejected."""
        with pytest.raises(SelectorError):
            parse_selector(text)

    def test_format_selector(self):
        """Test building selector strings."""
        assert format_selector("Suite") == "Suite"
        assert format_selector("Suite", "test_add") == "Suite/test_add"
        assert format_selector("Suite", "test_add", 3) == "Suite/test_add(3)"
        assert format_selector("Suite", None, 3) == "Suite"
        assert format_selector(None) == ""

    def test_from_and_to_selector(self):
        """Test the TestSelection convenience methods."""
        selection = TestSelection.from_selector("G/t(2)")
        assert selection.to_selector() == "G/t(2)"
