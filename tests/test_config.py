"""Tests for the configuration module."""

import pytest
from pydantic import ValidationError

from asyncunit.config import EngineConfig, get_default_config
from asyncunit.core.selection import RunAllSelection, TestSelection


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_default_values(self):
        """Test default values are set correctly."""
        config = get_default_config()
        assert config.private_member_prefix == "_"
        assert config.default_set_up_time_limit == 0.0
        assert config.selector is None
        assert config.log_level == "WARNING"

    def test_prefix_validation(self):
        """Test that the private prefix cannot be empty."""
        with pytest.raises(ValidationError):
            EngineConfig(private_member_prefix="")

    def test_time_limit_validation(self):
        """Test that the time limit cannot be negative."""
        with pytest.raises(ValidationError):
            EngineConfig(default_set_up_time_limit=-1)

    def test_selector_validation(self):
        """Test that the selector must follow the grammar."""
        with pytest.raises(ValidationError):
            EngineConfig(selector="not a selector")

    def test_log_level_case_insensitive(self):
        """Test that log level names are normalised."""
        assert EngineConfig(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            EngineConfig(log_level="chatty")

    def test_build_selection(self):
        """Test building the default selection."""
        assert isinstance(get_default_config().build_selection(), RunAllSelection)
        selection = EngineConfig(selector="#Suite/test_add(1)").build_selection()
        assert selection == TestSelection("Suite", "test_add", 1)

    def test_model_validate(self):
        """Test building a configuration from plain data."""
        config = EngineConfig.model_validate({"private_member_prefix": "skip_", "selector": "Suite2"})
        assert config.private_member_prefix == "skip_"
        assert config.build_selection() == TestSelection("Suite2")

    def test_apply_logging(self):
        """Test that the configured level reaches the package logger."""
        logger = EngineConfig(log_level="error").apply_logging()
        assert logger.name == "asyncunit"
        assert logger.level == 40
