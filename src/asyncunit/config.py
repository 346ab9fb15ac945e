"""Configuration management for AsyncUnit."""

import logging
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from rich.console import Console

from asyncunit.core.selection import RunAllSelection, SelectionFilter, parse_selector
from asyncunit.errors import SelectorError
from asyncunit.logs import configure_logging


class EngineConfig(BaseModel):
    """Configuration for the test engine."""

    private_member_prefix: str = Field(default="_", description="Members starting with this prefix are not tests")
    default_set_up_time_limit: float = Field(
        default=0.0,
        description="Async set up time limit in seconds for groups that set none (0 = no limit)",
    )
    selector: Optional[str] = Field(
        default=None,
        description="What to run: 'Group', 'Group/test' or 'Group/test(N)' (default: everything)",
    )
    log_level: str = Field(default="WARNING", description="Logging level name")

    @field_validator("private_member_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        if not v:
            raise ValueError("Private member prefix cannot be empty")
        return v

    @field_validator("default_set_up_time_limit")
    @classmethod
    def validate_time_limit(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Time limit cannot be negative")
        return v

    @field_validator("selector")
    @classmethod
    def validate_selector(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            parse_selector(v)
        except SelectorError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def build_selection(self) -> SelectionFilter:
        """Build the default selection for the engine."""
        if self.selector is None:
            return RunAllSelection()
        return parse_selector(self.selector)

    def apply_logging(self, console: Optional[Console] = None) -> logging.Logger:
        """Configure the package logger at ``log_level``."""
        return configure_logging(self.log_level, console)


def get_default_config() -> EngineConfig:
    """Return a default configuration."""
    return EngineConfig()
