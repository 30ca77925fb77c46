"""Shared utilities."""

from .exceptions import CalendarTuiError, ConfigurationError, HolidayParseError
from .logging import apply_command_line_overrides, setup_logging

__all__ = [
    "CalendarTuiError",
    "ConfigurationError",
    "HolidayParseError",
    "apply_command_line_overrides",
    "setup_logging",
]
