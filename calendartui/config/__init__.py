"""Configuration management for calendartui."""

from .settings import (
    CalendarSettings,
    KeyBindings,
    KeywordSettings,
    LoggingSettings,
    StyleSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "CalendarSettings",
    "KeyBindings",
    "KeywordSettings",
    "LoggingSettings",
    "StyleSettings",
    "get_settings",
    "reset_settings",
]
