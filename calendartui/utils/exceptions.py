"""Application-specific exceptions."""


class CalendarTuiError(Exception):
    """Base exception for all calendartui errors."""


class ConfigurationError(CalendarTuiError):
    """Exception raised when the configuration file cannot be used."""


class HolidayParseError(CalendarTuiError):
    """Exception raised when a holiday list line cannot be parsed."""

    def __init__(self, line: int, reason: str) -> None:
        """Initialize HolidayParseError.

        Args:
            line: One-based line number in the holiday list
            reason: What was wrong with the line
        """
        super().__init__(f"line {line}: {reason}")
        self.line = line
        self.reason = reason
