"""Command-line argument parsing for calendartui."""

import argparse
from datetime import date, datetime
from pathlib import Path
from typing import List, Sequence

from .. import __version__
from ..core import dates
from ..ui.month import MONTH_NAMES

LOG_LEVELS = ["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"]


def create_parser() -> argparse.ArgumentParser:
    """Create the command line argument parser.

    Example:
        >>> parser = create_parser()
        >>> args = parser.parse_args(["6", "4", "--verbose"])
        >>> args.date
        ['6', '4']
    """
    parser = argparse.ArgumentParser(
        prog="calendartui",
        description="Terminal calendar with per-day markdown notes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                  # Open on today
  %(prog)s 10               # The 10th of this month
  %(prog)s 6 4              # April 6th of this year
  %(prog)s 6 4 2104         # April 6th, 2104
  %(prog)s 2008-05-04       # May 4th, 2008
  %(prog)s february         # Today's day in February
        """,
    )

    parser.add_argument(
        "date",
        nargs="*",
        metavar="DATE",
        help="Date to select: DD [MM [YYYY]], YYYY-MM-DD or a month name",
    )
    parser.add_argument(
        "--config", type=Path, metavar="PATH", help="Read settings from this YAML file"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}", help="Show version information"
    )

    logging_group = parser.add_argument_group("logging", "Logging configuration options")
    logging_group.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        help="Set both console and file log levels",
    )
    logging_group.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    logging_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only show errors in the log area (sets console level to ERROR)",
    )
    logging_group.add_argument("--log-dir", type=Path, help="Custom directory for log files")

    return parser


def _parse_number(word: str, what: str) -> int:
    try:
        return int(word)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"Invalid {what}: {word}") from err


def _build_date(year: int, month: int, day: int) -> date:
    try:
        return date(year, month, day)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"Invalid date: {err}") from err


def parse_month_name(word: str) -> int:
    """Get the month number for a full English month name in any case.

    Returns:
        1-12, or 0 if the word is not a month name
    """
    lowered = word.lower()
    for number, name in enumerate(MONTH_NAMES, start=1):
        if name.lower() == lowered:
            return number
    return 0


def parse_date_args(words: Sequence[str], today: date) -> date:
    """Resolve positional date words against today's date.

    Accepted forms: nothing (today), ``DD``, ``DD MM``, ``DD MM YYYY``,
    ``YYYY-MM-DD`` and a month name, which keeps today's day clamped to the
    length of that month.

    Args:
        words: Positional command-line words
        today: Date the missing parts are taken from

    Returns:
        The date to select

    Raises:
        argparse.ArgumentTypeError: If the words do not form a valid date
    """
    words = list(words)
    if not words:
        return today
    if len(words) > 3:
        raise argparse.ArgumentTypeError("Too many date arguments, expected DD [MM [YYYY]]")

    if len(words) == 1:
        word = words[0]
        if "-" in word:
            try:
                return datetime.strptime(word, "%Y-%m-%d").date()
            except ValueError as err:
                raise argparse.ArgumentTypeError(
                    f"Invalid date format: {word}. Use YYYY-MM-DD"
                ) from err

        month = parse_month_name(word)
        if month:
            day = min(today.day, dates.days_in(month, today.year))
            return date(today.year, month, day)

        return _build_date(today.year, today.month, _parse_number(word, "day"))

    numbers: List[int] = [
        _parse_number(word, what) for word, what in zip(words, ("day", "month", "year"))
    ]
    day, month = numbers[0], numbers[1]
    year = numbers[2] if len(numbers) == 3 else today.year
    return _build_date(year, month, day)
