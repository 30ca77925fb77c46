"""Holiday lists: dated, colored messages shown on the calendar.

A holiday list is a text file with one holiday per line::

    2024-07-04 1 Independence Day
    12-25 2 Christmas
    01 8 Rent is due

The date may be a full ``YYYY-MM-DD`` date, a yearly ``MM-DD`` date or a
monthly ``DD`` day. The second field is the color and the remainder of the
line is the message.
"""

import logging
import os
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from ..utils.exceptions import HolidayParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Holiday:
    """A recurring or one-off holiday."""

    day: int
    color: str
    message: str
    month: Optional[int] = None
    year: Optional[int] = None

    def matches(self, d: date) -> bool:
        """Check whether the holiday falls on ``d``."""
        if self.year is not None and self.year != d.year:
            return False
        if self.month is not None and self.month != d.month:
            return False
        return self.day == d.day


def parse_date(text: str) -> Holiday:
    """Parse the date field of a holiday line into a message-less holiday.

    Raises:
        ValueError: If the text is not a valid date in any supported form
    """
    try:
        parsed = datetime.strptime(text, "%Y-%m-%d")
        return Holiday(day=parsed.day, month=parsed.month, year=parsed.year, color="", message="")
    except ValueError:
        pass

    try:
        # Leap year so 02-29 is accepted as a yearly date.
        parsed = datetime.strptime(f"2000-{text}", "%Y-%m-%d")
        return Holiday(day=parsed.day, month=parsed.month, color="", message="")
    except ValueError:
        pass

    if text.isdigit() and 1 <= int(text) <= 31 and len(text) <= 2:
        return Holiday(day=int(text), color="", message="")
    raise ValueError(f"unrecognized date {text!r}")


def parse(lines: Iterable[str]) -> List[Holiday]:
    """Parse the lines of a holiday list.

    Args:
        lines: Lines of the holiday list

    Returns:
        Parsed holidays in file order

    Raises:
        HolidayParseError: If a line has too few fields or an invalid date
    """
    holidays = []
    for number, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line:
            continue

        parts = line.split(" ")
        if len(parts) < 2:
            raise HolidayParseError(number, "not enough fields")

        try:
            when = parse_date(parts[0])
        except ValueError as e:
            raise HolidayParseError(number, f"invalid date {parts[0]}: {e}") from e

        holidays.append(
            Holiday(
                day=when.day,
                month=when.month,
                year=when.year,
                color=parts[1],
                message=" ".join(parts[2:]),
            )
        )
    return holidays


class HolidayList:
    """All holidays from the configured lists."""

    def __init__(self, holidays: Optional[Sequence[Holiday]] = None) -> None:
        self.holidays = list(holidays or [])

    @classmethod
    def load(cls, paths: Iterable[Union[str, Path]]) -> "HolidayList":
        """Load and merge holiday lists, skipping lists that cannot be used.

        Unreadable or malformed lists are logged and ignored so the calendar
        still starts.
        """
        holidays: List[Holiday] = []
        for raw in paths:
            if not str(raw):
                continue
            path = Path(os.path.expanduser(os.path.expandvars(str(raw))))
            try:
                with path.open(encoding="utf-8") as f:
                    holidays.extend(parse(f))
            except OSError as e:
                logger.warning(f"Could not read holiday list {path}: {e}")
            except HolidayParseError as e:
                logger.warning(f"Failed parsing holiday list {path}: {e}")

        logger.debug(f"Loaded {len(holidays)} holidays")
        return cls(holidays)

    def match(self, d: date) -> Optional[Holiday]:
        """Find the first holiday falling on ``d``."""
        for holiday in self.holidays:
            if holiday.matches(d):
                return holiday
        return None

    def prefix(self, d: date, note: str) -> str:
        """Prepend the message of a matching holiday to a note."""
        holiday = self.match(d)
        if holiday is None:
            return note
        return f"{holiday.message}\n\n{note}"

    def __len__(self) -> int:
        return len(self.holidays)
