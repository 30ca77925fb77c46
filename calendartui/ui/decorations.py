"""Per-day styles that depend on note contents and holiday lists.

Computing them touches every note file of a month, so the controller runs
``load_decorations`` in a worker thread and receives the result as a
``DecorationsLoaded`` event.
"""

import logging
from datetime import date, timedelta
from typing import Dict

from ..core import dates
from ..display.styles import Style
from ..sources.holidays import HolidayList
from ..sources.keywords import KeywordList
from ..sources.notes import NoteStore

logger = logging.getLogger(__name__)


def load_decorations(
    month: date,
    notes: NoteStore,
    holidays: HolidayList,
    keywords: KeywordList,
    noted: Style,
) -> Dict[date, Style]:
    """Compute the special styles for every day of ``month``.

    Later sources override earlier ones: noted days, then holidays, then
    keyword matches. Today and the selection are styled at render time and
    are not part of the result.

    Args:
        month: Any day of the month to decorate
        notes: Note store to check for existing notes
        holidays: Holidays to color
        keywords: Keywords to look for in notes
        noted: Style for days with a note, ignored when blank

    Returns:
        Styles keyed by day; undecorated days are absent
    """
    styles: Dict[date, Style] = {}
    first = dates.first_day(month)
    last = dates.last_day(month)

    day = first
    while day <= last:
        if not noted.is_blank() and notes.exists(day):
            styles[day] = noted

        holiday = holidays.match(day)
        if holiday is not None:
            styles[day] = Style(color=holiday.color)

        if keywords and notes.exists(day):
            keyword = keywords.match(notes.load(day))
            if keyword is not None:
                styles[day] = Style(color=keyword.color)

        day += timedelta(days=1)

    logger.debug(f"Decorated {len(styles)} days in {first:%Y-%m}")
    return styles
