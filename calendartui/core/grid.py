"""Directional cursor movement across month grids.

Grid panels lay each month out as a seven column (Sunday-Saturday) matrix.
Moving off the edge of a month continues in the neighbouring month while
keeping the cursor on the same row or column where that month has one. When
the neighbouring month is too short the cursor is clamped to its last day.
"""

import logging
from datetime import date, timedelta
from enum import Enum

from . import dates

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Direction of a cursor move."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


# Month distance of a vertical jump off the top or bottom of a month.
DOWN_MONTHS = 4
UP_MONTHS = 3


def grid_left(d: date) -> date:
    """Move one cell left, wrapping to the Saturday column of the previous month.

    Args:
        d: Current selection

    Returns:
        New selection
    """
    if dates.weekday(d) != dates.SUNDAY and d.day != 1:
        return d - timedelta(days=1)

    row = dates.grid_row(d)
    previous = dates.first_day(dates.last_month(d))
    previous_end = dates.last_day(previous)

    # Day number of the Saturday cell in the same row of the previous month.
    saturday = dates.SATURDAY - dates.weekday(previous) + 1 + row * 7
    if saturday > previous_end.day:
        return previous_end
    return previous.replace(day=saturday)


def grid_right(d: date) -> date:
    """Move one cell right, wrapping to the Sunday column of the next month.

    Args:
        d: Current selection

    Returns:
        New selection
    """
    if dates.weekday(d) != dates.SATURDAY and d != dates.last_day(d):
        return d + timedelta(days=1)

    row = dates.grid_row(d)
    following = dates.first_day(dates.next_month(d))
    if row == 0:
        return following

    row = min(row, dates.grid_row(dates.last_day(following)))
    sunday = 1 - dates.weekday(following) + row * 7
    return following.replace(day=sunday)


def grid_down(d: date) -> date:
    """Move one row down, jumping to the first row of a later month from the last row."""
    if not dates.last_week(d):
        return d + timedelta(days=7)

    target = dates.month_start(d.year, d.month + DOWN_MONTHS)
    offset = dates.weekday(d) - dates.weekday(target)
    if offset < 0:
        offset += 7
    return target + timedelta(days=offset)


def grid_up(d: date) -> date:
    """Move one row up, jumping to the last row of an earlier month from the first row."""
    if not dates.first_week(d):
        return d - timedelta(days=7)

    target = dates.last_day(dates.month_start(d.year, d.month - UP_MONTHS))
    offset = dates.weekday(d) - dates.weekday(target)
    if offset > 0:
        offset -= 7
    return target + timedelta(days=offset)


_GRID_MOVES = {
    Direction.LEFT: grid_left,
    Direction.RIGHT: grid_right,
    Direction.UP: grid_up,
    Direction.DOWN: grid_down,
}

_COLUMN_STEPS = {
    Direction.LEFT: -1,
    Direction.RIGHT: 1,
    Direction.UP: -7,
    Direction.DOWN: 7,
}


def grid_move(d: date, direction: Direction) -> date:
    """Move the selection inside a full month grid layout.

    The returned date may belong to a different month than ``d``; callers
    are responsible for noticing and rebuilding their panels.
    """
    moved = _GRID_MOVES[direction](d)
    logger.debug(f"Grid move {direction.value}: {d} -> {moved}")
    return moved


def column_move(d: date, direction: Direction) -> date:
    """Move the selection by plain day steps, ignoring month boundaries."""
    return d + timedelta(days=_COLUMN_STEPS[direction])
