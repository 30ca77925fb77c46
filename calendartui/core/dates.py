"""Calendar arithmetic used by month panels and grid navigation.

Weekdays are numbered the way the month grid is drawn: Sunday is column 0
and Saturday is column 6.
"""

from datetime import date, timedelta

SUNDAY = 0
SATURDAY = 6


def floor_mod(x: int, y: int) -> int:
    """Floor modulo that never returns a negative value for a positive modulus.

    The truncated remainder is computed first and then shifted into the
    range of the modulus, so the result does not depend on the sign rules of
    any built-in operator.

    Args:
        x: Dividend
        y: Modulus, must not be zero

    Returns:
        Remainder with the same sign as ``y``
    """
    quotient = abs(x) // abs(y)
    if (x < 0) != (y < 0):
        quotient = -quotient
    m = x - quotient * y
    if m > 0 and y < 0:
        m += y
    if m < 0 and y > 0:
        m += y
    return m


def weekday(d: date) -> int:
    """Get the grid column of a date (Sunday=0 .. Saturday=6)."""
    return d.isoweekday() % 7


def days_in(month: int, year: int) -> int:
    """Get the number of days in a month.

    Computed as "day 0 of the following month", i.e. the day before the
    first of the next month.

    Args:
        month: Month number, may fall outside 1-12 and is normalized
        year: Year of the month

    Returns:
        Number of days in the normalized month
    """
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    if month == 12:
        next_first = date(year + 1, 1, 1)
    else:
        next_first = date(year, month + 1, 1)
    return (next_first - timedelta(days=1)).day


def month_start(year: int, month: int) -> date:
    """Get the first day of a month, normalizing out-of-range month numbers."""
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1)


def add_months(d: date, n: int) -> date:
    """Shift a date by ``n`` calendar months.

    The day of the month is kept, or truncated to the last day of the target
    month when that month is shorter. The result never overflows into the
    following month.
    """
    start = month_start(d.year, d.month + n)
    day = min(d.day, days_in(start.month, start.year))
    return start.replace(day=day)


def last_month(d: date) -> date:
    """Get the same day in the previous month, truncated if needed."""
    return add_months(d, -1)


def next_month(d: date) -> date:
    """Get the same day in the next month, truncated if needed."""
    return add_months(d, 1)


def same_month(x: date, y: date) -> bool:
    """Check whether both dates fall in the same month of the same year."""
    return x.year == y.year and x.month == y.month


def first_day(d: date) -> date:
    """Get the first day of the month of ``d``."""
    return d.replace(day=1)


def last_day(d: date) -> date:
    """Get the last day of the month of ``d``."""
    return d.replace(day=days_in(d.month, d.year))


def grid_row(d: date) -> int:
    """Get the zero-based row of ``d`` in its month grid."""
    return (d.day - 1 + weekday(first_day(d))) // 7


def first_week(d: date) -> bool:
    """Check whether ``d`` is in the first displayed row of its month."""
    return grid_row(d) == 0


def last_week(d: date) -> bool:
    """Check whether ``d`` is in the last displayed row of its month."""
    return grid_row(d) == grid_row(last_day(d))


def last_sunday(d: date) -> date:
    """Get the closest Sunday strictly before ``d``."""
    offset = weekday(d)
    if offset == 0:
        offset = 7
    return d - timedelta(days=offset)


def next_sunday(d: date) -> date:
    """Get the closest Sunday strictly after ``d``."""
    offset = 7 - weekday(d)
    return d + timedelta(days=offset)


def next_saturday(d: date) -> date:
    """Get the closest Saturday strictly after ``d``."""
    offset = SATURDAY - weekday(d)
    if offset == 0:
        offset = 7
    return d + timedelta(days=offset)
