"""A single month panel: view state, local selection and rendering."""

import logging
from datetime import date, timedelta
from enum import Enum
from typing import List, Mapping, Optional, Tuple

from ..core import dates
from ..core.grid import Direction, column_move, grid_move
from ..display.styles import Style, Theme, center, pad_right
from .events import Action

logger = logging.getLogger(__name__)

MONTH_HEIGHT = 8
MONTH_WIDTH = 20
HEADING_ROWS = 2
CELL_WIDTH = 3

WEEKDAY_HEADER = "Su Mo Tu We Th Fr Sa"
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_DIRECTIONS = {
    Action.MOVE_LEFT: Direction.LEFT,
    Action.MOVE_RIGHT: Direction.RIGHT,
    Action.MOVE_UP: Direction.UP,
    Action.MOVE_DOWN: Direction.DOWN,
}

_JUMPS = {
    Action.JUMP_LAST_SUNDAY: dates.last_sunday,
    Action.JUMP_NEXT_SUNDAY: dates.next_sunday,
    Action.JUMP_NEXT_SATURDAY: dates.next_saturday,
    Action.MONTH_UP: dates.last_month,
    Action.MONTH_DOWN: dates.next_month,
}


class LayoutMode(Enum):
    """How a panel steps its selection."""

    COLUMN = "column"
    GRID = "grid"


class MonthPanel:
    """One month of the calendar.

    A panel keeps its own copy of the selected date. The layout engine owns
    the shared selection and copies it back into every panel after each
    event, so a panel only ever diverges for the duration of one update.
    """

    def __init__(
        self,
        anchor: date,
        today: date,
        selected: date,
        layout: LayoutMode = LayoutMode.COLUMN,
        compact: bool = False,
    ) -> None:
        """Initialize a month panel.

        Args:
            anchor: Any day of the month this panel displays
            today: Current date, highlighted when visible
            selected: Currently selected date
            layout: Selection stepping mode
            compact: Omit the year from the heading
        """
        self._anchor = dates.first_day(anchor)
        self._today = today
        self._selected = selected
        self._layout = layout
        self._compact = compact
        self._focused = False
        self.origin: Tuple[int, int] = (0, 0)

    @property
    def anchor(self) -> date:
        """Get the first day of the displayed month."""
        return self._anchor

    @property
    def selected(self) -> date:
        """Get the selection from the perspective of this panel."""
        return self._selected

    @property
    def today(self) -> date:
        return self._today

    @property
    def layout(self) -> LayoutMode:
        return self._layout

    @property
    def compact(self) -> bool:
        return self._compact

    @property
    def is_focused(self) -> bool:
        return self._focused

    def select(self, d: date) -> None:
        """Replace the local selection."""
        self._selected = d

    def focus(self) -> None:
        self._focused = True

    def unfocus(self) -> None:
        self._focused = False

    def set_today(self, d: date) -> None:
        self._today = d

    def move(self, action: Action) -> bool:
        """Translate an action into a new local selection.

        Args:
            action: Navigation action

        Returns:
            True if the local selection changed
        """
        if not self._focused:
            return False

        before = self._selected
        if action in _JUMPS:
            self._selected = _JUMPS[action](self._selected)
        elif action in _DIRECTIONS:
            if self._layout == LayoutMode.GRID:
                self._selected = grid_move(self._selected, _DIRECTIONS[action])
            else:
                self._selected = column_move(self._selected, _DIRECTIONS[action])
        elif action == Action.SCROLL_UP:
            self._selected = self._selected - timedelta(days=7)
        elif action == Action.SCROLL_DOWN:
            self._selected = self._selected + timedelta(days=7)

        return self._selected != before

    def hit_test(self, x: int, y: int) -> Optional[date]:
        """Find the day cell under a point relative to this panel's origin.

        Args:
            x: Column offset from the panel's left edge
            y: Row offset from the panel's top edge

        Returns:
            The date of the day cell, or None if the point is not on one
        """
        row = y - HEADING_ROWS
        if row < 0 or x < 0 or x >= MONTH_WIDTH:
            return None

        column, within = divmod(x, CELL_WIDTH)
        if within == CELL_WIDTH - 1:
            # The separator between two cells.
            return None

        day = row * 7 + column - dates.weekday(self._anchor) + 1
        if day < 1 or day > dates.days_in(self._anchor.month, self._anchor.year):
            return None
        return self._anchor.replace(day=day)

    def title(self) -> str:
        """Get the heading text for this month."""
        name = MONTH_NAMES[self._anchor.month - 1]
        if self._compact:
            return name
        return f"{name} {self._anchor.year}"

    def _heading(self, theme: Theme) -> List[str]:
        lines = [center(self.title(), MONTH_WIDTH), WEEKDAY_HEADER]
        if not dates.same_month(self._anchor, self._selected):
            lines = [theme.apply(theme.inactive, line) for line in lines]
        return lines

    def _day_style(self, day: date, theme: Theme, decorations: Mapping[date, Style]) -> Style:
        style = Style()
        if dates.same_month(self._anchor, self._selected):
            if day == self._selected:
                style = style.layer(theme.selected)
        else:
            style = style.layer(theme.inactive)

        decoration = decorations.get(day)
        if decoration is not None:
            style = style.layer(decoration)

        if day == self._today:
            style = style.layer(theme.today)
        return style

    def _grid(self, theme: Theme, decorations: Mapping[date, Style]) -> List[str]:
        offset = dates.weekday(self._anchor)
        last = dates.days_in(self._anchor.month, self._anchor.year)

        cells = ["  "] * offset
        for number in range(1, last + 1):
            day = self._anchor.replace(day=number)
            style = self._day_style(day, theme, decorations)
            cells.append(theme.apply(style, f"{number:2d}"))

        rows = []
        for start in range(0, len(cells), 7):
            rows.append(pad_right(" ".join(cells[start : start + 7]), MONTH_WIDTH))
        return rows

    def render(self, theme: Theme, decorations: Optional[Mapping[date, Style]] = None) -> List[str]:
        """Render the panel as exactly ``MONTH_HEIGHT`` lines of ``MONTH_WIDTH`` cells.

        Args:
            theme: Styles to draw with
            decorations: Extra per-day styles (notes, holidays, keywords)

        Returns:
            Rendered lines
        """
        lines = self._heading(theme) + self._grid(theme, decorations or {})
        while len(lines) < MONTH_HEIGHT:
            lines.append(" " * MONTH_WIDTH)
        return lines

    def __repr__(self) -> str:
        return (
            f"MonthPanel(anchor={self._anchor!r}, selected={self._selected!r}, "
            f"today={self._today!r}, layout={self._layout.value}, focused={self._focused})"
        )
