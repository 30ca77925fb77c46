"""Panel arrangement, focus and selection ownership for the month view."""

import logging
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple

from ..core import dates
from .events import Action, PointerClick
from .month import MONTH_HEIGHT, MONTH_WIDTH, LayoutMode, MonthPanel

logger = logging.getLogger(__name__)

FULL_COLUMNS = 4
FULL_ROWS = 3


class ViewportMode(Enum):
    """How many months are on screen."""

    SINGLE = 1
    TRIPLE = 3
    FULL = 12


class FocusTarget(Enum):
    """Which part of the screen receives navigation input."""

    MONTHS_FOCUSED = "months"
    PREVIEW_FOCUSED = "preview"
    PREVIEW_HIDDEN = "hidden"


class LayoutEngine:
    """Owns the month panels and the single source of truth for the selection.

    Panels are rebuilt whenever the viewport changes. After every event the
    engine reconciles the panels' local selections back into one shared
    selection (see ``converge``).
    """

    def __init__(
        self,
        selected: date,
        today: date,
        left_padding: int = 2,
        right_padding: int = 1,
        focus: FocusTarget = FocusTarget.MONTHS_FOCUSED,
    ) -> None:
        """Initialize the layout engine with a single month panel.

        Args:
            selected: Initially selected date
            today: Current date
            left_padding: Columns between panels and left of the frame
            right_padding: Columns right of the frame
            focus: Initial focus target
        """
        self._selected = selected
        self._today = today
        self.left_padding = left_padding
        self.right_padding = right_padding
        self._width = 0
        self._height = 0
        self._mode = ViewportMode.SINGLE
        self._focus = focus
        self._panels: List[MonthPanel] = self._build_panels(ViewportMode.SINGLE)
        self._place_panels()
        self.set_focus(focus)

        logger.debug(f"Layout engine initialized with selection {selected}")

    @property
    def selected(self) -> date:
        return self._selected

    @property
    def today(self) -> date:
        return self._today

    @property
    def mode(self) -> ViewportMode:
        return self._mode

    @property
    def focus(self) -> FocusTarget:
        return self._focus

    @property
    def panels(self) -> Tuple[MonthPanel, ...]:
        return tuple(self._panels)

    @property
    def preview_visible(self) -> bool:
        return self._focus != FocusTarget.PREVIEW_HIDDEN

    def full_width(self) -> int:
        """Get the width a full year of panels needs, including gaps and outer padding."""
        gaps = (FULL_COLUMNS - 1) * self.left_padding
        return FULL_COLUMNS * MONTH_WIDTH + gaps + self.left_padding + self.right_padding

    def decide_mode(self, width: int, height: int) -> ViewportMode:
        """Pick the viewport mode for the given terminal size and current focus.

        Args:
            width: Terminal width in cells
            height: Terminal height in cells

        Returns:
            The viewport mode that fits
        """
        if width <= 0 or height <= 0:
            return ViewportMode.SINGLE
        if height > FULL_ROWS * MONTH_HEIGHT:
            if not self.preview_visible and width > self.full_width():
                return ViewportMode.FULL
            return ViewportMode.TRIPLE
        return ViewportMode.SINGLE

    def resize(self, width: Optional[int] = None, height: Optional[int] = None) -> ViewportMode:
        """Rebuild the panels for a new or unchanged viewport size.

        Args:
            width: New terminal width, or None to keep the current one
            height: New terminal height, or None to keep the current one

        Returns:
            The active viewport mode after rebuilding
        """
        if width is not None:
            self._width = width
        if height is not None:
            self._height = height

        previous = self._mode
        self._mode = self.decide_mode(self._width, self._height)
        self._panels = self._build_panels(self._mode)
        self._place_panels()

        # Rebuilt panels start unfocused.
        self.set_focus(self._focus)

        if previous != self._mode:
            logger.debug(f"Viewport mode {previous.name} -> {self._mode.name}")
        return self._mode

    def _panel(self, anchor: date, layout: LayoutMode, compact: bool = False) -> MonthPanel:
        return MonthPanel(anchor, self._today, self._selected, layout, compact)

    def _build_panels(self, mode: ViewportMode) -> List[MonthPanel]:
        selected = self._selected
        if mode == ViewportMode.SINGLE:
            return [self._panel(selected, LayoutMode.COLUMN)]

        if mode == ViewportMode.FULL:
            return [
                self._panel(date(selected.year, month, 1), LayoutMode.GRID, compact=True)
                for month in range(1, 13)
            ]

        offset = dates.floor_mod(self._today.month - selected.month, 3)
        # offset 0 centers the selection, 1 puts it first, 2 puts it last
        first = dates.add_months(dates.first_day(selected), {0: -1, 1: 0, 2: -2}[offset])
        return [self._panel(dates.add_months(first, i), LayoutMode.GRID) for i in range(3)]

    def _place_panels(self) -> None:
        """Assign every panel its origin inside the months block."""
        if self._mode == ViewportMode.SINGLE:
            self._panels[0].origin = (0, 0)
        elif self._mode == ViewportMode.TRIPLE:
            # One blank line on top lines the panels up with the preview border.
            for i, panel in enumerate(self._panels):
                panel.origin = (0, 1 + i * MONTH_HEIGHT)
        else:
            # The year banner takes the first line.
            for i, panel in enumerate(self._panels):
                row, column = divmod(i, FULL_COLUMNS)
                panel.origin = (column * (MONTH_WIDTH + self.left_padding), 1 + row * MONTH_HEIGHT)

    def block_size(self) -> Tuple[int, int]:
        """Get the width and height of the rendered months block."""
        if self._mode == ViewportMode.SINGLE:
            return MONTH_WIDTH, MONTH_HEIGHT
        if self._mode == ViewportMode.TRIPLE:
            return MONTH_WIDTH, 1 + 3 * MONTH_HEIGHT
        width = FULL_COLUMNS * MONTH_WIDTH + (FULL_COLUMNS - 1) * self.left_padding
        return width, 1 + FULL_ROWS * MONTH_HEIGHT

    def set_focus(self, target: FocusTarget) -> None:
        """Set the focus target and push it down to the panels."""
        for panel in self._panels:
            if target == FocusTarget.PREVIEW_FOCUSED:
                panel.unfocus()
            else:
                panel.focus()
        self._focus = target

    def toggle_focus(self) -> bool:
        """Switch focus between the months and the preview.

        Returns:
            False if the preview is hidden and focus did not change
        """
        if self._focus == FocusTarget.PREVIEW_HIDDEN:
            logger.debug("Ignoring focus toggle while the preview is hidden")
            return False
        if self._focus == FocusTarget.MONTHS_FOCUSED:
            self.set_focus(FocusTarget.PREVIEW_FOCUSED)
        else:
            self.set_focus(FocusTarget.MONTHS_FOCUSED)
        self.resize()
        return True

    def toggle_preview(self) -> None:
        """Show or hide the preview and re-evaluate the layout."""
        if self._focus == FocusTarget.PREVIEW_HIDDEN:
            self.set_focus(FocusTarget.MONTHS_FOCUSED)
        else:
            self.set_focus(FocusTarget.PREVIEW_HIDDEN)
        self.resize()

    def set_today(self, d: date) -> None:
        """Broadcast a new current date to every panel."""
        self._today = d
        for panel in self._panels:
            panel.set_today(d)

    def select(self, d: date) -> bool:
        """Make ``d`` the shared selection and copy it into every panel.

        Selecting also returns focus to the months unless the preview is
        hidden.

        Args:
            d: Newly selected date

        Returns:
            True if the panels had to be rebuilt because ``d`` was off-screen
        """
        self._selected = d
        off_screen = True
        for panel in self._panels:
            if dates.same_month(panel.anchor, d):
                off_screen = False
            panel.select(d)

        if self._focus != FocusTarget.PREVIEW_HIDDEN:
            self.set_focus(FocusTarget.MONTHS_FOCUSED)

        if off_screen:
            logger.debug(f"Selection {d} is off-screen, rebuilding panels")
            self.resize()
        return off_screen

    def deliver(self, event: object) -> None:
        """Hand an event to every panel in panel order."""
        for panel in self._panels:
            if isinstance(event, Action):
                panel.move(event)
            elif isinstance(event, PointerClick):
                x, y = panel.origin
                hit = panel.hit_test(event.x - x, event.y - y)
                if hit is not None:
                    panel.select(hit)

    def converge(self) -> bool:
        """Reconcile the panels' local selections into the shared selection.

        Every panel is scanned. When several panels diverged in the same
        cycle the last one scanned wins.

        Returns:
            True if the shared selection changed
        """
        diverged = [panel.selected for panel in self._panels if panel.selected != self._selected]
        if not diverged:
            return False

        winner = diverged[-1]
        if len(set(diverged)) > 1:
            logger.debug(f"Panels diverged to {sorted(set(diverged))}, keeping {winner}")
        self.select(winner)
        return True

    def propagate(self, event: object) -> bool:
        """Deliver an event to the panels and run the convergence scan.

        Returns:
            True if the shared selection changed
        """
        self.deliver(event)
        return self.converge()

    def __repr__(self) -> str:
        return (
            f"LayoutEngine(mode={self._mode.name}, focus={self._focus.name}, "
            f"selected={self._selected!r}, panels={len(self._panels)})"
        )
