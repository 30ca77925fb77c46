"""Tests for calendartui/ui/month.py month panels."""

from datetime import date

import pytest

from calendartui.display.styles import Style, Theme
from calendartui.ui.events import Action
from calendartui.ui.month import (
    MONTH_HEIGHT,
    MONTH_WIDTH,
    WEEKDAY_HEADER,
    LayoutMode,
    MonthPanel,
)


@pytest.fixture
def june_panel():
    """A focused grid panel showing June 2023 with the 15th selected."""
    panel = MonthPanel(date(2023, 6, 15), date(2023, 6, 1), date(2023, 6, 15), LayoutMode.GRID)
    panel.focus()
    return panel


class TestMonthPanelMove:
    """Test local selection moves."""

    def test_move_ignored_while_unfocused(self):
        """Test an unfocused panel keeps its selection."""
        panel = MonthPanel(date(2023, 6, 1), date(2023, 6, 1), date(2023, 6, 15))

        assert panel.move(Action.MOVE_RIGHT) is False
        assert panel.selected == date(2023, 6, 15)

    def test_column_layout_steps_plain_days(self):
        panel = MonthPanel(date(2023, 6, 1), date(2023, 6, 1), date(2023, 6, 17))
        panel.focus()

        assert panel.move(Action.MOVE_RIGHT) is True
        assert panel.selected == date(2023, 6, 18)

    def test_grid_layout_wraps_at_row_end(self, june_panel):
        june_panel.select(date(2023, 6, 17))

        june_panel.move(Action.MOVE_RIGHT)

        assert june_panel.selected == date(2023, 7, 9)

    @pytest.mark.parametrize(
        ("action", "expected"),
        [
            (Action.JUMP_LAST_SUNDAY, date(2023, 6, 11)),
            (Action.JUMP_NEXT_SUNDAY, date(2023, 6, 18)),
            (Action.JUMP_NEXT_SATURDAY, date(2023, 6, 17)),
            (Action.MONTH_UP, date(2023, 5, 15)),
            (Action.MONTH_DOWN, date(2023, 7, 15)),
            (Action.SCROLL_UP, date(2023, 6, 8)),
            (Action.SCROLL_DOWN, date(2023, 6, 22)),
        ],
    )
    def test_jump_actions(self, june_panel, action, expected):
        """Test week, month and wheel jumps."""
        assert june_panel.move(action) is True
        assert june_panel.selected == expected

    def test_non_navigation_action_changes_nothing(self, june_panel):
        assert june_panel.move(Action.YANK_DATE) is False
        assert june_panel.selected == date(2023, 6, 15)


class TestMonthPanelHitTest:
    """Test mapping panel coordinates to days."""

    def test_hit_first_day(self, june_panel):
        # June 1st 2023 is a Thursday, the fifth column
        assert june_panel.hit_test(12, 2) == date(2023, 6, 1)
        assert june_panel.hit_test(13, 2) == date(2023, 6, 1)

    def test_hit_last_day(self, june_panel):
        assert june_panel.hit_test(15, 6) == date(2023, 6, 30)

    def test_separator_column_is_not_a_day(self, june_panel):
        assert june_panel.hit_test(14, 2) is None

    def test_heading_rows_are_not_days(self, june_panel):
        assert june_panel.hit_test(12, 0) is None
        assert june_panel.hit_test(12, 1) is None

    def test_empty_cells_are_not_days(self, june_panel):
        assert june_panel.hit_test(0, 2) is None
        assert june_panel.hit_test(18, 6) is None

    def test_outside_panel(self, june_panel):
        assert june_panel.hit_test(-1, 3) is None
        assert june_panel.hit_test(MONTH_WIDTH, 3) is None


class TestMonthPanelRender:
    """Test panel rendering."""

    def test_render_dimensions(self, june_panel):
        """Test the panel is always MONTH_HEIGHT lines of MONTH_WIDTH cells."""
        lines = june_panel.render(Theme(colors=False))

        assert len(lines) == MONTH_HEIGHT
        assert all(len(line) == MONTH_WIDTH for line in lines)

    def test_render_four_row_month_is_padded(self):
        panel = MonthPanel(date(2015, 2, 1), date(2015, 2, 1), date(2015, 2, 1))

        lines = panel.render(Theme(colors=False))

        assert len(lines) == MONTH_HEIGHT
        assert lines[-1] == " " * MONTH_WIDTH

    def test_render_heading_and_first_row(self, june_panel):
        lines = june_panel.render(Theme(colors=False))

        assert lines[0].strip() == "June 2023"
        assert lines[1] == WEEKDAY_HEADER
        assert lines[2].endswith(" 1  2  3")

    def test_compact_title_omits_year(self):
        panel = MonthPanel(date(2023, 6, 1), date(2023, 6, 1), date(2023, 6, 1), compact=True)
        assert panel.title() == "June"

    def test_render_styles_selection_and_today(self, june_panel):
        text = "".join(june_panel.render(Theme()))

        assert "\x1b[7m15\x1b[0m" in text
        assert "\x1b[32m 1\x1b[0m" in text

    def test_render_dims_inactive_month(self):
        panel = MonthPanel(date(2023, 5, 1), date(2023, 6, 1), date(2023, 6, 15))

        lines = panel.render(Theme())

        assert lines[0].startswith("\x1b[90m")
        assert "\x1b[7m" not in "".join(lines)

    def test_render_applies_decorations(self, june_panel):
        decorations = {date(2023, 6, 20): Style(color="1")}

        text = "".join(june_panel.render(Theme(), decorations))

        assert "\x1b[31m20\x1b[0m" in text

    def test_today_overrides_decoration_color(self, june_panel):
        decorations = {date(2023, 6, 1): Style(color="1")}

        text = "".join(june_panel.render(Theme(), decorations))

        assert "\x1b[32m 1\x1b[0m" in text
