"""Tests for calendartui/display/console_renderer.py frame composition."""

import io
from datetime import date

import pytest

from calendartui.display.console_renderer import (
    ALT_SCREEN_OFF,
    ALT_SCREEN_ON,
    CURSOR_HOME,
    MOUSE_OFF,
    MOUSE_ON,
    ConsoleRenderer,
    Frame,
    join_horizontal,
)
from calendartui.display.styles import Theme, visible_width
from calendartui.ui.layout import LayoutEngine
from calendartui.ui.month import MONTH_HEIGHT
from calendartui.ui.preview import PreviewViewport

PLAIN = Theme(colors=False)


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def console(stream):
    return ConsoleRenderer(left_padding=2, right_padding=1, stream=stream)


def layout(width, height, preview_visible=True):
    engine = LayoutEngine(date(2023, 6, 15), date(2023, 6, 15))
    if not preview_visible:
        engine.toggle_preview()
    engine.resize(width, height)
    preview = PreviewViewport(content="note text")
    preview.resize(width, height)
    return engine, preview


class TestJoinHorizontal:
    """Test side by side block placement."""

    def test_shorter_left_block_is_centered(self):
        lines, left_top, right_top = join_horizontal(["ab", "cd"], ["w", "x", "y", "z"])

        assert left_top == 1
        assert right_top == 0
        assert lines == ["  w", "abx", "cdy", "  z"]

    def test_shorter_right_block_is_centered(self):
        lines, left_top, right_top = join_horizontal(["a", "b", "c"], ["x"])

        assert (left_top, right_top) == (0, 1)
        assert lines == ["a ", "bx", "c "]

    def test_empty_right_block(self):
        lines, left_top, _ = join_horizontal(["a", "b"], [])

        assert lines == ["a", "b"]
        assert left_top == 0


class TestCompose:
    """Test composing the months, the preview and the log area."""

    def test_single_month_without_preview(self, console):
        engine, preview = layout(60, 20)

        frame = console.compose(engine, preview, PLAIN, {})

        assert len(frame.lines) == MONTH_HEIGHT
        assert frame.lines[0].startswith("  ")
        assert frame.lines[0].endswith(" ")
        assert "June 2023" in frame.lines[0]
        assert frame.months_origin == (2, 0)

    def test_triple_with_preview(self, console):
        engine, preview = layout(100, 30)

        frame = console.compose(engine, preview, PLAIN, {})

        assert len(frame.lines) == 1 + 3 * MONTH_HEIGHT
        assert frame.months_origin == (2, 0)
        assert "note text" in frame.text()
        assert {visible_width(line) for line in frame.lines} == {2 + 20 + 77 + 1}

    def test_short_preview_centers_months_vertically(self, console):
        engine, preview = layout(100, 30)
        preview.set_height(20)

        frame = console.compose(engine, preview, PLAIN, {})

        assert frame.months_origin == (2, 0)
        assert len(frame.lines) == 25

    def test_tall_preview_offsets_single_month(self, console):
        engine, preview = layout(100, 20)

        frame = console.compose(engine, preview, PLAIN, {})

        # Preview box is 20 rows, the single month 8
        assert frame.months_origin == (2, 6)

    def test_full_year_banner(self, console):
        engine, preview = layout(120, 30, preview_visible=False)

        frame = console.compose(engine, preview, PLAIN, {}, banner="Holiday")

        assert "Holiday 2023" in frame.lines[0]
        assert len(frame.lines) == 1 + 3 * MONTH_HEIGHT
        assert "January" in frame.lines[1]
        assert "April" in frame.lines[1]

    def test_log_area_below_frame(self, console):
        engine, preview = layout(60, 20)
        console.enable_split_display(max_log_lines=2)
        console.update_log_area(["one", "two", "three"])

        frame = console.compose(engine, preview, PLAIN, {})

        assert frame.lines[-2:] == ["  two", "  three"]
        assert frame.lines[-3].strip().startswith("─")

    def test_log_area_ignored_when_disabled(self, console):
        console.update_log_area(["one"])
        assert console.log_area_lines == []

    def test_compose_help(self, console):
        frame = console.compose_help(["Calendar 1.0.0", "Quit = q"])
        assert frame.lines == ["", "  Calendar 1.0.0", "  Quit = q"]


class TestTerminalOutput:
    """Test escape sequences written to the terminal."""

    def test_enter_and_exit(self, console, stream):
        console.enter(mouse=True)
        assert console.is_active
        console.exit()

        output = stream.getvalue()
        assert output.startswith(ALT_SCREEN_ON)
        assert MOUSE_ON in output
        assert MOUSE_OFF in output
        assert output.endswith(ALT_SCREEN_OFF)
        assert not console.is_active

    def test_enter_without_mouse(self, console, stream):
        console.enter(mouse=False)
        console.exit()

        assert MOUSE_ON not in stream.getvalue()
        assert MOUSE_OFF not in stream.getvalue()

    def test_exit_when_inactive_writes_nothing(self, console, stream):
        console.exit()
        assert stream.getvalue() == ""

    def test_display_redraws_from_home(self, console, stream):
        console.display(Frame(["a", "b", "c"]), height=2)

        output = stream.getvalue()
        assert output.startswith(CURSOR_HOME)
        assert "a" in output
        assert "b" in output
        assert "c" not in output
