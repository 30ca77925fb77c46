"""Console frame composition and terminal output."""

import logging
import sys
from dataclasses import dataclass
from datetime import date
from typing import IO, List, Mapping, Optional, Tuple

from ..ui.layout import LayoutEngine, ViewportMode
from ..ui.month import MONTH_HEIGHT
from ..ui.preview import PreviewViewport
from .styles import ESC, Style, Theme, center, pad_right, visible_width

logger = logging.getLogger(__name__)

ALT_SCREEN_ON = f"{ESC}?1049h"
ALT_SCREEN_OFF = f"{ESC}?1049l"
CURSOR_HIDE = f"{ESC}?25l"
CURSOR_SHOW = f"{ESC}?25h"
CURSOR_HOME = f"{ESC}H"
CLEAR_LINE = f"{ESC}K"
CLEAR_BELOW = f"{ESC}J"
# Button press reporting in SGR extended format
MOUSE_ON = f"{ESC}?1000h{ESC}?1006h"
MOUSE_OFF = f"{ESC}?1006l{ESC}?1000l"


@dataclass
class Frame:
    """One rendered screen and where the months block landed on it."""

    lines: List[str]
    months_origin: Tuple[int, int] = (0, 0)

    def text(self) -> str:
        return "\n".join(self.lines)


def join_horizontal(left: List[str], right: List[str]) -> Tuple[List[str], int, int]:
    """Place two blocks side by side, centering the shorter one vertically.

    Returns:
        The joined lines and the top offsets of the left and right blocks
    """
    height = max(len(left), len(right))
    left_width = max((visible_width(line) for line in left), default=0)
    right_width = max((visible_width(line) for line in right), default=0)

    def pad(block: List[str], width: int) -> Tuple[List[str], int]:
        gap = height - len(block)
        top = gap // 2
        blank = " " * width
        return [blank] * top + [pad_right(line, width) for line in block] + [blank] * (gap - top), top

    left_lines, left_top = pad(left, left_width)
    right_lines, right_top = pad(right, right_width)
    joined = [a + b for a, b in zip(left_lines, right_lines)]
    return joined, left_top, right_top


class ConsoleRenderer:
    """Composes calendar frames and writes them to the terminal."""

    def __init__(
        self,
        left_padding: int = 2,
        right_padding: int = 1,
        stream: Optional[IO[str]] = None,
    ) -> None:
        """Initialize console renderer.

        Args:
            left_padding: Blank columns left of the frame and between panels
            right_padding: Blank columns right of the frame
            stream: Output stream, stdout by default
        """
        self.left_padding = left_padding
        self.right_padding = right_padding
        self.stream = stream if stream is not None else sys.stdout
        self.log_area_lines: List[str] = []
        self.log_area_enabled = False
        self.max_log_lines = 0
        self._active = False
        self._mouse = False

        logger.debug("Console renderer initialized")

    def render_months(
        self,
        engine: LayoutEngine,
        theme: Theme,
        decorations: Mapping[date, Style],
        banner: str = "",
    ) -> List[str]:
        """Render the months block for the engine's current viewport mode.

        Args:
            engine: Layout engine holding the panels
            theme: Styles to draw with
            decorations: Extra per-day styles
            banner: Prefix for the year banner of the full-year view

        Returns:
            Lines of the months block
        """
        panels = engine.panels
        block_width, _ = engine.block_size()

        if engine.mode == ViewportMode.SINGLE:
            return panels[0].render(theme, decorations)

        if engine.mode == ViewportMode.TRIPLE:
            lines = [" " * block_width]
            for panel in panels:
                lines.extend(panel.render(theme, decorations))
            return lines

        year = f"{engine.selected.year}"
        lines = [center(f"{banner} {year}" if banner else year, block_width)]
        gap = " " * self.left_padding
        for start in range(0, len(panels), 4):
            rendered = [panel.render(theme, decorations) for panel in panels[start : start + 4]]
            for row in range(MONTH_HEIGHT):
                lines.append(gap.join(block[row] for block in rendered))
        return lines

    def compose(
        self,
        engine: LayoutEngine,
        preview: PreviewViewport,
        theme: Theme,
        decorations: Mapping[date, Style],
        banner: str = "",
    ) -> Frame:
        """Compose the full frame: months, preview and the optional log area."""
        months = self.render_months(engine, theme, decorations, banner)
        preview_lines = preview.render() if engine.preview_visible else []

        joined, months_top, _ = join_horizontal(months, preview_lines)
        left = " " * self.left_padding
        right = " " * self.right_padding
        lines = [f"{left}{line}{right}" for line in joined]

        if self.log_area_enabled and self.log_area_lines:
            width = max((visible_width(line) for line in lines), default=0)
            lines.append(left + "─" * max(0, width - len(left)))
            lines.extend(f"{left}{line}" for line in self.log_area_lines)

        return Frame(lines=lines, months_origin=(self.left_padding, months_top))

    def compose_help(self, help_lines: List[str]) -> Frame:
        left = " " * self.left_padding
        return Frame(lines=[""] + [f"{left}{line}" for line in help_lines])

    def enter(self, mouse: bool = True) -> None:
        """Switch to the alternate screen and hide the cursor."""
        sequence = ALT_SCREEN_ON + CURSOR_HIDE
        if mouse:
            sequence += MOUSE_ON
        self._write(sequence)
        self._active = True
        self._mouse = mouse
        logger.debug("Entered alternate screen")

    def exit(self) -> None:
        """Restore the normal screen, cursor and mouse reporting."""
        if not self._active:
            return
        sequence = CURSOR_SHOW + ALT_SCREEN_OFF
        if self._mouse:
            sequence = MOUSE_OFF + sequence
        self._write(sequence)
        self._active = False
        logger.debug("Left alternate screen")

    @property
    def is_active(self) -> bool:
        return self._active

    def display(self, frame: Frame, height: Optional[int] = None) -> None:
        """Draw a frame over the previous one.

        Args:
            frame: Frame to draw
            height: Terminal height; extra lines are cut off
        """
        lines = frame.lines if height is None else frame.lines[: max(0, height)]
        body = "".join(f"{line}{CLEAR_LINE}\r\n" for line in lines[:-1])
        if lines:
            body += f"{lines[-1]}{CLEAR_LINE}"
        self._write(CURSOR_HOME + body + CLEAR_BELOW)

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def enable_split_display(self, max_log_lines: int = 3) -> None:
        """Reserve a log area below the calendar.

        Args:
            max_log_lines: Maximum number of log lines to show
        """
        self.log_area_enabled = True
        self.max_log_lines = max_log_lines
        self.log_area_lines = []
        logger.debug("Split display mode enabled")

    def disable_split_display(self) -> None:
        self.log_area_enabled = False
        self.log_area_lines = []

    def update_log_area(self, log_lines: List[str]) -> None:
        """Replace the lines shown in the log area.

        Args:
            log_lines: Formatted log messages, oldest first
        """
        if not self.log_area_enabled:
            return
        self.log_area_lines = log_lines[-self.max_log_lines :] if log_lines else []
