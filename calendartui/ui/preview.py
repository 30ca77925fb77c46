"""Scrollable note preview shown next to the months."""

import logging
import re
import textwrap
from typing import List

from .month import MONTH_HEIGHT, MONTH_WIDTH

logger = logging.getLogger(__name__)

BORDER_THICKNESS = 2
MAX_HEIGHT = MONTH_HEIGHT * 3 - BORDER_THICKNESS // 2

HIDDEN_BORDER = (" ", " ", " ", " ", " ", " ")
ROUNDED_BORDER = ("╭", "╮", "╰", "╯", "─", "│")

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")


def clamp(value: int, low: int, high: int) -> int:
    """Clamp ``value`` into ``[low, high]``, swapping the bounds if reversed."""
    if high < low:
        low, high = high, low
    return min(high, max(low, value))


def reflow(text: str) -> str:
    """Join hard-wrapped lines so the text can be re-wrapped to any width.

    Single line breaks become spaces; runs of blank lines become one
    paragraph break.
    """
    paragraphs = _PARAGRAPH_BREAK.split(text)
    return "\n\n".join(paragraph.replace("\n", " ") for paragraph in paragraphs)


def wrap_lines(text: str, width: int) -> List[str]:
    """Wrap reflowed text into lines of exactly ``width`` characters.

    Words are wrapped at ``width - 2``; tokens that still do not fit are
    hard-wrapped at ``width``. Every line is padded with spaces.

    Args:
        text: Reflowed text
        width: Target width, 0 disables the preview

    Returns:
        Wrapped, padded lines
    """
    if width <= 0:
        return []
    if not text:
        return [" " * width]

    lines: List[str] = []
    for paragraph in text.split("\n"):
        words = textwrap.wrap(
            paragraph,
            width=max(1, width - 2),
            break_long_words=False,
            break_on_hyphens=False,
        )
        if not words:
            lines.append("")
            continue
        for line in words:
            while len(line) > width:
                lines.append(line[:width])
                line = line[width:]
            lines.append(line)
    return [line.ljust(width) for line in lines]


class PreviewViewport:
    """Word-wrapped note text windowed by a vertical scroll offset."""

    def __init__(
        self,
        content: str = "",
        left_padding: int = 2,
        right_padding: int = 1,
        left_margin: int = 3,
        padding: int = 1,
        min_width: int = 40,
        max_width: int = 80,
    ) -> None:
        """Initialize the preview.

        Args:
            content: Initial note text
            left_padding: Frame padding left of the months
            right_padding: Frame padding right of the preview
            left_margin: Columns between the months and the preview border
            padding: Columns between the border and the text on each side
            min_width: Narrowest text width worth showing
            max_width: Widest text width
        """
        self.left_padding = left_padding
        self.right_padding = right_padding
        self.left_margin = left_margin
        self.padding = padding
        self.min_width = min_width
        self.max_width = max_width

        self._content = ""
        self._lines: List[str] = []
        self._width = 0
        self._height = 0
        self._y_offset = 0
        self._focused = False
        self.set_content(content)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def y_offset(self) -> int:
        return self._y_offset

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def content(self) -> str:
        return self._content

    @property
    def is_focused(self) -> bool:
        return self._focused

    def focus(self) -> None:
        self._focused = True

    def unfocus(self) -> None:
        self._focused = False

    def chrome_width(self) -> int:
        """Get the columns the frame uses around the preview text."""
        return (
            MONTH_WIDTH
            + self.left_margin
            + 2 * self.padding
            + self.left_padding
            + self.right_padding
            + BORDER_THICKNESS
        )

    def set_width(self, container_width: int) -> None:
        """Fit the text width to the terminal width.

        Widths above the maximum are clamped; widths below the minimum turn
        the preview off entirely rather than squeezing it.
        """
        width = clamp(container_width - self.chrome_width(), 0, self.max_width)
        if width < self.min_width:
            width = 0
        self._width = width
        self._lines = wrap_lines(self._content, self._width)
        self.set_y_offset(self._y_offset)

    def set_height(self, container_height: int) -> None:
        """Fit the number of visible rows to the terminal height."""
        self._height = clamp(container_height - BORDER_THICKNESS, 0, MAX_HEIGHT)
        self.set_y_offset(self._y_offset)

    def resize(self, width: int, height: int) -> None:
        self.set_width(width)
        self.set_height(height)

    def set_content(self, text: str) -> None:
        """Replace the note text, re-wrap it and scroll back to the top."""
        self._content = reflow(text)
        self._y_offset = 0
        self._lines = wrap_lines(self._content, self._width)

    def max_y_offset(self) -> int:
        return max(0, len(self._lines) - self._height)

    def at_top(self) -> bool:
        return self._y_offset <= 0

    def at_bottom(self) -> bool:
        return self._y_offset >= self.max_y_offset()

    def set_y_offset(self, n: int) -> None:
        self._y_offset = clamp(n, 0, self.max_y_offset())

    def line_up(self, n: int = 1) -> None:
        """Scroll the text up by ``n`` lines, stopping at the top."""
        if self.at_top() or n == 0:
            return
        self.set_y_offset(self._y_offset - n)

    def line_down(self, n: int = 1) -> None:
        """Scroll the text down by ``n`` lines, stopping at the bottom."""
        if self.at_bottom() or n == 0:
            return
        self.set_y_offset(self._y_offset + n)

    def visible_lines(self) -> List[str]:
        """Get the lines inside the current scroll window."""
        if not self._lines:
            return []
        top = clamp(self._y_offset, 0, len(self._lines))
        bottom = clamp(self._y_offset + self._height, top, len(self._lines))
        return self._lines[top:bottom]

    def render(self) -> List[str]:
        """Render the bordered preview box.

        Returns:
            Lines of the box, or an empty list when the preview is too narrow
        """
        if self._width < self.min_width:
            return []

        visible = self.visible_lines()
        visible += [" " * self._width] * (self._height - len(visible))

        top_left, top_right, bottom_left, bottom_right, horizontal, vertical = (
            ROUNDED_BORDER if self._focused else HIDDEN_BORDER
        )
        inner = self._width + 2 * self.padding
        margin = " " * self.left_margin
        side = " " * self.padding

        lines = [margin + top_left + horizontal * inner + top_right]
        for line in visible:
            lines.append(f"{margin}{vertical}{side}{line.ljust(self._width)}{side}{vertical}")
        lines.append(margin + bottom_left + horizontal * inner + bottom_right)
        return lines

    def view(self) -> str:
        """Render the preview as a single string."""
        return "\n".join(self.render())
