"""Terminal text styling.

Styles are plain values handed to every render call through a ``Theme``;
nothing in this module keeps global styling state.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Any, Optional

ESC = "\033["
RESET = f"{ESC}0m"

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")
_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from a string."""
    return _ANSI_PATTERN.sub("", text)


def visible_width(text: str) -> int:
    """Get the printed width of a single line, ignoring escape sequences."""
    return len(strip_ansi(text))


def pad_right(text: str, width: int) -> str:
    """Pad a styled line with spaces up to ``width`` printed cells."""
    return text + " " * max(0, width - visible_width(text))


def center(text: str, width: int) -> str:
    """Center a styled line inside ``width`` printed cells."""
    gap = max(0, width - visible_width(text))
    left = gap // 2
    return " " * left + text + " " * (gap - left)


def _color_codes(color: str) -> Optional[str]:
    """Translate a configured color into SGR foreground parameters.

    Accepts ANSI palette numbers ("2", "8", "196") and ``#rrggbb`` values.
    Unknown values yield ``None`` and are ignored.
    """
    color = color.strip()
    if color.isdigit():
        n = int(color)
        if n < 8:
            return str(30 + n)
        if n < 16:
            return str(90 + n - 8)
        if n < 256:
            return f"38;5;{n}"
        return None
    match = _HEX_COLOR.match(color)
    if match:
        r, g, b = (int(part, 16) for part in match.groups())
        return f"38;2;{r};{g};{b}"
    return None


@dataclass(frozen=True)
class Style:
    """How a piece of text is drawn."""

    color: str = ""
    bold: bool = False
    italic: bool = False
    reverse: bool = False

    def is_blank(self) -> bool:
        """Check whether the style changes nothing."""
        return not (self.color or self.bold or self.italic or self.reverse)

    def layer(self, other: "Style") -> "Style":
        """Return a copy with every attribute ``other`` sets applied on top."""
        return replace(
            self,
            color=other.color or self.color,
            bold=self.bold or other.bold,
            italic=self.italic or other.italic,
            reverse=self.reverse or other.reverse,
        )

    def codes(self) -> str:
        """Get the SGR parameter list for this style."""
        params = []
        if self.bold:
            params.append("1")
        if self.italic:
            params.append("3")
        if self.reverse:
            params.append("7")
        if self.color:
            color = _color_codes(self.color)
            if color:
                params.append(color)
        return ";".join(params)

    def render(self, text: str) -> str:
        """Wrap ``text`` in the escape sequences for this style."""
        codes = self.codes()
        if not codes or not text:
            return text
        return f"{ESC}{codes}m{text}{RESET}"

    @classmethod
    def from_settings(cls, settings: Any) -> "Style":
        """Build a style from a configured ``StyleSettings`` model."""
        return cls(color=settings.color, bold=settings.bold, italic=settings.italic)


@dataclass(frozen=True)
class Theme:
    """The full set of styles a frame is rendered with."""

    today: Style = field(default_factory=lambda: Style(color="2"))
    inactive: Style = field(default_factory=lambda: Style(color="8"))
    noted: Style = field(default_factory=Style)
    selected: Style = field(default_factory=lambda: Style(reverse=True))
    colors: bool = True

    def apply(self, style: Style, text: str) -> str:
        """Render ``text`` with ``style`` unless colors are disabled."""
        if not self.colors:
            return text
        return style.render(text)

    @classmethod
    def from_settings(cls, settings: Any, colors: bool = True) -> "Theme":
        """Build a theme from the application settings."""
        return cls(
            today=Style.from_settings(settings.today_style),
            inactive=Style.from_settings(settings.inactive_style),
            noted=Style.from_settings(settings.noted_style),
            colors=colors,
        )
