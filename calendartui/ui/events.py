"""Logical input events consumed by the calendar."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional, Union

if TYPE_CHECKING:
    from ..display.styles import Style


class Action(Enum):
    """Key and wheel actions after key bindings have been resolved."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    JUMP_LAST_SUNDAY = "jump_last_sunday"
    JUMP_NEXT_SUNDAY = "jump_next_sunday"
    JUMP_NEXT_SATURDAY = "jump_next_saturday"
    MONTH_UP = "month_up"
    MONTH_DOWN = "month_down"
    TOGGLE_FOCUS = "toggle_focus"
    TOGGLE_PREVIEW = "toggle_preview"
    EDIT_NOTE = "edit_note"
    YANK_DATE = "yank_date"
    TOGGLE_HELP = "toggle_help"
    QUIT = "quit"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"


@dataclass(frozen=True)
class Resize:
    """Terminal size changed."""

    width: int
    height: int


@dataclass(frozen=True)
class PointerClick:
    """Left mouse button pressed at a zero-based terminal cell."""

    x: int
    y: int


@dataclass(frozen=True)
class ClockTick:
    """Periodic wall clock update."""

    now: datetime


@dataclass(frozen=True)
class EditorClosed:
    """The external editor process exited."""

    error: Optional[str] = None


@dataclass(frozen=True)
class DecorationsLoaded:
    """Day styles for one month finished loading."""

    month: date
    styles: Dict[date, "Style"] = field(default_factory=dict)


Event = Union[Action, Resize, PointerClick, ClockTick, EditorClosed, DecorationsLoaded]
