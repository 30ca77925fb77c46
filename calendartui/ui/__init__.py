"""User interface components for interactive calendar navigation."""

from .events import Action
from .keyboard import KeyboardHandler
from .layout import FocusTarget, LayoutEngine, ViewportMode
from .month import MonthPanel
from .preview import PreviewViewport

__all__ = [
    "Action",
    "FocusTarget",
    "KeyboardHandler",
    "LayoutEngine",
    "MonthPanel",
    "PreviewViewport",
    "ViewportMode",
]
