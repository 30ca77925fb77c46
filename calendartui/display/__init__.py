"""Terminal styling and frame output."""

from .styles import Style, Theme

__all__ = ["Style", "Theme"]
