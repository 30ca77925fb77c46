"""calendartui - a terminal calendar with per-day markdown notes."""

__version__ = "1.0.0"
__author__ = "calendartui developers"
__description__ = "Terminal calendar with month grids, a note preview and holiday lists"

__all__ = [
    "__author__",
    "__description__",
    "__version__",
]
