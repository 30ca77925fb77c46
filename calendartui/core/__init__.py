"""Pure calendar arithmetic and grid navigation."""

from .dates import add_months, floor_mod, same_month
from .grid import Direction, column_move, grid_move

__all__ = ["Direction", "add_months", "column_move", "floor_mod", "grid_move", "same_month"]
