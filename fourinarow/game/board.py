"""
board.py - Grid state and move mechanics for four-in-a-row

This module owns the occupancy grid: creating it, finding where a dropped
piece lands, writing pieces into cells and alternating the active player.
A grid is a 2D numpy array of Player values with row 0 at the top.
"""

from enum import Enum
from typing import List, NamedTuple, Optional, Union

import numpy as np

from fourinarow.debug import debug
from fourinarow.utils import DEFAULT_HEIGHT, DEFAULT_WIDTH, MIN_SIZE, Player


class InvalidDimensionsError(ValueError):
    """Raised when a grid is too small to ever hold a line of four."""


class Drop(Enum):
    """Result of a drop that found no landing spot."""
    COLUMN_FULL = "column full"


COLUMN_FULL = Drop.COLUMN_FULL


class Placement(NamedTuple):
    """Cell a dropped piece landed in."""
    row: int
    column: int


DropOutcome = Union[Placement, Drop]


def create_grid(height: Optional[int] = None, width: Optional[int] = None) -> np.ndarray:
    """
    Create an empty grid.

    Args:
        height: Number of rows (defaults to 6)
        width: Number of columns (defaults to 7)

    Returns:
        A height x width array with every cell empty

    Raises:
        InvalidDimensionsError: If either dimension is not an integer of at least 4
    """
    if height is None:
        height = DEFAULT_HEIGHT
    if width is None:
        width = DEFAULT_WIDTH

    for name, size in (("height", height), ("width", width)):
        if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
            raise InvalidDimensionsError(f"Grid {name} must be an integer, got {size!r}")
        if size < MIN_SIZE:
            raise InvalidDimensionsError(
                f"Grid {name} must be at least {MIN_SIZE}, got {size}")

    debug.debug(f"Creating {height}x{width} grid", "board")
    return np.full((int(height), int(width)), Player.EMPTY.value, dtype=np.int8)


def is_valid_position(grid: np.ndarray, row: int, column: int) -> bool:
    """Check if a position is within the grid boundaries."""
    rows, cols = grid.shape
    return 0 <= row < rows and 0 <= column < cols


def is_valid_column(grid: np.ndarray, column: int) -> bool:
    """Check if a column index exists in the grid."""
    return 0 <= column < grid.shape[1]


def find_landing_row(grid: np.ndarray, column: int) -> Optional[int]:
    """
    Find the row a piece dropped into a column would land in.

    The scan runs from the bottom row upward. Row 0 is a real landing
    spot, so callers must compare the result with ``None``.

    Args:
        grid: The game grid
        column: The column to drop into (0-indexed)

    Returns:
        The lowest empty row index, or None if the column is full

    Raises:
        IndexError: If the column is outside the grid
    """
    if not is_valid_column(grid, column):
        raise IndexError(f"Column {column} is outside a grid of width {grid.shape[1]}")

    for row in range(grid.shape[0] - 1, -1, -1):
        if grid[row, column] == Player.EMPTY.value:
            return row

    return None


def place_piece(grid: np.ndarray, row: int, column: int, player: Player) -> bool:
    """
    Write a player's piece into an empty cell.

    Args:
        grid: The game grid, mutated in place
        row: Target row
        column: Target column
        player: The player placing the piece

    Returns:
        True if the piece was placed, False if the cell was already occupied
    """
    if player == Player.EMPTY:
        raise ValueError("Cannot place an EMPTY piece")

    if grid[row, column] != Player.EMPTY.value:
        debug.warning(f"Refusing to overwrite occupied cell ({row}, {column})", "board")
        return False

    debug.trace(f"Placing {player.name} at ({row}, {column})", "board")
    grid[row, column] = player.value
    return True


def drop_piece(grid: np.ndarray, column: int, player: Player) -> DropOutcome:
    """
    Drop a piece into a column and let it fall to the lowest empty row.

    Args:
        grid: The game grid, mutated in place
        column: The column to drop into
        player: The player dropping the piece

    Returns:
        The Placement the piece landed on, or COLUMN_FULL with the grid unchanged
    """
    row = find_landing_row(grid, column)
    if row is None:
        debug.debug(f"Column {column} is full, ignoring drop", "board")
        return COLUMN_FULL

    place_piece(grid, row, column, player)
    return Placement(row, column)


def toggle_player(player: Player) -> Player:
    """Return the other of the two players."""
    return player.other()


def get_valid_columns(grid: np.ndarray) -> List[int]:
    """Columns a dropped piece would land in."""
    return [col for col in range(grid.shape[1])
            if find_landing_row(grid, col) is not None]


def count_empty(grid: np.ndarray) -> int:
    """Number of unoccupied cells."""
    return int(np.count_nonzero(grid == Player.EMPTY.value))
