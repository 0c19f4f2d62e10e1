"""
rules.py - Win and draw detection for four-in-a-row

Every cell of the grid is treated as the anchor of four candidate lines
(horizontal, vertical and both downward diagonals). A player has won when
any candidate line lies fully inside the grid and holds only that player's
pieces. The scan covers the whole grid on every call.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from fourinarow.debug import debug
from fourinarow.game.board import is_valid_position
from fourinarow.utils import CONNECT_N, DIRECTION_VECTORS, Direction, GameResult, Player

Coord = Tuple[int, int]  # (row, col)


def candidate_lines(y: int, x: int) -> Iterator[Tuple[Direction, List[Coord]]]:
    """
    Build the four lines of CONNECT_N cells anchored at (y, x).

    Lines are produced in a fixed order: horizontal, vertical, diagonal
    down-right, diagonal down-left. Coordinates may fall outside the grid.
    """
    for direction, (dr, dc) in DIRECTION_VECTORS.items():
        yield direction, [(y + i * dr, x + i * dc) for i in range(CONNECT_N)]


def is_winning_line(grid: np.ndarray, cells: Sequence[Coord], player: Player) -> bool:
    """Check that every cell is on the grid and holds the player's piece."""
    return all(
        is_valid_position(grid, row, col) and grid[row, col] == player.value
        for row, col in cells
    )


def find_winning_line(grid: np.ndarray, player: Player) -> Optional[List[Coord]]:
    """
    Find a line of four belonging to a player.

    Args:
        grid: The game grid
        player: The player to check for

    Returns:
        The (row, col) cells of the first winning line found, or None
    """
    if player == Player.EMPTY:
        raise ValueError("Win detection needs a real player, not EMPTY")

    rows, cols = grid.shape
    for y in range(rows):
        for x in range(cols):
            for direction, cells in candidate_lines(y, x):
                if is_winning_line(grid, cells, player):
                    debug.trace(f"{player.name} has a {direction.name} line at {cells}", "rules")
                    return cells
    return None


def check_win(grid: np.ndarray, player: Player) -> bool:
    """Check whether a player has four in a row anywhere on the grid."""
    return find_winning_line(grid, player) is not None


def check_draw(grid: np.ndarray) -> bool:
    """Check whether every cell of the grid is occupied."""
    return bool(np.all(grid != Player.EMPTY.value))


def resolve_outcome(grid: np.ndarray, player: Player) -> GameResult:
    """
    Decide the game state after ``player`` has moved.

    The win check runs once; the draw check only runs when there is no win.

    Returns:
        The win for ``player``, DRAW, or IN_PROGRESS
    """
    with debug.timer("win_check", "rules"):
        won = check_win(grid, player)

    if won:
        return GameResult.win_for(player)
    if check_draw(grid):
        return GameResult.DRAW
    return GameResult.IN_PROGRESS
