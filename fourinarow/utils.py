"""
utils.py - Constants, enumerations and helpers for the four-in-a-row engine

This module provides the shared constants, player and result enumerations,
and small helper functions used throughout the game engine.
"""

from enum import Enum, auto
from typing import Dict, Optional, Tuple
import numpy as np

# Game constants
DEFAULT_HEIGHT = 6
DEFAULT_WIDTH = 7
CONNECT_N = 4  # Number of pieces in a row to win
MIN_SIZE = CONNECT_N  # Smallest dimension on which a line of four fits


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        raise ValueError("EMPTY has no opposing player")

    @property
    def number(self) -> int:
        """Player number as shown to people (1 or 2)."""
        return self.value

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        """The winning player, or None for a draw or an unfinished game."""
        if self == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    @classmethod
    def win_for(cls, player: Player) -> 'GameResult':
        """Get the winning result for a player."""
        if player == Player.ONE:
            return cls.PLAYER_ONE_WIN
        elif player == Player.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError("EMPTY cannot win")


class Direction(Enum):
    """Enumeration representing directions for win checking."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()  # From top-left towards bottom-right
    DIAGONAL_DOWN_LEFT = auto()   # From top-right towards bottom-left


# Direction vectors (row, col) for each direction, in scan order
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1)
}


def render_board_ascii(board: np.ndarray) -> str:
    """
    Render the board as ASCII art.

    Args:
        board: The game board

    Returns:
        ASCII representation of the board
    """
    rows, cols = board.shape
    border = "|" + "-" * (cols * 2 - 1) + "|"
    result = [border]

    for row in range(rows):
        cells = [str(Player(int(cell))) for cell in board[row]]
        result.append("|" + " ".join(cells) + "|")

    result.append(border)

    # Single-digit labels keep the columns aligned on wide boards
    result.append("|" + " ".join(str(i % 10) for i in range(cols)) + "|")

    return "\n".join(result)
