"""
Pytest fixtures for fourinarow tests.
"""

from typing import List, Tuple

import numpy as np
import pytest

from fourinarow.debug import debug, DebugLevel
from fourinarow.game.board import create_grid
from fourinarow.game.session import GameObserver, GameSession
from fourinarow.utils import GameResult, Player

# Two rows of play that fill rows 5 and 4 without any four in a row.
# Repeating it three times fills a 6x7 grid and ends in a draw.
DRAW_BLOCK = [2, 0, 0, 1, 1, 4, 4, 5, 5, 2, 3, 3, 6, 6]
DRAW_SEQUENCE = DRAW_BLOCK * 3


class RecordingObserver(GameObserver):
    """Observer that remembers every notification."""

    def __init__(self):
        self.drops: List[Tuple[int, int, Player]] = []
        self.endings: List[GameResult] = []

    def on_piece_dropped(self, row, column, player):
        self.drops.append((row, column, player))

    def on_game_ended(self, outcome):
        self.endings.append(outcome)


@pytest.fixture(autouse=True)
def reset_debug():
    """Restore the shared debug manager after each test."""
    yield
    debug.configure(level=DebugLevel.WARNING, enabled=True, components=[], log_file="")


@pytest.fixture
def grid() -> np.ndarray:
    """Empty default-size grid."""
    return create_grid()


@pytest.fixture
def recorder() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def session(recorder) -> GameSession:
    """Default-size session with a recording observer attached."""
    return GameSession(observers=[recorder])


@pytest.fixture
def drawn_grid() -> np.ndarray:
    """Full 6x7 grid with no line of four for either player."""
    g = create_grid()
    rows, cols = g.shape
    for row in range(rows):
        for col in range(cols):
            g[row, col] = Player.ONE.value if (col // 2 + row) % 2 == 0 else Player.TWO.value
    return g
