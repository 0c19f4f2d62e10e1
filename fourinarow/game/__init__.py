"""
fourinarow.game - Core game mechanics

This package contains the grid state, outcome detection, the game session
and the Gymnasium environment adapter.
"""

from fourinarow.game.board import (COLUMN_FULL, Drop, InvalidDimensionsError, Placement,
                                   create_grid, drop_piece, find_landing_row, place_piece,
                                   toggle_player)
from fourinarow.game.rules import check_draw, check_win, find_winning_line, resolve_outcome
from fourinarow.game.session import GameObserver, GameOverError, GameSession, outcome_message
from fourinarow.game.env import ConnectFourEnv

__all__ = [
    'COLUMN_FULL', 'Drop', 'InvalidDimensionsError', 'Placement',
    'create_grid', 'drop_piece', 'find_landing_row', 'place_piece', 'toggle_player',
    'check_draw', 'check_win', 'find_winning_line', 'resolve_outcome',
    'GameObserver', 'GameOverError', 'GameSession', 'outcome_message',
    'ConnectFourEnv',
]
