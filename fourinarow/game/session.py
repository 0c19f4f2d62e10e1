"""
session.py - Turn loop for a single four-in-a-row game

A GameSession owns one grid and the active player. Callers ask it to play a
column; it drops the piece, resolves the outcome once and tells any
registered observers what happened. Rendering and input handling stay with
the observers.
"""

from typing import Iterable, List, Optional, Tuple

import numpy as np

from fourinarow.debug import debug
from fourinarow.game.board import (COLUMN_FULL, DropOutcome, create_grid, drop_piece,
                                   find_landing_row, get_valid_columns, is_valid_column,
                                   toggle_player)
from fourinarow.game.rules import find_winning_line, resolve_outcome
from fourinarow.utils import GameResult, Player, render_board_ascii


class GameOverError(RuntimeError):
    """Raised when a move is attempted after the game has ended."""


class GameObserver:
    """
    Receives notifications from a GameSession.

    Presentation layers subclass this and override the hooks they need.
    """

    def on_piece_dropped(self, row: int, column: int, player: Player) -> None:
        pass

    def on_game_ended(self, outcome: GameResult) -> None:
        pass


def outcome_message(outcome: GameResult) -> str:
    """Text announcing the end of a game."""
    if outcome == GameResult.DRAW:
        return "It's a draw!"
    if outcome.winner is not None:
        return f"Player {outcome.winner.number} won!"
    return "Game in progress."


class GameSession:
    """
    State of one game: grid, active player and last computed outcome.
    """

    def __init__(self, height: Optional[int] = None, width: Optional[int] = None,
                 observers: Optional[Iterable[GameObserver]] = None):
        """
        Start a new game.

        Args:
            height: Number of rows (defaults to 6)
            width: Number of columns (defaults to 7)
            observers: Observers notified of drops and the game's end
        """
        self.grid = create_grid(height, width)
        self.height, self.width = self.grid.shape
        self.observers: List[GameObserver] = list(observers or [])
        self._start()
        debug.debug(f"Started {self.height}x{self.width} session", "session")

    def _start(self) -> None:
        self.current_player = Player.ONE
        self.game_result = GameResult.IN_PROGRESS
        self.last_move: Optional[Tuple[int, int]] = None
        self.move_count = 0

    def reset(self) -> None:
        """Clear the grid for a new game with the same dimensions."""
        debug.debug("Resetting session", "session")
        self.grid.fill(Player.EMPTY.value)
        self._start()

    def add_observer(self, observer: GameObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: GameObserver) -> None:
        self.observers.remove(observer)

    def is_game_over(self) -> bool:
        return self.game_result.is_game_over()

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a move is valid.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            True if the game is running, the column exists and is not full
        """
        if self.is_game_over():
            debug.debug(f"Invalid move: game is over (result: {self.game_result})", "session")
            return False

        if not is_valid_column(self.grid, column):
            debug.debug(f"Invalid move: column {column} out of bounds", "session")
            return False

        return find_landing_row(self.grid, column) is not None

    def get_valid_moves(self) -> List[int]:
        if self.is_game_over():
            return []
        return get_valid_columns(self.grid)

    def play(self, column: int) -> DropOutcome:
        """
        Play one turn for the active player.

        A full column leaves the session untouched and returns COLUMN_FULL;
        the same player is still to move.

        Args:
            column: The column to drop into (0-indexed)

        Returns:
            The Placement of the new piece, or COLUMN_FULL

        Raises:
            GameOverError: If the game has already ended
            IndexError: If the column is outside the grid
        """
        if self.is_game_over():
            raise GameOverError(f"Game is over ({self.game_result.name}), start a new game")

        player = self.current_player
        debug.debug(f"Player {player.number} drops in column {column}", "session")

        placement = drop_piece(self.grid, column, player)
        if placement is COLUMN_FULL:
            return placement

        self.last_move = (placement.row, placement.column)
        self.move_count += 1
        for observer in list(self.observers):
            observer.on_piece_dropped(placement.row, placement.column, player)

        self.game_result = resolve_outcome(self.grid, player)
        if self.game_result.is_game_over():
            debug.info(f"Game over after {self.move_count} moves: {outcome_message(self.game_result)}",
                       "session")
            for observer in list(self.observers):
                observer.on_game_ended(self.game_result)
        else:
            self.current_player = toggle_player(player)

        return placement

    def get_winner(self) -> Optional[Player]:
        return self.game_result.winner

    def get_winning_line(self) -> List[Tuple[int, int]]:
        """
        Get the positions of the winning line if the game is won.

        Returns:
            List of (row, col) positions, or an empty list if nobody has won
        """
        winner = self.get_winner()
        if winner is None:
            return []
        return find_winning_line(self.grid, winner) or []

    def get_state(self) -> np.ndarray:
        """Copy of the grid."""
        return self.grid.copy()

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
