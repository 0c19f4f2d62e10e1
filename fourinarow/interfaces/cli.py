"""
cli.py - Command-line interface for four-in-a-row

This module provides a terminal front end: hot-seat play for two people,
inspection of a board position, and a small benchmark of the engine.
"""

import argparse
import random
import sys
from typing import List, Optional, Union

import numpy as np

from fourinarow.debug import debug, DebugLevel
from fourinarow.game.board import (COLUMN_FULL, InvalidDimensionsError, count_empty,
                                   create_grid, get_valid_columns)
from fourinarow.game.rules import check_draw, check_win, find_winning_line
from fourinarow.game.session import GameObserver, GameSession, outcome_message
from fourinarow.utils import GameResult, Player, render_board_ascii

QUIT = "q"
RESTART = "r"


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


class ConsoleObserver(GameObserver):
    """Prints the board after every drop and announces the result."""

    def __init__(self, session: GameSession):
        self.session = session

    def on_piece_dropped(self, row: int, column: int, player: Player) -> None:
        print(f"Player {player.number} ({player}) plays column {column}")
        print(self.session.render())

    def on_game_ended(self, outcome: GameResult) -> None:
        print(outcome_message(outcome))
        line = self.session.get_winning_line()
        if line:
            print(f"Winning line: {line}")


class SimpleCLI:
    """Simple command-line interface for the game engine."""

    def __init__(self):
        self.session: Optional[GameSession] = None
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Four-in-a-row CLI')

        common = argparse.ArgumentParser(add_help=False)
        common.add_argument('--debug', action='store_true', help='Enable debug logging')
        common.add_argument('--debug_level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level (ignored when --debug is set)')
        common.add_argument('--log_file', type=str, default=None,
                            help='Also write log messages to this file')

        size = argparse.ArgumentParser(add_help=False)
        size.add_argument('--height', type=int, default=None, help='Number of rows (default 6)')
        size.add_argument('--width', type=int, default=None, help='Number of columns (default 7)')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        subparsers.add_parser('play', parents=[common, size],
                              help='Play a two-player game in the terminal')

        test_parser = subparsers.add_parser('test', parents=[common, size],
                                            help='Inspect a board position')
        test_parser.add_argument('--position', type=str,
                                 help='Comma-separated cell values (0, 1, 2), row by row from the top')

        benchmark_parser = subparsers.add_parser('benchmark', parents=[common, size],
                                                 help='Benchmark engine performance')
        benchmark_parser.add_argument('--iterations', type=positive_int, default=1000,
                                      help='Number of iterations for benchmarking')

        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        elif getattr(self.args, 'debug_level', None):
            debug.set_from_string(self.args.debug_level)

        if getattr(self.args, 'log_file', None):
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        try:
            if self.args.command == 'play':
                self.play_game()
            elif self.args.command == 'test':
                return self.test_position()
            elif self.args.command == 'benchmark':
                self.benchmark()
            else:
                print("Please specify a command. Use --help for options.")
                return 1
        except InvalidDimensionsError as e:
            print(f"Error: {e}")
            return 1

        return 0

    def play_game(self) -> None:
        """Play a game between two people sharing the terminal."""
        self.session = GameSession(self.args.height, self.args.width)
        self.session.add_observer(ConsoleObserver(self.session))

        print("Starting a new game!")
        print(f"Enter a column number (0-{self.session.width - 1}) to drop a piece.")
        print(f"Other commands: '{QUIT}' to quit, '{RESTART}' to restart.")
        print(self.session.render())

        while not self.session.is_game_over():
            move = self.get_human_move()

            if move is None:
                continue
            if move == QUIT:
                print("Quitting game.")
                return
            if move == RESTART:
                self.session.reset()
                print("Game restarted.")
                print(self.session.render())
                continue

            if self.session.play(move) is COLUMN_FULL:
                print(f"Column {move} is full, choose another.")

    def get_human_move(self) -> Optional[Union[int, str]]:
        """
        Read one move from the active player.

        Returns:
            Column index, QUIT or RESTART, or None if the input was invalid
        """
        player = self.session.current_player
        last_col = self.session.width - 1
        try:
            user_input = input(f"Player {player.number} ({player}) move "
                               f"(0-{last_col}, {QUIT}/{RESTART}): ").strip().lower()
        except EOFError:
            return QUIT

        if user_input in (QUIT, RESTART):
            return user_input

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or command.")
            return None

        if not 0 <= move <= last_col:
            print(f"Column must be between 0 and {last_col}.")
            return None

        return move

    def load_position(self, position: str, height: Optional[int], width: Optional[int]) -> np.ndarray:
        """
        Build a grid from a comma-separated list of cell values.

        Raises:
            ValueError: If the list does not fit the grid or holds unknown values
        """
        grid = create_grid(height, width)
        values = [int(c) for c in position.split(',')]
        if len(values) != grid.size:
            raise ValueError(f"Position string must have {grid.size} values, got {len(values)}")

        allowed = {player.value for player in Player}
        unknown = set(values) - allowed
        if unknown:
            raise ValueError(f"Unknown cell values: {sorted(unknown)}")

        grid[:, :] = np.array(values, dtype=grid.dtype).reshape(grid.shape)
        return grid

    def test_position(self) -> int:
        """Inspect a board position."""
        if not self.args.position:
            print("Please provide a position string with --position")
            return 1

        try:
            grid = self.load_position(self.args.position, self.args.height, self.args.width)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(render_board_ascii(grid))

        has_win = False
        for player in (Player.ONE, Player.TWO):
            line = find_winning_line(grid, player)
            if line is not None:
                print(f"Win for player {player.number} detected: {line}")
                has_win = True
        if not has_win:
            print("No win detected for any player")

        if check_draw(grid):
            print("Board is full")
        else:
            print(f"Empty spaces: {count_empty(grid)}")

        print(f"Valid moves: {get_valid_columns(grid)}")
        return 0

    def benchmark(self) -> None:
        """Benchmark the performance of the engine."""
        iterations = self.args.iterations
        height, width = self.args.height, self.args.width
        print(f"Running benchmark with {iterations} iterations...")

        debug.start_timer("grid_init")
        for _ in range(iterations):
            create_grid(height, width)
        grid_init_time = debug.end_timer("grid_init", "cli")
        print(f"Grid creation: {grid_init_time:.6f} seconds total, "
              f"{grid_init_time / iterations * 1000:.6f} ms per grid")

        session = GameSession(height, width)
        moves_made = 0
        debug.start_timer("moves")
        for _ in range(iterations):
            col = random.randrange(session.width)
            if session.is_valid_move(col):
                session.play(col)
                moves_made += 1
                if session.is_game_over():
                    session.reset()
        moves_time = debug.end_timer("moves", "cli")
        print(f"Making {moves_made} moves: {moves_time:.6f} seconds total, "
              f"{moves_time / max(moves_made, 1) * 1000:.6f} ms per move")

        debug.start_timer("win_check_bench")
        for _ in range(iterations):
            check_win(session.grid, Player.ONE)
        win_check_time = debug.end_timer("win_check_bench", "cli")
        print(f"Performing {iterations} full-grid win checks: {win_check_time:.6f} seconds total, "
              f"{win_check_time / iterations * 1000:.6f} ms per check")

        games_played = 0
        total_moves = 0
        debug.start_timer("game_simulation")
        for _ in range(max(iterations // 10, 1)):
            game = GameSession(height, width)
            while not game.is_game_over():
                game.play(random.choice(game.get_valid_moves()))
            games_played += 1
            total_moves += game.move_count
        simulation_time = debug.end_timer("game_simulation", "cli")
        print(f"Played {games_played} games with {total_moves} total moves: "
              f"{simulation_time:.6f} seconds total, "
              f"{simulation_time / games_played * 1000:.6f} ms per game")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
