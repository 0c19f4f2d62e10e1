"""
env.py - Gymnasium adapter for a four-in-a-row game session

ConnectFourEnv lets any driver that speaks the Gymnasium interface play a
GameSession move by move. Both players' moves go through ``step``; rewards
are given from Player ONE's point of view.
"""

from typing import Dict, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from fourinarow.debug import debug
from fourinarow.game.session import GameSession
from fourinarow.utils import GameResult, Player

CELL_PIXELS = 50
PIECE_RADIUS = 20

PIECE_COLORS = {
    Player.EMPTY.value: (0, 0, 0),       # Black for empty
    Player.ONE.value: (255, 0, 0),       # Red for player 1
    Player.TWO.value: (255, 255, 0),     # Yellow for player 2
}
BACKGROUND_COLOR = (0, 0, 128)


class ConnectFourEnv(gym.Env):
    """
    Four-in-a-row environment following the Gymnasium interface.
    """

    metadata = {'render_modes': ['ascii', 'human', 'rgb_array'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 height: Optional[int] = None, width: Optional[int] = None):
        """
        Initialize the environment.

        Args:
            render_mode: Mode for rendering the environment
            height: Number of rows (defaults to 6)
            width: Number of columns (defaults to 7)
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        debug.debug("Initializing ConnectFourEnv", "env")
        self.session = GameSession(height, width)
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(self.session.width)
        # One cell per grid position holding 0 (empty), 1 or 2
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(self.session.height, self.session.width), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.session.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the active player's piece in the given column.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        debug.debug(f"Environment step with action {action}", "env")

        if not self.session.is_valid_move(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.session.play(action)

        result = self.session.game_result
        terminated = result.is_game_over()
        if result == GameResult.PLAYER_ONE_WIN:
            reward = self.reward_win
        elif result == GameResult.PLAYER_TWO_WIN:
            reward = self.reward_lose
        elif result == GameResult.DRAW:
            reward = self.reward_draw
        else:
            reward = self.reward_step

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        """
        Render the current state of the environment.

        Returns:
            Rendered frame depending on render_mode
        """
        if self.render_mode is None:
            return None

        if self.render_mode == "ascii":
            return self.session.render()

        if self.render_mode == "human":
            print(self.session.render())
            return None

        return self._render_rgb()

    def _render_rgb(self) -> np.ndarray:
        grid = self.session.grid
        rows, cols = grid.shape
        frame = np.zeros((rows * CELL_PIXELS, cols * CELL_PIXELS, 3), dtype=np.uint8)
        frame[:, :] = BACKGROUND_COLOR

        center = CELL_PIXELS // 2
        ys, xs = np.ogrid[:CELL_PIXELS, :CELL_PIXELS]
        disc = (ys - center) ** 2 + (xs - center) ** 2 <= PIECE_RADIUS ** 2

        for row in range(rows):
            for col in range(cols):
                cell = frame[row * CELL_PIXELS:(row + 1) * CELL_PIXELS,
                             col * CELL_PIXELS:(col + 1) * CELL_PIXELS]
                cell[disc] = PIECE_COLORS[int(grid[row, col])]

        return frame

    def _get_observation(self) -> np.ndarray:
        return self.session.get_state()

    def _get_info(self) -> Dict:
        valid_moves = self.session.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.session.current_player.value,
            'game_result': self.session.game_result.name,
            'moves_made': self.session.move_count,
            'winning_line': self.session.get_winning_line(),
            'last_move': self.session.last_move
        }
