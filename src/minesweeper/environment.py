"""
Gymnasium environment wrapper for Minesweeper.

Drives a SessionController through the standard RL interface. Each step
is one primary action followed by as many frames as it takes for the
flood fill to settle.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import RevealOutcome
from .config import GameConfig
from .render import render_ansi
from .session import SessionController

FRAME_DT = 1.0 / 60.0


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size board_size ** 2.
        Action i reveals the cell at row i // size + 1, column i % size + 1.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Game configuration (default: beginner 9x9).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or GameConfig()
        self.size = self.config.board_size
        self.session = SessionController(self.config)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.size, self.size),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.size * self.size)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.session.rng.seed(seed)
        self.session.start_new_game(self.config.difficulty, self.size)
        self._steps = 0

        return self.session.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal ((row - 1) * size + col - 1).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(int(action))
        self._steps += 1

        outcome = self.session.handle_primary_action(row, col)
        self._settle()

        reward = self._calculate_reward(outcome)
        terminated = self.session.game_over
        truncated = False

        return (
            self.session.board.get_observation(),
            reward,
            terminated,
            truncated,
            self._get_info(),
        )

    def _settle(self) -> None:
        """Tick until the reveal queue is empty."""
        while self.session.pending_reveals:
            self.session.tick(FRAME_DT)

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to 1-indexed (row, col) position."""
        return action // self.size + 1, action % self.size + 1

    def _calculate_reward(self, outcome: RevealOutcome) -> float:
        """Reward for the settled result of an action."""
        if outcome == RevealOutcome.ALREADY_HANDLED:
            return -0.1
        if self.session.game_won:
            return 10.0
        if outcome == RevealOutcome.REVEALED_MINE:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.session.board
        return {
            "steps": self._steps,
            "revealed": board.revealed_count,
            "total_safe": self.size * self.size - self.session.mine_count,
            "phase": self.session.phase.name,
            "valid_actions": len(board.hidden_positions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_ansi(self.session.board)
        if self.render_mode == "human":
            print(render_ansi(self.session.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = hidden, unflagged cell.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.session.board.hidden_positions():
            mask[(row - 1) * self.size + col - 1] = True
        return mask
