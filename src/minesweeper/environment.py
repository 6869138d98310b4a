"""
Gymnasium environment wrapper for Minesweeper.

Drives the game engine headlessly through a standard step/reset interface,
for scripted play and automated agents.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import (
    Board,
    BoardConfig,
    EXPLODED_CODE,
    FLAGGED_CODE,
    HIDDEN_CODE,
    MINE_CODE,
    MEDIUM,
)
from .game import Game, GameState
from .scores import ScoreLedger


# ============================================================================
# Text Rendering
# ============================================================================

SYMBOLS = {
    HIDDEN_CODE: ".",
    FLAGGED_CODE: "F",
    MINE_CODE: "*",
    EXPLODED_CODE: "X",
    0: " ",
}


def render_board(board: Board) -> str:
    """Render a board as text with row and column indices."""
    obs = board.get_observation()
    width = len(str(max(board.rows, board.cols) - 1))

    header = " " * (width + 1) + " ".join(
        str(col).rjust(width) for col in range(board.cols)
    )
    lines = [header]
    for row in range(board.rows):
        cells = " ".join(
            SYMBOLS.get(int(val), str(val)).rjust(width) for val in obs[row]
        )
        lines.append(f"{str(row).rjust(width)} {cells}")
    return "\n".join(lines)


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
        - 9 = revealed mine, 10 = exploded mine

    Actions:
        Discrete action space of size 2 * rows * cols.
        Action i < rows * cols reveals cell (i // cols, i % cols);
        the second half toggles the flag on the same cells.

    Rewards:
        - +1 for revealing a safe cell
        - 0 for toggling a flag
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        ledger: Optional[ScoreLedger] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: medium).
            render_mode: How to render the environment.
            ledger: Score ledger that wins are recorded in, if any.
        """
        super().__init__()

        self.config = config or MEDIUM
        self.render_mode = render_mode
        self.ledger = ledger
        self.game = Game(ledger=ledger)

        self._cells = self.config.rows * self.config.cols

        self.observation_space = spaces.Box(
            low=FLAGGED_CODE,
            high=EXPLODED_CODE,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        rng = random.Random(int(self.np_random.integers(2**32)))
        self.game = Game(ledger=self.ledger, rng=rng)
        self.game.start_game(self.config)
        self._steps = 0

        return self.game.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal, or cell index plus rows * cols
                to toggle a flag.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        reward = self._apply_action(int(action))

        observation = self.game.board.get_observation()
        terminated = not self.game.is_playing
        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_flag, row, col)."""
        is_flag = action >= self._cells
        index = action % self._cells
        return is_flag, index // self.config.cols, index % self.config.cols

    def _apply_action(self, action: int) -> float:
        """Perform an action and compute its reward."""
        is_flag, row, col = self._action_to_position(action)

        if is_flag:
            changed = self.game.toggle_flag(row, col)
        else:
            changed = self.game.reveal_cell(row, col)

        if not changed:
            return -0.1
        if self.game.is_won:
            return 10.0
        if self.game.is_lost:
            return -10.0
        return 0.0 if is_flag else 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        status = self.game.game_status()
        return {
            "steps": self._steps,
            "flags": status.flag_count,
            "mines": status.mine_count,
            "elapsed": status.elapsed_seconds,
            "game_state": status.state.name,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.game.board)
        if self.render_mode == "human":
            print(render_board(self.game.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.game.state != GameState.PLAYING:
            return mask
        for row, col in self.game.board.get_valid_actions():
            index = row * self.config.cols + col
            mask[index] = not self.game.board.get_cell(row, col).is_flagged
            mask[index + self._cells] = True
        return mask
