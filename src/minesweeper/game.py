"""
Game state machine for Minesweeper.

Owns the board and the current state, validates each player intent
against that state, and records a score when a game is won.
"""
import logging
import random
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional

from .board import Board, BoardConfig
from .reveal import reveal_from
from .scores import ScoreLedger, ScoreRecord

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    STARTING = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Query Results
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """Read-only snapshot of one cell for display."""

    has_mine: bool
    is_revealed: bool
    is_flagged: bool
    is_exploded: bool
    adjacent_count: int


@dataclass(frozen=True)
class GameStatus:
    """Read-only snapshot of the game for display."""

    state: GameState
    flag_count: int
    mine_count: Optional[int]
    elapsed_seconds: int


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    Minesweeper engine.

    Transitions:
        STARTING --start_game--> PLAYING
        PLAYING --reveal/flag--> PLAYING, WON or LOST
        WON/LOST --reset_game--> STARTING

    Actions that do not apply to the current state, or that target a
    position off the board, are ignored and return False.
    """

    def __init__(
        self,
        ledger: Optional[ScoreLedger] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the engine in the STARTING state.

        Args:
            ledger: Score ledger that won games are appended to.
            rng: Random source for mine placement (default: unseeded).
            clock: Returns the current time in epoch seconds.
        """
        self.ledger = ledger
        self.rng = rng or random.Random()
        self.clock = clock

        self.board: Optional[Board] = None
        self.config: Optional[BoardConfig] = None
        self.state = GameState.STARTING
        self.flag_count = 0
        self.first_move_taken = False
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.terminated = False

    # ========================================================================
    # Commands
    # ========================================================================

    def start_game(self, config: BoardConfig) -> bool:
        """
        Place mines for a new game and start the timer.

        Args:
            config: Validated board configuration.

        Returns:
            True if the game started, False if not in the STARTING state.
        """
        if self.terminated or self.state != GameState.STARTING:
            return False

        board = Board(config)
        board.place_mines(config.num_mines, self.rng)
        board.compute_adjacent_counts()

        self.board = board
        self.config = config
        self.flag_count = 0
        self.first_move_taken = False
        self.start_time = self.clock()
        self.end_time = None
        self.state = GameState.PLAYING
        logger.info(
            "Game started: %dx%d with %d mines",
            config.rows, config.cols, config.num_mines,
        )
        return True

    def reveal_cell(self, row: int, col: int) -> bool:
        """
        Reveal a cell.

        The first reveal of a game never loses: a mine under it is moved
        elsewhere first. Later mines end the game.

        Returns:
            True if the board changed, False otherwise.
        """
        if not self._can_act(row, col):
            return False

        cell = self.board.get_cell(row, col)
        first_move = not self.first_move_taken
        self.first_move_taken = True

        if cell.is_mine:
            if not first_move:
                self._lose(row, col)
                return True
            self.board.relocate_mine(row, col, self.rng)
            self.board.compute_adjacent_counts()

        if not self.board.reveal_cell(row, col):
            return False
        if self.board.adjacent_count(row, col) == 0:
            reveal_from(self.board, row, col)

        # Revealing clears flags, so recount rather than adjust
        self.flag_count = self.board.count_flagged()
        self._check_win_condition()
        return True

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle a flag on an unrevealed cell.

        Returns:
            True if the flag was toggled, False otherwise.
        """
        if not self._can_act(row, col):
            return False
        if not self.board.toggle_flag(row, col):
            return False

        if self.board.get_cell(row, col).is_flagged:
            self.flag_count += 1
        else:
            self.flag_count -= 1
        self._check_win_condition()
        return True

    def reset_game(self) -> bool:
        """
        Clear a finished game and return to STARTING.

        Returns:
            True if reset, False if no game has finished.
        """
        if self.terminated or self.state not in (GameState.WON, GameState.LOST):
            return False

        self.board.clear()
        self.config = None
        self.flag_count = 0
        self.first_move_taken = False
        self.start_time = None
        self.end_time = None
        self.state = GameState.STARTING
        logger.info("Game reset")
        return True

    def quit_game(self) -> None:
        """Stop accepting commands."""
        self.terminated = True
        logger.info("Game quit")

    # ========================================================================
    # Transitions (Low-level)
    # ========================================================================

    def _can_act(self, row: int, col: int) -> bool:
        """Check that a reveal or flag applies right now."""
        if self.terminated or self.state != GameState.PLAYING:
            return False
        return self.board.is_valid_position(row, col)

    def _check_win_condition(self) -> None:
        """
        Win when every cell is revealed or flagged and the flag count
        equals the mine count. Flag positions are not checked.
        """
        if self.state == GameState.LOST:
            return
        if self.flag_count != self.config.num_mines:
            return
        if self.board.count_covered() != self.config.total_cells:
            return
        self._win()

    def _win(self) -> None:
        self.board.reveal_all()
        self.end_time = self.clock()
        self.state = GameState.WON

        record = ScoreRecord(
            mine_count=self.config.num_mines,
            elapsed_seconds=self.elapsed_seconds,
            completion_timestamp=int(self.end_time),
            rows=self.config.rows,
            cols=self.config.cols,
        )
        logger.info("Game won in %d seconds", record.elapsed_seconds)
        if self.ledger is not None:
            self.ledger.record(record)
            self.ledger.save()

    def _lose(self, row: int, col: int) -> None:
        self.board.explode(row, col)
        self.board.reveal_all()
        self.end_time = self.clock()
        self.state = GameState.LOST
        logger.info("Game lost at (%d, %d)", row, col)

    # ========================================================================
    # Queries (High-level)
    # ========================================================================

    @property
    def mine_count(self) -> Optional[int]:
        """Mines in the current game, or None while STARTING."""
        if self.config is None:
            return None
        return self.config.num_mines

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds since start, frozen once the game ends."""
        if self.start_time is None:
            return 0
        end = self.end_time if self.end_time is not None else self.clock()
        return int(end - self.start_time)

    @property
    def is_playing(self) -> bool:
        return self.state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self.state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self.state == GameState.LOST

    def cell_state(self, row: int, col: int) -> Optional[CellView]:
        """Snapshot of one cell, or None if there is no such cell."""
        if self.board is None:
            return None
        cell = self.board.get_cell(row, col)
        if cell is None:
            return None
        return CellView(
            has_mine=cell.is_mine,
            is_revealed=cell.is_revealed,
            is_flagged=cell.is_flagged,
            is_exploded=cell.is_exploded,
            adjacent_count=self.board.adjacent_count(row, col),
        )

    def game_status(self) -> GameStatus:
        return GameStatus(
            state=self.state,
            flag_count=self.flag_count,
            mine_count=self.mine_count,
            elapsed_seconds=self.elapsed_seconds,
        )

    def leaderboard(self) -> List[ScoreRecord]:
        """Best won games, most mines first, then fastest."""
        if self.ledger is None:
            return []
        return self.ledger.entries
