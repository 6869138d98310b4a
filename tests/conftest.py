"""
Pytest configuration and shared fixtures.
"""
import random
import pytest
import sys
from pathlib import Path
from typing import Callable, Iterable, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
# Repository root, for the main.py entry point
sys.path.insert(1, str(Path(__file__).parent.parent))

from minesweeper import Board, BoardConfig, Cell, Game, ScoreLedger


# ============================================================================
# Helpers
# ============================================================================

class FakeClock:
    """Manually advanced stand-in for time.time."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def set_mines(board: Board, positions: Iterable[Tuple[int, int]]) -> None:
    """Replace the board's mines with exactly ``positions``."""
    wanted = set(positions)
    for row in range(board.rows):
        for col in range(board.cols):
            board.get_cell(row, col).is_mine = (row, col) in wanted
    board.compute_adjacent_counts()


# ============================================================================
# Random / Clock Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible layouts."""
    return random.Random(1234)


@pytest.fixture
def clock() -> FakeClock:
    """Controllable clock starting at a fixed epoch."""
    return FakeClock()


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def empty_board() -> Board:
    """Create a 5x5 board with no mines placed yet."""
    return Board(BoardConfig(5, 5, 1))


@pytest.fixture
def center_mine_board(empty_board: Board) -> Board:
    """5x5 board with a single mine at the center."""
    set_mines(empty_board, [(2, 2)])
    return empty_board


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def ledger(tmp_path: Path) -> ScoreLedger:
    """Score ledger stored in a temporary directory."""
    return ScoreLedger(tmp_path / "scores.csv")


@pytest.fixture
def game(ledger: ScoreLedger, rng: random.Random, clock: FakeClock) -> Game:
    """Game in the STARTING state with deterministic rng and clock."""
    return Game(ledger=ledger, rng=rng, clock=clock)


@pytest.fixture
def rigged_game(game: Game) -> Callable[..., Game]:
    """Factory starting ``game`` with a known mine layout."""

    def start(rows: int, cols: int, mines: Iterable[Tuple[int, int]]) -> Game:
        mines = list(mines)
        game.start_game(BoardConfig(rows, cols, len(mines)))
        set_mines(game.board, mines)
        return game

    return start


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


@pytest.fixture
def mine_layout() -> Callable[[Board, Iterable[Tuple[int, int]]], None]:
    """Function that puts mines exactly where a test wants them."""
    return set_mines
