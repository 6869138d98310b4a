"""
Board module for Minesweeper game.

Implements the game board: mine placement, adjacent mine counts,
first-click mine relocation, and per-cell reveal/flag bookkeeping.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (delta_row, delta_col)
    for delta_row in (-1, 0, 1)
    for delta_col in (-1, 0, 1)
    if (delta_row, delta_col) != (0, 0)
)

# Observation codes beyond the 0-8 adjacent counts
HIDDEN_CODE = -1
FLAGGED_CODE = -2
MINE_CODE = 9
EXPLODED_CODE = 10


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to place.
    """

    rows: int = 16
    cols: int = 16
    num_mines: int = 40

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for name in ("rows", "cols", "num_mines"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 1:
            raise ValueError("Number of mines must be positive")
        max_mines = self.rows * self.cols - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.rows * self.cols


# Preset difficulty levels
EASY = BoardConfig(9, 9, 10)
MEDIUM = BoardConfig(16, 16, 40)
HARD = BoardConfig(16, 30, 99)

DIFFICULTIES: Dict[str, BoardConfig] = {
    "easy": EASY,
    "medium": MEDIUM,
    "hard": HARD,
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Holds the grid of cells and a parallel numpy grid of adjacent mine
    counts. Counts are only refreshed by ``compute_adjacent_counts``, so
    callers must recompute after placing or relocating mines.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    adjacent_counts: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self.clear()

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def clear(self) -> None:
        """Drop all mines, reveals, and flags."""
        self._grid = [
            [Cell() for _ in range(self.cols)]
            for _ in range(self.rows)
        ]
        self.adjacent_counts = np.zeros((self.rows, self.cols), dtype=np.int8)

    def place_mines(self, count: int, rng: random.Random) -> None:
        """
        Place mines on distinct random cells by rejection sampling.

        Args:
            count: Number of mines to add.
            rng: Random source used to pick positions.

        Raises:
            ValueError: If the board cannot hold ``count`` more mines and
                still keep at least one safe cell.
        """
        free_cells = self.config.total_cells - self.mine_count
        if count < 0 or count >= free_cells:
            raise ValueError(
                f"Cannot place {count} mines on a board with {free_cells} free cells"
            )
        for _ in range(count):
            row, col = self._pick_unmined_cell(rng)
            self._grid[row][col].is_mine = True

    def relocate_mine(self, row: int, col: int, rng: random.Random) -> Tuple[int, int]:
        """
        Move the mine at (row, col) to a random unmined cell elsewhere.

        Adjacent counts are left stale; call ``compute_adjacent_counts``.

        Returns:
            The (row, col) that received the mine.

        Raises:
            ValueError: If (row, col) holds no mine or no other cell is free.
        """
        cell = self._grid[row][col]
        if not cell.is_mine:
            raise ValueError(f"No mine at ({row}, {col}) to relocate")
        if self.mine_count >= self.config.total_cells:
            raise ValueError("No free cell to relocate the mine to")
        new_row, new_col = self._pick_unmined_cell(rng, exclude=(row, col))
        cell.is_mine = False
        self._grid[new_row][new_col].is_mine = True
        logger.debug("Relocated mine (%d, %d) -> (%d, %d)", row, col, new_row, new_col)
        return new_row, new_col

    def _pick_unmined_cell(
        self,
        rng: random.Random,
        exclude: Optional[Tuple[int, int]] = None,
    ) -> Tuple[int, int]:
        """Draw random cells until one without a mine comes up."""
        while True:
            row = rng.randrange(self.rows)
            col = rng.randrange(self.cols)
            if (row, col) != exclude and not self._grid[row][col].is_mine:
                return row, col

    def compute_adjacent_counts(self) -> None:
        """Recalculate adjacent mine counts for every cell."""
        padded = np.pad(self.mine_mask().astype(np.int8), 1)
        counts = np.zeros((self.rows, self.cols), dtype=np.int8)
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            counts += padded[
                1 + delta_row:1 + delta_row + self.rows,
                1 + delta_col:1 + delta_col + self.cols,
            ]
        self.adjacent_counts = counts

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors, fewer than
            eight at edges and corners.
        """
        neighbors = []
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self.is_valid_position(new_row, new_col):
                neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    # ========================================================================
    # Cell Actions (Mid-level)
    # ========================================================================

    def reveal_cell(self, row: int, col: int) -> bool:
        """Reveal one cell. Returns True if it was not revealed before."""
        return self._grid[row][col].reveal()

    def toggle_flag(self, row: int, col: int) -> bool:
        """Toggle the flag on one cell. Returns False for revealed cells."""
        return self._grid[row][col].toggle_flag()

    def explode(self, row: int, col: int) -> None:
        self._grid[row][col].explode()

    def reveal_all(self) -> None:
        """Reveal every cell, clearing all flags."""
        for grid_row in self._grid:
            for cell in grid_row:
                cell.reveal()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def adjacent_count(self, row: int, col: int) -> int:
        return int(self.adjacent_counts[row, col])

    def mine_mask(self) -> np.ndarray:
        """Boolean grid, True where a mine sits."""
        return np.array(
            [[cell.is_mine for cell in grid_row] for grid_row in self._grid],
            dtype=bool,
        ).reshape(self.rows, self.cols)

    @property
    def mine_count(self) -> int:
        """Number of mines currently on the board."""
        return sum(cell.is_mine for grid_row in self._grid for cell in grid_row)

    def count_flagged(self) -> int:
        """Number of cells currently carrying a flag."""
        return sum(cell.is_flagged for grid_row in self._grid for cell in grid_row)

    def count_covered(self) -> int:
        """Number of cells that are either revealed or flagged."""
        return sum(
            cell.is_covered for grid_row in self._grid for cell in grid_row
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
                10 = exploded mine
        """
        obs = np.full((self.rows, self.cols), HIDDEN_CODE, dtype=np.int8)
        for row in range(self.rows):
            for col in range(self.cols):
                cell = self._grid[row][col]
                if cell.state == CellState.FLAGGED:
                    obs[row, col] = FLAGGED_CODE
                elif cell.state == CellState.REVEALED:
                    if cell.is_exploded:
                        obs[row, col] = EXPLODED_CODE
                    elif cell.is_mine:
                        obs[row, col] = MINE_CODE
                    else:
                        obs[row, col] = self.adjacent_counts[row, col]
        return obs

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get list of cells that are not yet revealed.

        Returns:
            List of (row, col) positions that can still be revealed or flagged.
        """
        actions = []
        for row in range(self.rows):
            for col in range(self.cols):
                if not self._grid[row][col].is_revealed:
                    actions.append((row, col))
        return actions
