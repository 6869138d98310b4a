"""
Cell module for Minesweeper game.

A cell is either showing its content or covered, and a covered cell may
carry a flag. Keeping those three cases in one enum field means a cell
can never be revealed and flagged at the same time.
"""
from enum import Enum
from dataclasses import dataclass
from typing import Dict


class CellState(Enum):
    """Visibility of a cell."""

    HIDDEN = "hidden"
    REVEALED = "revealed"
    FLAGGED = "flagged"


# Flag toggling only moves between these two; revealed cells have no entry
FLAG_TOGGLE: Dict[CellState, CellState] = {
    CellState.HIDDEN: CellState.FLAGGED,
    CellState.FLAGGED: CellState.HIDDEN,
}


@dataclass
class Cell:
    """
    One grid position.

    Attributes:
        is_mine: Whether a mine sits here.
        is_exploded: True only for the mine whose reveal lost the game.
        state: Hidden, revealed, or flagged.
    """

    is_mine: bool = False
    is_exploded: bool = False
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Show the cell, dropping any flag on it.

        Returns:
            False if the cell was already showing, True otherwise.
        """
        newly_shown = self.state is not CellState.REVEALED
        self.state = CellState.REVEALED
        return newly_shown

    def toggle_flag(self) -> bool:
        """Flag or unflag a covered cell. Returns False for revealed cells."""
        flipped = FLAG_TOGGLE.get(self.state)
        if flipped is None:
            return False
        self.state = flipped
        return True

    def explode(self) -> None:
        """Reveal this cell as the mine that ended the game."""
        self.is_exploded = True
        self.reveal()

    @property
    def is_hidden(self) -> bool:
        return self.state is CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state is CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state is CellState.FLAGGED

    @property
    def is_covered(self) -> bool:
        """Counts toward completion: revealed or flagged."""
        return not self.is_hidden
