"""
Unit tests for Cell.

Covers the hidden/flagged/revealed transitions and explosion marking.
"""
import pytest
from minesweeper import Cell, CellState


def cell_in(state: CellState, is_mine: bool = False) -> Cell:
    return Cell(is_mine=is_mine, state=state)


# ============================================================================
# Transition Tables
# ============================================================================

class TestReveal:
    """Revealing from each starting state."""

    @pytest.mark.parametrize(
        "start, changed",
        [
            (CellState.HIDDEN, True),
            (CellState.FLAGGED, True),
            (CellState.REVEALED, False),
        ],
    )
    def test_reveal_transitions(self, start: CellState, changed: bool) -> None:
        """Every state ends revealed; only covered cells report a change."""
        cell = cell_in(start)
        assert cell.reveal() is changed
        assert cell.state is CellState.REVEALED
        assert cell.is_flagged is False

    def test_reveal_keeps_content(self, mine_cell: Cell) -> None:
        """Revealing does not touch the mine or explosion markers."""
        mine_cell.reveal()
        assert mine_cell.is_mine is True
        assert mine_cell.is_exploded is False


class TestToggleFlag:
    """Flag toggling from each starting state."""

    @pytest.mark.parametrize(
        "start, end, changed",
        [
            (CellState.HIDDEN, CellState.FLAGGED, True),
            (CellState.FLAGGED, CellState.HIDDEN, True),
            (CellState.REVEALED, CellState.REVEALED, False),
        ],
    )
    def test_toggle_transitions(
        self, start: CellState, end: CellState, changed: bool
    ) -> None:
        """Flags flip on covered cells and never land on revealed ones."""
        cell = cell_in(start)
        assert cell.toggle_flag() is changed
        assert cell.state is end

    def test_double_toggle_restores_hidden(self, hidden_cell: Cell) -> None:
        hidden_cell.toggle_flag()
        hidden_cell.toggle_flag()
        assert hidden_cell.is_hidden is True


# ============================================================================
# Derived Properties
# ============================================================================

class TestCovered:
    """Completion counting treats revealed and flagged cells alike."""

    @pytest.mark.parametrize(
        "state, covered",
        [
            (CellState.HIDDEN, False),
            (CellState.FLAGGED, True),
            (CellState.REVEALED, True),
        ],
    )
    def test_is_covered(self, state: CellState, covered: bool) -> None:
        assert cell_in(state).is_covered is covered

    def test_defaults(self, hidden_cell: Cell) -> None:
        """A new cell is an empty, hidden, intact square."""
        assert (hidden_cell.is_mine, hidden_cell.is_exploded) == (False, False)
        assert hidden_cell.state is CellState.HIDDEN


class TestExplode:
    """Marking the mine that lost the game."""

    @pytest.mark.parametrize("start", [CellState.HIDDEN, CellState.FLAGGED])
    def test_explode_reveals_and_marks(self, start: CellState) -> None:
        """The exploded mine ends up revealed, marked, and unflagged."""
        cell = cell_in(start, is_mine=True)
        cell.explode()
        assert cell.is_exploded is True
        assert cell.is_revealed is True
        assert cell.is_flagged is False
