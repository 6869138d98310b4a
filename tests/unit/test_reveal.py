"""
Unit tests for the flood-fill reveal.
"""
from minesweeper import Board, BoardConfig, reveal_from


def revealed_positions(board: Board):
    return {
        (row, col)
        for row in range(board.rows)
        for col in range(board.cols)
        if board.get_cell(row, col).is_revealed
    }


# ============================================================================
# Flood Fill Tests
# ============================================================================

class TestRevealFrom:
    """Test breadth-first reveal of zero-count regions."""

    def test_reveals_region_and_border(
        self, empty_board: Board, mine_layout
    ) -> None:
        """A corner origin opens everything except the walled-off corner."""
        # Column of mines at col 2, rows 0-4 splits the board
        mine_layout(empty_board, [(row, 2) for row in range(5)])
        empty_board.reveal_cell(0, 0)

        newly = reveal_from(empty_board, 0, 0)

        expected = {(row, col) for row in range(5) for col in (0, 1)}
        assert revealed_positions(empty_board) == expected
        assert newly == expected - {(0, 0)}

    def test_stops_at_numbered_cells(
        self, center_mine_board: Board
    ) -> None:
        """The ring around a mine is revealed but never expanded past."""
        center_mine_board.reveal_cell(0, 0)
        reveal_from(center_mine_board, 0, 0)

        revealed = revealed_positions(center_mine_board)
        assert (2, 2) not in revealed
        assert len(revealed) == 24

    def test_no_unrevealed_zero_next_to_revealed_zero(
        self, empty_board: Board, mine_layout
    ) -> None:
        """The fill is maximal: no zero cell is left at its frontier."""
        mine_layout(empty_board, [(1, 3), (3, 1)])
        empty_board.reveal_cell(0, 0)
        reveal_from(empty_board, 0, 0)

        for row, col in revealed_positions(empty_board):
            if empty_board.adjacent_count(row, col) != 0:
                continue
            for n_row, n_col in empty_board.neighbors(row, col):
                assert empty_board.get_cell(n_row, n_col).is_revealed

    def test_never_reveals_mines(self, empty_board: Board, mine_layout) -> None:
        """Mines only border numbered cells, so the fill never reaches them."""
        mines = [(0, 4), (4, 0), (4, 4)]
        mine_layout(empty_board, mines)
        empty_board.reveal_cell(0, 0)
        reveal_from(empty_board, 0, 0)

        for row, col in mines:
            assert not empty_board.get_cell(row, col).is_revealed

    def test_clears_flags_on_revealed_cells(
        self, center_mine_board: Board
    ) -> None:
        """Flags inside the filled region are removed."""
        center_mine_board.toggle_flag(4, 4)
        center_mine_board.toggle_flag(2, 2)
        center_mine_board.reveal_cell(0, 0)
        reveal_from(center_mine_board, 0, 0)

        assert center_mine_board.get_cell(4, 4).is_revealed
        assert center_mine_board.get_cell(2, 2).is_flagged
        assert center_mine_board.count_flagged() == 1

    def test_skips_already_revealed(self, center_mine_board: Board) -> None:
        """Cells revealed earlier are not reported again."""
        center_mine_board.reveal_cell(0, 1)
        center_mine_board.reveal_cell(0, 0)
        newly = reveal_from(center_mine_board, 0, 0)
        assert (0, 1) not in newly

    def test_large_board_terminates(self) -> None:
        """A mine-free sweep over a big board reveals every cell once."""
        board = Board(BoardConfig(60, 60, 1))
        board.reveal_cell(30, 30)
        newly = reveal_from(board, 30, 30)
        assert len(newly) == 60 * 60 - 1
