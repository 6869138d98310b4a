"""
Flood-fill reveal for Minesweeper boards.

Exposes the connected region of zero-count cells around an origin,
together with the numbered cells bordering that region.
"""
from collections import deque
from typing import Deque, Set, Tuple

from .board import Board


def reveal_from(board: Board, row: int, col: int) -> Set[Tuple[int, int]]:
    """
    Breadth-first reveal starting at the neighbors of (row, col).

    The origin itself is revealed by the caller. Every cell popped from
    the queue is revealed (clearing any flag) and, if its adjacent count
    is zero, its neighbors are queued. A cell is expanded at most once
    because it is marked revealed before its neighbors are queued.

    Args:
        board: Board to reveal cells on.
        row: Row index of the origin.
        col: Column index of the origin.

    Returns:
        Set of (row, col) positions revealed by this call.
    """
    revealed: Set[Tuple[int, int]] = set()
    queue: Deque[Tuple[int, int]] = deque(board.neighbors(row, col))

    while queue:
        current_row, current_col = queue.popleft()
        if not board.reveal_cell(current_row, current_col):
            continue
        revealed.add((current_row, current_col))
        if board.adjacent_count(current_row, current_col) == 0:
            queue.extend(board.neighbors(current_row, current_col))

    return revealed
