"""
Minesweeper game package.

Provides the board engine, flood-fill reveal, game state machine,
and the persisted score ledger.
"""
from .cell import Cell, CellState
from .board import Board, BoardConfig, DIFFICULTIES, EASY, MEDIUM, HARD
from .reveal import reveal_from
from .game import CellView, Game, GameState, GameStatus
from .scores import LedgerError, ScoreLedger, ScoreRecord, MAX_ENTRIES
from .config import Settings, parse_board_config
from .environment import MinesweeperEnv, render_board

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "DIFFICULTIES",
    "EASY",
    "MEDIUM",
    "HARD",
    "reveal_from",
    "CellView",
    "Game",
    "GameState",
    "GameStatus",
    "LedgerError",
    "ScoreLedger",
    "ScoreRecord",
    "MAX_ENTRIES",
    "Settings",
    "parse_board_config",
    "MinesweeperEnv",
    "render_board",
]
