"""
Startup configuration: board selection from the command line and the
location of the score ledger.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .board import DIFFICULTIES, MEDIUM, BoardConfig


# ============================================================================
# Constants
# ============================================================================

SCORES_ENV_VAR = "MINESWEEPER_SCORES"
DEFAULT_SCORES_FILE = ".minesweeper_scores"


# ============================================================================
# Board Selection
# ============================================================================

def parse_board_config(args: Sequence[str]) -> BoardConfig:
    """
    Turn command-line words into a board configuration.

    Accepts nothing (medium), one difficulty keyword, or three integers
    ``rows cols mines``.

    Raises:
        ValueError: If the words match neither form or describe an
            impossible board.
    """
    if not args:
        return MEDIUM

    if len(args) == 1:
        key = args[0].lower()
        if key not in DIFFICULTIES:
            choices = ", ".join(DIFFICULTIES)
            raise ValueError(f"Unknown difficulty {args[0]!r} (choose {choices})")
        return DIFFICULTIES[key]

    if len(args) == 3:
        try:
            rows, cols, mines = (int(value) for value in args)
        except ValueError:
            raise ValueError(
                f"Expected integers for rows, cols and mines, got {' '.join(args)!r}"
            ) from None
        return BoardConfig(rows=rows, cols=cols, num_mines=mines)

    raise ValueError("Give a difficulty or three integers: rows cols mines")


# ============================================================================
# Settings
# ============================================================================

@dataclass
class Settings:
    """
    Process-wide settings.

    Attributes:
        scores_path: File holding the score ledger.
    """

    scores_path: Path

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "Settings":
        """Read settings from the environment, falling back to defaults."""
        environ = os.environ if environ is None else environ
        override = environ.get(SCORES_ENV_VAR)
        if override:
            return cls(scores_path=Path(override).expanduser())
        return cls(scores_path=Path.home() / DEFAULT_SCORES_FILE)
