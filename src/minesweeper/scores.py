"""
Score ledger for won games.

Records are kept in a small CSV file with a ``mines,time,date,rows,cols``
header, sorted best-first and capped at ``MAX_ENTRIES`` rows.
"""
import csv
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Union

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MAX_ENTRIES = 13
FIELDNAMES = ["mines", "time", "date", "rows", "cols"]


class LedgerError(ValueError):
    """Raised when the persisted ledger cannot be parsed."""


# ============================================================================
# Score Record
# ============================================================================

@dataclass(frozen=True)
class ScoreRecord:
    """
    One won game.

    Attributes:
        mine_count: Mines on the board.
        elapsed_seconds: Whole seconds from start to win.
        completion_timestamp: Unix epoch seconds at which the game was won.
        rows: Board rows.
        cols: Board columns.
    """

    mine_count: int
    elapsed_seconds: int
    completion_timestamp: int
    rows: int
    cols: int

    def sort_key(self) -> Tuple[int, int]:
        """More mines first, then faster times."""
        return (-self.mine_count, self.elapsed_seconds)

    def to_row(self) -> List[int]:
        return [
            self.mine_count,
            self.elapsed_seconds,
            self.completion_timestamp,
            self.rows,
            self.cols,
        ]

    @classmethod
    def from_row(cls, row: List[str]) -> "ScoreRecord":
        """Build a record from one CSV row, raising ValueError if malformed."""
        if len(row) != len(FIELDNAMES):
            raise ValueError(f"expected {len(FIELDNAMES)} fields, got {len(row)}")
        mines, time_s, date, rows, cols = (int(value) for value in row)
        if mines < 1 or rows < 1 or cols < 1:
            raise ValueError("mines, rows and cols must be positive")
        if time_s < 0 or date < 0:
            raise ValueError("time and date cannot be negative")
        return cls(mines, time_s, date, rows, cols)


# ============================================================================
# Score Ledger
# ============================================================================

@dataclass
class ScoreLedger:
    """
    Append-only list of won games backed by a CSV file.

    Attributes:
        path: File the ledger is read from and written to.
    """

    path: Union[str, Path]
    _entries: List[ScoreRecord] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    @property
    def entries(self) -> List[ScoreRecord]:
        """Records ordered best-first, at most ``MAX_ENTRIES`` of them."""
        return sorted(self._entries, key=ScoreRecord.sort_key)[:MAX_ENTRIES]

    def load(self) -> List[ScoreRecord]:
        """
        Read records from disk, replacing the in-memory list.

        A missing or empty file yields an empty ledger.

        Raises:
            LedgerError: If the file content is not a valid ledger.
        """
        try:
            with open(self.path, newline="", encoding="utf-8") as csvfile:
                rows = list(csv.reader(csvfile))
        except FileNotFoundError:
            logger.debug("No score ledger at %s, starting empty", self.path)
            self._entries = []
            return []
        except (UnicodeDecodeError, csv.Error) as exc:
            raise LedgerError(f"{self.path}: {exc}") from exc

        if not rows:
            self._entries = []
            return []
        if rows[0] != FIELDNAMES:
            raise LedgerError(f"{self.path}: unexpected header {rows[0]!r}")

        entries = []
        for line_number, row in enumerate(rows[1:], start=2):
            if not row:
                continue
            try:
                entries.append(ScoreRecord.from_row(row))
            except ValueError as exc:
                raise LedgerError(f"{self.path}:{line_number}: {exc}") from exc

        self._entries = entries
        logger.debug("Loaded %d scores from %s", len(entries), self.path)
        return self.entries

    def record(self, entry: ScoreRecord) -> None:
        """Append a record; it is persisted on the next ``save``."""
        self._entries.append(entry)

    def save(self) -> None:
        """Sort, keep the best ``MAX_ENTRIES`` and atomically rewrite the file."""
        self._entries = self.entries
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            csvfile = os.fdopen(fd, "w", newline="", encoding="utf-8")
        except BaseException:
            os.close(fd)
            os.unlink(tmp_name)
            raise

        try:
            with csvfile:
                writer = csv.writer(csvfile, lineterminator="\n")
                writer.writerow(FIELDNAMES)
                for entry in self._entries:
                    writer.writerow(entry.to_row())
            os.replace(tmp_name, self.path)
        except BaseException:
            os.unlink(tmp_name)
            raise

        logger.debug("Saved %d scores to %s", len(self._entries), self.path)
