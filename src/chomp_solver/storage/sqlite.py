"""SQLite policy store."""

import json
import logging
import sqlite3
from typing import Optional

from ..core import BoardState, Move
from ..policy import PolicyTable
from ..solver import Evaluation, Outcome
from .base import PolicyStore

logger = logging.getLogger(__name__)


class SQLitePolicyStore(PolicyStore):
    """
    SQLite storage for an exported policy table.

    One row per position, keyed by the canonical state text so rows can be
    queried by hand (e.g. WHERE state = '0,0,-1,-1,-1,-1,-1,-1').
    """

    def __init__(self, db_path: str = "policy.db"):
        """
        Initialize SQLite store.

        Args:
            db_path: Path to database file (use ":memory:" for in-memory)
        """
        self.db_path = db_path
        self.conn = sqlite3.connect(db_path)
        self.conn.row_factory = sqlite3.Row  # Enable dict-like access
        self._create_schema()

    def _create_schema(self) -> None:
        """Create database schema."""
        self.conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS policy (
                state TEXT PRIMARY KEY,            -- canonical "e1,...,e8"
                cells_remaining INTEGER NOT NULL,  -- 1..40
                winning INTEGER NOT NULL,          -- 0/1
                winning_moves TEXT NOT NULL        -- JSON [[row, col], ...]
            );

            CREATE INDEX IF NOT EXISTS idx_cells_remaining ON policy(cells_remaining);
        """
        )
        self.conn.commit()

    def write_table(self, table: PolicyTable) -> int:
        """Replace the stored policy with `table`."""
        rows = [
            (
                state.to_text(),
                state.cells_remaining,
                int(evaluation.winning),
                json.dumps([[move.row, move.col] for move in evaluation.winning_moves]),
            )
            for state, evaluation in table.items()
        ]
        with self.conn:
            self.conn.execute("DELETE FROM policy")
            self.conn.executemany(
                """
                INSERT INTO policy (state, cells_remaining, winning, winning_moves)
                VALUES (?, ?, ?, ?)
            """,
                rows,
            )
        logger.info(f"Stored {len(rows):,} positions in {self.db_path}")
        return len(rows)

    def get(self, state: BoardState) -> Optional[Evaluation]:
        """Retrieve evaluation by state."""
        cursor = self.conn.execute(
            "SELECT winning, winning_moves FROM policy WHERE state = ?",
            (state.to_text(),),
        )
        row = cursor.fetchone()
        if row is None:
            return None

        moves = tuple(Move.of(r, c) for r, c in json.loads(row["winning_moves"]))
        outcome = Outcome.WIN if row["winning"] else Outcome.LOSS
        return Evaluation(outcome, moves)

    def count_positions(self, winning: Optional[bool] = None) -> int:
        """Count positions."""
        if winning is None:
            cursor = self.conn.execute("SELECT COUNT(*) FROM policy")
        else:
            cursor = self.conn.execute(
                "SELECT COUNT(*) FROM policy WHERE winning = ?", (int(winning),)
            )
        return cursor.fetchone()[0]

    def flush(self) -> None:
        """Commit pending transactions."""
        self.conn.commit()

    def close(self) -> None:
        """Close database connection."""
        self.conn.commit()
        self.conn.close()

    def __enter__(self):
        """Context manager support."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager cleanup."""
        self.close()
