"""SQLite access for the meal catalog."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from mealmatch.db.schema import get_schema_sql


class DatabaseConnection:
    """Opens short-lived connections to the catalog database.

    Each ``get_connection`` block is one transaction: committed on success,
    rolled back if the block raises.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield a connection with Row factory and foreign keys enabled."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize_schema(self) -> None:
        """Create the catalog tables if they don't exist."""
        with self.get_connection() as conn:
            conn.executescript(get_schema_sql())

    def table_exists(self, table_name: str) -> bool:
        """Check whether a table exists in the database."""
        with self.get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
                (table_name,),
            ).fetchone()
        return row is not None


# Lazily created from settings
_db: Optional[DatabaseConnection] = None


def get_db() -> DatabaseConnection:
    """Return the catalog database configured in settings."""
    global _db
    if _db is None:
        from mealmatch.config import get_settings

        _db = DatabaseConnection(get_settings().database.path)
    return _db
