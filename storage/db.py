"""
SQLite cursor store. One file, one connection, no ORM.

Tables:
- cursors: last fully processed item id per source
"""

import sqlite3
from pathlib import Path

from storage.base import CursorStore, StoreError, DEFAULT_CURSOR, validate_cursor


class SQLiteCursorStore(CursorStore):
    def __init__(self, db_path: Path):
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(db_path))
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.row_factory = sqlite3.Row
            self._migrate()
        except (OSError, sqlite3.Error) as e:
            raise StoreError(f"Cannot open cursor database {db_path}: {e}") from e

    def _migrate(self):
        """Create tables if they don't exist. No migration framework needed."""
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS cursors (
                source_id TEXT PRIMARY KEY,
                value TEXT NOT NULL DEFAULT '0',
                updated_at TEXT NOT NULL DEFAULT (datetime('now'))
            );
        """)
        self._conn.commit()

    def get(self, source_id: str) -> str:
        """Get the cursor for a source, creating it at "0" if missing."""
        try:
            self._conn.execute(
                "INSERT OR IGNORE INTO cursors (source_id, value) VALUES (?, ?)",
                (source_id, DEFAULT_CURSOR),
            )
            self._conn.commit()
            row = self._conn.execute(
                "SELECT value FROM cursors WHERE source_id = ?", (source_id,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Cursor read failed for {source_id}: {e}") from e
        return validate_cursor(row["value"] or DEFAULT_CURSOR)

    def set(self, source_id: str, value: str):
        """Save a cursor. Overwrites whatever is there."""
        validate_cursor(value)
        try:
            self._conn.execute(
                """INSERT INTO cursors (source_id, value, updated_at)
                   VALUES (?, ?, datetime('now'))
                   ON CONFLICT(source_id)
                   DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at""",
                (source_id, value),
            )
            self._conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Cursor write failed for {source_id}: {e}") from e

    def close(self):
        self._conn.close()
