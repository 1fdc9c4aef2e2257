"""SQLite journal store for TradeJournal."""

import json
import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from tradejournal.models import DetectedTag, JournalEntry

logger = logging.getLogger(__name__)


class JournalStoreError(Exception):
    """Raised when a journal write fails."""


class JournalStore:
    """SQLite-based store for journal entries.

    Last write wins per entry id. Read failures are logged and reported as
    empty results; write failures raise JournalStoreError.
    """

    REQUIRED_TABLES = ["journal_entries"]

    def __init__(self, db_path: Path):
        """Initialize the journal store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS journal_entries (
                    id TEXT PRIMARY KEY,
                    date TEXT NOT NULL,
                    content TEXT NOT NULL,
                    trade_ids TEXT NOT NULL DEFAULT '[]',
                    detected_tags TEXT,
                    process_score INTEGER,
                    created_at TEXT,
                    updated_at TEXT NOT NULL
                )
            """)
            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_journal_entries_date ON journal_entries (date)"
            )
            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Serialization ====================

    @staticmethod
    def _to_row(entry: JournalEntry) -> tuple:
        tags = (
            json.dumps([tag.model_dump(mode="json") for tag in entry.detected_tags])
            if entry.detected_tags is not None
            else None
        )
        return (
            entry.id,
            entry.date.isoformat(),
            entry.content,
            json.dumps(entry.trade_ids),
            tags,
            entry.process_score,
            entry.created_at.isoformat() if entry.created_at else None,
            datetime.now().isoformat(),
        )

    @staticmethod
    def _from_row(row: sqlite3.Row) -> JournalEntry:
        tags = row["detected_tags"]
        return JournalEntry(
            id=row["id"],
            date=date.fromisoformat(row["date"]),
            content=row["content"],
            trade_ids=json.loads(row["trade_ids"] or "[]"),
            detected_tags=(
                [DetectedTag(**tag) for tag in json.loads(tags)]
                if tags is not None
                else None
            ),
            process_score=row["process_score"],
            created_at=(
                datetime.fromisoformat(row["created_at"]) if row["created_at"] else None
            ),
        )

    # ==================== Journal ====================

    def put(self, entry: JournalEntry) -> None:
        """Insert or replace a journal entry.

        Args:
            entry: Entry to save.

        Raises:
            JournalStoreError: If the write fails.
        """
        self.put_many([entry])

    def put_many(self, entries: list[JournalEntry]) -> None:
        """Insert or replace several entries in one transaction.

        Args:
            entries: Entries to save.

        Raises:
            JournalStoreError: If the write fails.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.executemany(
                """
                INSERT OR REPLACE INTO journal_entries
                (id, date, content, trade_ids, detected_tags, process_score, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [self._to_row(entry) for entry in entries],
            )
            conn.commit()
        except sqlite3.Error as exc:
            raise JournalStoreError(f"Failed to save journal entries: {exc}") from exc
        finally:
            conn.close()

    def get(self, entry_id: str) -> Optional[JournalEntry]:
        """Get a journal entry by id.

        Args:
            entry_id: Entry id.

        Returns:
            The entry, or None if it does not exist or cannot be read.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM journal_entries WHERE id = ?", (entry_id,))
            row = cursor.fetchone()
            return self._from_row(row) if row else None
        except (sqlite3.Error, ValueError) as exc:
            logger.warning("Failed to load journal entry %s: %s", entry_id, exc)
            return None
        finally:
            conn.close()

    def get_all(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> list[JournalEntry]:
        """Get journal entries, newest first.

        Args:
            from_date: Optional start date filter (inclusive).
            to_date: Optional end date filter (inclusive).

        Returns:
            List of journal entries; empty if the store cannot be read.
        """
        query = "SELECT * FROM journal_entries"
        clauses = []
        params: list[str] = []
        if from_date:
            clauses.append("date >= ?")
            params.append(from_date.isoformat())
        if to_date:
            clauses.append("date <= ?")
            params.append(to_date.isoformat())
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY date DESC, created_at DESC"

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [self._from_row(row) for row in cursor.fetchall()]
        except (sqlite3.Error, ValueError) as exc:
            logger.warning("Failed to load journal entries: %s", exc)
            return []
        finally:
            conn.close()

    def delete(self, entry_id: str) -> bool:
        """Delete a journal entry by id.

        Args:
            entry_id: Entry id.

        Returns:
            True if an entry was removed.

        Raises:
            JournalStoreError: If the write fails.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM journal_entries WHERE id = ?", (entry_id,))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error as exc:
            raise JournalStoreError(f"Failed to delete journal entry {entry_id}: {exc}") from exc
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
