"""Persistence of the serialized record history."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from .schema import ensure_schema

if TYPE_CHECKING:
    from ..store import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "~/.config/egglabel/history.db"


class HistoryDB:
    """Stores the history blob in a single-row table.

    Each save replaces the row inside one transaction, so a concurrent
    reader sees either the previous or the new history, never a mix.
    """

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            try:
                self._conn = ensure_schema(self._db_path)
            except sqlite3.DatabaseError as e:
                self._move_aside(e)
                self._conn = ensure_schema(self._db_path)
        return self._conn

    def _move_aside(self, error: sqlite3.DatabaseError) -> None:
        """Rename an unreadable database file so a fresh one can be created."""
        path = Path(self._db_path).expanduser()
        target = path.with_name(path.name + ".corrupt")
        logger.warning(
            "History database %s is unreadable (%s); moving it to %s",
            path, error, target,
        )
        path.replace(target)
        for suffix in ("-wal", "-shm"):
            sidecar = path.with_name(path.name + suffix)
            if sidecar.exists():
                sidecar.unlink()

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> HistoryDB:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def load(self) -> str | None:
        """Return the stored blob, or None if nothing was saved yet."""
        try:
            row = self._get_conn().execute(
                "SELECT blob FROM history_blob WHERE id = 1"
            ).fetchone()
        except sqlite3.DatabaseError:
            logger.exception("Could not read history from %s", self._db_path)
            return None
        return row["blob"] if row else None

    def save(self, blob: str, record_count: int = 0) -> None:
        """Replace the stored blob atomically."""
        conn = self._get_conn()
        with conn:
            conn.execute(
                """INSERT INTO history_blob (id, blob, record_count, saved_at)
                   VALUES (1, ?, ?, datetime('now', 'localtime'))
                   ON CONFLICT(id) DO UPDATE SET
                       blob = excluded.blob,
                       record_count = excluded.record_count,
                       saved_at = excluded.saved_at""",
                (blob, record_count),
            )
        logger.debug("Saved history (%d records) to %s", record_count, self._db_path)

    def load_store(self) -> RecordStore:
        """Load the history, falling back to an empty store."""
        from ..store import RecordStore

        return RecordStore.from_blob(self.load())

    def save_store(self, store: RecordStore) -> None:
        self.save(store.to_blob(), record_count=len(store))
