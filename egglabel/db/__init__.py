"""SQLite persistence for the decoded record history."""

from .history import DEFAULT_DB_PATH, HistoryDB
from .schema import ensure_schema

__all__ = [
    "DEFAULT_DB_PATH",
    "HistoryDB",
    "ensure_schema",
]
