"""Durable string key-value storage backed by SQLite."""
from typing import Optional
from .. import config
from .connection import get_cursor


class KeyValueStore:
    """
    Minimal get/set of string values by key.

    Every call opens its own connection and commits before returning, so a
    successful set_item is durable. sqlite3.Error propagates to the caller.
    """

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path or config.DB_PATH

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key was never written."""
        with get_cursor(self.db_path) as cur:
            cur.execute("SELECT value FROM kv_items WHERE key = ?", (key,))
            row = cur.fetchone()
            return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        with get_cursor(self.db_path) as cur:
            cur.execute(
                "INSERT OR REPLACE INTO kv_items (key, value) VALUES (?, ?)",
                (key, value)
            )
