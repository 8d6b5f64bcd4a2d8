"""Single-table key-value store on top of SQLite."""
from typing import Optional

import aiosqlite

from quiz_bot.db.database import Database
from quiz_bot.exceptions import StorageError


class KeyValueStore:
    """get / set / delete of text values by key. Every write is one committed statement."""

    def __init__(self, db: Database):
        self.db = db

    async def get(self, key: str) -> Optional[str]:
        """Return the stored value or None if the key was never set."""
        try:
            row = await self.db.fetchone("SELECT value FROM kv_store WHERE key = ?", (key,))
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to read {key!r}: {e}") from e
        return row["value"] if row else None

    async def set(self, key: str, value: str) -> None:
        """Insert or replace the value stored under key."""
        try:
            await self.db.execute(
                """INSERT INTO kv_store (key, value, updated_at)
                   VALUES (?, ?, datetime('now'))
                   ON CONFLICT(key) DO UPDATE SET
                       value = excluded.value,
                       updated_at = excluded.updated_at""",
                (key, value),
            )
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to write {key!r}: {e}") from e

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True if it existed."""
        try:
            deleted = await self.db.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to delete {key!r}: {e}") from e
        return deleted > 0
