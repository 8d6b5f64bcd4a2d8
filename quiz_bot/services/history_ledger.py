"""Append-only history of completed quiz sessions."""
import json
import logging
from typing import Optional, Tuple

from quiz_bot.db.kv_store import KeyValueStore
from quiz_bot.exceptions import StorageError
from quiz_bot.models import HistoryRecord, record_from_payload, record_to_payload

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "quizHistory"


def records_to_json(records: Tuple[HistoryRecord, ...]) -> str:
    return json.dumps([record_to_payload(r) for r in records], ensure_ascii=False)


def records_from_json(raw: str) -> Tuple[HistoryRecord, ...]:
    """
    Decode the stored history.

    Raises:
        ValueError: if raw is not a JSON array of valid history records
    """
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"history must be a JSON array, got {type(data).__name__}")
    return tuple(record_from_payload(item) for item in data)


class HistoryLedger:
    """
    In-memory history mirrored to one key-value slot.

    Records stay in insertion order (oldest first). Every write stores the full
    sequence, so one successful write is enough to bring the store back in line
    with memory after an earlier failure. Storage problems never reach the
    caller: they are logged and reported through ``in_sync``.

    A slot that could not be read is never overwritten: append() reads it again
    first and keeps the stored records in front of the new ones.
    """

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_HISTORY_KEY):
        self.store = store
        self.key = key
        self._records: Tuple[HistoryRecord, ...] = ()
        self._loaded = False
        self.in_sync = True

    @property
    def records(self) -> Tuple[HistoryRecord, ...]:
        return self._records

    async def load(self) -> Tuple[HistoryRecord, ...]:
        """Read the stored history. Anything unreadable degrades to an empty history."""
        try:
            raw = await self.store.get(self.key)
        except StorageError as e:
            logger.warning("Could not load quiz history: %s", e)
            self._records = ()
            self._loaded = False
            self.in_sync = False
            return self._records

        self._records = self._decode(raw)
        self._loaded = True
        self.in_sync = True
        logger.info("Loaded %d history records", len(self._records))
        return self._records

    async def append(self, record: HistoryRecord) -> Tuple[HistoryRecord, ...]:
        """Add record to the end of the history and persist the whole sequence."""
        if not self._loaded and not await self._merge_stored():
            logger.warning("Stored quiz history is unreadable, result %s kept in memory only", record.id)
            self._records += (record,)
            self.in_sync = False
            return self._records

        updated = self._records + (record,)
        try:
            await self.store.set(self.key, records_to_json(updated))
            self.in_sync = True
        except StorageError as e:
            logger.warning("Could not save quiz result %s: %s", record.id, e)
            self.in_sync = False
        self._records = updated
        return self._records

    async def clear(self) -> None:
        """Erase the history. The in-memory view is emptied even if the store fails."""
        try:
            await self.store.delete(self.key)
            self._loaded = True
            self.in_sync = True
        except StorageError as e:
            logger.warning("Could not clear stored quiz history: %s", e)
            self.in_sync = False
        self._records = ()

    async def _merge_stored(self) -> bool:
        """Put the stored records in front of the in-memory ones. False if the slot is still unreadable."""
        try:
            raw = await self.store.get(self.key)
        except StorageError as e:
            logger.warning("Could not read quiz history before saving: %s", e)
            return False

        stored = self._decode(raw)
        known = {r.id for r in stored}
        self._records = stored + tuple(r for r in self._records if r.id not in known)
        self._loaded = True
        return True

    @staticmethod
    def _decode(raw: Optional[str]) -> Tuple[HistoryRecord, ...]:
        if raw is None:
            return ()
        try:
            return records_from_json(raw)
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            logger.warning("Stored quiz history is corrupted, starting empty: %s", e)
            return ()
