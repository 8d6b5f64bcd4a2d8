"""Tests for the history ledger, its JSON format and the key-value store."""
import json
from datetime import datetime, timezone

import pytest

from quiz_bot.db.kv_store import KeyValueStore
from quiz_bot.exceptions import StorageError
from quiz_bot.models import HistoryRecord, record_from_payload, record_to_payload
from quiz_bot.services.history_ledger import HistoryLedger, records_from_json, records_to_json


# ============================================================================
# JSON FORMAT
# ============================================================================


class TestRecordFormat:
    """Tests for the stored representation of history records."""

    def test_payload_field_names(self, sample_record):
        payload = record_to_payload(sample_record)

        assert payload == {
            "id": "abc123",
            "score": 2,
            "totalQuestions": 3,
            "date": "2026-02-25T12:30:00+00:00",
        }

    def test_payload_back_to_record(self, sample_record):
        assert record_from_payload(record_to_payload(sample_record)) == sample_record

    def test_legacy_locale_date(self):
        """Records written by the mobile client carry en-US locale dates and numeric ids."""
        record = record_from_payload(
            {"id": 1740483000000, "score": 4, "totalQuestions": 5, "date": "2/25/2026"}
        )

        assert record.id == "1740483000000"
        assert record.completed_at == datetime(2026, 2, 25)
        assert record_from_payload(record_to_payload(record)) == record

    @pytest.mark.parametrize("payload", [
        {"id": "x", "score": 4, "totalQuestions": 3, "date": "2026-02-25"},
        {"id": "x", "score": -1, "totalQuestions": 3, "date": "2026-02-25"},
        {"id": "x", "score": 0, "totalQuestions": 0, "date": "2026-02-25"},
        {"id": "x", "score": "1", "totalQuestions": 3, "date": "2026-02-25"},
        {"id": "x", "score": 1, "totalQuestions": 3, "date": "yesterday"},
        {"id": "x", "score": 1, "totalQuestions": 3},
        ["x", 1, 3],
    ])
    def test_invalid_payload(self, payload):
        with pytest.raises(ValueError):
            record_from_payload(payload)

    def test_sequence_keeps_insertion_order(self):
        """Order on disk is insertion order, even when dates go backwards."""
        later = HistoryRecord("a", 1, 2, datetime(2026, 3, 1, tzinfo=timezone.utc))
        earlier = HistoryRecord("b", 2, 2, datetime(2025, 1, 1, tzinfo=timezone.utc))

        restored = records_from_json(records_to_json((later, earlier)))

        assert [r.id for r in restored] == ["a", "b"]

    def test_sequence_must_be_array(self):
        with pytest.raises(ValueError):
            records_from_json('{"id": "a"}')


# ============================================================================
# LEDGER ON A REAL DATABASE
# ============================================================================


class TestHistoryLedger:
    """load / append / clear against SQLite."""

    async def test_load_nothing_persisted(self, kv_store):
        ledger = HistoryLedger(kv_store)

        assert await ledger.load() == ()
        assert ledger.in_sync is True

    async def test_append_then_load_in_fresh_ledger(self, kv_store, sample_record):
        """Round trip: a new ledger over the same store sees the record last."""
        first = HistoryRecord.create(score=1, total_questions=2)
        ledger = HistoryLedger(kv_store)
        await ledger.load()
        await ledger.append(first)
        updated = await ledger.append(sample_record)

        assert updated == (first, sample_record)

        reloaded = await HistoryLedger(kv_store).load()
        assert reloaded == (first, sample_record)
        assert reloaded[-1] == sample_record

    async def test_append_survives_reconnect(self, database, sample_record):
        """Appended history is on disk, not only in the connection."""
        await HistoryLedger(KeyValueStore(database)).append(sample_record)
        await database.close()

        reloaded = await HistoryLedger(KeyValueStore(database)).load()

        assert reloaded == (sample_record,)

    async def test_clear_then_load(self, kv_store, sample_record):
        ledger = HistoryLedger(kv_store)
        await ledger.append(sample_record)

        await ledger.clear()

        assert ledger.records == ()
        assert await HistoryLedger(kv_store).load() == ()

    async def test_clear_when_empty(self, kv_store):
        ledger = HistoryLedger(kv_store)

        await ledger.clear()

        assert ledger.records == ()
        assert ledger.in_sync is True

    async def test_stored_format(self, kv_store, sample_record):
        ledger = HistoryLedger(kv_store, key="quizHistory")
        await ledger.append(sample_record)

        raw = await kv_store.get("quizHistory")

        assert json.loads(raw) == [record_to_payload(sample_record)]

    async def test_corrupted_history_degrades_to_empty(self, kv_store):
        await kv_store.set("quizHistory", "{not json")

        ledger = HistoryLedger(kv_store)

        assert await ledger.load() == ()

    async def test_invalid_record_degrades_to_empty(self, kv_store):
        await kv_store.set(
            "quizHistory", json.dumps([{"id": "a", "score": 9, "totalQuestions": 2, "date": "2026-01-01"}])
        )

        assert await HistoryLedger(kv_store).load() == ()


# ============================================================================
# LEDGER WITH A FAILING STORE
# ============================================================================


class TestHistoryLedgerStorageFailures:
    """Storage failures are logged and reported through in_sync, never raised."""

    async def test_load_failure_degrades_to_empty(self, mock_store):
        mock_store.get.side_effect = StorageError("disk I/O error")

        ledger = HistoryLedger(mock_store)

        assert await ledger.load() == ()
        assert ledger.in_sync is False

    async def test_append_after_failed_load_keeps_stored_records(self, database, sample_record):
        """A read that failed once must not make the next append overwrite the slot."""

        class FlakyStore(KeyValueStore):
            failures = 1

            async def get(self, key):
                if self.failures:
                    self.failures -= 1
                    raise StorageError("database is locked")
                return await super().get(key)

        await HistoryLedger(KeyValueStore(database)).append(sample_record)
        ledger = HistoryLedger(FlakyStore(database))
        assert await ledger.load() == ()

        new = HistoryRecord.create(score=1, total_questions=2)
        records = await ledger.append(new)

        assert records == (sample_record, new)
        assert ledger.in_sync is True
        assert await HistoryLedger(KeyValueStore(database)).load() == (sample_record, new)

    async def test_append_while_store_unreadable_does_not_write(self, mock_store, sample_record):
        mock_store.get.side_effect = StorageError("disk I/O error")
        ledger = HistoryLedger(mock_store)
        await ledger.load()

        records = await ledger.append(sample_record)

        assert records == (sample_record,)
        assert ledger.in_sync is False
        mock_store.set.assert_not_awaited()

    async def test_append_failure_keeps_record_in_memory(self, mock_store, sample_record):
        mock_store.set.side_effect = StorageError("database is locked")
        ledger = HistoryLedger(mock_store)

        records = await ledger.append(sample_record)

        assert records == (sample_record,)
        assert ledger.in_sync is False

    async def test_clear_failure_still_clears_memory(self, mock_store, sample_record):
        """Store delete fails: list is empty on screen, in_sync flags the mismatch."""
        ledger = HistoryLedger(mock_store)
        await ledger.append(sample_record)
        mock_store.delete.side_effect = StorageError("readonly database")

        await ledger.clear()

        assert ledger.records == ()
        assert ledger.in_sync is False

    async def test_next_write_reconciles(self, mock_store, sample_record):
        """After a failed clear, the next append rewrites the whole slot."""
        ledger = HistoryLedger(mock_store, key="k")
        await ledger.append(sample_record)
        mock_store.delete.side_effect = StorageError("readonly database")
        await ledger.clear()

        new = HistoryRecord.create(score=1, total_questions=1)
        await ledger.append(new)

        assert ledger.in_sync is True
        mock_store.set.assert_awaited_with("k", records_to_json((new,)))


# ============================================================================
# KEY-VALUE STORE
# ============================================================================


class TestKeyValueStore:
    """get / set / delete on SQLite."""

    async def test_get_missing(self, kv_store):
        assert await kv_store.get("nope") is None

    async def test_set_overwrites(self, kv_store):
        await kv_store.set("k", "one")
        await kv_store.set("k", "two")

        assert await kv_store.get("k") == "two"

    async def test_delete(self, kv_store):
        await kv_store.set("k", "v")

        assert await kv_store.delete("k") is True
        assert await kv_store.get("k") is None
        assert await kv_store.delete("k") is False

    async def test_sqlite_error_wrapped(self, database):
        conn = await database.connect()
        await conn.execute("DROP TABLE kv_store")
        await conn.commit()
        store = KeyValueStore(database)

        with pytest.raises(StorageError):
            await store.get("k")
        with pytest.raises(StorageError):
            await store.set("k", "v")
        with pytest.raises(StorageError):
            await store.delete("k")
