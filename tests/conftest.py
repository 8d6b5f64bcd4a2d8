"""Shared fixtures for the quiz bot tests."""
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from aiohttp import web

from quiz_bot.db.database import Database
from quiz_bot.db.kv_store import KeyValueStore
from quiz_bot.models import HistoryRecord, Question


@pytest.fixture
def two_questions():
    """Two questions: the first is answered by option 1, the second by option 0."""
    return (
        Question(id=1, prompt="2 + 2 = ?", options=("3", "4", "5"), correct_option_index=1),
        Question(id=2, prompt="Capital of Italy?", options=("Rome", "Milan"), correct_option_index=0),
    )


@pytest.fixture
def sample_record():
    return HistoryRecord(
        id="abc123",
        score=2,
        total_questions=3,
        completed_at=datetime(2026, 2, 25, 12, 30, tzinfo=timezone.utc),
    )


@pytest.fixture
async def database(tmp_path):
    """Real SQLite database in a temporary directory."""
    db = Database(str(tmp_path / "data" / "test_quiz.db"))
    await db.connect()
    yield db
    await db.close()


@pytest.fixture
def kv_store(database):
    return KeyValueStore(database)


@pytest.fixture
def mock_store():
    """Key-value store double; individual tests set side effects."""
    store = AsyncMock(spec=KeyValueStore)
    store.get.return_value = None
    store.delete.return_value = True
    return store


@pytest.fixture
async def question_server():
    """Start a local HTTP server answering GET /questions with the given handler."""
    runners = []

    async def _start(handler) -> str:
        app = web.Application()
        app.router.add_get("/questions", handler)
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", 0)
        await site.start()
        runners.append(runner)
        host, port = runner.addresses[0][:2]
        return f"http://{host}:{port}/questions"

    yield _start

    for runner in runners:
        await runner.cleanup()
