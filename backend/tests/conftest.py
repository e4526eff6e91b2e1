import uuid

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from notecards.config import settings
from notecards.db import sqlite as sqlite_db
from notecards.models.flashcard import Difficulty, Flashcard
from notecards.services.session_registry import clear_sessions

NOW = 1_700_000_000_000  # 2023-11-14T22:13:20Z
USER = "user-1"


@pytest.fixture
def make_card():
    def _make(**overrides) -> Flashcard:
        fields = {
            "id": str(uuid.uuid4()),
            "user_id": USER,
            "note_id": "note-1",
            "subject": "Biology",
            "question": "What is photosynthesis?",
            "answer": "Light to chemical energy.",
            "difficulty": Difficulty.MEDIUM,
            "next_review": NOW,
            "interval": 1,
            "review_count": 0,
            "consecutive_correct": 0,
            "last_reviewed": None,
            "created_at": NOW,
            "updated_at": NOW,
        }
        fields.update(overrides)
        return Flashcard(**fields)

    return _make


@pytest_asyncio.fixture
async def db(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "data_dir", tmp_path)
    await sqlite_db.init_sqlite(tmp_path)
    async for conn in sqlite_db.get_db():
        yield conn


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "data_dir", tmp_path)
    from notecards import app

    with TestClient(app, headers={"X-User-Id": USER}) as c:
        yield c
    clear_sessions()
