import time
import uuid
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from notecards.config import settings
from notecards.models.activity import Activity, ActivityKind
from notecards.models.flashcard import Flashcard, FlashcardBatchCreate, SchedulingState
from notecards.services.scheduler import initial_state
from notecards.services.stats import utc_day

_db_path: Path | None = None

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;

CREATE TABLE IF NOT EXISTS flashcards (
    id                  TEXT PRIMARY KEY,
    user_id             TEXT NOT NULL,
    note_id             TEXT,
    subject             TEXT NOT NULL,
    question            TEXT NOT NULL,
    answer              TEXT NOT NULL,
    difficulty          TEXT NOT NULL DEFAULT 'medium',
    next_review         INTEGER NOT NULL,
    interval            INTEGER NOT NULL DEFAULT 1,
    review_count        INTEGER NOT NULL DEFAULT 0,
    consecutive_correct INTEGER NOT NULL DEFAULT 0,
    last_reviewed       INTEGER,
    created_at          INTEGER NOT NULL,
    updated_at          INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_flashcards_user ON flashcards(user_id);
CREATE INDEX IF NOT EXISTS idx_flashcards_review ON flashcards(user_id, next_review);
CREATE INDEX IF NOT EXISTS idx_flashcards_subject ON flashcards(user_id, subject);

CREATE TABLE IF NOT EXISTS activity (
    id          TEXT PRIMARY KEY,
    user_id     TEXT NOT NULL,
    kind        TEXT NOT NULL,
    count       INTEGER NOT NULL DEFAULT 1,
    day         TEXT NOT NULL,
    created_at  INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_activity_user_day ON activity(user_id, day);
CREATE INDEX IF NOT EXISTS idx_activity_user_time ON activity(user_id, created_at);
"""


async def init_sqlite(data_dir: Path) -> None:
    global _db_path
    _db_path = data_dir / settings.sqlite_filename
    async with aiosqlite.connect(_db_path) as db:
        await db.executescript(SCHEMA_SQL)
        await db.commit()


async def get_db() -> AsyncIterator[aiosqlite.Connection]:
    assert _db_path is not None, "SQLite not initialized"
    async with aiosqlite.connect(_db_path) as db:
        db.row_factory = aiosqlite.Row
        yield db


def now_ms() -> int:
    return time.time_ns() // 1_000_000


# --- Flashcards ---


def _row_to_flashcard(row: aiosqlite.Row) -> Flashcard:
    return Flashcard(**dict(row))


async def create_flashcards(
    db: aiosqlite.Connection,
    user_id: str,
    batch: FlashcardBatchCreate,
    now: int | None = None,
) -> list[Flashcard]:
    """Insert a generated batch in one transaction; every card starts due."""
    now = now_ms() if now is None else now
    state = initial_state(now)
    card_ids: list[str] = []
    for item in batch.flashcards:
        card_id = str(uuid.uuid4())
        card_ids.append(card_id)
        await db.execute(
            """INSERT INTO flashcards
               (id, user_id, note_id, subject, question, answer, difficulty,
                next_review, interval, review_count, consecutive_correct,
                last_reviewed, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                card_id,
                user_id,
                batch.note_id,
                batch.subject,
                item.question,
                item.answer,
                state.difficulty.value,
                state.next_review,
                state.interval,
                state.review_count,
                state.consecutive_correct,
                state.last_reviewed,
                now,
                state.updated_at,
            ),
        )
    await db.commit()
    return await get_flashcards_by_ids(db, user_id, card_ids)


async def get_flashcard(
    db: aiosqlite.Connection, card_id: str, user_id: str | None = None
) -> Flashcard | None:
    if user_id is None:
        cursor = await db.execute("SELECT * FROM flashcards WHERE id = ?", (card_id,))
    else:
        cursor = await db.execute(
            "SELECT * FROM flashcards WHERE id = ? AND user_id = ?", (card_id, user_id)
        )
    row = await cursor.fetchone()
    return _row_to_flashcard(row) if row else None


async def get_flashcards_by_ids(
    db: aiosqlite.Connection, user_id: str, card_ids: list[str]
) -> list[Flashcard]:
    """Fetch the user's cards among `card_ids`, in the order given. Unknown ids are dropped."""
    if not card_ids:
        return []
    placeholders = ", ".join("?" for _ in card_ids)
    cursor = await db.execute(
        f"SELECT * FROM flashcards WHERE user_id = ? AND id IN ({placeholders})",  # noqa: S608
        [user_id, *card_ids],
    )
    by_id = {c.id: c for c in map(_row_to_flashcard, await cursor.fetchall())}
    return [by_id[i] for i in dict.fromkeys(card_ids) if i in by_id]


async def list_flashcards(
    db: aiosqlite.Connection,
    user_id: str,
    subject: str | None = None,
) -> list[Flashcard]:
    if subject:
        cursor = await db.execute(
            "SELECT * FROM flashcards WHERE user_id = ? AND subject = ? ORDER BY created_at ASC, rowid ASC",
            (user_id, subject),
        )
    else:
        cursor = await db.execute(
            "SELECT * FROM flashcards WHERE user_id = ? ORDER BY created_at ASC, rowid ASC",
            (user_id,),
        )
    rows = await cursor.fetchall()
    return [_row_to_flashcard(r) for r in rows]


async def get_due_flashcards(
    db: aiosqlite.Connection,
    user_id: str,
    now: int,
    subject: str | None = None,
    limit: int | None = None,
) -> list[Flashcard]:
    """
    Cards due for review (next_review <= now), oldest-due first.
    With a subject, every card of that subject is returned, due or not.
    """
    if subject:
        sql = (
            "SELECT * FROM flashcards WHERE user_id = ? AND subject = ? "
            "ORDER BY next_review ASC, rowid ASC"
        )
        params: list = [user_id, subject]
    else:
        sql = (
            "SELECT * FROM flashcards WHERE user_id = ? AND next_review <= ? "
            "ORDER BY next_review ASC, rowid ASC"
        )
        params = [user_id, now]
    if limit is not None:
        sql += " LIMIT ?"
        params.append(limit)
    cursor = await db.execute(sql, params)
    rows = await cursor.fetchall()
    return [_row_to_flashcard(r) for r in rows]


async def save_scheduling_state(
    db: aiosqlite.Connection, card_id: str, state: SchedulingState
) -> bool:
    """Single-row patch of the scheduling columns. False if the card is gone."""
    cursor = await db.execute(
        """UPDATE flashcards
           SET difficulty = ?, next_review = ?, interval = ?, review_count = ?,
               consecutive_correct = ?, last_reviewed = ?, updated_at = ?
           WHERE id = ?""",
        (
            state.difficulty.value,
            state.next_review,
            state.interval,
            state.review_count,
            state.consecutive_correct,
            state.last_reviewed,
            state.updated_at,
            card_id,
        ),
    )
    await db.commit()
    return (cursor.rowcount or 0) > 0


async def delete_flashcard(db: aiosqlite.Connection, user_id: str, card_id: str) -> bool:
    cursor = await db.execute(
        "DELETE FROM flashcards WHERE id = ? AND user_id = ?", (card_id, user_id)
    )
    await db.commit()
    return (cursor.rowcount or 0) > 0


async def delete_all_flashcards(db: aiosqlite.Connection, user_id: str) -> int:
    cursor = await db.execute("DELETE FROM flashcards WHERE user_id = ?", (user_id,))
    await db.commit()
    return cursor.rowcount or 0


# --- Activity ---


def _row_to_activity(row: aiosqlite.Row) -> Activity:
    return Activity(**dict(row))


async def log_activity(
    db: aiosqlite.Connection,
    user_id: str,
    kind: ActivityKind,
    count: int = 1,
    now: int | None = None,
) -> Activity:
    now = now_ms() if now is None else now
    activity = Activity(
        id=str(uuid.uuid4()),
        user_id=user_id,
        kind=kind,
        count=count,
        day=utc_day(now),
        created_at=now,
    )
    await db.execute(
        """INSERT INTO activity (id, user_id, kind, count, day, created_at)
           VALUES (?, ?, ?, ?, ?, ?)""",
        (
            activity.id,
            activity.user_id,
            activity.kind.value,
            activity.count,
            activity.day,
            activity.created_at,
        ),
    )
    await db.commit()
    return activity


async def list_activity_since(
    db: aiosqlite.Connection, user_id: str, since: int
) -> list[Activity]:
    cursor = await db.execute(
        "SELECT * FROM activity WHERE user_id = ? AND created_at >= ? ORDER BY created_at DESC",
        (user_id, since),
    )
    rows = await cursor.fetchall()
    return [_row_to_activity(r) for r in rows]
