"""
Review a single flashcard: read the card, run the scheduling transition,
write the new state back as one row update.

Failures only come from persistence and are surfaced unchanged to the
caller; nothing here retries.
"""
from __future__ import annotations

import logging

import aiosqlite

from notecards.db.sqlite import get_flashcard, now_ms, save_scheduling_state
from notecards.models.flashcard import Flashcard
from notecards.services.scheduler import apply_review

logger = logging.getLogger(__name__)


class ReviewError(Exception):
    def __init__(self, card_id: str, message: str) -> None:
        super().__init__(message)
        self.card_id = card_id


class FlashcardNotFoundError(ReviewError):
    """The referenced card does not exist (or belongs to someone else)."""

    def __init__(self, card_id: str) -> None:
        super().__init__(card_id, f"Flashcard {card_id} not found")


class PersistenceError(ReviewError):
    """The new scheduling state was computed but could not be written."""

    def __init__(self, card_id: str) -> None:
        super().__init__(card_id, f"Failed to persist review for flashcard {card_id}")


async def review_card(
    db: aiosqlite.Connection,
    user_id: str,
    card_id: str,
    is_correct: bool,
    now: int | None = None,
) -> Flashcard:
    now = now_ms() if now is None else now
    try:
        card = await get_flashcard(db, card_id, user_id)
    except aiosqlite.Error as e:
        raise PersistenceError(card_id) from e
    if card is None:
        raise FlashcardNotFoundError(card_id)

    new_state = apply_review(card.scheduling_state(), is_correct, now)
    try:
        saved = await save_scheduling_state(db, card_id, new_state)
    except aiosqlite.Error as e:
        logger.warning("Review write failed for card %s: %s", card_id, e)
        raise PersistenceError(card_id) from e
    if not saved:
        # deleted between read and write
        raise FlashcardNotFoundError(card_id)

    logger.debug(
        "Card %s reviewed (correct=%s): %s -> %s, interval %d",
        card_id,
        is_correct,
        card.difficulty.value,
        new_state.difficulty.value,
        new_state.interval,
    )
    return card.model_copy(update=new_state.model_dump())
