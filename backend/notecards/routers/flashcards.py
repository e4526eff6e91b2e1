"""
Flashcards & spaced repetition router.

Endpoints:
  POST   /flashcards              — create a generated batch (all due now)
  GET    /flashcards              — list all cards (optionally by subject)
  GET    /flashcards/due          — due cards; with ?subject= every card of the subject
  GET    /flashcards/stats        — totals, due count, per-subject breakdown
  POST   /flashcards/{id}/review  — submit correct/incorrect, reschedule
  GET    /flashcards/{id}         — single card
  DELETE /flashcards/{id}         — delete card
  DELETE /flashcards              — delete every card of the user
"""
from __future__ import annotations

import aiosqlite
from fastapi import APIRouter, Depends, HTTPException, Query

from notecards.db.sqlite import (
    create_flashcards,
    delete_all_flashcards,
    delete_flashcard,
    get_db,
    get_due_flashcards,
    get_flashcard,
    list_flashcards,
    now_ms,
)
from notecards.dependencies import get_user_id
from notecards.models.flashcard import (
    DeleteAllResult,
    Flashcard,
    FlashcardBatchCreate,
    FlashcardList,
    FlashcardStats,
    ReviewRequest,
    ReviewResult,
)
from notecards.services.review import FlashcardNotFoundError, PersistenceError, review_card
from notecards.services.stats import flashcard_stats

router = APIRouter()


@router.post("", response_model=FlashcardList, status_code=201)
async def create_cards(
    body: FlashcardBatchCreate,
    user_id: str = Depends(get_user_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> FlashcardList:
    items = await create_flashcards(db, user_id, body)
    return FlashcardList(items=items, total=len(items))


@router.get("", response_model=FlashcardList)
async def list_cards(
    subject: str | None = Query(default=None),
    user_id: str = Depends(get_user_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> FlashcardList:
    items = await list_flashcards(db, user_id, subject=subject)
    return FlashcardList(items=items, total=len(items))


@router.get("/due", response_model=FlashcardList)
async def get_due(
    subject: str | None = Query(default=None),
    user_id: str = Depends(get_user_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> FlashcardList:
    """Cards due now, oldest first. A subject filter returns the whole subject."""
    items = await get_due_flashcards(db, user_id, now_ms(), subject=subject)
    return FlashcardList(items=items, total=len(items))


@router.get("/stats", response_model=FlashcardStats)
async def card_stats(
    user_id: str = Depends(get_user_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> FlashcardStats:
    cards = await list_flashcards(db, user_id)
    return flashcard_stats(cards, now_ms())


@router.post("/{card_id}/review", response_model=ReviewResult)
async def review(
    card_id: str,
    body: ReviewRequest,
    user_id: str = Depends(get_user_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> ReviewResult:
    try:
        card = await review_card(db, user_id, card_id, body.is_correct)
    except FlashcardNotFoundError:
        raise HTTPException(status_code=404, detail="Flashcard not found")
    except PersistenceError:
        raise HTTPException(status_code=500, detail="Failed to update flashcard")

    return ReviewResult(
        id=card.id,
        difficulty=card.difficulty,
        interval=card.interval,
        next_review=card.next_review,
        review_count=card.review_count,
        consecutive_correct=card.consecutive_correct,
        last_reviewed=card.last_reviewed,
    )


@router.get("/{card_id}", response_model=Flashcard)
async def get_card(
    card_id: str,
    user_id: str = Depends(get_user_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> Flashcard:
    card = await get_flashcard(db, card_id, user_id)
    if not card:
        raise HTTPException(status_code=404, detail="Flashcard not found")
    return card


@router.delete("/{card_id}", status_code=204)
async def remove_card(
    card_id: str,
    user_id: str = Depends(get_user_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> None:
    deleted = await delete_flashcard(db, user_id, card_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Flashcard not found")


@router.delete("", response_model=DeleteAllResult)
async def remove_all_cards(
    user_id: str = Depends(get_user_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> DeleteAllResult:
    count = await delete_all_flashcards(db, user_id)
    return DeleteAllResult(deleted_count=count)
