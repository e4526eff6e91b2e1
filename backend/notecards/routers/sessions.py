"""
Review sessions.

Endpoints:
  POST   /sessions               — start a session over the due set or explicit card ids
  GET    /sessions/{id}          — progress of a live session (completed ones are released)
  POST   /sessions/{id}/answer   — answer the current card and advance
  DELETE /sessions/{id}          — abandon; answers already given stay saved
"""
from __future__ import annotations

import logging
from functools import partial

import aiosqlite
from fastapi import APIRouter, Depends, HTTPException

from notecards.config import settings
from notecards.db.sqlite import get_db, get_due_flashcards, get_flashcards_by_ids, log_activity, now_ms
from notecards.dependencies import get_user_id
from notecards.models.activity import ActivityKind
from notecards.models.session import AnswerRequest, AnswerResult, SessionCreate, SessionView
from notecards.services.review import review_card
from notecards.services.review_session import SessionCompletedError
from notecards.services.session_registry import discard_session, get_session, start_session

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=SessionView, status_code=201)
async def create_session(
    body: SessionCreate,
    user_id: str = Depends(get_user_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> SessionView:
    if body.card_ids is not None and body.subject:
        raise HTTPException(status_code=400, detail="Pass either subject or card_ids, not both")
    if body.card_ids is not None:
        cards = await get_flashcards_by_ids(db, user_id, body.card_ids)
        if len(cards) != len(set(body.card_ids)):
            raise HTTPException(status_code=400, detail="Unknown flashcard in session batch")
    else:
        cards = await get_due_flashcards(
            db, user_id, now_ms(), subject=body.subject, limit=settings.session_batch_size
        )
    if not cards:
        raise HTTPException(status_code=400, detail="No flashcards to review")

    return start_session(user_id, cards).view()


@router.get("/{session_id}", response_model=SessionView)
async def get_session_view(
    session_id: str,
    user_id: str = Depends(get_user_id),
) -> SessionView:
    session = get_session(session_id, user_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session.view()


@router.post("/{session_id}/answer", response_model=AnswerResult)
async def answer(
    session_id: str,
    body: AnswerRequest,
    user_id: str = Depends(get_user_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> AnswerResult:
    session = get_session(session_id, user_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")

    try:
        result = await session.submit_answer(
            body.is_correct, partial(review_card, db, user_id)
        )
    except SessionCompletedError:
        raise HTTPException(status_code=409, detail="Session already completed")

    if result.summary is not None:
        # One review event per finished session; best-effort, never fails the answer
        try:
            await log_activity(db, user_id, ActivityKind.REVIEW)
        except aiosqlite.Error:
            logger.warning("Activity log failed for session %s", session_id)
    return result


@router.delete("/{session_id}", status_code=204)
async def abandon_session(
    session_id: str,
    user_id: str = Depends(get_user_id),
) -> None:
    if not discard_session(session_id, user_id):
        raise HTTPException(status_code=404, detail="Session not found")
