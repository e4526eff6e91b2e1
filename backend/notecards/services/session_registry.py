from __future__ import annotations

import logging

from notecards.models.flashcard import Flashcard
from notecards.services.review_session import ReviewSession

logger = logging.getLogger(__name__)

_sessions: dict[str, ReviewSession] = {}


def start_session(user_id: str, cards: list[Flashcard]) -> ReviewSession:
    """Create a session over `cards` and register it by ID until it completes."""
    session = ReviewSession(
        user_id=user_id,
        cards=list(cards),
        on_complete=lambda s: _sessions.pop(s.id, None),
    )
    _sessions[session.id] = session
    logger.info("Session %s started for user %s with %d cards", session.id, user_id, len(cards))
    return session


def get_session(session_id: str, user_id: str) -> ReviewSession | None:
    session = _sessions.get(session_id)
    if session is None or session.user_id != user_id:
        return None
    return session


def discard_session(session_id: str, user_id: str) -> bool:
    """Drop the in-memory session. Reviews already submitted stay persisted."""
    if get_session(session_id, user_id) is None:
        return False
    del _sessions[session_id]
    return True


def live_session_count() -> int:
    return len(_sessions)


def clear_sessions() -> None:
    _sessions.clear()
