"""
A review session: one pass over a fixed batch of cards.

    in_progress(current_index, answers, missed) --submit_answer--> ...
    ... --last answer--> completed(correct_count, total_count)

Each answer is persisted through the injected `review` callable before the
session advances. A failed write is reported in the returned result and the
session moves on regardless; the missed list is a re-study convenience only.
Answers are applied one at a time, so overlapping submissions each land on
their own card. Completed is terminal: the completing answer carries the
final summary and `on_complete` fires once. Build a new session (e.g. from
`missed`) to continue.
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from notecards.models.flashcard import Flashcard
from notecards.models.session import AnswerResult, SessionStatus, SessionView
from notecards.services.review import ReviewError

logger = logging.getLogger(__name__)

ReviewFn = Callable[[str, bool], Awaitable[Flashcard]]


class SessionCompletedError(Exception):
    """Raised when answering a session that has already finished."""


@dataclass
class ReviewSession:
    user_id: str
    cards: list[Flashcard]
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    current_index: int = 0
    answers: list[bool] = field(default_factory=list)
    missed: list[Flashcard] = field(default_factory=list)
    failed_card_ids: list[str] = field(default_factory=list)
    on_complete: Callable[[ReviewSession], None] | None = field(default=None, repr=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    @property
    def status(self) -> SessionStatus:
        if self.current_index >= len(self.cards):
            return SessionStatus.COMPLETED
        return SessionStatus.IN_PROGRESS

    @property
    def is_completed(self) -> bool:
        return self.status is SessionStatus.COMPLETED

    @property
    def current_card(self) -> Flashcard | None:
        if self.is_completed:
            return None
        return self.cards[self.current_index]

    @property
    def correct_count(self) -> int:
        return sum(self.answers)

    @property
    def total_count(self) -> int:
        return len(self.cards)

    async def submit_answer(self, is_correct: bool, review: ReviewFn) -> AnswerResult:
        async with self._lock:
            return await self._apply_answer(is_correct, review)

    async def _apply_answer(self, is_correct: bool, review: ReviewFn) -> AnswerResult:
        card = self.current_card
        if card is None:
            raise SessionCompletedError(f"Session {self.id} is already completed")

        persisted = True
        error: str | None = None
        try:
            card = await review(card.id, is_correct)
        except ReviewError as e:
            persisted = False
            error = str(e)
            self.failed_card_ids.append(card.id)
            logger.warning("Session %s: review of card %s not saved: %s", self.id, card.id, e)

        self.cards[self.current_index] = card
        self.answers.append(is_correct)
        if not is_correct:
            self.missed.append(card)
        self.current_index += 1

        summary: SessionView | None = None
        if self.is_completed:
            logger.info(
                "Session %s completed: %d/%d correct",
                self.id,
                self.correct_count,
                self.total_count,
            )
            summary = self.view()
            if self.on_complete is not None:
                self.on_complete(self)

        return AnswerResult(
            card_id=card.id,
            is_correct=is_correct,
            persisted=persisted,
            error=error,
            status=self.status,
            current_index=self.current_index,
            summary=summary,
        )

    def view(self) -> SessionView:
        return SessionView(
            id=self.id,
            status=self.status,
            current_index=self.current_index,
            total_count=self.total_count,
            correct_count=self.correct_count,
            current_card=self.current_card,
            missed=list(self.missed),
            failed_card_ids=list(self.failed_card_ids),
        )
