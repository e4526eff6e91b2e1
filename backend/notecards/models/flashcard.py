from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SchedulingState(BaseModel):
    """Mutable half of a flashcard. Timestamps are epoch milliseconds."""

    difficulty: Difficulty = Difficulty.MEDIUM
    next_review: int
    interval: int = 1           # days; always a value from the tier's table
    review_count: int = Field(0, ge=0)
    consecutive_correct: int = Field(0, ge=0)
    last_reviewed: int | None = None
    updated_at: int


class Flashcard(SchedulingState):
    id: str
    user_id: str
    note_id: str | None
    subject: str
    question: str
    answer: str
    created_at: int

    def scheduling_state(self) -> SchedulingState:
        return SchedulingState(
            **self.model_dump(include=set(SchedulingState.model_fields))
        )


class FlashcardContent(BaseModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)


class FlashcardBatchCreate(BaseModel):
    note_id: str | None = None
    subject: str = "General"
    flashcards: list[FlashcardContent] = Field(min_length=1)


class FlashcardList(BaseModel):
    items: list[Flashcard]
    total: int


class ReviewRequest(BaseModel):
    is_correct: bool


class ReviewResult(BaseModel):
    id: str
    difficulty: Difficulty
    interval: int
    next_review: int
    review_count: int
    consecutive_correct: int
    last_reviewed: int


class DeleteAllResult(BaseModel):
    deleted_count: int


class SubjectStats(BaseModel):
    total: int = 0
    due: int = 0
    reviews: int = 0


class FlashcardStats(BaseModel):
    total_cards: int
    due_cards: int
    total_reviews: int
    avg_consecutive_correct: float
    subject_stats: dict[str, SubjectStats]
