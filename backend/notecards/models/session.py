from enum import Enum

from pydantic import BaseModel

from notecards.models.flashcard import Flashcard


class SessionStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class SessionCreate(BaseModel):
    """Either `subject` or `card_ids` (e.g. a previous missed queue), not both."""

    subject: str | None = None
    card_ids: list[str] | None = None


class AnswerRequest(BaseModel):
    is_correct: bool


class SessionView(BaseModel):
    id: str
    status: SessionStatus
    current_index: int
    total_count: int
    correct_count: int
    current_card: Flashcard | None
    missed: list[Flashcard]
    failed_card_ids: list[str]


class AnswerResult(BaseModel):
    card_id: str
    is_correct: bool
    persisted: bool
    error: str | None = None
    status: SessionStatus
    current_index: int
    summary: SessionView | None = None  # set on the answer that completes the session
