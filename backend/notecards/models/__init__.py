from notecards.models.activity import (
    Activity,
    ActivityCreate,
    ActivityKind,
    StreakAndGoals,
)
from notecards.models.flashcard import (
    DeleteAllResult,
    Difficulty,
    Flashcard,
    FlashcardBatchCreate,
    FlashcardContent,
    FlashcardList,
    FlashcardStats,
    ReviewRequest,
    ReviewResult,
    SchedulingState,
    SubjectStats,
)
from notecards.models.session import (
    AnswerRequest,
    AnswerResult,
    SessionCreate,
    SessionStatus,
    SessionView,
)

__all__ = [
    "Activity",
    "ActivityCreate",
    "ActivityKind",
    "AnswerRequest",
    "AnswerResult",
    "DeleteAllResult",
    "Difficulty",
    "Flashcard",
    "FlashcardBatchCreate",
    "FlashcardContent",
    "FlashcardList",
    "FlashcardStats",
    "ReviewRequest",
    "ReviewResult",
    "SchedulingState",
    "SessionCreate",
    "SessionStatus",
    "SessionView",
    "StreakAndGoals",
    "SubjectStats",
]
