from enum import Enum

from pydantic import BaseModel, Field


class ActivityKind(str, Enum):
    ENHANCE = "enhance"
    REVIEW = "review"
    QUIZ = "quiz"


class ActivityCreate(BaseModel):
    kind: ActivityKind
    count: int = Field(1, ge=1)


class Activity(BaseModel):
    id: str
    user_id: str
    kind: ActivityKind
    count: int
    day: str        # UTC date, YYYY-MM-DD
    created_at: int  # epoch ms


class StreakAndGoals(BaseModel):
    streak: int
    goals_met: int
    goals_total: int
