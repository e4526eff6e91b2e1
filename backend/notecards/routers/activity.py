from datetime import timedelta

import aiosqlite
from fastapi import APIRouter, Depends

from notecards.config import settings
from notecards.db.sqlite import get_db, list_activity_since, log_activity, now_ms
from notecards.dependencies import get_user_id
from notecards.models.activity import Activity, ActivityCreate, StreakAndGoals
from notecards.services.stats import streak_and_goals

router = APIRouter()


@router.post("", response_model=Activity, status_code=201)
async def record_activity(
    body: ActivityCreate,
    user_id: str = Depends(get_user_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> Activity:
    return await log_activity(db, user_id, body.kind, body.count)


@router.get("/streak", response_model=StreakAndGoals)
async def get_streak(
    user_id: str = Depends(get_user_id),
    db: aiosqlite.Connection = Depends(get_db),
) -> StreakAndGoals:
    now = now_ms()
    window = timedelta(days=settings.activity_window_days) // timedelta(milliseconds=1)
    events = await list_activity_since(db, user_id, now - window)
    return streak_and_goals(
        events,
        now,
        max_days=settings.streak_max_days,
        weekly_goal_days=settings.weekly_goal_days,
    )
