"""
Aggregations for the dashboard: per-user flashcard statistics and the
activity streak / goal summary.
"""
from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from notecards.models.activity import Activity, StreakAndGoals
from notecards.models.flashcard import Flashcard, FlashcardStats, SubjectStats
from notecards.services.due_set import partition_due

GOALS_TOTAL = 2


def utc_day(ts_ms: int) -> str:
    """Bucket an epoch-ms timestamp into its UTC calendar day (YYYY-MM-DD)."""
    return datetime.fromtimestamp(ts_ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d")


def flashcard_stats(cards: Iterable[Flashcard], now: int) -> FlashcardStats:
    due, not_due = partition_due(cards, now)
    subject_stats: dict[str, SubjectStats] = {}
    total_reviews = 0
    streak_sum = 0

    for is_due_now, group in ((True, due), (False, not_due)):
        for card in group:
            bucket = subject_stats.setdefault(card.subject, SubjectStats())
            bucket.total += 1
            bucket.reviews += card.review_count
            bucket.due += is_due_now
            total_reviews += card.review_count
            streak_sum += card.consecutive_correct

    total_cards = len(due) + len(not_due)
    avg = round(streak_sum / total_cards, 1) if total_cards else 0.0
    return FlashcardStats(
        total_cards=total_cards,
        due_cards=len(due),
        total_reviews=total_reviews,
        avg_consecutive_correct=avg,
        subject_stats=subject_stats,
    )


def streak_and_goals(
    events: Iterable[Activity],
    now: int,
    max_days: int = 365,
    weekly_goal_days: int = 3,
) -> StreakAndGoals:
    """
    Streak: consecutive UTC days with any activity, counting back from today.
    A day without activity today means a streak of 0.

    Goals: (1) some activity today, (2) at least `weekly_goal_days` active
    days within the last 7.
    """
    active_days = {ev.day for ev in events if ev.count > 0}
    today = datetime.fromtimestamp(now / 1000, tz=timezone.utc).date()

    def active(offset: int) -> bool:
        return (today - timedelta(days=offset)).isoformat() in active_days

    streak = 0
    while streak < max_days and active(streak):
        streak += 1

    active_last_week = sum(1 for i in range(7) if active(i))
    goals = [active(0), active_last_week >= weekly_goal_days]
    return StreakAndGoals(
        streak=streak,
        goals_met=sum(goals),
        goals_total=GOALS_TOTAL,
    )
