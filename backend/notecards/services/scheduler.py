"""
Spaced-repetition scheduling.

A card's scheduling state moves through a pure transition:

    apply_review(state, is_correct, now) -> new state

Correct answers walk the card along its difficulty tier's interval table
(indexed by how many reviews it has had) and, on a sustained streak, promote
the tier one step (hard -> medium at 3, medium -> easy at 5). Any miss drops
the card straight to hard and makes it due again immediately.

The interval is looked up in the table of the tier the card had *before*
the review; the promoted tier is only stored.
"""
from __future__ import annotations

from notecards.models.flashcard import Difficulty, SchedulingState

DAY_MS = 24 * 60 * 60 * 1000

INTERVALS: dict[Difficulty, tuple[int, ...]] = {
    Difficulty.EASY: (1, 3, 7, 14, 30, 90, 180, 365),
    Difficulty.MEDIUM: (1, 2, 4, 8, 16, 32, 64, 128),
    Difficulty.HARD: (1, 1, 2, 4, 8, 16, 32, 64),
}

# tier -> (streak needed, tier promoted to)
PROMOTIONS: dict[Difficulty, tuple[int, Difficulty]] = {
    Difficulty.HARD: (3, Difficulty.MEDIUM),
    Difficulty.MEDIUM: (5, Difficulty.EASY),
}

INITIAL_DIFFICULTY = Difficulty.MEDIUM
INITIAL_INTERVAL = 1
RESET_INTERVAL = 1


def next_interval(difficulty: Difficulty, review_count: int) -> int:
    """Interval in days for a correct review; plateaus at the table's last entry."""
    table = INTERVALS[difficulty]
    return table[min(review_count, len(table) - 1)]


def promote(difficulty: Difficulty, streak: int) -> Difficulty:
    """At most one tier per review."""
    rule = PROMOTIONS.get(difficulty)
    if rule is not None and streak >= rule[0]:
        return rule[1]
    return difficulty


def initial_state(now: int) -> SchedulingState:
    """State of a freshly generated card: medium, due right away."""
    return SchedulingState(
        difficulty=INITIAL_DIFFICULTY,
        next_review=now,
        interval=INITIAL_INTERVAL,
        review_count=0,
        consecutive_correct=0,
        last_reviewed=None,
        updated_at=now,
    )


def apply_review(state: SchedulingState, is_correct: bool, now: int) -> SchedulingState:
    if is_correct:
        streak = state.consecutive_correct + 1
        interval = next_interval(state.difficulty, state.review_count)
        return SchedulingState(
            difficulty=promote(state.difficulty, streak),
            next_review=now + interval * DAY_MS,
            interval=interval,
            review_count=state.review_count + 1,
            consecutive_correct=streak,
            last_reviewed=now,
            updated_at=now,
        )

    return SchedulingState(
        difficulty=Difficulty.HARD,
        next_review=now,
        interval=RESET_INTERVAL,
        review_count=state.review_count + 1,
        consecutive_correct=0,
        last_reviewed=now,
        updated_at=now,
    )
