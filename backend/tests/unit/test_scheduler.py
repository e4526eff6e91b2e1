import pytest

from notecards.models.flashcard import Difficulty, SchedulingState
from notecards.services.scheduler import (
    DAY_MS,
    INTERVALS,
    apply_review,
    initial_state,
    next_interval,
    promote,
)

NOW = 1_700_000_000_000


def _state(**overrides) -> SchedulingState:
    fields = {
        "difficulty": Difficulty.MEDIUM,
        "next_review": NOW - DAY_MS,
        "interval": 1,
        "review_count": 0,
        "consecutive_correct": 0,
        "last_reviewed": None,
        "updated_at": NOW - DAY_MS,
    }
    fields.update(overrides)
    return SchedulingState(**fields)


def test_initial_state_is_medium_and_due_now():
    state = initial_state(NOW)
    assert state.difficulty is Difficulty.MEDIUM
    assert state.interval == 1
    assert state.next_review == NOW
    assert state.review_count == 0
    assert state.consecutive_correct == 0
    assert state.last_reviewed is None


@pytest.mark.parametrize("difficulty", list(Difficulty))
@pytest.mark.parametrize("review_count", [0, 1, 3, 6, 7, 8, 50])
def test_correct_interval_comes_from_tier_table(difficulty, review_count):
    table = INTERVALS[difficulty]
    # streak 0 keeps every tier below its promotion threshold
    new = apply_review(_state(difficulty=difficulty, review_count=review_count), True, NOW)

    expected = table[min(review_count, len(table) - 1)]
    assert new.interval == expected
    assert new.next_review == NOW + expected * DAY_MS
    assert next_interval(difficulty, review_count) == expected


def test_interval_tables_plateau():
    assert next_interval(Difficulty.EASY, 1000) == 365
    assert next_interval(Difficulty.MEDIUM, 1000) == 128
    assert next_interval(Difficulty.HARD, 1000) == 64


@pytest.mark.parametrize("difficulty", list(Difficulty))
@pytest.mark.parametrize("streak,review_count", [(0, 0), (2, 5), (10, 20)])
def test_incorrect_always_resets(difficulty, streak, review_count):
    new = apply_review(
        _state(difficulty=difficulty, consecutive_correct=streak, review_count=review_count, interval=8),
        False,
        NOW,
    )
    assert new.difficulty is Difficulty.HARD
    assert new.interval == 1
    assert new.consecutive_correct == 0
    assert new.next_review == NOW
    assert new.review_count == review_count + 1
    assert new.last_reviewed == NOW
    assert new.updated_at == NOW


def test_review_count_increments_by_one_either_way():
    state = _state(review_count=4, consecutive_correct=1)
    assert apply_review(state, True, NOW).review_count == 5
    assert apply_review(state, False, NOW).review_count == 5


def test_streak_increments_on_correct():
    new = apply_review(_state(consecutive_correct=2, review_count=2), True, NOW)
    assert new.consecutive_correct == 3
    assert new.last_reviewed == NOW


def test_hard_promotes_exactly_at_three():
    assert apply_review(_state(difficulty=Difficulty.HARD, consecutive_correct=1, review_count=1), True, NOW).difficulty is Difficulty.HARD
    assert apply_review(_state(difficulty=Difficulty.HARD, consecutive_correct=2, review_count=2), True, NOW).difficulty is Difficulty.MEDIUM


def test_medium_promotes_exactly_at_five():
    assert apply_review(_state(consecutive_correct=3, review_count=3), True, NOW).difficulty is Difficulty.MEDIUM
    assert apply_review(_state(consecutive_correct=4, review_count=4), True, NOW).difficulty is Difficulty.EASY


def test_promotion_never_skips_a_tier():
    # a long streak on hard still only reaches medium in one review
    new = apply_review(_state(difficulty=Difficulty.HARD, consecutive_correct=9, review_count=9), True, NOW)
    assert new.difficulty is Difficulty.MEDIUM
    assert promote(Difficulty.HARD, 100) is Difficulty.MEDIUM
    assert promote(Difficulty.EASY, 100) is Difficulty.EASY


def test_new_card_correct():
    new = apply_review(initial_state(NOW - DAY_MS), True, NOW)
    assert new.interval == 1
    assert new.next_review == NOW + DAY_MS
    assert new.review_count == 1
    assert new.consecutive_correct == 1
    assert new.difficulty is Difficulty.MEDIUM


def test_promotion_uses_pre_promotion_table():
    state = _state(difficulty=Difficulty.HARD, consecutive_correct=2, review_count=5)
    new = apply_review(state, True, NOW)
    assert new.consecutive_correct == 3
    assert new.difficulty is Difficulty.MEDIUM
    assert new.interval == 16
    assert new.next_review == NOW + 16 * DAY_MS


def test_easy_card_missed_after_long_streak():
    state = _state(difficulty=Difficulty.EASY, consecutive_correct=10, review_count=20, interval=365)
    new = apply_review(state, False, NOW)
    assert new.difficulty is Difficulty.HARD
    assert new.interval == 1
    assert new.consecutive_correct == 0
    assert new.next_review == NOW
    assert new.review_count == 21


def test_input_state_is_not_mutated():
    state = _state(consecutive_correct=1, review_count=1)
    apply_review(state, True, NOW)
    assert state.review_count == 1
    assert state.consecutive_correct == 1
