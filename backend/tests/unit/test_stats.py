from notecards.models.activity import Activity, ActivityKind
from notecards.services.stats import flashcard_stats, streak_and_goals, utc_day

NOW = 1_700_000_000_000  # 2023-11-14 UTC


def _event(day: str, count: int = 1) -> Activity:
    return Activity(
        id=day,
        user_id="user-1",
        kind=ActivityKind.REVIEW,
        count=count,
        day=day,
        created_at=NOW,
    )


def test_utc_day():
    assert utc_day(NOW) == "2023-11-14"
    assert utc_day(0) == "1970-01-01"


def test_flashcard_stats_empty():
    stats = flashcard_stats([], NOW)
    assert stats.total_cards == 0
    assert stats.due_cards == 0
    assert stats.avg_consecutive_correct == 0.0
    assert stats.subject_stats == {}


def test_flashcard_stats_groups_by_subject(make_card):
    cards = [
        make_card(subject="Biology", review_count=3, consecutive_correct=2, next_review=NOW - 1),
        make_card(subject="Biology", review_count=1, consecutive_correct=1, next_review=NOW + 1),
        make_card(subject="History", review_count=0, consecutive_correct=0, next_review=NOW),
    ]
    stats = flashcard_stats(cards, NOW)
    assert stats.total_cards == 3
    assert stats.due_cards == 2
    assert stats.total_reviews == 4
    assert stats.avg_consecutive_correct == 1.0
    assert stats.subject_stats["Biology"].model_dump() == {"total": 2, "due": 1, "reviews": 4}
    assert stats.subject_stats["History"].model_dump() == {"total": 1, "due": 1, "reviews": 0}


def test_average_streak_rounded_to_one_decimal(make_card):
    cards = [make_card(consecutive_correct=n) for n in (1, 1, 2)]
    assert flashcard_stats(cards, NOW).avg_consecutive_correct == 1.3


def test_streak_counts_back_from_today():
    events = [_event("2023-11-14"), _event("2023-11-13"), _event("2023-11-12"), _event("2023-11-10")]
    result = streak_and_goals(events, NOW)
    assert result.streak == 3
    assert result.goals_met == 2
    assert result.goals_total == 2


def test_no_activity_today_breaks_streak():
    events = [_event("2023-11-13"), _event("2023-11-12"), _event("2023-11-11")]
    result = streak_and_goals(events, NOW)
    assert result.streak == 0
    # weekly goal still met, daily goal not
    assert result.goals_met == 1


def test_weekly_goal_needs_three_days():
    events = [_event("2023-11-14"), _event("2023-11-10")]
    result = streak_and_goals(events, NOW)
    assert result.streak == 1
    assert result.goals_met == 1


def test_streak_is_capped():
    events = [_event("2023-11-14"), _event("2023-11-13"), _event("2023-11-12")]
    assert streak_and_goals(events, NOW, max_days=2).streak == 2


def test_no_events():
    result = streak_and_goals([], NOW)
    assert (result.streak, result.goals_met, result.goals_total) == (0, 0, 2)
