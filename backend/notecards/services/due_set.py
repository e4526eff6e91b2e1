"""
Due-set partitioning over already-loaded cards.

The database query in `notecards.db.sqlite.get_due_flashcards` applies the
same rule on the server side; this is what in-memory aggregation uses.
"""
from __future__ import annotations

from collections.abc import Iterable

from notecards.models.flashcard import Flashcard


def is_due(card: Flashcard, now: int) -> bool:
    return card.next_review <= now


def partition_due(
    cards: Iterable[Flashcard], now: int
) -> tuple[list[Flashcard], list[Flashcard]]:
    """Split cards into (due, not_due), preserving input order."""
    due: list[Flashcard] = []
    not_due: list[Flashcard] = []
    for card in cards:
        (due if is_due(card, now) else not_due).append(card)
    return due, not_due
