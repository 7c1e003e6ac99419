"""Due-set selection over persisted scheduling states."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from .scheduler import SchedulingState

ItemId = TypeVar("ItemId")


def is_due(state: SchedulingState, now: int) -> bool:
    """A phrase is due once its next review time has been reached (inclusive)."""
    return state.next_review_at <= now


def select_due(items: Iterable[tuple[ItemId, SchedulingState]], now: int) -> list[ItemId]:
    """Return the ids of all due items, in input order."""
    return [item_id for item_id, state in items if is_due(state, now)]


def oldest_due_first(
    items: Iterable[tuple[ItemId, SchedulingState]], now: int
) -> list[ItemId]:
    """Return the ids of all due items, the longest-overdue first."""
    due = [(item_id, state) for item_id, state in items if is_due(state, now)]
    due.sort(key=lambda pair: pair[1].next_review_at)
    return [item_id for item_id, _ in due]
