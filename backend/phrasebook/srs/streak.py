"""Consecutive-day review streak."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta, tzinfo

from .time import local_day


def review_days(timestamps: Iterable[int | None], tz: tzinfo | None = None) -> set[date]:
    """Bucket review timestamps into the set of calendar days they fall on.

    ``None`` entries (phrases never reviewed) are ignored.
    """
    return {local_day(ts, tz) for ts in timestamps if ts is not None}


def calculate_streak(
    timestamps: Iterable[int | None], now: int, tz: tzinfo | None = None
) -> int:
    """Count consecutive review days ending today, or yesterday if today has none yet.

    A day without a review so far today does not break a streak that ran through
    yesterday, but today only counts once it has a review. The walk stops at the
    first day without any review.
    """
    days = review_days(timestamps, tz)
    if not days:
        return 0

    today = local_day(now, tz)
    streak = 1 if today in days else 0

    expected = today - timedelta(days=1)
    while expected in days:
        streak += 1
        expected -= timedelta(days=1)

    return streak
