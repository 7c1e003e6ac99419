"""SM-2 style review scheduler.

Maps a phrase's current scheduling state and a recall rating to its next state.
The ease factor is handled as a decimal here; the x100 integer form lives only in
the storage layer (see repositories/srs_repository.py).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Literal, get_args

from .time import add_days

Rating = Literal["again", "hard", "good", "easy"]

RATINGS: tuple[str, ...] = get_args(Rating)

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3


class InvalidRatingError(ValueError):
    """Raised when a rating is not one of again/hard/good/easy."""

    pass


@dataclass(frozen=True)
class SchedulingState:
    ease_factor: float
    interval_days: int
    repetitions: int
    next_review_at: int
    last_review_at: int | None = None


def default_state(next_review_at: int) -> SchedulingState:
    """Return the state of a phrase that has never been reviewed."""
    return SchedulingState(
        ease_factor=DEFAULT_EASE_FACTOR,
        interval_days=0,
        repetitions=0,
        next_review_at=next_review_at,
        last_review_at=None,
    )


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; intervals use .5 -> up.
    return int(math.floor(value + 0.5))


def _normalize_ease_factor(ef: float) -> float:
    """Clamp to the floor and keep two decimals, the stored precision."""
    return max(MIN_EASE_FACTOR, round_half_up(ef * 100) / 100)


def validate_rating(rating: object) -> Rating:
    if rating not in RATINGS:
        raise InvalidRatingError(
            f"Invalid rating {rating!r}; expected one of {', '.join(RATINGS)}"
        )
    return rating  # type: ignore[return-value]


def apply_rating(state: SchedulingState, rating: str, now: int) -> SchedulingState:
    """Apply a review rating to the given state.

    Rules:
    - again: repetitions = 0, EF' = max(1.3, EF - 0.2), interval = 1
    - hard:  repetitions = 1 on a first review, otherwise unchanged,
             EF' = max(1.3, EF - 0.15), interval = max(1, round(interval * 1.2))
    - good:  repetitions += 1, EF unchanged,
             interval = 1, then 6, then round(interval * EF)
    - easy:  repetitions += 1, EF' = EF + 0.1,
             interval = round(interval * EF' * 1.3)

    Intervals never drop below one day. The review happens at ``now`` (epoch
    seconds) and the next review is due ``interval`` whole days later.

    Raises:
        InvalidRatingError: If ``rating`` is not a known rating.
    """
    validate_rating(rating)

    ef = state.ease_factor
    reps = state.repetitions
    interval = state.interval_days

    if rating == "again":
        reps_prime = 0
        ef_prime = ef - 0.2
        interval_prime = 1
    elif rating == "hard":
        # Hard does not advance graduation past a first review.
        reps_prime = 1 if reps == 0 else reps
        ef_prime = ef - 0.15
        interval_prime = round_half_up(interval * 1.2)
    elif rating == "good":
        reps_prime = reps + 1
        ef_prime = ef
        if reps_prime == 1:
            interval_prime = 1
        elif reps_prime == 2:
            interval_prime = 6
        else:
            interval_prime = round_half_up(interval * ef)
    else:
        reps_prime = reps + 1
        ef_prime = _normalize_ease_factor(ef + 0.1)
        interval_prime = round_half_up(interval * ef_prime * 1.3)

    interval_prime = max(1, interval_prime)

    return replace(
        state,
        ease_factor=_normalize_ease_factor(ef_prime),
        interval_days=interval_prime,
        repetitions=reps_prime,
        next_review_at=add_days(now, interval_prime),
        last_review_at=now,
    )
