"""SRS core: SM-2 scheduling, due selection and review streaks."""

from .scheduler import (
    RATINGS,
    InvalidRatingError,
    Rating,
    SchedulingState,
    apply_rating,
    default_state,
    round_half_up,
    validate_rating,
)
from .due import is_due, oldest_due_first, select_due
from .streak import calculate_streak, review_days
from .time import (
    SECONDS_PER_DAY,
    add_days,
    epoch_now,
    epoch_to_iso_z,
    local_day,
    start_of_day,
    utc_now,
)

__all__ = [
    "RATINGS",
    "InvalidRatingError",
    "Rating",
    "SchedulingState",
    "apply_rating",
    "default_state",
    "round_half_up",
    "validate_rating",
    "is_due",
    "oldest_due_first",
    "select_due",
    "calculate_streak",
    "review_days",
    "SECONDS_PER_DAY",
    "add_days",
    "epoch_now",
    "epoch_to_iso_z",
    "local_day",
    "start_of_day",
    "utc_now",
]
