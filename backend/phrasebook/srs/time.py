"""Time helpers for SRS scheduling.

Scheduling timestamps are integer seconds since the epoch. ISO strings produced
by this module are UTC and end with 'Z', with second precision:
YYYY-MM-DDTHH:MM:SSZ
"""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo

SECONDS_PER_DAY = 24 * 60 * 60


def utc_now() -> datetime:
    """Return timezone-aware UTC 'now'."""
    return datetime.now(timezone.utc)


def epoch_now() -> int:
    """Return current time as whole seconds since the epoch."""
    return int(utc_now().timestamp())


def add_days(ts: int, days: int) -> int:
    return ts + days * SECONDS_PER_DAY


def epoch_to_iso_z(ts: int) -> str:
    """Format epoch seconds as UTC ISO string with trailing 'Z'."""
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return dt.isoformat().replace("+00:00", "Z")


def local_day(ts: int, tz: tzinfo | None = None) -> date:
    """Return the calendar day of ``ts`` in ``tz`` (the host's local zone when None)."""
    if tz is None:
        return datetime.fromtimestamp(ts).date()
    return datetime.fromtimestamp(ts, tz=tz).date()


def start_of_day(ts: int, tz: tzinfo | None = None) -> int:
    """Return epoch seconds of local midnight on the day containing ``ts``."""
    day = local_day(ts, tz)
    if tz is None:
        return int(datetime(day.year, day.month, day.day).timestamp())
    return int(datetime(day.year, day.month, day.day, tzinfo=tz).timestamp())
