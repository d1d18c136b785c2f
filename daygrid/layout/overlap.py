"""Interval predicates shared by every layout pass."""

from __future__ import annotations

from datetime import datetime

from ..models import TimeRange

MINUTES_PER_DAY = 24 * 60


def intervals_overlap(first: TimeRange, second: TimeRange) -> bool:
    """Return ``True`` when the half-open ranges ``[start, end)`` intersect.

    Touching ranges (one ends exactly when the other starts) do not overlap.
    Degenerate ranges are compared using their raw timestamps.
    """

    return first.start_time < second.end_time and second.start_time < first.end_time


def is_disjoint(first: TimeRange, second: TimeRange) -> bool:
    return first.end_time <= second.start_time or first.start_time >= second.end_time


def minutes_of_day(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def duration_minutes(item: TimeRange) -> int:
    """Whole minutes between start and end; negative for degenerate ranges."""

    seconds = (item.end_time - item.start_time).total_seconds()
    return int(seconds // 60) if seconds >= 0 else -int(-seconds // 60)


__all__ = [
    "MINUTES_PER_DAY",
    "duration_minutes",
    "intervals_overlap",
    "is_disjoint",
    "minutes_of_day",
]
