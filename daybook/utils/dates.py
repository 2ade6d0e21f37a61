"""
dates.py
-------------------
Timestamp helpers.

Timestamps are persisted as naive UTC datetimes (SQLite has no time zone
type). Calendar questions ("which entries were written on the 3rd?") are
answered in the machine's local time zone, so these helpers convert
between the two representations.
"""
from __future__ import annotations

# --- Standard library imports ---
from collections import OrderedDict
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple, TypeVar, Union

# --- Local imports ---
from daybook.core.exceptions import ValidationError

T = TypeVar("T")


def utc_now() -> datetime:
    """Current time as a naive UTC datetime (storage representation)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    """
    Convert a datetime to the storage representation.

    Naive inputs are taken as local wall-clock time.
    """
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_local(value: datetime) -> datetime:
    """Convert a stored naive UTC datetime to an aware local datetime."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone()


def local_day_bounds(day: Union[str, date, datetime]) -> Tuple[datetime, datetime]:
    """
    Storage-representation bounds of a local calendar day.

    Args:
        day: Calendar day, or a 'YYYY-MM-DD' string. A datetime is
            reduced to its local date (naive ones are taken as UTC).

    Returns:
        (start, end) where start is local midnight and end is the next
        local midnight, both as naive UTC. Use start <= t < end.
    """
    if isinstance(day, str):
        try:
            day = date.fromisoformat(day.strip()[:10])
        except ValueError:
            raise ValidationError(f"Cannot parse date: '{day}'")
    if isinstance(day, datetime):
        day = to_local(day).date()
    start = datetime.combine(day, time.min)
    end = datetime.combine(day + timedelta(days=1), time.min)
    return to_utc_naive(start), to_utc_naive(end)


def local_month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """
    Storage-representation bounds of a local calendar month (month is 1-12).

    Returns:
        (start, end) with end being the first local midnight of the next month
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return to_utc_naive(start), to_utc_naive(end)


def group_entries_by_date(entries: Iterable[T]) -> Dict[str, List[T]]:
    """
    Group entries by local calendar day, preserving input order.

    Args:
        entries: Objects with a created_at attribute

    Returns:
        Ordered mapping of 'YYYY-MM-DD' to entries of that day
    """
    groups: Dict[str, List[T]] = OrderedDict()
    for entry in entries:
        key = to_local(entry.created_at).strftime("%Y-%m-%d")  # type: ignore[attr-defined]
        groups.setdefault(key, []).append(entry)
    return groups


def storage_bound(
    value: Union[None, str, date, datetime], end_of_day: bool = False
) -> Optional[datetime]:
    """
    Turn a user-supplied range bound into the storage representation.

    - Aware datetimes are converted to naive UTC
    - Naive datetimes are taken as already being naive UTC
    - Dates (and 'YYYY-MM-DD' strings) are local calendar days: the start
      of the day, or its last microsecond when end_of_day is set, so an
      inclusive <= comparison covers the whole day

    Raises:
        ValidationError: If a string is not ISO-8601
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        text = value.strip()
        try:
            value = date.fromisoformat(text) if len(text) == 10 else datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"Cannot parse date: '{value}'")
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc).replace(tzinfo=None) if value.tzinfo else value
    start, end = local_day_bounds(value)
    return end - timedelta(microseconds=1) if end_of_day else start
