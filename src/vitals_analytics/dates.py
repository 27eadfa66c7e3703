"""Calendar-day window helpers.

Every entry is keyed by a local calendar day. Dates are handled as plain
``datetime.date`` values so a day never shifts through a UTC round-trip,
and every helper returns new values instead of mutating its inputs.

Range tokens:
- ``'1w'``: the 7 days ending today
- ``'1m'`` / ``'3m'``: calendar months back, same day of month
- ``'all'``: unbounded start
- ``N`` or ``"N"``: the N days ending today
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Optional, Tuple, TypeVar, Union

logger = logging.getLogger(__name__)

RangeToken = Union[str, int]

T = TypeVar("T")

MONTH_RANGES = {"1m": 1, "3m": 3}


@dataclass(frozen=True)
class TimeWindow:
    """A date window. ``start=None`` means unbounded."""
    start: Optional[date]
    end: Optional[date]

    @property
    def is_unbounded(self) -> bool:
        return self.start is None

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }


def parse_date(value: Any) -> Optional[date]:
    """Parse a calendar day from a date, datetime or ``YYYY-MM-DD`` string.

    A time part on a string or datetime is dropped as is; the value is never
    converted to another timezone first.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            logger.debug(f"Unparseable date string: {value!r}")
            return None
    logger.debug(f"Unsupported date value type: {type(value).__name__}")
    return None


def add_months(day: date, months: int) -> date:
    """Shift by calendar months, clamping to the last day of a shorter month."""
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative if end is earlier)."""
    return (end - start).days


def _day_count(token: RangeToken) -> Optional[int]:
    """Day count of a numeric token, None if the token is not a positive integer."""
    if isinstance(token, bool):
        return None
    if isinstance(token, int):
        return token if token > 0 else None
    if isinstance(token, str) and token.strip().isdigit():
        count = int(token.strip())
        return count if count > 0 else None
    return None


def _start_for(token: RangeToken, anchor: date) -> Optional[date]:
    """Inclusive start of the window for token ending on anchor."""
    if token == "1w":
        return anchor - timedelta(days=6)
    if token in MONTH_RANGES:
        return add_months(anchor, -MONTH_RANGES[token])
    count = _day_count(token)
    if count is not None:
        return anchor - timedelta(days=count - 1)
    return None


def resolve_range(token: RangeToken, today: date) -> TimeWindow:
    """Resolve a range token into an inclusive window ending today.

    Args:
        token: Range token ('1w', '1m', '3m', 'all', or a day count)
        today: Reference day

    Returns:
        TimeWindow; unrecognized tokens resolve to an unbounded start
    """
    start = _start_for(token, today)
    if start is None and token != "all":
        logger.debug(f"Unrecognized range token {token!r}, using all time")
    return TimeWindow(start=start, end=today)


def resolve_previous_range(token: RangeToken, today: date) -> TimeWindow:
    """Resolve the window immediately before ``resolve_range(token, today)``.

    The previous window is half-open: it ends (exclusive) where the current
    window starts and covers the same number of days, or the same number of
    calendar months for month tokens. Unbounded tokens have no previous window.
    """
    current = resolve_range(token, today)
    if current.start is None:
        return TimeWindow(start=None, end=None)

    if token == "1w":
        start = current.start - timedelta(days=7)
    elif token in MONTH_RANGES:
        start = add_months(current.start, -MONTH_RANGES[token])
    else:
        start = current.start - timedelta(days=_day_count(token))
    return TimeWindow(start=start, end=current.start)


def week_bounds(day: date) -> Tuple[date, date]:
    """Monday and Sunday of the week containing day.

    Sunday closes the week that started the previous Monday.
    """
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def is_date_in_range(
    day: date,
    start: Optional[date],
    end: Optional[date],
    inclusive_end: bool = True,
) -> bool:
    """Check a day against optional bounds."""
    if start is not None and day < start:
        return False
    if end is not None:
        if inclusive_end and day > end:
            return False
        if not inclusive_end and day >= end:
            return False
    return True


def filter_by_window(
    entries: Iterable[T],
    window: TimeWindow,
    inclusive_end: bool = True,
) -> List[T]:
    """Entries whose ``date`` falls inside the window, as a new list."""
    return [
        entry for entry in entries
        if is_date_in_range(entry.date, window.start, window.end, inclusive_end)
    ]


def filter_entries_by_range(entries: Iterable[T], token: RangeToken, today: date) -> List[T]:
    """Entries inside the current window for token."""
    return filter_by_window(entries, resolve_range(token, today))


def previous_period_entries(entries: Iterable[T], token: RangeToken, today: date) -> List[T]:
    """Entries inside the previous window for token (empty for unbounded tokens)."""
    window = resolve_previous_range(token, today)
    if window.start is None:
        return []
    return filter_by_window(entries, window, inclusive_end=False)


def sort_by_date(entries: Iterable[T], ascending: bool = False) -> List[T]:
    """Sorted copy, newest first unless ascending."""
    return sorted(entries, key=lambda entry: entry.date, reverse=not ascending)


def duration_from_times(start: Optional[str], end: Optional[str]) -> Optional[int]:
    """Minutes between two ``HH:MM`` clock times, wrapping past midnight.

    Returns:
        Minutes, or None if either time is missing or malformed
    """
    start_minutes = _clock_minutes(start)
    end_minutes = _clock_minutes(end)
    if start_minutes is None or end_minutes is None:
        return None

    duration = end_minutes - start_minutes
    if duration < 0:
        duration += 24 * 60
    return duration


def _clock_minutes(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        hours, minutes = value.split(":")[:2]
        return int(hours) * 60 + int(minutes)
    except ValueError:
        logger.debug(f"Unparseable clock time: {value!r}")
        return None
