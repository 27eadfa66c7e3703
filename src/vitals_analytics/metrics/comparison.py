"""Period-over-period comparison.

The current period is the inclusive window for a range token ending today;
the previous period is the equally sized window right before it.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar, Union

from ..dates import (
    RangeToken,
    TimeWindow,
    filter_by_window,
    previous_period_entries,
    resolve_previous_range,
    resolve_range,
)
from ..models import BloodPressureReading

T = TypeVar("T")
S = TypeVar("S")


@dataclass
class PeriodComparison(Generic[S]):
    """Summaries of the current and previous periods."""
    current_window: TimeWindow
    previous_window: TimeWindow
    current: Optional[S]
    previous: Optional[S]

    @property
    def has_previous(self) -> bool:
        return self.previous is not None

    def to_dict(self) -> dict:
        return {
            "current_window": self.current_window.to_dict(),
            "previous_window": self.previous_window.to_dict(),
            "current": _as_dict(self.current),
            "previous": _as_dict(self.previous),
        }


def _as_dict(summary: Any) -> Any:
    if summary is None:
        return None
    to_dict = getattr(summary, "to_dict", None)
    return to_dict() if callable(to_dict) else summary


def compare_periods(
    entries: Sequence[T],
    token: RangeToken,
    today: date,
    summarize: Callable[[List[T]], Optional[S]],
) -> PeriodComparison[S]:
    """Summarize the current and previous periods of a range.

    Args:
        entries: Entries of any domain (anything with a ``date``)
        token: Range token
        today: Reference day
        summarize: Summary function, e.g. ``calculate_sleep_stats``

    Returns:
        PeriodComparison; ``previous`` is None for unbounded ranges or when
        the previous period holds no entries
    """
    current_window = resolve_range(token, today)
    previous_window = resolve_previous_range(token, today)

    current_entries = filter_by_window(entries, current_window)
    previous_entries = previous_period_entries(entries, token, today)

    return PeriodComparison(
        current_window=current_window,
        previous_window=previous_window,
        current=summarize(current_entries),
        previous=summarize(previous_entries) if previous_entries else None,
    )


def metric_change(
    current: Optional[Union[int, float]],
    previous: Optional[Union[int, float]],
) -> Optional[float]:
    """Signed change from previous to current, None if either is missing."""
    if current is None or previous is None:
        return None
    return current - previous


def filter_by_time_of_day(
    readings: Optional[Sequence[BloodPressureReading]],
    time_of_day: str = "all",
) -> List[BloodPressureReading]:
    """Readings taken at a time of day; 'all' keeps every reading."""
    if not readings:
        return []
    if time_of_day == "all":
        return list(readings)
    return [
        r for r in readings
        if r.time_of_day is not None and r.time_of_day.value == time_of_day
    ]


def previous_period_readings(
    readings: Optional[Sequence[BloodPressureReading]],
    token: RangeToken,
    today: date,
    time_of_day: str = "all",
) -> List[BloodPressureReading]:
    """Blood pressure readings of the previous period.

    Args:
        readings: Reading history
        token: Range token
        today: Reference day
        time_of_day: 'morning', 'afternoon', 'evening' or 'all'

    Returns:
        Readings in the previous window matching the time of day
    """
    if not readings:
        return []

    return filter_by_time_of_day(previous_period_entries(readings, token, today), time_of_day)
