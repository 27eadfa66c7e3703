"""Derived sleep metrics and sleep summaries."""

from dataclasses import asdict, dataclass
from typing import Optional, Sequence

from ..models import SleepEntry
from .stats import Stats, calc_stats_rounded


def restorative_pct(entry: SleepEntry) -> Optional[float]:
    """Restorative sleep (deep + REM) percentage.

    A missing half counts as 0 only when the other half is present.
    """
    if entry.deep_sleep_pct is None and entry.rem_sleep_pct is None:
        return None
    return (entry.deep_sleep_pct or 0) + (entry.rem_sleep_pct or 0)


def sleep_cycles(entry: SleepEntry) -> Optional[float]:
    """Full cycles plus half credit for partial cycles."""
    if entry.sleep_cycles_full is None and entry.sleep_cycles_partial is None:
        return None
    return (entry.sleep_cycles_full or 0) + 0.5 * (entry.sleep_cycles_partial or 0)


@dataclass
class SleepStats:
    """Rounded statistics over a set of nights."""
    count: int
    duration: Stats
    hrv_low: Stats
    hrv_high: Stats
    resting_hr: Stats
    deep_pct: Stats
    rem_pct: Stats
    restorative_pct: Stats
    hr_drop: Stats

    def to_dict(self) -> dict:
        return asdict(self)


def calculate_sleep_stats(entries: Optional[Sequence[SleepEntry]]) -> Optional[SleepStats]:
    """Summarize sleep entries.

    Each metric is aggregated over the entries that carry it; averages are
    rounded half up.

    Returns:
        SleepStats, or None if there are no entries
    """
    if not entries:
        return None

    return SleepStats(
        count=len(entries),
        duration=calc_stats_rounded(e.sleep_minutes for e in entries),
        hrv_low=calc_stats_rounded(e.hrv_low for e in entries),
        hrv_high=calc_stats_rounded(e.hrv_high for e in entries),
        resting_hr=calc_stats_rounded(e.resting_hr for e in entries),
        deep_pct=calc_stats_rounded(e.deep_sleep_pct for e in entries),
        rem_pct=calc_stats_rounded(e.rem_sleep_pct for e in entries),
        restorative_pct=calc_stats_rounded(restorative_pct(e) for e in entries),
        hr_drop=calc_stats_rounded(e.hr_drop_minutes for e in entries),
    )
