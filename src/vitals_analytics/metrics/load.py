"""Decayed cumulative training load.

Load follows a daily recurrence from the first workout to the target day:

    load[d] = load[d-1] * decay + effort(d)

where effort(d) is the summed effort score of the day's workouts. With the
default decay of 0.93 a single hard day fades gradually over roughly two
weeks instead of disappearing after a rest day.

Only days that carry effort are visited; idle stretches are applied in one
step as ``decay ** gap``, which is the same recurrence with zero effort.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from ..config import AnalyticsSettings, get_settings
from ..models import ActivityEntry
from .effort import bucket, calculate_effort_score

logger = logging.getLogger(__name__)


@dataclass
class TrainingLoadState:
    """Training load on a target day."""
    score: float
    level: str
    trend: str  # 'rising', 'stable', 'declining'
    days_since_activity: int  # -1 until the first workout

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "level": self.level,
            "trend": self.trend,
            "days_since_activity": self.days_since_activity,
        }


@dataclass
class TrainingLoadPoint:
    """Training load on one day of a series."""
    date: date
    score: float
    effort: float

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "score": self.score,
            "effort": self.effort,
        }


def daily_efforts(
    activities: Iterable[ActivityEntry],
    settings: Optional[AnalyticsSettings] = None,
) -> Dict[date, float]:
    """Summed effort per day, for days with effort above zero."""
    settings = settings or get_settings()
    efforts: Dict[date, float] = {}
    for activity in activities:
        effort = calculate_effort_score(activity, settings)
        if effort > 0:
            efforts[activity.date] = efforts.get(activity.date, 0.0) + effort
    return efforts


def _load_on(day: date, efforts: Dict[date, float], decay: float) -> float:
    """Load at the end of day from per-day efforts."""
    load = 0.0
    previous: Optional[date] = None
    for effort_day in sorted(d for d in efforts if d <= day):
        if previous is not None:
            load *= decay ** (effort_day - previous).days
        load += efforts[effort_day]
        previous = effort_day

    if previous is None:
        return 0.0
    return load * decay ** (day - previous).days


def training_load_level(score: float, settings: Optional[AnalyticsSettings] = None) -> str:
    """Categorical bucket of a training load score."""
    settings = settings or get_settings()
    return bucket(score, settings.load_levels)


def _trend(current: float, previous: float, settings: AnalyticsSettings) -> str:
    if previous <= 0:
        return "rising" if current > 0 else "stable"
    if current >= previous * (1 + settings.trend_rising_pct / 100):
        return "rising"
    if current <= previous * (1 - settings.trend_declining_pct / 100):
        return "declining"
    return "stable"


def calculate_training_load(
    target_day: date,
    activities: Optional[Iterable[ActivityEntry]],
    settings: Optional[AnalyticsSettings] = None,
) -> TrainingLoadState:
    """Training load on target_day from the workout history.

    Workouts after target_day are ignored.

    Args:
        target_day: Day to evaluate
        activities: Workout history in any order
        settings: Analytics settings

    Returns:
        TrainingLoadState; an empty history gives score 0, the lowest level,
        a stable trend and -1 days since activity
    """
    settings = settings or get_settings()
    efforts = {
        day: effort
        for day, effort in daily_efforts(activities or [], settings).items()
        if day <= target_day
    }

    if not efforts:
        return TrainingLoadState(
            score=0.0,
            level=settings.load_levels[0][1],
            trend="stable",
            days_since_activity=-1,
        )

    decay = settings.load_decay_rate
    current = _load_on(target_day, efforts, decay)
    previous = _load_on(target_day - timedelta(days=1), efforts, decay)
    last_active = max(efforts)

    state = TrainingLoadState(
        score=round(current, 1),
        level=training_load_level(current, settings),
        trend=_trend(current, previous, settings),
        days_since_activity=(target_day - last_active).days,
    )
    logger.debug(f"Training load on {target_day}: {state}")
    return state


def training_load_series(
    activities: Optional[Iterable[ActivityEntry]],
    end_day: date,
    days: int,
    settings: Optional[AnalyticsSettings] = None,
) -> List[TrainingLoadPoint]:
    """Daily training load for the ``days`` days ending on end_day.

    Each point matches ``calculate_training_load(day, activities).score``.
    """
    settings = settings or get_settings()
    efforts = daily_efforts(activities or [], settings)
    decay = settings.load_decay_rate

    points: List[TrainingLoadPoint] = []
    for offset in range(days - 1, -1, -1):
        day = end_day - timedelta(days=offset)
        points.append(
            TrainingLoadPoint(
                date=day,
                score=round(_load_on(day, efforts, decay), 1),
                effort=round(efforts.get(day, 0.0), 1),
            )
        )
    return points
