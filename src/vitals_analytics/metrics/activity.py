"""Daily activity scores and per-day workout aggregates.

The activity score is a simpler companion to the effort score: duration times
logged intensity, scaled by how consistently you trained in the seven days
before the workout:

    score = sum(duration * intensity) * consistency_multiplier

With the default table one workout (or none) in the previous week scales by
0.8, two by 0.9, three by 1.0 and four or more by 1.1.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from ..config import AnalyticsSettings, get_settings
from ..models import ActivityEntry
from .effort import bucket
from .stats import round_stat


@dataclass
class DayActivities:
    """Workouts logged on one day with their aggregates."""
    date: date
    activities: List[ActivityEntry] = field(default_factory=list)
    total_score: int = 0
    total_duration: float = 0.0
    avg_intensity: float = 0.0  # duration-weighted

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "activities": [a.model_dump(mode="json") for a in self.activities],
            "total_score": self.total_score,
            "total_duration": self.total_duration,
            "avg_intensity": round(self.avg_intensity, 2),
        }


def consistency_multiplier(
    activities: Sequence[ActivityEntry],
    reference_day: date,
    settings: Optional[AnalyticsSettings] = None,
) -> float:
    """Multiplier for the number of workouts in the 7 days before reference_day.

    The window is ``[reference_day - 7, reference_day)``; workouts on the
    reference day itself do not count.
    """
    settings = settings or get_settings()
    window_start = reference_day - timedelta(days=7)
    workouts = sum(1 for a in activities if window_start <= a.date < reference_day)
    return bucket(workouts, settings.consistency_multipliers)


def activity_score(
    activity: ActivityEntry,
    all_activities: Sequence[ActivityEntry],
    settings: Optional[AnalyticsSettings] = None,
) -> int:
    """Score one workout: duration x intensity x consistency multiplier."""
    base = activity.duration_minutes * activity.intensity
    return round_stat(base * consistency_multiplier(all_activities, activity.date, settings))


def daily_activity_score(
    day_activities: Sequence[ActivityEntry],
    all_activities: Sequence[ActivityEntry],
    settings: Optional[AnalyticsSettings] = None,
) -> int:
    """Score all workouts of one day together.

    Args:
        day_activities: Workouts logged on the same day
        all_activities: Full history used for the consistency multiplier
        settings: Analytics settings

    Returns:
        Rounded score, 0 when there are no workouts
    """
    if not day_activities:
        return 0

    base = sum(a.duration_minutes * a.intensity for a in day_activities)
    multiplier = consistency_multiplier(all_activities, day_activities[0].date, settings)
    return round_stat(base * multiplier)


def group_activities_by_day(
    activities: Optional[Sequence[ActivityEntry]],
    all_activities: Optional[Sequence[ActivityEntry]] = None,
    settings: Optional[AnalyticsSettings] = None,
) -> List[DayActivities]:
    """Group workouts by day and compute daily aggregates.

    Args:
        activities: Workouts to group
        all_activities: History for the consistency multiplier, defaults to
            ``activities``
        settings: Analytics settings

    Returns:
        One DayActivities per day, oldest first
    """
    if not activities:
        return []
    history = activities if all_activities is None else all_activities

    by_day: Dict[date, List[ActivityEntry]] = {}
    for activity in activities:
        by_day.setdefault(activity.date, []).append(activity)

    days = []
    for day in sorted(by_day):
        day_activities = by_day[day]
        total_duration = sum(a.duration_minutes for a in day_activities)
        weighted_intensity = sum(a.intensity * a.duration_minutes for a in day_activities)
        days.append(DayActivities(
            date=day,
            activities=day_activities,
            total_score=daily_activity_score(day_activities, history, settings),
            total_duration=total_duration,
            avg_intensity=weighted_intensity / total_duration if total_duration > 0 else 0.0,
        ))
    return days
