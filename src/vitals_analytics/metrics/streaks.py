"""Weekly activity streaks and calendar week grids.

Weeks run Monday to Sunday. A streak is the number of consecutive weeks,
counted back from the current one, with at least one logged activity.
Early in a week (Monday or Tuesday by default) an empty current week does not
break the streak; counting starts from the previous week instead.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional, Sequence

from ..config import AnalyticsSettings, get_settings
from ..dates import week_bounds
from ..models import ActivityEntry

logger = logging.getLogger(__name__)

ONE_WEEK = timedelta(days=7)


@dataclass
class WeekWindow:
    """One Monday-Sunday week and its activities."""
    start: date
    end: date
    has_activity: bool = False
    entries: List[ActivityEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "has_activity": self.has_activity,
            "entries": [e.model_dump(mode="json") for e in self.entries],
        }


@dataclass
class StreakData:
    """Current weekly streak."""
    current_streak: int = 0  # consecutive weeks with activity
    streak_activities: int = 0  # activities within those weeks

    def to_dict(self) -> dict:
        return {
            "current_streak": self.current_streak,
            "streak_activities": self.streak_activities,
        }


def activities_in_week(
    activities: Sequence[ActivityEntry],
    week_start: date,
    week_end: date,
) -> List[ActivityEntry]:
    """Activities dated within [week_start, week_end]."""
    return [a for a in activities if week_start <= a.date <= week_end]


def has_activity_in_week(
    activities: Sequence[ActivityEntry],
    week_start: date,
    week_end: date,
) -> bool:
    return any(week_start <= a.date <= week_end for a in activities)


def calculate_streak(
    activities: Optional[Sequence[ActivityEntry]],
    today: date,
    settings: Optional[AnalyticsSettings] = None,
) -> StreakData:
    """Count consecutive active weeks ending with today's week.

    Args:
        activities: Activity history in any order
        today: Reference day
        settings: Analytics settings

    Returns:
        StreakData with the streak length and the activities it covers
    """
    if not activities:
        return StreakData()

    settings = settings or get_settings()
    week_start, week_end = week_bounds(today)

    if (
        today.weekday() in settings.streak_grace_weekdays
        and not has_activity_in_week(activities, week_start, week_end)
    ):
        week_start -= ONE_WEEK
        week_end -= ONE_WEEK

    streak = 0
    streak_activities = 0
    while True:
        week = activities_in_week(activities, week_start, week_end)
        if not week:
            break
        streak += 1
        streak_activities += len(week)
        week_start -= ONE_WEEK
        week_end -= ONE_WEEK

    logger.debug(f"Streak as of {today}: {streak} weeks, {streak_activities} activities")
    return StreakData(current_streak=streak, streak_activities=streak_activities)


def month_weeks(year: int, month: int) -> List[WeekWindow]:
    """Weeks overlapping a month (month is 1-12), starting at the first Monday on or before the 1st."""
    first_day = date(year, month, 1)
    last_day = date(year + month // 12, month % 12 + 1, 1) - timedelta(days=1)

    weeks: List[WeekWindow] = []
    week_start, _ = week_bounds(first_day)
    while week_start <= last_day:
        weeks.append(WeekWindow(start=week_start, end=week_start + timedelta(days=6)))
        week_start += ONE_WEEK
    return weeks


def build_month_week_data(
    activities: Sequence[ActivityEntry],
    year: int,
    month: int,
) -> List[WeekWindow]:
    """Weeks of a month with their activities filled in."""
    weeks = []
    for week in month_weeks(year, month):
        entries = activities_in_week(activities, week.start, week.end)
        weeks.append(WeekWindow(start=week.start, end=week.end, has_activity=bool(entries), entries=entries))
    return weeks


def calendar_days(year: int, month: int) -> List[date]:
    """Every day of the Monday-Sunday grid covering a month."""
    weeks = month_weeks(year, month)
    grid_start, grid_end = weeks[0].start, weeks[-1].end
    return [grid_start + timedelta(days=i) for i in range((grid_end - grid_start).days + 1)]
