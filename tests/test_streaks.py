"""Tests for weekly streaks and calendar weeks."""

from datetime import date

import pytest

from vitals_analytics.config import AnalyticsSettings
from vitals_analytics.metrics.streaks import (
    activities_in_week,
    build_month_week_data,
    calculate_streak,
    calendar_days,
    has_activity_in_week,
    month_weeks,
)

from conftest import TODAY

# TODAY is Thursday 2024-03-14; its week runs 2024-03-11 to 2024-03-17
MONDAY = date(2024, 3, 11)
TUESDAY = date(2024, 3, 12)
WEDNESDAY = date(2024, 3, 13)
SUNDAY = date(2024, 3, 17)

THIS_WEEK = date(2024, 3, 12)
LAST_WEEK = date(2024, 3, 6)
TWO_WEEKS_AGO = date(2024, 2, 28)
THREE_WEEKS_AGO = date(2024, 2, 20)


class TestCalculateStreak:
    """Tests for consecutive active weeks."""

    def test_no_activity(self):
        streak = calculate_streak([], TODAY)
        assert streak.current_streak == 0
        assert streak.streak_activities == 0

    def test_three_consecutive_weeks(self, make_activity):
        activities = [
            make_activity(date=THIS_WEEK),
            make_activity(date=LAST_WEEK),
            make_activity(date=LAST_WEEK),
            make_activity(date=TWO_WEEKS_AGO),
        ]
        streak = calculate_streak(activities, TODAY)
        assert streak.current_streak == 3
        assert streak.streak_activities == 4

    def test_gap_stops_streak(self, make_activity):
        activities = [
            make_activity(date=THIS_WEEK),
            make_activity(date=TWO_WEEKS_AGO),
            make_activity(date=THREE_WEEKS_AGO),
        ]
        assert calculate_streak(activities, TODAY).current_streak == 1

    def test_empty_current_week_late_in_week(self, make_activity):
        activities = [make_activity(date=LAST_WEEK), make_activity(date=TWO_WEEKS_AGO)]
        assert calculate_streak(activities, TODAY).current_streak == 0
        assert calculate_streak(activities, WEDNESDAY).current_streak == 0

    @pytest.mark.parametrize("today", [MONDAY, TUESDAY])
    def test_grace_early_in_week(self, make_activity, today):
        activities = [make_activity(date=LAST_WEEK), make_activity(date=TWO_WEEKS_AGO)]
        streak = calculate_streak(activities, today)
        assert streak.current_streak == 2
        assert streak.streak_activities == 2

    def test_grace_not_needed_with_current_activity(self, make_activity):
        activities = [make_activity(date=MONDAY), make_activity(date=LAST_WEEK)]
        assert calculate_streak(activities, TUESDAY).current_streak == 2

    def test_sunday_counts_in_current_week(self, make_activity):
        activities = [make_activity(date=SUNDAY), make_activity(date=LAST_WEEK)]
        assert calculate_streak(activities, SUNDAY).current_streak == 2

    def test_grace_days_from_settings(self, make_activity):
        settings = AnalyticsSettings(streak_grace_weekdays=[0, 1, 2, 3])
        activities = [make_activity(date=LAST_WEEK)]
        assert calculate_streak(activities, TODAY, settings).current_streak == 1

    def test_order_independent(self, make_activity):
        activities = [make_activity(date=TWO_WEEKS_AGO), make_activity(date=THIS_WEEK), make_activity(date=LAST_WEEK)]
        assert calculate_streak(activities, TODAY).current_streak == 3

    def test_to_dict(self, make_activity):
        data = calculate_streak([make_activity(date=THIS_WEEK)], TODAY).to_dict()
        assert data == {"current_streak": 1, "streak_activities": 1}


class TestWeekHelpers:
    """Tests for week membership."""

    def test_activities_in_week(self, make_activity):
        activities = [make_activity(date=MONDAY), make_activity(date=SUNDAY), make_activity(date=LAST_WEEK)]
        assert len(activities_in_week(activities, MONDAY, SUNDAY)) == 2
        assert has_activity_in_week(activities, MONDAY, SUNDAY)
        assert not has_activity_in_week(activities, date(2024, 3, 18), date(2024, 3, 24))


class TestMonthWeeks:
    """Tests for calendar week grids."""

    def test_month_weeks(self):
        weeks = month_weeks(2024, 3)
        assert [w.start for w in weeks] == [
            date(2024, 2, 26), date(2024, 3, 4), date(2024, 3, 11), date(2024, 3, 18), date(2024, 3, 25),
        ]
        assert weeks[-1].end == date(2024, 3, 31)
        assert all(w.start.weekday() == 0 and w.end.weekday() == 6 for w in weeks)

    def test_december_grid(self):
        weeks = month_weeks(2024, 12)
        assert weeks[0].start == date(2024, 11, 25)
        assert weeks[-1].end == date(2025, 1, 5)
        assert len(weeks) == 6

    def test_build_month_week_data(self, make_activity):
        activities = [make_activity(date=THIS_WEEK), make_activity(date=THIS_WEEK), make_activity(date=TWO_WEEKS_AGO)]
        weeks = build_month_week_data(activities, 2024, 3)

        assert [w.has_activity for w in weeks] == [True, False, True, False, False]
        assert len(weeks[2].entries) == 2
        assert weeks[2].to_dict()["start"] == "2024-03-11"

    def test_calendar_days(self):
        days = calendar_days(2024, 3)
        assert len(days) == 35
        assert days[0] == date(2024, 2, 26)
        assert days[-1] == date(2024, 3, 31)
