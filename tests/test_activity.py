"""Tests for daily activity scores."""

import pytest

from vitals_analytics.config import AnalyticsSettings
from vitals_analytics.metrics.activity import (
    DayActivities,
    activity_score,
    consistency_multiplier,
    daily_activity_score,
    group_activities_by_day,
)

from conftest import TODAY, days_ago


class TestConsistencyMultiplier:
    """Tests for the 7-day consistency multiplier."""

    @pytest.mark.parametrize(
        "workouts,expected",
        [(0, 0.8), (1, 0.8), (2, 0.9), (3, 1.0), (4, 1.1), (6, 1.1)],
    )
    def test_multiplier_by_workout_count(self, make_activity, workouts, expected):
        history = [make_activity(date=days_ago(i + 1)) for i in range(workouts)]
        assert consistency_multiplier(history, TODAY) == expected

    def test_window_excludes_reference_day(self, make_activity):
        history = [
            make_activity(date=TODAY),
            make_activity(date=TODAY),
            make_activity(date=days_ago(8)),
        ]
        assert consistency_multiplier(history, TODAY) == 0.8

    def test_window_includes_seventh_day_back(self, make_activity):
        history = [make_activity(date=days_ago(7)), make_activity(date=days_ago(1))]
        assert consistency_multiplier(history, TODAY) == 0.9

    def test_multipliers_from_settings(self, make_activity):
        settings = AnalyticsSettings(consistency_multipliers=[(0, 1.0), (1, 2.0)])
        history = [make_activity(date=days_ago(3))]
        assert consistency_multiplier(history, TODAY, settings) == 2.0


class TestActivityScore:
    """Tests for single-workout and daily scores."""

    def test_activity_score(self, make_activity):
        workout = make_activity(duration_minutes=60, intensity=3)
        history = [make_activity(date=days_ago(i)) for i in (1, 2, 3)] + [workout]
        assert activity_score(workout, history) == 180

    def test_activity_score_rounds_half_up(self, make_activity):
        workout = make_activity(duration_minutes=25, intensity=1)
        # 25 * 0.9 = 22.5
        history = [make_activity(date=days_ago(1)), make_activity(date=days_ago(2))]
        assert activity_score(workout, history) == 23

    def test_daily_score_sums_workouts(self, make_activity):
        day = [
            make_activity(duration_minutes=30, intensity=2),
            make_activity(duration_minutes=45, intensity=4),
        ]
        # (60 + 180) * 0.8
        assert daily_activity_score(day, day) == 192

    def test_daily_score_empty(self, make_activity):
        assert daily_activity_score([], [make_activity()]) == 0


class TestGroupActivitiesByDay:
    """Tests for per-day aggregates."""

    def test_groups_sorted_oldest_first(self, make_activity):
        activities = [
            make_activity(date=TODAY, duration_minutes=30, intensity=2),
            make_activity(date=days_ago(2), duration_minutes=60, intensity=3),
            make_activity(date=TODAY, duration_minutes=90, intensity=4),
        ]
        days = group_activities_by_day(activities)

        assert [d.date for d in days] == [days_ago(2), TODAY]
        assert len(days[1].activities) == 2
        assert days[1].total_duration == 120
        assert days[1].avg_intensity == pytest.approx(3.5)

    def test_scores_use_full_history(self, make_activity):
        history = [make_activity(date=days_ago(i)) for i in (1, 2, 3, 4)]
        today = make_activity(date=TODAY, duration_minutes=50, intensity=2)

        alone = group_activities_by_day([today])
        with_history = group_activities_by_day([today], history + [today])

        assert alone[0].total_score == 80
        assert with_history[0].total_score == 110

    def test_zero_duration_day(self, make_activity):
        days = group_activities_by_day([make_activity(duration_minutes=0)])
        assert days[0].avg_intensity == 0
        assert days[0].total_score == 0

    def test_empty(self):
        assert group_activities_by_day([]) == []
        assert group_activities_by_day(None) == []

    def test_to_dict(self, make_activity):
        day = group_activities_by_day([make_activity(duration_minutes=45, intensity=2)])[0]
        data = day.to_dict()
        assert data["date"] == TODAY.isoformat()
        assert data["total_score"] == 72
        assert data["activities"][0]["activity_type"] == "walking"

    def test_default_day(self):
        assert DayActivities(date=TODAY).to_dict()["activities"] == []
