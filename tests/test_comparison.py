"""Tests for period-over-period comparison."""

from vitals_analytics.metrics.blood_pressure import calculate_full_stats
from vitals_analytics.metrics.comparison import (
    compare_periods,
    filter_by_time_of_day,
    metric_change,
    previous_period_readings,
)
from vitals_analytics.metrics.sleep import calculate_sleep_stats

from conftest import TODAY, days_ago


class TestComparePeriods:
    """Tests for current vs previous period summaries."""

    def test_week_over_week(self, make_sleep):
        entries = [
            make_sleep(date=days_ago(1), duration_minutes=480),
            make_sleep(date=days_ago(3), duration_minutes=420),
            make_sleep(date=days_ago(8), duration_minutes=400),
            make_sleep(date=days_ago(12), duration_minutes=410),
            make_sleep(date=days_ago(20), duration_minutes=300),
        ]
        comparison = compare_periods(entries, "1w", TODAY, calculate_sleep_stats)

        assert comparison.current.count == 2
        assert comparison.current.duration.avg == 450
        assert comparison.previous.count == 2
        assert comparison.previous.duration.avg == 405
        assert metric_change(comparison.current.duration.avg, comparison.previous.duration.avg) == 45

    def test_all_has_no_previous(self, make_sleep):
        entries = [make_sleep(date=days_ago(n), duration_minutes=450) for n in (1, 40, 400)]
        comparison = compare_periods(entries, "all", TODAY, calculate_sleep_stats)

        assert comparison.current.count == 3
        assert comparison.previous is None
        assert not comparison.has_previous
        assert comparison.previous_window.start is None

    def test_empty_previous_period(self, make_reading):
        readings = [make_reading(date=days_ago(2))]
        comparison = compare_periods(readings, "1m", TODAY, calculate_full_stats)
        assert comparison.current.count == 1
        assert comparison.previous is None

    def test_to_dict(self, make_reading):
        readings = [make_reading(120, 80, date=days_ago(1)), make_reading(130, 90, date=days_ago(9))]
        data = compare_periods(readings, "1w", TODAY, calculate_full_stats).to_dict()

        assert data["current_window"] == {"start": "2024-03-08", "end": "2024-03-14"}
        assert data["previous_window"] == {"start": "2024-03-01", "end": "2024-03-08"}
        assert data["current"]["systolic"]["avg"] == 120
        assert data["previous"]["diastolic"]["max"] == 90


class TestMetricChange:
    """Tests for signed change."""

    def test_change(self):
        assert metric_change(125, 130) == -5

    def test_missing_side(self):
        assert metric_change(None, 130) is None
        assert metric_change(125, None) is None


class TestPreviousPeriodReadings:
    """Tests for previous-period blood pressure readings."""

    def test_time_of_day_filter(self, make_reading):
        readings = [
            make_reading(date=days_ago(8), time_of_day="morning"),
            make_reading(date=days_ago(9), time_of_day="evening"),
            make_reading(date=days_ago(10)),
            make_reading(date=days_ago(2), time_of_day="morning"),
        ]
        assert len(previous_period_readings(readings, "1w", TODAY)) == 3
        morning = previous_period_readings(readings, "1w", TODAY, "morning")
        assert [r.date for r in morning] == [days_ago(8)]

    def test_all_range(self, make_reading):
        assert previous_period_readings([make_reading(date=days_ago(8))], "all", TODAY) == []

    def test_no_readings(self):
        assert previous_period_readings(None, "1w", TODAY) == []


class TestFilterByTimeOfDay:
    """Tests for the time-of-day reading filter."""

    def test_filter(self, make_reading):
        readings = [
            make_reading(time_of_day="morning"),
            make_reading(time_of_day="evening"),
            make_reading(),
        ]
        assert len(filter_by_time_of_day(readings, "all")) == 3
        assert [r.time_of_day.value for r in filter_by_time_of_day(readings, "evening")] == ["evening"]

    def test_no_readings(self):
        assert filter_by_time_of_day(None, "morning") == []
