"""Tests for aggregate statistics and sleep summaries."""

import pytest

from vitals_analytics.metrics.sleep import calculate_sleep_stats, restorative_pct, sleep_cycles
from vitals_analytics.metrics.stats import (
    Stats,
    avg,
    avg_rounded,
    calc_stats,
    calc_stats_rounded,
    round_stat,
    standard_deviation,
)


class TestRounding:
    """Tests for the rounding used in every displayed statistic."""

    @pytest.mark.parametrize(
        "value,expected",
        [(2.5, 3), (3.5, 4), (2.4999, 2), (-2.5, -2), (-2.6, -3), (82.333, 82), (0.0, 0)],
    )
    def test_round_half_up(self, value, expected):
        assert round_stat(value) == expected

    def test_none_passes_through(self):
        assert round_stat(None) is None


class TestAverages:
    """Tests for averages over sparse values."""

    def test_avg_skips_missing_values(self):
        assert avg([10, None, 20]) == 15

    def test_zero_is_a_value(self):
        assert avg([0, 10]) == 5

    def test_empty(self):
        assert avg([]) is None
        assert avg([None, None]) is None
        assert avg_rounded([]) is None

    def test_avg_rounded(self):
        assert avg_rounded([80, 85, 82]) == 82


class TestCalcStats:
    """Tests for min/max/avg aggregation."""

    def test_basic(self):
        assert calc_stats([120, 130, 125]) == Stats(min=120, max=130, avg=125)

    def test_empty_is_all_none(self):
        stats = calc_stats([])
        assert stats.min is None and stats.max is None and stats.avg is None

    @pytest.mark.parametrize(
        "values",
        [[1], [5, 5, 5], [-3, 0, 7.5], [100, 1, 50, 49.9], [0.1, 0.2, 0.3]],
    )
    def test_avg_between_min_and_max(self, values):
        stats = calc_stats(values)
        assert stats.min <= stats.avg <= stats.max

    def test_rounded_only_rounds_average(self):
        stats = calc_stats_rounded([38.5, 46, 42])
        assert stats.min == 38.5
        assert stats.max == 46
        assert stats.avg == 42

    def test_to_dict(self):
        assert calc_stats([1, 3]).to_dict() == {"min": 1, "max": 3, "avg": 2}


class TestStandardDeviation:
    """Tests for population standard deviation."""

    def test_population_std(self):
        assert standard_deviation([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)

    def test_fewer_than_two_values(self):
        assert standard_deviation([5]) == 0
        assert standard_deviation([]) == 0


class TestSleepStats:
    """Tests for sleep summaries."""

    def test_empty(self):
        assert calculate_sleep_stats([]) is None

    def test_restorative_stats(self, make_sleep):
        entries = [
            make_sleep(deep_sleep_pct=18, rem_sleep_pct=20),
            make_sleep(deep_sleep_pct=22, rem_sleep_pct=24),
            make_sleep(deep_sleep_pct=20, rem_sleep_pct=22),
        ]
        stats = calculate_sleep_stats(entries)
        assert stats.count == 3
        assert stats.restorative_pct == Stats(min=38, max=46, avg=42)

    def test_each_metric_uses_its_own_values(self, make_sleep):
        entries = [make_sleep(hrv_low=30), make_sleep(hrv_high=55)]
        stats = calculate_sleep_stats(entries)
        assert stats.hrv_low == Stats(min=30, max=30, avg=30)
        assert stats.hrv_high == Stats(min=55, max=55, avg=55)
        assert stats.resting_hr == Stats()

    def test_duration_prefers_total_sleep(self, make_sleep):
        entries = [
            make_sleep(duration_minutes=480, total_sleep_minutes=430),
            make_sleep(sleep_start="23:00", sleep_end="06:30"),
        ]
        stats = calculate_sleep_stats(entries)
        assert stats.duration == Stats(min=430, max=450, avg=440)


class TestDerivedSleepMetrics:
    """Tests for restorative % and sleep cycles."""

    def test_restorative_with_one_half_missing(self, make_sleep):
        assert restorative_pct(make_sleep(deep_sleep_pct=18)) == 18
        assert restorative_pct(make_sleep(rem_sleep_pct=21)) == 21

    def test_restorative_absent(self, make_sleep):
        assert restorative_pct(make_sleep()) is None

    def test_sleep_cycles(self, make_sleep):
        assert sleep_cycles(make_sleep(sleep_cycles_full=4, sleep_cycles_partial=1)) == 4.5
        assert sleep_cycles(make_sleep(sleep_cycles_partial=2)) == 1.0
        assert sleep_cycles(make_sleep()) is None
