"""Tests for workout effort scores."""

import pytest

from vitals_analytics.config import AnalyticsSettings
from vitals_analytics.metrics.effort import (
    ZONE_MULTIPLIER_TABLES,
    calculate_effort_score,
    effort_level,
    estimate_zone_minutes,
    has_hr_zone_data,
    zone_multipliers,
)


class TestZoneMultipliers:
    """Tests for zone weighting tables."""

    @pytest.mark.parametrize("weighting", sorted(ZONE_MULTIPLIER_TABLES))
    def test_strictly_increasing(self, weighting):
        table = zone_multipliers(weighting)
        assert len(table) == 5
        assert all(a < b for a, b in zip(table, table[1:]))
        assert table[4] >= 3 * table[0]

    def test_edwards_is_default(self):
        assert zone_multipliers() == [1.0, 2.0, 3.0, 4.0, 5.0]

    def test_banister_is_exponential(self):
        table = zone_multipliers("banister")
        assert table[0] == 1.0
        assert table[4] == pytest.approx(3.72, abs=0.01)
        # Gaps widen with intensity
        gaps = [b - a for a, b in zip(table, table[1:])]
        assert gaps == sorted(gaps)

    def test_unknown_weighting_falls_back(self):
        assert zone_multipliers("nope") == ZONE_MULTIPLIER_TABLES["edwards"]


class TestMeasuredEffort:
    """Tests for effort from recorded zone minutes."""

    def test_weighted_zone_sum(self, make_activity):
        activity = make_activity(zone1_minutes=10, zone3_minutes=20)
        assert has_hr_zone_data(activity)
        assert calculate_effort_score(activity) == pytest.approx(70)

    def test_activity_type_not_applied_to_measured_zones(self, make_activity):
        walk = make_activity(activity_type="walking", zone4_minutes=15)
        match = make_activity(activity_type="badminton", zone4_minutes=15)
        assert calculate_effort_score(walk) == calculate_effort_score(match) == pytest.approx(60)

    def test_banister_weighting_from_settings(self, make_activity):
        settings = AnalyticsSettings(zone_weighting="banister")
        activity = make_activity(zone5_minutes=10)
        assert calculate_effort_score(activity, settings) == pytest.approx(37.2, abs=0.1)

    def test_all_zero_zones_use_estimate(self, make_activity):
        activity = make_activity(zone1_minutes=0, zone2_minutes=0)
        assert not has_hr_zone_data(activity)
        assert calculate_effort_score(activity) > 0


class TestEstimatedEffort:
    """Tests for effort estimated from duration and intensity."""

    def test_zone_estimate(self, make_activity):
        minutes = estimate_zone_minutes(make_activity(duration_minutes=60, intensity=3))
        assert minutes == pytest.approx([6, 18, 24, 9, 3])

    def test_walking_reference(self, make_activity):
        # (6*1 + 18*2 + 24*3 + 9*4 + 3*5) * 0.8
        activity = make_activity(activity_type="walking", duration_minutes=60, intensity=3)
        assert calculate_effort_score(activity) == pytest.approx(132)

    def test_racquet_sports_weigh_more_than_walking(self, make_activity):
        walk = calculate_effort_score(make_activity(activity_type="walking"))
        pickleball = calculate_effort_score(make_activity(activity_type="pickleball"))
        badminton = calculate_effort_score(make_activity(activity_type="badminton"))
        assert walk < pickleball < badminton
        assert badminton == pytest.approx(198)

    def test_higher_intensity_is_harder(self, make_activity):
        scores = [calculate_effort_score(make_activity(intensity=i)) for i in range(1, 6)]
        assert scores == sorted(scores)
        assert scores[0] < scores[-1]

    def test_unknown_type_uses_other_multiplier(self, make_activity):
        yoga = make_activity(activity_type="yoga")
        other = make_activity(activity_type="other")
        assert calculate_effort_score(yoga) == calculate_effort_score(other) == pytest.approx(165)

    def test_zero_duration(self, make_activity):
        assert calculate_effort_score(make_activity(duration_minutes=0)) == 0


class TestEffortLevel:
    """Tests for effort buckets."""

    @pytest.mark.parametrize(
        "score,expected",
        [(0, "light"), (59.9, "light"), (60, "moderate"), (132, "hard"), (250, "very_hard")],
    )
    def test_levels(self, score, expected):
        assert effort_level(score) == expected
