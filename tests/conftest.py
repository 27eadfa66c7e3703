"""Pytest configuration and fixtures."""

from datetime import date, timedelta
from typing import Any, Dict

import pytest

from vitals_analytics.config import AnalyticsSettings, get_settings
from vitals_analytics.models import ActivityEntry, BloodPressureReading, SleepEntry

# A Thursday
TODAY = date(2024, 3, 14)


def days_ago(n: int, today: date = TODAY) -> date:
    return today - timedelta(days=n)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from VITALS_* environment variables and cached settings."""
    import os

    for key in list(os.environ):
        if key.startswith("VITALS_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> AnalyticsSettings:
    return AnalyticsSettings()


@pytest.fixture
def make_sleep():
    """Factory for sleep entries with every metric unset by default."""
    counter = {"n": 0}

    def _make(**fields: Any) -> SleepEntry:
        counter["n"] += 1
        data: Dict[str, Any] = {"id": str(counter["n"]), "date": TODAY}
        data.update(fields)
        return SleepEntry(**data)

    return _make


@pytest.fixture
def make_activity():
    """Factory for activity entries (60 min, intensity 3, walking by default)."""
    counter = {"n": 0}

    def _make(**fields: Any) -> ActivityEntry:
        counter["n"] += 1
        data: Dict[str, Any] = {
            "id": str(counter["n"]),
            "date": TODAY,
            "activity_type": "walking",
            "duration_minutes": 60,
            "intensity": 3,
        }
        data.update(fields)
        return ActivityEntry(**data)

    return _make


@pytest.fixture
def make_reading():
    """Factory for blood pressure readings."""
    counter = {"n": 0}

    def _make(systolic=120, diastolic=80, pulse=None, **fields: Any) -> BloodPressureReading:
        counter["n"] += 1
        data: Dict[str, Any] = {
            "id": str(counter["n"]),
            "date": TODAY,
            "systolic": systolic,
            "diastolic": diastolic,
            "pulse": pulse,
        }
        data.update(fields)
        return BloodPressureReading(**data)

    return _make


@pytest.fixture
def baseline_nights(make_sleep):
    """Four typical nights used as a personal baseline."""
    return [
        make_sleep(
            date=days_ago(4), duration_minutes=450, hrv_low=32, hrv_high=52, resting_hr=50,
            deep_sleep_pct=20, rem_sleep_pct=22, awake_pct=7, movement_count=10,
            sleep_cycles_full=4, sleep_cycles_partial=1,
        ),
        make_sleep(
            date=days_ago(3), duration_minutes=480, hrv_low=35, hrv_high=55, resting_hr=48,
            deep_sleep_pct=22, rem_sleep_pct=24, awake_pct=6, movement_count=8,
            sleep_cycles_full=5, sleep_cycles_partial=0,
        ),
        make_sleep(
            date=days_ago(2), duration_minutes=420, hrv_low=30, hrv_high=50, resting_hr=52,
            deep_sleep_pct=18, rem_sleep_pct=20, awake_pct=8, movement_count=12,
            sleep_cycles_full=4, sleep_cycles_partial=0,
        ),
        make_sleep(
            date=days_ago(1), duration_minutes=465, hrv_low=33, hrv_high=53, resting_hr=49,
            deep_sleep_pct=21, rem_sleep_pct=23, awake_pct=7, movement_count=9,
            sleep_cycles_full=4, sleep_cycles_partial=1,
        ),
    ]
