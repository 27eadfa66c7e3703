"""Quantitative analytics for personal sleep, activity and blood pressure logs."""

from vitals_analytics.config import AnalyticsSettings, get_settings
from vitals_analytics.dates import (
    TimeWindow,
    resolve_previous_range,
    resolve_range,
    week_bounds,
)
from vitals_analytics.exceptions import (
    EntryValidationError,
    ErrorCode,
    UnknownGuidelineError,
    VitalsAnalyticsError,
)
from vitals_analytics.models import (
    ActivityEntry,
    BloodPressureReading,
    HealthExport,
    SleepEntry,
    parse_entries,
)
from vitals_analytics.metrics import (
    calc_stats,
    calculate_effort_score,
    calculate_full_stats,
    calculate_sleep_score,
    calculate_streak,
    calculate_training_load,
    classify_bp,
    compare_periods,
    estimate_baseline,
    calculate_health_score,
    group_activities_by_day,
)

__version__ = "0.1.0"

__all__ = [
    "AnalyticsSettings",
    "get_settings",
    "TimeWindow",
    "resolve_range",
    "resolve_previous_range",
    "week_bounds",
    "ErrorCode",
    "VitalsAnalyticsError",
    "EntryValidationError",
    "UnknownGuidelineError",
    "SleepEntry",
    "ActivityEntry",
    "BloodPressureReading",
    "HealthExport",
    "parse_entries",
    "calc_stats",
    "calculate_full_stats",
    "classify_bp",
    "estimate_baseline",
    "calculate_sleep_score",
    "calculate_effort_score",
    "calculate_training_load",
    "calculate_streak",
    "compare_periods",
    "calculate_health_score",
    "group_activities_by_day",
]
