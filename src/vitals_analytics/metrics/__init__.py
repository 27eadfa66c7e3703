"""Health metrics calculations."""

from .stats import (
    Stats,
    avg,
    avg_rounded,
    calc_stats,
    calc_stats_rounded,
    round_stat,
    standard_deviation,
)
from .blood_pressure import (
    BP_GUIDELINES,
    BPFullStats,
    BPGuideline,
    BPStats,
    BPThreshold,
    BPTrend,
    calculate_bp_stats,
    calculate_daily_bp_average,
    calculate_full_stats,
    classify_bp,
    get_bp_trend,
    get_guideline,
    mean_arterial_pressure,
    pulse_pressure,
    reference_lines,
)
from .sleep import (
    SleepStats,
    calculate_sleep_stats,
    restorative_pct,
    sleep_cycles,
)
from .baselines import (
    TRACKED_METRICS,
    Baseline,
    MetricBaseline,
    calculate_metric_baseline,
    estimate_baseline,
    metric_values,
)
from .scoring import (
    ScoreBreakdown,
    calculate_sleep_score,
    daily_sleep_score,
    to_points,
    z_score,
)
from .effort import (
    ZONE_MULTIPLIER_TABLES,
    calculate_effort_score,
    effort_level,
    estimate_zone_minutes,
    has_hr_zone_data,
    zone_multipliers,
)
from .activity import (
    DayActivities,
    activity_score,
    consistency_multiplier,
    daily_activity_score,
    group_activities_by_day,
)
from .load import (
    TrainingLoadPoint,
    TrainingLoadState,
    calculate_training_load,
    daily_efforts,
    training_load_level,
    training_load_series,
)
from .streaks import (
    StreakData,
    WeekWindow,
    activities_in_week,
    build_month_week_data,
    calculate_streak,
    calendar_days,
    has_activity_in_week,
    month_weeks,
)
from .comparison import (
    PeriodComparison,
    compare_periods,
    filter_by_time_of_day,
    metric_change,
    previous_period_readings,
)
from .health_score import (
    BPScore,
    HealthInsights,
    HealthScore,
    SleepHealthScore,
    calculate_bp_score,
    calculate_health_score,
    calculate_sleep_health_score,
    health_insights,
    health_score_band,
)

__all__ = [
    # Aggregate statistics
    "Stats",
    "avg",
    "avg_rounded",
    "calc_stats",
    "calc_stats_rounded",
    "round_stat",
    "standard_deviation",
    # Blood pressure
    "BP_GUIDELINES",
    "BPFullStats",
    "BPGuideline",
    "BPStats",
    "BPThreshold",
    "BPTrend",
    "calculate_bp_stats",
    "calculate_daily_bp_average",
    "calculate_full_stats",
    "classify_bp",
    "get_bp_trend",
    "get_guideline",
    "mean_arterial_pressure",
    "pulse_pressure",
    "reference_lines",
    # Sleep
    "SleepStats",
    "calculate_sleep_stats",
    "restorative_pct",
    "sleep_cycles",
    # Baselines
    "TRACKED_METRICS",
    "Baseline",
    "MetricBaseline",
    "calculate_metric_baseline",
    "estimate_baseline",
    "metric_values",
    # Scoring
    "ScoreBreakdown",
    "calculate_sleep_score",
    "daily_sleep_score",
    "to_points",
    "z_score",
    # Effort
    "ZONE_MULTIPLIER_TABLES",
    "calculate_effort_score",
    "effort_level",
    "estimate_zone_minutes",
    "has_hr_zone_data",
    "zone_multipliers",
    # Daily activity scores
    "DayActivities",
    "activity_score",
    "consistency_multiplier",
    "daily_activity_score",
    "group_activities_by_day",
    # Training load
    "TrainingLoadPoint",
    "TrainingLoadState",
    "calculate_training_load",
    "daily_efforts",
    "training_load_level",
    "training_load_series",
    # Streaks
    "StreakData",
    "WeekWindow",
    "activities_in_week",
    "build_month_week_data",
    "calculate_streak",
    "calendar_days",
    "has_activity_in_week",
    "month_weeks",
    # Period comparison
    "PeriodComparison",
    "compare_periods",
    "filter_by_time_of_day",
    "metric_change",
    "previous_period_readings",
    # Health score
    "BPScore",
    "HealthInsights",
    "HealthScore",
    "SleepHealthScore",
    "calculate_bp_score",
    "calculate_health_score",
    "calculate_sleep_health_score",
    "health_insights",
    "health_score_band",
]
