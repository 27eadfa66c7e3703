"""Configuration settings for the vitals analytics layer.

Every heuristic constant used by the scoring code lives here so it can be
tuned per deployment through ``VITALS_*`` environment variables (or a
``.env`` file) without touching the algorithms. Changing a default is a
product decision.
"""

from functools import lru_cache
from typing import Dict, List, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

SCORE_CATEGORY_NAMES = ("duration", "heart_health", "sleep_quality", "restfulness")


class AnalyticsSettings(BaseSettings):
    """Analytics settings loaded from environment variables."""

    # Personal baselines
    min_baseline_samples: int = Field(default=3, ge=1)

    # Z-score to points mapping: 50 = personal average, 10 points per std
    baseline_points: float = 50.0
    points_per_std: float = Field(default=10.0, gt=0)

    # Composite sleep score category weights
    score_weights: Dict[str, float] = {
        "duration": 1.5,
        "heart_health": 1.5,
        "sleep_quality": 2.0,
        "restfulness": 1.0,
    }

    # Effort score
    zone_weighting: str = "edwards"  # 'edwards' (linear) or 'banister' (exponential)
    intensity_zone_distribution: Dict[int, List[float]] = {
        1: [0.60, 0.30, 0.10, 0.00, 0.00],
        2: [0.30, 0.45, 0.20, 0.05, 0.00],
        3: [0.10, 0.30, 0.40, 0.15, 0.05],
        4: [0.05, 0.15, 0.30, 0.35, 0.15],
        5: [0.00, 0.05, 0.20, 0.40, 0.35],
    }
    activity_type_multipliers: Dict[str, float] = {
        "walking": 0.8,
        "pickleball": 1.1,
        "badminton": 1.2,
        "other": 1.0,
    }
    # (lower bound, label), ascending
    effort_levels: List[Tuple[float, str]] = [
        (0.0, "light"),
        (60.0, "moderate"),
        (120.0, "hard"),
        (200.0, "very_hard"),
    ]

    # Training load
    load_decay_rate: float = Field(default=0.93, gt=0, lt=1)
    load_levels: List[Tuple[float, str]] = [
        (0.0, "low"),
        (200.0, "moderate"),
        (500.0, "high"),
        (900.0, "very_high"),
    ]
    trend_rising_pct: float = 5.0
    trend_declining_pct: float = 3.0

    # Daily activity score: (workouts in the previous 7 days, multiplier), ascending
    consistency_multipliers: List[Tuple[float, float]] = [
        (0, 0.8),
        (2, 0.9),
        (3, 1.0),
        (4, 1.1),
    ]

    # Weekly streaks: weekdays (Monday=0) on which an empty current week is forgiven
    streak_grace_weekdays: List[int] = [0, 1]

    # Blood pressure
    default_bp_guideline: str = "htn_canada_2025"

    # Composite health score: blood pressure weight (sleep gets the rest), and a
    # cap applied when either part falls below the critical score
    health_bp_weight: float = Field(default=0.5, ge=0, le=1)
    health_critical_score: float = 35.0
    health_critical_cap: float = 50.0

    @field_validator("intensity_zone_distribution")
    @classmethod
    def validate_distribution(cls, value: Dict[int, List[float]]) -> Dict[int, List[float]]:
        """Each intensity row must cover the five zones and sum to 1."""
        for intensity, shares in value.items():
            if len(shares) != 5:
                raise ValueError(f"intensity {intensity}: expected 5 zone shares, got {len(shares)}")
            if abs(sum(shares) - 1.0) > 1e-6:
                raise ValueError(f"intensity {intensity}: zone shares must sum to 1")
        return value

    @field_validator("score_weights")
    @classmethod
    def validate_score_weights(cls, value: Dict[str, float]) -> Dict[str, float]:
        """Weights must name every score category and be positive."""
        if set(value) != set(SCORE_CATEGORY_NAMES):
            raise ValueError(f"score weights must cover exactly {list(SCORE_CATEGORY_NAMES)}")
        for name, weight in value.items():
            if weight <= 0:
                raise ValueError(f"score weight for {name} must be positive")
        return value

    @field_validator("effort_levels", "load_levels", "consistency_multipliers")
    @classmethod
    def validate_levels(cls, value: List[Tuple[float, str]]) -> List[Tuple[float, str]]:
        """Level tables must be non-empty and sorted by lower bound."""
        if not value:
            raise ValueError("level table must not be empty")
        bounds = [bound for bound, _ in value]
        if bounds != sorted(bounds):
            raise ValueError("level table must be sorted by lower bound")
        return value

    class Config:
        env_prefix = "VITALS_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> AnalyticsSettings:
    """Get cached settings instance."""
    return AnalyticsSettings()
