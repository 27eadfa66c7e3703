"""Composite sleep score from personal baselines.

Each metric is turned into points with its z-score against the personal
baseline: 50 points is your average night, every standard deviation is worth
10 points, and the result is clamped to [0, 100]. Metrics where lower is
better (resting HR, awake %, movement) are inverted.

Categories (weights from settings):
- duration: sleep minutes
- heart_health: HRV low, HRV high, inverted resting HR
- sleep_quality: restorative %, inverted awake %
- restfulness: inverted movement count, sleep cycles

A category is the average of its available sub-metrics and is omitted when
none are available. The overall score is the weighted average of the
categories present.
"""

import logging
from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import AnalyticsSettings, get_settings
from ..models import SleepEntry
from .baselines import Baseline, MetricBaseline, estimate_baseline, metric_values
from .stats import round_stat

logger = logging.getLogger(__name__)

# (metric, inverted) per category
SCORE_CATEGORIES: Dict[str, Tuple[Tuple[str, bool], ...]] = {
    "duration": (("duration", False),),
    "heart_health": (("hrv_low", False), ("hrv_high", False), ("resting_hr", True)),
    "sleep_quality": (("restorative", False), ("awake_pct", True)),
    "restfulness": (("movement_count", True), ("sleep_cycles", False)),
}


@dataclass
class ScoreBreakdown:
    """Composite score with per-category points."""
    overall: Optional[int] = None
    duration: Optional[int] = None
    heart_health: Optional[int] = None
    sleep_quality: Optional[int] = None
    restfulness: Optional[int] = None
    components_available: int = 0
    components_total: int = len(SCORE_CATEGORIES)

    def to_dict(self) -> dict:
        return asdict(self)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def z_score(value: Optional[float], baseline: Optional[MetricBaseline]) -> Optional[float]:
    """Standard deviations between a value and its baseline mean."""
    if value is None or baseline is None:
        return None
    return (value - baseline.mean) / baseline.std


def to_points(
    z: float,
    invert: bool = False,
    settings: Optional[AnalyticsSettings] = None,
) -> float:
    """Map a z-score to points in [0, 100].

    Args:
        z: Z-score
        invert: True for metrics where lower is better
        settings: Analytics settings

    Returns:
        ``baseline_points + z * points_per_std``, clamped
    """
    settings = settings or get_settings()
    signed = -z if invert else z
    return clamp(settings.baseline_points + signed * settings.points_per_std)


def _category_points(
    values: Dict[str, Optional[float]],
    baseline: Baseline,
    metrics: Sequence[Tuple[str, bool]],
    settings: AnalyticsSettings,
) -> Optional[float]:
    points: List[float] = []
    for metric, invert in metrics:
        z = z_score(values.get(metric), baseline.get(metric))
        if z is not None:
            points.append(to_points(z, invert, settings))
    if not points:
        return None
    return sum(points) / len(points)


def calculate_sleep_score(
    entry: SleepEntry,
    baseline: Baseline,
    settings: Optional[AnalyticsSettings] = None,
) -> ScoreBreakdown:
    """Score one night against a personal baseline.

    Args:
        entry: Night to score
        baseline: Baseline built without this night
        settings: Analytics settings

    Returns:
        ScoreBreakdown; all scores are None when the baseline covers fewer
        than ``min_baseline_samples`` nights or no category is available
    """
    settings = settings or get_settings()

    if baseline.count < settings.min_baseline_samples:
        logger.debug(f"Baseline has {baseline.count} nights, sleep score unavailable")
        return ScoreBreakdown()

    values = metric_values(entry)
    categories: Dict[str, float] = {}
    for name, metrics in SCORE_CATEGORIES.items():
        points = _category_points(values, baseline, metrics, settings)
        if points is not None:
            categories[name] = points

    if not categories:
        return ScoreBreakdown()

    weights = settings.score_weights
    total_weight = sum(weights[name] for name in categories)
    weighted = sum(points * weights[name] for name, points in categories.items())

    return ScoreBreakdown(
        overall=round_stat(clamp(weighted / total_weight)),
        duration=round_stat(categories.get("duration")),
        heart_health=round_stat(categories.get("heart_health")),
        sleep_quality=round_stat(categories.get("sleep_quality")),
        restfulness=round_stat(categories.get("restfulness")),
        components_available=len(categories),
    )


def daily_sleep_score(
    day: date,
    entries: Sequence[SleepEntry],
    settings: Optional[AnalyticsSettings] = None,
) -> Optional[ScoreBreakdown]:
    """Score the night logged on a day against every other night.

    Returns:
        ScoreBreakdown, or None if no night is logged on that day
    """
    entry = next((e for e in entries if e.date == day), None)
    if entry is None:
        return None

    others = [e for e in entries if e is not entry]
    return calculate_sleep_score(entry, estimate_baseline(others, settings=settings), settings)
