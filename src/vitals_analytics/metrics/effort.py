"""Per-workout effort score from heart-rate zone time.

Effort is a zone-weighted sum of minutes (a TRIMP-style impulse):

    effort = sum(zone_minutes[i] * zone_multiplier[i])

When a workout carries measured zone minutes they are used directly. Without
them, zone minutes are estimated by spreading the duration over the zones
according to the logged intensity (1-5), and the result is scaled by an
activity-type multiplier since racquet sports load the body harder than
walking at the same heart rate.

Two zone multiplier tables are available:
- ``edwards``: linear 1-5 (Edwards summated heart-rate zones)
- ``banister``: exponential weighting from Banister's TRIMP curve evaluated
  at each zone's midpoint of heart rate reserve, normalized to zone 1
"""

import logging
import math
from typing import Any, Dict, List, Optional

from ..config import AnalyticsSettings, get_settings
from ..models import ActivityEntry

logger = logging.getLogger(__name__)

# Zone midpoints as a fraction of heart rate reserve
ZONE_MIDPOINTS = (0.55, 0.65, 0.75, 0.85, 0.95)


def _banister_weight(hr_fraction: float, a: float = 0.64, b: float = 1.92) -> float:
    """Banister impulse per minute at a fraction of heart rate reserve."""
    return hr_fraction * a * math.exp(b * hr_fraction)


def _banister_table() -> List[float]:
    base = _banister_weight(ZONE_MIDPOINTS[0])
    return [round(_banister_weight(x) / base, 2) for x in ZONE_MIDPOINTS]


ZONE_MULTIPLIER_TABLES: Dict[str, List[float]] = {
    "edwards": [1.0, 2.0, 3.0, 4.0, 5.0],
    "banister": _banister_table(),
}


def zone_multipliers(weighting: Optional[str] = None, settings: Optional[AnalyticsSettings] = None) -> List[float]:
    """Zone 1-5 multipliers for a weighting scheme (configured one by default)."""
    settings = settings or get_settings()
    key = weighting or settings.zone_weighting
    table = ZONE_MULTIPLIER_TABLES.get(key)
    if table is None:
        logger.warning(f"Unknown zone weighting '{key}', using edwards")
        table = ZONE_MULTIPLIER_TABLES["edwards"]
    return list(table)


def has_hr_zone_data(activity: ActivityEntry) -> bool:
    """True if any zone carries measured minutes."""
    return any(minutes > 0 for minutes in activity.zone_minutes)


def estimate_zone_minutes(
    activity: ActivityEntry,
    settings: Optional[AnalyticsSettings] = None,
) -> List[float]:
    """Spread the duration over zones by the intensity distribution.

    Returns:
        Estimated minutes for zones 1-5 (all zero for an unknown intensity)
    """
    settings = settings or get_settings()
    shares = settings.intensity_zone_distribution.get(activity.intensity)
    if shares is None:
        logger.debug(f"No zone distribution for intensity {activity.intensity}")
        return [0.0] * 5
    return [share * activity.duration_minutes for share in shares]


def weighted_zone_sum(zone_minutes: List[float], multipliers: List[float]) -> float:
    return sum(minutes * weight for minutes, weight in zip(zone_minutes, multipliers))


def calculate_effort_score(
    activity: ActivityEntry,
    settings: Optional[AnalyticsSettings] = None,
) -> float:
    """Effort score of a single workout.

    Args:
        activity: Logged workout
        settings: Analytics settings

    Returns:
        Unitless effort score (0 for an empty workout)
    """
    settings = settings or get_settings()
    multipliers = zone_multipliers(settings=settings)

    if has_hr_zone_data(activity):
        return weighted_zone_sum(activity.zone_minutes, multipliers)

    estimated = weighted_zone_sum(estimate_zone_minutes(activity, settings), multipliers)
    type_multiplier = settings.activity_type_multipliers.get(
        activity.activity_type.value,
        settings.activity_type_multipliers.get("other", 1.0),
    )
    return estimated * type_multiplier


def effort_level(score: float, settings: Optional[AnalyticsSettings] = None) -> str:
    """Categorical bucket of an effort score."""
    settings = settings or get_settings()
    return bucket(score, settings.effort_levels)


def bucket(value: float, levels: List) -> Any:
    """Value of the highest level whose lower bound is at or below value."""
    label = levels[0][1]
    for lower, name in levels:
        if value >= lower:
            label = name
    return label
