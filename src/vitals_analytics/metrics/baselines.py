"""Personal baseline estimation for sleep metrics.

Scores compare a night against *your* history, not population norms. A
baseline is the mean and population standard deviation of each tracked
metric over a set of past nights.

Key rules:
- Each metric collects its own non-null values, so sparse metrics still get
  a baseline once enough nights carry them
- Fewer than ``min_baseline_samples`` values -> no baseline for that metric
- A zero spread is replaced by 1 so z-scores stay finite
"""

import logging
import math
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Sequence

from ..config import AnalyticsSettings, get_settings
from ..models import SleepEntry
from .sleep import restorative_pct, sleep_cycles

logger = logging.getLogger(__name__)

TRACKED_METRICS = (
    "duration",
    "hrv_low",
    "hrv_high",
    "resting_hr",
    "restorative",
    "awake_pct",
    "movement_count",
    "sleep_cycles",
)


@dataclass(frozen=True)
class MetricBaseline:
    """Mean and spread of one metric."""
    mean: float
    std: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Baseline:
    """Per-metric baselines over a set of nights."""
    count: int
    metrics: Dict[str, Optional[MetricBaseline]] = field(default_factory=dict)

    def get(self, metric: str) -> Optional[MetricBaseline]:
        return self.metrics.get(metric)

    @property
    def available(self) -> List[str]:
        """Metrics that have a baseline."""
        return [name for name, value in self.metrics.items() if value is not None]

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            **{name: value.to_dict() if value else None for name, value in self.metrics.items()},
        }


def metric_values(entry: SleepEntry) -> Dict[str, Optional[float]]:
    """Tracked metric values of one night, derived metrics included."""
    return {
        "duration": entry.sleep_minutes,
        "hrv_low": entry.hrv_low,
        "hrv_high": entry.hrv_high,
        "resting_hr": entry.resting_hr,
        "restorative": restorative_pct(entry),
        "awake_pct": entry.awake_pct,
        "movement_count": entry.movement_count,
        "sleep_cycles": sleep_cycles(entry),
    }


def calculate_metric_baseline(
    values: Sequence[float],
    min_samples: int = 3,
) -> Optional[MetricBaseline]:
    """Mean and population standard deviation of a metric's values.

    Args:
        values: Non-null values of one metric
        min_samples: Minimum number of values required

    Returns:
        MetricBaseline, or None if there are too few values
    """
    if len(values) < min_samples:
        return None

    mean = sum(values) / len(values)
    std = math.sqrt(sum((v - mean) ** 2 for v in values) / len(values))
    return MetricBaseline(mean=mean, std=std or 1.0)


def estimate_baseline(
    entries: Optional[Sequence[SleepEntry]],
    exclude_id: Optional[str] = None,
    settings: Optional[AnalyticsSettings] = None,
) -> Baseline:
    """Estimate personal baselines from past nights.

    Args:
        entries: Sleep history
        exclude_id: Entry id to leave out, so a night is never part of its
            own baseline
        settings: Analytics settings

    Returns:
        Baseline with ``count`` = number of nights considered
    """
    settings = settings or get_settings()
    history = [e for e in entries or [] if exclude_id is None or e.id != exclude_id]

    collected: Dict[str, List[float]] = {name: [] for name in TRACKED_METRICS}
    for entry in history:
        for name, value in metric_values(entry).items():
            if value is not None:
                collected[name].append(value)

    baseline = Baseline(
        count=len(history),
        metrics={
            name: calculate_metric_baseline(values, settings.min_baseline_samples)
            for name, values in collected.items()
        },
    )
    logger.debug(f"Baseline over {baseline.count} nights, available: {baseline.available}")
    return baseline
