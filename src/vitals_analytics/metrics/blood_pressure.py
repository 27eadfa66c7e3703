"""Blood pressure classification and summaries.

Different medical organizations draw the category lines differently, so
classification is always done against a named guideline table. Categories
within a guideline are listed from least to most severe and scanned in
reverse; the first category whose rule matches wins.

Category rules:
- ``elevated``: systolic within [min, max] and diastolic at or below its max
- ``normal`` / ``optimal``: both values at or below their max
- anything else: either value at or above its min
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import AnalyticsSettings, get_settings
from ..exceptions import UnknownGuidelineError
from ..models import BloodPressureReading
from .stats import Stats, avg_rounded, calc_stats

logger = logging.getLogger(__name__)

_NO_MAX = 999


@dataclass(frozen=True)
class BPThreshold:
    """Per-category bounds; a missing min is 0 and a missing max is unbounded."""
    systolic_min: Optional[int] = None
    systolic_max: Optional[int] = None
    diastolic_min: Optional[int] = None
    diastolic_max: Optional[int] = None


@dataclass(frozen=True)
class BPGuideline:
    """A named classification table."""
    key: str
    name: str
    description: str
    categories: Tuple[str, ...]  # least to most severe
    thresholds: Dict[str, BPThreshold]
    reference_lines: Dict[str, List[int]] = field(default_factory=dict)


BP_GUIDELINES: Dict[str, BPGuideline] = {
    "aha2017": BPGuideline(
        key="aha2017",
        name="AHA/ACC 2017",
        description="American Heart Association / American College of Cardiology 2017",
        categories=("normal", "elevated", "hypertension1", "hypertension2", "crisis"),
        thresholds={
            "normal": BPThreshold(systolic_max=119, diastolic_max=79),
            "elevated": BPThreshold(systolic_min=120, systolic_max=129, diastolic_max=79),
            "hypertension1": BPThreshold(systolic_min=130, systolic_max=139, diastolic_min=80, diastolic_max=89),
            "hypertension2": BPThreshold(systolic_min=140, systolic_max=179, diastolic_min=90, diastolic_max=119),
            "crisis": BPThreshold(systolic_min=180, diastolic_min=120),
        },
        reference_lines={"systolic": [120, 130, 140], "diastolic": [80, 90]},
    ),
    "esc2018": BPGuideline(
        key="esc2018",
        name="ESC/ESH 2018",
        description="European Society of Cardiology / European Society of Hypertension 2018",
        # ESC normal (120-129/80-84) ranks above optimal and uses the min rule
        categories=("optimal", "esc_normal", "high_normal", "hypertension1", "hypertension2", "hypertension3"),
        thresholds={
            "optimal": BPThreshold(systolic_max=119, diastolic_max=79),
            "esc_normal": BPThreshold(systolic_min=120, systolic_max=129, diastolic_min=80, diastolic_max=84),
            "high_normal": BPThreshold(systolic_min=130, systolic_max=139, diastolic_min=85, diastolic_max=89),
            "hypertension1": BPThreshold(systolic_min=140, systolic_max=159, diastolic_min=90, diastolic_max=99),
            "hypertension2": BPThreshold(systolic_min=160, systolic_max=179, diastolic_min=100, diastolic_max=109),
            "hypertension3": BPThreshold(systolic_min=180, diastolic_min=110),
        },
        reference_lines={"systolic": [130, 140, 160], "diastolic": [85, 90, 100]},
    ),
    "jnc7": BPGuideline(
        key="jnc7",
        name="JNC 7",
        description="Seventh Report of the Joint National Committee",
        categories=("normal", "prehypertension", "hypertension1", "hypertension2"),
        thresholds={
            "normal": BPThreshold(systolic_max=119, diastolic_max=79),
            "prehypertension": BPThreshold(systolic_min=120, systolic_max=139, diastolic_min=80, diastolic_max=89),
            "hypertension1": BPThreshold(systolic_min=140, systolic_max=159, diastolic_min=90, diastolic_max=99),
            "hypertension2": BPThreshold(systolic_min=160, diastolic_min=100),
        },
        reference_lines={"systolic": [120, 140, 160], "diastolic": [80, 90, 100]},
    ),
    "htn_canada_2025": BPGuideline(
        key="htn_canada_2025",
        name="HTN Canada 2025",
        description="Hypertension Canada 2025 Primary Care Guideline",
        categories=("normal", "hypertension_canada", "hypertension_treat"),
        thresholds={
            "normal": BPThreshold(systolic_max=129, diastolic_max=79),
            "hypertension_canada": BPThreshold(systolic_min=130, systolic_max=139, diastolic_min=80, diastolic_max=89),
            "hypertension_treat": BPThreshold(systolic_min=140, diastolic_min=90),
        },
        reference_lines={"systolic": [130, 140], "diastolic": [80, 90]},
    ),
    "simple": BPGuideline(
        key="simple",
        name="Simple",
        description="Binary classification: normal (<120/80) or hypertension (>=120 or >=80)",
        categories=("normal", "hypertension"),
        thresholds={
            "normal": BPThreshold(systolic_max=119, diastolic_max=79),
            "hypertension": BPThreshold(systolic_min=120, diastolic_min=80),
        },
        reference_lines={"systolic": [120], "diastolic": [80]},
    ),
}


# =============================================================================
# Classification
# =============================================================================

def get_guideline(key: str) -> BPGuideline:
    """Look up a guideline table.

    Raises:
        UnknownGuidelineError: If key is not a built-in guideline
    """
    guideline = BP_GUIDELINES.get(key)
    if guideline is None:
        raise UnknownGuidelineError(key, available=sorted(BP_GUIDELINES))
    return guideline


def _matches(category: str, threshold: BPThreshold, systolic: float, diastolic: float) -> bool:
    sys_min = threshold.systolic_min or 0
    dia_min = threshold.diastolic_min or 0
    sys_max = threshold.systolic_max if threshold.systolic_max is not None else _NO_MAX
    dia_max = threshold.diastolic_max if threshold.diastolic_max is not None else _NO_MAX

    if category == "elevated":
        return sys_min <= systolic <= sys_max and diastolic <= dia_max
    if category in ("normal", "optimal"):
        return systolic <= sys_max and diastolic <= dia_max
    return systolic >= sys_min or diastolic >= dia_min


def classify_bp(
    systolic: Optional[float],
    diastolic: Optional[float],
    guideline: Optional[str] = None,
    settings: Optional[AnalyticsSettings] = None,
) -> Optional[str]:
    """Classify a reading under a guideline.

    Args:
        systolic: Systolic pressure (mmHg)
        diastolic: Diastolic pressure (mmHg)
        guideline: Guideline key, defaults to the configured guideline
        settings: Analytics settings

    Returns:
        Category key, or None if either value is missing/zero or the
        guideline is unknown
    """
    if not systolic or not diastolic:
        return None

    settings = settings or get_settings()
    key = guideline or settings.default_bp_guideline
    table = BP_GUIDELINES.get(key)
    if table is None:
        logger.warning(f"Unknown blood pressure guideline '{key}', reading left unclassified")
        return None

    for category in reversed(table.categories):
        threshold = table.thresholds.get(category)
        if threshold is None:
            continue
        if _matches(category, threshold, systolic, diastolic):
            return category

    return table.categories[0]


def reference_lines(
    guideline: Optional[str] = None,
    settings: Optional[AnalyticsSettings] = None,
) -> Dict[str, List[int]]:
    """Chart reference values for a guideline, falling back to the default."""
    settings = settings or get_settings()
    table = BP_GUIDELINES.get(guideline or "") or BP_GUIDELINES[settings.default_bp_guideline]
    return {axis: list(values) for axis, values in table.reference_lines.items()}


# =============================================================================
# Summaries
# =============================================================================

@dataclass
class BPFullStats:
    """Distribution of every blood pressure measure over a set of readings."""
    systolic: Stats
    diastolic: Stats
    pulse: Stats
    pp: Stats
    map: Stats
    count: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class BPStats:
    """Rounded headline statistics for a set of readings."""
    avg_systolic: Optional[int]
    avg_diastolic: Optional[int]
    avg_pulse: Optional[int]
    min_systolic: Optional[float]
    max_systolic: Optional[float]
    min_diastolic: Optional[float]
    max_diastolic: Optional[float]
    count: int
    latest_category: Optional[str]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class TrendDirection:
    """Change of one measure between two consecutive readings."""
    diff: float
    direction: str  # 'up', 'down', 'stable'
    is_improving: bool


@dataclass
class BPTrend:
    """Latest reading compared with the one before it."""
    systolic: TrendDirection
    diastolic: TrendDirection

    def to_dict(self) -> dict:
        return asdict(self)


def _pairs(readings: Sequence[BloodPressureReading]) -> List[BloodPressureReading]:
    """Readings carrying both systolic and diastolic values."""
    return [r for r in readings if r.systolic is not None and r.diastolic is not None]


def pulse_pressure(systolic: float, diastolic: float) -> float:
    """Pulse pressure: systolic minus diastolic."""
    return systolic - diastolic


def mean_arterial_pressure(systolic: float, diastolic: float) -> float:
    """Mean arterial pressure: diastolic plus a third of the pulse pressure."""
    return diastolic + pulse_pressure(systolic, diastolic) / 3


def calculate_full_stats(readings: Optional[Sequence[BloodPressureReading]]) -> Optional[BPFullStats]:
    """Full statistics including pulse pressure and mean arterial pressure.

    PP and MAP are computed per reading at full precision before they are
    aggregated. Pulse statistics only use readings that carry a pulse.

    Returns:
        BPFullStats, or None if there are no readings
    """
    if not readings:
        return None

    pairs = _pairs(readings)
    return BPFullStats(
        systolic=calc_stats(r.systolic for r in readings),
        diastolic=calc_stats(r.diastolic for r in readings),
        pulse=calc_stats(r.pulse for r in readings if r.pulse),
        pp=calc_stats(pulse_pressure(r.systolic, r.diastolic) for r in pairs),
        map=calc_stats(mean_arterial_pressure(r.systolic, r.diastolic) for r in pairs),
        count=len(readings),
    )


def calculate_bp_stats(
    readings: Optional[Sequence[BloodPressureReading]],
    guideline: Optional[str] = None,
    settings: Optional[AnalyticsSettings] = None,
) -> Optional[BPStats]:
    """Rounded averages, ranges and the category of the latest reading.

    The latest reading is the last one on the most recent date.
    """
    if not readings:
        return None

    systolic = calc_stats(r.systolic for r in readings)
    diastolic = calc_stats(r.diastolic for r in readings)
    latest = sorted(readings, key=lambda r: r.date)[-1]

    return BPStats(
        avg_systolic=avg_rounded(r.systolic for r in readings),
        avg_diastolic=avg_rounded(r.diastolic for r in readings),
        avg_pulse=avg_rounded(r.pulse for r in readings if r.pulse),
        min_systolic=systolic.min,
        max_systolic=systolic.max,
        min_diastolic=diastolic.min,
        max_diastolic=diastolic.max,
        count=len(readings),
        latest_category=classify_bp(latest.systolic, latest.diastolic, guideline, settings),
    )


def calculate_daily_bp_average(
    readings: Optional[Sequence[BloodPressureReading]],
) -> Optional[Dict[str, int]]:
    """Rounded average systolic/diastolic of one day's readings."""
    pairs = _pairs(readings or [])
    if not pairs:
        return None
    return {
        "systolic": avg_rounded(r.systolic for r in pairs),
        "diastolic": avg_rounded(r.diastolic for r in pairs),
    }


def _direction(diff: float) -> TrendDirection:
    if diff > 0:
        direction = "up"
    elif diff < 0:
        direction = "down"
    else:
        direction = "stable"
    return TrendDirection(diff=diff, direction=direction, is_improving=diff < 0)


def get_bp_trend(readings: Optional[Sequence[BloodPressureReading]]) -> Optional[BPTrend]:
    """Compare the latest reading with the previous one (by date).

    Returns:
        BPTrend, or None with fewer than two complete readings
    """
    pairs = sorted(_pairs(readings or []), key=lambda r: r.date)
    if len(pairs) < 2:
        return None

    previous, latest = pairs[-2], pairs[-1]
    return BPTrend(
        systolic=_direction(latest.systolic - previous.systolic),
        diastolic=_direction(latest.diastolic - previous.diastolic),
    )
