"""Composite health score (0-100) from blood pressure and sleep.

The blood pressure part starts from a base score interpolated from the
average systolic and diastolic values (the worse of the two wins), loses
points for reading-to-reading variability and gains or loses points for the
recent trend:

    bp_score = clamp(base - variability_penalty + trend_modifier)

The sleep part is the personalized composite sleep score of the day when the
history supports a baseline, otherwise a population-based score built from
duration, restorative sleep and heart metrics.

The two parts are blended (50/50 by default). When either part is below the
critical score the blend is capped, so a very bad night cannot hide behind
good blood pressure or the other way round. A missing part leaves the other
one as the overall score.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..config import AnalyticsSettings, get_settings
from ..models import BloodPressureReading, SleepEntry
from .scoring import clamp, daily_sleep_score
from .sleep import restorative_pct
from .stats import avg, avg_rounded, round_stat, standard_deviation

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 70.0

# (upper bound, points): first band whose bound exceeds the value wins
DURATION_HOURS_SHORT: Tuple[Tuple[float, int], ...] = ((5.0, 25), (5.5, 40), (6.0, 55), (6.5, 70), (7.0, 85))
DURATION_HOURS_LONG: Tuple[Tuple[float, int], ...] = ((9.5, 85), (10.0, 70), (10.5, 55), (11.0, 40))
# (lower bound, points), most demanding first
RESTORATIVE_BANDS: Tuple[Tuple[float, int], ...] = ((45, 100), (40, 90), (35, 80), (30, 70), (25, 55), (20, 40))
HRV_HIGH_BANDS: Tuple[Tuple[float, int], ...] = ((80, 100), (65, 85), (50, 70), (40, 55))
# (upper bound, points) for resting HR, lower is better
RESTING_HR_BANDS: Tuple[Tuple[float, int], ...] = ((50, 100), (55, 90), (60, 80), (65, 70), (70, 60))


# =============================================================================
# Blood pressure score
# =============================================================================

@dataclass
class BPScore:
    """Blood pressure part of the health score."""
    score: int
    base_score: int
    variability_penalty: int
    trend_modifier: int
    avg_systolic: int
    avg_diastolic: int
    category: str  # 'optimal', 'normal', 'elevated', 'stage1', 'stage2'

    def to_dict(self) -> dict:
        return asdict(self)


def systolic_score(systolic: float) -> float:
    """Points for an average systolic value, linear within each band."""
    if systolic < 110:
        return 100.0
    if systolic < 120:
        return 100 - (systolic - 110) / 10 * 5
    if systolic < 130:
        return 95 - (systolic - 120) / 10 * 15
    if systolic < 140:
        return 80 - (systolic - 130) / 10 * 15
    if systolic < 160:
        return 65 - (systolic - 140) / 20 * 20
    return max(20.0, 45 - (systolic - 160) / 20 * 15)


def diastolic_score(diastolic: float) -> float:
    """Points for an average diastolic value, linear within each band."""
    if diastolic < 75:
        return 100.0
    if diastolic < 80:
        return 100 - (diastolic - 75) / 5 * 5
    if diastolic < 85:
        return 95 - (diastolic - 80) / 5 * 15
    if diastolic < 90:
        return 80 - (diastolic - 85) / 5 * 15
    if diastolic < 100:
        return 65 - (diastolic - 90) / 10 * 20
    return max(20.0, 45 - (diastolic - 100) / 10 * 15)


def bp_base_score(systolic: float, diastolic: float) -> float:
    return min(systolic_score(systolic), diastolic_score(diastolic))


def bp_score_category(systolic: float, diastolic: float) -> str:
    """Band of the averages used for the base score."""
    if systolic < 120 and diastolic < 80:
        return "optimal"
    if systolic < 130 and diastolic < 85:
        return "normal"
    if systolic < 140 and diastolic < 90:
        return "elevated"
    if systolic < 160 and diastolic < 100:
        return "stage1"
    return "stage2"


def variability_penalty(systolics: Sequence[float], diastolics: Sequence[float]) -> float:
    """Penalty from the mean coefficient of variation of both values.

    Needs at least 3 readings; CV above 12% costs 15 points, above 8% 10
    points and above 5% 5 points.
    """
    if len(systolics) < 3:
        return 0.0

    sys_cv = standard_deviation(systolics) / avg(systolics) * 100
    dia_cv = standard_deviation(diastolics) / avg(diastolics) * 100
    mean_cv = (sys_cv + dia_cv) / 2

    if mean_cv > 12:
        return 15.0
    if mean_cv > 8:
        return 10.0
    if mean_cv > 5:
        return 5.0
    return 0.0


def trend_modifier(readings: Sequence[BloodPressureReading]) -> float:
    """Bonus for falling pressure, penalty for rising pressure.

    Readings are sorted by date and split in halves (the recent half gets the
    extra reading on odd counts). The modifier follows the mean change of
    systolic and diastolic between the halves: more than 5 mmHg is worth 10
    points, more than 2 mmHg 5 points. Needs at least 4 readings.
    """
    if len(readings) < 4:
        return 0.0

    ordered = sorted(readings, key=lambda r: r.date)
    midpoint = len(ordered) // 2
    older, recent = ordered[:midpoint], ordered[midpoint:]

    sys_diff = avg(r.systolic for r in recent) - avg(r.systolic for r in older)
    dia_diff = avg(r.diastolic for r in recent) - avg(r.diastolic for r in older)
    change = (sys_diff + dia_diff) / 2

    if change < -5:
        return 10.0
    if change < -2:
        return 5.0
    if change > 5:
        return -10.0
    if change > 2:
        return -5.0
    return 0.0


def calculate_bp_score(readings: Optional[Sequence[BloodPressureReading]]) -> Optional[BPScore]:
    """Score blood pressure readings.

    Readings missing either value are ignored.

    Returns:
        BPScore, or None if no complete reading is available
    """
    complete = [r for r in readings or [] if r.systolic and r.diastolic]
    if not complete:
        return None

    systolics = [r.systolic for r in complete]
    diastolics = [r.diastolic for r in complete]
    mean_sys = avg(systolics)
    mean_dia = avg(diastolics)

    base = bp_base_score(mean_sys, mean_dia)
    penalty = variability_penalty(systolics, diastolics)
    modifier = trend_modifier(complete)

    return BPScore(
        score=round_stat(clamp(base - penalty + modifier)),
        base_score=round_stat(base),
        variability_penalty=round_stat(penalty),
        trend_modifier=round_stat(modifier),
        avg_systolic=avg_rounded(systolics),
        avg_diastolic=avg_rounded(diastolics),
        category=bp_score_category(mean_sys, mean_dia),
    )


# =============================================================================
# Sleep score
# =============================================================================

@dataclass
class SleepHealthScore:
    """Sleep part of the health score."""
    score: int
    duration_score: int
    restorative_score: int
    heart_score: int
    consistency_bonus: int
    avg_duration_minutes: Optional[int]
    avg_restorative: Optional[int]
    personalized: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


def _duration_score(minutes: Optional[float]) -> float:
    if minutes is None:
        return NEUTRAL_SCORE
    hours = minutes / 60
    if 7 <= hours <= 9:
        return 100.0
    if hours < 7:
        for upper, points in DURATION_HOURS_SHORT:
            if hours < upper:
                return float(points)
    for upper, points in DURATION_HOURS_LONG:
        if hours <= upper:
            return float(points)
    return 25.0


def _restorative_score(values: List[float]) -> float:
    if not values:
        return NEUTRAL_SCORE
    mean = avg(values)
    for lower, points in RESTORATIVE_BANDS:
        if mean >= lower:
            return float(points)
    return 25.0


def _resting_hr_score(mean_hr: float) -> float:
    for upper, points in RESTING_HR_BANDS:
        if mean_hr < upper:
            return float(points)
    return 45.0


def _hrv_score(mean_hrv_high: float) -> float:
    for lower, points in HRV_HIGH_BANDS:
        if mean_hrv_high >= lower:
            return float(points)
    return 40.0


def _heart_score(entries: Sequence[SleepEntry]) -> float:
    scores = []
    mean_hr = avg(e.resting_hr for e in entries)
    if mean_hr is not None:
        scores.append(_resting_hr_score(mean_hr))
    mean_hrv = avg(e.hrv_high for e in entries)
    if mean_hrv is not None:
        scores.append(_hrv_score(mean_hrv))
    if not scores:
        return NEUTRAL_SCORE
    return sum(scores) / len(scores)


def _consistency_bonus(durations: List[float]) -> float:
    """+5 for a duration std under 30 minutes, -5 over 60 (3+ nights)."""
    if len(durations) < 3:
        return 0.0
    spread = standard_deviation(durations)
    if spread < 30:
        return 5.0
    if spread > 60:
        return -5.0
    return 0.0


def calculate_sleep_health_score(entries: Optional[Sequence[SleepEntry]]) -> Optional[SleepHealthScore]:
    """Population-based sleep score.

    Duration counts 40%, restorative sleep 30% and heart metrics (resting HR,
    HRV high) 30%; a consistency bonus is added on top. Components without
    data score a neutral 70.

    Returns:
        SleepHealthScore, or None if there are no entries
    """
    if not entries:
        return None

    durations = [e.sleep_minutes for e in entries if e.sleep_minutes is not None]
    restorative = [v for v in (restorative_pct(e) for e in entries) if v is not None]

    duration_points = _duration_score(avg(durations))
    restorative_points = _restorative_score(restorative)
    heart_points = _heart_score(entries)
    bonus = _consistency_bonus(durations)

    weighted = duration_points * 0.4 + restorative_points * 0.3 + heart_points * 0.3 + bonus

    return SleepHealthScore(
        score=round_stat(clamp(weighted)),
        duration_score=round_stat(duration_points),
        restorative_score=round_stat(restorative_points),
        heart_score=round_stat(heart_points),
        consistency_bonus=round_stat(bonus),
        avg_duration_minutes=avg_rounded(durations),
        avg_restorative=avg_rounded(restorative),
    )


def _personalized_sleep_score(
    night: SleepEntry,
    history: Sequence[SleepEntry],
    settings: AnalyticsSettings,
) -> Optional[SleepHealthScore]:
    breakdown = daily_sleep_score(night.date, history, settings)
    if breakdown is None or breakdown.overall is None:
        return None

    restorative = restorative_pct(night)
    return SleepHealthScore(
        score=breakdown.overall,
        duration_score=breakdown.duration or 0,
        restorative_score=breakdown.sleep_quality or 0,
        heart_score=breakdown.heart_health or 0,
        consistency_bonus=0,
        avg_duration_minutes=round_stat(night.sleep_minutes),
        avg_restorative=round_stat(restorative),
        personalized=True,
    )


# =============================================================================
# Composite
# =============================================================================

@dataclass
class HealthInsights:
    """Strongest and weakest part plus a suggested focus."""
    strongest: Optional[str] = None  # 'bp' or 'sleep'
    weakest: Optional[str] = None
    action: str = "log_data"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class HealthScore:
    """Composite health score."""
    overall: int
    band: str
    bp: Optional[BPScore] = None
    sleep: Optional[SleepHealthScore] = None
    insights: HealthInsights = field(default_factory=HealthInsights)

    def to_dict(self) -> dict:
        return {
            "overall": self.overall,
            "band": self.band,
            "bp": self.bp.to_dict() if self.bp else None,
            "sleep": self.sleep.to_dict() if self.sleep else None,
            "insights": self.insights.to_dict(),
        }


def health_score_band(score: float) -> str:
    """Qualitative band of a 0-100 score."""
    if score >= 80:
        return "excellent"
    if score >= 65:
        return "good"
    if score >= 50:
        return "fair"
    if score >= 35:
        return "needs_attention"
    return "poor"


def _action_for(weakest: str, bp: Optional[BPScore], sleep: Optional[SleepHealthScore]) -> str:
    if weakest == "bp" and bp is not None:
        if bp.variability_penalty > 10:
            return "bp_consistency"
        if bp.base_score < 70:
            return "bp_lifestyle"
        if bp.trend_modifier < 0:
            return "bp_monitor_trend"
        return "bp_maintain"
    if weakest == "sleep" and sleep is not None:
        if sleep.duration_score < 60:
            return "sleep_duration"
        if sleep.restorative_score < 60:
            return "sleep_quality"
        if sleep.consistency_bonus < 0:
            return "sleep_consistency"
        return "sleep_maintain"
    return "keep_tracking"


def health_insights(bp: Optional[BPScore], sleep: Optional[SleepHealthScore]) -> HealthInsights:
    """Pick the strongest and weakest part and the action for the weakest.

    Ties go to blood pressure as the strongest part and to the last scored
    part (sleep) as the weakest.
    """
    parts = []
    if bp is not None:
        parts.append(("bp", bp.score))
    if sleep is not None:
        parts.append(("sleep", sleep.score))
    if not parts:
        return HealthInsights()

    ranked = sorted(parts, key=lambda part: part[1], reverse=True)
    strongest, weakest = ranked[0][0], ranked[-1][0]
    return HealthInsights(
        strongest=strongest,
        weakest=weakest,
        action=_action_for(weakest, bp, sleep),
    )


def calculate_health_score(
    bp_readings: Optional[Sequence[BloodPressureReading]],
    sleep_entries: Optional[Sequence[SleepEntry]],
    all_sleep_entries: Optional[Sequence[SleepEntry]] = None,
    settings: Optional[AnalyticsSettings] = None,
) -> HealthScore:
    """Combine blood pressure and sleep into one score.

    Args:
        bp_readings: Readings of the scored period (typically one day)
        sleep_entries: Nights of the scored period (typically 0 or 1)
        all_sleep_entries: Full sleep history; enables the personalized
            sleep score for the first night when it holds enough nights
        settings: Analytics settings

    Returns:
        HealthScore; overall is 0 when there is no data at all
    """
    settings = settings or get_settings()
    bp = calculate_bp_score(bp_readings)

    sleep = None
    if sleep_entries and all_sleep_entries and len(all_sleep_entries) >= settings.min_baseline_samples:
        sleep = _personalized_sleep_score(sleep_entries[0], all_sleep_entries, settings)
    if sleep is None and sleep_entries:
        logger.debug("Personalized sleep score unavailable, using population-based score")
        sleep = calculate_sleep_health_score(sleep_entries)

    if bp is not None and sleep is not None:
        overall = bp.score * settings.health_bp_weight + sleep.score * (1 - settings.health_bp_weight)
        if min(bp.score, sleep.score) < settings.health_critical_score:
            overall = min(overall, settings.health_critical_cap)
    elif bp is not None:
        overall = bp.score
    elif sleep is not None:
        overall = sleep.score
    else:
        overall = 0

    overall = round_stat(overall)
    return HealthScore(
        overall=overall,
        band=health_score_band(overall),
        bp=bp,
        sleep=sleep,
        insights=health_insights(bp, sleep),
    )
