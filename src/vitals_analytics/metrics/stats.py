"""Aggregate statistics shared by every metric summary.

Missing values (None) are skipped, never treated as 0. Averages shown to
users are rounded half up via ``round_stat``.
"""

import math
from dataclasses import asdict, dataclass
from typing import Iterable, List, Optional


@dataclass
class Stats:
    """Min, max and average of a numeric collection."""
    min: Optional[float] = None
    max: Optional[float] = None
    avg: Optional[float] = None

    def to_dict(self) -> dict:
        return asdict(self)


def _present(values: Iterable[Optional[float]]) -> List[float]:
    return [v for v in values if v is not None]


def avg(values: Iterable[Optional[float]]) -> Optional[float]:
    """Mean of the present values, None when there are none."""
    present = _present(values)
    if not present:
        return None
    return sum(present) / len(present)


def round_stat(value: Optional[float]) -> Optional[int]:
    """Round half up to an integer (2.5 -> 3, -2.5 -> -2)."""
    if value is None:
        return None
    return int(math.floor(value + 0.5))


def avg_rounded(values: Iterable[Optional[float]]) -> Optional[int]:
    """Mean rounded with ``round_stat``."""
    return round_stat(avg(values))


def standard_deviation(values: Iterable[Optional[float]]) -> float:
    """Population standard deviation; 0 for fewer than 2 values."""
    present = _present(values)
    if len(present) < 2:
        return 0.0
    mean = sum(present) / len(present)
    variance = sum((v - mean) ** 2 for v in present) / len(present)
    return math.sqrt(variance)


def calc_stats(values: Iterable[Optional[float]]) -> Stats:
    """Min, max and mean; all None for an empty collection."""
    present = _present(values)
    if not present:
        return Stats()
    return Stats(min=min(present), max=max(present), avg=sum(present) / len(present))


def calc_stats_rounded(values: Iterable[Optional[float]]) -> Stats:
    """Like ``calc_stats`` with the average rounded half up."""
    stats = calc_stats(values)
    return Stats(min=stats.min, max=stats.max, avg=round_stat(stats.avg))
