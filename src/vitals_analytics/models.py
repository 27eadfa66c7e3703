"""Measurement entry models and record parsing.

Records arrive from the data-access layer as JSON-style dicts (camelCase
keys, ``"YYYY-MM-DD"`` dates, numbers or null for metrics). They are parsed
once into frozen pydantic models; every analytics function works on these
models and never mutates them.
"""

import logging
from dataclasses import dataclass, field
from datetime import date as date_type
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .dates import duration_from_times, parse_date
from .exceptions import EntryValidationError

logger = logging.getLogger(__name__)


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    components = string.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


# =============================================================================
# Enums
# =============================================================================

class ActivityType(str, Enum):
    """Logged activity types."""
    WALKING = "walking"
    BADMINTON = "badminton"
    PICKLEBALL = "pickleball"
    OTHER = "other"


class ActivityTimeOfDay(str, Enum):
    """When an activity took place."""
    MORNING = "morning"            # 5am - 12pm
    AFTERNOON = "afternoon"        # 12pm - 5pm
    EVENING = "evening"            # 5pm - 8pm
    LATE_EVENING = "late_evening"  # 8pm+


class BPTimeOfDay(str, Enum):
    """Time-of-day bucket of a blood pressure session."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


# =============================================================================
# Entry models
# =============================================================================

class _Entry(BaseModel):
    """Common configuration: camelCase input, immutable, calendar-day date."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    id: Optional[str] = None
    date: date_type

    @field_validator("date", mode="before")
    @classmethod
    def parse_calendar_day(cls, value: Any) -> Any:
        parsed = parse_date(value)
        if parsed is None:
            raise ValueError(f"not a calendar date: {value!r}")
        return parsed

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, value: Any) -> Any:
        return None if value is None else str(value)


class SleepEntry(_Entry):
    """One night of sleep, keyed by the date the night ended."""

    duration_minutes: Optional[float] = Field(None, ge=0, description="Time in bed")
    total_sleep_minutes: Optional[float] = Field(None, ge=0, description="Actual sleep time")
    sleep_start: Optional[str] = Field(None, description="Bedtime, HH:MM")
    sleep_end: Optional[str] = Field(None, description="Wake time, HH:MM")
    hrv_low: Optional[float] = Field(None, ge=0)
    hrv_high: Optional[float] = Field(None, ge=0)
    resting_hr: Optional[float] = Field(None, ge=0)
    hr_drop_minutes: Optional[float] = Field(None, ge=0)
    deep_sleep_pct: Optional[float] = Field(None, ge=0, le=100)
    rem_sleep_pct: Optional[float] = Field(None, ge=0, le=100)
    light_sleep_pct: Optional[float] = Field(None, ge=0, le=100)
    awake_pct: Optional[float] = Field(None, ge=0, le=100)
    skin_temp_avg: Optional[float] = None
    sleep_cycles_full: Optional[float] = Field(None, ge=0)
    sleep_cycles_partial: Optional[float] = Field(None, ge=0)
    movement_count: Optional[float] = Field(None, ge=0)

    @property
    def time_in_bed_minutes(self) -> Optional[float]:
        """Time in bed, from the stored value or the bedtime/wake pair."""
        if self.duration_minutes is not None:
            return self.duration_minutes
        return duration_from_times(self.sleep_start, self.sleep_end)

    @property
    def sleep_minutes(self) -> Optional[float]:
        """Measured sleep, falling back to time in bed."""
        if self.total_sleep_minutes is not None:
            return self.total_sleep_minutes
        return self.time_in_bed_minutes


class ActivityEntry(_Entry):
    """A single logged workout."""

    activity_type: ActivityType = ActivityType.OTHER
    time_of_day: Optional[ActivityTimeOfDay] = None
    duration_minutes: float = Field(0, ge=0)
    intensity: int = Field(3, ge=1, le=5)
    zone1_minutes: Optional[float] = Field(None, ge=0)
    zone2_minutes: Optional[float] = Field(None, ge=0)
    zone3_minutes: Optional[float] = Field(None, ge=0)
    zone4_minutes: Optional[float] = Field(None, ge=0)
    zone5_minutes: Optional[float] = Field(None, ge=0)

    @field_validator("activity_type", mode="before")
    @classmethod
    def fold_unknown_type(cls, value: Any) -> Any:
        if isinstance(value, ActivityType):
            return value
        normalized = str(value or "").strip().lower()
        if normalized not in {t.value for t in ActivityType}:
            return ActivityType.OTHER
        return normalized

    @property
    def zone_minutes(self) -> List[float]:
        """Minutes in zones 1-5, with missing zones as 0."""
        return [
            self.zone1_minutes or 0.0,
            self.zone2_minutes or 0.0,
            self.zone3_minutes or 0.0,
            self.zone4_minutes or 0.0,
            self.zone5_minutes or 0.0,
        ]


class BloodPressureReading(_Entry):
    """A single blood pressure measurement."""

    time_of_day: Optional[BPTimeOfDay] = None
    systolic: Optional[float] = Field(None, ge=0)
    diastolic: Optional[float] = Field(None, ge=0)
    pulse: Optional[float] = Field(None, ge=0)


# =============================================================================
# Parsing
# =============================================================================

EntryT = TypeVar("EntryT", bound=_Entry)


def parse_entries(
    records: Optional[Iterable[Any]],
    model: Type[EntryT],
    strict: bool = False,
) -> List[EntryT]:
    """Parse raw records into entry models.

    Args:
        records: Dicts (or already-parsed models) from the data-access layer
        model: Entry model class to parse into
        strict: Raise on the first invalid record instead of skipping it

    Returns:
        Parsed entries in input order, invalid records omitted

    Raises:
        EntryValidationError: If strict and a record fails validation
    """
    if not records:
        return []

    parsed: List[EntryT] = []
    for index, record in enumerate(records):
        if isinstance(record, model):
            parsed.append(record)
            continue
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as e:
            messages = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            if strict:
                raise EntryValidationError(
                    f"Invalid {model.__name__} record",
                    index=index,
                    details={"errors": messages},
                ) from e
            logger.warning(f"Skipping invalid {model.__name__} record #{index}: {'; '.join(messages)}")
    return parsed


@dataclass
class HealthExport:
    """All entry collections from one export document."""
    sleep: List[SleepEntry] = field(default_factory=list)
    activities: List[ActivityEntry] = field(default_factory=list)
    blood_pressure: List[BloodPressureReading] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], strict: bool = False) -> "HealthExport":
        """Build from a ``{"sleep", "activities", "bloodPressure"}`` document."""
        return cls(
            sleep=parse_entries(_section(data, "sleep"), SleepEntry, strict),
            activities=parse_entries(_section(data, "activities"), ActivityEntry, strict),
            blood_pressure=parse_entries(
                _section(data, "bloodPressure", "blood_pressure"), BloodPressureReading, strict
            ),
        )


def _section(data: Mapping[str, Any], *keys: str) -> Sequence[Any]:
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return []
