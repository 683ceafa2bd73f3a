"""
Data models for lift-metrics.

All core dataclasses representing workout history, wellness samples,
settings and the result structures handed to the presentation layer.

Numeric fields are deliberately not validated here: the metric functions
treat missing or invalid numbers as 0.  Dates are validated, because a
malformed date is a caller error rather than sparse data.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

from .config import (
    DEFAULT_INCREMENT_UNIT,
    DEFAULT_REP_RANGE,
    DEFAULT_ROUNDING_UNIT,
    DEFAULT_RPE_BAND,
    MIN_CORRELATION_PAIRS,
)

ReadinessStatus = Literal["poor", "fair", "good", "excellent"]
RecordMetric = Literal["weight", "reps", "volume", "one_rep_max"]
CorrelationMetric = Literal["sleep", "stress", "recovery"]
CorrelationStrength = Literal["weak", "moderate", "strong"]
CorrelationDirection = Literal["positive", "negative", "none"]
Intensity = Literal["light", "moderate", "high"]
TimerPhase = Literal["idle", "running", "paused", "completed", "skipped"]

DateLike = str | date | datetime


def parse_timestamp(value: DateLike) -> datetime:
    """
    Parse an ISO date or timestamp into a naive datetime.

    Accepts ``YYYY-MM-DD``, ``YYYY-MM-DDTHH:MM[:SS]`` (optionally with a
    ``Z`` or ``+HH:MM`` suffix), or date/datetime objects.  Timezone info
    is dropped: calendar-day pairing uses the wall-clock day as logged.

    Raises:
        ValueError: If the value is not a valid date
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid date: {value!r}. Expected ISO format YYYY-MM-DD")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).replace(tzinfo=None)
    except ValueError as e:
        raise ValueError(f"Invalid date: {value!r}. Expected ISO format YYYY-MM-DD") from e


def _normalize_date(value: DateLike) -> str:
    """Validate a date-like value and return it as an ISO string."""
    parse_timestamp(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value.strip()


@dataclass(frozen=True)
class WorkoutSet:
    """
    A single set within an exercise.

    Frozen: a logged set does not change after it is completed.
    """

    weight: float = 0.0
    reps: int = 0
    rpe: float | None = None  # 1–10, None when not reported
    completed: bool = False


@dataclass
class ExerciseEntry:
    """One exercise performed within one workout."""

    exercise_id: str
    sets: list[WorkoutSet] = field(default_factory=list)


@dataclass
class WorkoutRecord:
    """
    A logged workout.

    Callers may pass records in any order; every pipeline re-sorts by date.
    """

    date: str  # ISO date or timestamp
    exercises: list[ExerciseEntry] = field(default_factory=list)
    workout_id: str | None = None

    def __post_init__(self) -> None:
        self.date = _normalize_date(self.date)

    @property
    def timestamp(self) -> datetime:
        return parse_timestamp(self.date)

    @property
    def day(self) -> date:
        """Calendar day the workout happened on."""
        return self.timestamp.date()

    def entry_for(self, exercise_id: str) -> ExerciseEntry | None:
        """Return the entry for the given exercise, or None."""
        for entry in self.exercises:
            if entry.exercise_id == exercise_id:
                return entry
        return None

    @property
    def all_sets(self) -> list[WorkoutSet]:
        return [s for entry in self.exercises for s in entry.sets]


@dataclass
class SleepSample:
    """
    One night of sleep.  Durations are in minutes, quality is 0–100.
    """

    start_time: str
    duration: float
    quality: float
    deep_sleep_duration: float = 0.0
    rem_sleep_duration: float = 0.0
    light_sleep_duration: float = 0.0
    awake_time: float = 0.0

    def __post_init__(self) -> None:
        self.start_time = _normalize_date(self.start_time)

    @property
    def timestamp(self) -> datetime:
        return parse_timestamp(self.start_time)

    @property
    def day(self) -> date:
        """Calendar day the sleep started on."""
        return self.timestamp.date()


@dataclass
class StressSample:
    """A stress reading, level 0–100."""

    date: str
    level: float

    def __post_init__(self) -> None:
        self.date = _normalize_date(self.date)

    @property
    def timestamp(self) -> datetime:
        return parse_timestamp(self.date)

    @property
    def day(self) -> date:
        return self.timestamp.date()


@dataclass
class HydrationSample:
    """A single drink, in millilitres."""

    date: str
    amount_ml: float

    def __post_init__(self) -> None:
        self.date = _normalize_date(self.date)

    @property
    def day(self) -> date:
        return parse_timestamp(self.date).date()


@dataclass
class UserSettings:
    """
    User-configurable progression settings.

    ``percentage_table`` and ``wave_pattern`` fall back to the defaults in
    config.py when None.
    """

    increment_unit: float = DEFAULT_INCREMENT_UNIT
    rounding_unit: float = DEFAULT_ROUNDING_UNIT
    percentage_table: list[float] | None = None
    wave_pattern: list[tuple[float, int]] | None = None
    rpe_band: tuple[float, float] = DEFAULT_RPE_BAND
    rep_range: tuple[int, int] = DEFAULT_REP_RANGE

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.rounding_unit <= 0:
            raise ValueError(f"rounding_unit must be positive, got {self.rounding_unit}")
        if self.increment_unit < 0:
            raise ValueError(f"increment_unit must be non-negative, got {self.increment_unit}")

        low, high = self.rep_range
        if low < 1 or high < low:
            raise ValueError(f"Invalid rep_range: {self.rep_range}")

        rpe_low, rpe_high = self.rpe_band
        if not (1 <= rpe_low <= rpe_high <= 10):
            raise ValueError(f"Invalid rpe_band: {self.rpe_band}. Expected 1 <= low <= high <= 10")

        if self.percentage_table is not None:
            if not self.percentage_table:
                raise ValueError("percentage_table must not be empty")
            if any(p <= 0 for p in self.percentage_table):
                raise ValueError("percentage_table entries must be positive")
            if any(b < a for a, b in zip(self.percentage_table, self.percentage_table[1:])):
                raise ValueError("percentage_table must be ascending")

        if self.wave_pattern is not None:
            if not self.wave_pattern:
                raise ValueError("wave_pattern must not be empty")
            if any(factor <= 0 for factor, _ in self.wave_pattern):
                raise ValueError("wave_pattern factors must be positive")


@dataclass(frozen=True)
class PersonalRecord:
    """
    Best-known value for one metric.

    Set-based metrics (weight, reps, one_rep_max) carry the weight, reps and
    estimated 1RM of the set that produced them.  The volume metric carries
    the total exercise volume of the workout that produced it.
    """

    metric: RecordMetric
    date: str
    weight: float = 0.0
    reps: int = 0
    volume: float = 0.0
    one_rep_max: float = 0.0

    @property
    def value(self) -> float:
        return getattr(self, self.metric)


@dataclass(frozen=True)
class ProgressionWeek:
    """
    Projection for one future week.

    projected_reps is a (low, high) bound for rep-range methods.
    """

    week: int
    projected_weight: float
    projected_reps: int | tuple[int, int]


@dataclass(frozen=True)
class RecoveryStatus:
    """Recovery score with its band and the inputs it was built from."""

    status: ReadinessStatus
    score: float
    sleep_quality: float
    stress_level: float | None = None


@dataclass(frozen=True)
class CorrelationResult:
    """Pearson correlation between a wellness metric and performance."""

    coefficient: float
    strength: CorrelationStrength
    direction: CorrelationDirection
    sample_size: int = 0

    @property
    def has_enough_data(self) -> bool:
        return self.sample_size >= MIN_CORRELATION_PAIRS

    @property
    def description(self) -> str:
        if not self.has_enough_data:
            return "not enough data"
        return f"{self.strength} {self.direction}"


@dataclass(frozen=True)
class StrengthTrend:
    """Direction and relative change between the first and last points of a series."""

    direction: Literal["positive", "negative", "neutral"]
    percentage_change: float
    first: float = 0.0
    last: float = 0.0


@dataclass(frozen=True)
class ExerciseSummary:
    """
    One session of one exercise, compared with the previous session.

    volume_change is in load units; volume_change_pct is 0 when there is
    no previous session or its volume was 0.
    """

    exercise_id: str
    date: str
    total_sets: int
    total_reps: int
    total_volume: float
    top_weight: float
    top_reps: int
    one_rep_max: float
    volume_change: float = 0.0
    volume_change_pct: float = 0.0
    has_previous: bool = False


@dataclass(frozen=True)
class RestTimerState:
    """Snapshot of a rest timer for rendering."""

    remaining_seconds: int
    is_running: bool
    is_paused: bool
    recommended_seconds: int
    phase: TimerPhase = "idle"
