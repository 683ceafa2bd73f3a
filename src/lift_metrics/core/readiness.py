"""
Readiness scoring.

Combines the latest sleep sample and the stress reading of the same day
into a 0–100 recovery score and maps it to a band.  This module owns the only score → band mapping
and the band → multiplier lookups; the planner and the rest timer call
these helpers instead of re-deriving thresholds.

    score = 0.7 * sleep_quality + 0.3 * (100 - stress_level)

When no stress sample exists for that day the stress term is the neutral
constant 30.  Without a sleep sample there is no status at all.
"""

from datetime import date, datetime
from typing import Sequence

from .config import (
    NEUTRAL_STRESS_COMPONENT,
    PROGRESSION_MULTIPLIERS,
    READINESS_BANDS,
    READINESS_TOP_BAND,
    RECOVERY_SCORE_MAX,
    RECOVERY_SCORE_MIN,
    REST_MULTIPLIERS,
    SLEEP_WEIGHT,
    STRESS_WEIGHT,
)
from .metrics import as_number
from .models import (
    DateLike,
    ReadinessStatus,
    RecoveryStatus,
    SleepSample,
    StressSample,
    parse_timestamp,
)

READINESS_STATUSES: tuple[str, ...] = ("poor", "fair", "good", "excellent")

_WORKOUT_TYPES: dict[str, list[str]] = {
    "poor": ["mobility", "light_cardio", "recovery"],
    "fair": ["moderate_strength", "cardio", "mobility"],
    "good": ["strength", "hiit", "cardio"],
    "excellent": ["high_intensity", "strength", "hiit"],
}


def recovery_score(sleep_quality: float | None, stress_level: float | None) -> float | None:
    """
    Calculate the recovery score.

    Args:
        sleep_quality: Sleep quality 0–100, or None if unknown
        stress_level: Stress level 0–100, or None if unknown

    Returns:
        Score clamped to [0, 100], or None when sleep is unknown
    """
    if sleep_quality is None:
        return None

    sleep_component = SLEEP_WEIGHT * as_number(sleep_quality)
    if stress_level is None:
        stress_component = NEUTRAL_STRESS_COMPONENT
    else:
        stress_component = STRESS_WEIGHT * (100 - as_number(stress_level))

    score = sleep_component + stress_component
    return max(RECOVERY_SCORE_MIN, min(RECOVERY_SCORE_MAX, score))


def readiness_band(score: float) -> ReadinessStatus:
    """
    Map a recovery score to its band.

    <40 poor, <60 fair, <80 good, otherwise excellent.
    """
    for upper, band in READINESS_BANDS:
        if score < upper:
            return band  # type: ignore[return-value]
    return READINESS_TOP_BAND  # type: ignore[return-value]


def _status_of(readiness: RecoveryStatus | str | None) -> str | None:
    if isinstance(readiness, RecoveryStatus):
        return readiness.status
    return readiness


def progression_multiplier(readiness: RecoveryStatus | ReadinessStatus | None) -> float:
    """
    Weight multiplier for progression plans.

    poor 0.85, fair 0.95, good 1.0, excellent 1.05; 1.0 without a status.

    Raises:
        ValueError: If the status is not a known band
    """
    status = _status_of(readiness)
    if status is None:
        return 1.0
    if status not in PROGRESSION_MULTIPLIERS:
        raise ValueError(f"Unknown readiness status {status!r}. Valid: {', '.join(READINESS_STATUSES)}")
    return PROGRESSION_MULTIPLIERS[status]


def rest_multiplier(readiness: RecoveryStatus | ReadinessStatus | None) -> float:
    """
    Duration multiplier for the rest timer.

    poor 1.3, fair 1.15, good 1.0, excellent 0.85; 1.0 without a status.

    Raises:
        ValueError: If the status is not a known band
    """
    status = _status_of(readiness)
    if status is None:
        return 1.0
    if status not in REST_MULTIPLIERS:
        raise ValueError(f"Unknown readiness status {status!r}. Valid: {', '.join(READINESS_STATUSES)}")
    return REST_MULTIPLIERS[status]


def _in_window(moment: datetime, start: datetime | None, end: datetime | None) -> bool:
    if start is not None and moment < start:
        return False
    if end is not None and moment > end:
        return False
    return True


def latest_sleep(
    sleep: Sequence[SleepSample],
    start: DateLike | None = None,
    end: DateLike | None = None,
) -> SleepSample | None:
    """Most recent sleep sample whose start time falls inside the window."""
    lo = parse_timestamp(start) if start is not None else None
    hi = parse_timestamp(end) if end is not None else None
    candidates = [s for s in sleep if _in_window(s.timestamp, lo, hi)]
    return max(candidates, key=lambda s: s.timestamp, default=None)


def latest_stress(
    stress: Sequence[StressSample],
    start: DateLike | None = None,
    end: DateLike | None = None,
) -> StressSample | None:
    """Most recent stress sample inside the window."""
    lo = parse_timestamp(start) if start is not None else None
    hi = parse_timestamp(end) if end is not None else None
    candidates = [s for s in stress if _in_window(s.timestamp, lo, hi)]
    return max(candidates, key=lambda s: s.timestamp, default=None)


def stress_on_day(stress: Sequence[StressSample], day: date) -> StressSample | None:
    """Most recent stress sample recorded on the given calendar day."""
    candidates = [s for s in stress if s.day == day]
    return max(candidates, key=lambda s: s.timestamp, default=None)


def score_readiness(
    sleep: Sequence[SleepSample],
    stress: Sequence[StressSample],
    start: DateLike | None = None,
    end: DateLike | None = None,
) -> RecoveryStatus | None:
    """
    Compute the current recovery status from wellness samples.

    Uses the most recent sleep sample inside the optional [start, end]
    window and the stress reading from the same calendar day.  Without a
    stress reading for that day the neutral stress term applies, so sleep
    alone still produces a score.

    Args:
        sleep: Sleep samples in any order
        stress: Stress samples in any order
        start: Optional inclusive window start
        end: Optional inclusive window end

    Returns:
        RecoveryStatus, or None when no sleep sample is available
    """
    sleep_sample = latest_sleep(sleep, start, end)
    if sleep_sample is None:
        return None

    stress_sample = stress_on_day(stress, sleep_sample.day)
    stress_level = as_number(stress_sample.level) if stress_sample is not None else None
    sleep_quality = as_number(sleep_sample.quality)

    score = recovery_score(sleep_quality, stress_level)
    if score is None:
        return None
    return RecoveryStatus(
        status=readiness_band(score),
        score=score,
        sleep_quality=sleep_quality,
        stress_level=stress_level,
    )


def recommended_workout_types(readiness: RecoveryStatus | ReadinessStatus) -> list[str]:
    """Workout types suited to a readiness band, most suitable first."""
    status = _status_of(readiness)
    if status not in _WORKOUT_TYPES:
        raise ValueError(f"Unknown readiness status {status!r}. Valid: {', '.join(READINESS_STATUSES)}")
    return list(_WORKOUT_TYPES[status])
