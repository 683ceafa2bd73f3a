"""
JSON serialization for lift-metrics data models.

Handles conversion between dataclasses and JSON-compatible dicts.  Input
records may use the camelCase keys written by the mobile app
(``startTime``, ``deepSleepDuration``, ``exerciseId``...) or snake_case.
"""

import json
from typing import Any

from ..core.models import (
    CorrelationResult,
    ExerciseEntry,
    ExerciseSummary,
    HydrationSample,
    PersonalRecord,
    ProgressionWeek,
    RecoveryStatus,
    RestTimerState,
    SleepSample,
    StrengthTrend,
    StressSample,
    WorkoutRecord,
    WorkoutSet,
)
from ..core.wellness import SleepPhases


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present key's value."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _require(data: dict[str, Any], *keys: str) -> Any:
    value = _pick(data, *keys)
    if value is None:
        raise ValidationError(f"Missing required field: {keys[0]}")
    return value


def _require_mapping(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


def dict_to_workout_set(data: dict[str, Any]) -> WorkoutSet:
    """
    Convert dict to WorkoutSet.

    Numbers are passed through unchanged; the metric layer treats missing
    or invalid values as 0.
    """
    data = _require_mapping(data, "set")
    return WorkoutSet(
        weight=_pick(data, "weight", default=0.0),
        reps=_pick(data, "reps", default=0),
        rpe=_pick(data, "rpe"),
        completed=bool(_pick(data, "completed", default=False)),
    )


def dict_to_exercise_entry(data: dict[str, Any]) -> ExerciseEntry:
    """
    Convert dict to ExerciseEntry.

    Raises:
        ValidationError: If the exercise id is missing or sets is not a list
    """
    data = _require_mapping(data, "exercise")
    exercise_id = _require(data, "exercise_id", "exerciseId", "id")
    sets = data.get("sets", [])
    if not isinstance(sets, list):
        raise ValidationError(f"sets of exercise {exercise_id!r} must be a list")
    return ExerciseEntry(
        exercise_id=str(exercise_id),
        sets=[dict_to_workout_set(s) for s in sets],
    )


def dict_to_workout_record(data: dict[str, Any]) -> WorkoutRecord:
    """
    Convert dict to WorkoutRecord.

    Raises:
        ValidationError: If the date is missing or invalid
    """
    data = _require_mapping(data, "workout")
    exercises = data.get("exercises", [])
    if not isinstance(exercises, list):
        raise ValidationError("exercises must be a list")
    workout_id = _pick(data, "workout_id", "id")
    try:
        return WorkoutRecord(
            date=_require(data, "date"),
            exercises=[dict_to_exercise_entry(e) for e in exercises],
            workout_id=str(workout_id) if workout_id is not None else None,
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def dict_to_sleep_sample(data: dict[str, Any]) -> SleepSample:
    """
    Convert dict to SleepSample.

    Raises:
        ValidationError: If start time, duration or quality is missing
    """
    data = _require_mapping(data, "sleep sample")
    try:
        return SleepSample(
            start_time=_require(data, "start_time", "startTime"),
            duration=_require(data, "duration"),
            quality=_require(data, "quality"),
            deep_sleep_duration=_pick(data, "deep_sleep_duration", "deepSleepDuration", default=0.0),
            rem_sleep_duration=_pick(data, "rem_sleep_duration", "remSleepDuration", default=0.0),
            light_sleep_duration=_pick(data, "light_sleep_duration", "lightSleepDuration", default=0.0),
            awake_time=_pick(data, "awake_time", "awakeTime", default=0.0),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def dict_to_stress_sample(data: dict[str, Any]) -> StressSample:
    """Convert dict to StressSample."""
    data = _require_mapping(data, "stress sample")
    try:
        return StressSample(date=_require(data, "date"), level=_require(data, "level"))
    except ValueError as e:
        raise ValidationError(str(e)) from e


def dict_to_hydration_sample(data: dict[str, Any]) -> HydrationSample:
    """Convert dict to HydrationSample.  ``amount`` is read as millilitres."""
    data = _require_mapping(data, "hydration sample")
    try:
        return HydrationSample(
            date=_require(data, "date"),
            amount_ml=_require(data, "amount_ml", "amount"),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def parse_jsonl_line(line: str) -> dict[str, Any]:
    """
    Parse one JSONL line into a dict.

    Raises:
        ValidationError: If the line is not a JSON object
    """
    try:
        data = json.loads(line.strip())
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e
    return _require_mapping(data, "line")


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def personal_record_to_dict(record: PersonalRecord) -> dict[str, Any]:
    return {
        "metric": record.metric,
        "value": round(record.value, 2),
        "date": record.date,
        "weight": record.weight,
        "reps": record.reps,
        "volume": round(record.volume, 2),
        "one_rep_max": round(record.one_rep_max, 2),
    }


def progression_week_to_dict(week: ProgressionWeek) -> dict[str, Any]:
    """Rep ranges are written as {"low": .., "high": ..}."""
    reps: Any = week.projected_reps
    if isinstance(reps, tuple):
        reps = {"low": reps[0], "high": reps[1]}
    return {
        "week": week.week,
        "projected_weight": week.projected_weight,
        "projected_reps": reps,
    }


def recovery_status_to_dict(status: RecoveryStatus | None) -> dict[str, Any] | None:
    if status is None:
        return None
    return {
        "status": status.status,
        "score": round(status.score, 1),
        "sleep_quality": status.sleep_quality,
        "stress_level": status.stress_level,
    }


def correlation_result_to_dict(result: CorrelationResult) -> dict[str, Any]:
    return {
        "coefficient": round(result.coefficient, 4),
        "strength": result.strength,
        "direction": result.direction,
        "sample_size": result.sample_size,
        "has_enough_data": result.has_enough_data,
        "description": result.description,
    }


def strength_trend_to_dict(trend: StrengthTrend) -> dict[str, Any]:
    return {
        "direction": trend.direction,
        "percentage_change": round(trend.percentage_change, 2),
        "first": trend.first,
        "last": trend.last,
    }


def exercise_summary_to_dict(summary: ExerciseSummary) -> dict[str, Any]:
    return {
        "exercise_id": summary.exercise_id,
        "date": summary.date,
        "total_sets": summary.total_sets,
        "total_reps": summary.total_reps,
        "total_volume": round(summary.total_volume, 2),
        "top_weight": summary.top_weight,
        "top_reps": summary.top_reps,
        "one_rep_max": round(summary.one_rep_max, 2),
        "volume_change": round(summary.volume_change, 2) if summary.has_previous else None,
        "volume_change_pct": round(summary.volume_change_pct, 2) if summary.has_previous else None,
    }


def sleep_phases_to_dict(phases: SleepPhases) -> dict[str, float]:
    return {
        "deep": round(phases.deep, 1),
        "rem": round(phases.rem, 1),
        "light": round(phases.light, 1),
        "awake": round(phases.awake, 1),
    }


def timer_state_to_dict(state: RestTimerState) -> dict[str, Any]:
    return {
        "remaining_seconds": state.remaining_seconds,
        "recommended_seconds": state.recommended_seconds,
        "is_running": state.is_running,
        "is_paused": state.is_paused,
        "phase": state.phase,
    }
