"""
Pure metric computation functions.

Single-set math (estimated 1RM, volume), the per-workout series used
for strength trends, per-session exercise summaries and workout
frequency counts.  None of these functions raise on bad numbers: a
missing, negative or non-numeric weight/reps value counts as 0.
"""

import calendar
import math
from datetime import datetime, timedelta
from typing import Any, Literal, Sequence

from .config import EFFORT_LABELS, EFFORT_TOP_LABEL, EPLEY_DIVISOR
from .models import ExerciseEntry, ExerciseSummary, StrengthTrend, WorkoutRecord, WorkoutSet

SeriesMetric = Literal["weight", "volume", "one_rep_max"]
Timeframe = Literal["week", "month", "year", "all"]

SERIES_METRICS: tuple[str, ...] = ("weight", "volume", "one_rep_max")
TIMEFRAMES: tuple[str, ...] = ("week", "month", "year", "all")

# Locale-independent bucket labels; weeks start on Sunday
WEEKDAY_LABELS: tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_LABELS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def as_number(value: Any) -> float:
    """
    Coerce a raw field to a non-negative finite float.

    None, non-numeric, NaN, infinite and negative values all become 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return max(0.0, number)


def one_rep_max(weight: float, reps: float) -> float:
    """
    Estimate 1RM using the Epley formula.

    1RM = weight * (1 + reps/30)

    No extrapolation from degenerate sets: returns 0 when either weight or
    reps is not positive.

    Args:
        weight: Load lifted
        reps: Reps performed

    Returns:
        Estimated 1RM (same unit as weight)
    """
    w = as_number(weight)
    r = as_number(reps)
    if w <= 0 or r <= 0:
        return 0.0
    return w * (1 + r / EPLEY_DIVISOR)


def weight_for_reps(one_rm: float, reps: float) -> float:
    """
    Invert the Epley formula: the load that allows `reps` reps to failure.

    weight = 1RM / (1 + reps/30)
    """
    e1rm = as_number(one_rm)
    r = as_number(reps)
    if e1rm <= 0:
        return 0.0
    return e1rm / (1 + r / EPLEY_DIVISOR)


def reps_for_fraction(fraction: float) -> int:
    """
    Reps to failure at a given fraction of 1RM (Epley inverted), minimum 1.

    reps = 30 * (1/fraction - 1)
    """
    if fraction <= 0:
        return 1
    return max(1, round(EPLEY_DIVISOR * (1 / fraction - 1)))


def set_weight_reps(workout_set: WorkoutSet) -> tuple[float, float]:
    """Return (weight, reps) of a set with invalid values mapped to 0."""
    return as_number(workout_set.weight), as_number(workout_set.reps)


def set_volume(sets: Sequence[WorkoutSet]) -> float:
    """
    Total volume of a list of sets: sum(weight * reps).

    Completed and uncompleted sets both count; callers filter if they want
    completed volume only.
    """
    total = 0.0
    for s in sets:
        weight, reps = set_weight_reps(s)
        total += weight * reps
    return total


def exercise_volume(entry: ExerciseEntry | None) -> float:
    """Volume of one exercise within one workout (0 if absent)."""
    if entry is None:
        return 0.0
    return set_volume(entry.sets)


def set_one_rep_max(workout_set: WorkoutSet) -> float:
    """Estimated 1RM of a single set."""
    weight, reps = set_weight_reps(workout_set)
    return one_rep_max(weight, reps)


def best_set(sets: Sequence[WorkoutSet]) -> WorkoutSet | None:
    """
    Pick the top set: highest estimated 1RM, ties broken by heavier weight,
    then by earlier position.

    Returns:
        The top set, or None for an empty list
    """
    best: WorkoutSet | None = None
    best_key: tuple[float, float] = (-1.0, -1.0)
    for s in sets:
        key = (set_one_rep_max(s), as_number(s.weight))
        if key > best_key:
            best, best_key = s, key
    return best


def effort_label(rpe: float | None) -> str | None:
    """
    Map an RPE rating to its effort label.

    Returns:
        "very_easy" | "easy" | "moderate" | "hard" | "very_hard", or None
        when no RPE was reported
    """
    if rpe is None:
        return None
    value = as_number(rpe)
    for upper, label in EFFORT_LABELS:
        if value <= upper:
            return label
    return EFFORT_TOP_LABEL


def sort_history(history: Sequence[WorkoutRecord]) -> list[WorkoutRecord]:
    """Return history sorted ascending by timestamp (stable for equal dates)."""
    return sorted(history, key=lambda r: r.timestamp)


def _months_back(moment: datetime, months: int) -> datetime:
    """Shift back by whole calendar months, clamping to the month's last day."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def timeframe_start(timeframe: Timeframe, now: datetime) -> datetime | None:
    """
    First moment included by a timeframe filter.

    Raises:
        ValueError: If timeframe is unknown
    """
    if timeframe == "week":
        return now - timedelta(days=7)
    if timeframe == "month":
        return _months_back(now, 1)
    if timeframe == "year":
        return _months_back(now, 12)
    if timeframe == "all":
        return None
    raise ValueError(f"Unknown timeframe {timeframe!r}. Valid: {', '.join(TIMEFRAMES)}")


def _entry_metric(entry: ExerciseEntry, metric: SeriesMetric) -> float:
    if metric == "weight":
        return max((as_number(s.weight) for s in entry.sets), default=0.0)
    if metric == "volume":
        return exercise_volume(entry)
    top = best_set(entry.sets)
    return set_one_rep_max(top) if top is not None else 0.0


def exercise_series(
    history: Sequence[WorkoutRecord],
    exercise_id: str,
    metric: SeriesMetric,
    timeframe: Timeframe = "all",
    now: datetime | None = None,
) -> list[tuple[str, float]]:
    """
    Per-workout values of one metric for one exercise, oldest first.

    weight       heaviest set of the workout
    volume       exercise volume of the workout
    one_rep_max  estimated 1RM of the top set

    Workouts without the exercise, and zero values, are left out.

    Args:
        history: Workout history in any order
        exercise_id: Exercise to extract
        metric: Which value to extract
        timeframe: "week" | "month" | "year" | "all"
        now: Reference time for the timeframe (defaults to datetime.now())

    Returns:
        List of (date, value) tuples

    Raises:
        ValueError: If metric or timeframe is unknown
    """
    if metric not in SERIES_METRICS:
        raise ValueError(f"Unknown metric {metric!r}. Valid: {', '.join(SERIES_METRICS)}")
    start = timeframe_start(timeframe, now or datetime.now())

    points: list[tuple[str, float]] = []
    for record in sort_history(history):
        if start is not None and record.timestamp < start:
            continue
        entry = record.entry_for(exercise_id)
        if entry is None:
            continue
        value = _entry_metric(entry, metric)
        if value > 0:
            points.append((record.date, value))
    return points


def strength_trend(series: Sequence[tuple[str, float]]) -> StrengthTrend:
    """
    Compare the first and last point of a series.

    Returns:
        StrengthTrend with direction and percentage change; neutral with 0%
        for fewer than two points
    """
    if len(series) < 2:
        return StrengthTrend(direction="neutral", percentage_change=0.0)

    first = series[0][1]
    last = series[-1][1]
    if last > first:
        direction = "positive"
    elif last < first:
        direction = "negative"
    else:
        direction = "neutral"

    change = (last - first) / first * 100 if first > 0 else 0.0
    return StrengthTrend(
        direction=direction,
        percentage_change=change,
        first=first,
        last=last,
    )


def summarize_entry(
    entry: ExerciseEntry,
    date: str,
    previous: ExerciseEntry | None = None,
) -> ExerciseSummary:
    """
    Summarize one session of an exercise.

    Volume change is measured against the previous session of the same
    exercise when one is given.

    Args:
        entry: The session to summarize
        date: Date of the workout the entry belongs to
        previous: The same exercise from the preceding session, if any

    Returns:
        ExerciseSummary
    """
    pairs = [set_weight_reps(s) for s in entry.sets]
    volume = set_volume(entry.sets)

    change = 0.0
    change_pct = 0.0
    if previous is not None:
        previous_volume = set_volume(previous.sets)
        change = volume - previous_volume
        change_pct = change / previous_volume * 100 if previous_volume > 0 else 0.0

    return ExerciseSummary(
        exercise_id=entry.exercise_id,
        date=date,
        total_sets=len(entry.sets),
        total_reps=int(sum(reps for _, reps in pairs)),
        total_volume=volume,
        top_weight=max((weight for weight, _ in pairs), default=0.0),
        top_reps=int(max((reps for _, reps in pairs), default=0.0)),
        one_rep_max=max((set_one_rep_max(s) for s in entry.sets), default=0.0),
        volume_change=change,
        volume_change_pct=change_pct,
        has_previous=previous is not None,
    )


def session_summaries(history: Sequence[WorkoutRecord], exercise_id: str) -> list[ExerciseSummary]:
    """Summaries of every session of one exercise, oldest first."""
    summaries: list[ExerciseSummary] = []
    previous: ExerciseEntry | None = None
    for record in sort_history(history):
        entry = record.entry_for(exercise_id)
        if entry is None:
            continue
        summaries.append(summarize_entry(entry, record.date, previous))
        previous = entry
    return summaries


def workout_frequency(
    history: Sequence[WorkoutRecord],
    timeframe: Timeframe,
    now: datetime | None = None,
) -> list[tuple[str, int]]:
    """
    Count workouts per calendar bucket.

    week   per weekday of the current Sunday-based week, up to now
    month  per day of the current month
    year   per month of the current year
    all    per year, oldest first

    Returns:
        List of (label, count) tuples; empty buckets are kept except for "all"

    Raises:
        ValueError: If timeframe is unknown
    """
    now = now or datetime.now()

    if timeframe == "week":
        days_since_sunday = (now.weekday() + 1) % 7
        start = datetime(now.year, now.month, now.day) - timedelta(days=days_since_sunday)
        counts = [0] * 7
        for record in history:
            if start <= record.timestamp <= now:
                counts[(record.timestamp.weekday() + 1) % 7] += 1
        return list(zip(WEEKDAY_LABELS, counts))

    if timeframe == "month":
        days = calendar.monthrange(now.year, now.month)[1]
        counts = [0] * days
        for record in history:
            moment = record.timestamp
            if moment.year == now.year and moment.month == now.month:
                counts[moment.day - 1] += 1
        return [(str(day), count) for day, count in enumerate(counts, start=1)]

    if timeframe == "year":
        counts = [0] * 12
        for record in history:
            if record.timestamp.year == now.year:
                counts[record.timestamp.month - 1] += 1
        return list(zip(MONTH_LABELS, counts))

    if timeframe == "all":
        by_year: dict[int, int] = {}
        for record in history:
            year = record.timestamp.year
            by_year[year] = by_year.get(year, 0) + 1
        return [(str(year), by_year[year]) for year in sorted(by_year)]

    raise ValueError(f"Unknown timeframe {timeframe!r}. Valid: {', '.join(TIMEFRAMES)}")
