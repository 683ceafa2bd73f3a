"""
Progression plan generation for lift-metrics.

Projects target weight and reps for the next N weeks of one exercise from
its latest performance.  Five methods are available:

    linear              fixed weight increment per week, reps constant
    double_progression  reps climb through the rep range, then weight steps up
    percentage_based    ascending %1RM table applied to the estimated 1RM
    rpe_based           load chosen so the estimated RPE walks up a target band
    wave_loading        light / medium / heavy wave on top of a linear trend

Every method yields exactly `weeks` entries numbered from 1.  The readiness
band scales the final projected weight (never the reps), and the result is
then rounded to the user's rounding unit.
"""

import logging
import math
from typing import Literal, Sequence

from .config import (
    DEFAULT_PERCENTAGE_TABLE,
    DEFAULT_PLAN_WEEKS,
    DEFAULT_WAVE_PATTERN,
    RPE_MAX,
    RPE_STEP,
)
from .exercises.base import ExerciseDefinition
from .metrics import (
    as_number,
    best_set,
    one_rep_max,
    reps_for_fraction,
    sort_history,
    weight_for_reps,
)
from .models import (
    ProgressionWeek,
    ReadinessStatus,
    RecoveryStatus,
    UserSettings,
    WorkoutRecord,
    WorkoutSet,
)
from .readiness import progression_multiplier

logger = logging.getLogger(__name__)

ProgressionMethod = Literal[
    "linear",
    "double_progression",
    "percentage_based",
    "rpe_based",
    "wave_loading",
]
PROGRESSION_METHODS: tuple[str, ...] = (
    "linear",
    "double_progression",
    "percentage_based",
    "rpe_based",
    "wave_loading",
)

# (week, raw projected weight, projected reps) before readiness and rounding
_RawWeek = tuple[int, float, int | tuple[int, int]]


def round_to_unit(value: float, unit: float) -> float:
    """
    Round to the nearest multiple of `unit` (halves round up), never below 0.

    Raises:
        ValueError: If unit is not positive
    """
    if unit <= 0:
        raise ValueError(f"rounding unit must be positive, got {unit}")
    rounded = math.floor(value / unit + 0.5) * unit
    return max(0.0, round(rounded, 6))


def latest_performance(
    history: Sequence[WorkoutRecord],
    exercise_id: str,
) -> list[WorkoutSet]:
    """
    Sets of the exercise in the most recent workout that contains it.

    Returns:
        List of sets, empty if the exercise never appears
    """
    for record in reversed(sort_history(history)):
        entry = record.entry_for(exercise_id)
        if entry is not None:
            return list(entry.sets)
    return []


def _increment(exercise: ExerciseDefinition, settings: UserSettings) -> float:
    if exercise.increment is not None:
        return exercise.increment
    return settings.increment_unit


def _linear(base_weight: float, base_reps: int, weeks: int, inc: float) -> list[_RawWeek]:
    return [(k, base_weight + inc * k, base_reps) for k in range(1, weeks + 1)]


def _double_progression(
    base_weight: float,
    base_reps: int,
    weeks: int,
    inc: float,
    rep_range: tuple[int, int],
) -> list[_RawWeek]:
    """
    Add one rep per week until the top of the range, then reset reps to
    the bottom and add one increment.  Reps are emitted as (target, top).
    """
    low, high = rep_range
    weight = base_weight
    reps = base_reps
    plan: list[_RawWeek] = []
    for k in range(1, weeks + 1):
        if reps < low:
            reps = low
        elif reps >= high:
            reps = low
            weight += inc
        else:
            reps += 1
        plan.append((k, weight, (reps, high)))
    return plan


def _percentage_based(
    e1rm: float,
    weeks: int,
    inc: float,
    table: Sequence[float],
) -> list[_RawWeek]:
    """
    weight = (e1RM + inc * cycle) * table[week % len(table)]

    The table restarts when the horizon is longer than it; each restart
    assumes the 1RM has grown by one increment.
    """
    plan: list[_RawWeek] = []
    for i in range(weeks):
        cycle, step = divmod(i, len(table))
        pct = table[step]
        plan.append((i + 1, (e1rm + inc * cycle) * pct, reps_for_fraction(pct)))
    return plan


def _rpe_based(
    e1rm: float,
    reps: int,
    weeks: int,
    inc: float,
    rpe_band: tuple[float, float],
) -> list[_RawWeek]:
    """
    Target RPE climbs the band in 0.5 steps; the load is the Epley-inverted
    weight for reps + (10 - RPE) reps to failure.  Each pass through the
    band raises the working 1RM by one increment.
    """
    low, high = rpe_band
    steps = int(round((high - low) / RPE_STEP)) + 1
    plan: list[_RawWeek] = []
    for i in range(weeks):
        cycle, step = divmod(i, steps)
        target_rpe = min(high, low + RPE_STEP * step)
        reps_to_failure = reps + (RPE_MAX - target_rpe)
        plan.append((i + 1, weight_for_reps(e1rm + inc * cycle, reps_to_failure), reps))
    return plan


def _wave_loading(
    base_weight: float,
    base_reps: int,
    weeks: int,
    inc: float,
    pattern: Sequence[tuple[float, int]],
) -> list[_RawWeek]:
    """
    weight = (base + inc * week) * factor, reps = base_reps + rep_offset,
    with (factor, rep_offset) cycling through the wave pattern.
    """
    plan: list[_RawWeek] = []
    for k in range(1, weeks + 1):
        factor, rep_offset = pattern[(k - 1) % len(pattern)]
        plan.append((k, (base_weight + inc * k) * factor, max(0, base_reps + rep_offset)))
    return plan


def generate_progression_plan(
    exercise: ExerciseDefinition,
    last_performance: Sequence[WorkoutSet],
    method: ProgressionMethod,
    settings: UserSettings | None = None,
    weeks: int = DEFAULT_PLAN_WEEKS,
    readiness: RecoveryStatus | ReadinessStatus | None = None,
) -> list[ProgressionWeek]:
    """
    Project the next `weeks` weeks for one exercise.

    Base values come from the top set of the last performance (highest
    estimated 1RM).  An empty last performance, or a zero horizon, gives an
    empty plan: "no recommendation", not an error.

    Args:
        exercise: Exercise definition (rep range and increment)
        last_performance: Sets from the latest workout with this exercise
        method: Progression method name
        settings: User settings (defaults when None)
        weeks: Plan horizon in weeks
        readiness: Current readiness, scales the projected weight

    Returns:
        List of ProgressionWeek, week 1..weeks

    Raises:
        ValueError: If weeks is negative or the method is unknown
    """
    if method not in PROGRESSION_METHODS:
        raise ValueError(
            f"Unknown progression method {method!r}. Valid: {', '.join(PROGRESSION_METHODS)}"
        )
    if weeks < 0:
        raise ValueError(f"weeks must be non-negative, got {weeks}")

    top = best_set(last_performance)
    if top is None or weeks == 0:
        return []

    settings = settings or UserSettings()
    inc = _increment(exercise, settings)
    base_weight = as_number(top.weight)
    base_reps = int(as_number(top.reps))

    if method == "linear":
        raw = _linear(base_weight, base_reps, weeks, inc)

    elif method == "double_progression":
        rep_range = exercise.rep_range or settings.rep_range
        raw = _double_progression(base_weight, base_reps, weeks, inc, rep_range)

    elif method == "percentage_based":
        e1rm = one_rep_max(base_weight, base_reps) or base_weight
        table = settings.percentage_table or DEFAULT_PERCENTAGE_TABLE
        raw = _percentage_based(e1rm, weeks, inc, table)

    elif method == "rpe_based":
        rpe_low, rpe_high = settings.rpe_band
        logged_rpe = top.rpe if top.rpe is not None else (rpe_low + rpe_high) / 2
        reserve = max(0.0, RPE_MAX - min(RPE_MAX, as_number(logged_rpe)))
        e1rm = one_rep_max(base_weight, base_reps + reserve) or base_weight
        raw = _rpe_based(e1rm, max(1, base_reps), weeks, inc, settings.rpe_band)

    else:
        pattern = settings.wave_pattern or DEFAULT_WAVE_PATTERN
        raw = _wave_loading(base_weight, base_reps, weeks, inc, pattern)

    multiplier = progression_multiplier(readiness)
    plan = [
        ProgressionWeek(
            week=week,
            projected_weight=round_to_unit(weight * multiplier, settings.rounding_unit),
            projected_reps=reps,
        )
        for week, weight, reps in raw
    ]

    logger.debug(
        "Planned %d weeks of %s for %s (base %.1f x %d, readiness x%.2f)",
        len(plan), method, exercise.exercise_id, base_weight, base_reps, multiplier,
    )
    return plan


def plan_from_history(
    exercise: ExerciseDefinition,
    history: Sequence[WorkoutRecord],
    method: ProgressionMethod,
    settings: UserSettings | None = None,
    weeks: int = DEFAULT_PLAN_WEEKS,
    readiness: RecoveryStatus | ReadinessStatus | None = None,
) -> list[ProgressionWeek]:
    """Generate a plan from the latest workout in `history` that has the exercise."""
    return generate_progression_plan(
        exercise,
        latest_performance(history, exercise.exercise_id),
        method,
        settings=settings,
        weeks=weeks,
        readiness=readiness,
    )
