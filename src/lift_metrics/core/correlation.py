"""
Correlation between wellness signals and workout performance.

Pairs each wellness observation with the workout on the aligned calendar
day, then computes the Pearson coefficient over the pairs.

Alignment:
    sleep     night of day D  → workout on D+1
    stress    reading on day D → workout on D
    recovery  score for day D  → workout on D+1

Pairs need an exact day match; unmatched observations are dropped, never
imputed.  Performance is the share of the day's sets that were completed.
"""

import math
from datetime import date, timedelta
from typing import Sequence

from .config import (
    DIRECTION_THRESHOLD,
    MIN_CORRELATION_PAIRS,
    RECOVERY_PAIR_OFFSET_DAYS,
    SLEEP_PAIR_OFFSET_DAYS,
    STRENGTH_MODERATE_BELOW,
    STRENGTH_WEAK_BELOW,
    STRESS_PAIR_OFFSET_DAYS,
    VARIANCE_EPSILON,
)
from .metrics import as_number, sort_history
from .models import (
    CorrelationMetric,
    CorrelationResult,
    SleepSample,
    StressSample,
    WorkoutRecord,
)
from .readiness import recovery_score

CORRELATION_METRICS: tuple[str, ...] = ("sleep", "stress", "recovery")

Point = tuple[float, float]


def workout_performance(record: WorkoutRecord) -> float:
    """
    Performance score 0–100: completed sets / total sets * 100.

    A workout with no sets scores 0.
    """
    sets = record.all_sets
    if not sets:
        return 0.0
    completed = sum(1 for s in sets if s.completed)
    return completed / len(sets) * 100


def _performance_by_day(workouts: Sequence[WorkoutRecord]) -> dict[date, float]:
    # Ascending order, so the latest workout of a day wins
    by_day: dict[date, float] = {}
    for record in sort_history(workouts):
        by_day[record.day] = workout_performance(record)
    return by_day


def pair_observations(
    metric: CorrelationMetric,
    sleep: Sequence[SleepSample],
    stress: Sequence[StressSample],
    workouts: Sequence[WorkoutRecord],
) -> list[Point]:
    """
    Build (wellness value, performance) pairs for one metric.

    For "recovery", the sleep of a day is combined with a stress reading
    from the same day (neutral stress term if there is none); days with
    stress but no sleep are skipped.

    Raises:
        ValueError: If metric is unknown
    """
    if metric not in CORRELATION_METRICS:
        raise ValueError(f"Unknown metric {metric!r}. Valid: {', '.join(CORRELATION_METRICS)}")

    performance = _performance_by_day(workouts)
    points: list[Point] = []

    if metric == "sleep":
        offset = timedelta(days=SLEEP_PAIR_OFFSET_DAYS)
        for sample in sorted(sleep, key=lambda s: s.timestamp):
            target = performance.get(sample.day + offset)
            if target is not None:
                points.append((as_number(sample.quality), target))

    elif metric == "stress":
        offset = timedelta(days=STRESS_PAIR_OFFSET_DAYS)
        for reading in sorted(stress, key=lambda s: s.timestamp):
            target = performance.get(reading.day + offset)
            if target is not None:
                points.append((as_number(reading.level), target))

    else:
        offset = timedelta(days=RECOVERY_PAIR_OFFSET_DAYS)
        sleep_by_day: dict[date, float] = {}
        for sample in sorted(sleep, key=lambda s: s.timestamp):
            sleep_by_day[sample.day] = as_number(sample.quality)
        stress_by_day: dict[date, float] = {}
        for reading in sorted(stress, key=lambda s: s.timestamp):
            stress_by_day[reading.day] = as_number(reading.level)

        for day in sorted(sleep_by_day):
            target = performance.get(day + offset)
            if target is None:
                continue
            score = recovery_score(sleep_by_day[day], stress_by_day.get(day))
            if score is not None:
                points.append((score, target))

    return points


def _is_flat(variance: float, values: Sequence[float]) -> bool:
    return variance <= VARIANCE_EPSILON * math.fsum(v * v for v in values)


def pearson(points: Sequence[Point]) -> float:
    """
    Pearson correlation coefficient.

    r = Σ(x − x̄)(y − ȳ) / sqrt(Σ(x − x̄)² · Σ(y − ȳ)²)

    Returns 0 for fewer than two points or when either series is constant.
    Sums are taken around the means so a constant series gives 0, not
    rounding noise.
    """
    n = len(points)
    if n < MIN_CORRELATION_PAIRS:
        return 0.0

    xs = [x for x, _ in points]
    ys = [y for _, y in points]
    mean_x = math.fsum(xs) / n
    mean_y = math.fsum(ys) / n
    dx = [x - mean_x for x in xs]
    dy = [y - mean_y for y in ys]

    var_x = math.fsum(d * d for d in dx)
    var_y = math.fsum(d * d for d in dy)
    if _is_flat(var_x, xs) or _is_flat(var_y, ys):
        return 0.0

    covariance = math.fsum(a * b for a, b in zip(dx, dy))
    r = covariance / math.sqrt(var_x * var_y)
    return max(-1.0, min(1.0, r))


def classify_correlation(coefficient: float, sample_size: int) -> CorrelationResult:
    """
    Attach strength and direction to a coefficient.

    Strength: |r| < 0.3 weak, < 0.7 moderate, otherwise strong.
    Direction: r > 0.1 positive, r < -0.1 negative, otherwise none.
    With fewer than two pairs the coefficient is forced to 0.
    """
    if sample_size < MIN_CORRELATION_PAIRS:
        coefficient = 0.0

    magnitude = abs(coefficient)
    if magnitude < STRENGTH_WEAK_BELOW:
        strength = "weak"
    elif magnitude < STRENGTH_MODERATE_BELOW:
        strength = "moderate"
    else:
        strength = "strong"

    if coefficient > DIRECTION_THRESHOLD:
        direction = "positive"
    elif coefficient < -DIRECTION_THRESHOLD:
        direction = "negative"
    else:
        direction = "none"

    return CorrelationResult(
        coefficient=coefficient,
        strength=strength,  # type: ignore[arg-type]
        direction=direction,  # type: ignore[arg-type]
        sample_size=sample_size,
    )


def correlate(
    metric: CorrelationMetric,
    sleep: Sequence[SleepSample],
    stress: Sequence[StressSample],
    workouts: Sequence[WorkoutRecord],
) -> CorrelationResult:
    """
    Correlate a wellness metric with workout performance.

    Check `result.has_enough_data` before presenting the coefficient: with
    fewer than two pairs it is 0 by definition, not a measured correlation.
    """
    points = pair_observations(metric, sleep, stress, workouts)
    return classify_correlation(pearson(points), len(points))
