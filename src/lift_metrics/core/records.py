"""
Personal record tracking.

Scans an exercise's history for the best value of each tracked metric.
Each metric is tracked independently: the heaviest set need not be the
highest-volume workout.
"""

from typing import Sequence

from .metrics import as_number, exercise_volume, set_one_rep_max, sort_history
from .models import PersonalRecord, RecordMetric, WorkoutRecord

RECORD_METRICS: tuple[RecordMetric, ...] = ("weight", "reps", "volume", "one_rep_max")


def personal_records(
    history: Sequence[WorkoutRecord],
    exercise_id: str,
) -> list[PersonalRecord]:
    """
    Find personal records for one exercise.

    weight, reps and one_rep_max are per set; volume is per workout.
    History is re-sorted ascending and only a strictly better value replaces
    the current best, so ties keep the earliest date.  Metrics whose best
    value is 0 are omitted.

    Args:
        history: Workout history in any order
        exercise_id: Exercise to scan

    Returns:
        Records in RECORD_METRICS order, omitting metrics with no data
    """
    best: dict[str, PersonalRecord] = {}

    def consider(metric: RecordMetric, value: float, record: PersonalRecord) -> None:
        if value <= 0:
            return
        current = best.get(metric)
        if current is None or value > current.value:
            best[metric] = record

    for workout in sort_history(history):
        entry = workout.entry_for(exercise_id)
        if entry is None:
            continue

        for s in entry.sets:
            weight = as_number(s.weight)
            reps = int(as_number(s.reps))
            e1rm = set_one_rep_max(s)
            for metric, value in (("weight", weight), ("reps", reps), ("one_rep_max", e1rm)):
                consider(
                    metric,  # type: ignore[arg-type]
                    value,
                    PersonalRecord(
                        metric=metric,  # type: ignore[arg-type]
                        date=workout.date,
                        weight=weight,
                        reps=reps,
                        one_rep_max=e1rm,
                    ),
                )

        volume = exercise_volume(entry)
        consider("volume", volume, PersonalRecord(metric="volume", date=workout.date, volume=volume))

    return [best[m] for m in RECORD_METRICS if m in best]


def record_for(records: Sequence[PersonalRecord], metric: RecordMetric) -> PersonalRecord | None:
    """Return the record for one metric, or None if it was omitted."""
    for record in records:
        if record.metric == metric:
            return record
    return None
