"""
Base types for exercise definitions.

ExerciseDefinition parameterises the progression planner and the rest
timer for one lift: the rep range double progression climbs through, the
load step, and how demanding the lift is (which sets the base rest).
"""

from dataclasses import dataclass

from ..models import Intensity

INTENSITIES: tuple[str, ...] = ("light", "moderate", "high")


@dataclass(frozen=True)
class ExerciseDefinition:
    """
    Configuration for one exercise.

    ``increment`` overrides the user's increment_unit for this lift when
    set (e.g. smaller jumps for overhead press than for deadlift).
    """

    # Identity
    exercise_id: str          # e.g. "bench_press"
    display_name: str         # e.g. "Bench Press"
    muscle_group: str = "other"

    # Rest timer
    intensity: Intensity = "moderate"

    # Progression
    rep_range: tuple[int, int] | None = None  # None → UserSettings.rep_range
    increment: float | None = None            # None → UserSettings.increment_unit

    def __post_init__(self) -> None:
        """Validate definition data."""
        if not self.exercise_id:
            raise ValueError("exercise_id must be a non-empty string")
        if self.intensity not in INTENSITIES:
            raise ValueError(
                f"Invalid intensity {self.intensity!r} for {self.exercise_id}. "
                f"Must be one of {INTENSITIES}"
            )
        if self.rep_range is not None:
            low, high = self.rep_range
            if low < 1 or high < low:
                raise ValueError(f"Invalid rep_range {self.rep_range} for {self.exercise_id}")
        if self.increment is not None and self.increment < 0:
            raise ValueError(f"increment must be non-negative for {self.exercise_id}")
