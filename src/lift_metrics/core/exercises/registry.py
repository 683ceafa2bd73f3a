"""
Exercise registry.

All catalogued exercises are registered here.  Use get_exercise() to
look up an ExerciseDefinition by its exercise_id string.

Exercises are loaded from per-exercise YAML files in the bundled
``src/lift_metrics/exercises/`` directory at import time.  If no
definition can be loaded, a RuntimeError is raised.

User overrides: place matching files in ``~/.lift-metrics/exercises/``.
"""

from .base import ExerciseDefinition


def _build_registry() -> dict[str, ExerciseDefinition]:
    from .loader import load_exercises_from_yaml

    loaded = load_exercises_from_yaml()
    if not loaded:
        raise RuntimeError(
            "lift-metrics: no exercise definitions could be loaded from YAML. "
            "Check that src/lift_metrics/exercises/*.yaml files are present and valid."
        )
    return loaded


EXERCISE_REGISTRY: dict[str, ExerciseDefinition] = _build_registry()


def get_exercise(exercise_id: str) -> ExerciseDefinition:
    """
    Return the ExerciseDefinition for the given exercise_id.

    Raises:
        ValueError: If exercise_id is not in the registry
    """
    if exercise_id not in EXERCISE_REGISTRY:
        valid = ", ".join(EXERCISE_REGISTRY)
        raise ValueError(f"Unknown exercise '{exercise_id}'. Valid IDs: {valid}")
    return EXERCISE_REGISTRY[exercise_id]


def find_exercise(exercise_id: str) -> ExerciseDefinition:
    """
    Like get_exercise(), but uncatalogued ids get a generic moderate-intensity
    definition instead of an error.  History can contain any exercise id.
    """
    if exercise_id in EXERCISE_REGISTRY:
        return EXERCISE_REGISTRY[exercise_id]
    return ExerciseDefinition(
        exercise_id=exercise_id,
        display_name=exercise_id.replace("_", " ").title(),
    )
