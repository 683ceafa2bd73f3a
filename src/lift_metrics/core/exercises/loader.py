"""
YAML → ExerciseDefinition loader.

Loads exercise definitions from individual YAML files in the bundled
``src/lift_metrics/exercises/`` directory.  Each file (e.g. bench_press.yaml)
contains a flat exercise definition matching the ExerciseDefinition schema.

User overrides: place matching files in ``~/.lift-metrics/exercises/``.
A user file is deep-merged over the bundled definition, so only changed
keys need to be listed.  A user file whose name does not match any bundled
file is treated as a new exercise and added to the registry.

Usage (internal, called by registry.py):
    from .loader import load_exercises_from_yaml
    exercises = load_exercises_from_yaml()   # dict or None on failure
"""

from __future__ import annotations

import warnings
from pathlib import Path

from ..engine.config_loader import deep_merge, get_user_dir, load_optional_yaml
from .base import ExerciseDefinition

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset(
    {
        "exercise_id",
        "display_name",
        "intensity",
    }
)


def exercise_from_dict(d: dict) -> ExerciseDefinition:
    """Convert a raw dict (from YAML) to an ExerciseDefinition.

    Raises ValueError if any required field is absent or invalid.
    """
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"ExerciseDefinition missing fields: {sorted(missing)}")

    rep_range_raw = d.get("rep_range")
    rep_range = None
    if rep_range_raw is not None:
        low, high = rep_range_raw
        rep_range = (int(low), int(high))

    increment_raw = d.get("increment")

    return ExerciseDefinition(
        exercise_id=str(d["exercise_id"]),
        display_name=str(d["display_name"]),
        muscle_group=str(d.get("muscle_group", "other")),
        intensity=str(d["intensity"]),  # type: ignore[arg-type]
        rep_range=rep_range,
        increment=float(increment_raw) if increment_raw is not None else None,
    )


def _get_bundled_exercises_dir() -> Path | None:
    """Return path to the bundled exercises/ data directory, or None if not found."""
    # loader.py lives at src/lift_metrics/core/exercises/loader.py
    # three levels up → src/lift_metrics/
    candidate = Path(__file__).parent.parent.parent / "exercises"
    return candidate if candidate.is_dir() else None


def _get_user_exercises_dir() -> Path | None:
    """Return ~/.lift-metrics/exercises/ if it exists, else None."""
    p = get_user_dir() / "exercises"
    return p if p.is_dir() else None


def _add_exercise(result: dict[str, ExerciseDefinition], raw: dict, label: str) -> None:
    try:
        ex = exercise_from_dict(raw)
    except (ValueError, TypeError) as exc:
        warnings.warn(f"lift-metrics: skipping {label}: {exc}", stacklevel=3)
        return
    result[ex.exercise_id] = ex


def load_exercises_from_yaml() -> dict[str, ExerciseDefinition] | None:
    """Return {exercise_id: ExerciseDefinition} loaded from per-exercise YAML files.

    Loads each ``<exercise_id>.yaml`` from the bundled exercises/ directory.
    If a matching file exists in ``~/.lift-metrics/exercises/`` it is
    deep-merged over the bundled definition (user can override any field).
    User-only files (no bundled counterpart) are loaded as new exercises.

    Returns None (rather than raising) so the registry can report the failure.
    """
    bundled_dir = _get_bundled_exercises_dir()
    user_dir = _get_user_exercises_dir()

    if bundled_dir is None and user_dir is None:
        return None

    result: dict[str, ExerciseDefinition] = {}

    stems: dict[str, Path] = {}
    if bundled_dir is not None:
        for p in sorted(bundled_dir.glob("*.yaml")):
            stems[p.stem] = p

    user_only: list[Path] = []
    if user_dir is not None:
        for p in sorted(user_dir.glob("*.yaml")):
            if p.stem not in stems:
                user_only.append(p)

    for stem, bundled_path in stems.items():
        raw = load_optional_yaml(bundled_path, "bundled exercise")
        if not raw:
            continue
        if user_dir is not None:
            user_path = user_dir / f"{stem}.yaml"
            if user_path.exists():
                user_raw = load_optional_yaml(user_path, "user exercise")
                if user_raw:
                    raw = deep_merge(raw, user_raw)
        _add_exercise(result, raw, f"exercise '{stem}'")

    for p in user_only:
        raw = load_optional_yaml(p, "user exercise")
        if raw:
            _add_exercise(result, raw, f"user exercise '{p.stem}'")

    return result if result else None
