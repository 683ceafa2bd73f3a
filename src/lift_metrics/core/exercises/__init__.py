"""
Exercise definitions for lift-metrics.

Each exercise is described by an ExerciseDefinition object that
parameterises the progression planner and the rest timer.
"""

from .base import ExerciseDefinition
from .registry import EXERCISE_REGISTRY, find_exercise, get_exercise

__all__ = [
    "ExerciseDefinition",
    "EXERCISE_REGISTRY",
    "find_exercise",
    "get_exercise",
]
