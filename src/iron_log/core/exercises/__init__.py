"""
Exercise definitions for iron-log.

Each exercise of the program roster is described by an ExerciseDefinition
loaded from the bundled YAML files.
"""

from .base import ExerciseDefinition
from .registry import (
    EXERCISE_REGISTRY,
    find_exercise,
    get_exercise,
    roster_for,
    session_type_for_exercise,
)

__all__ = [
    "ExerciseDefinition",
    "EXERCISE_REGISTRY",
    "find_exercise",
    "get_exercise",
    "roster_for",
    "session_type_for_exercise",
]
