"""
Exercise registry.

All roster exercises are registered here, keyed by display name (the name
stored in history records).  Use get_exercise() when a name comes from user
input and must be valid; the engine itself uses find_exercise() and falls
back to documented defaults for unknown names.

Exercises are loaded from per-exercise YAML files in the bundled
``src/iron_log/exercises/`` directory at import time.  If nothing can be
loaded a RuntimeError is raised; the program cannot run without a roster.
"""

from ..models import SessionType
from .base import ExerciseDefinition


def _build_registry() -> dict[str, ExerciseDefinition]:
    from .loader import load_exercises_from_yaml

    loaded = load_exercises_from_yaml()
    if not loaded:
        raise RuntimeError(
            "iron-log: no exercise definitions could be loaded from YAML. "
            "Check that src/iron_log/exercises/*.yaml files are present and valid."
        )
    return loaded


EXERCISE_REGISTRY: dict[str, ExerciseDefinition] = _build_registry()

_ROSTER: dict[SessionType, tuple[ExerciseDefinition, ...]] = {
    st: tuple(
        sorted(
            (ex for ex in EXERCISE_REGISTRY.values() if ex.session_type is st),
            key=lambda ex: ex.order,
        )
    )
    for st in SessionType
}


def find_exercise(key: str) -> ExerciseDefinition | None:
    """Look up an exercise by name or exercise_id (case-insensitive)."""
    if key in EXERCISE_REGISTRY:
        return EXERCISE_REGISTRY[key]
    needle = key.strip().lower().replace("-", "_")
    for ex in EXERCISE_REGISTRY.values():
        if needle in (ex.exercise_id, ex.name.lower(), ex.name.lower().replace(" ", "_")):
            return ex
    return None


def get_exercise(key: str) -> ExerciseDefinition:
    """
    Return the ExerciseDefinition for the given name or exercise_id.

    Raises:
        ValueError: If the exercise is not in the registry
    """
    ex = find_exercise(key)
    if ex is None:
        valid = ", ".join(EXERCISE_REGISTRY)
        raise ValueError(f"Unknown exercise '{key}'. Valid names: {valid}")
    return ex


def roster_for(session_type: SessionType) -> tuple[ExerciseDefinition, ...]:
    """Exercises of a session type in the order they are performed."""
    return _ROSTER[session_type]


def session_type_for_exercise(name: str) -> SessionType | None:
    """Return the session type hosting the named exercise, or None if unknown."""
    ex = find_exercise(name)
    return ex.session_type if ex is not None else None
