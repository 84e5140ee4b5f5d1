"""
YAML → ExerciseDefinition loader.

Loads exercise definitions from individual YAML files in the bundled
``src/iron_log/exercises/`` directory.  Each file (e.g. squat.yaml)
contains a flat exercise definition matching the ExerciseDefinition schema.

User overrides: place matching files in ``~/.iron-log/exercises/``.
A user file is deep-merged over the bundled definition, so only changed
keys need to be listed (e.g. ``rest_seconds: 240``).  User files without a
bundled counterpart are ignored: the roster is fixed by the program.

Usage (internal, called by registry.py):
    from .loader import load_exercises_from_yaml
    exercises = load_exercises_from_yaml()   # dict or None on failure
"""

from __future__ import annotations

import os
import warnings
from pathlib import Path

import yaml

from ..models import Category, SessionType
from .base import ExerciseDefinition

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset(
    {
        "exercise_id",
        "name",
        "category",
        "session_type",
        "order",
        "is_primary",
        "upper_body",
        "rest_seconds",
    }
)


def exercise_from_dict(d: dict) -> ExerciseDefinition:
    """Convert a raw dict (from YAML) to an ExerciseDefinition.

    Raises ValueError if any required field is absent or an enum value is unknown.
    """
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"ExerciseDefinition missing fields: {sorted(missing)}")

    start = d.get("start_weight") or {}
    rest_seconds = int(d["rest_seconds"])
    if rest_seconds < 0:
        raise ValueError("rest_seconds must be non-negative")

    return ExerciseDefinition(
        exercise_id=str(d["exercise_id"]),
        name=str(d["name"]),
        category=Category(d["category"]),
        session_type=SessionType(d["session_type"]),
        order=int(d["order"]),
        is_primary=bool(d["is_primary"]),
        upper_body=bool(d["upper_body"]),
        rest_seconds=rest_seconds,
        start_field=start.get("field"),
        start_factor=float(start.get("factor", 1.0)),
        start_floor=float(start.get("floor", 0.0)),
        cap_field=d.get("cap_field"),
    )


def _load_yaml_file(path: Path) -> dict:
    """Load a YAML file; return {} if it is unreadable or not a mapping."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"iron-log: cannot read {path}: {exc}", stacklevel=2)
        return {}
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


def _get_bundled_exercises_dir() -> Path | None:
    """Return path to the bundled exercises/ data directory, or None if not found."""
    # loader.py lives at src/iron_log/core/exercises/loader.py
    # three levels up → src/iron_log/
    candidate = Path(__file__).parent.parent.parent / "exercises"
    return candidate if candidate.is_dir() else None


def _get_user_exercises_dir() -> Path | None:
    """Return ~/.iron-log/exercises/ if it exists, else None."""
    home = Path(os.environ.get("HOME", "~")).expanduser()
    p = home / ".iron-log" / "exercises"
    return p if p.is_dir() else None


def load_exercises_from_yaml() -> dict[str, ExerciseDefinition] | None:
    """Return {name: ExerciseDefinition} loaded from per-exercise YAML files.

    Loads each ``<exercise_id>.yaml`` from the bundled exercises/ directory.
    If a matching file exists in ``~/.iron-log/exercises/`` it is deep-merged
    over the bundled definition.  A merged file that fails validation falls
    back to the bundled definition with a warning.

    Returns None when nothing could be loaded so the registry can report it.
    """
    bundled_dir = _get_bundled_exercises_dir()
    if bundled_dir is None:
        return None
    user_dir = _get_user_exercises_dir()

    result: dict[str, ExerciseDefinition] = {}

    for bundled_path in sorted(bundled_dir.glob("*.yaml")):
        stem = bundled_path.stem
        raw = _load_yaml_file(bundled_path)
        if not raw:
            continue

        merged = raw
        if user_dir is not None:
            user_path = user_dir / f"{stem}.yaml"
            if user_path.exists():
                user_raw = _load_yaml_file(user_path)
                if user_raw:
                    merged = _deep_merge(raw, user_raw)

        try:
            ex = exercise_from_dict(merged)
        except ValueError as exc:
            if merged is raw:
                warnings.warn(f"iron-log: skipping exercise '{stem}': {exc}", stacklevel=2)
                continue
            warnings.warn(
                f"iron-log: ignoring user override for '{stem}': {exc}",
                stacklevel=2,
            )
            ex = exercise_from_dict(raw)
        result[ex.name] = ex

    return result if result else None
