"""
JSON serialization for training data models.

Handles conversion between the frozen dataclasses and JSON-compatible
dicts, one session per JSON line, plus parsing of the sets strings typed on
the command line.
"""

import json
import re
from dataclasses import fields
from datetime import datetime
from typing import Any

from ..core.models import (
    CardioResult,
    Category,
    ExerciseLog,
    SessionRecord,
    SessionStatus,
    SessionType,
    SetRating,
    UserProfile,
    WorkingSet,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def _validate_enum(enum_cls, value: Any, name: str):
    try:
        return enum_cls(value)
    except ValueError as e:
        valid = tuple(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {name}: {value!r}. Must be one of {valid}") from e


def validate_session_type(session_type: str) -> SessionType:
    """
    Validate session type.

    Raises:
        ValidationError: If session type is invalid
    """
    return _validate_enum(SessionType, session_type, "session_type")


def validate_category(category: str) -> Category:
    """Validate an exercise category."""
    return _validate_enum(Category, category, "category")


def validate_rating(rating: str | None) -> SetRating:
    """Validate a set rating; a missing rating means unrated."""
    return _validate_enum(SetRating, rating or "", "rating")


def _validate_number(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {value!r}")


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is a non-negative number.

    Raises:
        ValidationError: If value is not a number or is negative
    """
    _validate_number(value, name)
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_positive(value: int | float, name: str) -> int | float:
    """
    Validate that a value is a positive number.

    Raises:
        ValidationError: If value is not a number or is not positive
    """
    _validate_number(value, name)
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


# =============================================================================
# Sets
# =============================================================================


def working_set_to_dict(ws: WorkingSet) -> dict[str, Any]:
    """Convert WorkingSet to a compact dict; unrated sets and zero rest are omitted."""
    d: dict[str, Any] = {
        "set_number": ws.set_number,
        "target_reps": ws.target_reps,
        "weight_lbs": ws.weight_lbs,
        "actual_reps": ws.actual_reps,
        "completed": ws.completed,
    }
    if ws.rating is not SetRating.UNRATED:
        d["rating"] = ws.rating.value
    if ws.rest_taken_seconds:
        d["rest_taken_seconds"] = ws.rest_taken_seconds
    return d


def dict_to_working_set(data: dict[str, Any]) -> WorkingSet:
    """
    Convert dict to WorkingSet.

    A set stored with only ``actual_reps`` takes its target from it.

    Raises:
        ValidationError: If data is invalid
    """
    actual_reps = data.get("actual_reps", 0)
    target_reps = data.get("target_reps", actual_reps)

    validate_positive(data.get("set_number", 0), "set_number")
    validate_non_negative(target_reps, "target_reps")
    validate_non_negative(actual_reps, "actual_reps")
    validate_non_negative(data.get("weight_lbs", 0), "weight_lbs")
    validate_non_negative(data.get("rest_taken_seconds", 0), "rest_taken_seconds")

    return WorkingSet(
        set_number=int(data["set_number"]),
        target_reps=int(target_reps),
        weight_lbs=float(data.get("weight_lbs", 0.0)),
        actual_reps=int(actual_reps),
        completed=bool(data.get("completed", False)),
        rating=validate_rating(data.get("rating")),
        rest_taken_seconds=int(data.get("rest_taken_seconds", 0)),
    )


def exercise_log_to_dict(log: ExerciseLog) -> dict[str, Any]:
    """Convert ExerciseLog to JSON-compatible dict."""
    return {
        "name": log.name,
        "category": log.category.value,
        "is_primary": log.is_primary,
        "target_sets": log.target_sets,
        "target_reps": log.target_reps,
        "target_weight_lbs": log.target_weight_lbs,
        "sets": [working_set_to_dict(s) for s in log.working_sets],
    }


def dict_to_exercise_log(data: dict[str, Any]) -> ExerciseLog:
    """
    Convert dict to ExerciseLog.

    Raises:
        ValidationError: If data is invalid
    """
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"Invalid exercise name: {name!r}")
    validate_non_negative(data.get("target_sets", 0), "target_sets")
    validate_non_negative(data.get("target_reps", 0), "target_reps")
    validate_non_negative(data.get("target_weight_lbs", 0), "target_weight_lbs")

    return ExerciseLog(
        name=name,
        category=validate_category(data.get("category")),
        is_primary=bool(data.get("is_primary", True)),
        target_sets=int(data.get("target_sets", 0)),
        target_reps=int(data.get("target_reps", 0)),
        target_weight_lbs=float(data.get("target_weight_lbs", 0.0)),
        working_sets=tuple(dict_to_working_set(s) for s in data.get("sets", [])),
    )


def cardio_to_dict(cardio: CardioResult) -> dict[str, Any]:
    """Convert CardioResult to JSON-compatible dict."""
    return {
        "distance_miles": cardio.distance_miles,
        "duration_seconds": cardio.duration_seconds,
        "rpe": cardio.rpe,
    }


def dict_to_cardio(data: dict[str, Any]) -> CardioResult:
    """
    Convert dict to CardioResult.

    Raises:
        ValidationError: If data is invalid
    """
    validate_non_negative(data.get("distance_miles", 0), "distance_miles")
    validate_non_negative(data.get("duration_seconds", 0), "duration_seconds")
    rpe = int(data.get("rpe", 5))
    if not 1 <= rpe <= 10:
        raise ValidationError(f"rpe must be between 1 and 10, got {rpe}")

    return CardioResult(
        distance_miles=float(data.get("distance_miles", 0.0)),
        duration_seconds=int(data.get("duration_seconds", 0)),
        rpe=rpe,
    )


# =============================================================================
# Sessions
# =============================================================================


def session_record_to_dict(session: SessionRecord) -> dict[str, Any]:
    """
    Convert SessionRecord to JSON-compatible dict.

    Cardio, bodyweight, and notes are written only when present.

    Args:
        session: SessionRecord to convert

    Returns:
        Dict representation
    """
    d: dict[str, Any] = {
        "session_index": session.session_index,
        "session_type": session.session_type.value,
        "week_in_block": session.week_in_block,
        "block_number": session.block_number,
        "date": session.date,
        "status": session.status.value,
        "exercises": [exercise_log_to_dict(e) for e in session.exercises],
        "duration_seconds": session.duration_seconds,
    }
    if session.cardio is not None:
        d["cardio"] = cardio_to_dict(session.cardio)
    if session.bodyweight_lbs is not None:
        d["bodyweight_lbs"] = session.bodyweight_lbs
    if session.notes:
        d["notes"] = session.notes
    return d


def dict_to_session_record(data: dict[str, Any]) -> SessionRecord:
    """
    Convert dict to SessionRecord.

    Args:
        data: Dict representation

    Returns:
        SessionRecord instance

    Raises:
        ValidationError: If data is invalid, including values of the wrong
            type that fail conversion or model checks
    """
    try:
        return _session_record_from_dict(data)
    except (TypeError, ValueError, AttributeError) as e:
        raise ValidationError(f"Invalid session record: {e}") from e


def _session_record_from_dict(data: dict[str, Any]) -> SessionRecord:
    for key in ("session_index", "session_type", "week_in_block", "block_number", "date"):
        if key not in data:
            raise ValidationError(f"Missing field: {key}")

    validate_date(data["date"])
    validate_non_negative(data["session_index"], "session_index")
    session_type = validate_session_type(data["session_type"])
    status = _validate_enum(SessionStatus, data.get("status", "completed"), "status")

    week = int(data["week_in_block"])
    if not 1 <= week <= 4:
        raise ValidationError(f"Invalid week_in_block: {week}")
    validate_positive(data["block_number"], "block_number")

    bodyweight = data.get("bodyweight_lbs")
    if bodyweight is not None:
        validate_positive(bodyweight, "bodyweight_lbs")

    cardio = data.get("cardio")
    return SessionRecord(
        session_index=int(data["session_index"]),
        session_type=session_type,
        week_in_block=week,
        block_number=int(data["block_number"]),
        date=data["date"],
        status=status,
        exercises=tuple(dict_to_exercise_log(e) for e in data.get("exercises", [])),
        cardio=dict_to_cardio(cardio) if cardio else None,
        duration_seconds=int(data.get("duration_seconds", 0)),
        bodyweight_lbs=float(bodyweight) if bodyweight is not None else None,
        notes=data.get("notes"),
    )


def session_to_json_line(session: SessionRecord) -> str:
    """
    Serialize a session to a single JSON line.

    Returns:
        JSON string (single line, no trailing newline)
    """
    return json.dumps(session_record_to_dict(session), separators=(",", ":"))


def json_line_to_session(line: str) -> SessionRecord:
    """
    Deserialize a JSON line to a SessionRecord.

    Raises:
        ValidationError: If JSON is invalid or data validation fails
    """
    try:
        data = json.loads(line.strip())
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"Expected a JSON object, got {type(data).__name__}")
    return dict_to_session_record(data)


# =============================================================================
# Profile
# =============================================================================


def user_profile_to_dict(profile: UserProfile) -> dict[str, Any]:
    """Convert UserProfile to JSON-compatible dict (every field, unset date omitted)."""
    d = {f.name: getattr(profile, f.name) for f in fields(profile)}
    if d.get("program_start_date") is None:
        d.pop("program_start_date", None)
    return d


def dict_to_user_profile(data: dict[str, Any]) -> UserProfile:
    """
    Convert dict to UserProfile.

    Unknown keys are ignored and missing keys take the dataclass defaults.

    Raises:
        ValidationError: If data is invalid
    """
    known = {f.name for f in fields(UserProfile)}
    kwargs: dict[str, Any] = {}
    try:
        for key, value in data.items():
            if key not in known:
                continue
            if key in ("name", "program_start_date"):
                kwargs[key] = value
            elif key in ("height_inches", "ab_wheel_current_reps", "ab_wheel_current_sets"):
                kwargs[key] = int(value)
            else:
                kwargs[key] = float(value)
        return UserProfile(**kwargs)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid profile: {e}") from e


# =============================================================================
# Command-line sets strings
# =============================================================================

_COMPACT_RE = re.compile(r"^(\d+)\s*[xX×]\s*(\d+)\s*@\s*(\d+(?:\.\d+)?)(?::(\w+))?$")
_SET_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*[xX×]\s*(\d+)(?::(\w+))?$")
_BARE_RE = re.compile(r"^(\d+)(?::(\w+))?$")


def parse_sets_string(sets_str: str) -> list[tuple[float, int, SetRating]]:
    """
    Parse a sets string typed on the command line.

    Comma-separated groups, each one of:
        WEIGHTxREPS[:rating]   e.g. "135x8", "135x6:failed"
        NxM@WEIGHT[:rating]    e.g. "8x3@135" → 3 sets of 8 reps at 135
        REPS[:rating]          e.g. "12" → bodyweight set of 12 reps

    Ratings are ``strong``, ``barely`` or ``failed``.

    Args:
        sets_str: Sets string to parse

    Returns:
        List of (weight_lbs, reps, rating) tuples in order

    Raises:
        ValidationError: If format is invalid
    """
    if not sets_str or not sets_str.strip():
        raise ValidationError("Sets string cannot be empty")

    sets: list[tuple[float, int, SetRating]] = []
    for part in (p.strip() for p in sets_str.split(",")):
        if not part:
            continue

        m = _COMPACT_RE.match(part)
        if m:
            reps, count = int(m.group(1)), int(m.group(2))
            if count < 1:
                raise ValidationError(f"Set count must be at least 1: '{part}'")
            rating = validate_rating(m.group(4))
            sets.extend((float(m.group(3)), reps, rating) for _ in range(count))
            continue

        m = _SET_RE.match(part)
        if m:
            sets.append((float(m.group(1)), int(m.group(2)), validate_rating(m.group(3))))
            continue

        m = _BARE_RE.match(part)
        if m:
            sets.append((0.0, int(m.group(1)), validate_rating(m.group(2))))
            continue

        raise ValidationError(
            f"Invalid set format: '{part}'.\n"
            f"Use: WEIGHTxREPS[:rating] (e.g. 135x8:strong),\n"
            f"     NxM@WEIGHT (e.g. 8x3@135), or bare reps (e.g. 12)."
        )

    if not sets:
        raise ValidationError("No valid sets found in sets string")

    return sets
