"""
Session planning for iron-log.

Turns a session index into what the user should do: the schedule position,
one prescription per roster exercise, and warmup ramps for loaded lifts.
Plans are deterministic: the same index, profile, and history always give
the same plan.
"""

from typing import Iterator

from .exercises.base import ExerciseDefinition
from .metrics import History, next_session_index
from .models import Category, ExercisePrescription, SessionPlan, UserProfile
from .progression import sets_reps, target_weight
from .schedule import resolve_schedule, roster_for
from .warmup import compute_warmups

__all__ = [
    "build_session_plan",
    "compute_prescription",
    "next_session_index",
    "prescribe_exercise",
    "upcoming_sessions",
]


def prescribe_exercise(
    exercise: ExerciseDefinition,
    block_number: int,
    week_in_block: int,
    profile: UserProfile,
    history: History,
) -> ExercisePrescription:
    """
    Prescription for one roster exercise at a resolved week and block.

    Loaded lifts get a target weight; the run carries the profile's current
    distance target and bodyweight work the current rep target instead.
    """
    sets, reps = sets_reps(week_in_block, exercise.is_primary)
    weight = target_weight(
        exercise.name,
        exercise.category,
        block_number,
        week_in_block,
        profile,
        history,
    )

    distance = None
    bodyweight_reps = None
    if exercise.category is Category.CARDIO:
        distance = profile.run_current_distance_miles
    elif exercise.category is Category.BODYWEIGHT:
        bodyweight_reps = profile.ab_wheel_current_reps

    return ExercisePrescription(
        name=exercise.name,
        category=exercise.category,
        is_primary=exercise.is_primary,
        target_sets=sets,
        target_reps=reps,
        target_weight_lbs=weight,
        rest_seconds=exercise.rest_seconds,
        target_distance_miles=distance,
        target_bodyweight_reps=bodyweight_reps,
    )


def compute_prescription(
    session_index: int,
    profile: UserProfile,
    history: History,
) -> list[ExercisePrescription]:
    """
    Prescriptions for every exercise of a session, in roster order.

    Args:
        session_index: 0-based session index
        profile: Profile snapshot
        history: Logged sessions

    Returns:
        One ExercisePrescription per roster exercise of the session type

    Raises:
        ValueError: If session_index is negative
    """
    info = resolve_schedule(session_index)
    return [
        prescribe_exercise(ex, info.block_number, info.week_in_block, profile, history)
        for ex in roster_for(info.session_type)
    ]


def build_session_plan(
    session_index: int,
    profile: UserProfile,
    history: History,
) -> SessionPlan:
    """Schedule position, prescriptions, and warmups for one session."""
    schedule = resolve_schedule(session_index)
    prescriptions = compute_prescription(session_index, profile, history)
    warmups = {
        p.name: compute_warmups(p.target_weight_lbs, p.category)
        for p in prescriptions
        if p.category.is_loaded
    }
    return SessionPlan(schedule=schedule, exercises=tuple(prescriptions), warmups=warmups)


def upcoming_sessions(
    profile: UserProfile,
    history: History,
    count: int = 5,
) -> Iterator[SessionPlan]:
    """
    Plans for the next ``count`` sessions, starting at the next unplayed index.

    Every plan is computed against the same history; later sessions do not
    assume the earlier ones were logged.
    """
    start = next_session_index(history)
    for index in range(start, start + max(0, count)):
        yield build_session_plan(index, profile, history)
