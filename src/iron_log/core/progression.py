"""
Weight progression for the wave-loaded program.

Every block is one wave: weeks 1–3 climb from a week-1 reference and week 4
deloads.  The week-1 reference comes from the onboarding 5RM while there is
no history, and afterwards from the last logged weight carried forward past
the previous block's peak.  See config.py for the tables.
"""

import math
from dataclasses import replace
from typing import Sequence

from .config import (
    ACCESSORY_SETS_REPS,
    DEFAULT_RUN_MAX_MILES,
    DEFAULT_START_WEIGHT,
    FAILED_SET_FACTOR,
    LOWER_BODY_INCREMENT,
    PEAK_WEEK,
    PRIMARY_SETS_REPS,
    ROUNDING_INCREMENT,
    RUN_DISTANCE_STEP,
    START_WEIGHT_REPS,
    UPPER_BODY_INCREMENT,
    WAVE_MULTIPLIERS,
    WEEK1_INTENSITY,
)
from .exercises.registry import find_exercise
from .metrics import History, estimated_one_rm, last_occurrence
from .models import Category, UserProfile, WorkingSet
from .plates import nearest_multiple

__all__ = [
    "adjust_remaining_sets",
    "adjusted_weight",
    "capped_run_distance",
    "carry_forward_base",
    "clamp_to_cap",
    "estimated_one_rm",
    "increment_for",
    "next_run_distance",
    "round_to_increment",
    "sets_reps",
    "starting_weight",
    "target_weight",
    "wave_multiplier",
    "weight_cap",
]


def _clamp_week(week_in_block: int) -> int:
    return max(1, min(4, week_in_block))


def wave_multiplier(week_in_block: int) -> float:
    """Intensity multiplier for a week of the block (week clamped to [1, 4])."""
    return WAVE_MULTIPLIERS[_clamp_week(week_in_block) - 1]


def round_to_increment(weight: float) -> float:
    """
    Round to the nearest 5 lbs, never below 5.

    The final rounding step is always 5 lbs, also for lifts that progress
    in 2.5 lb increments.
    """
    return max(ROUNDING_INCREMENT, nearest_multiple(weight, ROUNDING_INCREMENT))


def increment_for(exercise: str) -> float:
    """Per-block progression increment: 2.5 lbs for upper-body lifts, 5 otherwise."""
    ex = find_exercise(exercise)
    if ex is not None and ex.upper_body:
        return UPPER_BODY_INCREMENT
    return LOWER_BODY_INCREMENT


def weight_cap(exercise: str, profile: UserProfile) -> float:
    """
    Ceiling for the exercise from the profile.

    Returns:
        The stored cap, or ``math.inf`` when it is 0, missing, or the
        exercise is unknown
    """
    ex = find_exercise(exercise)
    if ex is None or ex.cap_field is None:
        return math.inf
    raw = profile.field_value(ex.cap_field)
    return raw if raw > 0 else math.inf


def starting_weight(exercise: str, profile: UserProfile) -> float:
    """
    Onboarding 5RM for the exercise.

    Derived lifts scale another lift's 5RM with a floor, e.g. Romanian
    Deadlift = max(65, deadlift × 0.65).  Unknown exercises start at 95.
    """
    ex = find_exercise(exercise)
    if ex is None or ex.start_field is None:
        return DEFAULT_START_WEIGHT
    return max(ex.start_floor, profile.field_value(ex.start_field) * ex.start_factor)


def clamp_to_cap(weight: float, increment: float, cap: float) -> float:
    """Clamp a rounded weight into [increment, cap]."""
    return min(max(weight, increment), cap)


def carry_forward_base(week1_base: float, increment: float) -> float:
    """
    Week-1 base of the next block.

    Always projects the week-3 peak of the current base, whatever week the
    last session actually fell in, then adds one increment so the new block
    starts above that peak.
    """
    return week1_base * wave_multiplier(PEAK_WEEK) + increment


def target_weight(
    exercise: str,
    category: Category,
    block_number: int,
    week_in_block: int,
    profile: UserProfile,
    history: History,
) -> float:
    """
    Working weight for one exercise occurrence.

    With history (block > 1 and a completed set logged):
        base₁     = last_weight / mult[last_week]
        new_base₁ = base₁ × mult[3] + increment
        weight    = round₅(new_base₁ × mult[week])

    Without:
        e1RM   = 5RM × (1 + 5/30)
        weight = round₅((e1RM × 0.70 + (block − 1) × increment) × mult[week])

    Both are clamped to [increment, cap].

    Args:
        exercise: Exercise name as stored in history
        category: Exercise category; non-loaded categories return 0
        block_number: 1-based block of the session
        week_in_block: Week of the session in its block
        profile: Profile snapshot (starting weights, caps)
        history: Logged sessions

    Returns:
        Target weight in lbs
    """
    if not category.is_loaded:
        return 0.0

    multiplier = wave_multiplier(week_in_block)
    increment = increment_for(exercise)
    cap = weight_cap(exercise, profile)

    found = last_occurrence(history, exercise)
    if found is not None and block_number > 1:
        last_session, last_log = found
        last_weight = last_log.heaviest_completed_weight or 0.0
        week1_base = last_weight / wave_multiplier(last_session.week_in_block)
        new_base = carry_forward_base(week1_base, increment)
        return clamp_to_cap(round_to_increment(new_base * multiplier), increment, cap)

    five_rm = starting_weight(exercise, profile)
    week1_ref = estimated_one_rm(five_rm, START_WEIGHT_REPS) * WEEK1_INTENSITY
    adjusted = week1_ref + (block_number - 1) * increment
    return clamp_to_cap(round_to_increment(adjusted * multiplier), increment, cap)


def sets_reps(week_in_block: int, is_primary: bool) -> tuple[int, int]:
    """(sets, reps) for a wave week; primary and accessory lifts differ."""
    table = PRIMARY_SETS_REPS if is_primary else ACCESSORY_SETS_REPS
    return table[_clamp_week(week_in_block)]


def adjusted_weight(current: float, failed: bool, category: Category) -> float:
    """
    Weight for the remaining sets after a set is rated.

    A failed set drops the rest of the exercise by 10%, re-rounded to 5 lbs.
    Non-loaded categories have no weight to adjust.
    """
    if not failed or not category.is_loaded:
        return current
    return round_to_increment(current * FAILED_SET_FACTOR)


def adjust_remaining_sets(
    sets: Sequence[WorkingSet],
    failed_set: WorkingSet,
    category: Category,
) -> tuple[WorkingSet, ...]:
    """
    Apply a failed set to the rest of a live exercise occurrence.

    Returns a new tuple; only sets after ``failed_set`` that are not yet
    completed change.  Earlier and already completed sets are kept as
    logged.
    """
    new_weight = adjusted_weight(failed_set.weight_lbs, True, category)
    return tuple(
        replace(s, weight_lbs=new_weight)
        if not s.completed and s.set_number > failed_set.set_number
        else s
        for s in sets
    )


def capped_run_distance(distance_miles: float, profile: UserProfile) -> float:
    """Logged run distance limited to the profile maximum, when one is set."""
    if profile.run_max_distance_miles > 0:
        return min(distance_miles, profile.run_max_distance_miles)
    return distance_miles


def next_run_distance(logged_miles: float, profile: UserProfile) -> float:
    """
    Run target for the next cardio session.

    Meeting the current target moves it to the logged distance plus a
    quarter mile (to one decimal), up to the profile maximum.  Falling
    short keeps the current target.
    """
    capped = capped_run_distance(logged_miles, profile)
    if capped < profile.run_current_distance_miles:
        return profile.run_current_distance_miles

    step_up = math.floor((capped + RUN_DISTANCE_STEP) * 10 + 0.5) / 10
    ceiling = profile.run_max_distance_miles if profile.run_max_distance_miles > 0 else DEFAULT_RUN_MAX_MILES
    return min(step_up, ceiling)
