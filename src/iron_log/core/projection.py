"""
Forward projection of an exercise's working weight for charting.

The projection carries a running week-1 base forward block by block with
the same rule the prescription uses, so a projected point equals the weight
that would be prescribed if every session in between went to plan.
"""

from datetime import datetime, timedelta
from typing import Iterator

from .config import DEFAULT_PROJECTION_COUNT, FAILURE_MAJORITY, PROJECTION_SCAN_FACTOR
from .exercises.registry import session_type_for_exercise
from .metrics import History, average_interval_days, last_occurrence, next_session_index
from .models import ProjectedPoint, UserProfile
from .progression import (
    carry_forward_base,
    clamp_to_cap,
    increment_for,
    round_to_increment,
    wave_multiplier,
    weight_cap,
)
from .schedule import block_info, session_type_for


def project_future(
    exercise: str,
    profile: UserProfile,
    history: History,
    count: int = DEFAULT_PROJECTION_COUNT,
) -> Iterator[ProjectedPoint]:
    """
    Lazily yield up to ``count`` future occurrences of an exercise.

    Dates advance from the last logged occurrence by the average spacing of
    the exercise's session type.  When most of the last occurrence's sets
    failed, the first point holds at the last weight instead of advancing.

    Args:
        exercise: Exercise name
        profile: Profile snapshot (caps)
        history: Logged sessions
        count: Maximum number of points

    Yields:
        ProjectedPoint in session-index order; nothing for an unknown
        exercise or one that was never completed
    """
    host_type = session_type_for_exercise(exercise)
    if host_type is None:
        return
    found = last_occurrence(history, exercise)
    if found is None:
        return

    anchor_session, anchor_log = found
    last_weight = anchor_log.heaviest_completed_weight or 0.0
    hold_first = anchor_log.failed_fraction > FAILURE_MAJORITY

    increment = increment_for(exercise)
    cap = weight_cap(exercise, profile)
    interval = timedelta(days=average_interval_days(history, host_type))
    start = next_session_index(history)

    week1_base = last_weight / wave_multiplier(anchor_session.week_in_block)
    tracked_block = anchor_session.block_number
    date = datetime.strptime(anchor_session.date, "%Y-%m-%d")

    emitted = 0
    index = start
    while emitted < count and index < start + count * PROJECTION_SCAN_FACTOR:
        if session_type_for(index) is host_type:
            date += interval
            block, week = block_info(index)
            if block > tracked_block:
                week1_base = carry_forward_base(week1_base, increment)
                tracked_block = block

            if emitted == 0 and hold_first:
                weight = min(round_to_increment(last_weight), cap)
            else:
                weight = clamp_to_cap(round_to_increment(week1_base * wave_multiplier(week)), increment, cap)

            yield ProjectedPoint(date=date, weight_lbs=weight, session_index=index)
            emitted += 1
        index += 1
