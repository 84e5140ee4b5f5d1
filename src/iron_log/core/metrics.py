"""
Pure metric and history-query functions.

History is any sequence of SessionRecord; none of these functions assume it
is sorted or mutate it.  "Most recent" always means highest session index.
"""

from datetime import date, datetime, timedelta
from typing import Sequence

from .config import DEFAULT_INTERVAL_DAYS, EPLEY_DIVISOR
from .exercises.registry import roster_for
from .models import (
    BenchmarkResult,
    CardioPoint,
    ExerciseLog,
    PersonalRecord,
    SessionRecord,
    SessionType,
)
from .schedule import resolve_schedule

History = Sequence[SessionRecord]


def estimated_one_rm(weight: float, reps: int) -> float:
    """
    Estimate a one-rep max with the Epley formula.

    1RM = weight × (1 + reps / 30)

    Args:
        weight: Load lifted
        reps: Reps performed at that load

    Returns:
        Estimated 1RM; the raw weight when reps ≤ 0
    """
    if reps <= 0:
        return weight
    return weight * (1 + reps / EPLEY_DIVISOR)


def completed_sessions(history: History) -> list[SessionRecord]:
    """Completed sessions, most recent first."""
    done = [s for s in history if s.is_completed]
    done.sort(key=lambda s: s.session_index, reverse=True)
    return done


def next_session_index(history: History) -> int:
    """
    Index of the next unplayed session.

    Skipped sessions count as played so the cycle moves past them.
    """
    if not history:
        return 0
    return max(s.session_index for s in history) + 1


def last_occurrence(history: History, exercise: str) -> tuple[SessionRecord, ExerciseLog] | None:
    """
    Most recent completed session with at least one completed set of the
    exercise, together with that exercise's log.
    """
    for session in completed_sessions(history):
        log = session.exercise(exercise)
        if log is not None and log.completed_sets:
            return session, log
    return None


def average_interval_days(
    history: History,
    session_type: SessionType,
    default: float = DEFAULT_INTERVAL_DAYS,
) -> float:
    """
    Mean calendar gap between consecutive completed sessions of one type.

    Sessions are ordered by index, not date, so a back-dated log does not
    reorder the cycle.

    Args:
        history: Logged sessions
        session_type: Session type to measure
        default: Returned when fewer than two sessions of the type exist

    Returns:
        Average days between occurrences
    """
    dates = [
        datetime.strptime(s.date, "%Y-%m-%d")
        for s in sorted(history, key=lambda s: s.session_index)
        if s.is_completed and s.session_type is session_type
    ]
    if len(dates) < 2:
        return default

    total = sum((dates[i] - dates[i - 1]).days for i in range(1, len(dates)))
    return total / (len(dates) - 1)


def weight_history(history: History, exercise: str) -> list[tuple[datetime, float]]:
    """
    (date, heaviest completed weight) for every completed occurrence, oldest first.
    """
    points: list[tuple[datetime, float]] = []
    for session in history:
        if not session.is_completed:
            continue
        log = session.exercise(exercise)
        if log is None:
            continue
        heaviest = log.heaviest_completed_weight
        if heaviest is None:
            continue
        points.append((datetime.strptime(session.date, "%Y-%m-%d"), heaviest))
    points.sort(key=lambda p: p[0])
    return points


def session_volume(session: SessionRecord) -> float:
    """Total lbs moved over completed working sets (weight × actual reps)."""
    return sum(
        s.weight_lbs * s.actual_reps
        for log in session.exercises
        for s in log.completed_sets
    )


def benchmark_results(history: History) -> list[BenchmarkResult]:
    """
    Best set per exercise for every completed benchmark-week session.

    The best set is the one with the highest Epley estimate.  Each result
    carries the change in e1RM against the previous benchmark of the same
    exercise (0 for the first).
    """
    results: list[BenchmarkResult] = []
    previous: dict[str, float] = {}

    for session in sorted(history, key=lambda s: s.session_index):
        if not session.is_completed:
            continue
        if not resolve_schedule(session.session_index).is_benchmark:
            continue
        for log in session.exercises:
            if not log.category.is_loaded:
                continue
            done = log.completed_sets
            if not done:
                continue
            best = max(done, key=lambda s: estimated_one_rm(s.weight_lbs, s.actual_reps))
            e1rm = estimated_one_rm(best.weight_lbs, best.actual_reps)
            delta = e1rm - previous[log.name] if log.name in previous else 0.0
            previous[log.name] = e1rm
            results.append(
                BenchmarkResult(
                    date=session.date,
                    exercise=log.name,
                    weight_lbs=best.weight_lbs,
                    reps=best.actual_reps,
                    estimated_one_rm=round(e1rm, 1),
                    delta_vs_previous=round(delta, 1),
                )
            )

    return results


# =============================================================================
# Progress
# =============================================================================


def personal_record(history: History, exercise: str) -> PersonalRecord | None:
    """
    Best completed set of an exercise by Epley estimate, or None.

    Sets with zero reps are ignored.  On a tie the earlier session keeps
    the record.
    """
    best: PersonalRecord | None = None
    for session in sorted(history, key=lambda s: s.session_index):
        if not session.is_completed:
            continue
        log = session.exercise(exercise)
        if log is None:
            continue
        for s in log.completed_sets:
            if s.actual_reps <= 0:
                continue
            e1rm = estimated_one_rm(s.weight_lbs, s.actual_reps)
            if best is None or e1rm > best.estimated_one_rm:
                best = PersonalRecord(
                    exercise=exercise,
                    date=session.date,
                    weight_lbs=s.weight_lbs,
                    reps=s.actual_reps,
                    estimated_one_rm=e1rm,
                )
    return best


def personal_records(history: History) -> list[PersonalRecord]:
    """Records for every loaded lift that has one, in program order."""
    records = []
    for session_type in SessionType:
        for ex in roster_for(session_type):
            if not ex.category.is_loaded:
                continue
            record = personal_record(history, ex.name)
            if record is not None:
                records.append(record)
    return records


def cardio_history(history: History) -> list[CardioPoint]:
    """Every run logged in a completed session, oldest first."""
    points = [
        CardioPoint(
            date=session.date,
            distance_miles=session.cardio.distance_miles,
            duration_seconds=session.cardio.duration_seconds,
            pace_seconds_per_mile=session.cardio.pace_seconds_per_mile,
        )
        for session in sorted(history, key=lambda s: s.session_index)
        if session.is_completed and session.cardio is not None
    ]
    points.sort(key=lambda p: p.date)
    return points


def best_run(history: History) -> CardioPoint | None:
    """Longest run, or None when no run was logged."""
    runs = [p for p in cardio_history(history) if p.distance_miles > 0]
    return max(runs, key=lambda p: p.distance_miles, default=None)


def best_pace(history: History) -> CardioPoint | None:
    """Fastest run among those with both distance and duration, or None."""
    timed = [p for p in cardio_history(history) if p.distance_miles > 0 and p.duration_seconds > 0]
    return min(timed, key=lambda p: p.pace_seconds_per_mile, default=None)


def max_reps_history(history: History, exercise: str) -> list[tuple[datetime, int]]:
    """
    (date, most reps in one completed set) per session, oldest first.

    Meant for bodyweight work such as the ab wheel.  A completed set logged
    without actual reps counts its target.
    """
    points: list[tuple[datetime, int]] = []
    for session in history:
        if not session.is_completed:
            continue
        log = session.exercise(exercise)
        if log is None or not log.completed_sets:
            continue
        best = max(log.completed_sets, key=lambda s: s.actual_reps)
        reps = best.actual_reps if best.actual_reps > 0 else best.target_reps
        points.append((datetime.strptime(session.date, "%Y-%m-%d"), reps))
    points.sort(key=lambda p: p[0])
    return points


def weekly_volume(history: History) -> list[tuple[date, float]]:
    """Lifting volume per calendar week (weeks start on Monday), oldest first."""
    totals: dict[date, float] = {}
    for session in history:
        if not session.is_completed:
            continue
        day = datetime.strptime(session.date, "%Y-%m-%d").date()
        week_start = day - timedelta(days=day.weekday())
        totals[week_start] = totals.get(week_start, 0.0) + session_volume(session)
    return sorted(totals.items())
