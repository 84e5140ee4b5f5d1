"""
Program schedule resolution.

The program is strictly periodic: five session types repeat every week,
four weeks form a block, and blocks repeat forever.  Everything here is a
total function of the session index.
"""

from .config import (
    BENCHMARK_PERIOD,
    BENCHMARK_SEARCH_HORIZON,
    DAYS_PER_WEEK,
    FIRST_BENCHMARK_INDEX,
    SESSION_TYPES,
    SESSIONS_PER_BLOCK,
    SESSIONS_PER_WEEK,
)
from .exercises.registry import roster_for, session_type_for_exercise
from .models import ScheduleInfo, SessionType

__all__ = [
    "block_info",
    "days_to_benchmark",
    "next_benchmark_index",
    "resolve_schedule",
    "roster_for",
    "session_type_for",
    "session_type_for_exercise",
]


def _check_index(session_index: int) -> None:
    if session_index < 0:
        raise ValueError(f"session_index must be non-negative, got {session_index}")


def session_type_for(session_index: int) -> SessionType:
    """Session type at a position in the weekly cycle."""
    _check_index(session_index)
    return SESSION_TYPES[session_index % SESSIONS_PER_WEEK]


def block_info(session_index: int) -> tuple[int, int]:
    """
    Block number and week in block for a session index.

    Returns:
        (block_number, week_in_block); block is 1-based, week is in [1, 4]
    """
    _check_index(session_index)
    block = session_index // SESSIONS_PER_BLOCK + 1
    week = (session_index % SESSIONS_PER_BLOCK) // SESSIONS_PER_WEEK + 1
    return block, week


def resolve_schedule(session_index: int) -> ScheduleInfo:
    """
    Map a session index to its place in the program.

    Args:
        session_index: 0-based index of the session in the endless program

    Returns:
        ScheduleInfo with session type, block, and week; deload and
        benchmark flags are derived properties
    """
    block, week = block_info(session_index)
    return ScheduleInfo(
        session_index=session_index,
        session_type=session_type_for(session_index),
        block_number=block,
        week_in_block=week,
    )


def next_benchmark_index(completed_count: int) -> int:
    """
    First benchmark session index at or after ``completed_count``.

    Benchmarks close every second block: 39, 79, 119, …  Past the search
    horizon the next one is extrapolated as ``completed_count + 40``.
    """
    for idx in range(FIRST_BENCHMARK_INDEX, BENCHMARK_SEARCH_HORIZON + 1, BENCHMARK_PERIOD):
        if idx >= completed_count:
            return idx
    return completed_count + BENCHMARK_PERIOD


def days_to_benchmark(completed_count: int) -> int:
    """Approximate calendar days until the next benchmark at five sessions a week."""
    remaining = next_benchmark_index(completed_count) - completed_count
    return max(0, remaining * DAYS_PER_WEEK // SESSIONS_PER_WEEK)
