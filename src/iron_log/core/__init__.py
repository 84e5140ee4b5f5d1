"""
Progression engine.

Pure functions over a profile snapshot and logged history. Apart from the
exercise roster read at import, nothing here touches disk or the terminal.
"""

from .planner import build_session_plan, compute_prescription, next_session_index, upcoming_sessions
from .projection import project_future
from .schedule import resolve_schedule
from .warmup import compute_warmups

__all__ = [
    "build_session_plan",
    "compute_prescription",
    "compute_warmups",
    "next_session_index",
    "project_future",
    "resolve_schedule",
    "upcoming_sessions",
]
