"""
Base types for exercise definitions.

ExerciseDefinition describes one lift of the program roster: where it sits
in the weekly cycle, how it is loaded, and which profile fields hold its
starting weight and ceiling.
"""

from dataclasses import dataclass

from ..models import Category, SessionType


@dataclass(frozen=True)
class ExerciseDefinition:
    """
    Full configuration for one exercise.

    Starting weight resolves to ``max(start_floor, profile[start_field] * start_factor)``;
    derived lifts (e.g. Romanian Deadlift) point ``start_field`` at another
    lift's 5RM.  ``cap_field`` names the profile ceiling (0 = uncapped).
    """

    # Identity
    exercise_id: str          # e.g. "squat", "bench_press"
    name: str                 # e.g. "Squat" (key used in history records)

    # Place in the program
    category: Category
    session_type: SessionType
    order: int                # position within the session, 0 = first
    is_primary: bool

    # Loading
    upper_body: bool          # True → 2.5 lb progression increment
    rest_seconds: int

    # Profile lookups
    start_field: str | None = None
    start_factor: float = 1.0
    start_floor: float = 0.0
    cap_field: str | None = None
