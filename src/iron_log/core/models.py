"""
Data models for iron-log.

All core dataclasses representing the profile snapshot, logged sessions,
and the prescriptions the engine produces. Inputs are frozen so the engine
can never write back into a caller's history; storage owns mutation.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Category(str, Enum):
    """How an exercise is loaded."""

    BARBELL = "barbell"
    CABLE = "cable"
    BODYWEIGHT = "bodyweight"
    CARDIO = "cardio"

    @property
    def is_loaded(self) -> bool:
        """True for categories whose prescription is a weight."""
        return self in (Category.BARBELL, Category.CABLE)


class SessionType(str, Enum):
    """The five sessions of the weekly cycle."""

    LOWER_A = "lowerA"
    UPPER_A = "upperA"
    LOWER_B = "lowerB"
    UPPER_B = "upperB"
    CARDIO = "cardio"

    @property
    def title(self) -> str:
        return _SESSION_TITLES[self][0]

    @property
    def subtitle(self) -> str:
        return _SESSION_TITLES[self][1]

    @property
    def estimated_minutes(self) -> int:
        return _SESSION_TITLES[self][2]


_SESSION_TITLES: dict[SessionType, tuple[str, str, int]] = {
    SessionType.LOWER_A: ("Lower A", "Squat · Romanian Deadlift", 55),
    SessionType.UPPER_A: ("Upper A", "Bench Press · Cable Row", 50),
    SessionType.LOWER_B: ("Lower B", "Deadlift · Hip Thrust", 55),
    SessionType.UPPER_B: ("Upper B", "Military Press · Lat Pulldown", 45),
    SessionType.CARDIO: ("Cardio", "Run · Ab Wheel", 35),
}


class SetRating(str, Enum):
    """User feedback on a finished working set."""

    STRONG = "strong"
    BARELY = "barely"
    FAILED = "failed"
    UNRATED = ""


class SessionStatus(str, Enum):
    """Terminal state of a logged session."""

    COMPLETED = "completed"
    SKIPPED = "skipped"


def _validate_date(date_str: str) -> None:
    """Validate date string is ISO format YYYY-MM-DD."""
    import re

    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date: {date_str}") from e


@dataclass(frozen=True)
class UserProfile:
    """
    Profile snapshot read by the engine.

    Starting weights are the user's onboarding 5-rep working weights.
    ``*_max_lbs`` fields are per-exercise ceilings; 0 means uncapped.
    Exercise definitions refer to these fields by name, see
    ``ExerciseDefinition.start_field`` and ``ExerciseDefinition.cap_field``.
    """

    name: str = ""
    bodyweight_lbs: float = 160.0
    height_inches: int = 69
    program_start_date: str | None = None

    # Onboarding 5RM working weights
    squat_start_lbs: float = 135.0
    bench_start_lbs: float = 115.0
    deadlift_start_lbs: float = 155.0
    ohp_start_lbs: float = 75.0
    lat_pulldown_start_lbs: float = 100.0
    cable_row_start_lbs: float = 100.0

    # Per-exercise ceilings
    squat_max_lbs: float = 315.0
    bench_max_lbs: float = 225.0
    deadlift_max_lbs: float = 395.0
    ohp_max_lbs: float = 135.0
    lat_pulldown_max_lbs: float = 145.0
    cable_row_max_lbs: float = 160.0
    romanian_deadlift_max_lbs: float = 275.0
    hip_thrust_max_lbs: float = 315.0

    # Cardio / bodyweight progression state
    run_max_distance_miles: float = 6.0
    run_current_distance_miles: float = 1.0
    ab_wheel_current_reps: int = 5
    ab_wheel_current_sets: int = 3

    def __post_init__(self) -> None:
        """Validate profile data."""
        if self.bodyweight_lbs <= 0:
            raise ValueError("bodyweight_lbs must be positive")
        if self.height_inches <= 0:
            raise ValueError("height_inches must be positive")
        if self.program_start_date is not None:
            _validate_date(self.program_start_date)

        for name in self.__dataclass_fields__:
            if name.endswith("_lbs") or name.endswith("_miles"):
                if getattr(self, name) < 0:
                    raise ValueError(f"{name} must be non-negative")

        from .config import ROUNDING_INCREMENT

        # Caps are reached exactly, so they must be loadable weights.
        for name in self.__dataclass_fields__:
            if name.endswith("_max_lbs") and getattr(self, name) % ROUNDING_INCREMENT:
                raise ValueError(f"{name} must be a multiple of {ROUNDING_INCREMENT:g} lbs (0 for no cap)")

        if self.ab_wheel_current_reps < 0:
            raise ValueError("ab_wheel_current_reps must be non-negative")
        if self.ab_wheel_current_sets < 0:
            raise ValueError("ab_wheel_current_sets must be non-negative")

    def field_value(self, name: str) -> float:
        """Return a numeric profile field by name, 0.0 if there is no such field."""
        value = getattr(self, name, None) if name in self.__dataclass_fields__ else None
        if isinstance(value, (int, float)):
            return float(value)
        return 0.0


@dataclass(frozen=True)
class WorkingSet:
    """One working set of an exercise occurrence, planned or performed."""

    set_number: int
    target_reps: int
    weight_lbs: float
    actual_reps: int = 0
    completed: bool = False
    rating: SetRating = SetRating.UNRATED
    rest_taken_seconds: int = 0

    def __post_init__(self) -> None:
        """Validate set data."""
        if self.set_number < 1:
            raise ValueError("set_number must be >= 1")
        if self.target_reps < 0:
            raise ValueError("target_reps must be non-negative")
        if self.actual_reps < 0:
            raise ValueError("actual_reps must be non-negative")
        if self.weight_lbs < 0:
            raise ValueError("weight_lbs must be non-negative")
        if self.rest_taken_seconds < 0:
            raise ValueError("rest_taken_seconds must be non-negative")

    @property
    def estimated_one_rm(self) -> float:
        """Epley estimate from this set's weight and actual reps."""
        from .metrics import estimated_one_rm

        return estimated_one_rm(self.weight_lbs, self.actual_reps)


@dataclass(frozen=True)
class ExerciseLog:
    """One exercise occurrence inside a logged session."""

    name: str
    category: Category
    is_primary: bool = True
    target_sets: int = 3
    target_reps: int = 8
    target_weight_lbs: float = 0.0
    working_sets: tuple[WorkingSet, ...] = ()

    @property
    def completed_sets(self) -> list[WorkingSet]:
        return [s for s in self.working_sets if s.completed]

    @property
    def heaviest_completed_weight(self) -> float | None:
        """Heaviest weight over completed sets, or None if nothing was completed."""
        done = self.completed_sets
        if not done:
            return None
        return max(s.weight_lbs for s in done)

    @property
    def failed_fraction(self) -> float:
        """Share of completed sets rated failed (0.0 if none completed)."""
        done = self.completed_sets
        if not done:
            return 0.0
        failed = sum(1 for s in done if s.rating is SetRating.FAILED)
        return failed / len(done)


@dataclass(frozen=True)
class CardioResult:
    """Run logged during a cardio session."""

    distance_miles: float
    duration_seconds: int
    rpe: int = 5

    def __post_init__(self) -> None:
        if self.distance_miles < 0:
            raise ValueError("distance_miles must be non-negative")
        if self.duration_seconds < 0:
            raise ValueError("duration_seconds must be non-negative")
        if not 1 <= self.rpe <= 10:
            raise ValueError("rpe must be between 1 and 10")

    @property
    def pace_seconds_per_mile(self) -> float:
        if self.distance_miles <= 0:
            return 0.0
        return self.duration_seconds / self.distance_miles


@dataclass(frozen=True)
class SessionRecord:
    """
    A finished session, immutable once written.

    ``session_index`` orders history; week/block are stored as they were
    resolved when the session was played.
    """

    session_index: int
    session_type: SessionType
    week_in_block: int
    block_number: int
    date: str  # ISO format: YYYY-MM-DD
    status: SessionStatus = SessionStatus.COMPLETED
    exercises: tuple[ExerciseLog, ...] = ()
    cardio: CardioResult | None = None
    duration_seconds: int = 0
    bodyweight_lbs: float | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        """Validate session data."""
        _validate_date(self.date)

        if self.session_index < 0:
            raise ValueError("session_index must be non-negative")
        if not 1 <= self.week_in_block <= 4:
            raise ValueError(f"Invalid week_in_block: {self.week_in_block}")
        if self.block_number < 1:
            raise ValueError("block_number must be >= 1")
        if self.bodyweight_lbs is not None and self.bodyweight_lbs <= 0:
            raise ValueError("bodyweight_lbs must be positive")

    @property
    def is_completed(self) -> bool:
        return self.status is SessionStatus.COMPLETED

    def exercise(self, name: str) -> ExerciseLog | None:
        """Return the log for the named exercise, if it was part of this session."""
        for log in self.exercises:
            if log.name == name:
                return log
        return None


# =============================================================================
# Engine output
# =============================================================================


@dataclass(frozen=True)
class ScheduleInfo:
    """Position of a session index in the repeating program."""

    session_index: int
    session_type: SessionType
    block_number: int
    week_in_block: int

    @property
    def is_deload(self) -> bool:
        from .config import DELOAD_WEEK

        return self.week_in_block == DELOAD_WEEK

    @property
    def is_benchmark(self) -> bool:
        # The deload closing every second block is a retest week instead.
        from .config import BENCHMARK_PERIOD, BENCHMARK_WINDOW_START

        pos = self.session_index % BENCHMARK_PERIOD
        return pos >= BENCHMARK_WINDOW_START and self.is_deload


@dataclass(frozen=True)
class ExercisePrescription:
    """
    What to do for one exercise in a session.

    ``target_weight_lbs`` is 0 for non-loaded categories; cardio carries
    ``target_distance_miles`` and bodyweight work ``target_bodyweight_reps``.
    """

    name: str
    category: Category
    is_primary: bool
    target_sets: int
    target_reps: int
    target_weight_lbs: float
    rest_seconds: int
    target_distance_miles: float | None = None
    target_bodyweight_reps: int | None = None


@dataclass(frozen=True)
class WarmupStep:
    """One warmup set preceding the working sets."""

    set_number: int
    weight_lbs: float
    reps: int
    rest_after_seconds: int


@dataclass(frozen=True)
class SessionPlan:
    """A resolved session: schedule position, prescriptions, and warmups."""

    schedule: ScheduleInfo
    exercises: tuple[ExercisePrescription, ...] = ()
    warmups: dict[str, list[WarmupStep]] = field(default_factory=dict)

    @property
    def total_working_sets(self) -> int:
        return sum(e.target_sets for e in self.exercises)


@dataclass(frozen=True)
class ProjectedPoint:
    """One future occurrence of an exercise on the projection chart."""

    date: datetime
    weight_lbs: float
    session_index: int


@dataclass(frozen=True)
class BenchmarkResult:
    """Best set of an exercise during a benchmark week."""

    date: str
    exercise: str
    weight_lbs: float
    reps: int
    estimated_one_rm: float
    delta_vs_previous: float = 0.0


@dataclass(frozen=True)
class PersonalRecord:
    """Best set ever logged for an exercise, ranked by Epley estimate."""

    exercise: str
    date: str
    weight_lbs: float
    reps: int
    estimated_one_rm: float


@dataclass(frozen=True)
class CardioPoint:
    """One logged run; pace is 0 when no duration was recorded."""

    date: str
    distance_miles: float
    duration_seconds: int
    pace_seconds_per_mile: float
