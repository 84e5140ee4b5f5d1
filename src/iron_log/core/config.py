"""
Configuration constants for the progression engine.

All adjustable parameters are centralized here for easy tuning. The
per-exercise roster lives in the bundled exercises/*.yaml files.
"""

from typing import Final

from .models import SessionType

# =============================================================================
# PROGRAM STRUCTURE
# =============================================================================

SESSION_TYPES: Final[tuple[SessionType, ...]] = (
    SessionType.LOWER_A,
    SessionType.UPPER_A,
    SessionType.LOWER_B,
    SessionType.UPPER_B,
    SessionType.CARDIO,
)

SESSIONS_PER_WEEK: Final[int] = 5  # one pass through SESSION_TYPES
WEEKS_PER_BLOCK: Final[int] = 4
SESSIONS_PER_BLOCK: Final[int] = SESSIONS_PER_WEEK * WEEKS_PER_BLOCK  # 20
DELOAD_WEEK: Final[int] = 4

# =============================================================================
# BENCHMARK WEEKS
# =============================================================================

BENCHMARK_PERIOD: Final[int] = 2 * SESSIONS_PER_BLOCK  # every second block
FIRST_BENCHMARK_INDEX: Final[int] = BENCHMARK_PERIOD - 1  # 39, 79, 119, ...
BENCHMARK_WINDOW_START: Final[int] = BENCHMARK_PERIOD - SESSIONS_PER_WEEK  # 35
BENCHMARK_SEARCH_HORIZON: Final[int] = 10000
DAYS_PER_WEEK: Final[int] = 7

# =============================================================================
# WAVE LOADING (relative to a week-1 reference at ~70% e1RM)
# =============================================================================

WAVE_MULTIPLIERS: Final[tuple[float, ...]] = (1.000, 1.071, 1.171, 0.829)
PEAK_WEEK: Final[int] = 3  # carry-forward reference, always week 3
WEEK1_INTENSITY: Final[float] = 0.70
START_WEIGHT_REPS: Final[int] = 5  # onboarding weights are 5-rep maxes
EPLEY_DIVISOR: Final[float] = 30.0

# =============================================================================
# LOAD INCREMENTS AND ROUNDING
# =============================================================================

UPPER_BODY_INCREMENT: Final[float] = 2.5
LOWER_BODY_INCREMENT: Final[float] = 5.0
ROUNDING_INCREMENT: Final[float] = 5.0  # final rounding is always 5 lbs
DEFAULT_START_WEIGHT: Final[float] = 95.0  # unknown exercise fallback

# =============================================================================
# AUTOREGULATION
# =============================================================================

FAILED_SET_FACTOR: Final[float] = 0.90  # remaining sets after a failed set
FAILURE_MAJORITY: Final[float] = 0.5  # projection flattens above this share

# =============================================================================
# SETS x REPS PER WAVE WEEK
# =============================================================================

PRIMARY_SETS_REPS: Final[dict[int, tuple[int, int]]] = {
    1: (3, 8),
    2: (4, 6),
    3: (3, 5),
    4: (2, 8),  # deload
}

ACCESSORY_SETS_REPS: Final[dict[int, tuple[int, int]]] = {
    1: (3, 10),
    2: (3, 10),
    3: (3, 8),
    4: (2, 10),  # deload
}


# =============================================================================
# WARMUPS
# =============================================================================

BARBELL_WARMUP_STEPS: Final[tuple[float, ...]] = (45, 95, 135, 185, 225, 275, 315, 365, 405, 455)
BARBELL_WARMUP_REPS: Final[tuple[int, ...]] = (10, 5, 3, 2, 2, 1, 1, 1, 1, 1)
BARBELL_WARMUP_MIN_TARGET: Final[float] = 45.0
WARMUP_CLOSE_FRACTION: Final[float] = 0.88  # steps this close to the work weight are dropped
HEAVY_WARMUP_THRESHOLD: Final[float] = 185.0
HEAVY_WARMUP_REST: Final[int] = 90
LIGHT_WARMUP_REST: Final[int] = 60

CABLE_WARMUP_MIN_TARGET: Final[float] = 25.0
CABLE_WARMUP_STEPS: Final[tuple[tuple[float, int], ...]] = ((0.50, 10), (0.70, 5))
CABLE_WARMUP_MIN_WEIGHT: Final[float] = 10.0
CABLE_WARMUP_REST: Final[int] = 45

# =============================================================================
# PROJECTION
# =============================================================================

DEFAULT_INTERVAL_DAYS: Final[float] = 7.0
DEFAULT_PROJECTION_COUNT: Final[int] = 52
PROJECTION_SCAN_FACTOR: Final[int] = 6  # slots scanned per requested point

# =============================================================================
# CARDIO PROGRESSION
# =============================================================================

RUN_DISTANCE_STEP: Final[float] = 0.25
DEFAULT_RUN_MAX_MILES: Final[float] = 6.0

# =============================================================================
# PLATES
# =============================================================================

BAR_WEIGHT_LBS: Final[float] = 45.0
PLATE_SIZES_LBS: Final[tuple[float, ...]] = (45, 35, 25, 10, 5, 2.5)
CABLE_STACK_INCREMENT: Final[float] = 5.0
