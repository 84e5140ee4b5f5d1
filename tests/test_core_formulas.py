"""
Formula-focused unit tests for the progression engine.

Each test verifies one formula of the schedule, progression, warmup, or
plate arithmetic.  Values are hand-computed so the tests act as a reference.
"""

import math

import pytest

from iron_log.core.config import WAVE_MULTIPLIERS
from iron_log.core.metrics import estimated_one_rm
from iron_log.core.models import (
    Category,
    SessionType,
    SetRating,
    UserProfile,
    WorkingSet,
)
from iron_log.core.plates import format_plates, nearest_multiple, plate_breakdown, round_to_cable
from iron_log.core.progression import (
    adjust_remaining_sets,
    adjusted_weight,
    capped_run_distance,
    carry_forward_base,
    increment_for,
    next_run_distance,
    round_to_increment,
    sets_reps,
    starting_weight,
    target_weight,
    wave_multiplier,
    weight_cap,
)
from iron_log.core.schedule import (
    block_info,
    days_to_benchmark,
    next_benchmark_index,
    resolve_schedule,
    session_type_for,
)
from iron_log.core.warmup import compute_warmups


# ---------------------------------------------------------------------------
# Schedule
# ---------------------------------------------------------------------------

class TestSchedule:
    def test_first_session_is_lower_a_block1_week1(self):
        info = resolve_schedule(0)
        assert info.session_type is SessionType.LOWER_A
        assert (info.block_number, info.week_in_block) == (1, 1)
        assert not info.is_deload
        assert not info.is_benchmark

    def test_session_types_repeat_every_five(self):
        order = [session_type_for(i) for i in range(10)]
        assert order[:5] == [
            SessionType.LOWER_A,
            SessionType.UPPER_A,
            SessionType.LOWER_B,
            SessionType.UPPER_B,
            SessionType.CARDIO,
        ]
        assert order[5:] == order[:5]

    @pytest.mark.parametrize(
        "index, expected",
        [(0, (1, 1)), (4, (1, 1)), (5, (1, 2)), (14, (1, 3)), (19, (1, 4)), (20, (2, 1)), (59, (3, 4))],
    )
    def test_block_info(self, index, expected):
        assert block_info(index) == expected

    def test_week_always_in_range_and_deload_iff_week4(self):
        for i in range(200):
            info = resolve_schedule(i)
            assert 1 <= info.week_in_block <= 4
            assert info.is_deload == (info.week_in_block == 4)

    @pytest.mark.parametrize("index", [35, 36, 37, 38, 39, 75, 79, 119])
    def test_benchmark_week(self, index):
        assert resolve_schedule(index).is_benchmark

    @pytest.mark.parametrize("index", [0, 19, 34, 40, 59])
    def test_not_benchmark(self, index):
        assert not resolve_schedule(index).is_benchmark

    def test_plain_deload_is_not_benchmark(self):
        info = resolve_schedule(19)
        assert info.is_deload
        assert not info.is_benchmark

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            resolve_schedule(-1)

    @pytest.mark.parametrize(
        "count, expected",
        [(0, 39), (39, 39), (40, 79), (100, 119), (10000, 10040)],
    )
    def test_next_benchmark_index(self, count, expected):
        assert next_benchmark_index(count) == expected

    def test_days_to_benchmark(self):
        assert days_to_benchmark(0) == 54   # 39 sessions × 7 // 5
        assert days_to_benchmark(30) == 12  # 9 × 7 // 5
        assert days_to_benchmark(39) == 0


# ---------------------------------------------------------------------------
# Rounding and plates
# ---------------------------------------------------------------------------

class TestRounding:
    @pytest.mark.parametrize(
        "raw, expected",
        [(110.25, 110), (112.5, 115), (117.5, 120), (121.5, 120), (2.0, 5), (0.0, 5)],
    )
    def test_round_to_increment(self, raw, expected):
        assert round_to_increment(raw) == expected

    def test_halves_round_up_not_to_even(self):
        # built-in round(22.5) == 22 would give 110
        assert nearest_multiple(112.5, 5) == 115

    def test_round_to_cable(self):
        assert round_to_cable(17.5) == 20
        assert round_to_cable(21.0) == 20


class TestPlates:
    def test_breakdown_225(self):
        assert plate_breakdown(225) == [(45, 2)]

    def test_breakdown_with_small_plates(self):
        # (190 - 45) / 2 = 72.5 per side
        assert plate_breakdown(190) == [(45, 1), (25, 1), (2.5, 1)]

    def test_empty_bar(self):
        assert plate_breakdown(45) == []
        assert format_plates([]) == "bar"

    def test_format(self):
        assert format_plates([(45, 2), (10, 1)]) == "45×2 + 10"


# ---------------------------------------------------------------------------
# Progression
# ---------------------------------------------------------------------------

class TestWaveAndTables:
    def test_wave_multipliers(self):
        assert WAVE_MULTIPLIERS == (1.0, 1.071, 1.171, 0.829)
        assert wave_multiplier(3) == 1.171
        assert wave_multiplier(0) == 1.0
        assert wave_multiplier(9) == 0.829

    @pytest.mark.parametrize(
        "week, primary, expected",
        [
            (1, True, (3, 8)),
            (2, True, (4, 6)),
            (3, True, (3, 5)),
            (4, True, (2, 8)),
            (1, False, (3, 10)),
            (2, False, (3, 10)),
            (3, False, (3, 8)),
            (4, False, (2, 10)),
            (0, True, (3, 8)),
            (7, False, (2, 10)),
        ],
    )
    def test_sets_reps(self, week, primary, expected):
        assert sets_reps(week, primary) == expected

    def test_increments(self):
        assert increment_for("Bench Press") == 2.5
        assert increment_for("Lat Pulldown") == 2.5
        assert increment_for("Squat") == 5.0
        assert increment_for("Unknown Lift") == 5.0

    def test_carry_forward_uses_week3_peak(self):
        assert carry_forward_base(100.0, 5.0) == pytest.approx(122.1)


class TestStartingWeightAndCap:
    def test_direct_field(self):
        assert starting_weight("Squat", UserProfile(squat_start_lbs=135)) == 135

    def test_derived_lifts(self):
        profile = UserProfile(deadlift_start_lbs=155, squat_start_lbs=135)
        assert starting_weight("Romanian Deadlift", profile) == pytest.approx(100.75)
        assert starting_weight("Hip Thrust", profile) == pytest.approx(101.25)

    def test_derived_floor(self):
        profile = UserProfile(deadlift_start_lbs=45)
        assert starting_weight("Romanian Deadlift", profile) == 65

    def test_unknown_exercise_defaults(self):
        profile = UserProfile()
        assert starting_weight("Zercher Squat", profile) == 95
        assert weight_cap("Zercher Squat", profile) == math.inf

    def test_zero_cap_is_unbounded(self):
        assert weight_cap("Squat", UserProfile(squat_max_lbs=0)) == math.inf
        assert weight_cap("Squat", UserProfile(squat_max_lbs=225)) == 225

    @pytest.mark.parametrize("field", ["squat_max_lbs", "bench_max_lbs", "cable_row_max_lbs", "hip_thrust_max_lbs"])
    def test_cap_must_be_loadable(self, field):
        with pytest.raises(ValueError, match="multiple of 5"):
            UserProfile(**{field: 107.5})

    def test_capped_prescription_stays_on_five_lb_grid(self):
        profile = UserProfile(squat_start_lbs=135, squat_max_lbs=105)
        for week in range(1, 5):
            assert target_weight("Squat", Category.BARBELL, 1, week, profile, []) % 5 == 0


class TestTargetWeightNoHistory:
    """Case B: e1RM = 5RM × (1 + 5/30); reference = 0.70 × e1RM."""

    def test_epley(self):
        assert estimated_one_rm(135, 5) == pytest.approx(157.5)
        assert estimated_one_rm(100, 0) == 100
        assert estimated_one_rm(100, -3) == 100

    @pytest.mark.parametrize("week, expected", [(1, 110), (2, 120), (3, 130), (4, 90)])
    def test_squat_wave(self, week, expected):
        # ref = 157.5 × 0.70 = 110.25
        profile = UserProfile(squat_start_lbs=135)
        assert target_weight("Squat", Category.BARBELL, 1, week, profile, []) == expected

    def test_block_carry_without_history(self):
        # (110.25 + 5) × 1.0 = 115.25 → 115
        profile = UserProfile(squat_start_lbs=135)
        assert target_weight("Squat", Category.BARBELL, 2, 1, profile, []) == 115

    @pytest.mark.parametrize(
        "exercise, category, expected",
        [
            ("Bench Press", Category.BARBELL, 95),
            ("Deadlift", Category.BARBELL, 125),
            ("Military Press", Category.BARBELL, 60),
            ("Romanian Deadlift", Category.BARBELL, 80),
            ("Hip Thrust", Category.BARBELL, 85),
            ("Cable Row", Category.CABLE, 80),
            ("Lat Pulldown", Category.CABLE, 80),
        ],
    )
    def test_default_profile_week1(self, exercise, category, expected):
        assert target_weight(exercise, category, 1, 1, UserProfile(), []) == expected

    def test_cap_clamps(self):
        profile = UserProfile(squat_start_lbs=135, squat_max_lbs=100)
        assert target_weight("Squat", Category.BARBELL, 1, 3, profile, []) == 100

    def test_non_loaded_categories_have_no_weight(self):
        profile = UserProfile()
        assert target_weight("Run", Category.CARDIO, 1, 1, profile, []) == 0
        assert target_weight("Ab Wheel", Category.BODYWEIGHT, 1, 1, profile, []) == 0

    def test_unknown_exercise_uses_default_start(self):
        # 95 × 7/6 × 0.7 = 77.58 → 80
        assert target_weight("Zercher Squat", Category.BARBELL, 1, 1, UserProfile(), []) == 80

    def test_result_is_multiple_of_5_and_at_least_5(self):
        profile = UserProfile(squat_start_lbs=1, bench_start_lbs=0)
        for name in ("Squat", "Bench Press"):
            for week in range(1, 5):
                w = target_weight(name, Category.BARBELL, 1, week, profile, [])
                assert w >= 5
                assert w % 5 == 0


# ---------------------------------------------------------------------------
# Failure adjustment
# ---------------------------------------------------------------------------

class TestFailureAdjustment:
    def test_adjusted_weight_failed(self):
        # 135 × 0.9 = 121.5 → 120
        assert adjusted_weight(135, True, Category.BARBELL) == 120

    def test_adjusted_weight_not_failed(self):
        assert adjusted_weight(135, False, Category.BARBELL) == 135

    def test_adjusted_weight_non_loaded_unchanged(self):
        assert adjusted_weight(0, True, Category.BODYWEIGHT) == 0

    def test_adjust_remaining_sets(self):
        sets = (
            WorkingSet(1, 8, 135, actual_reps=8, completed=True),
            WorkingSet(2, 8, 135, actual_reps=5, completed=True, rating=SetRating.FAILED),
            WorkingSet(3, 8, 135),
            WorkingSet(4, 8, 135),
        )
        adjusted = adjust_remaining_sets(sets, sets[1], Category.BARBELL)

        assert [s.weight_lbs for s in adjusted] == [135, 135, 120, 120]
        assert sets[2].weight_lbs == 135  # input untouched
        assert adjusted[0] is sets[0]


# ---------------------------------------------------------------------------
# Cardio progression
# ---------------------------------------------------------------------------

class TestRunProgression:
    def test_meeting_target_steps_up(self):
        profile = UserProfile(run_current_distance_miles=1.0, run_max_distance_miles=6.0)
        assert next_run_distance(1.0, profile) == pytest.approx(1.3)
        assert next_run_distance(2.0, profile) == pytest.approx(2.3)

    def test_short_run_keeps_target(self):
        profile = UserProfile(run_current_distance_miles=1.0)
        assert next_run_distance(0.8, profile) == 1.0

    def test_capped_at_profile_max(self):
        profile = UserProfile(run_current_distance_miles=5.5, run_max_distance_miles=6.0)
        assert next_run_distance(5.9, profile) == 6.0
        assert capped_run_distance(8.0, profile) == 6.0

    def test_unset_max_uses_default_ceiling(self):
        profile = UserProfile(run_current_distance_miles=1.0, run_max_distance_miles=0)
        assert capped_run_distance(8.0, profile) == 8.0
        assert next_run_distance(6.0, profile) == 6.0


# ---------------------------------------------------------------------------
# Warmups
# ---------------------------------------------------------------------------

class TestWarmups:
    def test_barbell_185(self):
        steps = compute_warmups(185, Category.BARBELL)
        assert [(s.weight_lbs, s.reps) for s in steps] == [(45, 10), (95, 5), (135, 3)]
        assert [s.set_number for s in steps] == [1, 2, 3]
        assert all(s.rest_after_seconds == 60 for s in steps)

    def test_barbell_315_heavy_rest(self):
        steps = compute_warmups(315, Category.BARBELL)
        # 0.88 × 315 = 277.2 → 275 is the last step
        assert [s.weight_lbs for s in steps] == [45, 95, 135, 185, 225, 275]
        assert [s.reps for s in steps] == [10, 5, 3, 2, 2, 1]
        assert [s.rest_after_seconds for s in steps] == [60, 60, 60, 90, 90, 90]

    def test_barbell_light(self):
        assert compute_warmups(45, Category.BARBELL) == []
        # 45 ≥ 0.88 × 50 → no ramp
        assert compute_warmups(50, Category.BARBELL) == []

    def test_cable(self):
        steps = compute_warmups(100, Category.CABLE)
        assert [(s.set_number, s.weight_lbs, s.reps) for s in steps] == [(1, 50, 10), (2, 70, 5)]
        assert all(s.rest_after_seconds == 45 for s in steps)

    def test_cable_rounding(self):
        # 17.5 → 20, 24.5 → 25
        steps = compute_warmups(35, Category.CABLE)
        assert [s.weight_lbs for s in steps] == [20, 25]

    def test_cable_light(self):
        assert compute_warmups(25, Category.CABLE) == []

    @pytest.mark.parametrize("category", [Category.BODYWEIGHT, Category.CARDIO])
    def test_non_loaded(self, category):
        assert compute_warmups(200, category) == []
