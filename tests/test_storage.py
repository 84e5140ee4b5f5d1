"""
Tests for JSON serialization and the JSONL history store.
"""

import json

import pytest

from iron_log.core.models import (
    CardioResult,
    Category,
    ExerciseLog,
    SessionRecord,
    SessionStatus,
    SessionType,
    SetRating,
    UserProfile,
    WorkingSet,
)
from iron_log.io.history_store import HistoryStore
from iron_log.io.serializers import (
    ValidationError,
    dict_to_session_record,
    dict_to_user_profile,
    json_line_to_session,
    parse_sets_string,
    session_to_json_line,
    user_profile_to_dict,
    validate_date,
    validate_positive,
)


def _squat_session(index: int = 0, date: str = "2026-01-05", weight: float = 110) -> SessionRecord:
    sets = (
        WorkingSet(1, 8, weight, actual_reps=8, completed=True, rating=SetRating.STRONG),
        WorkingSet(2, 8, weight, actual_reps=6, completed=True, rating=SetRating.FAILED),
        WorkingSet(3, 8, weight * 0.9),
    )
    return SessionRecord(
        session_index=index,
        session_type=SessionType.LOWER_A,
        week_in_block=1,
        block_number=1,
        date=date,
        exercises=(ExerciseLog("Squat", Category.BARBELL, True, 3, 8, weight, sets),),
        duration_seconds=3300,
        bodyweight_lbs=181.5,
    )


class TestSerializers:
    def test_session_json_line(self):
        session = _squat_session()
        line = session_to_json_line(session)
        assert "\n" not in line
        assert json_line_to_session(line) == session

    def test_compact_set_fields(self):
        data = json.loads(session_to_json_line(_squat_session()))
        sets = data["exercises"][0]["sets"]
        assert sets[0]["rating"] == "strong"
        assert "rating" not in sets[2]
        assert "cardio" not in data

    def test_cardio_session(self):
        session = SessionRecord(
            session_index=4,
            session_type=SessionType.CARDIO,
            week_in_block=1,
            block_number=1,
            date="2026-01-09",
            cardio=CardioResult(distance_miles=1.5, duration_seconds=900, rpe=6),
        )
        restored = json_line_to_session(session_to_json_line(session))
        assert restored.cardio == CardioResult(1.5, 900, 6)

    def test_skipped_defaults(self):
        restored = dict_to_session_record({
            "session_index": 3,
            "session_type": "upperB",
            "week_in_block": 1,
            "block_number": 1,
            "date": "2026-01-08",
            "status": "skipped",
        })
        assert restored.status is SessionStatus.SKIPPED
        assert restored.exercises == ()

    @pytest.mark.parametrize(
        "bad",
        [
            {"session_type": "lowerA", "week_in_block": 1, "block_number": 1, "date": "2026-01-05"},
            {"session_index": 0, "session_type": "legs", "week_in_block": 1, "block_number": 1, "date": "2026-01-05"},
            {"session_index": 0, "session_type": "lowerA", "week_in_block": 5, "block_number": 1, "date": "2026-01-05"},
            {"session_index": 0, "session_type": "lowerA", "week_in_block": 1, "block_number": 1, "date": "05/01/2026"},
        ],
    )
    def test_invalid_session(self, bad):
        with pytest.raises(ValidationError):
            dict_to_session_record(bad)

    def test_invalid_json(self):
        with pytest.raises(ValidationError):
            json_line_to_session("{not json")

    def test_validate_date(self):
        assert validate_date("2026-02-28") == "2026-02-28"
        with pytest.raises(ValidationError):
            validate_date("2026-02-30")

    @pytest.mark.parametrize("value", ["5", True, None])
    def test_numbers_must_be_numeric(self, value):
        with pytest.raises(ValidationError, match="must be a number"):
            validate_positive(value, "block_number")

    def test_profile_dict(self):
        profile = UserProfile(name="Sam", squat_start_lbs=185, squat_max_lbs=0)
        assert dict_to_user_profile(user_profile_to_dict(profile)) == profile

    def test_profile_ignores_unknown_and_rejects_invalid(self):
        assert dict_to_user_profile({"legacy": 1}) == UserProfile()
        with pytest.raises(ValidationError):
            dict_to_user_profile({"bodyweight_lbs": -5})

    @pytest.mark.parametrize(
        "bad",
        [{"squat_start_lbs": "heavy"}, {"height_inches": None}, {"squat_max_lbs": 107.5}],
    )
    def test_profile_bad_values(self, bad):
        with pytest.raises(ValidationError, match="Invalid profile"):
            dict_to_user_profile(bad)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("session_index", "3"),
            ("session_index", True),
            ("week_in_block", "two"),
            ("block_number", None),
            ("exercises", ["squat"]),
            ("cardio", {"distance_miles": 1.0, "rpe": "hard"}),
        ],
    )
    def test_session_bad_values(self, field, value):
        data = json.loads(session_to_json_line(_squat_session()))
        data[field] = value
        with pytest.raises(ValidationError):
            dict_to_session_record(data)

    def test_store_reports_bad_value_with_line(self, tmp_path):
        path = tmp_path / "history.jsonl"
        data = json.loads(session_to_json_line(_squat_session()))
        data["session_index"] = "3"
        path.write_text(json.dumps(data) + "\n")
        with pytest.raises(ValidationError, match="line 1"):
            HistoryStore(path).load_history()

    def test_store_reports_bad_profile_value(self, tmp_path):
        store = HistoryStore(tmp_path / "history.jsonl")
        store.profile_path.write_text(json.dumps({"squat_start_lbs": "heavy"}))
        with pytest.raises(ValidationError):
            store.load_profile()


class TestParseSetsString:
    def test_weight_x_reps(self):
        assert parse_sets_string("135x8, 135x6:failed") == [
            (135.0, 8, SetRating.UNRATED),
            (135.0, 6, SetRating.FAILED),
        ]

    def test_compact(self):
        assert parse_sets_string("8x3@110") == [(110.0, 8, SetRating.UNRATED)] * 3

    def test_bare_reps_are_bodyweight(self):
        assert parse_sets_string("12:strong,10") == [
            (0.0, 12, SetRating.STRONG),
            (0.0, 10, SetRating.UNRATED),
        ]

    @pytest.mark.parametrize("bad", ["", "  ", "heavy", "135x8:meh", "8x0@100"])
    def test_invalid(self, bad):
        with pytest.raises(ValidationError):
            parse_sets_string(bad)


class TestHistoryStore:
    def test_init_and_profile(self, tmp_path):
        store = HistoryStore(tmp_path / "data" / "history.jsonl")
        store.init()
        assert store.exists()
        assert store.load_history() == []

        store.save_profile(UserProfile(name="Sam"))
        assert store.load_profile().name == "Sam"

    def test_missing_files(self, tmp_path):
        store = HistoryStore(tmp_path / "history.jsonl")
        with pytest.raises(FileNotFoundError):
            store.load_history()
        with pytest.raises(FileNotFoundError):
            store.load_profile()

    def test_append_sorts_by_index_and_replaces(self, tmp_path):
        store = HistoryStore(tmp_path / "history.jsonl")
        store.init()
        store.append_session(_squat_session(index=5, date="2026-01-12", weight=120))
        store.append_session(_squat_session(index=0))
        store.append_session(_squat_session(index=5, date="2026-01-13", weight=125))

        history = store.load_history()
        assert [s.session_index for s in history] == [0, 5]
        assert history[1].date == "2026-01-13"
        assert store.get_latest_session().session_index == 5

    def test_delete(self, tmp_path):
        store = HistoryStore(tmp_path / "history.jsonl")
        store.init()
        store.append_session(_squat_session(index=0))
        deleted = store.delete_session(0)
        assert deleted.session_index == 0
        assert store.load_history() == []
        with pytest.raises(KeyError):
            store.delete_session(0)

    def test_bad_line_reports_line_number(self, tmp_path):
        path = tmp_path / "history.jsonl"
        path.write_text(session_to_json_line(_squat_session()) + "\n{oops\n")
        with pytest.raises(ValidationError, match="line 2"):
            HistoryStore(path).load_history()

    def test_update_profile_fields(self, tmp_path):
        store = HistoryStore(tmp_path / "history.jsonl")
        store.save_profile(UserProfile())
        store.update_bodyweight(175.0)
        updated = store.update_profile(run_current_distance_miles=1.3)
        assert updated.bodyweight_lbs == 175.0
        assert store.load_profile().run_current_distance_miles == 1.3

    def test_update_bodyweight_requires_profile(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            HistoryStore(tmp_path / "history.jsonl").update_bodyweight(170)

    def test_clear(self, tmp_path):
        store = HistoryStore(tmp_path / "history.jsonl")
        store.init()
        store.append_session(_squat_session())
        store.clear_history()
        assert store.load_history() == []
