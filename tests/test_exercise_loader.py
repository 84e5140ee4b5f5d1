"""
Tests for the YAML exercise loader and its user overrides.
"""

import warnings

import pytest

from iron_log.core.exercises.loader import exercise_from_dict, load_exercises_from_yaml
from iron_log.core.exercises.registry import get_exercise, roster_for
from iron_log.core.models import Category, SessionType


@pytest.fixture
def user_dir(tmp_path, monkeypatch):
    """An empty ~/.iron-log/exercises under a temporary HOME."""
    monkeypatch.setenv("HOME", str(tmp_path))
    path = tmp_path / ".iron-log" / "exercises"
    path.mkdir(parents=True)
    return path


class TestBundledRoster:
    def test_all_exercises_load(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            loaded = load_exercises_from_yaml()
        assert len(loaded) == 10
        assert loaded["Squat"].rest_seconds == 210

    def test_roster_order(self):
        assert [ex.name for ex in roster_for(SessionType.UPPER_B)] == ["Military Press", "Lat Pulldown"]

    def test_lookup_by_id_or_name(self):
        assert get_exercise("bench_press").name == "Bench Press"
        assert get_exercise("deadlift").name == "Deadlift"
        with pytest.raises(ValueError):
            get_exercise("curl")

    def test_missing_fields(self):
        with pytest.raises(ValueError, match="missing fields"):
            exercise_from_dict({"name": "Squat"})


class TestUserOverrides:
    def test_override_merges_over_bundled(self, user_dir):
        (user_dir / "squat.yaml").write_text("rest_seconds: 240\n")

        squat = load_exercises_from_yaml()["Squat"]
        assert squat.rest_seconds == 240
        assert squat.category is Category.BARBELL
        assert squat.cap_field == "squat_max_lbs"

    def test_nested_keys_merge(self, user_dir):
        (user_dir / "romanian_deadlift.yaml").write_text("start_weight:\n  floor: 95\n")

        rdl = load_exercises_from_yaml()["Romanian Deadlift"]
        assert rdl.start_floor == 95
        assert rdl.start_field == "deadlift_start_lbs"
        assert rdl.start_factor == 0.65

    def test_invalid_override_falls_back(self, user_dir):
        (user_dir / "squat.yaml").write_text("category: kettlebell\nrest_seconds: 30\n")

        with pytest.warns(UserWarning, match="ignoring user override for 'squat'"):
            loaded = load_exercises_from_yaml()
        assert loaded["Squat"].category is Category.BARBELL
        assert loaded["Squat"].rest_seconds == 210

    def test_unreadable_override_is_skipped(self, user_dir):
        (user_dir / "bench_press.yaml").write_text("rest_seconds: [unclosed\n")

        with pytest.warns(UserWarning, match="cannot read"):
            loaded = load_exercises_from_yaml()
        assert loaded["Bench Press"].rest_seconds == get_exercise("Bench Press").rest_seconds

    def test_unknown_files_are_ignored(self, user_dir):
        (user_dir / "curl.yaml").write_text(
            "exercise_id: curl\nname: Curl\ncategory: cable\nsession_type: upperA\n"
            "order: 2\nis_primary: false\nupper_body: true\nrest_seconds: 60\n"
        )

        loaded = load_exercises_from_yaml()
        assert "Curl" not in loaded
        assert len(loaded) == 10
