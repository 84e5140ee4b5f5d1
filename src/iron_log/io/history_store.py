"""
JSONL-based history storage for training sessions.

Handles reading, writing, and managing the training history file and the
profile.json stored next to it.
"""

import json
from dataclasses import replace
from pathlib import Path

from ..core.models import SessionRecord, UserProfile
from .serializers import (
    ValidationError,
    dict_to_session_record,
    dict_to_user_profile,
    session_to_json_line,
    user_profile_to_dict,
    validate_positive,
)


class HistoryStore:
    """
    Manages training history stored in JSONL format.

    The history file contains one session record per line, kept sorted by
    session index.  A separate profile.json file stores the user profile.
    """

    def __init__(self, history_path: str | Path):
        """
        Initialize the history store.

        Args:
            history_path: Path to the JSONL history file
        """
        self.history_path = Path(history_path)
        self.profile_path = self.history_path.parent / "profile.json"

    def exists(self) -> bool:
        """Check if the history file exists."""
        return self.history_path.exists()

    def init(self) -> None:
        """
        Initialize empty history file if it doesn't exist.

        Creates parent directories if needed.
        """
        self.history_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.history_path.exists():
            self.history_path.touch()

    def load_profile(self) -> UserProfile:
        """
        Load user profile from profile.json.

        Raises:
            FileNotFoundError: If the profile has not been created
            ValidationError: If the file is not a valid profile
        """
        if not self.profile_path.exists():
            raise FileNotFoundError(
                f"Profile not found: {self.profile_path}. Run 'init' first."
            )

        try:
            with open(self.profile_path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Error parsing {self.profile_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValidationError(f"Error parsing {self.profile_path}: expected a JSON object")
        return dict_to_user_profile(data)

    def save_profile(self, profile: UserProfile) -> None:
        """Write the profile to profile.json, replacing any previous one."""
        self.profile_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.profile_path, "w") as f:
            json.dump(user_profile_to_dict(profile), f, indent=2)

    def update_profile(self, **changes) -> UserProfile:
        """
        Replace individual profile fields and save.

        Returns:
            The updated profile
        """
        profile = replace(self.load_profile(), **changes)
        self.save_profile(profile)
        return profile

    def update_bodyweight(self, bodyweight_lbs: float) -> UserProfile:
        """
        Update current bodyweight in profile.json.

        Raises:
            FileNotFoundError: If the profile has not been created
            ValidationError: If the bodyweight is not positive
        """
        validate_positive(bodyweight_lbs, "bodyweight_lbs")
        return self.update_profile(bodyweight_lbs=bodyweight_lbs)

    def load_history(self) -> list[SessionRecord]:
        """
        Load all sessions from the history file.

        Returns:
            List of SessionRecord, sorted by session index

        Raises:
            FileNotFoundError: If history file doesn't exist
            ValidationError: If a line is malformed (message names the line)
        """
        if not self.history_path.exists():
            raise FileNotFoundError(
                f"History file not found: {self.history_path}. Run 'init' first."
            )

        sessions: list[SessionRecord] = []

        with open(self.history_path, "r") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue

                try:
                    data = json.loads(line)
                    if not isinstance(data, dict):
                        raise ValidationError("expected a JSON object")
                    sessions.append(dict_to_session_record(data))
                except (json.JSONDecodeError, ValidationError) as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.history_path}: {e}"
                    ) from e

        sessions.sort(key=lambda s: s.session_index)
        return sessions

    def append_session(self, session: SessionRecord) -> None:
        """
        Add a session to the history file.

        A record with the same session index is replaced; otherwise the
        session is inserted in index order.

        Raises:
            FileNotFoundError: If history file doesn't exist
        """
        sessions = [s for s in self.load_history() if s.session_index != session.session_index]
        sessions.append(session)
        sessions.sort(key=lambda s: s.session_index)
        self._write_sessions(sessions)

    def _write_sessions(self, sessions: list[SessionRecord]) -> None:
        with open(self.history_path, "w") as f:
            for session in sessions:
                f.write(session_to_json_line(session) + "\n")

    def get_latest_session(self) -> SessionRecord | None:
        """Session with the highest index, or None if no history."""
        try:
            sessions = self.load_history()
        except FileNotFoundError:
            return None
        return sessions[-1] if sessions else None

    def delete_session(self, session_index: int) -> SessionRecord:
        """
        Delete the record with the given session index.

        Returns:
            The deleted record

        Raises:
            KeyError: If no record has that index
        """
        sessions = self.load_history()
        for i, session in enumerate(sessions):
            if session.session_index == session_index:
                del sessions[i]
                self._write_sessions(sessions)
                return session
        raise KeyError(f"No session with index {session_index}")

    def clear_history(self) -> None:
        """
        Clear all history (dangerous - use with caution).
        """
        if self.history_path.exists():
            self.history_path.write_text("")


def get_default_history_path() -> Path:
    """
    Get the default history file path.

    Returns:
        ``~/.iron-log/history.jsonl``
    """
    return Path.home() / ".iron-log" / "history.jsonl"


def get_default_store() -> HistoryStore:
    """
    Get a HistoryStore with the default path.

    Returns:
        HistoryStore instance
    """
    return HistoryStore(get_default_history_path())
