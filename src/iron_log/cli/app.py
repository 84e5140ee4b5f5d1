"""Shared Typer app object, shared option types, and store utilities."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.models import SessionRecord, UserProfile
from ..io.history_store import HistoryStore, get_default_store
from ..io.serializers import ValidationError
from . import views

# Shared --history-path option type used across all commands
HistoryPathOption = Annotated[
    Optional[Path],
    typer.Option("--history-path", "-p", help="Path to history JSONL file"),
]

app = typer.Typer(
    name="iron-log",
    help="Wave-periodized strength training planner: squat, bench, deadlift, press.",
    no_args_is_help=False,
    invoke_without_command=True,
)


def get_store(history_path: Path | None) -> HistoryStore:
    """Get history store from path or default location."""
    if history_path is None:
        return get_default_store()
    return HistoryStore(history_path)


def load_state(store: HistoryStore) -> tuple[UserProfile, list[SessionRecord]]:
    """
    Load profile and history, exiting with an error message if either is missing
    or invalid.
    """
    try:
        profile = store.load_profile()
        history = store.load_history()
    except FileNotFoundError as e:
        views.print_error(str(e))
        views.print_info("Run 'init' first to create profile and history.")
        raise typer.Exit(1)
    except ValidationError as e:
        views.print_error(f"Invalid data: {e}")
        raise typer.Exit(1)
    return profile, history
