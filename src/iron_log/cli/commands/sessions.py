"""Session commands: log-session, show-history, delete-record, and helpers."""

from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.exercises.registry import get_exercise
from ...core.models import (
    CardioResult,
    Category,
    ExerciseLog,
    ExercisePrescription,
    SessionRecord,
    SessionStatus,
    SetRating,
    WorkingSet,
)
from ...core.planner import compute_prescription, next_session_index
from ...core.progression import adjust_remaining_sets, next_run_distance
from ...core.schedule import resolve_schedule
from ...io.serializers import ValidationError, parse_sets_string, validate_date
from .. import views
from ..app import HistoryPathOption, app, get_store, load_state


def _planned_sets(p: ExercisePrescription) -> tuple[WorkingSet, ...]:
    reps = p.target_bodyweight_reps if p.category is Category.BODYWEIGHT else p.target_reps
    return tuple(
        WorkingSet(set_number=i, target_reps=reps or 0, weight_lbs=p.target_weight_lbs)
        for i in range(1, p.target_sets + 1)
    )


def _logged_weight(p: ExercisePrescription, weight: float) -> float:
    """Weight to store for one typed set; loaded lifts need an explicit load."""
    if not p.category.is_loaded:
        return 0.0
    if weight <= 0:
        raise ValidationError(f"{p.name} sets need a weight, e.g. '{p.target_weight_lbs:g}x{p.target_reps}'")
    return weight


def _sets_from_string(p: ExercisePrescription, sets_str: str) -> tuple[WorkingSet, ...]:
    """Logged sets from a parsed sets string, all marked completed."""
    planned_reps = p.target_bodyweight_reps if p.category is Category.BODYWEIGHT else p.target_reps
    return tuple(
        WorkingSet(
            set_number=i,
            target_reps=planned_reps or 0,
            weight_lbs=_logged_weight(p, weight),
            actual_reps=reps,
            completed=True,
            rating=rating,
        )
        for i, (weight, reps, rating) in enumerate(parse_sets_string(sets_str), 1)
    )


def _as_prescribed(p: ExercisePrescription) -> tuple[WorkingSet, ...]:
    return tuple(
        WorkingSet(
            set_number=s.set_number,
            target_reps=s.target_reps,
            weight_lbs=s.weight_lbs,
            actual_reps=s.target_reps,
            completed=True,
        )
        for s in _planned_sets(p)
    )


def _interactive_sets(p: ExercisePrescription) -> tuple[WorkingSet, ...]:
    """
    Prompt for each planned set of one exercise.

    Enter accepts the set as planned, ``WEIGHTxREPS[:rating]`` (or bare reps
    for bodyweight work) records what was done, ``s`` skips the remaining
    sets.  A failed set lowers the weight of the sets still to come.
    """
    sets = list(_planned_sets(p))
    views.console.print(f"\n[bold]{p.name}[/bold]")

    for i, planned in enumerate(sets):
        label = f"{planned.weight_lbs:g}×{planned.target_reps}" if p.category.is_loaded else f"{planned.target_reps} reps"
        while True:
            raw = views.console.input(f"  Set {planned.set_number} ({label}) [Enter = done]: ").strip()
            if raw.lower() == "s":
                return tuple(s for s in sets if s.completed)
            if not raw:
                weight, reps, rating = planned.weight_lbs, planned.target_reps, SetRating.UNRATED
                break
            try:
                weight, reps, rating = parse_sets_string(raw)[0]
                weight = _logged_weight(p, weight)
            except ValidationError as e:
                views.print_error(str(e))
                continue
            break

        done = WorkingSet(
            set_number=planned.set_number,
            target_reps=planned.target_reps,
            weight_lbs=weight,
            actual_reps=reps,
            completed=True,
            rating=rating,
        )
        sets[i] = done
        if rating is SetRating.FAILED and p.category.is_loaded:
            sets = list(adjust_remaining_sets(sets, done, p.category))
            if i + 1 < len(sets):
                views.print_info(f"  Remaining sets lowered to {sets[i + 1].weight_lbs:g} lbs")

    return tuple(sets)


def _parse_exercise_sets(entries: list[str]) -> dict[str, str]:
    """Map ``Exercise=SETS`` entries to canonical exercise names."""
    result: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValidationError(f"Expected EXERCISE=SETS, got '{entry}'")
        key, sets_str = entry.split("=", 1)
        try:
            name = get_exercise(key).name
        except ValueError as e:
            raise ValidationError(str(e)) from e
        result[name] = sets_str
    return result


@app.command("log-session")
def log_session(
    history_path: HistoryPathOption = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Session date (YYYY-MM-DD, default: today)"),
    ] = None,
    sets: Annotated[
        Optional[list[str]],
        typer.Option(
            "--sets",
            "-s",
            help="EXERCISE=SETS, repeatable, e.g. 'squat=110x8,110x8,110x7:failed' or 'squat=8x3@110'",
        ),
    ] = None,
    as_prescribed: Annotated[
        bool,
        typer.Option("--as-prescribed", "-a", help="Log unlisted exercises exactly as prescribed"),
    ] = False,
    skipped: Annotated[
        bool,
        typer.Option("--skipped", help="Record the session as skipped"),
    ] = False,
    run_miles: Annotated[
        Optional[float],
        typer.Option("--run-miles", help="Run distance (cardio sessions)", min=0),
    ] = None,
    run_minutes: Annotated[
        float,
        typer.Option("--run-minutes", help="Run duration in minutes", min=0),
    ] = 0.0,
    rpe: Annotated[
        int,
        typer.Option("--rpe", help="Run effort 1-10", min=1, max=10),
    ] = 5,
    duration_minutes: Annotated[
        int,
        typer.Option("--duration", help="Total session length in minutes", min=0),
    ] = 0,
    bodyweight: Annotated[
        Optional[float],
        typer.Option("--bodyweight", "-w", help="Bodyweight in lbs"),
    ] = None,
    notes: Annotated[
        Optional[str],
        typer.Option("--notes", help="Free-text notes"),
    ] = None,
) -> None:
    """
    Log the next session of the program.

    Exercises given with --sets are recorded as typed; the rest are logged as
    prescribed with --as-prescribed, or prompted for set by set.
    """
    store = get_store(history_path)
    profile, history = load_state(store)

    if date is None:
        date = datetime.now().strftime("%Y-%m-%d")

    index = next_session_index(history)
    schedule = resolve_schedule(index)

    try:
        validate_date(date)
        given = _parse_exercise_sets(sets or [])
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if history and date < history[-1].date:
        views.print_warning(f"{date} is earlier than the last logged session ({history[-1].date})")

    if skipped:
        record = SessionRecord(
            session_index=index,
            session_type=schedule.session_type,
            week_in_block=schedule.week_in_block,
            block_number=schedule.block_number,
            date=date,
            status=SessionStatus.SKIPPED,
            notes=notes,
        )
        store.append_session(record)
        views.print_success(f"Skipped session #{index} ({schedule.session_type.title})")
        return

    views.console.print(views.format_schedule_header(schedule))

    logs: list[ExerciseLog] = []
    cardio: CardioResult | None = None
    for p in compute_prescription(index, profile, history):
        if p.category is Category.CARDIO:
            distance = run_miles if run_miles is not None else p.target_distance_miles or 0.0
            cardio = CardioResult(
                distance_miles=distance,
                duration_seconds=int(run_minutes * 60),
                rpe=rpe,
            )
            continue

        try:
            if p.name in given:
                working = _sets_from_string(p, given[p.name])
            elif as_prescribed:
                working = _as_prescribed(p)
            else:
                working = _interactive_sets(p)
        except ValidationError as e:
            views.print_error(f"{p.name}: {e}")
            raise typer.Exit(1)

        logs.append(
            ExerciseLog(
                name=p.name,
                category=p.category,
                is_primary=p.is_primary,
                target_sets=p.target_sets,
                target_reps=p.target_reps,
                target_weight_lbs=p.target_weight_lbs,
                working_sets=working,
            )
        )

    try:
        record = SessionRecord(
            session_index=index,
            session_type=schedule.session_type,
            week_in_block=schedule.week_in_block,
            block_number=schedule.block_number,
            date=date,
            exercises=tuple(logs),
            cardio=cardio,
            duration_seconds=duration_minutes * 60,
            bodyweight_lbs=bodyweight,
            notes=notes,
        )
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.append_session(record)
    views.print_success(f"Logged session #{index} ({schedule.session_type.title}) on {date}")

    if cardio is not None:
        target = next_run_distance(cardio.distance_miles, profile)
        if target != profile.run_current_distance_miles:
            store.update_profile(run_current_distance_miles=target)
            views.print_info(f"Next run target: {target:.1f} mi")
    if bodyweight is not None:
        store.update_bodyweight(bodyweight)


@app.command("show-history")
def show_history(
    history_path: HistoryPathOption = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Show only the last N sessions", min=1),
    ] = None,
) -> None:
    """
    Display training history.
    """
    _, history = load_state(get_store(history_path))
    if limit is not None:
        history = history[-limit:]
    views.print_history(history)


@app.command("delete-record")
def delete_record(
    session_index: Annotated[int, typer.Argument(help="Session # to delete (see show-history)")],
    history_path: HistoryPathOption = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Delete without confirmation"),
    ] = False,
) -> None:
    """
    Delete a logged session by its session number.
    """
    store = get_store(history_path)
    _, history = load_state(store)

    target = next((s for s in history if s.session_index == session_index), None)
    if target is None:
        views.print_error(f"No session #{session_index} in history")
        raise typer.Exit(1)

    views.console.print(
        f"Session to delete: [bold]#{session_index}[/bold] {target.date} ({target.session_type.title})"
    )
    if not force and not views.confirm_action("Delete this session?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    store.delete_session(session_index)
    views.print_success(f"Deleted session #{session_index}: {target.date} ({target.session_type.title})")
