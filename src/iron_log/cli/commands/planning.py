"""Planning commands: next, plan, project."""

import json
from typing import Annotated

import typer

from ...core.config import DEFAULT_PROJECTION_COUNT
from ...core.exercises.registry import get_exercise
from ...core.metrics import weight_history
from ...core.planner import build_session_plan, next_session_index, upcoming_sessions
from ...core.projection import project_future
from .. import views
from ..app import HistoryPathOption, app, get_store, load_state


@app.command("next")
def next_session(
    history_path: HistoryPathOption = None,
) -> None:
    """
    Show the next session: prescriptions, warmups, and plates per side.
    """
    profile, history = load_state(get_store(history_path))
    plan = build_session_plan(next_session_index(history), profile, history)
    views.print_session_plan(plan)


@app.command()
def plan(
    history_path: HistoryPathOption = None,
    count: Annotated[
        int,
        typer.Option("--count", "-n", help="Number of upcoming sessions", min=1),
    ] = 10,
) -> None:
    """
    Show the next N sessions.

    Every row is computed from the history logged so far; the sessions
    listed above it are not assumed to have been done.
    """
    profile, history = load_state(get_store(history_path))
    views.print_plan_overview(list(upcoming_sessions(profile, history, count)))


@app.command()
def project(
    exercise: Annotated[str, typer.Argument(help="Exercise name or id, e.g. squat")],
    history_path: HistoryPathOption = None,
    count: Annotated[
        int,
        typer.Option("--count", "-n", help="Number of future occurrences", min=1),
    ] = DEFAULT_PROJECTION_COUNT,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
    chart: Annotated[
        bool,
        typer.Option("--chart/--no-chart", help="Draw the ASCII weight chart"),
    ] = True,
) -> None:
    """
    Project an exercise's working weight forward.
    """
    try:
        ex = get_exercise(exercise)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    profile, history = load_state(get_store(history_path))
    points = list(project_future(ex.name, profile, history, count))

    if json_out:
        print(json.dumps(
            [
                {
                    "session_index": p.session_index,
                    "date": p.date.strftime("%Y-%m-%d"),
                    "weight_lbs": p.weight_lbs,
                }
                for p in points
            ],
            indent=2,
        ))
        return

    views.print_projection(points, ex.name)
    if chart:
        views.print_weight_plot(weight_history(history, ex.name), points, ex.name)
