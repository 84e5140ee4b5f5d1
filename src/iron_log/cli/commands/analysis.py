"""Analysis commands: status, progress."""

import json
from typing import Annotated

import typer

from ...core.metrics import (
    benchmark_results,
    best_pace,
    best_run,
    cardio_history,
    max_reps_history,
    next_session_index,
    personal_records,
    weekly_volume,
)
from ...core.models import CardioPoint
from ...core.schedule import days_to_benchmark, resolve_schedule
from .. import views
from ..app import HistoryPathOption, app, get_store, load_state


@app.command()
def status(
    history_path: HistoryPathOption = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
) -> None:
    """
    Show program position, benchmark countdown, and benchmark results.
    """
    _, history = load_state(get_store(history_path))

    index = next_session_index(history)
    schedule = resolve_schedule(index)
    days = days_to_benchmark(index)
    benchmarks = benchmark_results(history)

    if json_out:
        print(json.dumps({
            "next_session_index": index,
            "session_type": schedule.session_type.value,
            "block_number": schedule.block_number,
            "week_in_block": schedule.week_in_block,
            "is_deload": schedule.is_deload,
            "is_benchmark": schedule.is_benchmark,
            "days_to_benchmark": days,
            "benchmarks": [
                {
                    "date": b.date,
                    "exercise": b.exercise,
                    "weight_lbs": b.weight_lbs,
                    "reps": b.reps,
                    "estimated_one_rm": b.estimated_one_rm,
                    "delta_vs_previous": b.delta_vs_previous,
                }
                for b in benchmarks
            ],
        }, indent=2))
        return

    views.print_status(schedule, days, benchmarks, history)


def _run_dict(p: CardioPoint) -> dict:
    return {
        "date": p.date,
        "distance_miles": p.distance_miles,
        "duration_seconds": p.duration_seconds,
        "pace_seconds_per_mile": round(p.pace_seconds_per_mile, 1),
    }


@app.command()
def progress(
    history_path: HistoryPathOption = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
) -> None:
    """
    Show personal records, run and ab wheel progress, and weekly volume.
    """
    _, history = load_state(get_store(history_path))

    records = personal_records(history)
    runs = cardio_history(history)
    longest = best_run(history)
    fastest = best_pace(history)
    ab_wheel = max_reps_history(history, "Ab Wheel")
    weekly = weekly_volume(history)

    if json_out:
        print(json.dumps({
            "personal_records": [
                {
                    "exercise": r.exercise,
                    "date": r.date,
                    "weight_lbs": r.weight_lbs,
                    "reps": r.reps,
                    "estimated_one_rm": round(r.estimated_one_rm, 1),
                }
                for r in records
            ],
            "runs": [_run_dict(p) for p in runs],
            "best_run": _run_dict(longest) if longest else None,
            "best_pace": _run_dict(fastest) if fastest else None,
            "ab_wheel": [{"date": d.strftime("%Y-%m-%d"), "max_reps": reps} for d, reps in ab_wheel],
            "weekly_volume": [{"week_start": w.isoformat(), "volume_lbs": v} for w, v in weekly],
        }, indent=2))
        return

    views.print_progress(records, runs, longest, fastest, ab_wheel, weekly)
