"""Profile commands: init, update-weight."""

from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.models import UserProfile
from ...io.serializers import ValidationError, validate_date
from .. import views
from ..app import HistoryPathOption, app, get_store


def _lbs_option(flag: str, help_text: str):
    return typer.Option(flag, help=help_text, min=0)


@app.command()
def init(
    history_path: HistoryPathOption = None,
    name: Annotated[str, typer.Option("--name", "-n", help="Your name")] = "",
    bodyweight: Annotated[
        float,
        typer.Option("--bodyweight", "-w", help="Current bodyweight in lbs"),
    ] = 160.0,
    height: Annotated[int, typer.Option("--height", help="Height in inches")] = 69,
    start_date: Annotated[
        Optional[str],
        typer.Option("--start-date", help="Program start date (YYYY-MM-DD, default: today)"),
    ] = None,
    squat: Annotated[float, _lbs_option("--squat", "Squat 5-rep working weight (lbs)")] = 135.0,
    bench: Annotated[float, _lbs_option("--bench", "Bench press 5-rep working weight (lbs)")] = 115.0,
    deadlift: Annotated[float, _lbs_option("--deadlift", "Deadlift 5-rep working weight (lbs)")] = 155.0,
    ohp: Annotated[float, _lbs_option("--ohp", "Military press 5-rep working weight (lbs)")] = 75.0,
    lat_pulldown: Annotated[float, _lbs_option("--lat-pulldown", "Lat pulldown 5-rep weight (lbs)")] = 100.0,
    cable_row: Annotated[float, _lbs_option("--cable-row", "Cable row 5-rep weight (lbs)")] = 100.0,
    squat_max: Annotated[float, _lbs_option("--squat-max", "Squat ceiling, 0 = none")] = 315.0,
    bench_max: Annotated[float, _lbs_option("--bench-max", "Bench ceiling, 0 = none")] = 225.0,
    deadlift_max: Annotated[float, _lbs_option("--deadlift-max", "Deadlift ceiling, 0 = none")] = 395.0,
    ohp_max: Annotated[float, _lbs_option("--ohp-max", "Military press ceiling, 0 = none")] = 135.0,
    lat_pulldown_max: Annotated[float, _lbs_option("--lat-pulldown-max", "Lat pulldown ceiling, 0 = none")] = 145.0,
    cable_row_max: Annotated[float, _lbs_option("--cable-row-max", "Cable row ceiling, 0 = none")] = 160.0,
    rdl_max: Annotated[float, _lbs_option("--rdl-max", "Romanian deadlift ceiling, 0 = none")] = 275.0,
    hip_thrust_max: Annotated[float, _lbs_option("--hip-thrust-max", "Hip thrust ceiling, 0 = none")] = 315.0,
    run_miles: Annotated[
        float,
        typer.Option("--run-miles", help="Current run distance target (miles)", min=0),
    ] = 1.0,
    run_max_miles: Annotated[
        float,
        typer.Option("--run-max-miles", help="Run distance ceiling (miles)", min=0),
    ] = 6.0,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing profile without prompting"),
    ] = False,
) -> None:
    """
    Initialize user profile and history file.

    Starting weights are the weights you can lift for 5 clean reps today.
    Existing history is kept; only the profile is replaced.
    """
    store = get_store(history_path)

    if start_date is None:
        start_date = datetime.now().strftime("%Y-%m-%d")

    try:
        validate_date(start_date)
        profile = UserProfile(
            name=name,
            bodyweight_lbs=bodyweight,
            height_inches=height,
            program_start_date=start_date,
            squat_start_lbs=squat,
            bench_start_lbs=bench,
            deadlift_start_lbs=deadlift,
            ohp_start_lbs=ohp,
            lat_pulldown_start_lbs=lat_pulldown,
            cable_row_start_lbs=cable_row,
            squat_max_lbs=squat_max,
            bench_max_lbs=bench_max,
            deadlift_max_lbs=deadlift_max,
            ohp_max_lbs=ohp_max,
            lat_pulldown_max_lbs=lat_pulldown_max,
            cable_row_max_lbs=cable_row_max,
            romanian_deadlift_max_lbs=rdl_max,
            hip_thrust_max_lbs=hip_thrust_max,
            run_current_distance_miles=run_miles,
            run_max_distance_miles=run_max_miles,
        )
    except (ValueError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if store.profile_path.exists() and not force:
        if not views.confirm_action(f"Profile exists at {store.profile_path}. Overwrite?"):
            views.print_info("Cancelled.")
            raise typer.Exit(0)

    store.init()
    store.save_profile(profile)

    existing = len(store.load_history())
    views.print_success(f"Profile saved to {store.profile_path}")
    if existing:
        views.print_info(f"Kept existing history ({existing} sessions).")
    else:
        views.print_info(f"History file: {store.history_path}")
    views.print_info("Run 'iron-log next' to see your first session.")


@app.command("update-weight")
def update_weight(
    bodyweight: Annotated[
        float,
        typer.Argument(help="New bodyweight in lbs"),
    ],
    history_path: HistoryPathOption = None,
) -> None:
    """
    Update current bodyweight in profile.
    """
    store = get_store(history_path)

    try:
        store.update_bodyweight(bodyweight)
    except FileNotFoundError as e:
        views.print_error(str(e))
        views.print_info("Run 'init' first to create profile.")
        raise typer.Exit(1)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.print_success(f"Updated bodyweight to {bodyweight:.1f} lbs")
