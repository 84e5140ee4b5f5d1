"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of training data.
"""

from datetime import date, datetime

from rich.console import Console
from rich.table import Table

from ..core.ascii_plot import (
    create_run_chart,
    create_volume_chart,
    create_weekly_volume_chart,
    create_weight_plot,
)
from ..core.metrics import History, session_volume
from ..core.models import (
    BenchmarkResult,
    CardioPoint,
    Category,
    ExerciseLog,
    ExercisePrescription,
    PersonalRecord,
    ProjectedPoint,
    ScheduleInfo,
    SessionPlan,
    SessionRecord,
    SetRating,
)
from ..core.plates import format_plates, plate_breakdown

console = Console()

_RATING_MARK = {
    SetRating.STRONG: "↑",
    SetRating.BARELY: "~",
    SetRating.FAILED: "✗",
    SetRating.UNRATED: "",
}


def format_schedule_header(schedule: ScheduleInfo) -> str:
    """One-line header: session title, block/week, and deload/benchmark tag."""
    st = schedule.session_type
    tag = ""
    if schedule.is_benchmark:
        tag = "  [bold magenta]BENCHMARK[/bold magenta]"
    elif schedule.is_deload:
        tag = "  [yellow]deload[/yellow]"
    return (
        f"[bold cyan]#{schedule.session_index} {st.title}[/bold cyan] "
        f"[dim]({st.subtitle}, ~{st.estimated_minutes} min)[/dim]  "
        f"Block {schedule.block_number} · Week {schedule.week_in_block}{tag}"
    )


def _fmt_target(p: ExercisePrescription) -> str:
    if p.category is Category.CARDIO:
        return f"{p.target_distance_miles:.1f} mi"
    if p.category is Category.BODYWEIGHT:
        return f"{p.target_sets}×{p.target_bodyweight_reps}"
    return f"{p.target_sets}×{p.target_reps} @ {p.target_weight_lbs:g} lbs"


def format_prescription_table(plan: SessionPlan) -> Table:
    """Table of one session's prescriptions with plate breakdowns."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Exercise", style="cyan", no_wrap=True)
    table.add_column("Target")
    table.add_column("Rest", justify="right", style="dim")
    table.add_column("Plates / side", style="green")

    for p in plan.exercises:
        name = f"[bold]{p.name}[/bold]" if p.is_primary else p.name
        plates = ""
        if p.category is Category.BARBELL:
            plates = format_plates(plate_breakdown(p.target_weight_lbs))
        table.add_row(name, _fmt_target(p), f"{p.rest_seconds}s", plates)
    return table


def print_session_plan(plan: SessionPlan) -> None:
    """Print the header, prescription table, and warmup ramps for a session."""
    console.print()
    console.print(format_schedule_header(plan.schedule))
    console.print(format_prescription_table(plan))

    for name, steps in plan.warmups.items():
        if not steps:
            continue
        ramp = ", ".join(f"{s.weight_lbs:g}×{s.reps}" for s in steps)
        console.print(f"  [dim]Warmup {name}:[/dim] {ramp}")
    console.print()


def print_plan_overview(plans: list[SessionPlan]) -> None:
    """Table of upcoming sessions, one row per session."""
    if not plans:
        console.print("[yellow]No sessions to show.[/yellow]")
        return

    table = Table(title="Upcoming Sessions")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Session", style="magenta", no_wrap=True)
    table.add_column("Blk/Wk", justify="center", no_wrap=True)
    table.add_column("Prescription")

    for plan in plans:
        s = plan.schedule
        label = s.session_type.title
        if s.is_benchmark:
            label += " [bold magenta]★[/bold magenta]"
        elif s.is_deload:
            label += " [yellow](deload)[/yellow]"
        summary = "; ".join(f"{p.name} {_fmt_target(p)}" for p in plan.exercises)
        table.add_row(str(s.session_index), label, f"{s.block_number}/{s.week_in_block}", summary)

    console.print(table)


def _fmt_log(log: ExerciseLog) -> str:
    done = log.completed_sets
    if not done:
        return f"{log.name}: —"
    if log.category.is_loaded:
        sets = " ".join(f"{s.weight_lbs:g}×{s.actual_reps}{_RATING_MARK[s.rating]}" for s in done)
    else:
        sets = " ".join(f"{s.actual_reps}{_RATING_MARK[s.rating]}" for s in done)
    return f"{log.name}: {sets}"


def format_session_table(sessions: list[SessionRecord]) -> Table:
    """
    Format sessions as a Rich table.

    Args:
        sessions: Sessions to display, in index order

    Returns:
        Rich Table object
    """
    table = Table(title="Training History")

    table.add_column("#", justify="right", style="dim")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Session", style="magenta", no_wrap=True)
    table.add_column("Blk/Wk", justify="center", no_wrap=True)
    table.add_column("Sets")
    table.add_column("Volume", justify="right")

    for session in sessions:
        if not session.is_completed:
            detail = "[dim]skipped[/dim]"
            volume = ""
        else:
            parts = [_fmt_log(log) for log in session.exercises]
            if session.cardio is not None:
                parts.insert(0, f"Run: {session.cardio.distance_miles:g} mi")
            detail = "\n".join(parts)
            volume = f"{session_volume(session):,.0f}"

        table.add_row(
            str(session.session_index),
            session.date,
            session.session_type.title,
            f"{session.block_number}/{session.week_in_block}",
            detail,
            volume,
        )

    return table


def print_history(sessions: list[SessionRecord]) -> None:
    """Print the history table."""
    if not sessions:
        console.print("[yellow]No sessions recorded yet.[/yellow]")
        return
    console.print(format_session_table(sessions))


def print_status(
    next_schedule: ScheduleInfo,
    days_to_benchmark: int,
    benchmarks: list[BenchmarkResult],
    history: History,
) -> None:
    """Print the next session position, benchmark countdown, and results."""
    console.print()
    console.print(f"[bold]Next session:[/bold] {format_schedule_header(next_schedule)}")
    console.print(f"[bold]Next benchmark:[/bold] ~{days_to_benchmark} days")
    console.print()

    if benchmarks:
        table = Table(title="Benchmark Results")
        table.add_column("Date", style="cyan", no_wrap=True)
        table.add_column("Exercise")
        table.add_column("Best set", justify="right")
        table.add_column("e1RM", justify="right", style="bold")
        table.add_column("Δ", justify="right")
        for b in benchmarks:
            delta = f"{b.delta_vs_previous:+.1f}" if b.delta_vs_previous else "—"
            table.add_row(b.date, b.exercise, f"{b.weight_lbs:g}×{b.reps}", f"{b.estimated_one_rm:.1f}", delta)
        console.print(table)
        console.print()

    console.print(create_volume_chart(history))
    console.print()


def format_pace(seconds_per_mile: float) -> str:
    """Pace as m:ss /mi, or a dash when unknown."""
    if seconds_per_mile <= 0:
        return "—"
    minutes, seconds = divmod(int(round(seconds_per_mile)), 60)
    return f"{minutes}:{seconds:02d} /mi"


def print_progress(
    records: list[PersonalRecord],
    runs: list[CardioPoint],
    longest: CardioPoint | None,
    fastest: CardioPoint | None,
    ab_wheel: list[tuple[datetime, int]],
    weekly: list[tuple[date, float]],
) -> None:
    """Print personal records, run and ab wheel progress, and weekly volume."""
    console.print()
    if records:
        table = Table(title="Personal Records")
        table.add_column("Exercise", style="cyan", no_wrap=True)
        table.add_column("Best set", justify="right")
        table.add_column("e1RM", justify="right", style="bold")
        table.add_column("Date", style="dim", no_wrap=True)
        for r in records:
            table.add_row(r.exercise, f"{r.weight_lbs:g}×{r.reps}", f"{r.estimated_one_rm:.1f}", r.date)
        console.print(table)
    else:
        console.print("[yellow]No personal records yet.[/yellow]")
    console.print()

    if runs:
        if longest is not None:
            console.print(f"[bold]Best run:[/bold] {longest.distance_miles:.1f} mi ({longest.date})")
        if fastest is not None:
            console.print(f"[bold]Best pace:[/bold] {format_pace(fastest.pace_seconds_per_mile)} ({fastest.date})")
        console.print(create_run_chart([(p.date, p.distance_miles) for p in runs]), highlight=False)
        console.print()

    if ab_wheel:
        best_date, best_reps = max(ab_wheel, key=lambda p: p[1])
        latest_date, latest_reps = ab_wheel[-1]
        console.print(
            f"[bold]Ab wheel:[/bold] latest {latest_reps} reps ({latest_date:%Y-%m-%d}), "
            f"best {best_reps} reps ({best_date:%Y-%m-%d})"
        )
        console.print()

    console.print(create_weekly_volume_chart(weekly), highlight=False)
    console.print()


def print_projection(points: list[ProjectedPoint], exercise: str) -> None:
    """Table of projected working weights."""
    if not points:
        console.print(f"[yellow]No projection for {exercise}: log it at least once first.[/yellow]")
        return

    table = Table(title=f"Projected {exercise}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Weight", justify="right", style="bold")
    for p in points:
        table.add_row(str(p.session_index), p.date.strftime("%Y-%m-%d"), f"{p.weight_lbs:g}")
    console.print(table)


def print_weight_plot(
    history_points: list[tuple[datetime, float]],
    projected: list[ProjectedPoint],
    exercise: str,
) -> None:
    """Print the ASCII weight chart."""
    console.print()
    console.print(create_weight_plot(history_points, projected, exercise), highlight=False)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")
