"""
ASCII plotting for working-weight progress.

Creates terminal-friendly plots of logged weights and their projection.
"""

from datetime import date, datetime

from .metrics import History, session_volume
from .models import ProjectedPoint, SessionType


def _draw_staircase(
    grid: list[list[str]],
    points: list[tuple[int, int]],
) -> None:
    """Join consecutive (x, y) grid points with ╭─╯ staircase lines."""
    plot_height = len(grid)
    plot_width = len(grid[0]) if grid else 0

    def _put(x: int, r: int, ch: str) -> None:
        if 0 <= x < plot_width and 0 <= r < plot_height and grid[r][x] == " ":
            grid[r][x] = ch

    for (col1, row1), (col2, row2) in zip(points, points[1:]):
        n_rows = abs(row2 - row1)
        if n_rows == 0:
            for x in range(col1 + 1, col2):
                _put(x, row1, "─")
            continue

        if col1 == col2:
            for r in range(min(row1, row2) + 1, max(row1, row2)):
                _put(col1, r, "│")
            continue

        row_dir = -1 if row2 < row1 else 1
        up = row_dir == -1
        corner_exit = "╯" if up else "╮"
        corner_entry = "╭" if up else "╰"

        n_segs = n_rows + 1
        for step in range(n_segs):
            row = row1 + row_dir * step
            pivot_in = col1 + (col2 - col1) * step // n_segs
            pivot_out = col1 + (col2 - col1) * (step + 1) // n_segs

            if step == 0:
                for x in range(col1 + 1, pivot_out):
                    _put(x, row, "─")
                _put(pivot_out, row, corner_exit)
            elif step == n_segs - 1:
                _put(pivot_in, row, corner_entry)
                for x in range(pivot_in + 1, col2):
                    _put(x, row, "─")
            else:
                _put(pivot_in, row, corner_entry)
                for x in range(pivot_in + 1, pivot_out):
                    _put(x, row, "─")
                _put(pivot_out, row, corner_exit)


def create_weight_plot(
    history_points: list[tuple[datetime, float]],
    projected_points: list[ProjectedPoint],
    exercise_name: str,
    width: int = 60,
    height: int = 20,
) -> str:
    """
    Create an ASCII plot of working weight over time.

    Args:
        history_points: (date, heaviest completed weight) per logged occurrence
        projected_points: Future points from the projection; plotted as ·
        exercise_name: Display name shown in chart title
        width: Plot width in characters
        height: Plot height in lines

    Returns:
        ASCII art string
    """
    if not history_points and not projected_points:
        return f"No {exercise_name} sessions logged yet. Log a session to see progress."

    points = sorted(history_points, key=lambda p: p[0])
    future = [(p.date, p.weight_lbs) for p in projected_points]

    all_dates = [d for d, _ in points] + [d for d, _ in future]
    all_weights = [w for _, w in points] + [w for _, w in future]
    min_date, max_date = min(all_dates), max(all_dates)
    date_range = (max_date - min_date).days or 1

    y_min = max(0.0, min(all_weights) - 10)
    y_max = max(all_weights) + 10
    y_range = y_max - y_min or 1.0

    plot_width = width - 7  # room for "315 ┤" labels
    plot_height = height - 3  # room for title and x-axis

    grid = [[" " for _ in range(plot_width)] for _ in range(plot_height)]

    def _grid_pos(date: datetime, weight: float) -> tuple[int, int]:
        x = int(((date - min_date).days / date_range) * (plot_width - 1))
        y = int(((weight - y_min) / y_range) * (plot_height - 1))
        return x, plot_height - 1 - y

    for date, weight in future:
        x, y = _grid_pos(date, weight)
        if 0 <= x < plot_width and 0 <= y < plot_height:
            grid[y][x] = "·"

    logged = [_grid_pos(d, w) for d, w in points]
    _draw_staircase(grid, logged)
    for x, y in logged:
        if 0 <= x < plot_width and 0 <= y < plot_height:
            grid[y][x] = "●"

    lines = [f"Working Weight ({exercise_name})", "─" * width]

    for i, row in enumerate(grid):
        y_val = y_max - (i / (plot_height - 1)) * y_range if plot_height > 1 else y_max
        lines.append(f"{y_val:4.0f} ┤" + "".join(row))

    lines.append("─" * width)

    label_line = [" "] * plot_width
    mid_date = min_date + (max_date - min_date) / 2
    for x_pos, date in ((0, min_date), (plot_width // 2, mid_date), (plot_width - 10, max_date)):
        for i, c in enumerate(date.strftime("%b %d")):
            if 0 <= x_pos + i < plot_width:
                label_line[x_pos + i] = c
    lines.append("      " + "".join(label_line))

    legend = ["● logged (lbs)"]
    if future:
        legend.append("· projected")
    lines.append("   ".join(legend))

    return "\n".join(lines)


def create_simple_bar_chart(
    labels: list[str],
    values: list[float],
    width: int = 40,
    title: str = "",
    value_format: str = ".0f",
) -> str:
    """
    Create a simple horizontal bar chart.

    Args:
        labels: Labels for each bar
        values: Values for each bar
        width: Maximum bar width
        title: Chart title
        value_format: Format spec for the value printed after each bar

    Returns:
        ASCII bar chart string
    """
    if not values:
        return "No data to display."

    max_val = max(values)
    max_label_len = max(len(label) for label in labels) if labels else 0

    lines = []

    if title:
        lines.append(title)
        lines.append("─" * (max_label_len + width + 5))

    for label, value in zip(labels, values):
        bar_len = int((value / max_val) * width) if max_val > 0 else 0
        lines.append(f"{label:>{max_label_len}} │{'█' * bar_len} {value:{value_format}}")

    return "\n".join(lines)


def create_volume_chart(history: History) -> str:
    """Total lbs moved per session type over the completed history."""
    totals = {st: 0.0 for st in SessionType if st is not SessionType.CARDIO}
    for session in history:
        if session.is_completed and session.session_type in totals:
            totals[session.session_type] += session_volume(session)

    if not any(totals.values()):
        return "No lifting volume logged yet."

    return create_simple_bar_chart(
        [st.title for st in totals],
        list(totals.values()),
        title="Volume by Session (lbs)",
    )


def create_weekly_volume_chart(weekly: list[tuple[date, float]], weeks: int = 12) -> str:
    """Lifting volume for the most recent ``weeks`` calendar weeks."""
    recent = weekly[-weeks:]
    if not recent:
        return "No lifting volume logged yet."
    return create_simple_bar_chart(
        [f"wk {start:%m-%d}" for start, _ in recent],
        [total for _, total in recent],
        title="Weekly Volume (lbs)",
    )


def create_run_chart(distances: list[tuple[str, float]], runs: int = 12) -> str:
    """Distance of the most recent runs, labelled by date."""
    recent = distances[-runs:]
    if not recent:
        return "No runs logged yet."
    return create_simple_bar_chart(
        [label for label, _ in recent],
        [miles for _, miles in recent],
        title="Run Distance (mi)",
        value_format=".1f",
    )
