"""
CLI entry point using Typer.

Provides commands for training management:
- init: Create the profile and history file
- next: Show the next session with warmups and plates
- plan: Show the next N sessions
- log-session: Log the next session
- show-history: Display training history
- delete-record: Delete a logged session
- status: Program position and benchmark results
- progress: Personal records, runs, ab wheel, weekly volume
- project: Projected working weight for one exercise
- update-weight: Update current bodyweight
"""

import typer

from . import views
from .app import app
from .commands import analysis, planning, profile, sessions  # noqa: F401  (register commands)


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    """
    Strength training planner. Run without a command for interactive mode.
    """
    if ctx.invoked_subcommand is not None:
        return

    views.console.print()
    views.console.print("[bold cyan]iron-log[/bold cyan] — wave-periodized strength training")
    views.console.print()

    menu = {
        "1": ("next",         "Show next session"),
        "2": ("log-session",  "Log next session"),
        "3": ("plan",         "Show upcoming sessions"),
        "4": ("show-history", "Show full history"),
        "5": ("status",       "Program status & benchmarks"),
        "6": ("project",      "Project an exercise"),
        "7": ("progress",     "Records & progress"),
        "i": ("init",         "Setup / edit profile"),
        "0": ("quit",         "Quit"),
    }

    for key, (_, desc) in menu.items():
        views.console.print(f"  \\[{key}] {desc}")

    views.console.print()
    choice = views.console.input("Choose [1]: ").strip() or "1"

    if choice == "0":
        raise typer.Exit(0)

    chosen = menu.get(choice, (None,))[0]
    if chosen is None:
        views.print_error(f"Unknown choice: {choice}")
        raise typer.Exit(1)

    if chosen == "next":
        ctx.invoke(planning.next_session)
    elif chosen == "log-session":
        ctx.invoke(sessions.log_session)
    elif chosen == "plan":
        ctx.invoke(planning.plan)
    elif chosen == "show-history":
        ctx.invoke(sessions.show_history)
    elif chosen == "status":
        ctx.invoke(analysis.status)
    elif chosen == "progress":
        ctx.invoke(analysis.progress)
    elif chosen == "project":
        exercise = views.console.input("Exercise [squat]: ").strip() or "squat"
        ctx.invoke(planning.project, exercise=exercise)
    elif chosen == "init":
        ctx.invoke(profile.init)


if __name__ == "__main__":
    app()
