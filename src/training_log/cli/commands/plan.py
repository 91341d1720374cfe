"""Workout plan commands: splits, show-plan."""

import json
from dataclasses import asdict
from typing import Annotated

import typer

from ...core.workout_plan import get_split, get_splits
from .. import views
from ..app import JsonOption, app


@app.command()
def splits(json_out: JsonOption = False) -> None:
    """
    List the training splits in the workout plan.
    """
    configured = get_splits()

    if json_out:
        print(json.dumps([asdict(s) for s in configured], indent=2))
        return

    if not configured:
        views.print_warning("No splits configured. Add ~/.training-log/workout_plan.yaml.")
        return

    views.console.print()
    for s in configured:
        days = ", ".join(s.days) or "no days"
        views.console.print(f"  [bold]{s.split}[/bold]  [dim]{days}[/dim]")
    views.console.print()


@app.command("show-plan")
def show_plan(
    split: Annotated[str, typer.Argument(help="Split name, e.g. 'Upper/Lower'")],
    json_out: JsonOption = False,
) -> None:
    """
    Show the days, exercises, sets and rep ranges of a split.
    """
    try:
        chosen = get_split(split)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps(asdict(chosen), indent=2))
        return

    views.print_split(chosen)
