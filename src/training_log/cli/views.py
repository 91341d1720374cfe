"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of training data.
"""

from rich.console import Console
from rich.table import Table

from ..core.formatting import format_seconds_to_min_sec
from ..core.models import ActivityType, EnduranceRow, LiftLogRow, LiftRow, RecentLiftsResult
from ..core.workout_plan import Split

console = Console()

_METRIC_LABELS: dict[ActivityType, str] = {
    ActivityType.RUN: "Pace",
    ActivityType.BIKE: "Speed",
    ActivityType.SWIM: "Pace",
}


def format_metric(row: EnduranceRow) -> str:
    """Human-readable pace or speed for an endurance row."""
    if row.activity_type == ActivityType.BIKE:
        return f"{row.derived_metric:.1f} mph"
    if row.activity_type == ActivityType.SWIM:
        return f"{format_seconds_to_min_sec(row.derived_metric)} /100yd"
    return f"{format_seconds_to_min_sec(row.derived_metric)} /mi"


def _fmt_number(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def print_recent_lifts(exercise: str, result: RecentLiftsResult, target_sets: int) -> None:
    """
    Print recent sets, the previous note and the next-session plan.

    Args:
        exercise: Exercise name as requested
        result: Output of get_recent_lifts()
        target_sets: Number of sets requested (for the heading)
    """
    console.print()
    title = f"[bold]{exercise}[/bold]"
    if result.last_trained:
        title += f"  [dim]last trained {result.last_trained}[/dim]"
    console.print(title)

    table = Table(title=f"Last {target_sets} Sets", title_justify="left")
    table.add_column("Set", justify="right", style="dim")
    table.add_column("Weight (lbs)", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("RIR", justify="right")
    for i, s in enumerate(result.sets, 1):
        table.add_row(str(i), _fmt_number(s.weight), _fmt_number(s.reps), _fmt_number(s.rir))

    if result.sets:
        console.print(table)
    else:
        console.print("[dim]No data available[/dim]")

    if result.previous_note:
        console.print(f'Previous note: [italic]"{result.previous_note}"[/italic]')

    console.print()
    if not result.recommended_plan:
        console.print("[dim]Not enough data to generate plan[/dim]")
        return

    plan = Table(title="Next Session Plan", title_justify="left")
    plan.add_column("Set", justify="right", style="dim")
    plan.add_column("Weight (lbs)", justify="right", style="cyan")
    plan.add_column("Target reps", justify="right", style="cyan")
    plan.add_column("Target RIR", justify="right")
    for p in result.recommended_plan:
        plan.add_row(
            str(p.set_number),
            _fmt_number(p.weight),
            _fmt_number(p.target_reps),
            str(p.target_rir),
        )
    console.print(plan)


def format_lift_history_table(rows: list[LiftLogRow]) -> Table:
    """Table of Lift_Log rows, one per set."""
    table = Table(title="Lift History")
    table.add_column("Date", style="cyan")
    table.add_column("Time")
    table.add_column("Set", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("RIR", justify="right")
    table.add_column("Notes")

    for r in rows:
        table.add_row(
            r.date,
            r.time,
            str(r.set_number),
            "" if r.weight is None else _fmt_number(r.weight),
            "" if r.reps is None else _fmt_number(r.reps),
            "" if r.rir is None else _fmt_number(r.rir),
            "" if r.notes is None else str(r.notes),
        )
    return table


def print_lift_history(rows: list[LiftLogRow]) -> None:
    console.print(format_lift_history_table(rows))


def print_logged_lift_rows(rows: list[LiftRow]) -> None:
    """Summarize sets just appended to Lift_Log."""
    for r in rows:
        console.print(
            f"  {r.exercise} set {r.set_number}: "
            f"{_fmt_number(r.weight)} lbs × {r.reps} @ RIR {r.rir}"
        )


def print_logged_endurance_row(row: EnduranceRow) -> None:
    label = _METRIC_LABELS[row.activity_type]
    console.print(
        f"  {row.activity_type.value}: {_fmt_number(row.distance)} in "
        f"{format_seconds_to_min_sec(row.time_seconds)}, {label} {format_metric(row)}, RPE {row.rpe}"
    )


def format_split_table(split: Split) -> Table:
    """Table of a split's days and exercises."""
    table = Table(title=split.split)
    table.add_column("Day", style="cyan")
    table.add_column("Exercise")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Input")

    for day, exercises in split.days.items():
        for i, ex in enumerate(exercises):
            table.add_row(
                day if i == 0 else "",
                ex.exercise,
                str(ex.sets),
                ex.rep_range,
                ex.input_mode,
            )
    return table


def print_split(split: Split) -> None:
    console.print(format_split_table(split))


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
