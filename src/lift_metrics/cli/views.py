"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of metrics results.
"""

from datetime import date

from rich.console import Console
from rich.table import Table

from ..core.exercises.base import ExerciseDefinition
from ..core.models import (
    CorrelationResult,
    ExerciseSummary,
    PersonalRecord,
    ProgressionWeek,
    RecoveryStatus,
    RestTimerState,
    StrengthTrend,
)
from ..core.wellness import SleepPhases

console = Console()

_STATUS_STYLES = {
    "poor": "red",
    "fair": "yellow",
    "good": "green",
    "excellent": "bold green",
}

_FREQUENCY_BUCKETS = {
    "week": "weekday",
    "month": "day",
    "year": "month",
    "all": "year",
}

_METRIC_LABELS = {
    "weight": "Heaviest set",
    "reps": "Most reps",
    "volume": "Best volume",
    "one_rep_max": "Est. 1RM",
}


def format_records_table(exercise: ExerciseDefinition, records: list[PersonalRecord]) -> Table:
    """
    Create a Rich table of personal records.

    Args:
        exercise: Exercise the records belong to
        records: Records from personal_records()

    Returns:
        Rich Table object
    """
    table = Table(title=f"Personal Records: {exercise.display_name}")

    table.add_column("Record", style="magenta")
    table.add_column("Value", justify="right", style="bold")
    table.add_column("Date", style="cyan")
    table.add_column("Set", justify="right", style="dim")

    for record in records:
        if record.metric == "reps":
            value = f"{record.reps}"
        else:
            value = f"{record.value:.1f}"
        detail = "-" if record.metric == "volume" else f"{record.weight:g} x {record.reps}"
        table.add_row(_METRIC_LABELS[record.metric], value, record.date, detail)

    return table


def print_records(exercise: ExerciseDefinition, records: list[PersonalRecord]) -> None:
    if not records:
        console.print(f"[yellow]No records for {exercise.display_name} yet.[/yellow]")
        return
    console.print(format_records_table(exercise, records))


def _fmt_reps(reps: int | tuple[int, int]) -> str:
    if isinstance(reps, tuple):
        return f"{reps[0]} (to {reps[1]})"
    return str(reps)


def format_plan_table(
    exercise: ExerciseDefinition,
    method: str,
    plan: list[ProgressionWeek],
) -> Table:
    """Create a Rich table of projected weeks."""
    table = Table(title=f"{exercise.display_name}: {method.replace('_', ' ')} plan")

    table.add_column("Week", justify="right", style="dim", width=4)
    table.add_column("Weight", justify="right", style="bold")
    table.add_column("Reps", justify="right", style="green")

    for week in plan:
        table.add_row(str(week.week), f"{week.projected_weight:g}", _fmt_reps(week.projected_reps))

    return table


def format_trend_table(series: list[tuple[str, float]], metric: str) -> Table:
    table = Table(title=f"Trend: {metric.replace('_', ' ')}")
    table.add_column("Date", style="cyan")
    table.add_column("Value", justify="right", style="bold")
    for day, value in series:
        table.add_row(day, f"{value:.1f}")
    return table


def format_trend_summary(trend: StrengthTrend) -> str:
    colour = {"positive": "green", "negative": "red"}.get(trend.direction, "white")
    return f"[{colour}]{trend.direction}[/{colour}] ({trend.percentage_change:+.1f}%)"


def format_summary_table(exercise: ExerciseDefinition, summaries: list[ExerciseSummary]) -> Table:
    table = Table(title=f"Sessions: {exercise.display_name}")
    table.add_column("Date", style="cyan")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Top", justify="right")
    table.add_column("Volume", justify="right", style="bold")
    table.add_column("Est. 1RM", justify="right")
    table.add_column("vs prev", justify="right")
    for s in summaries:
        if s.has_previous:
            colour = "green" if s.volume_change > 0 else "red" if s.volume_change < 0 else "white"
            change = f"[{colour}]{s.volume_change:+.0f} ({s.volume_change_pct:+.1f}%)[/{colour}]"
        else:
            change = "-"
        table.add_row(
            s.date,
            str(s.total_sets),
            str(s.total_reps),
            f"{s.top_weight:g} x {s.top_reps}",
            f"{s.total_volume:.0f}",
            f"{s.one_rep_max:.1f}",
            change,
        )
    return table


def format_frequency_table(buckets: list[tuple[str, int]], timeframe: str) -> Table:
    table = Table(title=f"Workouts per {_FREQUENCY_BUCKETS[timeframe]}")
    table.add_column(_FREQUENCY_BUCKETS[timeframe].capitalize(), style="cyan")
    table.add_column("Workouts", justify="right", style="bold")
    table.add_column("")
    for label, count in buckets:
        table.add_row(label, str(count), "#" * count)
    return table


def format_readiness(status: RecoveryStatus, workout_types: list[str]) -> str:
    """
    Format recovery status as text block.

    Args:
        status: RecoveryStatus from score_readiness()
        workout_types: Recommended workout types for the band

    Returns:
        Formatted string
    """
    style = _STATUS_STYLES[status.status]
    lines = [
        "Readiness",
        f"- Recovery score: {status.score:.0f}/100  [{style}]{status.status}[/{style}]",
        f"- Sleep quality: {status.sleep_quality:.0f}",
    ]
    if status.stress_level is not None:
        lines.append(f"- Stress level: {status.stress_level:.0f}")
    else:
        lines.append("- Stress level: no reading")
    lines.append(f"- Suggested: {', '.join(t.replace('_', ' ') for t in workout_types)}")
    return "\n".join(lines)


def format_correlation(metric: str, result: CorrelationResult) -> str:
    if not result.has_enough_data:
        return f"{metric}: not enough data ({result.sample_size} paired day(s))"
    return (
        f"{metric}: r = {result.coefficient:+.2f}  "
        f"{result.description}  (n = {result.sample_size})"
    )


def format_sleep_phases(phases: SleepPhases) -> str:
    return (
        f"deep {phases.deep:.0f}%  rem {phases.rem:.0f}%  "
        f"light {phases.light:.0f}%  awake {phases.awake:.0f}%"
    )


def format_hydration_table(days: list[tuple[date, float]]) -> Table:
    table = Table(title="Hydration (ml)")
    table.add_column("Day", style="cyan")
    table.add_column("Total", justify="right", style="bold")
    for day, total in days:
        table.add_row(day.isoformat(), f"{total:.0f}")
    return table


def format_timer_line(state: RestTimerState) -> str:
    minutes, seconds = divmod(state.remaining_seconds, 60)
    suffix = "  (paused)" if state.is_paused else ""
    return f"Rest {minutes:d}:{seconds:02d} / {state.recommended_seconds}s{suffix}"


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
