"""Analysis commands: records, trend, summary, frequency, correlate."""

import json
from typing import Annotated

import typer

from ...core.correlation import CORRELATION_METRICS, correlate as correlate_metric
from ...core.exercises.registry import find_exercise
from ...core.metrics import (
    SERIES_METRICS,
    TIMEFRAMES,
    exercise_series,
    session_summaries,
    strength_trend,
    workout_frequency,
)
from ...core.records import personal_records
from ...io.serializers import (
    correlation_result_to_dict,
    exercise_summary_to_dict,
    personal_record_to_dict,
    strength_trend_to_dict,
)
from .. import views
from ..app import (
    DataDirOption,
    ExerciseOption,
    JsonOption,
    app,
    get_store,
    load_wellness_or_exit,
    load_workouts_or_exit,
)


@app.command()
def records(
    exercise_id: ExerciseOption,
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show personal records for one exercise.
    """
    store = get_store(data_dir)
    history = load_workouts_or_exit(store)
    exercise = find_exercise(exercise_id)

    found = personal_records(history, exercise_id)

    if json_out:
        print(json.dumps({
            "exercise_id": exercise_id,
            "records": [personal_record_to_dict(r) for r in found],
        }, indent=2))
        return

    views.console.print()
    views.print_records(exercise, found)
    views.console.print()


@app.command()
def trend(
    exercise_id: ExerciseOption,
    data_dir: DataDirOption = None,
    metric: Annotated[
        str,
        typer.Option("--metric", "-m", help="weight, volume or one_rep_max"),
    ] = "one_rep_max",
    timeframe: Annotated[
        str,
        typer.Option("--timeframe", "-t", help="week, month, year or all"),
    ] = "all",
    json_out: JsonOption = False,
) -> None:
    """
    Show a per-workout series and its overall trend.
    """
    if metric not in SERIES_METRICS:
        views.print_error(f"Unknown metric {metric!r}. Valid: {', '.join(SERIES_METRICS)}")
        raise typer.Exit(1)
    if timeframe not in TIMEFRAMES:
        views.print_error(f"Unknown timeframe {timeframe!r}. Valid: {', '.join(TIMEFRAMES)}")
        raise typer.Exit(1)

    store = get_store(data_dir)
    history = load_workouts_or_exit(store)

    series = exercise_series(history, exercise_id, metric, timeframe)  # type: ignore[arg-type]
    summary = strength_trend(series)

    if json_out:
        print(json.dumps({
            "exercise_id": exercise_id,
            "metric": metric,
            "timeframe": timeframe,
            "series": [{"date": d, "value": round(v, 2)} for d, v in series],
            "trend": strength_trend_to_dict(summary),
        }, indent=2))
        return

    if not series:
        views.print_warning(f"No {exercise_id} data in this timeframe.")
        return

    views.console.print()
    views.console.print(views.format_trend_table(series, metric))
    views.console.print(f"Trend: {views.format_trend_summary(summary)}")
    views.console.print()


@app.command()
def summary(
    exercise_id: ExerciseOption,
    data_dir: DataDirOption = None,
    sessions: Annotated[
        int,
        typer.Option("--sessions", "-n", min=1, help="Number of recent sessions to show"),
    ] = 5,
    json_out: JsonOption = False,
) -> None:
    """
    Summarize recent sessions of one exercise against the session before.
    """
    store = get_store(data_dir)
    history = load_workouts_or_exit(store)
    exercise = find_exercise(exercise_id)

    recent = session_summaries(history, exercise_id)[-sessions:]

    if json_out:
        print(json.dumps({
            "exercise_id": exercise_id,
            "sessions": [exercise_summary_to_dict(s) for s in recent],
        }, indent=2))
        return

    if not recent:
        views.print_warning(f"No {exercise_id} sessions logged yet.")
        return

    views.console.print()
    views.console.print(views.format_summary_table(exercise, recent))
    views.console.print()


@app.command()
def frequency(
    data_dir: DataDirOption = None,
    timeframe: Annotated[
        str,
        typer.Option("--timeframe", "-t", help="week, month, year or all"),
    ] = "month",
    json_out: JsonOption = False,
) -> None:
    """
    Count workouts per weekday, day, month or year.
    """
    if timeframe not in TIMEFRAMES:
        views.print_error(f"Unknown timeframe {timeframe!r}. Valid: {', '.join(TIMEFRAMES)}")
        raise typer.Exit(1)

    store = get_store(data_dir)
    history = load_workouts_or_exit(store)

    buckets = workout_frequency(history, timeframe)  # type: ignore[arg-type]

    if json_out:
        print(json.dumps({
            "timeframe": timeframe,
            "buckets": [{"label": label, "count": count} for label, count in buckets],
        }, indent=2))
        return

    views.console.print()
    views.console.print(views.format_frequency_table(buckets, timeframe))
    views.console.print()


@app.command()
def correlate(
    data_dir: DataDirOption = None,
    metric: Annotated[
        str,
        typer.Option("--metric", "-m", help="sleep, stress, recovery or all"),
    ] = "all",
    json_out: JsonOption = False,
) -> None:
    """
    Correlate sleep, stress or recovery with workout completion.
    """
    if metric != "all" and metric not in CORRELATION_METRICS:
        views.print_error(
            f"Unknown metric {metric!r}. Valid: {', '.join(CORRELATION_METRICS)}, all"
        )
        raise typer.Exit(1)

    store = get_store(data_dir)
    history = load_workouts_or_exit(store)
    sleep, stress = load_wellness_or_exit(store)

    metrics = list(CORRELATION_METRICS) if metric == "all" else [metric]
    results = {m: correlate_metric(m, sleep, stress, history) for m in metrics}  # type: ignore[arg-type]

    if json_out:
        print(json.dumps(
            {m: correlation_result_to_dict(r) for m, r in results.items()},
            indent=2,
        ))
        return

    views.console.print()
    for m, result in results.items():
        views.console.print(views.format_correlation(m, result))
    views.console.print()
