"""Planning command: plan."""

import json
from typing import Annotated, Optional

import typer

from ...core.config import DEFAULT_PLAN_WEEKS, MAX_PLAN_WEEKS
from ...core.engine.config_loader import load_user_settings
from ...core.exercises.registry import find_exercise
from ...core.models import RecoveryStatus
from ...core.planner import PROGRESSION_METHODS, plan_from_history
from ...io.serializers import progression_week_to_dict, recovery_status_to_dict
from .. import views
from ..app import (
    DataDirOption,
    ExerciseOption,
    JsonOption,
    app,
    get_store,
    load_workouts_or_exit,
    resolve_readiness,
)


@app.command()
def plan(
    exercise_id: ExerciseOption,
    data_dir: DataDirOption = None,
    method: Annotated[
        str,
        typer.Option("--method", "-m", help=f"One of: {', '.join(PROGRESSION_METHODS)}"),
    ] = "linear",
    weeks: Annotated[
        int,
        typer.Option("--weeks", "-w", help=f"Plan horizon (0-{MAX_PLAN_WEEKS})"),
    ] = DEFAULT_PLAN_WEEKS,
    status: Annotated[
        Optional[str],
        typer.Option("--status", "-s", help="Readiness override: poor, fair, good, excellent"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Project weight and reps for the coming weeks.

    The projected weight is scaled by today's readiness, scored from the
    sleep and stress files unless --status is given.
    """
    if method not in PROGRESSION_METHODS:
        views.print_error(f"Unknown method {method!r}. Valid: {', '.join(PROGRESSION_METHODS)}")
        raise typer.Exit(1)
    if not 0 <= weeks <= MAX_PLAN_WEEKS:
        views.print_error(f"--weeks must be between 0 and {MAX_PLAN_WEEKS}")
        raise typer.Exit(1)

    store = get_store(data_dir)
    history = load_workouts_or_exit(store)
    readiness = resolve_readiness(store, status)
    exercise = find_exercise(exercise_id)

    try:
        settings = load_user_settings()
        weeks_plan = plan_from_history(
            exercise, history, method, settings=settings, weeks=weeks, readiness=readiness,  # type: ignore[arg-type]
        )
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps({
            "exercise_id": exercise_id,
            "method": method,
            "readiness": (
                recovery_status_to_dict(readiness)
                if isinstance(readiness, RecoveryStatus) or readiness is None
                else {"status": readiness}
            ),
            "weeks": [progression_week_to_dict(w) for w in weeks_plan],
        }, indent=2))
        return

    if not weeks_plan:
        views.print_warning(f"No recommendation: no logged sets for {exercise.display_name}.")
        return

    views.console.print()
    views.console.print(views.format_plan_table(exercise, method, weeks_plan))
    if readiness is not None:
        band = readiness.status if isinstance(readiness, RecoveryStatus) else readiness
        views.print_info(f"Adjusted for {band} readiness.")
    views.console.print()
