"""Wellness commands: readiness, wellness."""

import json
from typing import Annotated

import typer

from ...core.config import DEFAULT_HYDRATION_GOAL_ML, HYDRATION_WINDOW_DAYS
from ...core.readiness import latest_sleep, latest_stress, recommended_workout_types, score_readiness
from ...core.wellness import daily_hydration, hydration_progress, sleep_phase_breakdown, stress_band
from ...io.serializers import ValidationError, recovery_status_to_dict, sleep_phases_to_dict
from .. import views
from ..app import (
    DataDirOption,
    JsonOption,
    app,
    get_store,
    load_wellness_or_exit,
    require_data_dir,
)


@app.command()
def readiness(
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show today's recovery score and band.
    """
    store = get_store(data_dir)
    require_data_dir(store)
    sleep, stress = load_wellness_or_exit(store)
    status = score_readiness(sleep, stress)

    if json_out:
        print(json.dumps({
            "readiness": recovery_status_to_dict(status),
            "recommended_workout_types": (
                recommended_workout_types(status) if status is not None else []
            ),
        }, indent=2))
        return

    if status is None:
        views.print_warning("No sleep data: readiness cannot be scored.")
        return

    views.console.print()
    views.console.print(views.format_readiness(status, recommended_workout_types(status)))
    views.console.print()


@app.command()
def wellness(
    data_dir: DataDirOption = None,
    days: Annotated[
        int,
        typer.Option("--days", help="Hydration window in days"),
    ] = HYDRATION_WINDOW_DAYS,
    goal: Annotated[
        float,
        typer.Option("--goal", help="Daily hydration goal in ml"),
    ] = DEFAULT_HYDRATION_GOAL_ML,
    json_out: JsonOption = False,
) -> None:
    """
    Summarise last night's sleep, the latest stress reading and hydration.
    """
    if days < 1:
        views.print_error("--days must be at least 1")
        raise typer.Exit(1)

    store = get_store(data_dir)
    require_data_dir(store)
    sleep, stress = load_wellness_or_exit(store)
    try:
        hydration = store.load_hydration()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    last_night = latest_sleep(sleep)
    last_stress = latest_stress(stress)
    water = daily_hydration(hydration, days)
    today_total = water[-1][1] if water else 0.0

    if json_out:
        print(json.dumps({
            "sleep": None if last_night is None else {
                "start_time": last_night.start_time,
                "duration": last_night.duration,
                "quality": last_night.quality,
                "phases": sleep_phases_to_dict(sleep_phase_breakdown(last_night)),
            },
            "stress": None if last_stress is None else {
                "date": last_stress.date,
                "level": last_stress.level,
                "band": stress_band(last_stress.level),
            },
            "hydration": {
                "days": [{"date": d.isoformat(), "total_ml": t} for d, t in water],
                "goal_ml": goal,
                "today_progress": round(hydration_progress(today_total, goal), 1),
            },
        }, indent=2))
        return

    views.console.print()
    if last_night is not None:
        views.console.print(
            f"Sleep {last_night.start_time}: quality {last_night.quality}, "
            f"{views.format_sleep_phases(sleep_phase_breakdown(last_night))}"
        )
    else:
        views.print_warning("No sleep data.")
    if last_stress is not None:
        band = stress_band(last_stress.level).replace("_", " ")
        views.console.print(f"Stress {last_stress.date}: {last_stress.level} ({band})")
    else:
        views.print_warning("No stress data.")
    views.console.print(views.format_hydration_table(water))
    views.console.print(f"Today: {hydration_progress(today_total, goal):.0f}% of {goal:.0f} ml")
    views.console.print()
