"""Rest timer command: rest."""

import json
import time
from typing import Annotated, Optional

import typer

from ...core.config import DEFAULT_SET_RPE, TICK_SECONDS
from ...core.exercises.base import INTENSITIES
from ...core.exercises.registry import find_exercise
from ...core.models import RecoveryStatus
from ...core.rest_timer import RestTimer, choose_tip
from ...io.serializers import timer_state_to_dict
from .. import views
from ..app import DataDirOption, JsonOption, app, get_store, resolve_readiness

_TIP_TEXT = {
    "wellness.tips.poorRecovery": "Recovery is low today: keep the load conservative.",
    "wellness.tips.hydrate": "Drink some water before the next set.",
    "wellness.tips.longerRest": "Take the full rest; your body needs it today.",
    "wellness.tips.fairRecovery": "Recovery is fair: stay a rep or two short of failure.",
    "wellness.tips.breathe": "Slow nasal breathing helps bring your heart rate down.",
    "wellness.tips.goodRecovery": "Good recovery: a solid day to train as planned.",
    "wellness.tips.focusForm": "Use the rest to rehearse the next set's technique.",
    "wellness.tips.excellentRecovery": "Excellent recovery: a good day to push.",
    "wellness.tips.pushHarder": "You are well recovered; consider an extra rep.",
    "wellness.tips.longRest": "Long rest: stay warm and keep moving lightly.",
    "wellness.tips.mobility": "Fit in some light mobility work for the next lift.",
    "wellness.tips.shortRest": "Short rest: keep your focus, the next set is soon.",
    "wellness.tips.focusBreathing": "Focus on deep, steady breaths.",
    "wellness.tips.stayHydrated": "Stay hydrated throughout the session.",
    "wellness.tips.mindfulness": "Take a moment to check in with how you feel.",
    "wellness.tips.visualization": "Visualise a clean, strong next set.",
}


def _run_countdown(timer: RestTimer, show: bool = True) -> None:
    """Drive the timer once per second; Ctrl-C skips the rest."""
    timer.start()
    try:
        while timer.phase == "running":
            if show:
                views.console.print(views.format_timer_line(timer.state), end="\r")
            time.sleep(TICK_SECONDS)
            timer.tick(TICK_SECONDS)
    except KeyboardInterrupt:
        timer.skip()
    if show:
        views.console.print(views.format_timer_line(timer.state))


@app.command()
def rest(
    intensity: Annotated[
        Optional[str],
        typer.Option("--intensity", "-i", help=f"One of: {', '.join(INTENSITIES)}"),
    ] = None,
    exercise_id: Annotated[
        Optional[str],
        typer.Option("--exercise", "-e", help="Take the intensity from a catalogued exercise"),
    ] = None,
    rpe: Annotated[
        float,
        typer.Option("--rpe", "-r", help="RPE of the set just finished"),
    ] = DEFAULT_SET_RPE,
    status: Annotated[
        Optional[str],
        typer.Option("--status", "-s", help="Readiness override: poor, fair, good, excellent"),
    ] = None,
    data_dir: DataDirOption = None,
    run: Annotated[
        bool,
        typer.Option("--run", help="Run the countdown in the terminal"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Recommend rest before the next set, optionally counting it down.

    Intensity comes from --intensity, or from --exercise, defaulting to
    moderate.  Readiness is scored from the data directory when it exists.
    """
    if intensity is None:
        intensity = find_exercise(exercise_id).intensity if exercise_id else "moderate"
    if intensity not in INTENSITIES:
        views.print_error(f"Unknown intensity {intensity!r}. Valid: {', '.join(INTENSITIES)}")
        raise typer.Exit(1)

    store = get_store(data_dir)
    readiness = None
    if status is not None or store.data_dir.is_dir():
        readiness = resolve_readiness(store, status)
    band = readiness.status if isinstance(readiness, RecoveryStatus) else readiness

    timer = RestTimer.for_set(
        intensity,  # type: ignore[arg-type]
        rpe,
        readiness,
        on_complete=views.console.bell if run and not json_out else None,
    )
    tip = choose_tip(readiness, timer.recommended_seconds)

    if run and not json_out:
        views.console.print(f"[bold]{timer.recommended_seconds}s[/bold] rest ({intensity}, RPE {rpe:g})")
        views.print_info(_TIP_TEXT.get(tip, tip))
        _run_countdown(timer)
        if timer.outcome == "completed":
            views.print_success("Rest complete: next set!")
        else:
            views.print_warning("Rest skipped.")
        return

    if run:
        _run_countdown(timer, show=False)

    if json_out:
        print(json.dumps({
            "intensity": intensity,
            "rpe": rpe,
            "readiness": band,
            "recommended_seconds": timer.recommended_seconds,
            "tip": tip,
            "state": timer_state_to_dict(timer.state),
            "outcome": timer.outcome,
        }, indent=2))
        return

    views.console.print()
    views.console.print(f"Recommended rest: [bold]{timer.recommended_seconds}s[/bold]")
    if band is not None:
        views.console.print(f"Readiness: {band}")
    views.print_info(_TIP_TEXT.get(tip, tip))
    views.console.print()
