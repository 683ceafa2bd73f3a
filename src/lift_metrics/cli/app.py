"""Shared Typer app object, shared option types, and store utilities."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.models import (
    ReadinessStatus,
    RecoveryStatus,
    SleepSample,
    StressSample,
    WorkoutRecord,
)
from ..core.readiness import READINESS_STATUSES, score_readiness
from ..io.history_store import RecordStore, get_default_data_dir
from ..io.serializers import ValidationError
from . import views

# Shared --exercise option type used by the per-exercise commands
ExerciseOption = Annotated[
    str,
    typer.Option("--exercise", "-e", help="Exercise ID, e.g. bench_press, back_squat"),
]

DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-d", help="Directory holding the JSONL data files"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="lift-metrics",
    help="Personal records, progression plans, readiness and rest timing from a workout log.",
    no_args_is_help=True,
)


def get_store(data_dir: Path | None) -> RecordStore:
    """Get the record store for a data directory, or the default location."""
    if data_dir is None:
        data_dir = get_default_data_dir()
    return RecordStore(data_dir)


def load_workouts_or_exit(store: RecordStore) -> list[WorkoutRecord]:
    """Load workouts, printing an error and exiting with code 1 on failure."""
    if not store.exists():
        views.print_error(f"Workouts file not found: {store.workouts_path}")
        views.print_info("Export your workouts to workouts.jsonl or pass --data-dir.")
        raise typer.Exit(1)
    try:
        return store.load_workouts()
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def load_wellness_or_exit(
    store: RecordStore,
) -> tuple[list[SleepSample], list[StressSample]]:
    """Load sleep and stress samples; missing files read as empty."""
    try:
        return store.load_sleep(), store.load_stress()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def resolve_readiness(
    store: RecordStore,
    status_override: str | None,
) -> RecoveryStatus | ReadinessStatus | None:
    """
    Readiness for plan and rest commands.

    An explicit --status wins; otherwise it is scored from the data
    directory, which may hold no wellness data at all.
    """
    if status_override is not None:
        if status_override not in READINESS_STATUSES:
            views.print_error(
                f"Unknown readiness status {status_override!r}. "
                f"Valid: {', '.join(READINESS_STATUSES)}"
            )
            raise typer.Exit(1)
        return status_override  # type: ignore[return-value]
    sleep, stress = load_wellness_or_exit(store)
    return score_readiness(sleep, stress)


def require_data_dir(store: RecordStore) -> None:
    """Exit with code 1 when the data directory does not exist."""
    if not store.data_dir.is_dir():
        views.print_error(f"Data directory not found: {store.data_dir}")
        raise typer.Exit(1)
