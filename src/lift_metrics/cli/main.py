"""
CLI entry point using Typer.

Provides commands over a directory of exported JSONL data:
- records: Personal records for an exercise
- trend: Per-workout series and strength trend
- summary: Recent sessions of an exercise vs. the session before
- frequency: Workout counts per weekday, day, month or year
- plan: Multi-week progression plan
- readiness: Recovery score and band
- correlate: Wellness vs. workout completion correlation
- wellness: Sleep phases, stress band, hydration
- rest: Adaptive rest recommendation and countdown
"""

import logging
from typing import Annotated

import typer

from .app import app
from .commands import analysis, planning, timer, wellness  # noqa: F401  (registers commands)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log engine decisions to stderr"),
    ] = False,
) -> None:
    """
    Derived metrics for a workout and wellness log.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


if __name__ == "__main__":
    app()
