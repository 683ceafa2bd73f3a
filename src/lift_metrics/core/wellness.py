"""
Wellness summaries: sleep phases, stress band, hydration.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Sequence

from .config import HYDRATION_WINDOW_DAYS, STRESS_BANDS, STRESS_TOP_BAND
from .metrics import as_number
from .models import HydrationSample, SleepSample


@dataclass(frozen=True)
class SleepPhases:
    """Share of a night spent in each phase, in percent of total duration."""

    deep: float
    rem: float
    light: float
    awake: float


def sleep_phase_breakdown(sample: SleepSample) -> SleepPhases:
    """
    Percentages of deep, REM, light and awake time.

    All zeros when the total duration is not positive.
    """
    total = as_number(sample.duration)
    if total <= 0:
        return SleepPhases(deep=0.0, rem=0.0, light=0.0, awake=0.0)

    def pct(minutes: float) -> float:
        return as_number(minutes) / total * 100

    return SleepPhases(
        deep=pct(sample.deep_sleep_duration),
        rem=pct(sample.rem_sleep_duration),
        light=pct(sample.light_sleep_duration),
        awake=pct(sample.awake_time),
    )


def stress_band(level: float) -> str:
    """<30 low, <60 moderate, <80 high, otherwise very_high."""
    value = min(100.0, as_number(level))
    for upper, band in STRESS_BANDS:
        if value < upper:
            return band
    return STRESS_TOP_BAND


def daily_hydration(
    samples: Sequence[HydrationSample],
    days: int = HYDRATION_WINDOW_DAYS,
    today: date | None = None,
) -> list[tuple[date, float]]:
    """
    Total intake per day for the last `days` days, oldest first.

    Days without samples report 0.

    Raises:
        ValueError: If days is negative
    """
    if days < 0:
        raise ValueError(f"days must be non-negative, got {days}")
    today = today or date.today()

    totals: dict[date, float] = {}
    for sample in samples:
        totals[sample.day] = totals.get(sample.day, 0.0) + as_number(sample.amount_ml)

    result: list[tuple[date, float]] = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        result.append((day, totals.get(day, 0.0)))
    return result


def hydration_progress(current_ml: float, goal_ml: float) -> float:
    """Progress towards a daily goal in percent, clamped to [0, 100]."""
    goal = as_number(goal_ml)
    if goal <= 0:
        return 0.0
    return min(100.0, as_number(current_ml) / goal * 100)
