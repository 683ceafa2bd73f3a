"""
Configuration constants for the derived-metrics engine.

All adjustable parameters are centralized here for easy tuning.
Band thresholds and band multipliers are defined exactly once; every
consumer goes through core.readiness to look them up.
"""

from typing import Final

# =============================================================================
# ONE-REP-MAX ESTIMATION (Epley)
# =============================================================================

EPLEY_DIVISOR: Final[float] = 30.0  # 1RM = weight * (1 + reps / 30)
RPE_MAX: Final[float] = 10.0  # RPE 10 = no reps in reserve

# =============================================================================
# RECOVERY SCORE
# =============================================================================

SLEEP_WEIGHT: Final[float] = 0.7  # Weight of sleep quality in the score
STRESS_WEIGHT: Final[float] = 0.3  # Weight of inverse stress in the score
NEUTRAL_STRESS_COMPONENT: Final[float] = 30.0  # Stress term when no stress sample
RECOVERY_SCORE_MIN: Final[float] = 0.0
RECOVERY_SCORE_MAX: Final[float] = 100.0

# Upper bounds (exclusive) of each band, ascending. Anything at or above the
# last bound is "excellent".
READINESS_BANDS: Final[list[tuple[float, str]]] = [
    (40.0, "poor"),
    (60.0, "fair"),
    (80.0, "good"),
]
READINESS_TOP_BAND: Final[str] = "excellent"

# Applied to the final projected weight of every progression method
PROGRESSION_MULTIPLIERS: Final[dict[str, float]] = {
    "poor": 0.85,
    "fair": 0.95,
    "good": 1.00,
    "excellent": 1.05,
}

# Applied to the recommended rest duration
REST_MULTIPLIERS: Final[dict[str, float]] = {
    "poor": 1.30,
    "fair": 1.15,
    "good": 1.00,
    "excellent": 0.85,
}

# =============================================================================
# WELLNESS SUMMARIES
# =============================================================================

STRESS_BANDS: Final[list[tuple[float, str]]] = [
    (30.0, "low"),
    (60.0, "moderate"),
    (80.0, "high"),
]
STRESS_TOP_BAND: Final[str] = "very_high"

HYDRATION_WINDOW_DAYS: Final[int] = 7
DEFAULT_HYDRATION_GOAL_ML: Final[float] = 2500.0

# RPE → effort label, inclusive upper bounds
EFFORT_LABELS: Final[list[tuple[float, str]]] = [
    (2.0, "very_easy"),
    (4.0, "easy"),
    (6.0, "moderate"),
    (8.0, "hard"),
]
EFFORT_TOP_LABEL: Final[str] = "very_hard"

# =============================================================================
# CORRELATION
# =============================================================================

MIN_CORRELATION_PAIRS: Final[int] = 2
STRENGTH_WEAK_BELOW: Final[float] = 0.3  # |r| < 0.3 → weak
STRENGTH_MODERATE_BELOW: Final[float] = 0.7  # |r| < 0.7 → moderate
DIRECTION_THRESHOLD: Final[float] = 0.1  # |r| <= 0.1 → no direction
VARIANCE_EPSILON: Final[float] = 1e-12  # relative to the sum of squares

SLEEP_PAIR_OFFSET_DAYS: Final[int] = 1  # sleep on D vs workout on D+1
STRESS_PAIR_OFFSET_DAYS: Final[int] = 0  # stress on D vs workout on D
RECOVERY_PAIR_OFFSET_DAYS: Final[int] = 1

# =============================================================================
# PROGRESSION PLAN
# =============================================================================

DEFAULT_INCREMENT_UNIT: Final[float] = 2.5  # kg added per progression step
DEFAULT_ROUNDING_UNIT: Final[float] = 2.5  # plates available
DEFAULT_REP_RANGE: Final[tuple[int, int]] = (8, 12)
DEFAULT_RPE_BAND: Final[tuple[float, float]] = (7.0, 9.0)
RPE_STEP: Final[float] = 0.5  # RPE-based plans climb the band in half steps

# Fraction of estimated 1RM per week; restarts (with a raised 1RM) when the
# horizon is longer than the table.
DEFAULT_PERCENTAGE_TABLE: Final[list[float]] = [0.70, 0.75, 0.80, 0.85, 0.90, 0.95]

# (factor on the weekly trend weight, reps added to the base reps)
DEFAULT_WAVE_PATTERN: Final[list[tuple[float, int]]] = [
    (0.90, 2),  # light
    (0.95, 1),  # medium
    (1.00, 0),  # heavy
]

DEFAULT_PLAN_WEEKS: Final[int] = 4
MAX_PLAN_WEEKS: Final[int] = 52

# =============================================================================
# REST TIMER
# =============================================================================

REST_BASE_SECONDS: Final[dict[str, int]] = {
    "light": 60,
    "moderate": 90,
    "high": 180,
}
REST_SECONDS_PER_RPE: Final[int] = 10  # +/- 10 s per RPE point from baseline
REST_RPE_BASELINE: Final[float] = 5.0
DEFAULT_SET_RPE: Final[float] = 7.0

LONG_REST_SECONDS: Final[int] = 120  # recommended > 120 s → "long" tips
SHORT_REST_SECONDS: Final[int] = 60  # recommended < 60 s → "short" tips
TICK_SECONDS: Final[int] = 1
