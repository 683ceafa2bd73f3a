"""
Adaptive rest timer.

recommended rest = round((base + 10 * (rpe - 5)) * readiness multiplier)
with base 60 s / 90 s / 180 s for light / moderate / high intensity.

RestTimer is a small state machine:

    idle --start--> running <--pause/resume--> paused
    running --tick to 0 / background overrun--> completed
    running | paused --skip--> skipped

completed and skipped are terminal until reset().  Exactly one of the two
outcomes is produced per lifecycle, and its callback fires at most once.

The timer does not own a thread.  The caller drives it with tick() (the
CLI sleeps one second between ticks) and reports suspension with
enter_background() / return_to_foreground(); the wall-clock time spent
suspended is read from the injected clock and subtracted on return.
"""

import logging
import math
import random
import time
from typing import Callable, Literal

from .config import (
    DEFAULT_SET_RPE,
    LONG_REST_SECONDS,
    REST_BASE_SECONDS,
    REST_RPE_BASELINE,
    REST_SECONDS_PER_RPE,
    SHORT_REST_SECONDS,
    TICK_SECONDS,
)
from .metrics import as_number
from .models import Intensity, ReadinessStatus, RecoveryStatus, RestTimerState, TimerPhase
from .readiness import READINESS_STATUSES, rest_multiplier

logger = logging.getLogger(__name__)

TimerOutcome = Literal["completed", "skipped"]
Callback = Callable[[], None]

_STATUS_TIPS: dict[str, list[str]] = {
    "poor": ["wellness.tips.poorRecovery", "wellness.tips.hydrate", "wellness.tips.longerRest"],
    "fair": ["wellness.tips.fairRecovery", "wellness.tips.breathe"],
    "good": ["wellness.tips.goodRecovery", "wellness.tips.focusForm"],
    "excellent": ["wellness.tips.excellentRecovery", "wellness.tips.pushHarder"],
}
_LONG_REST_TIPS = ["wellness.tips.longRest", "wellness.tips.mobility"]
_SHORT_REST_TIPS = ["wellness.tips.shortRest", "wellness.tips.focusBreathing"]
_GENERIC_TIPS = [
    "wellness.tips.stayHydrated",
    "wellness.tips.mindfulness",
    "wellness.tips.visualization",
]


class TimerStateError(RuntimeError):
    """Raised when a timer operation is not valid in the current phase."""


def recommended_rest_seconds(
    intensity: Intensity,
    rpe: float | None = DEFAULT_SET_RPE,
    readiness: RecoveryStatus | ReadinessStatus | None = None,
) -> int:
    """
    Recommended rest between sets.

    Args:
        intensity: Exercise intensity (light, moderate, high)
        rpe: RPE of the set just finished; None uses the default of 7
        readiness: Current readiness; poor readiness lengthens the rest

    Returns:
        Rest in whole seconds, never negative

    Raises:
        ValueError: If intensity or readiness status is unknown
    """
    if intensity not in REST_BASE_SECONDS:
        raise ValueError(
            f"Unknown intensity {intensity!r}. Valid: {', '.join(REST_BASE_SECONDS)}"
        )
    rpe_value = DEFAULT_SET_RPE if rpe is None else as_number(rpe)
    base = REST_BASE_SECONDS[intensity]
    adjusted = (base + REST_SECONDS_PER_RPE * (rpe_value - REST_RPE_BASELINE)) * rest_multiplier(readiness)
    # Halves round up
    return max(0, int(math.floor(adjusted + 0.5)))


class RestTimer:
    """
    Countdown between sets.

    Args:
        recommended_seconds: Initial countdown length
        on_complete: Called once when the countdown reaches zero
        on_skip: Called once when the rest is skipped
        clock: Wall-clock source in seconds, used for suspension correction
    """

    def __init__(
        self,
        recommended_seconds: int,
        on_complete: Callback | None = None,
        on_skip: Callback | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._validate_seconds(recommended_seconds)
        self.on_complete = on_complete
        self.on_skip = on_skip
        self._clock = clock
        self._recommended = int(recommended_seconds)
        self._remaining = self._recommended
        self._phase: TimerPhase = "idle"
        self._outcome: TimerOutcome | None = None
        self._suspended_at: float | None = None

    @classmethod
    def for_set(
        cls,
        intensity: Intensity,
        rpe: float | None = DEFAULT_SET_RPE,
        readiness: RecoveryStatus | ReadinessStatus | None = None,
        on_complete: Callback | None = None,
        on_skip: Callback | None = None,
        clock: Callable[[], float] = time.time,
    ) -> "RestTimer":
        """Build a timer sized by recommended_rest_seconds()."""
        seconds = recommended_rest_seconds(intensity, rpe, readiness)
        return cls(seconds, on_complete=on_complete, on_skip=on_skip, clock=clock)

    @staticmethod
    def _validate_seconds(seconds: int) -> None:
        if not isinstance(seconds, int) or isinstance(seconds, bool) or seconds < 0:
            raise ValueError(f"recommended_seconds must be a non-negative int, got {seconds!r}")

    # -- read-only view ------------------------------------------------------

    @property
    def phase(self) -> TimerPhase:
        return self._phase

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def recommended_seconds(self) -> int:
        return self._recommended

    @property
    def outcome(self) -> TimerOutcome | None:
        """Lifecycle result: completed, skipped, or None while still open."""
        return self._outcome

    @property
    def is_suspended(self) -> bool:
        return self._suspended_at is not None

    @property
    def state(self) -> RestTimerState:
        return RestTimerState(
            remaining_seconds=self._remaining,
            is_running=self._phase == "running",
            is_paused=self._phase == "paused",
            recommended_seconds=self._recommended,
            phase=self._phase,
        )

    # -- transitions ---------------------------------------------------------

    def start(self) -> None:
        """
        Start the countdown.

        Raises:
            TimerStateError: If the timer is not idle
        """
        if self._phase != "idle":
            raise TimerStateError(f"cannot start a {self._phase} timer")
        self._set_phase("running")
        if self._remaining <= 0:
            self._finish("completed")

    def pause(self) -> None:
        """
        Pause a running countdown.

        A suspended timer is first brought back to the foreground, so the
        time spent in the background still counts.

        Raises:
            TimerStateError: If the timer is not running
        """
        if self._suspended_at is not None:
            self.return_to_foreground()
        if self._phase != "running":
            raise TimerStateError(f"cannot pause a {self._phase} timer")
        self._set_phase("paused")

    def resume(self) -> None:
        """
        Raises:
            TimerStateError: If the timer is not paused
        """
        if self._phase != "paused":
            raise TimerStateError(f"cannot resume a {self._phase} timer")
        self._set_phase("running")

    def tick(self, seconds: int = TICK_SECONDS) -> None:
        """
        Advance the countdown.

        Ignored unless the timer is running in the foreground.

        Raises:
            ValueError: If seconds is negative
        """
        if seconds < 0:
            raise ValueError(f"tick seconds must be non-negative, got {seconds}")
        if self._phase != "running" or self._suspended_at is not None:
            return
        self._remaining = max(0, self._remaining - int(seconds))
        if self._remaining == 0:
            self._finish("completed")

    def skip(self) -> None:
        """
        End the rest early.

        Raises:
            TimerStateError: If the timer is not running or paused
        """
        if self._phase not in ("running", "paused"):
            raise TimerStateError(f"cannot skip a {self._phase} timer")
        self._suspended_at = None
        self._remaining = 0
        self._finish("skipped")

    def reset(self, recommended_seconds: int | None = None) -> None:
        """Return to idle with a fresh countdown; a new lifecycle begins."""
        if recommended_seconds is not None:
            self._validate_seconds(recommended_seconds)
            self._recommended = int(recommended_seconds)
        self._remaining = self._recommended
        self._outcome = None
        self._suspended_at = None
        self._set_phase("idle")

    def enter_background(self) -> None:
        """
        Record the moment the host was suspended.

        Only a running timer is tracked; a paused timer stays paused.
        """
        if self._phase != "running" or self._suspended_at is not None:
            return
        self._suspended_at = self._clock()
        logger.debug("Rest timer suspended with %ds remaining", self._remaining)

    def return_to_foreground(self) -> None:
        """Subtract the whole seconds spent suspended; complete if they cover the rest."""
        if self._suspended_at is None:
            return
        elapsed = int(max(0.0, self._clock() - self._suspended_at))
        self._suspended_at = None
        logger.debug("Rest timer resumed after %ds in background", elapsed)
        if self._phase != "running":
            return
        self._remaining = max(0, self._remaining - elapsed)
        if self._remaining == 0:
            self._finish("completed")

    # -- internals -----------------------------------------------------------

    def _set_phase(self, phase: TimerPhase) -> None:
        logger.debug("Rest timer %s -> %s (%ds left)", self._phase, phase, self._remaining)
        self._phase = phase

    def _finish(self, outcome: TimerOutcome) -> None:
        if self._outcome is not None:
            return
        self._outcome = outcome
        self._set_phase(outcome)
        callback = self.on_complete if outcome == "completed" else self.on_skip
        if callback is None:
            return
        try:
            callback()
        except Exception:
            logger.exception("Rest timer %s callback raised", outcome)


def tip_pool(
    status: RecoveryStatus | ReadinessStatus | None,
    recommended_seconds: int,
) -> list[str]:
    """
    Tip keys that apply to a readiness band and rest length.

    Raises:
        ValueError: If the status is not a known band
    """
    if isinstance(status, RecoveryStatus):
        status = status.status
    if status is not None and status not in READINESS_STATUSES:
        raise ValueError(f"Unknown readiness status {status!r}. Valid: {', '.join(READINESS_STATUSES)}")

    tips: list[str] = []
    if status is not None:
        tips.extend(_STATUS_TIPS[status])
    if recommended_seconds > LONG_REST_SECONDS:
        tips.extend(_LONG_REST_TIPS)
    elif recommended_seconds < SHORT_REST_SECONDS:
        tips.extend(_SHORT_REST_TIPS)
    tips.extend(_GENERIC_TIPS)
    return tips


def choose_tip(
    status: RecoveryStatus | ReadinessStatus | None,
    recommended_seconds: int,
    rng: random.Random | None = None,
) -> str:
    """Pick one tip key at random from tip_pool()."""
    rng = rng or random.Random()
    return rng.choice(tip_pool(status, recommended_seconds))
