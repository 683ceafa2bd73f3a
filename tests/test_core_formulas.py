"""
Formula-focused unit tests for the lift-metrics core.

Values are hand-computed from the formulas in the module docstrings:
Epley 1RM, the 0.7 / 0.3 recovery blend, Pearson correlation and the
wellness summaries.
"""

import math
import textwrap
from datetime import date, datetime

import pytest

from lift_metrics.core.models import (
    ExerciseEntry,
    HydrationSample,
    SleepSample,
    StressSample,
    UserSettings,
    WorkoutRecord,
    WorkoutSet,
)

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _set(weight: float, reps: int, rpe: float | None = None, completed: bool = True) -> WorkoutSet:
    return WorkoutSet(weight=weight, reps=reps, rpe=rpe, completed=completed)


def _workout(day: str, sets: list[WorkoutSet], exercise_id: str = "bench_press") -> WorkoutRecord:
    return WorkoutRecord(date=day, exercises=[ExerciseEntry(exercise_id=exercise_id, sets=sets)])


def _sleep(start: str, quality: float, duration: float = 420) -> SleepSample:
    return SleepSample(start_time=start, duration=duration, quality=quality)


# ===========================================================================
# models.py: date validation
# ===========================================================================


class TestDates:
    def test_iso_date_accepted(self):
        assert WorkoutRecord(date="2026-03-01").day == date(2026, 3, 1)

    def test_timestamp_with_z_suffix(self):
        record = WorkoutRecord(date="2026-03-01T18:30:00Z")
        assert record.timestamp == datetime(2026, 3, 1, 18, 30)

    def test_date_object_normalized_to_string(self):
        assert WorkoutRecord(date=date(2026, 3, 1)).date == "2026-03-01"

    @pytest.mark.parametrize("bad", ["", "yesterday", "2026-13-01", "01/03/2026"])
    def test_malformed_date_raises(self, bad):
        with pytest.raises(ValueError):
            WorkoutRecord(date=bad)

    def test_sleep_sample_validates_start_time(self):
        with pytest.raises(ValueError):
            SleepSample(start_time="not a date", duration=400, quality=80)


class TestUserSettings:
    def test_defaults(self):
        s = UserSettings()
        assert s.increment_unit == 2.5
        assert s.rounding_unit == 2.5
        assert s.rep_range == (8, 12)

    @pytest.mark.parametrize("kwargs", [
        {"rounding_unit": 0},
        {"increment_unit": -1},
        {"rep_range": (10, 8)},
        {"rpe_band": (9.0, 7.0)},
        {"percentage_table": []},
        {"percentage_table": [0.9, 0.8]},
        {"wave_pattern": [(0.0, 1)]},
    ])
    def test_invalid_settings_raise(self, kwargs):
        with pytest.raises(ValueError):
            UserSettings(**kwargs)


# ===========================================================================
# metrics.py
# ===========================================================================


class TestOneRepMax:
    """1RM = weight * (1 + reps / 30)"""

    def test_epley(self):
        from lift_metrics.core.metrics import one_rep_max
        assert one_rep_max(100, 10) == pytest.approx(133.333, rel=1e-4)

    def test_single_rep_is_slightly_above_weight(self):
        from lift_metrics.core.metrics import one_rep_max
        assert one_rep_max(100, 1) == pytest.approx(103.333, rel=1e-4)

    @pytest.mark.parametrize("weight,reps", [(100, 1), (20, 3), (142.5, 8), (0.5, 30)])
    def test_never_below_weight(self, weight, reps):
        from lift_metrics.core.metrics import one_rep_max
        assert one_rep_max(weight, reps) >= weight

    @pytest.mark.parametrize("weight,reps", [(0, 5), (100, 0), (-50, 5), (100, -3), (None, 5), ("abc", 5)])
    def test_degenerate_sets_give_zero(self, weight, reps):
        from lift_metrics.core.metrics import one_rep_max
        assert one_rep_max(weight, reps) == 0.0

    def test_weight_for_reps_inverts_epley(self):
        from lift_metrics.core.metrics import one_rep_max, weight_for_reps
        e1rm = one_rep_max(80, 8)
        assert weight_for_reps(e1rm, 8) == pytest.approx(80.0)

    def test_reps_for_fraction(self):
        from lift_metrics.core.metrics import reps_for_fraction
        assert reps_for_fraction(0.75) == 10
        assert reps_for_fraction(0.70) == 13
        assert reps_for_fraction(1.0) == 1  # minimum one rep


class TestAsNumber:
    @pytest.mark.parametrize("raw", [None, "x", float("nan"), float("inf"), -3, True])
    def test_invalid_is_zero(self, raw):
        from lift_metrics.core.metrics import as_number
        assert as_number(raw) == 0.0

    def test_numeric_string_accepted(self):
        from lift_metrics.core.metrics import as_number
        assert as_number("82.5") == 82.5


class TestVolume:
    def test_sums_completed_and_uncompleted(self):
        from lift_metrics.core.metrics import set_volume
        sets = [_set(100, 5), _set(80, 8, completed=False)]
        assert set_volume(sets) == pytest.approx(1140.0)

    def test_invalid_values_count_as_zero(self):
        from lift_metrics.core.metrics import set_volume
        sets = [_set(100, 5), WorkoutSet(weight=None, reps=10), WorkoutSet(weight=50, reps=-2)]  # type: ignore[arg-type]
        assert set_volume(sets) == pytest.approx(500.0)

    def test_exercise_volume_of_missing_entry(self):
        from lift_metrics.core.metrics import exercise_volume
        assert exercise_volume(None) == 0.0


class TestBestSet:
    def test_highest_e1rm_wins(self):
        from lift_metrics.core.metrics import best_set
        heavy = _set(100, 3)   # 110
        volume = _set(80, 12)  # 112
        assert best_set([heavy, volume]) is volume

    def test_tie_keeps_first(self):
        from lift_metrics.core.metrics import best_set
        a, b = _set(100, 5), _set(100, 5)
        assert best_set([a, b]) is a

    def test_empty_is_none(self):
        from lift_metrics.core.metrics import best_set
        assert best_set([]) is None


class TestEffortLabel:
    @pytest.mark.parametrize("rpe,label", [
        (None, None),
        (1, "very_easy"),
        (2, "very_easy"),
        (3.5, "easy"),
        (5, "moderate"),
        (8, "hard"),
        (9, "very_hard"),
        (10, "very_hard"),
    ])
    def test_bands(self, rpe, label):
        from lift_metrics.core.metrics import effort_label
        assert effort_label(rpe) == label


class TestSeriesAndTrend:
    def _history(self) -> list[WorkoutRecord]:
        # Deliberately out of order
        return [
            _workout("2026-03-08", [_set(90, 5)]),
            _workout("2026-03-01", [_set(80, 5)]),
            _workout("2026-03-04", [_set(85, 5)]),
            _workout("2026-03-05", [_set(60, 10)], exercise_id="back_squat"),
        ]

    def test_weight_series_sorted_and_filtered(self):
        from lift_metrics.core.metrics import exercise_series
        series = exercise_series(self._history(), "bench_press", "weight")
        assert series == [("2026-03-01", 80.0), ("2026-03-04", 85.0), ("2026-03-08", 90.0)]

    def test_volume_series(self):
        from lift_metrics.core.metrics import exercise_series
        series = exercise_series(self._history(), "bench_press", "volume")
        assert [v for _, v in series] == [400.0, 425.0, 450.0]

    def test_week_timeframe(self):
        from lift_metrics.core.metrics import exercise_series
        series = exercise_series(
            self._history(), "bench_press", "weight", timeframe="week",
            now=datetime(2026, 3, 10),
        )
        assert series == [("2026-03-04", 85.0), ("2026-03-08", 90.0)]

    def test_unknown_metric_raises(self):
        from lift_metrics.core.metrics import exercise_series
        with pytest.raises(ValueError):
            exercise_series(self._history(), "bench_press", "reps")  # type: ignore[arg-type]

    def test_unknown_timeframe_raises(self):
        from lift_metrics.core.metrics import exercise_series
        with pytest.raises(ValueError):
            exercise_series(self._history(), "bench_press", "weight", timeframe="decade")  # type: ignore[arg-type]

    def test_rising_series_is_positive(self):
        from lift_metrics.core.metrics import exercise_series, strength_trend
        trend = strength_trend(exercise_series(self._history(), "bench_press", "weight"))
        assert trend.direction == "positive"
        assert trend.percentage_change == pytest.approx(12.5)

    def test_falling_series_is_negative(self):
        from lift_metrics.core.metrics import strength_trend
        trend = strength_trend([("2026-03-01", 100.0), ("2026-03-08", 90.0)])
        assert trend.direction == "negative"
        assert trend.percentage_change == pytest.approx(-10.0)

    def test_single_point_is_neutral(self):
        from lift_metrics.core.metrics import strength_trend
        trend = strength_trend([("2026-03-01", 100.0)])
        assert trend.direction == "neutral"
        assert trend.percentage_change == 0.0


class TestSessionSummaries:
    def test_session_totals(self):
        from lift_metrics.core.metrics import summarize_entry
        entry = ExerciseEntry("bench_press", [_set(100, 5), _set(80, 10), _set(0, 12)])
        summary = summarize_entry(entry, "2026-03-01")
        assert summary.total_sets == 3
        assert summary.total_reps == 27
        assert summary.total_volume == pytest.approx(1300.0)
        assert summary.top_weight == 100.0
        assert summary.top_reps == 12
        assert summary.one_rep_max == pytest.approx(100 * (1 + 5 / 30))
        assert not summary.has_previous
        assert summary.volume_change == 0.0

    def test_change_against_previous(self):
        from lift_metrics.core.metrics import summarize_entry
        previous = ExerciseEntry("bench_press", [_set(80, 5)])
        summary = summarize_entry(ExerciseEntry("bench_press", [_set(90, 5)]), "2026-03-08", previous)
        assert summary.has_previous
        assert summary.volume_change == pytest.approx(50.0)
        assert summary.volume_change_pct == pytest.approx(12.5)

    def test_zero_previous_volume_gives_zero_percent(self):
        from lift_metrics.core.metrics import summarize_entry
        previous = ExerciseEntry("bench_press", [_set(0, 10)])
        summary = summarize_entry(ExerciseEntry("bench_press", [_set(90, 5)]), "2026-03-08", previous)
        assert summary.volume_change == pytest.approx(450.0)
        assert summary.volume_change_pct == 0.0

    def test_empty_session(self):
        from lift_metrics.core.metrics import summarize_entry
        summary = summarize_entry(ExerciseEntry("bench_press", []), "2026-03-01")
        assert (summary.total_sets, summary.top_weight, summary.one_rep_max) == (0, 0.0, 0.0)

    def test_each_session_compared_with_the_one_before(self):
        from lift_metrics.core.metrics import session_summaries
        history = TestSeriesAndTrend()._history()
        summaries = session_summaries(history, "bench_press")
        assert [s.date for s in summaries] == ["2026-03-01", "2026-03-04", "2026-03-08"]
        assert [s.has_previous for s in summaries] == [False, True, True]
        assert summaries[1].volume_change == pytest.approx(25.0)
        assert summaries[1].volume_change_pct == pytest.approx(6.25)
        assert summaries[2].volume_change_pct == pytest.approx(25 / 425 * 100)

    def test_unknown_exercise(self):
        from lift_metrics.core.metrics import session_summaries
        assert session_summaries(TestSeriesAndTrend()._history(), "deadlift") == []


class TestWorkoutFrequency:
    # 2026-03-08 is a Sunday, 2026-03-10 a Tuesday
    NOW = datetime(2026, 3, 10, 12, 0)

    def _history(self) -> list[WorkoutRecord]:
        return [
            _workout("2025-12-31", []),
            _workout("2026-03-01", []),
            _workout("2026-03-04", []),
            _workout("2026-03-08", []),
            _workout("2026-03-10T09:00", []),
            _workout("2026-03-11", []),
        ]

    def test_week_counts_since_sunday(self):
        from lift_metrics.core.metrics import workout_frequency
        buckets = workout_frequency(self._history(), "week", now=self.NOW)
        assert [label for label, _ in buckets] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
        assert [count for _, count in buckets] == [1, 0, 1, 0, 0, 0, 0]

    def test_month_counts_per_day(self):
        from lift_metrics.core.metrics import workout_frequency
        buckets = workout_frequency(self._history(), "month", now=self.NOW)
        assert len(buckets) == 31
        counts = dict(buckets)
        assert sum(counts.values()) == 5
        assert counts["1"] == counts["4"] == counts["8"] == counts["10"] == counts["11"] == 1

    def test_year_counts_per_month(self):
        from lift_metrics.core.metrics import workout_frequency
        buckets = workout_frequency(self._history(), "year", now=self.NOW)
        assert len(buckets) == 12
        assert dict(buckets)["Mar"] == 5
        assert dict(buckets)["Dec"] == 0

    def test_all_counts_per_year(self):
        from lift_metrics.core.metrics import workout_frequency
        assert workout_frequency(self._history(), "all", now=self.NOW) == [("2025", 1), ("2026", 5)]

    def test_empty_history(self):
        from lift_metrics.core.metrics import workout_frequency
        assert workout_frequency([], "all") == []
        assert all(count == 0 for _, count in workout_frequency([], "year", now=self.NOW))

    def test_unknown_timeframe_raises(self):
        from lift_metrics.core.metrics import workout_frequency
        with pytest.raises(ValueError):
            workout_frequency(self._history(), "decade")  # type: ignore[arg-type]


# ===========================================================================
# readiness.py
# ===========================================================================


class TestRecoveryScore:
    """score = 0.7 * sleep + 0.3 * (100 - stress); neutral stress term 30"""

    def test_worked_example(self):
        from lift_metrics.core.readiness import readiness_band, recovery_score
        score = recovery_score(80, 40)
        assert score == pytest.approx(74.0)
        assert readiness_band(score) == "good"

    def test_missing_stress_uses_neutral_term(self):
        from lift_metrics.core.readiness import recovery_score
        assert recovery_score(50, None) == pytest.approx(65.0)

    def test_missing_sleep_is_none(self):
        from lift_metrics.core.readiness import recovery_score
        assert recovery_score(None, 10) is None

    def test_clamped_to_100(self):
        from lift_metrics.core.readiness import recovery_score
        assert recovery_score(150, 0) == 100.0

    @pytest.mark.parametrize("score,band", [
        (0, "poor"),
        (39.9, "poor"),
        (40, "fair"),
        (59.99, "fair"),
        (60, "good"),
        (79.9, "good"),
        (80, "excellent"),
        (100, "excellent"),
    ])
    def test_band_boundaries(self, score, band):
        from lift_metrics.core.readiness import readiness_band
        assert readiness_band(score) == band


class TestMultipliers:
    @pytest.mark.parametrize("status,expected", [
        ("poor", 0.85), ("fair", 0.95), ("good", 1.0), ("excellent", 1.05), (None, 1.0),
    ])
    def test_progression(self, status, expected):
        from lift_metrics.core.readiness import progression_multiplier
        assert progression_multiplier(status) == expected

    @pytest.mark.parametrize("status,expected", [
        ("poor", 1.3), ("fair", 1.15), ("good", 1.0), ("excellent", 0.85), (None, 1.0),
    ])
    def test_rest(self, status, expected):
        from lift_metrics.core.readiness import rest_multiplier
        assert rest_multiplier(status) == expected

    def test_unknown_status_raises(self):
        from lift_metrics.core.readiness import progression_multiplier, rest_multiplier
        with pytest.raises(ValueError):
            progression_multiplier("great")  # type: ignore[arg-type]
        with pytest.raises(ValueError):
            rest_multiplier("great")  # type: ignore[arg-type]

    def test_accepts_recovery_status(self):
        from lift_metrics.core.models import RecoveryStatus
        from lift_metrics.core.readiness import progression_multiplier
        status = RecoveryStatus(status="fair", score=50.0, sleep_quality=60.0)
        assert progression_multiplier(status) == 0.95


class TestScoreReadiness:
    def test_uses_latest_samples(self):
        from lift_metrics.core.readiness import score_readiness
        sleep = [_sleep("2026-03-02T23:00", 80), _sleep("2026-03-01T23:00", 20)]
        stress = [StressSample("2026-03-02", 40), StressSample("2026-03-01", 90)]
        status = score_readiness(sleep, stress)
        assert status is not None
        assert status.score == pytest.approx(74.0)
        assert status.status == "good"
        assert status.stress_level == 40

    def test_sleep_only(self):
        from lift_metrics.core.readiness import score_readiness
        status = score_readiness([_sleep("2026-03-02T23:00", 10)], [])
        assert status is not None
        assert status.score == pytest.approx(37.0)
        assert status.status == "poor"
        assert status.stress_level is None

    def test_stale_stress_uses_neutral_term(self):
        from lift_metrics.core.readiness import score_readiness
        status = score_readiness([_sleep("2026-03-10T23:00", 80)], [StressSample("2026-01-02", 90)])
        assert status is not None
        # 0.7 * 80 + 30
        assert status.score == pytest.approx(86.0)
        assert status.status == "excellent"
        assert status.stress_level is None

    def test_stress_from_other_day_ignored(self):
        from lift_metrics.core.readiness import score_readiness
        sleep = [_sleep("2026-03-02T23:00", 80)]
        stress = [StressSample("2026-03-03", 90), StressSample("2026-03-02T08:00", 40), StressSample("2026-03-02T18:00", 60)]
        status = score_readiness(sleep, stress)
        assert status is not None
        assert status.stress_level == 60
        assert status.score == pytest.approx(68.0)

    def test_no_sleep_no_status(self):
        from lift_metrics.core.readiness import score_readiness
        assert score_readiness([], [StressSample("2026-03-01", 20)]) is None

    def test_window_excludes_later_samples(self):
        from lift_metrics.core.readiness import score_readiness
        sleep = [_sleep("2026-03-01T23:00", 90), _sleep("2026-03-05T23:00", 10)]
        status = score_readiness(sleep, [], end="2026-03-02")
        assert status is not None
        assert status.sleep_quality == 90

    def test_recommended_workout_types(self):
        from lift_metrics.core.readiness import recommended_workout_types
        assert recommended_workout_types("poor")[0] == "mobility"
        assert "high_intensity" in recommended_workout_types("excellent")


# ===========================================================================
# correlation.py
# ===========================================================================


class TestPearson:
    def test_perfect_positive(self):
        from lift_metrics.core.correlation import pearson
        assert pearson([(1, 2), (2, 4), (3, 6)]) == pytest.approx(1.0)

    def test_perfect_negative(self):
        from lift_metrics.core.correlation import pearson
        assert pearson([(1, 6), (2, 4), (3, 2)]) == pytest.approx(-1.0)

    def test_constant_series_is_zero(self):
        from lift_metrics.core.correlation import pearson
        assert pearson([(5, 1), (5, 2), (5, 3)]) == 0.0

    @pytest.mark.parametrize("value", [82.92, 0.1, 71.3, 99.99])
    def test_constant_float_series_is_exactly_zero(self, value):
        from lift_metrics.core.correlation import pearson
        ys = [13.0, 87.5, 42.1, 66.6, 5.2, 91.0, 33.3]
        assert pearson([(value, y) for y in ys]) == 0.0
        assert pearson([(y, value) for y in ys]) == 0.0

    def test_single_point_is_zero(self):
        from lift_metrics.core.correlation import pearson
        assert pearson([(1, 1)]) == 0.0

    def test_swapping_axes_keeps_magnitude(self):
        from lift_metrics.core.correlation import pearson
        points = [(1.0, 3.0), (2.0, 2.5), (4.0, 7.0), (5.0, 4.0)]
        swapped = [(y, x) for x, y in points]
        assert abs(pearson(points)) == pytest.approx(abs(pearson(swapped)))


class TestClassifyCorrelation:
    @pytest.mark.parametrize("r,strength,direction", [
        (0.5, "moderate", "positive"),
        (-0.8, "strong", "negative"),
        (0.05, "weak", "none"),
        (-0.2, "weak", "negative"),
        (0.7, "strong", "positive"),
    ])
    def test_labels(self, r, strength, direction):
        from lift_metrics.core.correlation import classify_correlation
        result = classify_correlation(r, 10)
        assert result.strength == strength
        assert result.direction == direction

    def test_too_few_pairs_forces_zero(self):
        from lift_metrics.core.correlation import classify_correlation
        result = classify_correlation(0.9, 1)
        assert result.coefficient == 0.0
        assert not result.has_enough_data
        assert result.description == "not enough data"


class TestCorrelate:
    def _workouts(self) -> list[WorkoutRecord]:
        return [
            _workout("2026-03-02", [_set(100, 5), _set(100, 5)]),                      # 100 %
            _workout("2026-03-03", [_set(100, 5), _set(100, 5, completed=False)]),     # 50 %
            _workout("2026-03-04", [_set(100, 5), _set(100, 5), _set(100, 5, completed=False)]),
        ]

    def test_sleep_pairs_with_next_day(self):
        from lift_metrics.core.correlation import correlate, pair_observations
        sleep = [
            _sleep("2026-03-01T23:00", 90),
            _sleep("2026-03-02T23:00", 50),
            _sleep("2026-03-03T23:00", 70),
            _sleep("2026-03-10T23:00", 70),  # no workout on 03-11
        ]
        points = pair_observations("sleep", sleep, [], self._workouts())
        assert [x for x, _ in points] == [90, 50, 70]

        result = correlate("sleep", sleep, [], self._workouts())
        assert result.sample_size == 3
        assert result.coefficient == pytest.approx(0.982, abs=1e-3)
        assert result.description == "strong positive"

    def test_stress_pairs_same_day(self):
        from lift_metrics.core.correlation import pair_observations
        stress = [StressSample("2026-03-02", 20), StressSample("2026-03-03", 80)]
        points = pair_observations("stress", [], stress, self._workouts())
        assert points == [(20.0, 100.0), (80.0, 50.0)]

    def test_recovery_combines_same_day_sleep_and_stress(self):
        from lift_metrics.core.correlation import pair_observations
        sleep = [_sleep("2026-03-01T23:00", 80)]
        stress = [StressSample("2026-03-01", 40)]
        points = pair_observations("recovery", sleep, stress, self._workouts())
        assert len(points) == 1
        assert points[0][0] == pytest.approx(74.0)
        assert points[0][1] == 100.0

    def test_not_enough_pairs(self):
        from lift_metrics.core.correlation import correlate
        result = correlate("sleep", [_sleep("2026-03-01T23:00", 90)], [], self._workouts())
        assert result.coefficient == 0.0
        assert result.description == "not enough data"

    def test_unknown_metric_raises(self):
        from lift_metrics.core.correlation import correlate
        with pytest.raises(ValueError):
            correlate("hydration", [], [], [])  # type: ignore[arg-type]

    def test_workout_performance(self):
        from lift_metrics.core.correlation import workout_performance
        assert workout_performance(self._workouts()[2]) == pytest.approx(200 / 3)
        assert workout_performance(WorkoutRecord(date="2026-03-01")) == 0.0


# ===========================================================================
# wellness.py
# ===========================================================================


class TestWellness:
    def test_sleep_phase_breakdown(self):
        from lift_metrics.core.wellness import sleep_phase_breakdown
        sample = SleepSample(
            start_time="2026-03-01T23:00",
            duration=400,
            quality=80,
            deep_sleep_duration=100,
            rem_sleep_duration=80,
            light_sleep_duration=200,
            awake_time=20,
        )
        phases = sleep_phase_breakdown(sample)
        assert (phases.deep, phases.rem, phases.light, phases.awake) == pytest.approx((25, 20, 50, 5))

    def test_zero_duration(self):
        from lift_metrics.core.wellness import sleep_phase_breakdown
        phases = sleep_phase_breakdown(_sleep("2026-03-01T23:00", 80, duration=0))
        assert phases.deep == 0.0 and phases.awake == 0.0

    @pytest.mark.parametrize("level,band", [
        (10, "low"), (30, "moderate"), (65, "high"), (80, "very_high"), (150, "very_high"),
    ])
    def test_stress_band(self, level, band):
        from lift_metrics.core.wellness import stress_band
        assert stress_band(level) == band

    def test_daily_hydration(self):
        from lift_metrics.core.wellness import daily_hydration
        samples = [
            HydrationSample("2026-03-05T08:00", 500),
            HydrationSample("2026-03-05T12:00", 250),
            HydrationSample("2026-03-03", 300),
            HydrationSample("2026-03-01", 1000),
        ]
        days = daily_hydration(samples, days=3, today=date(2026, 3, 5))
        assert days == [
            (date(2026, 3, 3), 300.0),
            (date(2026, 3, 4), 0.0),
            (date(2026, 3, 5), 750.0),
        ]

    def test_negative_window_raises(self):
        from lift_metrics.core.wellness import daily_hydration
        with pytest.raises(ValueError):
            daily_hydration([], days=-1)

    @pytest.mark.parametrize("current,goal,expected", [
        (1250, 2500, 50.0), (3000, 2500, 100.0), (500, 0, 0.0),
    ])
    def test_hydration_progress(self, current, goal, expected):
        from lift_metrics.core.wellness import hydration_progress
        assert hydration_progress(current, goal) == pytest.approx(expected)


# ===========================================================================
# engine/config_loader.py and exercises/
# ===========================================================================


class TestConfigLoader:
    def test_deep_merge_is_non_destructive(self):
        from lift_metrics.core.engine.config_loader import deep_merge
        base = {"progression": {"increment_unit": 2.5, "rounding_unit": 2.5}}
        merged = deep_merge(base, {"progression": {"increment_unit": 5}})
        assert merged["progression"] == {"increment_unit": 5, "rounding_unit": 2.5}
        assert base["progression"]["increment_unit"] == 2.5

    def test_settings_from_empty_section_are_defaults(self):
        from lift_metrics.core.engine.config_loader import settings_from_dict
        assert settings_from_dict({}) == UserSettings()

    def test_settings_from_dict(self):
        from lift_metrics.core.engine.config_loader import settings_from_dict
        settings = settings_from_dict({
            "increment_unit": 5,
            "rep_range": [5, 8],
            "wave_pattern": [{"factor": 0.9, "rep_offset": 1}, {"factor": 1.0}],
        })
        assert settings.increment_unit == 5.0
        assert settings.rep_range == (5, 8)
        assert settings.wave_pattern == [(0.9, 1), (1.0, 0)]

    def test_bundled_settings_load(self, tmp_path):
        from lift_metrics.core.engine.config_loader import load_user_settings
        settings = load_user_settings(user_path=tmp_path / "absent.yaml")
        assert settings.rounding_unit == 2.5
        assert settings.percentage_table == [0.70, 0.75, 0.80, 0.85, 0.90, 0.95]

    def test_user_override_merged(self, tmp_path):
        from lift_metrics.core.engine.config_loader import load_user_settings
        user = tmp_path / "settings.yaml"
        user.write_text(textwrap.dedent("""\
            progression:
              increment_unit: 5.0
        """))
        settings = load_user_settings(user_path=user)
        assert settings.increment_unit == 5.0
        assert settings.rounding_unit == 2.5

    def test_broken_user_file_warns_and_is_ignored(self, tmp_path):
        from lift_metrics.core.engine.config_loader import load_user_settings
        user = tmp_path / "settings.yaml"
        user.write_text("progression: [unclosed\n")
        with pytest.warns(UserWarning, match="ignoring user settings"):
            settings = load_user_settings(user_path=user)
        assert settings.increment_unit == 2.5

    def test_invalid_user_value_raises(self, tmp_path):
        from lift_metrics.core.engine.config_loader import load_user_settings
        user = tmp_path / "settings.yaml"
        user.write_text("progression:\n  rounding_unit: 0\n")
        with pytest.raises(ValueError):
            load_user_settings(user_path=user)


class TestExerciseRegistry:
    def test_bundled_exercises_loaded(self):
        from lift_metrics.core.exercises import get_exercise
        bench = get_exercise("bench_press")
        assert bench.intensity == "high"
        assert bench.rep_range == (6, 10)

    def test_unknown_exercise_raises(self):
        from lift_metrics.core.exercises import get_exercise
        with pytest.raises(ValueError, match="Unknown exercise"):
            get_exercise("underwater_basket_weaving")

    def test_find_exercise_falls_back_to_generic(self):
        from lift_metrics.core.exercises import find_exercise
        fly = find_exercise("cable_fly")
        assert fly.display_name == "Cable Fly"
        assert fly.intensity == "moderate"
        assert fly.increment is None

    def test_exercise_from_dict_requires_fields(self):
        from lift_metrics.core.exercises.loader import exercise_from_dict
        with pytest.raises(ValueError, match="missing fields"):
            exercise_from_dict({"exercise_id": "curl"})

    def test_exercise_from_dict_rejects_bad_intensity(self):
        from lift_metrics.core.exercises.loader import exercise_from_dict
        with pytest.raises(ValueError):
            exercise_from_dict({"exercise_id": "curl", "display_name": "Curl", "intensity": "extreme"})


def test_recovery_score_is_finite_for_garbage_inputs():
    from lift_metrics.core.readiness import recovery_score
    score = recovery_score("bad", float("nan"))  # type: ignore[arg-type]
    assert score is not None and math.isfinite(score)
