"""Tests for the day-by-day history generator."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from performance_engine.math.aerobic_capacity import estimate_workout_vo2
from performance_engine.math.evolution import performance_score
from performance_engine.math.history import RollingWindow, generate_history, history_to_frame
from performance_engine.math.training_load import (
    LoadState,
    calculate_workout_trimp,
    history_reference_speed,
)


class TestRollingWindow:
    def test_keeps_entries_within_window(self) -> None:
        window = RollingWindow(days=30).advance(date(2026, 1, 1), 100.0)
        window = window.advance(date(2026, 1, 31), None)
        assert window.values == [100.0]

    def test_evicts_older_entries(self) -> None:
        window = RollingWindow(days=30).advance(date(2026, 1, 1), 100.0)
        window = window.advance(date(2026, 2, 1), 90.0)
        assert window.values == [90.0]

    def test_ignores_empty_days(self) -> None:
        window = RollingWindow(days=30).advance(date(2026, 1, 1), None)
        assert window.values == []

    def test_advance_returns_new_window(self) -> None:
        first = RollingWindow(days=30)
        second = first.advance(date(2026, 1, 1), 50.0)
        assert first.entries == ()
        assert second.entries == ((date(2026, 1, 1), 50.0),)


class TestGenerateHistory:
    def test_empty(self, hr_profile, now) -> None:
        assert generate_history([], hr_profile, now.date()) == []

    def test_one_point_per_day_through_today(self, make_workout, hr_profile, now) -> None:
        workouts = [make_workout(days_ago=20), make_workout(days_ago=5)]
        history = generate_history(workouts, hr_profile, now.date())
        assert len(history) == 21
        assert history[0].date == now.date() - timedelta(days=20)
        assert history[-1].date == now.date()
        assert all(b.date - a.date == timedelta(days=1) for a, b in zip(history, history[1:]))

    def test_first_day_load_state(self, make_workout, hr_profile, now) -> None:
        run = make_workout(days_ago=3, distance_km=10.0, duration_s=2700, avg_hr=160)
        history = generate_history([run], hr_profile, now.date())
        trimp = calculate_workout_trimp(run, hr_profile, history_reference_speed([run]))
        expected = LoadState().advance(trimp)
        assert history[0].atl == pytest.approx(expected.atl)
        assert history[0].ctl == pytest.approx(expected.ctl)
        assert history[-1].atl < history[0].atl

    def test_default_threshold_when_early_runs_have_no_speed(self, make_workout, empty_profile, now) -> None:
        # Twenty recorded sessions with no distance, then one hour at 12 km/h
        workouts = [make_workout(days_ago=30 - i, distance_km=0.0, duration_s=3600) for i in range(20)]
        workouts.append(make_workout(days_ago=0, distance_km=12.0, duration_s=3600))
        history = generate_history(workouts, empty_profile, now.date())
        expected = LoadState().advance(100.0)
        assert history[-1].atl == pytest.approx(expected.atl)
        assert history[-1].ctl == pytest.approx(expected.ctl)

    def test_evolution_window_expires_after_thirty_days(self, make_workout, hr_profile, now) -> None:
        run = make_workout(days_ago=40, distance_km=10.0, duration_s=3000)
        history = generate_history([run], hr_profile, now.date())
        assert history[0].evolution_score == pytest.approx(performance_score(run))
        assert history[30].evolution_score == pytest.approx(performance_score(run))
        assert history[31].evolution_score == 0.0

    def test_vo2_window_lasts_sixty_days(self, make_workout, hr_profile, now) -> None:
        run = make_workout(days_ago=70, distance_km=10.0, duration_s=2700)
        history = generate_history([run], hr_profile, now.date())
        assert history[60].vo2max == pytest.approx(estimate_workout_vo2(run))
        assert history[61].vo2max == 0.0

    def test_daily_best_score_kept(self, make_workout, hr_profile, now) -> None:
        easy = make_workout(days_ago=2.3, distance_km=10.0, duration_s=3600)
        fast = make_workout(days_ago=2.1, distance_km=10.0, duration_s=3000)
        history = generate_history([easy, fast], hr_profile, now.date())
        assert history[0].evolution_score == pytest.approx(performance_score(fast))

    def test_future_first_workout_yields_nothing(self, make_workout, hr_profile, now) -> None:
        assert generate_history([make_workout(days_ago=-3)], hr_profile, now.date()) == []


class TestHistoryFrame:
    def test_columns_and_index(self, make_workout, hr_profile, now) -> None:
        history = generate_history([make_workout(days_ago=9)], hr_profile, now.date())
        frame = history_to_frame(history)
        assert list(frame.columns) == ["ctl", "atl", "tsb", "evolution_score", "vo2max"]
        assert len(frame) == 10
        assert frame.index[0].date() == history[0].date
        assert frame["tsb"].iloc[-1] == pytest.approx(history[-1].ctl - history[-1].atl)

    def test_empty(self) -> None:
        assert history_to_frame([]).empty
