"""Shared test fixtures: reference clock, athlete profiles, workout factories."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

import pytest

from performance_engine.models.athlete_profile import AthleteProfile
from performance_engine.models.workout import Sample, Workout

# Fixed reference instant so every test is independent of the wall clock.
NOW = datetime(2026, 10, 19, 12, 0, 0)

WorkoutFactory = Callable[..., Workout]


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def hr_profile() -> AthleteProfile:
    """Male runner with a 135 bpm heart rate reserve (185 max, 50 resting)."""
    return AthleteProfile(max_hr=185, resting_hr=50)


@pytest.fixture
def female_hr_profile() -> AthleteProfile:
    return AthleteProfile(max_hr=185, resting_hr=50, gender="female")


@pytest.fixture
def empty_profile() -> AthleteProfile:
    """No heart rate data, so every load falls back to pace."""
    return AthleteProfile()


@pytest.fixture
def make_workout() -> WorkoutFactory:
    """Factory fixture for workouts anchored relative to NOW.

    Usage:
        run = make_workout(days_ago=3, distance_km=10, duration_s=3000, avg_hr=150)
    """

    def _make(
        days_ago: float = 0,
        distance_km: float = 10.0,
        duration_s: float = 3000.0,
        avg_hr: float | None = None,
        workout_id: str | None = None,
    ) -> Workout:
        start = NOW - timedelta(days=days_ago)
        return Workout(
            samples=(Sample(time=start),),
            distance_km=distance_km,
            duration_ms=int(duration_s * 1000),
            avg_hr=avg_hr,
            workout_id=workout_id,
        )

    return _make


@pytest.fixture
def training_block(make_workout: WorkoutFactory) -> list[Workout]:
    """Eight weeks of consistent training: easy runs, tempo and a long run weekly.

    Returned newest first so tests exercise the engine's own sort.
    """
    workouts: list[Workout] = []
    for week in range(8):
        base = week * 7
        workouts.append(make_workout(days_ago=base + 1, distance_km=8.0, duration_s=2880, avg_hr=140))
        workouts.append(make_workout(days_ago=base + 3, distance_km=10.0, duration_s=2700, avg_hr=162))
        workouts.append(make_workout(days_ago=base + 5, distance_km=22.0, duration_s=7920, avg_hr=145))
    return workouts
