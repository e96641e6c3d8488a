"""Marathon shape: readiness from recent long runs and weekly volume.

Long runs in the trailing 10 weeks earn points by distance tier, decayed
linearly with age; average weekly volume over the same window contributes
the remaining share.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence

from performance_engine.models.enums import (
    LONG_RUN_BASE_POINTS,
    LONG_RUN_DECAY_PER_WEEK,
    LONG_RUN_FULL_SCORE,
    LONG_RUN_MIN_DECAY,
    LONG_RUN_MIN_DISTANCE_KM,
    LONG_RUN_POINTS,
    MARATHON_SHAPE_LONG_RUN_WEIGHT,
    MARATHON_SHAPE_VOLUME_WEIGHT,
    MARATHON_SHAPE_WINDOW_DAYS,
    MARATHON_SHAPE_WINDOW_WEEKS,
    WEEKLY_VOLUME_FULL_KM,
)
from performance_engine.models.workout import Workout


def long_run_points(distance_km: float) -> float:
    """Base points for a long run; 0 for runs of 13 km or less."""
    if distance_km <= LONG_RUN_MIN_DISTANCE_KM:
        return 0.0
    for min_distance, points in LONG_RUN_POINTS:
        if distance_km >= min_distance:
            return points
    return LONG_RUN_BASE_POINTS


def long_run_decay(weeks_ago: float) -> float:
    return max(LONG_RUN_MIN_DECAY, 1.0 - weeks_ago * LONG_RUN_DECAY_PER_WEEK)


def calculate_marathon_shape(workouts: Sequence[Workout], now: datetime) -> float:
    """Calculate marathon shape as a 0-100 score.

    Args:
        workouts: Workout history (any order).
        now: Reference instant (naive local time).

    Returns:
        volume% × 0.4 + long-run% × 0.6.
    """
    window_start = now - timedelta(days=MARATHON_SHAPE_WINDOW_DAYS)
    relevant = [w for w in workouts if w.start_time >= window_start]

    long_run_score = 0.0
    for workout in relevant:
        points = long_run_points(workout.distance_km)
        if points == 0.0:
            continue
        weeks_ago = (now - workout.start_time).total_seconds() / 86400.0 / 7.0
        long_run_score += points * long_run_decay(weeks_ago)
    long_run_pct = min(100.0, long_run_score / LONG_RUN_FULL_SCORE * 100.0)

    avg_weekly_km = sum(w.distance_km for w in relevant) / MARATHON_SHAPE_WINDOW_WEEKS
    volume_pct = min(100.0, avg_weekly_km / WEEKLY_VOLUME_FULL_KM * 100.0)

    return volume_pct * MARATHON_SHAPE_VOLUME_WEIGHT + long_run_pct * MARATHON_SHAPE_LONG_RUN_WEIGHT
