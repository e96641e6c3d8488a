"""Aerobic capacity (VO2max / VDOT) estimation from workout efforts.

Uses the ACSM running cost equation, VO2 = 3.5 + 0.2 × v (m/min), divided by
a duration correction that discounts short maximal efforts the athlete could
not sustain.
"""

from __future__ import annotations

from typing import Sequence

from performance_engine.models.enums import (
    MIN_EFFORT_DISTANCE_KM,
    VO2_CEILING,
    VO2_CORRECTION_BASE,
    VO2_CORRECTION_FLOOR,
    VO2_CORRECTION_MINUTES,
    VO2_DEFAULT,
    VO2_PER_M_PER_MIN,
    VO2_RECENT_WORKOUTS,
    VO2_RESTING,
)
from performance_engine.models.workout import Workout


def estimate_workout_vo2(workout: Workout) -> float:
    """Estimate VO2max from a single workout.

    Returns:
        Estimate in ml/kg/min, or 0.0 when the workout is shorter than 3 km,
        has no duration, or the estimate falls outside (0, 85).
    """
    if workout.distance_km < MIN_EFFORT_DISTANCE_KM or workout.duration_ms <= 0:
        return 0.0
    minutes = workout.duration_min
    velocity = workout.distance_km * 1000.0 / minutes
    vo2_cost = VO2_RESTING + velocity * VO2_PER_M_PER_MIN
    correction = max(VO2_CORRECTION_FLOOR, VO2_CORRECTION_BASE - minutes / VO2_CORRECTION_MINUTES)
    estimate = vo2_cost / correction
    return estimate if 0.0 < estimate < VO2_CEILING else 0.0


def estimate_vo2max(workouts: Sequence[Workout]) -> float:
    """Best VO2 estimate among the 15 most recent workouts.

    Args:
        workouts: Workouts sorted oldest first.

    Returns:
        Highest accepted estimate, or VO2_DEFAULT (35) when none qualifies.
    """
    best = max((estimate_workout_vo2(w) for w in workouts[-VO2_RECENT_WORKOUTS:]), default=0.0)
    return best if best > 0 else VO2_DEFAULT
