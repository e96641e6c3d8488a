"""Race time prediction with Riegel's power-law fatigue model.

T2 = T1 × (D2 / D1) ^ 1.06

Reference:
    Riegel (1981). Athletic records and human endurance. American Scientist
    69(3):285-290.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Sequence

from performance_engine.models.enums import (
    MIN_EFFORT_DISTANCE_KM,
    RACE_PREDICTION_SCORE_SCALE,
    RACE_PREDICTION_WINDOW_DAYS,
    RACE_TARGETS,
    REFERENCE_DISTANCE_KM,
    RIEGEL_EXPONENT,
)
from performance_engine.models.metrics import RacePrediction
from performance_engine.models.workout import Workout


def predict_time(base_distance_km: float, base_time_s: float, target_distance_km: float) -> float:
    """Predict the time for *target_distance_km* from one effort.

    Args:
        base_distance_km: Distance of the known effort.
        base_time_s: Time of the known effort in seconds.
        target_distance_km: Distance to predict.

    Returns:
        Predicted time in seconds.

    Raises:
        ValueError: If base_distance_km is non-positive.
    """
    if base_distance_km <= 0:
        raise ValueError(f"Base distance must be positive, got {base_distance_km}")
    return base_time_s * (target_distance_km / base_distance_km) ** RIEGEL_EXPONENT


def equivalent_10k_seconds(workout: Workout) -> float:
    """The workout's time normalized to 10 km."""
    return predict_time(workout.distance_km, workout.duration_s, REFERENCE_DISTANCE_KM)


def is_qualifying_effort(workout: Workout) -> bool:
    return workout.distance_km >= MIN_EFFORT_DISTANCE_KM and workout.duration_ms > 0


def find_best_effort(workouts: Sequence[Workout], now: datetime) -> Workout | None:
    """Best 10k-equivalent effort started less than 90 days before *now*.

    Ties keep the first workout encountered.
    """
    window_start = now - timedelta(days=RACE_PREDICTION_WINDOW_DAYS)
    best: Workout | None = None
    best_score = 0.0
    for workout in workouts:
        if workout.start_time <= window_start or not is_qualifying_effort(workout):
            continue
        score = RACE_PREDICTION_SCORE_SCALE / equivalent_10k_seconds(workout)
        if score > best_score:
            best, best_score = workout, score
    return best


def predict_races(workouts: Sequence[Workout], now: datetime) -> list[RacePrediction]:
    """Predict 5 km, 10 km, half marathon and marathon times.

    Returns:
        Four predictions in that order, or an empty list when no workout of
        at least 3 km was recorded in the trailing 90 days.
    """
    best = find_best_effort(workouts, now)
    if best is None:
        return []

    predictions: list[RacePrediction] = []
    for distance_km, label in RACE_TARGETS:
        time_s = predict_time(best.distance_km, best.duration_s, distance_km)
        predictions.append(
            RacePrediction(
                distance_km=distance_km,
                label=label,
                time_s=time_s,
                pace_min_per_km=time_s / 60.0 / distance_km,
            )
        )
    return predictions
