"""Evolution score: current capability against a past baseline.

Each workout is normalized to an equivalent 10 km speed with Riegel's
exponent. The recent window's best half of performances is compared with
the best half of the baseline window, so easy and recovery runs do not drag
the score down.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Sequence

import numpy as np

from performance_engine.math.race_prediction import equivalent_10k_seconds, is_qualifying_effort
from performance_engine.models.enums import (
    EVOLUTION_BASELINE_DAYS,
    EVOLUTION_RECENT_DAYS,
    EVOLUTION_SCORE_SCALE,
    EVOLUTION_TOP_FRACTION,
    EVOLUTION_TREND_NEW_DATA,
    REFERENCE_DISTANCE_KM,
)
from performance_engine.models.workout import Workout


@dataclass(frozen=True)
class EvolutionResult:
    """Top-averaged scores of both windows and the derived trend."""

    recent: float
    baseline: float
    score: int
    trend_pct: float


def performance_score(workout: Workout) -> float:
    """10 km equivalent speed (km/h) × 10; 0 for short or invalid workouts.

    10 km/h scores 100, 15 km/h scores 150.
    """
    if not is_qualifying_effort(workout):
        return 0.0
    predicted_10k_h = equivalent_10k_seconds(workout) / 3600.0
    return REFERENCE_DISTANCE_KM / predicted_10k_h * EVOLUTION_SCORE_SCALE


def top_average(scores: Iterable[float]) -> float:
    """Mean of the best half of *scores* (at least one value); 0 if empty."""
    ordered = np.sort(np.fromiter(scores, dtype=np.float64))[::-1]
    if ordered.size == 0:
        return 0.0
    top_n = max(1, math.ceil(ordered.size * EVOLUTION_TOP_FRACTION))
    return float(np.mean(ordered[:top_n]))


def evolution_trend(recent: float, baseline: float) -> float:
    """Percentage change of recent against baseline.

    100 when only the recent window has data, 0 when the recent window is
    empty.
    """
    if recent > 0 and baseline > 0:
        return (recent - baseline) / baseline * 100.0
    if recent > 0:
        return EVOLUTION_TREND_NEW_DATA
    return 0.0


def calculate_evolution(workouts: Sequence[Workout], now: datetime) -> EvolutionResult:
    """Evolution score and trend as of *now*.

    Recent window: started within the last 30 days. Baseline window: started
    31-90 days ago.
    """
    recent_start = now - timedelta(days=EVOLUTION_RECENT_DAYS)
    baseline_start = now - timedelta(days=EVOLUTION_BASELINE_DAYS)

    recent_scores: list[float] = []
    baseline_scores: list[float] = []
    for workout in workouts:
        score = performance_score(workout)
        if score <= 0:
            continue
        started = workout.start_time
        if started >= recent_start:
            recent_scores.append(score)
        elif started >= baseline_start:
            baseline_scores.append(score)

    recent = top_average(recent_scores)
    baseline = top_average(baseline_scores)
    return EvolutionResult(
        recent=recent,
        baseline=baseline,
        score=round(recent),
        trend_pct=evolution_trend(recent, baseline),
    )
