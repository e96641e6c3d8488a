"""Per-workout statistics consumed by the load model.

The engine does not clean raw GPS/HR samples. Callers that detect pauses or
smooth speed plug their own provider in; the default derives the figures
from the workout's recorded totals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from performance_engine.models.workout import Workout


@dataclass(frozen=True)
class TrackStats:
    """Derived statistics of a single workout.

    Attributes:
        moving_duration_ms: Duration excluding pauses, in milliseconds.
        avg_speed_kmh: Average speed in km/h (0 when undefined).
        avg_hr: Average heart rate in bpm, or None when not recorded.
    """

    moving_duration_ms: float
    avg_speed_kmh: float
    avg_hr: float | None = None

    @property
    def moving_duration_min(self) -> float:
        return self.moving_duration_ms / 1000.0 / 60.0


TrackStatsProvider = Callable[[Workout], TrackStats]


def calculate_track_stats(workout: Workout) -> TrackStats:
    """Default provider: statistics from the workout's totals.

    Average heart rate is the workout's aggregate value when present,
    otherwise the mean of the per-sample readings, otherwise None.
    """
    duration_h = workout.duration_ms / 1000.0 / 3600.0
    avg_speed = workout.distance_km / duration_h if duration_h > 0 else 0.0
    return TrackStats(
        moving_duration_ms=float(workout.duration_ms),
        avg_speed_kmh=avg_speed,
        avg_hr=_average_heart_rate(workout),
    )


def _average_heart_rate(workout: Workout) -> float | None:
    if workout.avg_hr is not None and workout.avg_hr > 0:
        return float(workout.avg_hr)
    readings = [s.heart_rate for s in workout.samples if s.heart_rate and s.heart_rate > 0]
    if not readings:
        return None
    return float(np.mean(np.array(readings, dtype=np.float64)))
