"""Running performance analytics: training load, evolution, VO2max, race predictions."""

from performance_engine.cache import HistoryCache
from performance_engine.engine import (
    PerformanceEngine,
    compute_history,
    compute_race_predictions,
    compute_snapshot_metrics,
)
from performance_engine.exceptions import (
    InvalidProfileError,
    InvalidWorkoutError,
    PerformanceEngineError,
)
from performance_engine.models import (
    AthleteProfile,
    HistoryPoint,
    PerformanceMetrics,
    RacePrediction,
    Sample,
    Workout,
)

__all__ = [
    "AthleteProfile",
    "HistoryCache",
    "HistoryPoint",
    "InvalidProfileError",
    "InvalidWorkoutError",
    "PerformanceEngine",
    "PerformanceEngineError",
    "PerformanceMetrics",
    "RacePrediction",
    "Sample",
    "Workout",
    "compute_history",
    "compute_race_predictions",
    "compute_snapshot_metrics",
]
