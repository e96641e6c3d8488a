"""Data models for the performance engine."""

from performance_engine.models.athlete_profile import AthleteProfile
from performance_engine.models.enums import Gender
from performance_engine.models.metrics import HistoryPoint, PerformanceMetrics, RacePrediction
from performance_engine.models.workout import Sample, Workout, sort_chronologically

__all__ = [
    "AthleteProfile",
    "Gender",
    "HistoryPoint",
    "PerformanceMetrics",
    "RacePrediction",
    "Sample",
    "Workout",
    "sort_chronologically",
]
