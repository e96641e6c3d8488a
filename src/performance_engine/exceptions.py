"""Custom exception hierarchy for the performance engine.

Computations degrade to neutral values instead of raising; these errors are
only raised when a value object is constructed from invalid input.
"""

from __future__ import annotations


class PerformanceEngineError(Exception):
    """Base exception for all performance_engine errors."""


class InvalidWorkoutError(PerformanceEngineError, ValueError):
    """A workout record violates its invariants (no samples, negative totals)."""

    def __init__(self, message: str, workout_id: str | None = None) -> None:
        super().__init__(message)
        self.workout_id = workout_id


class InvalidProfileError(PerformanceEngineError, ValueError):
    """An athlete profile carries impossible heart rate values."""
