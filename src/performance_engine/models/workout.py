"""Workout record: the read-only input unit of every computation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

from performance_engine import config
from performance_engine.exceptions import InvalidWorkoutError


def to_local(moment: datetime) -> datetime:
    """Return *moment* as a naive local datetime.

    Naive datetimes are assumed to already be local. Aware ones are converted
    to the configured zone (or the system zone) and stripped of tzinfo so
    that calendar dates follow the athlete's clock, not UTC.
    """
    if moment.tzinfo is None:
        return moment
    zone = ZoneInfo(config.TIMEZONE) if config.TIMEZONE else None
    return moment.astimezone(zone).replace(tzinfo=None)


def local_now() -> datetime:
    """Current time as a naive local datetime."""
    if config.TIMEZONE:
        return datetime.now(ZoneInfo(config.TIMEZONE)).replace(tzinfo=None)
    return datetime.now()


@dataclass(frozen=True)
class Sample:
    """A single timestamped track sample."""

    time: datetime
    heart_rate: float | None = None


@dataclass(frozen=True)
class Workout:
    """Immutable GPS/HR tracked workout.

    The first sample's timestamp anchors the workout in time. Distance and
    duration are the recorded totals; per-sample data beyond the timestamp
    and heart rate is the track statistics provider's business.
    """

    samples: tuple[Sample, ...]
    distance_km: float
    duration_ms: int
    avg_hr: float | None = None
    workout_id: str | None = None

    def __post_init__(self) -> None:
        if not self.samples:
            raise InvalidWorkoutError(
                "Workout needs at least one timestamped sample", self.workout_id
            )
        if self.distance_km < 0:
            raise InvalidWorkoutError(
                f"Distance must be non-negative, got {self.distance_km}", self.workout_id
            )
        if self.duration_ms < 0:
            raise InvalidWorkoutError(
                f"Duration must be non-negative, got {self.duration_ms}", self.workout_id
            )
        if not isinstance(self.samples, tuple):
            object.__setattr__(self, "samples", tuple(self.samples))

    @classmethod
    def from_totals(
        cls,
        start: datetime,
        distance_km: float,
        duration_s: float,
        avg_hr: float | None = None,
        workout_id: str | None = None,
    ) -> "Workout":
        """Build a single-sample workout from summary totals."""
        return cls(
            samples=(Sample(time=start),),
            distance_km=distance_km,
            duration_ms=int(round(duration_s * 1000)),
            avg_hr=avg_hr,
            workout_id=workout_id,
        )

    @property
    def start_time(self) -> datetime:
        """Local anchor time (first sample)."""
        return to_local(self.samples[0].time)

    @property
    def start_date(self) -> date:
        return self.start_time.date()

    @property
    def duration_s(self) -> float:
        return self.duration_ms / 1000.0

    @property
    def duration_min(self) -> float:
        return self.duration_ms / 1000.0 / 60.0


def sort_chronologically(workouts: list[Workout] | tuple[Workout, ...]) -> list[Workout]:
    """Return a new list ordered by first-sample timestamp, oldest first.

    The sort is stable, so workouts sharing a start time keep their input
    order. The input sequence is not modified.
    """
    return sorted(workouts, key=lambda w: w.start_time)
