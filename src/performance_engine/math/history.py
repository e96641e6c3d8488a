"""Day-by-day performance history for charting.

Replays the load model from the athlete's first workout to today, carrying
rolling windows of the best daily evolution score (30 days) and the best
daily VO2 estimate (60 days). Cost is linear in the number of days covered,
so callers should request it lazily.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import date
from typing import Callable, Sequence

import pandas as pd

from performance_engine.math.aerobic_capacity import estimate_workout_vo2
from performance_engine.math.evolution import performance_score, top_average
from performance_engine.math.training_load import (
    aggregate_daily_loads,
    daily_load_grid,
    history_reference_speed,
    propagate_loads,
)
from performance_engine.models.athlete_profile import AthleteProfile
from performance_engine.models.enums import (
    HISTORY_EVOLUTION_WINDOW_DAYS,
    HISTORY_VO2_WINDOW_DAYS,
)
from performance_engine.models.metrics import HistoryPoint
from performance_engine.models.workout import Workout
from performance_engine.track_stats import TrackStatsProvider, calculate_track_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RollingWindow:
    """Daily best values within a trailing window of *days*.

    Entries are (date, value) in chronological order; an entry is evicted
    once it is more than *days* days older than the current day.
    """

    days: int
    entries: tuple[tuple[date, float], ...] = ()

    def advance(self, day: date, value: float | None) -> "RollingWindow":
        entries = deque(self.entries)
        if value:
            entries.append((day, value))
        while entries and (day - entries[0][0]).days > self.days:
            entries.popleft()
        return RollingWindow(days=self.days, entries=tuple(entries))

    @property
    def values(self) -> list[float]:
        return [value for _, value in self.entries]


def _daily_max(
    workouts: Sequence[Workout], metric: Callable[[Workout], float]
) -> dict[date, float]:
    best: dict[date, float] = {}
    for workout in workouts:
        value = metric(workout)
        if value > 0:
            day = workout.start_date
            best[day] = max(best.get(day, 0.0), value)
    return best


def generate_history(
    workouts: Sequence[Workout],
    profile: AthleteProfile,
    today: date,
    stats_provider: TrackStatsProvider = calculate_track_stats,
) -> list[HistoryPoint]:
    """Generate one HistoryPoint per day from the first workout to *today*.

    Args:
        workouts: Workouts sorted oldest first.
        profile: Athlete profile for TRIMP.
        today: Last day of the series (inclusive).
        stats_provider: Track statistics provider.

    Returns:
        Chronological history points; empty when there are no workouts or
        the first workout lies after *today*.
    """
    if not workouts:
        return []

    reference_speed = history_reference_speed(workouts, stats_provider)
    daily_loads = aggregate_daily_loads(workouts, profile, reference_speed, stats_provider)
    daily_scores = _daily_max(workouts, performance_score)
    daily_vo2 = _daily_max(workouts, estimate_workout_vo2)

    grid = daily_load_grid(daily_loads, workouts[0].start_date, today)
    states = propagate_loads(grid.to_numpy())
    logger.debug("Replaying %d days of history for %d workouts", len(grid), len(workouts))

    evolution_window = RollingWindow(days=HISTORY_EVOLUTION_WINDOW_DAYS)
    vo2_window = RollingWindow(days=HISTORY_VO2_WINDOW_DAYS)
    history: list[HistoryPoint] = []
    for timestamp, state in zip(grid.index, states):
        day = timestamp.date()
        evolution_window = evolution_window.advance(day, daily_scores.get(day))
        vo2_window = vo2_window.advance(day, daily_vo2.get(day))
        history.append(
            HistoryPoint(
                date=day,
                ctl=state.ctl,
                atl=state.atl,
                evolution_score=top_average(evolution_window.values),
                vo2max=max(vo2_window.values, default=0.0),
            )
        )
    return history


def history_to_frame(points: Sequence[HistoryPoint]) -> pd.DataFrame:
    """Tabulate history points into a date-indexed DataFrame.

    Columns: ctl, atl, tsb, evolution_score, vo2max.
    """
    frame = pd.DataFrame(
        {
            "ctl": [p.ctl for p in points],
            "atl": [p.atl for p in points],
            "tsb": [p.tsb for p in points],
            "evolution_score": [p.evolution_score for p in points],
            "vo2max": [p.vo2max for p in points],
        },
        index=pd.DatetimeIndex([pd.Timestamp(p.date) for p in points], name="date"),
    )
    return frame
