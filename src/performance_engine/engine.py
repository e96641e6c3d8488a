"""PerformanceEngine: orchestrates the snapshot, history and prediction pipelines."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable, Sequence

from performance_engine.cache import HistoryCache, history_key
from performance_engine.math.aerobic_capacity import estimate_vo2max
from performance_engine.math.evolution import calculate_evolution
from performance_engine.math.history import generate_history
from performance_engine.math.marathon_shape import calculate_marathon_shape
from performance_engine.math.race_prediction import predict_races
from performance_engine.math.training_load import (
    aggregate_daily_loads,
    calculate_monotony,
    calculate_weekly_load,
    calculate_workout_trimp,
    daily_load_grid,
    monotony_percent,
    propagate_loads,
    snapshot_reference_speed,
)
from performance_engine.models.athlete_profile import AthleteProfile
from performance_engine.models.enums import SNAPSHOT_WINDOW_DAYS
from performance_engine.models.metrics import HistoryPoint, PerformanceMetrics, RacePrediction
from performance_engine.models.workout import Workout, local_now, sort_chronologically, to_local
from performance_engine.track_stats import TrackStatsProvider, calculate_track_stats

logger = logging.getLogger(__name__)


class PerformanceEngine:
    """Computes performance analytics from a workout history.

    Every call works on a sorted copy of its inputs and keeps no state
    between calls apart from the optional history cache.

    Usage:
        engine = PerformanceEngine()
        metrics = engine.snapshot(workouts, profile)
        history = engine.history(workouts, profile)
        predictions = engine.race_predictions(workouts)
    """

    def __init__(
        self,
        stats_provider: TrackStatsProvider = calculate_track_stats,
        history_cache: HistoryCache | None = None,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.stats_provider = stats_provider
        self.history_cache = history_cache
        self.clock = clock

    def _resolve_now(self, now: datetime | None) -> datetime:
        return to_local(now) if now is not None else self.clock()

    def snapshot(
        self,
        workouts: Sequence[Workout],
        profile: AthleteProfile,
        now: datetime | None = None,
    ) -> PerformanceMetrics:
        """Compute the PerformanceMetrics snapshot as of *now*.

        Args:
            workouts: Workout history in any order.
            profile: Athlete profile.
            now: Reference instant, defaults to the engine clock.

        Returns:
            PerformanceMetrics; all zero for an empty history.
        """
        if not workouts:
            return PerformanceMetrics.empty()

        now = self._resolve_now(now)
        ordered = sort_chronologically(workouts)

        reference_speed = snapshot_reference_speed(ordered, self.stats_provider)
        daily_loads = aggregate_daily_loads(ordered, profile, reference_speed, self.stats_provider)
        last_trimp = calculate_workout_trimp(
            ordered[-1], profile, reference_speed, self.stats_provider
        )

        today = now.date()
        start = today - timedelta(days=SNAPSHOT_WINDOW_DAYS - 1)
        loads = daily_load_grid(daily_loads, start, today).to_numpy()
        state = propagate_loads(loads)[-1]

        weekly_load = calculate_weekly_load(loads)
        monotony = monotony_percent(calculate_monotony(loads))
        marathon_shape = calculate_marathon_shape(ordered, now)
        vo2max = estimate_vo2max(ordered)
        evolution = calculate_evolution(ordered, now)

        logger.info(
            "Snapshot for %d workouts: ATL=%.1f CTL=%.1f evolution=%d",
            len(ordered),
            state.atl,
            state.ctl,
            evolution.score,
        )
        return PerformanceMetrics(
            vo2max=round(vo2max, 1),
            marathon_shape=round(marathon_shape),
            atl=round(state.atl),
            ctl=round(state.ctl),
            tsb=round(state.tsb),
            workload_ratio=round(state.workload_ratio, 2),
            last_trimp=round(last_trimp),
            monotony=round(monotony),
            weekly_load=round(weekly_load),
            evolution_score=evolution.score,
            evolution_trend=evolution.trend_pct,
        )

    def history(
        self,
        workouts: Sequence[Workout],
        profile: AthleteProfile,
        now: datetime | None = None,
    ) -> list[HistoryPoint]:
        """Daily history from the first workout through today.

        Served from the history cache when one is configured and the same
        inputs were seen on the same day.
        """
        if not workouts:
            return []

        today = self._resolve_now(now).date()
        ordered = sort_chronologically(workouts)

        def compute() -> list[HistoryPoint]:
            return generate_history(ordered, profile, today, self.stats_provider)

        if self.history_cache is None:
            return compute()
        return self.history_cache.get_or_compute(
            history_key(ordered, profile, today, self.stats_provider), compute
        )

    async def history_async(
        self,
        workouts: Sequence[Workout],
        profile: AthleteProfile,
        now: datetime | None = None,
    ) -> list[HistoryPoint]:
        """Run :meth:`history` in a worker thread."""
        return await asyncio.to_thread(self.history, workouts, profile, now)

    def race_predictions(
        self, workouts: Sequence[Workout], now: datetime | None = None
    ) -> list[RacePrediction]:
        """Riegel predictions for 5 km, 10 km, half marathon and marathon."""
        if not workouts:
            return []
        return predict_races(sort_chronologically(workouts), self._resolve_now(now))


def compute_snapshot_metrics(
    workouts: Sequence[Workout],
    profile: AthleteProfile,
    now: datetime | None = None,
) -> PerformanceMetrics:
    """Snapshot metrics with the default track statistics provider."""
    return PerformanceEngine().snapshot(workouts, profile, now)


def compute_history(
    workouts: Sequence[Workout],
    profile: AthleteProfile,
    now: datetime | None = None,
) -> list[HistoryPoint]:
    """Uncached history series with the default track statistics provider."""
    return PerformanceEngine().history(workouts, profile, now)


def compute_race_predictions(
    workouts: Sequence[Workout], now: datetime | None = None
) -> list[RacePrediction]:
    return PerformanceEngine().race_predictions(workouts, now)
