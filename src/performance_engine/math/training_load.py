"""Training load calculations: TRIMP, daily aggregation, EWMA ATL/CTL, monotony.

References:
    - Banister (1991): TRIMP formula and impulse-response load model
    - Coggan (2003): ATL/CTL/TSB performance management chart time constants
    - Foster (1998): Monotony
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from itertools import accumulate
from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from performance_engine.models.athlete_profile import AthleteProfile
from performance_engine.models.enums import (
    ATL_DECAY,
    CTL_DECAY,
    DEFAULT_THRESHOLD_SPEED_KMH,
    MONOTONY_FLAT_LOAD_VALUE,
    MONOTONY_FULL_SCALE,
    MONOTONY_WINDOW_DAYS,
    PACE_TRIMP_SCALE,
    REFERENCE_SPEED_TOP_FRACTION,
    REFERENCE_SPEED_WORKOUTS,
    THRESHOLD_SPEED_FACTOR,
    TRIMP_CAP,
    TRIMP_COEFFICIENT,
    TRIMP_EXPONENT_FEMALE,
    TRIMP_EXPONENT_MALE,
    Gender,
)
from performance_engine.models.workout import Workout
from performance_engine.track_stats import TrackStatsProvider, calculate_track_stats

logger = logging.getLogger(__name__)


def calculate_trimp(
    duration_min: float,
    avg_hr: float,
    max_hr: int,
    resting_hr: int,
    gender: Gender = Gender.MALE,
) -> float:
    """Calculate Banister TRIMP (Training Impulse) for a single session.

    TRIMP = duration × hrr × 0.64 × e^(factor × hrr)

    Args:
        duration_min: Moving duration in minutes.
        avg_hr: Average heart rate during the session.
        max_hr: Athlete's maximum heart rate.
        resting_hr: Athlete's resting heart rate.
        gender: Selects the exponential weighting (1.67 female, 1.92 male).

    Returns:
        TRIMP score clamped to [0, TRIMP_CAP].

    Reference:
        Banister (1991). Modeling elite athletic performance. In:
        Physiological Testing of Elite Athletes.
    """
    if max_hr <= resting_hr:
        return 0.0
    hrr = (avg_hr - resting_hr) / (max_hr - resting_hr)
    factor = TRIMP_EXPONENT_FEMALE if gender is Gender.FEMALE else TRIMP_EXPONENT_MALE
    trimp = duration_min * hrr * TRIMP_COEFFICIENT * math.exp(factor * hrr)
    return max(0.0, min(trimp, TRIMP_CAP))


def threshold_speed(reference_speed_kmh: float) -> float:
    """Threshold speed in km/h derived from the history reference speed."""
    if reference_speed_kmh > 0:
        return reference_speed_kmh * THRESHOLD_SPEED_FACTOR
    return DEFAULT_THRESHOLD_SPEED_KMH


def calculate_pace_trimp(
    duration_min: float, avg_speed_kmh: float, reference_speed_kmh: float
) -> float:
    """Pace-based load approximation (rTSS-like) for sessions without HR.

    load = hours × (speed / threshold)² × 100, capped at TRIMP_CAP.

    Args:
        duration_min: Moving duration in minutes.
        avg_speed_kmh: Session average speed.
        reference_speed_kmh: Top speed from recent history, or 0 if unknown.
    """
    if avg_speed_kmh <= 0:
        return 0.0
    intensity = avg_speed_kmh / threshold_speed(reference_speed_kmh)
    load = (duration_min / 60.0) * intensity**2 * PACE_TRIMP_SCALE
    return max(0.0, min(load, TRIMP_CAP))


def calculate_workout_trimp(
    workout: Workout,
    profile: AthleteProfile,
    reference_speed_kmh: float,
    stats_provider: TrackStatsProvider = calculate_track_stats,
) -> float:
    """Load of one workout: heart rate reserve when possible, pace otherwise."""
    stats = stats_provider(workout)
    if stats.avg_hr and profile.has_hr_reserve:
        return calculate_trimp(
            duration_min=stats.moving_duration_min,
            avg_hr=stats.avg_hr,
            max_hr=profile.max_hr,  # type: ignore[arg-type]
            resting_hr=profile.resting_hr,  # type: ignore[arg-type]
            gender=profile.gender_category,
        )
    logger.debug("No usable heart rate for workout %s, using pace load", workout.workout_id)
    return calculate_pace_trimp(
        stats.moving_duration_min, stats.avg_speed_kmh, reference_speed_kmh
    )


# ---------------------------------------------------------------------------
# Reference speed
# ---------------------------------------------------------------------------


def snapshot_reference_speed(
    workouts: Sequence[Workout],
    stats_provider: TrackStatsProvider = calculate_track_stats,
) -> float:
    """Mean of the top 20% average speeds among the 20 most recent workouts.

    Args:
        workouts: Workouts sorted oldest first.

    Returns:
        Reference speed in km/h, 0.0 when there is no history.
    """
    recent = workouts[-REFERENCE_SPEED_WORKOUTS:]
    if not recent:
        return 0.0
    speeds = np.sort(np.array([stats_provider(w).avg_speed_kmh for w in recent]))[::-1]
    top_n = max(1, math.ceil(len(speeds) * REFERENCE_SPEED_TOP_FRACTION))
    return float(np.mean(speeds[:top_n]))


def history_reference_speed(
    workouts: Sequence[Workout],
    stats_provider: TrackStatsProvider = calculate_track_stats,
) -> float:
    """Single fastest average speed among the first 20 workouts.

    Returns 0.0 when none is positive, so :func:`threshold_speed` applies
    the default threshold.
    """
    speeds = [stats_provider(w).avg_speed_kmh for w in workouts[:REFERENCE_SPEED_WORKOUTS]]
    return max(speeds, default=0.0)


# ---------------------------------------------------------------------------
# Daily aggregation
# ---------------------------------------------------------------------------


def aggregate_daily_loads(
    workouts: Iterable[Workout],
    profile: AthleteProfile,
    reference_speed_kmh: float,
    stats_provider: TrackStatsProvider = calculate_track_stats,
) -> dict[date, float]:
    """Sum workout TRIMP per local calendar date of the first sample."""
    daily: dict[date, float] = {}
    for workout in workouts:
        trimp = calculate_workout_trimp(workout, profile, reference_speed_kmh, stats_provider)
        day = workout.start_date
        daily[day] = daily.get(day, 0.0) + trimp
    return daily


def daily_load_grid(daily_loads: dict[date, float], start: date, end: date) -> pd.Series:
    """Gap-free daily load series from *start* to *end* inclusive.

    Days without an entry carry zero load. Returns an empty series when
    *start* is after *end*.
    """
    index = pd.date_range(start=start, end=end, freq="D")
    series = pd.Series(
        {pd.Timestamp(day): load for day, load in daily_loads.items()}, dtype=np.float64
    )
    return series.reindex(index, fill_value=0.0)


# ---------------------------------------------------------------------------
# EWMA propagation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoadState:
    """Acute and chronic load as of one day.

    Each call to ``advance`` applies exactly one day of decay, so a series
    must be fed every calendar day in order, zero-load days included.
    """

    atl: float = 0.0
    ctl: float = 0.0

    def advance(self, load: float) -> "LoadState":
        return LoadState(
            atl=load * (1 - ATL_DECAY) + self.atl * ATL_DECAY,
            ctl=load * (1 - CTL_DECAY) + self.ctl * CTL_DECAY,
        )

    @property
    def tsb(self) -> float:
        """Training stress balance: CTL - ATL."""
        return self.ctl - self.atl

    @property
    def workload_ratio(self) -> float:
        """ATL / CTL, or 0.0 when chronic load is zero."""
        if self.ctl <= 0:
            return 0.0
        return self.atl / self.ctl


def propagate_loads(
    daily_loads: Iterable[float], initial: LoadState | None = None
) -> list[LoadState]:
    """Fold a chronological, gap-free daily load sequence into load states.

    Returns one state per input day (the initial state is not included).
    """
    states = accumulate(
        daily_loads,
        lambda state, load: state.advance(float(load)),
        initial=initial or LoadState(),
    )
    next(states)
    return list(states)


# ---------------------------------------------------------------------------
# Derived metrics
# ---------------------------------------------------------------------------


def calculate_weekly_load(daily_loads: Sequence[float]) -> float:
    """Sum of the most recent 7 daily loads."""
    return float(np.sum(np.asarray(daily_loads[-MONOTONY_WINDOW_DAYS:], dtype=np.float64)))


def calculate_monotony(daily_loads: Sequence[float]) -> float:
    """Calculate raw training monotony over the most recent 7 days.

    Monotony = mean(daily_load) / std(daily_load), population std.
    A perfectly flat non-zero week scores MONOTONY_FLAT_LOAD_VALUE; an empty
    week scores 0.

    Reference:
        Foster (1998). Monitoring training in athletes with reference to
        overtraining syndrome. Med Sci Sports Exerc 30(7):1164-1168.
    """
    recent = np.asarray(daily_loads[-MONOTONY_WINDOW_DAYS:], dtype=np.float64)
    if recent.size == 0:
        return 0.0
    # Mean over the full week: missing days count as rest.
    mean = float(np.sum(recent)) / MONOTONY_WINDOW_DAYS
    padded = np.pad(recent, (MONOTONY_WINDOW_DAYS - recent.size, 0))
    std = float(np.std(padded, ddof=0))
    if std > 1e-9:
        return mean / std
    return MONOTONY_FLAT_LOAD_VALUE if mean > 0 else 0.0


def monotony_percent(raw_monotony: float) -> float:
    """Map raw monotony onto 0-100 % (3.0 and above reads as 100 %)."""
    return min(100.0, raw_monotony / MONOTONY_FULL_SCALE * 100.0)
