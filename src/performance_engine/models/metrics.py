"""Result value objects: performance snapshot, history points, race predictions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PerformanceMetrics:
    """Snapshot of the athlete's training state as of one instant.

    Load fields are display-rounded; TSB is derived from the unrounded
    ATL/CTL before rounding.

    Attributes:
        vo2max: Estimated VO2max (ml/kg/min), one decimal.
        marathon_shape: Marathon readiness, 0-100 %.
        atl: Acute training load (7-day EWMA).
        ctl: Chronic training load (42-day EWMA).
        tsb: Training stress balance (CTL - ATL).
        workload_ratio: ATL / CTL, two decimals, 0 when CTL is 0.
        last_trimp: Load of the most recent workout.
        monotony: Foster monotony as 0-100 %.
        weekly_load: Sum of the last 7 daily loads.
        evolution_score: Top-average 10k-equivalent score of the last 30 days.
        evolution_trend: Percentage change against the 31-90 day baseline.
    """

    vo2max: float = 0.0
    marathon_shape: int = 0
    atl: int = 0
    ctl: int = 0
    tsb: int = 0
    workload_ratio: float = 0.0
    last_trimp: int = 0
    monotony: int = 0
    weekly_load: int = 0
    evolution_score: int = 0
    evolution_trend: float = 0.0

    @classmethod
    def empty(cls) -> "PerformanceMetrics":
        return cls()


@dataclass(frozen=True)
class HistoryPoint:
    """One day of the performance time series (charting only)."""

    date: date
    ctl: float
    atl: float
    evolution_score: float
    vo2max: float

    @property
    def tsb(self) -> float:
        return self.ctl - self.atl


@dataclass(frozen=True)
class RacePrediction:
    """Predicted result at one standard race distance."""

    distance_km: float
    label: str
    time_s: float
    pace_min_per_km: float

    @property
    def formatted_time(self) -> str:
        """'H:MM:SS' above one hour, 'MM:SS' below."""
        total = int(self.time_s)
        hours = total // 3600
        minutes = (total % 3600) // 60
        seconds = total % 60
        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def formatted_pace(self) -> str:
        """Pace as 'M:SS/km'. e.g. 4.5 -> '4:30/km'."""
        minutes = int(self.pace_min_per_km)
        seconds = round((self.pace_min_per_km - minutes) * 60)
        if seconds == 60:
            minutes += 1
            seconds = 0
        return f"{minutes}:{seconds:02d}/km"
