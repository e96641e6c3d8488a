"""Explicit memo for history series, owned by whoever constructs it.

History generation is linear in the number of days since the first workout,
so chart views reuse results while the inputs are unchanged. Keys are the
full input values (stats provider, workouts, profile, as-of date); a changed
workout list can never hit an entry computed for a different one.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from datetime import date
from typing import Callable, Hashable, Sequence

from performance_engine import config
from performance_engine.models.athlete_profile import AthleteProfile
from performance_engine.models.metrics import HistoryPoint
from performance_engine.models.workout import Workout
from performance_engine.track_stats import TrackStatsProvider, calculate_track_stats

logger = logging.getLogger(__name__)

HistoryKey = tuple[Hashable, ...]


def history_key(
    workouts: Sequence[Workout],
    profile: AthleteProfile,
    as_of: date,
    stats_provider: TrackStatsProvider = calculate_track_stats,
) -> HistoryKey:
    """Cache key for a history request; workout order is significant.

    The stats provider is part of the key so engines with different
    providers can share one cache.
    """
    return (stats_provider, tuple(workouts), profile, as_of)


class HistoryCache:
    """Thread-safe bounded LRU of computed history series."""

    def __init__(self, maxsize: int | None = None) -> None:
        self.maxsize = config.HISTORY_CACHE_SIZE if maxsize is None else maxsize
        self._entries: OrderedDict[HistoryKey, tuple[HistoryPoint, ...]] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_or_compute(
        self, key: HistoryKey, compute: Callable[[], Sequence[HistoryPoint]]
    ) -> list[HistoryPoint]:
        """Return the cached series for *key*, computing it on a miss.

        The computation runs outside the lock; concurrent misses on the same
        key may both compute, and the results are identical.
        """
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                logger.debug("History cache hit (%d points)", len(cached))
                return list(cached)
            self.misses += 1

        points = tuple(compute())
        if self.maxsize <= 0:
            return list(points)

        with self._lock:
            self._entries[key] = points
            self._entries.move_to_end(key)
            while len(self._entries) > self.maxsize:
                self._entries.popitem(last=False)
        logger.debug("History cache miss, stored %d points", len(points))
        return list(points)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
