"""Tests for the history cache."""

from __future__ import annotations

from datetime import date

from performance_engine.cache import HistoryCache, history_key
from performance_engine.models.athlete_profile import AthleteProfile
from performance_engine.models.metrics import HistoryPoint
from performance_engine.track_stats import calculate_track_stats

_POINT = HistoryPoint(date=date(2026, 1, 1), ctl=1.0, atl=2.0, evolution_score=0.0, vo2max=0.0)


class _Counter:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> list[HistoryPoint]:
        self.calls += 1
        return [_POINT]


class TestHistoryCache:
    def test_hit_avoids_recompute(self) -> None:
        cache = HistoryCache(maxsize=4)
        compute = _Counter()
        key = ("a",)
        assert cache.get_or_compute(key, compute) == [_POINT]
        assert cache.get_or_compute(key, compute) == [_POINT]
        assert compute.calls == 1
        assert (cache.hits, cache.misses) == (1, 1)

    def test_returned_list_is_a_copy(self) -> None:
        cache = HistoryCache(maxsize=4)
        first = cache.get_or_compute(("a",), _Counter())
        first.clear()
        assert cache.get_or_compute(("a",), _Counter()) == [_POINT]

    def test_evicts_least_recently_used(self) -> None:
        cache = HistoryCache(maxsize=2)
        compute = _Counter()
        cache.get_or_compute(("a",), compute)
        cache.get_or_compute(("b",), compute)
        cache.get_or_compute(("a",), compute)  # refresh a
        cache.get_or_compute(("c",), compute)  # evicts b
        assert len(cache) == 2
        cache.get_or_compute(("b",), compute)
        assert compute.calls == 4

    def test_zero_size_disables_storage(self) -> None:
        cache = HistoryCache(maxsize=0)
        compute = _Counter()
        cache.get_or_compute(("a",), compute)
        cache.get_or_compute(("a",), compute)
        assert compute.calls == 2
        assert len(cache) == 0

    def test_clear(self) -> None:
        cache = HistoryCache(maxsize=2)
        cache.get_or_compute(("a",), _Counter())
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == 0


class TestHistoryKey:
    def test_differs_by_inputs(self, make_workout) -> None:
        run = make_workout(days_ago=1)
        profile = AthleteProfile(max_hr=185, resting_hr=50)
        key = history_key([run], profile, date(2026, 10, 19))
        assert key == history_key([run], profile, date(2026, 10, 19))
        assert key != history_key([run], profile, date(2026, 10, 20))
        assert key != history_key([run], AthleteProfile(), date(2026, 10, 19))
        assert key != history_key([run, make_workout(days_ago=2)], profile, date(2026, 10, 19))

    def test_differs_by_stats_provider(self, make_workout) -> None:
        run = make_workout(days_ago=1)
        profile = AthleteProfile(max_hr=185, resting_hr=50)
        as_of = date(2026, 10, 19)
        assert history_key([run], profile, as_of) == history_key([run], profile, as_of, calculate_track_stats)
        assert history_key([run], profile, as_of) != history_key([run], profile, as_of, lambda w: None)
