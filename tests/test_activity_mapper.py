"""Tests for activity summary -> Workout mapping."""

from __future__ import annotations

import logging
from datetime import datetime

import pytest

from performance_engine.activity_mapper import map_activities, map_activity


def _activity(**overrides) -> dict:
    raw = {
        "activityId": 1234567,
        "startTimeLocal": "2026-10-12 07:15:00",
        "distance": 10000.0,
        "duration": 2700.0,
        "averageHR": 160.0,
        "activityType": {"typeKey": "running"},
    }
    raw.update(overrides)
    return raw


class TestMapActivity:
    def test_maps_running_activity(self) -> None:
        workout = map_activity(_activity())
        assert workout is not None
        assert workout.start_time == datetime(2026, 10, 12, 7, 15)
        assert workout.distance_km == pytest.approx(10.0)
        assert workout.duration_ms == 2_700_000
        assert workout.avg_hr == 160.0
        assert workout.workout_id == "1234567"

    def test_trail_running_counts(self) -> None:
        assert map_activity(_activity(activityType={"typeKey": "trail_running"})) is not None

    def test_skips_other_sports(self) -> None:
        assert map_activity(_activity(activityType={"typeKey": "cycling"})) is None

    def test_other_sports_when_not_filtering(self) -> None:
        assert map_activity(_activity(activityType={"typeKey": "cycling"}), running_only=False) is not None

    def test_iso_timestamp_with_fraction(self) -> None:
        workout = map_activity(_activity(startTimeLocal="2026-10-12T07:15:00.0"))
        assert workout is not None
        assert workout.start_time == datetime(2026, 10, 12, 7, 15)

    def test_missing_hr_is_none(self) -> None:
        workout = map_activity(_activity(averageHR=None))
        assert workout is not None
        assert workout.avg_hr is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"startTimeLocal": None},
            {"startTimeLocal": "yesterday"},
            {"distance": None},
            {"duration": "n/a"},
        ],
    )
    def test_incomplete_entries_skipped(self, overrides: dict) -> None:
        assert map_activity(_activity(**overrides)) is None

    def test_negative_totals_skipped_with_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="performance_engine.activity_mapper"):
            assert map_activity(_activity(distance=-50.0)) is None
        assert "Skipping activity" in caplog.text

    def test_non_dict(self) -> None:
        assert map_activity("not an activity") is None  # type: ignore[arg-type]


class TestMapActivities:
    def test_filters_and_keeps_order(self) -> None:
        raw = [
            _activity(activityId=1),
            _activity(activityId=2, activityType={"typeKey": "swimming"}),
            _activity(activityId=3, startTimeLocal="2026-10-13 07:00:00"),
        ]
        workouts = map_activities(raw)
        assert [w.workout_id for w in workouts] == ["1", "3"]

    def test_none_input(self) -> None:
        assert map_activities(None) == []
