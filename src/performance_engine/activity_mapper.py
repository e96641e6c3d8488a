"""Pure functions mapping activity summary dicts to Workout records.

No I/O. Takes raw dicts shaped like Garmin Connect ``get_activities``
entries and returns Workout value objects. Entries that cannot be mapped
are skipped.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterable, Optional

from performance_engine.exceptions import InvalidWorkoutError
from performance_engine.models.workout import Workout

logger = logging.getLogger(__name__)

_RUNNING_TYPE_KEYWORD = "running"
_TIMESTAMP_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S")


def map_activity(raw: dict[str, Any], running_only: bool = True) -> Optional[Workout]:
    """Map one activity summary to a Workout.

    Expected keys:
        startTimeLocal: "YYYY-MM-DD HH:MM:SS" local start time
        distance: metres
        duration: seconds (movingDuration is not used)
        averageHR: optional bpm
        activityId: optional identifier
        activityType.typeKey: e.g. "running", "trail_running", "cycling"

    Returns:
        A Workout, or None when the entry is not a run (with
        ``running_only``) or lacks a start time, distance or duration.
    """
    if not isinstance(raw, dict):
        return None

    if running_only and not _is_running(raw.get("activityType")):
        return None

    start = _parse_start(raw.get("startTimeLocal") or raw.get("startTimeGMT"))
    distance_m = _to_float(raw.get("distance"))
    duration_s = _to_float(raw.get("duration"))
    if start is None or distance_m is None or duration_s is None:
        return None

    avg_hr = _to_float(raw.get("averageHR"))
    activity_id = raw.get("activityId")
    try:
        return Workout.from_totals(
            start=start,
            distance_km=distance_m / 1000.0,
            duration_s=duration_s,
            avg_hr=avg_hr if avg_hr and avg_hr > 0 else None,
            workout_id=str(activity_id) if activity_id is not None else None,
        )
    except InvalidWorkoutError as exc:
        logger.warning("Skipping activity %s: %s", activity_id, exc)
        return None


def map_activities(raw: Iterable[dict[str, Any]] | None, running_only: bool = True) -> list[Workout]:
    """Map a list of activity summaries, dropping the ones that do not map."""
    if not raw:
        return []
    workouts: list[Workout] = []
    skipped = 0
    for entry in raw:
        workout = map_activity(entry, running_only=running_only)
        if workout is None:
            skipped += 1
            continue
        workouts.append(workout)
    if skipped:
        logger.info("Mapped %d activities, skipped %d", len(workouts), skipped)
    return workouts


# ---------------------------------------------------------------------------
# Internal extractors, each handles None input gracefully
# ---------------------------------------------------------------------------


def _is_running(activity_type: Any) -> bool:
    if not isinstance(activity_type, dict):
        return False
    type_key = activity_type.get("typeKey")
    return isinstance(type_key, str) and _RUNNING_TYPE_KEYWORD in type_key.lower()


def _parse_start(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    text = value.split(".")[0]
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None
