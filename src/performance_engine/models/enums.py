"""Enumerations and model constants for the performance engine.

All thresholds and constants cite their published research source where one
exists; the rest are calibration values of the scoring models.
"""

import math
from enum import Enum


class Gender(str, Enum):
    """Gender category used to pick the Banister TRIMP weighting."""

    FEMALE = "female"
    MALE = "male"


# ---------------------------------------------------------------------------
# TRIMP: Banister (1991)
# ---------------------------------------------------------------------------
TRIMP_COEFFICIENT = 0.64
TRIMP_EXPONENT_MALE = 1.92
TRIMP_EXPONENT_FEMALE = 1.67

# Pace-based fallback (rTSS-style approximation)
DEFAULT_THRESHOLD_SPEED_KMH = 12.0  # 5:00/km when no history is available
THRESHOLD_SPEED_FACTOR = 1.15  # Threshold speed relative to the history top speed
PACE_TRIMP_SCALE = 100.0
TRIMP_CAP = 400.0  # Absorbs GPS glitches producing implausible speeds

# Reference speed sampling
REFERENCE_SPEED_WORKOUTS = 20
REFERENCE_SPEED_TOP_FRACTION = 0.2

# ---------------------------------------------------------------------------
# EWMA load model: Banister impulse-response, Coggan PMC time constants
# ---------------------------------------------------------------------------
ATL_TIME_CONSTANT_DAYS = 7
CTL_TIME_CONSTANT_DAYS = 42
ATL_DECAY = math.exp(-1 / ATL_TIME_CONSTANT_DAYS)
CTL_DECAY = math.exp(-1 / CTL_TIME_CONSTANT_DAYS)

SNAPSHOT_WINDOW_DAYS = 90  # Days of EWMA warm-up ending today (inclusive)

# Monotony: Foster (1998)
MONOTONY_WINDOW_DAYS = 7
MONOTONY_FLAT_LOAD_VALUE = 4.0  # Raw monotony when every day carries the same load
MONOTONY_FULL_SCALE = 3.0  # Raw monotony mapped to 100%

# ---------------------------------------------------------------------------
# Marathon shape: long-run points decayed over a 10-week window
# ---------------------------------------------------------------------------
MARATHON_SHAPE_WINDOW_DAYS = 70
MARATHON_SHAPE_WINDOW_WEEKS = 10
LONG_RUN_MIN_DISTANCE_KM = 13.0

# (minimum distance km, points), checked top-down
LONG_RUN_POINTS = (
    (30.0, 3.0),
    (25.0, 2.2),
    (20.0, 1.5),
    (15.0, 0.8),
)
LONG_RUN_BASE_POINTS = 0.4
LONG_RUN_DECAY_PER_WEEK = 0.08
LONG_RUN_MIN_DECAY = 0.2
LONG_RUN_FULL_SCORE = 12.0
WEEKLY_VOLUME_FULL_KM = 80.0
MARATHON_SHAPE_VOLUME_WEIGHT = 0.4
MARATHON_SHAPE_LONG_RUN_WEIGHT = 0.6

# ---------------------------------------------------------------------------
# Aerobic capacity: ACSM running equation (VO2 = 3.5 + 0.2 * v)
# ---------------------------------------------------------------------------
VO2_RESTING = 3.5  # ml/kg/min
VO2_PER_M_PER_MIN = 0.2
VO2_CORRECTION_BASE = 1.05
VO2_CORRECTION_MINUTES = 300.0
VO2_CORRECTION_FLOOR = 0.8
VO2_CEILING = 85.0  # Estimates at or above this are rejected as outliers
VO2_DEFAULT = 35.0
VO2_RECENT_WORKOUTS = 15

# ---------------------------------------------------------------------------
# Riegel (1981): T2 = T1 * (D2 / D1) ^ 1.06
# ---------------------------------------------------------------------------
RIEGEL_EXPONENT = 1.06
MIN_EFFORT_DISTANCE_KM = 3.0
REFERENCE_DISTANCE_KM = 10.0
RACE_PREDICTION_SCORE_SCALE = 100000.0
RACE_PREDICTION_WINDOW_DAYS = 90

# Evolution score windows
EVOLUTION_RECENT_DAYS = 30
EVOLUTION_BASELINE_DAYS = 90
EVOLUTION_TOP_FRACTION = 0.5
EVOLUTION_SCORE_SCALE = 10.0
EVOLUTION_TREND_NEW_DATA = 100.0

# History generator rolling windows
HISTORY_EVOLUTION_WINDOW_DAYS = 30
HISTORY_VO2_WINDOW_DAYS = 60

MARATHON_DISTANCE_KM = 42.195
HALF_MARATHON_DISTANCE_KM = 21.0975

# (distance km, label) in presentation order
RACE_TARGETS = (
    (5.0, "5 km"),
    (10.0, "10 km"),
    (HALF_MARATHON_DISTANCE_KM, "Half marathon"),
    (MARATHON_DISTANCE_KM, "Marathon"),
)
