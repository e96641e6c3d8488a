"""Environment-variable-based configuration for the performance engine."""

from __future__ import annotations

import os

# IANA zone used to localize timezone-aware sample timestamps before taking
# their calendar date. Empty means the system local zone.
TIMEZONE: str = os.environ.get("PERFORMANCE_TIMEZONE", "")
HISTORY_CACHE_SIZE: int = int(os.environ.get("PERFORMANCE_HISTORY_CACHE_SIZE", "8"))
