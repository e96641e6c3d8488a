"""Athlete profile: the few physiological inputs the engine consumes."""

from __future__ import annotations

from dataclasses import dataclass

from performance_engine.exceptions import InvalidProfileError
from performance_engine.models.enums import Gender


@dataclass(frozen=True)
class AthleteProfile:
    """Immutable athlete profile.

    Every field is optional. Fallbacks when a field is missing:

    - ``max_hr`` or ``resting_hr`` missing (or ``max_hr <= resting_hr``):
      TRIMP uses the pace-based approximation instead of heart rate reserve.
    - ``gender`` missing or not female: the male Banister weighting (1.92)
      is used.
    """

    max_hr: int | None = None
    resting_hr: int | None = None
    gender: str | None = None  # "female" / "F" selects the female weighting

    def __post_init__(self) -> None:
        for name in ("max_hr", "resting_hr"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise InvalidProfileError(f"{name} must be positive, got {value}")

    @property
    def gender_category(self) -> Gender:
        if self.gender and self.gender.strip().lower() in ("female", "f"):
            return Gender.FEMALE
        return Gender.MALE

    @property
    def has_hr_reserve(self) -> bool:
        """True when both heart rates are known and span a positive reserve."""
        return (
            self.max_hr is not None
            and self.resting_hr is not None
            and self.max_hr > self.resting_hr
        )
