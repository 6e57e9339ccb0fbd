"""Energy expenditure formulas."""

import math

from macrofit.domain.profile import UserProfile

# Upper bound of exercise sessions per week for each activity multiplier.
_ACTIVITY_LEVELS: tuple[tuple[int, float], ...] = (
    (0, 1.2),
    (2, 1.375),
    (4, 1.55),
    (6, 1.725),
)
_VERY_ACTIVE_MULTIPLIER = 1.9


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def bmr(profile: UserProfile) -> float:
    """Basal metabolic rate in kcal/day (Mifflin-St Jeor)."""
    base = 10 * profile.weight + 6.25 * profile.height - 5 * profile.age
    if profile.gender == "male":
        return base + 5
    return base - 161


def activity_multiplier(exercise_frequency: int) -> float:
    """Map weekly exercise sessions to a TDEE multiplier."""
    for max_sessions, multiplier in _ACTIVITY_LEVELS:
        if exercise_frequency <= max_sessions:
            return multiplier
    return _VERY_ACTIVE_MULTIPLIER


def tdee(profile: UserProfile) -> int:
    """Total daily energy expenditure in kcal/day."""
    return round_half_up(bmr(profile) * activity_multiplier(profile.exercise_frequency))
