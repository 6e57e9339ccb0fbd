"""Week-by-week weight projection."""

import math
from datetime import date, timedelta

from macrofit.domain.nutrition import WeightProjection, WeightProjectionPoint
from macrofit.domain.profile import UserProfile
from macrofit.services.energy import round_half_up, tdee
from macrofit.services.goals import (
    KCAL_PER_KG,
    MAX_GOAL_WEEKS,
    DurationUndefinedError,
    duration_from_calories,
)
from macrofit.services.macros import target_calories

DEFAULT_HORIZON_WEEKS = 12


def project_weight(
    profile: UserProfile,
    start: date | None = None,
    default_weeks: int = DEFAULT_HORIZON_WEEKS,
) -> WeightProjection:
    """Project weekly weight from the calorie balance of the current targets.

    In automatic mode the sequence stops at the first week that reaches the
    target. In duration and calories modes the horizon is the configured one
    and its last week is reported as the achievement date, even when the
    calorie balance does not actually reach the target by then.
    """
    start_date = start or date.today()
    weekly_change = (target_calories(profile) - tdee(profile)) * 7 / KCAL_PER_KG
    difference = profile.weight_difference
    theoretical_weeks = (
        abs(difference / weekly_change) if weekly_change != 0 else default_weeks
    )

    method = profile.effective_goal_method
    if method == "duration" and profile.target_duration_weeks is not None:
        max_weeks = profile.target_duration_weeks
    elif method == "calories" and profile.target_daily_calories is not None:
        try:
            weeks = duration_from_calories(profile, profile.target_daily_calories)
        except DurationUndefinedError:
            max_weeks = math.ceil(theoretical_weeks)
        else:
            max_weeks = min(math.ceil(weeks), MAX_GOAL_WEEKS)
    else:
        max_weeks = math.ceil(theoretical_weeks)
    max_weeks = max(max_weeks, 0)

    projections: list[WeightProjectionPoint] = []
    achievement_week: int | None = None
    for week in range(max_weeks + 1):
        projected = profile.weight + weekly_change * week
        projections.append(
            WeightProjectionPoint(
                week_number=week,
                date=start_date + timedelta(days=week * 7),
                projected_weight=round_half_up(projected * 10) / 10,
            )
        )
        if method == "none" and _reached(
            projected, profile.target_weight, weekly_change
        ):
            achievement_week = week
            break

    if achievement_week is None:
        achievement_date = projections[-1].date
    else:
        achievement_date = projections[achievement_week].date

    return WeightProjection(
        target_achievement_date=achievement_date,
        weekly_weight_change=weekly_change,
        projections=projections,
    )


def _reached(projected: float, target: float, weekly_change: float) -> bool:
    if weekly_change > 0:
        return projected >= target
    if weekly_change < 0:
        return projected <= target
    return False
