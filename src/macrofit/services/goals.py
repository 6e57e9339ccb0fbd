"""Conversions between goal duration and daily calories, plus goal checks."""

from macrofit.domain.nutrition import GoalValidation
from macrofit.domain.profile import UserProfile
from macrofit.services.energy import bmr, round_half_up, tdee

KCAL_PER_KG = 7700
MAX_GOAL_WEEKS = 104
MIN_GOAL_WEEKS = 1
MIN_AGE = 10
MAX_AGE = 100
MAX_GAIN_CALORIES = 8000
MIN_BMR_RATIO = 0.8
MAX_TDEE_RATIO = 1.5
SAME_WEIGHT_TOLERANCE_KG = 0.1

IDENTICAL_WEIGHT_ERROR = "Target weight is the same as the current weight"
AGE_RANGE_ERROR = f"Age must be between {MIN_AGE} and {MAX_AGE}"


class DurationUndefinedError(ValueError):
    """Raised when a calorie target implies no weight change at all."""


def calories_from_duration(profile: UserProfile, weeks: float) -> int:
    """Daily calorie intake that reaches the target weight in ``weeks``."""
    total_adjustment = profile.weight_difference * KCAL_PER_KG
    daily_adjustment = total_adjustment / (weeks * 7)
    return round_half_up(tdee(profile) + daily_adjustment)


def duration_from_calories(profile: UserProfile, daily_calories: float) -> float:
    """Weeks needed to reach the target weight eating ``daily_calories``.

    The result is negative when the intake moves weight away from the target.
    """
    weekly_adjustment = (daily_calories - tdee(profile)) * 7
    if weekly_adjustment == 0:
        raise DurationUndefinedError(
            "Daily calories equal maintenance, so the goal is never reached"
        )
    weeks = profile.weight_difference * KCAL_PER_KG / weekly_adjustment
    return round_half_up(weeks * 10) / 10


def validate_goal(profile: UserProfile) -> GoalValidation:
    """Return advisory findings about how realistic the goal is."""
    errors: list[str] = []
    maintenance = tdee(profile)
    minimum = bmr(profile) * MIN_BMR_RATIO
    is_gain = profile.target_weight > profile.weight

    if abs(profile.weight_difference) < SAME_WEIGHT_TOLERANCE_KG:
        errors.append(IDENTICAL_WEIGHT_ERROR)

    if profile.age < MIN_AGE or profile.age > MAX_AGE:
        errors.append(AGE_RANGE_ERROR)

    method = profile.effective_goal_method
    if method == "duration" and profile.target_duration_weeks is not None:
        weeks = profile.target_duration_weeks
        calories = calories_from_duration(profile, weeks)
        if calories < minimum:
            errors.append(
                "Target duration is too short: it needs intake below 80% of BMR "
                f"({round_half_up(minimum)} kcal)"
            )
        errors.extend(_upper_limit_errors(calories, maintenance, is_gain, "duration"))
        if weeks < MIN_GOAL_WEEKS:
            errors.append("Target duration must be at least 1 week")
        if weeks > MAX_GOAL_WEEKS:
            errors.append("Target duration must be within 2 years")

    if method == "calories" and profile.target_daily_calories is not None:
        calories = profile.target_daily_calories
        if calories < minimum:
            errors.append(
                "Daily calories are below 80% of BMR "
                f"({round_half_up(minimum)} kcal), which can harm your health"
            )
        errors.extend(_upper_limit_errors(calories, maintenance, is_gain, "calories"))
        try:
            weeks = duration_from_calories(profile, calories)
        except DurationUndefinedError:
            errors.append("Cannot derive a duration from the daily calorie target")
        else:
            if weeks < 0:
                errors.append(
                    "This calorie target moves weight away from the target weight"
                )
            if weeks > MAX_GOAL_WEEKS:
                errors.append(
                    "This calorie target takes more than 2 years to reach the goal"
                )

    return GoalValidation(errors=errors)


def _upper_limit_errors(
    calories: float, maintenance: int, is_gain: bool, source: str
) -> list[str]:
    limit = MAX_GAIN_CALORIES if is_gain else maintenance * MAX_TDEE_RATIO
    if calories <= limit:
        return []
    subject = (
        "Target duration is too short: it needs intake"
        if source == "duration"
        else "Daily calories are"
    )
    if is_gain:
        return [f"{subject} above {MAX_GAIN_CALORIES} kcal per day"]
    return [
        f"{subject} above 150% of maintenance "
        f"({round_half_up(maintenance * MAX_TDEE_RATIO)} kcal)"
    ]
