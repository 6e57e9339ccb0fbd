"""Daily calorie targets, macro grams and per-meal distribution."""

from macrofit.domain.nutrition import MealCalorieDetail, NutritionTargets
from macrofit.domain.profile import UserProfile
from macrofit.services.energy import round_half_up, tdee
from macrofit.services.goals import KCAL_PER_KG, calories_from_duration

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_FAT = 9
KCAL_PER_GRAM_CARBS = 4

LARGE_CHANGE_KG = 10
FAST_RATE_KG_PER_WEEK = 0.5
SLOW_RATE_KG_PER_WEEK = 0.3

_MEAL_SHARES: dict[int, tuple[float, ...]] = {
    3: (0.25, 0.35, 0.40),
    4: (0.20, 0.30, 0.15, 0.35),
    5: (0.20, 0.10, 0.25, 0.15, 0.30),
}
_MEAL_NAMES: dict[int, tuple[str, ...]] = {
    3: ("Breakfast", "Lunch", "Dinner"),
    4: ("Breakfast", "Lunch", "Snack", "Dinner"),
    5: ("Breakfast", "Morning snack", "Lunch", "Afternoon snack", "Dinner"),
}


def weight_change_rate(current_weight: float, target_weight: float) -> float:
    """Default kg/week pace, signed toward the target."""
    difference = target_weight - current_weight
    rate = (
        FAST_RATE_KG_PER_WEEK
        if abs(difference) > LARGE_CHANGE_KG
        else SLOW_RATE_KG_PER_WEEK
    )
    return rate if difference > 0 else -rate


def target_calories(profile: UserProfile) -> int:
    """Daily calorie target for the profile's goal setting method."""
    method = profile.effective_goal_method
    if method == "duration" and profile.target_duration_weeks is not None:
        return calories_from_duration(profile, profile.target_duration_weeks)
    if method == "calories" and profile.target_daily_calories is not None:
        return profile.target_daily_calories

    rate = weight_change_rate(profile.weight, profile.target_weight)
    return round_half_up(tdee(profile) + rate * KCAL_PER_KG / 7)


def macro_targets(profile: UserProfile) -> NutritionTargets:
    """Split the daily calorie target into protein, fat and carbohydrate grams."""
    calories = target_calories(profile)
    split = profile.resolved_macro_split
    return NutritionTargets.from_daily(
        calories=calories,
        protein=round_half_up(calories * split.protein / 100 / KCAL_PER_GRAM_PROTEIN),
        fat=round_half_up(calories * split.fat / 100 / KCAL_PER_GRAM_FAT),
        carbs=round_half_up(calories * split.carbs / 100 / KCAL_PER_GRAM_CARBS),
    )


def distribute_calories_by_meals(
    total_calories: int, meals_per_day: int = 3
) -> list[int]:
    """Split daily calories across meals; the parts always sum to the total."""
    if meals_per_day < 1:
        raise ValueError("meals_per_day must be at least 1")
    shares = _MEAL_SHARES.get(meals_per_day)
    if shares is None:
        per_meal = round_half_up(total_calories / meals_per_day)
        distribution = [per_meal] * meals_per_day
    else:
        distribution = [round_half_up(total_calories * share) for share in shares]

    distribution[-1] += total_calories - sum(distribution)
    return distribution


def meal_calorie_details(
    total_calories: int, meals_per_day: int = 3
) -> list[MealCalorieDetail]:
    """Name each meal and report its calories and share of the day."""
    distribution = distribute_calories_by_meals(total_calories, meals_per_day)
    names = _MEAL_NAMES.get(meals_per_day) or tuple(
        f"Meal {index + 1}" for index in range(meals_per_day)
    )
    return [
        MealCalorieDetail(
            name=name,
            calories=calories,
            percentage=(
                round_half_up(calories / total_calories * 100) if total_calories else 0
            ),
        )
        for name, calories in zip(names, distribution, strict=True)
    ]
