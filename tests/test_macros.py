"""Tests for the macro allocator."""

import pytest

from macrofit.domain.profile import MacroSplit
from macrofit.services.macros import (
    distribute_calories_by_meals,
    macro_targets,
    meal_calorie_details,
    target_calories,
    weight_change_rate,
)


def test_weight_change_rate() -> None:
    assert weight_change_rate(80, 75) == -0.3
    assert weight_change_rate(80, 95) == 0.5
    assert weight_change_rate(100, 80) == -0.5
    assert weight_change_rate(60, 65) == 0.3


def test_target_calories_duration_mode(profile) -> None:
    assert target_calories(profile) == 2204


def test_target_calories_calories_mode(profile) -> None:
    calories = profile.model_copy(
        update={
            "goal_setting_method": "calories",
            "target_duration_weeks": None,
            "target_daily_calories": 2000,
        }
    )

    assert target_calories(calories) == 2000


def test_target_calories_auto_mode(profile) -> None:
    auto = profile.model_copy(
        update={"goal_setting_method": "none", "target_duration_weeks": None}
    )
    bulk = auto.model_copy(update={"target_weight": 95})

    assert target_calories(auto) == 2332
    assert target_calories(bulk) == 3212


def test_mode_without_value_falls_back_to_auto(profile) -> None:
    missing = profile.model_copy(update={"target_duration_weeks": None})

    assert missing.effective_goal_method == "none"
    assert target_calories(missing) == 2332


def test_macro_targets_default_split(profile) -> None:
    targets = macro_targets(profile)

    assert targets.daily_calories == 2204
    assert targets.daily_protein == 165
    assert targets.daily_fat == 61
    assert targets.daily_carbs == 248
    assert targets.weekly_calories == 2204 * 7
    assert targets.weekly_protein == 165 * 7


def test_macro_targets_custom_split(profile) -> None:
    custom = profile.model_copy(
        update={"macro_split": MacroSplit(protein=40, fat=30, carbs=30)}
    )

    targets = macro_targets(custom)

    assert (targets.daily_protein, targets.daily_fat, targets.daily_carbs) == (
        220,
        73,
        165,
    )


@pytest.mark.parametrize(
    ("meals", "expected"),
    [
        (3, [500, 700, 800]),
        (4, [400, 600, 300, 700]),
        (5, [400, 200, 500, 300, 600]),
        (6, [333, 333, 333, 333, 333, 335]),
    ],
)
def test_distribute_calories_tables(meals: int, expected: list[int]) -> None:
    assert distribute_calories_by_meals(2000, meals) == expected


@pytest.mark.parametrize("meals", [1, 2, 3, 4, 5, 6, 7, 8])
@pytest.mark.parametrize("total", [1, 999, 1501, 2204, 2233, 3217, 4001])
def test_distribute_calories_sums_exactly(total: int, meals: int) -> None:
    parts = distribute_calories_by_meals(total, meals)

    assert len(parts) == meals
    assert sum(parts) == total


def test_distribute_calories_rejects_zero_meals() -> None:
    with pytest.raises(ValueError):
        distribute_calories_by_meals(2000, 0)


def test_meal_calorie_details_names_and_percentages() -> None:
    details = meal_calorie_details(2000, 3)

    assert [d.name for d in details] == ["Breakfast", "Lunch", "Dinner"]
    assert [d.percentage for d in details] == [25, 35, 40]


def test_meal_calorie_details_generic_names() -> None:
    details = meal_calorie_details(2000, 6)

    assert details[0].name == "Meal 1"
    assert details[-1].name == "Meal 6"
    assert details[-1].calories == 335
