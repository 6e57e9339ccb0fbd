"""Nutrition domain models."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class NutritionTargets:
    """Daily and weekly calorie and macro targets."""

    daily_calories: int
    daily_protein: int
    daily_fat: int
    daily_carbs: int
    weekly_calories: int
    weekly_protein: int
    weekly_fat: int
    weekly_carbs: int

    @classmethod
    def from_daily(
        cls, calories: int, protein: int, fat: int, carbs: int
    ) -> "NutritionTargets":
        """Build targets from daily values, deriving weekly totals."""
        return cls(
            daily_calories=calories,
            daily_protein=protein,
            daily_fat=fat,
            daily_carbs=carbs,
            weekly_calories=calories * 7,
            weekly_protein=protein * 7,
            weekly_fat=fat * 7,
            weekly_carbs=carbs * 7,
        )


@dataclass(frozen=True)
class MealCalorieDetail:
    """Calorie target for a single meal of the day."""

    name: str
    calories: int
    percentage: int


@dataclass(frozen=True)
class GoalValidation:
    """Advisory findings about a weight goal."""

    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class WeightProjectionPoint:
    """Projected weight at the end of a given week."""

    week_number: int
    date: date
    projected_weight: float


@dataclass(frozen=True)
class WeightProjection:
    """Week-by-week weight trajectory toward the target."""

    target_achievement_date: date
    weekly_weight_change: float
    projections: list[WeightProjectionPoint]


@dataclass(frozen=True)
class NutritionReport:
    """Everything computed for a profile in one pass."""

    bmr: float
    tdee: int
    targets: NutritionTargets
    meal_calories: list[MealCalorieDetail]
    projection: WeightProjection
    validation: GoalValidation
