"""User profile submitted from the planning form."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Gender = Literal["male", "female"]
GoalSettingMethod = Literal["none", "duration", "calories"]

_SPLIT_TOLERANCE = 0.01


class MacroSplit(BaseModel):
    """Protein/fat/carbohydrate share of daily calories, in percent."""

    model_config = ConfigDict(frozen=True)

    protein: float = Field(ge=0, le=100)
    fat: float = Field(ge=0, le=100)
    carbs: float = Field(ge=0, le=100)

    @model_validator(mode="after")
    def _check_total(self) -> "MacroSplit":
        total = self.protein + self.fat + self.carbs
        if abs(total - 100) > _SPLIT_TOLERANCE:
            raise ValueError(f"macro split must sum to 100, got {total:g}")
        return self


DEFAULT_MACRO_SPLIT = MacroSplit(protein=30, fat=25, carbs=45)


class UserProfile(BaseModel):
    """Immutable snapshot of body metrics and goals."""

    model_config = ConfigDict(frozen=True)

    height: float = Field(gt=0, description="Height in cm")
    weight: float = Field(gt=0, description="Current weight in kg")
    age: int = Field(ge=0)
    gender: Gender
    body_fat_percentage: float = Field(default=20.0, ge=0, le=100)
    exercise_frequency: int = Field(default=0, ge=0, le=14)
    target_weight: float = Field(gt=0, description="Target weight in kg")
    goal_setting_method: GoalSettingMethod = "none"
    target_duration_weeks: int | None = Field(default=None, ge=1, le=104)
    target_daily_calories: int | None = Field(default=None, ge=800, le=8000)
    macro_split: MacroSplit | None = None
    meals_per_day: int = Field(default=3, ge=1, le=10)
    protein_sources: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    protein_intake_frequency: int = Field(default=0, ge=0, le=3)
    breakfast_staple: str = "食パン"

    @model_validator(mode="after")
    def _check_goal_fields(self) -> "UserProfile":
        if (
            self.target_duration_weeks is not None
            and self.target_daily_calories is not None
        ):
            raise ValueError(
                "set either target_duration_weeks or target_daily_calories, not both"
            )
        if (
            self.target_duration_weeks is not None
            and self.goal_setting_method != "duration"
        ):
            raise ValueError("target_duration_weeks needs goal_setting_method=duration")
        if (
            self.target_daily_calories is not None
            and self.goal_setting_method != "calories"
        ):
            raise ValueError("target_daily_calories needs goal_setting_method=calories")
        return self

    @property
    def weight_difference(self) -> float:
        """Signed kilograms between the target and the current weight."""
        return self.target_weight - self.weight

    @property
    def effective_goal_method(self) -> GoalSettingMethod:
        """Goal mode actually in force; a mode without its value falls back to none."""
        if (
            self.goal_setting_method == "duration"
            and self.target_duration_weeks is not None
        ):
            return "duration"
        if (
            self.goal_setting_method == "calories"
            and self.target_daily_calories is not None
        ):
            return "calories"
        return "none"

    @property
    def resolved_macro_split(self) -> MacroSplit:
        """Macro split to apply, falling back to the default 30/25/45."""
        return self.macro_split or DEFAULT_MACRO_SPLIT
