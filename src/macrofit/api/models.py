"""Request models for the planning API."""

from pydantic import BaseModel, Field

from macrofit.domain.profile import UserProfile


class DurationRequest(BaseModel):
    """Profile plus a daily calorie intake to convert into weeks."""

    profile: UserProfile
    daily_calories: float = Field(gt=0)


class ShoppingListRequest(BaseModel):
    """Generated meal-plan document to turn into a shopping list."""

    meal_plan: dict[str, object]
    protein_intake_frequency: int = Field(default=0, ge=0, le=3)
