"""Meal-plan records parsed from model output.

The model returns loosely structured JSON, so every field here is optional
and ``from_payload`` never raises. Unreadable ingredients are dropped,
unreadable optional values become None, and an incomplete weekly schedule
falls back to the default rotation. Callers check presence
(``has_ingredients``, ``breakfast is None``) instead of assuming the
document is complete.
"""

from typing import Any, Literal, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

PatternKey = Literal["patternA", "patternB"]

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class PlanRecord(BaseModel):
    """Base for records read from the camelCase plan document."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
        str_strip_whitespace=True,
    )

    @classmethod
    def from_payload(cls, payload: object) -> Self | None:
        """Validate a payload, returning None when it is unusable."""
        try:
            return cls.model_validate(payload)
        except ValidationError:
            return None


class MealIngredient(PlanRecord):
    """Single ingredient line of a meal pattern."""

    name: str = Field(min_length=1)
    amount: float = Field(gt=0)
    unit: str = ""
    calories: float | None = None
    protein: float | None = None
    fat: float | None = None
    carbs: float | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def _reject_bool_amount(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("amount must be a number")
        return value

    @field_validator("unit", mode="before")
    @classmethod
    def _unit_or_blank(cls, value: Any) -> Any:
        return value if isinstance(value, str) else ""

    @field_validator("calories", "protein", "fat", "carbs", mode="wrap")
    @classmethod
    def _drop_unreadable_nutrient(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> float | None:
        try:
            return handler(value)
        except ValidationError:
            return None


class MealPattern(PlanRecord):
    """One recipe that is cooked once and eaten several times a week."""

    name: str | None = None
    calories: float | None = None
    protein: float | None = None
    fat: float | None = None
    carbs: float | None = None
    cooking_time: float | None = None
    batch_cookable: bool | None = None
    prep_quantity: str | None = None
    ingredients: list[MealIngredient] | None = None
    instructions: list[str] = Field(default_factory=list)

    @property
    def has_ingredients(self) -> bool:
        return self.ingredients is not None

    @field_validator(
        "name",
        "calories",
        "protein",
        "fat",
        "carbs",
        "cooking_time",
        "batch_cookable",
        "prep_quantity",
        mode="wrap",
    )
    @classmethod
    def _drop_unreadable_value(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None

    @field_validator("ingredients", mode="before")
    @classmethod
    def _keep_readable_ingredients(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return None
        parsed = (MealIngredient.from_payload(item) for item in value)
        return [item for item in parsed if item is not None]

    @field_validator("instructions", mode="before")
    @classmethod
    def _keep_text_steps(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [step for step in value if isinstance(step, str)]


class MealPatterns(PlanRecord):
    """Breakfast plus alternating lunch and dinner patterns for one week.

    The document nests the alternates as ``lunch.patternA`` and so on; they
    are flattened into ``lunch_a``, ``lunch_b``, ``dinner_a`` and ``dinner_b``.
    """

    breakfast: MealPattern | None = None
    lunch_a: MealPattern | None = None
    lunch_b: MealPattern | None = None
    dinner_a: MealPattern | None = None
    dinner_b: MealPattern | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_alternates(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        flattened = dict(data)
        for meal in ("lunch", "dinner"):
            group = flattened.pop(meal, None)
            if isinstance(group, dict):
                flattened.setdefault(f"{meal}_a", group.get("patternA"))
                flattened.setdefault(f"{meal}_b", group.get("patternB"))
        return flattened

    @field_validator(
        "breakfast", "lunch_a", "lunch_b", "dinner_a", "dinner_b", mode="wrap"
    )
    @classmethod
    def _drop_unreadable_slot(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> MealPattern | None:
        try:
            return handler(value)
        except ValidationError:
            return None


class DaySchedule(PlanRecord):
    """Which lunch and dinner pattern is eaten on a day."""

    lunch: PatternKey
    dinner: PatternKey


def _default_day(index: int) -> DaySchedule:
    # Monday, Wednesday, Friday and Sunday use pattern A.
    key: PatternKey = "patternA" if index % 2 == 0 else "patternB"
    return DaySchedule(lunch=key, dinner=key)


class WeeklySchedule(PlanRecord):
    """Pattern rotation across the seven weekdays; every day is required."""

    monday: DaySchedule
    tuesday: DaySchedule
    wednesday: DaySchedule
    thursday: DaySchedule
    friday: DaySchedule
    saturday: DaySchedule
    sunday: DaySchedule

    @classmethod
    def default(cls) -> "WeeklySchedule":
        return cls(**{day: _default_day(i) for i, day in enumerate(WEEKDAYS)})

    @classmethod
    def from_payload(cls, payload: object) -> "WeeklySchedule":
        """Parse ``weeklySchedule``; anything incomplete falls back to the default."""
        return super().from_payload(payload) or cls.default()

    @property
    def days(self) -> dict[str, DaySchedule]:
        return {day: getattr(self, day) for day in WEEKDAYS}

    def count(self, meal: Literal["lunch", "dinner"], pattern: PatternKey) -> int:
        """Return how many days of the week eat the given pattern."""
        return sum(1 for day in self.days.values() if getattr(day, meal) == pattern)


class MealPlanDocument(PlanRecord):
    """Parsed view of a generated weekly plan."""

    patterns: MealPatterns = Field(default_factory=MealPatterns, alias="mealPatterns")
    schedule: WeeklySchedule = Field(
        default_factory=WeeklySchedule.default, alias="weeklySchedule"
    )

    @field_validator("patterns", mode="wrap")
    @classmethod
    def _empty_patterns_when_unreadable(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> MealPatterns:
        try:
            return handler(value)
        except ValidationError:
            return MealPatterns()

    @field_validator("schedule", mode="wrap")
    @classmethod
    def _default_schedule_when_unreadable(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> WeeklySchedule:
        try:
            return handler(value)
        except ValidationError:
            return WeeklySchedule.default()

    @classmethod
    def from_payload(cls, payload: object) -> "MealPlanDocument":
        return super().from_payload(payload) or cls()
