"""Meal-plan generation through a chat model and shopping list synthesis."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Protocol

from macrofit.domain.meal_plans import MealPlanDocument
from macrofit.domain.nutrition import NutritionTargets
from macrofit.domain.profile import UserProfile
from macrofit.domain.shopping import ShoppingList
from macrofit.services.macros import meal_calorie_details
from macrofit.services.shopping import build_shopping_list

SHAKE_CALORIES = 120
SHAKE_PROTEIN_G = 24
GENERATION_MEALS_PER_DAY = 3

PARSE_ERROR_MESSAGE = "The meal plan response could not be read. Please try again."

_FENCED_JSON = re.compile(r"```json\s*([\s\S]*?)\s*```")

_logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = """You are a sports nutrition expert. Build an efficient weekly meal plan.

Pattern rules:
- Breakfast: one fixed menu eaten every day
- Lunch and dinner: two patterns each (A/B) for batch cooking
- Schedule: Monday, Wednesday, Friday, Sunday use A; Tuesday, Thursday, Saturday use B

Requirements:
1. Keep each meal within 2% of its calorie target
2. Prefer the user's protein sources and exclude every allergen
3. Write ingredient names in Japanese
4. Give rice as cooked weight in grams

Ingredient format:
[{"name":"食材名","amount":0,"unit":"g","calories":0,"protein":0,"fat":0,"carbs":0}]

Reply with JSON only, shaped as:
{
  "totalCost": 0,
  "prepTime": 0,
  "nutritionSummary": {"dailyCalories":0,"dailyProtein":0,"dailyFat":0,"dailyCarbs":0},
  "mealPatterns": {
    "breakfast": {MEAL},
    "lunch": {"patternA": {MEAL}, "patternB": {MEAL}},
    "dinner": {"patternA": {MEAL}, "patternB": {MEAL}}
  },
  "weeklySchedule": {"monday":{"lunch":"patternA","dinner":"patternA"}, ...}
}
where MEAL is {"name","calories","protein","fat","carbs","cookingTime",
"batchCookable","prepQuantity","ingredients","instructions"}."""


class MealPlanParseError(RuntimeError):
    """Raised when model output does not contain a readable meal plan."""


class ChatCompletionClient(Protocol):
    """Interface for chat-completion models."""

    async def complete(
        self,
        *,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Return the text of the first completion choice."""


@dataclass(frozen=True)
class GeneratedMealPlan:
    """Raw plan document from the model and the list derived from it."""

    meal_plan: dict[str, object]
    shopping_list: ShoppingList
    meal_targets: NutritionTargets


def adjust_for_protein_intake(
    targets: NutritionTargets, protein_intake_frequency: int
) -> NutritionTargets:
    """Remove the calories and protein covered by daily protein shakes."""
    return NutritionTargets.from_daily(
        calories=targets.daily_calories - protein_intake_frequency * SHAKE_CALORIES,
        protein=targets.daily_protein - protein_intake_frequency * SHAKE_PROTEIN_G,
        fat=targets.daily_fat,
        carbs=targets.daily_carbs,
    )


def extract_json_document(text: str) -> dict[str, object]:
    """Pull the JSON object out of a free-text model reply."""
    match = _FENCED_JSON.search(text)
    if match:
        candidate = match.group(1)
    else:
        first = text.find("{")
        last = text.rfind("}")
        if first == -1 or last <= first:
            raise MealPlanParseError(PARSE_ERROR_MESSAGE)
        candidate = text[first : last + 1]
    try:
        document = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise MealPlanParseError(PARSE_ERROR_MESSAGE) from exc
    if not isinstance(document, dict):
        raise MealPlanParseError(PARSE_ERROR_MESSAGE)
    return document


def build_user_prompt(profile: UserProfile, meal_targets: NutritionTargets) -> str:
    """Describe the user and the per-meal targets for the model."""
    details = meal_calorie_details(
        meal_targets.daily_calories, GENERATION_MEALS_PER_DAY
    )
    per_meal = "\n".join(
        f"{detail.name}: {detail.calories}kcal ({detail.percentage}%)"
        for detail in details
    )
    shakes = profile.protein_intake_frequency
    lines = [
        "Profile:",
        (
            f"height {profile.height:g}cm, weight {profile.weight:g} -> "
            f"{profile.target_weight:g}kg, {profile.gender}, "
            f"exercise {profile.exercise_frequency}x/week"
        ),
        f"Breakfast staple: {profile.breakfast_staple}",
        f"Protein shakes per day: {shakes}",
        "",
        (
            "Targets for meals only (shakes provide "
            f"{shakes * SHAKE_CALORIES}kcal and {shakes * SHAKE_PROTEIN_G}g protein "
            "separately):"
        ),
        (
            f"calories {meal_targets.daily_calories}kcal, "
            f"protein {meal_targets.daily_protein}g, "
            f"fat {meal_targets.daily_fat}g, carbs {meal_targets.daily_carbs}g"
        ),
        "",
        "Per-meal targets:",
        per_meal,
        "",
        f"Protein sources: {', '.join(profile.protein_sources) or 'any'}",
        f"Exclude allergens: {', '.join(profile.allergies) or 'none'}",
    ]
    return "\n".join(lines)


@dataclass
class MealPlanService:
    """Service that asks the model for a plan and derives the shopping list."""

    client: ChatCompletionClient
    temperature: float = 0.1
    max_tokens: int = 3000

    async def generate(
        self, profile: UserProfile, targets: NutritionTargets
    ) -> GeneratedMealPlan:
        """Generate a weekly plan for the profile and its shopping list."""
        frequency = profile.protein_intake_frequency
        meal_targets = adjust_for_protein_intake(targets, frequency)
        messages = [
            {"role": "system", "content": _SYSTEM_PROMPT},
            {"role": "user", "content": build_user_prompt(profile, meal_targets)},
        ]
        reply = await self.client.complete(
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        if not reply or not reply.strip():
            raise MealPlanParseError(PARSE_ERROR_MESSAGE)

        try:
            document = extract_json_document(reply)
        except MealPlanParseError:
            _logger.warning("Meal plan reply was not JSON: %s", reply[:200])
            raise
        _logger.info("Meal plan generated: keys=%s", sorted(document))
        return GeneratedMealPlan(
            meal_plan=document,
            shopping_list=self.shopping_list_from_document(document, frequency),
            meal_targets=meal_targets,
        )

    def shopping_list_from_document(
        self, document: object, protein_intake_frequency: int = 0
    ) -> ShoppingList:
        """Build the weekly shopping list for an already generated plan."""
        parsed = MealPlanDocument.from_payload(document)
        return build_shopping_list(
            parsed.patterns,
            schedule=parsed.schedule,
            protein_intake_frequency=protein_intake_frequency,
        )
