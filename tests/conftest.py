"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from macrofit.config import Settings
from macrofit.containers import AppContainer
from macrofit.domain.profile import UserProfile
from macrofit.services.meal_plans import ChatCompletionClient, MealPlanService
from macrofit.services.nutrition import NutritionService


def _meal(name: str, ingredients: list[dict[str, object]]) -> dict[str, object]:
    return {
        "name": name,
        "calories": 600,
        "protein": 40,
        "fat": 15,
        "carbs": 70,
        "cookingTime": 20,
        "batchCookable": True,
        "prepQuantity": "4食分",
        "ingredients": ingredients,
        "instructions": ["切る", "焼く"],
    }


def sample_meal_plan() -> dict[str, object]:
    """Plan document shaped like a model reply."""
    return {
        "totalCost": 5000,
        "prepTime": 120,
        "nutritionSummary": {
            "dailyCalories": 2234,
            "dailyProtein": 168,
            "dailyFat": 62,
            "dailyCarbs": 251,
        },
        "mealPatterns": {
            "breakfast": _meal(
                "トーストと卵",
                [
                    {"name": "食パン", "amount": 114, "unit": "g"},
                    {"name": "卵", "amount": 2, "unit": "個"},
                    {"name": "バター", "amount": 10, "unit": "g"},
                ],
            ),
            "lunch": {
                "patternA": _meal(
                    "鶏むね肉丼",
                    [
                        {"name": "白米", "amount": 330, "unit": "g"},
                        {"name": "鶏むね肉", "amount": 150, "unit": "g"},
                        {"name": "醤油", "amount": 15, "unit": "ml"},
                    ],
                ),
                "patternB": _meal(
                    "鮭定食",
                    [
                        {"name": "白米", "amount": 330, "unit": "g"},
                        {"name": "サーモン", "amount": 120, "unit": "g"},
                        {"name": "ブロッコリー", "amount": 100, "unit": "g"},
                    ],
                ),
            },
            "dinner": {
                "patternA": _meal(
                    "豚肉炒め",
                    [
                        {"name": "豚肉", "amount": 150, "unit": "g"},
                        {"name": "ほうれん草", "amount": 80, "unit": "g"},
                    ],
                ),
                "patternB": _meal(
                    "湯豆腐",
                    [
                        {"name": "豆腐", "amount": 1, "unit": "丁"},
                        {"name": "バナナ", "amount": 1, "unit": "本"},
                    ],
                ),
            },
        },
        "weeklySchedule": {
            "monday": {"lunch": "patternA", "dinner": "patternA"},
            "tuesday": {"lunch": "patternB", "dinner": "patternB"},
            "wednesday": {"lunch": "patternA", "dinner": "patternA"},
            "thursday": {"lunch": "patternB", "dinner": "patternB"},
            "friday": {"lunch": "patternA", "dinner": "patternA"},
            "saturday": {"lunch": "patternB", "dinner": "patternB"},
            "sunday": {"lunch": "patternA", "dinner": "patternA"},
        },
    }


@dataclass
class FakeChatClient(ChatCompletionClient):
    """Fake chat client returning a fixed reply and recording requests."""

    reply: str = field(
        default_factory=lambda: (
            "Here is your plan:\n```json\n"
            + json.dumps(sample_meal_plan(), ensure_ascii=False)
            + "\n```"
        )
    )
    error: Exception | None = None
    requests: list[dict[str, object]] = field(default_factory=list)

    async def complete(
        self,
        *,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> str:
        self.requests.append(
            {
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(
        azure_openai_endpoint="https://macrofit-test.openai.azure.com",
        azure_openai_api_key="azure-key",
        environment="test",
    )


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        height=170,
        weight=80,
        age=30,
        gender="male",
        body_fat_percentage=20,
        exercise_frequency=3,
        target_weight=75,
        goal_setting_method="duration",
        target_duration_weeks=12,
    )


@pytest.fixture
def chat_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def container(settings: Settings, chat_client: FakeChatClient) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        nutrition_service=NutritionService(),
        meal_plan_service=MealPlanService(client=chat_client),
        close_resources=close_resources,
    )
