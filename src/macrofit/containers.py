"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from macrofit.adapters.openai_chat_client import (
    AzureOpenAIChatClient,
    UnconfiguredChatClient,
)
from macrofit.config import Settings, openai_config_problem
from macrofit.services.meal_plans import ChatCompletionClient, MealPlanService
from macrofit.services.nutrition import NutritionService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    nutrition_service: NutritionService
    meal_plan_service: MealPlanService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    problem = openai_config_problem(resolved_settings)
    azure_client: AzureOpenAIChatClient | None = None
    chat_client: ChatCompletionClient
    if problem:
        _logger.warning("Meal plan generation unavailable: %s", problem)
        chat_client = UnconfiguredChatClient(reason=problem)
    else:
        azure_client = AzureOpenAIChatClient.create(resolved_settings)
        chat_client = azure_client

    meal_plan_service = MealPlanService(
        client=chat_client,
        temperature=resolved_settings.meal_plan_temperature,
        max_tokens=resolved_settings.meal_plan_max_tokens,
    )
    nutrition_service = NutritionService(
        debug=resolved_settings.environment == "local"
    )

    async def close_resources() -> None:
        if azure_client is not None:
            await azure_client.close()

    return AppContainer(
        settings=resolved_settings,
        nutrition_service=nutrition_service,
        meal_plan_service=meal_plan_service,
        close_resources=close_resources,
    )
