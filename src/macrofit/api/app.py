"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status

from macrofit.api.models import DurationRequest, ShoppingListRequest
from macrofit.app_logging import configure_logging
from macrofit.config import openai_config_problem
from macrofit.containers import AppContainer
from macrofit.domain.nutrition import GoalValidation, NutritionReport
from macrofit.domain.profile import UserProfile
from macrofit.services.goals import (
    DurationUndefinedError,
    duration_from_calories,
    validate_goal,
)
from macrofit.services.macros import macro_targets
from macrofit.services.meal_plans import PARSE_ERROR_MESSAGE, MealPlanParseError

GENERATION_FAILED_MESSAGE = "Meal plan generation failed. Please try again later."
UNAVAILABLE_MESSAGE = "Meal plan generation is not configured."


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/nutrition")
    async def nutrition(profile: UserProfile, request: Request) -> dict[str, object]:
        """Return targets, meal split, projection and goal findings."""
        state_container: AppContainer = request.app.state.container
        report = state_container.nutrition_service.calculate(profile)
        return _format_report(report)

    @app.post("/api/goals/validate")
    async def validate(profile: UserProfile) -> dict[str, object]:
        """Return advisory findings for a goal."""
        return _format_validation(validate_goal(profile))

    @app.post("/api/goals/duration")
    async def duration(payload: DurationRequest) -> dict[str, float]:
        """Convert a daily calorie intake into weeks to reach the target."""
        try:
            weeks = duration_from_calories(payload.profile, payload.daily_calories)
        except DurationUndefinedError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        return {"weeks": weeks}

    @app.post("/api/meal-plan")
    async def meal_plan(profile: UserProfile, request: Request) -> dict[str, object]:
        """Generate a weekly meal plan and the shopping list derived from it."""
        state_container: AppContainer = request.app.state.container
        problem = openai_config_problem(state_container.settings)
        if problem:
            logger.warning("Meal plan requested without model access: %s", problem)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=UNAVAILABLE_MESSAGE,
            )
        targets = macro_targets(profile)
        try:
            generated = await state_container.meal_plan_service.generate(
                profile, targets
            )
        except MealPlanParseError as exc:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY, detail=PARSE_ERROR_MESSAGE
            ) from exc
        except Exception as exc:
            logger.exception("Meal plan generation failed")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=GENERATION_FAILED_MESSAGE,
            ) from exc
        return {
            "meal_plan": generated.meal_plan,
            "shopping_list": asdict(generated.shopping_list),
            "nutrition_targets": asdict(targets),
            "meal_targets": asdict(generated.meal_targets),
        }

    @app.post("/api/shopping-list")
    async def shopping_list(
        payload: ShoppingListRequest, request: Request
    ) -> dict[str, object]:
        """Build a shopping list from an already generated meal plan."""
        state_container: AppContainer = request.app.state.container
        result = state_container.meal_plan_service.shopping_list_from_document(
            payload.meal_plan, payload.protein_intake_frequency
        )
        return asdict(result)

    return app


def _format_validation(validation: GoalValidation) -> dict[str, object]:
    return {"is_valid": validation.is_valid, "errors": list(validation.errors)}


def _format_report(report: NutritionReport) -> dict[str, object]:
    projection = report.projection
    return {
        "bmr": report.bmr,
        "tdee": report.tdee,
        "targets": asdict(report.targets),
        "meal_calories": [asdict(detail) for detail in report.meal_calories],
        "projection": {
            "target_achievement_date": projection.target_achievement_date.isoformat(),
            "weekly_weight_change": projection.weekly_weight_change,
            "projections": [
                {
                    "week_number": point.week_number,
                    "date": point.date.isoformat(),
                    "projected_weight": point.projected_weight,
                }
                for point in projection.projections
            ],
        },
        "validation": _format_validation(report.validation),
    }
