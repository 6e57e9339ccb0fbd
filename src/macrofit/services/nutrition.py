"""Nutrition planning service combining the calculation steps."""

import logging
from dataclasses import dataclass
from datetime import date

from macrofit.domain.nutrition import NutritionReport
from macrofit.domain.profile import UserProfile
from macrofit.services.energy import bmr, tdee
from macrofit.services.goals import validate_goal
from macrofit.services.macros import macro_targets, meal_calorie_details
from macrofit.services.projection import DEFAULT_HORIZON_WEEKS, project_weight

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Computes targets, meal split, projection and goal checks for a profile."""

    default_horizon_weeks: int = DEFAULT_HORIZON_WEEKS
    debug: bool = False

    def calculate(
        self, profile: UserProfile, today: date | None = None
    ) -> NutritionReport:
        """Run every calculation for a profile snapshot."""
        targets = macro_targets(profile)
        validation = validate_goal(profile)
        report = NutritionReport(
            bmr=bmr(profile),
            tdee=tdee(profile),
            targets=targets,
            meal_calories=meal_calorie_details(
                targets.daily_calories, profile.meals_per_day
            ),
            projection=project_weight(
                profile, start=today, default_weeks=self.default_horizon_weeks
            ),
            validation=validation,
        )
        if self.debug:
            _logger.info(
                "Nutrition targets: method=%s calories=%s protein=%s fat=%s carbs=%s",
                profile.effective_goal_method,
                targets.daily_calories,
                targets.daily_protein,
                targets.daily_fat,
                targets.daily_carbs,
            )
        if not validation.is_valid:
            _logger.info("Goal validation findings: %s", len(validation.errors))
        return report
