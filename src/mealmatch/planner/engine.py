"""End-to-end custom meal plan generation.

Runs the full pipeline: targets, catalog fetch, filtering, scoring, greedy
assembly, the variety pass and validation. The pipeline is deterministic:
the same catalog snapshot and preferences always give the same plan.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from mealmatch.catalog.providers import CatalogCriteria, MealCatalog
from mealmatch.config.settings import PlannerConfig
from mealmatch.planner.assembler import assemble_plan
from mealmatch.planner.filters import filter_meals
from mealmatch.planner.models import MealPlanResult, UserPreferences
from mealmatch.planner.scoring import score_meals
from mealmatch.planner.summary import calculate_stats, summarize_nutrition
from mealmatch.planner.targets import calculate_nutritional_targets
from mealmatch.planner.validator import validate_plan
from mealmatch.planner.variety import enforce_variety

logger = logging.getLogger(__name__)


class MealPlanner:
    """Generates meal plans from an injected catalog.

    The catalog is queried once per ``generate`` call; nothing is cached
    between runs.
    """

    def __init__(self, catalog: MealCatalog, config: Optional[PlannerConfig] = None):
        """Initialize the planner.

        Args:
            catalog: Source of candidate meals
            config: Planner constants (defaults if None)
        """
        self.catalog = catalog
        self.config = config or PlannerConfig()

    def generate(
        self,
        preferences: UserPreferences,
        cancel_check: Optional[Callable[[], bool]] = None,
    ) -> MealPlanResult:
        """Generate a plan for the given preferences.

        Args:
            preferences: What the user asked for
            cancel_check: Optional callable polled between weeks

        Returns:
            MealPlanResult with the plan and its diagnostics

        Raises:
            InsufficientMealsError: If too few meals pass filtering
            PlanningCancelled: If ``cancel_check`` requested a stop
        """
        config = self.config
        logger.info(
            "Generating custom meal plan: goal=%s, meal types=%s, weeks=%d",
            preferences.health_goal.value,
            ",".join(m.value for m in preferences.meal_types),
            preferences.duration_weeks,
        )

        targets = calculate_nutritional_targets(preferences.health_goal, len(preferences.meal_types))
        logger.info(
            "Targets: %d kcal/day, %d kcal/meal, protein %dg",
            targets.target_calories_per_day,
            targets.target_calories_per_meal,
            targets.macros.protein_grams,
        )

        catalog_meals = self.catalog.list_eligible_meals(CatalogCriteria())
        eligible = filter_meals(catalog_meals, preferences, minimum=config.min_eligible_meals)
        logger.info("Eligible meals after filtering: %d", len(eligible))

        scored = score_meals(eligible, preferences.health_goal)
        logger.info("Scored %d meals", len(scored))

        assembled = assemble_plan(
            scored,
            preferences,
            targets,
            calorie_flex=config.calorie_flex,
            daily_overshoot=config.daily_overshoot,
            cancel_check=cancel_check,
        )
        logger.info("Generated plan with %d meal assignments", len(assembled.assignments))
        if assembled.unfilled_slots:
            logger.warning("%d slot(s) left unfilled", len(assembled.unfilled_slots))

        variety = enforce_variety(assembled.assignments, lookback=config.lookback_window)

        report = validate_plan(
            variety.assignments,
            targets,
            protein_tolerance=config.protein_tolerance,
        )

        return MealPlanResult(
            preferences=preferences,
            targets=targets,
            assignments=variety.assignments,
            unfilled_slots=assembled.unfilled_slots,
            report=report,
            summary=summarize_nutrition(variety.assignments),
            stats=calculate_stats(variety.assignments),
            eligible_meals=len(eligible),
            swaps=variety.swaps,
            unresolved_repeats=variety.unresolved_repeats,
        )


def generate_custom_meal_plan(
    preferences: UserPreferences,
    catalog: MealCatalog,
    config: Optional[PlannerConfig] = None,
) -> MealPlanResult:
    """Convenience wrapper around ``MealPlanner(catalog, config).generate``."""
    return MealPlanner(catalog, config).generate(preferences)
