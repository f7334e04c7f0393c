"""Hard-constraint filtering of the meal catalog.

Allergies, dietary restrictions, excluded ingredients and health-goal
compatibility are all mandatory. A meal that fails any of them can never
appear in a plan.
"""

from __future__ import annotations

import logging
from typing import Iterable

from mealmatch.planner.errors import InsufficientMealsError
from mealmatch.planner.models import CandidateMeal, HealthGoal, UserPreferences

logger = logging.getLogger(__name__)

# Fewer eligible meals than this cannot produce a varied plan
MIN_ELIGIBLE_MEALS = 20


def is_allergen_free(meal: CandidateMeal, allergies: Iterable[str]) -> bool:
    """True if the meal carries none of the user's allergen tags."""
    return meal.allergens.isdisjoint(allergies)


def satisfies_dietary_restrictions(meal: CandidateMeal, restrictions: Iterable[str]) -> bool:
    """True if the meal carries every requested dietary tag."""
    return meal.dietary_tags.issuperset(restrictions)


def avoids_excluded_ingredients(meal: CandidateMeal, excluded: Iterable[str]) -> bool:
    """True if no detailed ingredient matches an excluded name.

    Names are compared case-insensitively. Meals without a detailed
    ingredient breakdown are kept: there is nothing to match against, so
    they are treated as safe.
    """
    excluded_names = {name.lower() for name in excluded}
    if not excluded_names or not meal.ingredients:
        return True
    return not any(ing.name.lower() in excluded_names for ing in meal.ingredients)


def matches_health_goal(meal: CandidateMeal, health_goal: HealthGoal) -> bool:
    """True for generic meals (no goal tags) or meals tagged with the goal."""
    if not meal.health_goals:
        return True
    return health_goal.value in meal.health_goals


def filter_meals(
    meals: Iterable[CandidateMeal],
    preferences: UserPreferences,
    minimum: int = MIN_ELIGIBLE_MEALS,
) -> list[CandidateMeal]:
    """Narrow the catalog to meals that satisfy every hard constraint.

    Args:
        meals: Catalog snapshot
        preferences: User preferences
        minimum: Minimum number of eligible meals required

    Returns:
        Eligible meals in catalog order.

    Raises:
        InsufficientMealsError: If fewer than ``minimum`` meals remain
    """
    eligible = [
        m for m in meals
        if is_allergen_free(m, preferences.allergies)
        and satisfies_dietary_restrictions(m, preferences.dietary_restrictions)
    ]
    logger.info("Found %d meals after allergy and dietary filtering", len(eligible))

    if preferences.exclude_ingredients:
        eligible = [m for m in eligible if avoids_excluded_ingredients(m, preferences.exclude_ingredients)]
        logger.info("After excluding ingredients: %d meals remaining", len(eligible))

    eligible = [m for m in eligible if matches_health_goal(m, preferences.health_goal)]
    logger.info("After health goal filtering: %d meals remaining", len(eligible))

    if len(eligible) < minimum:
        raise InsufficientMealsError(len(eligible), minimum)

    return eligible
