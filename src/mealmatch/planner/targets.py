"""Nutritional targets per health goal.

Each health goal maps to a fixed table of daily calories, macro split,
fiber floor and sugar ceiling. Macro grams are derived from the daily
calorie target using 4 kcal/g for protein and carbs and 9 kcal/g for fat.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from mealmatch.planner.models import (
    CalorieRange,
    HealthGoal,
    MacroTargets,
    NutritionalTargets,
    parse_health_goal,
)

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


@dataclass(frozen=True)
class GoalProfile:
    """Fixed target table entry for one health goal."""

    calories: CalorieRange
    protein_percent: int
    carbs_percent: int
    fat_percent: int
    fiber_min: int  # grams per day
    sugar_max: int  # grams per day


HEALTH_GOAL_TARGETS: dict[HealthGoal, GoalProfile] = {
    HealthGoal.WEIGHT_LOSS: GoalProfile(
        calories=CalorieRange(min=1200, max=1800, target=1500),
        protein_percent=40,
        carbs_percent=30,
        fat_percent=30,
        fiber_min=25,
        sugar_max=50,
    ),
    HealthGoal.MUSCLE_GAIN: GoalProfile(
        calories=CalorieRange(min=2200, max=3000, target=2600),
        protein_percent=40,
        carbs_percent=40,
        fat_percent=20,
        fiber_min=20,
        sugar_max=80,
    ),
    HealthGoal.DIABETES_MANAGEMENT: GoalProfile(
        calories=CalorieRange(min=1600, max=2000, target=1800),
        protein_percent=40,
        carbs_percent=30,
        fat_percent=30,
        fiber_min=30,
        sugar_max=30,
    ),
    HealthGoal.HEART_HEALTH: GoalProfile(
        calories=CalorieRange(min=1800, max=2200, target=2000),
        protein_percent=30,
        carbs_percent=40,
        fat_percent=30,
        fiber_min=25,
        sugar_max=50,
    ),
    HealthGoal.MAINTENANCE: GoalProfile(
        calories=CalorieRange(min=2000, max=2400, target=2200),
        protein_percent=30,
        carbs_percent=40,
        fat_percent=30,
        fiber_min=25,
        sugar_max=60,
    ),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not to even)."""
    return int(math.floor(value + 0.5))


def _macro_grams(calories: float, percent: int, kcal_per_gram: int) -> int:
    return round_half_up(calories * percent / 100 / kcal_per_gram)


def calculate_nutritional_targets(
    health_goal: HealthGoal | str,
    meals_per_day: int,
) -> NutritionalTargets:
    """Calculate daily and per-meal targets for a health goal.

    Args:
        health_goal: Active health goal
        meals_per_day: Number of requested meal times (>= 1)

    Returns:
        NutritionalTargets for the goal

    Raises:
        ValueError: If meals_per_day < 1 or the goal is unknown
    """
    if meals_per_day < 1:
        raise ValueError(f"meals_per_day must be at least 1, got {meals_per_day}")

    profile = HEALTH_GOAL_TARGETS[parse_health_goal(health_goal)]
    daily_target = profile.calories.target

    return NutritionalTargets(
        calories_per_day=profile.calories,
        target_calories_per_day=daily_target,
        target_calories_per_meal=round_half_up(daily_target / meals_per_day),
        meals_per_day=meals_per_day,
        macros=MacroTargets(
            protein_grams=_macro_grams(daily_target, profile.protein_percent, KCAL_PER_GRAM_PROTEIN),
            carbs_grams=_macro_grams(daily_target, profile.carbs_percent, KCAL_PER_GRAM_CARBS),
            fat_grams=_macro_grams(daily_target, profile.fat_percent, KCAL_PER_GRAM_FAT),
        ),
        fiber_min=profile.fiber_min,
        sugar_max=profile.sugar_max,
    )
