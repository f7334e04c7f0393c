"""Custom meal plan generation.

Given a health goal, dietary restrictions, allergies and meal-time/duration
preferences, the planner filters a meal catalog by hard constraints, ranks
the survivors by goal fit, fills a calorie-balanced weekly schedule and
spreads repeats out. See ``mealmatch.planner.engine.MealPlanner``.
"""

from __future__ import annotations

from mealmatch.planner.errors import InsufficientMealsError, PlanningCancelled
from mealmatch.planner.models import (
    CandidateMeal,
    HealthGoal,
    MealAssignment,
    MealPlanResult,
    MealTime,
    NutritionalTargets,
    ScoredMeal,
    UnfilledSlot,
    UserPreferences,
    ValidationReport,
)

__all__ = [
    "CandidateMeal",
    "HealthGoal",
    "InsufficientMealsError",
    "MealAssignment",
    "MealPlanResult",
    "MealTime",
    "NutritionalTargets",
    "PlanningCancelled",
    "ScoredMeal",
    "UnfilledSlot",
    "UserPreferences",
    "ValidationReport",
]
