"""Nutrition totals and meal counts for a plan."""

from __future__ import annotations

from typing import Iterable

from mealmatch.planner.models import MealAssignment, MealTime, NutritionSummary, PlanStats
from mealmatch.planner.targets import round_half_up


def summarize_nutrition(assignments: Iterable[MealAssignment]) -> NutritionSummary:
    """Total and per-day average nutrition across a plan.

    Averages are taken over the distinct (week, day) pairs that hold at least
    one assignment. An empty plan yields zeros.
    """
    summary = NutritionSummary()
    days: set[tuple[int, int]] = set()

    for a in assignments:
        n = a.meal.nutrition
        summary.total_calories += n.calories
        summary.total_protein += n.protein
        summary.total_carbs += n.carbs
        summary.total_fat += n.fat
        summary.total_fiber += n.fiber
        days.add(a.day_key)

    summary.days = len(days)
    divisor = summary.days or 1
    summary.avg_calories_per_day = round_half_up(summary.total_calories / divisor)
    summary.avg_protein_per_day = round_half_up(summary.total_protein / divisor)
    summary.avg_carbs_per_day = round_half_up(summary.total_carbs / divisor)
    summary.avg_fat_per_day = round_half_up(summary.total_fat / divisor)
    return summary


def calculate_stats(assignments: Iterable[MealAssignment]) -> PlanStats:
    """Count meals per meal time."""
    stats = PlanStats(counts={mt: 0 for mt in MealTime})
    for a in assignments:
        stats.total_meals += 1
        stats.counts[a.meal_time] += 1
    return stats
