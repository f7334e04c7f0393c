"""Greedy assembly of the weekly schedule.

Walks every (week, day, meal time) slot in order and picks the best-scored
meal that fits the calories still available for the day. Selection is
deterministic: candidates are always examined in score order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from mealmatch.planner.errors import PlanningCancelled
from mealmatch.planner.models import (
    CandidateMeal,
    MealAssignment,
    MealTime,
    NutritionalTargets,
    ScoredMeal,
    UnfilledSlot,
    UserPreferences,
)

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7

# Meals within +/-30% of the slot target count as a fit
CALORIE_FLEX = 0.3
# A day may run up to 10% over its calorie target
DAILY_OVERSHOOT = 1.1


@dataclass
class AssembledPlan:
    """Output of the assembly phase."""

    assignments: list[MealAssignment] = field(default_factory=list)
    unfilled_slots: list[UnfilledSlot] = field(default_factory=list)


def meals_for_time(scored: list[ScoredMeal], meal_time: MealTime) -> list[CandidateMeal]:
    """Meals whose category matches the meal time, in score order."""
    return [
        s.meal for s in scored
        if s.meal.category and s.meal.category.lower() == meal_time.value
    ]


def select_best_meal(
    candidates: list[CandidateMeal],
    target_calories: float,
    current_daily_calories: float,
    daily_target: float,
    calorie_flex: float = CALORIE_FLEX,
    daily_overshoot: float = DAILY_OVERSHOOT,
) -> Optional[CandidateMeal]:
    """Pick the highest-ranked meal that fits the slot's calorie budget.

    A meal fits when its calories fall within ``target * (1 +/- calorie_flex)``
    and adding it keeps the day at or below ``daily_target * daily_overshoot``.
    If nothing fits, the highest-ranked candidate is returned anyway.

    Args:
        candidates: Meals for this meal time, best first
        target_calories: Calorie target for this slot
        current_daily_calories: Calories already scheduled today
        daily_target: Daily calorie target
        calorie_flex: Fractional width of the per-slot window
        daily_overshoot: Allowed daily total as a multiple of the target

    Returns:
        Selected meal, or None if there are no candidates.
    """
    if not candidates:
        return None

    flexible_min = target_calories * (1 - calorie_flex)
    flexible_max = target_calories * (1 + calorie_flex)
    daily_cap = daily_target * daily_overshoot

    for meal in candidates:
        calories = meal.calories
        if flexible_min <= calories <= flexible_max and current_daily_calories + calories <= daily_cap:
            return meal

    return candidates[0]


def assemble_plan(
    scored: list[ScoredMeal],
    preferences: UserPreferences,
    targets: NutritionalTargets,
    calorie_flex: float = CALORIE_FLEX,
    daily_overshoot: float = DAILY_OVERSHOOT,
    cancel_check: Optional[Callable[[], bool]] = None,
) -> AssembledPlan:
    """Fill every requested slot for the plan's duration.

    For each slot the remaining daily calories are divided by the number of
    meal times from this one to the end of the day, giving the slot target.
    Slots whose meal time has no candidates are recorded as unfilled.

    Args:
        scored: Scored meals, best first
        preferences: User preferences (meal times, duration)
        targets: Nutritional targets
        calorie_flex: Fractional width of the per-slot window
        daily_overshoot: Allowed daily total as a multiple of the target
        cancel_check: Optional callable polled before each week; returning
            True stops planning

    Returns:
        AssembledPlan with assignments in (week, day, meal time) order.

    Raises:
        PlanningCancelled: If ``cancel_check`` returns True
    """
    plan = AssembledPlan()
    meal_types = preferences.meal_types
    meals_per_day = len(meal_types)
    daily_target = targets.target_calories_per_day

    by_time = {mt: meals_for_time(scored, mt) for mt in meal_types}

    for week in range(1, preferences.duration_weeks + 1):
        if cancel_check is not None and cancel_check():
            raise PlanningCancelled(completed_weeks=week - 1)

        for day in range(1, DAYS_PER_WEEK + 1):
            daily_calories = 0.0

            for position, meal_time in enumerate(meal_types):
                candidates = by_time[meal_time]
                if not candidates:
                    logger.warning(
                        "No %s meals available for week %d, day %d",
                        meal_time.value, week, day,
                    )
                    plan.unfilled_slots.append(UnfilledSlot(week, day, meal_time))
                    continue

                remaining = daily_target - daily_calories
                slot_target = remaining / (meals_per_day - position)

                selected = select_best_meal(
                    candidates,
                    slot_target,
                    daily_calories,
                    daily_target,
                    calorie_flex=calorie_flex,
                    daily_overshoot=daily_overshoot,
                )
                plan.assignments.append(
                    MealAssignment(
                        week_number=week,
                        day_of_week=day,
                        meal_time=meal_time,
                        meal=selected,
                        sequence=len(plan.assignments),
                    )
                )
                daily_calories += selected.calories

    return plan
