"""Goal-fit scoring of eligible meals.

Each health goal has its own battery of threshold rules, implemented as a
pure function from a meal to an integer delta. A couple of goal-agnostic
bonuses are added on top. Scores are small integers and may be negative.
"""

from __future__ import annotations

from typing import Callable, Iterable

from mealmatch.planner.models import (
    CandidateMeal,
    GlycemicIndex,
    HealthGoal,
    PreparationMethod,
    ScoredMeal,
    parse_health_goal,
)


def score_weight_loss(meal: CandidateMeal) -> int:
    """Favor lighter, high-fiber, low-sugar, low-fat meals that are not fried."""
    n = meal.nutrition
    score = 0

    if n.calories < 600:
        score += 10
    elif n.calories < 700:
        score += 5

    if n.fiber > 7:
        score += 8
    elif n.fiber > 5:
        score += 5

    if meal.preparation_method != PreparationMethod.FRIED:
        score += 8
    else:
        score -= 5

    if n.sugar < 10:
        score += 5
    elif n.sugar > 20:
        score -= 3

    if n.fat < 15:
        score += 5

    return score


def score_muscle_gain(meal: CandidateMeal) -> int:
    """Favor high-protein, calorie-dense meals."""
    n = meal.nutrition
    score = 0

    if n.protein > 35:
        score += 10
    elif n.protein > 30:
        score += 8
    elif n.protein > 25:
        score += 5

    if n.calories > 600:
        score += 5
    elif n.calories < 400:
        score -= 3

    if meal.preparation_method in (PreparationMethod.GRILLED, PreparationMethod.BAKED):
        score += 3

    # Carbs for training energy
    if n.carbs > 50:
        score += 5

    return score


def score_diabetes_management(meal: CandidateMeal) -> int:
    """Favor low-sugar, high-fiber, low glycemic index meals."""
    n = meal.nutrition
    score = 0

    if n.sugar < 10:
        score += 10
    elif n.sugar > 15:
        score -= 8

    if n.fiber > 7:
        score += 10
    elif n.fiber > 5:
        score += 5

    if meal.glycemic_index == GlycemicIndex.LOW:
        score += 8
    elif meal.glycemic_index == GlycemicIndex.HIGH:
        score -= 5

    if meal.preparation_method != PreparationMethod.FRIED:
        score += 5

    if 400 <= n.calories <= 600:
        score += 5

    return score


def score_heart_health(meal: CandidateMeal) -> int:
    """Favor low-fat, high-fiber meals that are steamed or grilled."""
    n = meal.nutrition
    score = 0

    if n.fat < 15:
        score += 10
    elif n.fat > 25:
        score -= 5

    if n.fiber > 7:
        score += 8
    elif n.fiber > 5:
        score += 5

    if meal.preparation_method != PreparationMethod.FRIED:
        score += 10
    else:
        score -= 8

    if meal.preparation_method in (PreparationMethod.STEAMED, PreparationMethod.GRILLED):
        score += 5

    if 400 <= n.calories <= 700:
        score += 5

    return score


def score_maintenance(meal: CandidateMeal) -> int:
    """Balanced approach with no extreme preferences."""
    n = meal.nutrition
    score = 0

    if 500 <= n.calories <= 800:
        score += 5
    if 20 <= n.protein <= 40:
        score += 3
    if n.fiber > 5:
        score += 3
    if meal.preparation_method != PreparationMethod.FRIED:
        score += 3

    return score


def general_bonus(meal: CandidateMeal) -> int:
    """Bonuses applied regardless of goal."""
    score = 0
    if meal.nutrition.protein > 20:
        score += 2
    if meal.nutrition.fiber > 5:
        score += 2
    return score


GOAL_SCORERS: dict[HealthGoal, Callable[[CandidateMeal], int]] = {
    HealthGoal.WEIGHT_LOSS: score_weight_loss,
    HealthGoal.MUSCLE_GAIN: score_muscle_gain,
    HealthGoal.DIABETES_MANAGEMENT: score_diabetes_management,
    HealthGoal.HEART_HEALTH: score_heart_health,
    HealthGoal.MAINTENANCE: score_maintenance,
}


def score_meal(meal: CandidateMeal, health_goal: HealthGoal | str) -> int:
    """Total score of one meal for a health goal.

    Raises:
        ValueError: If the goal has no scorer
    """
    goal = parse_health_goal(health_goal)
    scorer = GOAL_SCORERS.get(goal)
    if scorer is None:
        raise ValueError(f"No scoring rules for health goal: {goal.value}")
    return scorer(meal) + general_bonus(meal)


def score_meals(
    meals: Iterable[CandidateMeal],
    health_goal: HealthGoal | str,
) -> list[ScoredMeal]:
    """Score meals and sort them best first.

    The sort is stable, so meals with equal scores keep their input order.

    Args:
        meals: Eligible meals
        health_goal: Active health goal

    Returns:
        ScoredMeal list in descending score order.
    """
    goal = parse_health_goal(health_goal)
    scored = [ScoredMeal(meal=m, score=score_meal(m, goal)) for m in meals]
    scored.sort(key=lambda s: -s.score)
    return scored
