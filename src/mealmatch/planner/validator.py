"""Advisory validation of a finished plan against its targets.

The validator reports; it does not repair. A plan that misses its targets is
still returned unchanged, with a warning logged.
"""

from __future__ import annotations

import logging

from mealmatch.planner.models import MealAssignment, NutritionalTargets, ValidationReport
from mealmatch.planner.summary import summarize_nutrition

logger = logging.getLogger(__name__)

# Average protein may fall up to 10% short of target
PROTEIN_TOLERANCE = 0.9


def validate_plan(
    assignments: list[MealAssignment],
    targets: NutritionalTargets,
    protein_tolerance: float = PROTEIN_TOLERANCE,
) -> ValidationReport:
    """Compare a plan's average daily nutrition with the targets.

    Args:
        assignments: Final plan
        targets: Nutritional targets for the plan's health goal
        protein_tolerance: Fraction of protein target that counts as enough

    Returns:
        ValidationReport describing whether the plan meets its targets.
    """
    summary = summarize_nutrition(assignments)
    calorie_range = targets.calories_per_day

    if summary.days == 0:
        report = ValidationReport(
            avg_calories_per_day=0,
            avg_protein_per_day=0,
            calories_in_range=False,
            protein_deficit=True,
        )
    else:
        report = ValidationReport(
            avg_calories_per_day=summary.avg_calories_per_day,
            avg_protein_per_day=summary.avg_protein_per_day,
            calories_in_range=calorie_range.min <= summary.avg_calories_per_day <= calorie_range.max,
            protein_deficit=summary.avg_protein_per_day < targets.macros.protein_grams * protein_tolerance,
        )

    logger.info(
        "Avg calories/day: %d (target %d-%d), avg protein/day: %dg (target %dg)",
        report.avg_calories_per_day, calorie_range.min, calorie_range.max,
        report.avg_protein_per_day, targets.macros.protein_grams,
    )

    if report.meets_targets:
        logger.info("Plan meets all targets")
    else:
        logger.warning(
            "Plan needs adjustment (calories in range: %s, protein deficit: %s); accepting as-is",
            report.calories_in_range, report.protein_deficit,
        )

    return report
