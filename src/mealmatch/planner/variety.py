"""Variety pass over an assembled plan.

Greedy assembly tends to pick the same top-scored meal every day. This pass
walks the plan in time order and swaps out any meal already served within
the trailing lookback window, borrowing a meal scheduled elsewhere in the
plan for the same meal time. Variety is best effort: if every candidate for
a meal time was served recently, the repeat stays.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field, replace

from mealmatch.planner.models import MealAssignment

logger = logging.getLogger(__name__)

# 7 days x 3 meal times: "no repeat within a week" for a three-meal plan.
# Kept fixed for plans with fewer meal times.
LOOKBACK_WINDOW = 21


@dataclass
class VarietyOutcome:
    """Adjusted plan plus swap counters."""

    assignments: list[MealAssignment] = field(default_factory=list)
    swaps: int = 0
    unresolved_repeats: int = 0


def enforce_variety(
    assignments: list[MealAssignment],
    lookback: int = LOOKBACK_WINDOW,
) -> VarietyOutcome:
    """Replace meals repeated within the lookback window where possible.

    Assignments are processed in ``sequence`` order. Substitutes come from the
    original (unadjusted) plan, so they always passed filtering. Slot identity
    (week, day, meal time, sequence) never changes.

    Args:
        assignments: Assembled plan
        lookback: Number of preceding adjusted assignments to check

    Returns:
        VarietyOutcome with a plan of the same length and slot structure.
    """
    original = sorted(assignments, key=lambda a: a.sequence)
    outcome = VarietyOutcome()
    window: deque[MealAssignment] = deque(maxlen=lookback)

    for assignment in original:
        recent_ids = {a.meal_id for a in window}
        adjusted = assignment

        if assignment.meal_id in recent_ids:
            alternative = next(
                (
                    a for a in original
                    if a.meal_time == assignment.meal_time and a.meal_id not in recent_ids
                ),
                None,
            )
            if alternative is not None:
                adjusted = replace(assignment, meal=alternative.meal)
                outcome.swaps += 1
            else:
                outcome.unresolved_repeats += 1

        outcome.assignments.append(adjusted)
        window.append(adjusted)

    if outcome.unresolved_repeats:
        logger.warning(
            "%d repeated meal(s) kept within the %d-slot lookback window: no alternative available",
            outcome.unresolved_repeats, lookback,
        )
    logger.info("Applied variety rules: %d swap(s)", outcome.swaps)

    return outcome
