"""Exceptions raised by the planning pipeline."""

from __future__ import annotations


class InsufficientMealsError(ValueError):
    """Too few meals survive filtering to build a plan.

    Attributes:
        count: Number of eligible meals found
        minimum: Number required
    """

    def __init__(self, count: int, minimum: int):
        self.count = count
        self.minimum = minimum
        super().__init__(
            f"Not enough meals match your criteria (found {count}). "
            f"Try relaxing some restrictions."
        )


class PlanningCancelled(RuntimeError):
    """Raised when the caller's cancel check asks the assembler to stop."""

    def __init__(self, completed_weeks: int):
        self.completed_weeks = completed_weeks
        super().__init__(f"Planning cancelled after {completed_weeks} week(s)")
