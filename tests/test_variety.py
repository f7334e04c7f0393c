"""Tests for the variety pass."""

from __future__ import annotations

from mealmatch.planner.assembler import assemble_plan
from mealmatch.planner.models import HealthGoal, MealAssignment, MealTime, ScoredMeal, UserPreferences
from mealmatch.planner.targets import calculate_nutritional_targets
from mealmatch.planner.variety import LOOKBACK_WINDOW, enforce_variety


def _assign(meals, meal_time: MealTime = MealTime.LUNCH) -> list[MealAssignment]:
    """One assignment per day (lunch only) for the given meals."""
    return [
        MealAssignment(
            week_number=i // 7 + 1,
            day_of_week=i % 7 + 1,
            meal_time=meal_time,
            meal=meal,
            sequence=i,
        )
        for i, meal in enumerate(meals)
    ]


class TestEnforceVariety:
    """Tests for enforce_variety."""

    def test_window_constant(self):
        """The default lookback is 21 assignments."""
        assert LOOKBACK_WINDOW == 21

    def test_no_repeats_unchanged(self, meal_factory):
        """A plan without repeats is returned as is."""
        plan = _assign([meal_factory(f"m{i}") for i in range(5)])
        outcome = enforce_variety(plan)
        assert outcome.assignments == plan
        assert outcome.swaps == 0
        assert outcome.unresolved_repeats == 0

    def test_swaps_in_alternative_from_original_plan(self, meal_factory):
        """A repeat is replaced by another meal from the plan."""
        a = meal_factory("a")
        b = meal_factory("b")
        plan = _assign([a, a, b])
        outcome = enforce_variety(plan)

        assert [x.meal_id for x in outcome.assignments] == ["a", "b", "b"]
        assert outcome.swaps == 1
        assert outcome.unresolved_repeats == 1

    def test_slot_identity_preserved(self, meal_factory):
        """Swaps keep week, day, meal time and sequence."""
        a = meal_factory("a")
        b = meal_factory("b")
        plan = _assign([a, a, b])
        outcome = enforce_variety(plan)
        for before, after in zip(plan, outcome.assignments):
            assert (before.week_number, before.day_of_week, before.meal_time, before.sequence) == (
                after.week_number, after.day_of_week, after.meal_time, after.sequence
            )

    def test_alternative_must_share_meal_time(self, meal_factory):
        """Alternatives come from the same meal time only."""
        lunch = meal_factory("lunch")
        dinner = meal_factory("dinner", category="dinner")
        plan = _assign([lunch, lunch])
        plan.append(
            MealAssignment(week_number=1, day_of_week=3, meal_time=MealTime.DINNER, meal=dinner, sequence=2)
        )
        outcome = enforce_variety(plan)
        assert outcome.assignments[1].meal_id == "lunch"
        assert outcome.unresolved_repeats == 1

    def test_repeat_outside_window_allowed(self, meal_factory):
        """Repeats beyond the lookback are left alone."""
        a = meal_factory("a")
        b = meal_factory("b")
        plan = _assign([a, b, a])
        assert [x.meal_id for x in enforce_variety(plan, lookback=1).assignments] == ["a", "b", "a"]

        outcome = enforce_variety(plan, lookback=2)
        assert [x.meal_id for x in outcome.assignments] == ["a", "b", "a"]
        assert outcome.unresolved_repeats == 1

    def test_uses_sequence_not_list_position(self, meal_factory):
        """Order is taken from sequence numbers."""
        a = meal_factory("a")
        b = meal_factory("b")
        plan = _assign([a, a, b])
        outcome = enforce_variety(list(reversed(plan)))
        assert [x.sequence for x in outcome.assignments] == [0, 1, 2]
        assert [x.meal_id for x in outcome.assignments] == ["a", "b", "b"]

    def test_two_lunch_options_two_weeks(self, meal_factory):
        """Only two lunches for 14 slots: repeats must remain, nothing raises."""
        lunches = [meal_factory("l1", calories=700), meal_factory("l2", calories=720)]
        scored = [ScoredMeal(meal=m, score=10 - i) for i, m in enumerate(lunches)]
        prefs = UserPreferences(
            health_goal=HealthGoal.MAINTENANCE,
            meal_types=[MealTime.LUNCH],
            duration_weeks=2,
        )
        targets = calculate_nutritional_targets(prefs.health_goal, 1)
        assembled = assemble_plan(scored, prefs, targets)

        outcome = enforce_variety(assembled.assignments)

        assert len(outcome.assignments) == 14
        assert all(a.meal_time == MealTime.LUNCH for a in outcome.assignments)
        assert outcome.unresolved_repeats >= 1
        ids = [a.meal_id for a in outcome.assignments]
        assert len(ids) != len(set(ids))

    def test_does_not_mutate_input(self, meal_factory):
        """The input plan is not modified."""
        a = meal_factory("a")
        b = meal_factory("b")
        plan = _assign([a, a, b])
        snapshot = list(plan)
        enforce_variety(plan)
        assert plan == snapshot
