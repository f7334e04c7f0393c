"""Tests for goal-fit scoring."""

from __future__ import annotations

import pytest

from mealmatch.planner.models import GlycemicIndex, HealthGoal, PreparationMethod
from mealmatch.planner.scoring import (
    GOAL_SCORERS,
    general_bonus,
    score_diabetes_management,
    score_heart_health,
    score_maintenance,
    score_meal,
    score_meals,
    score_muscle_gain,
    score_weight_loss,
)


class TestWeightLoss:
    """Tests for weight loss scoring rules."""

    def test_documented_example(self, meal_factory):
        """550 kcal, 8g fiber, 8g sugar, 10g fat, grilled, 25g protein."""
        meal = meal_factory(
            "m1", calories=550, fiber=8, sugar=8, fat=10, protein=25,
            preparation_method=PreparationMethod.GRILLED,
        )
        assert score_weight_loss(meal) == 36
        assert score_meal(meal, HealthGoal.WEIGHT_LOSS) == 40

    def test_example_without_protein_bonus(self, meal_factory):
        """Same meal without the protein bonus."""
        meal = meal_factory("m1", calories=550, fiber=8, sugar=8, fat=10, protein=15)
        assert score_meal(meal, "weight_loss") == 38

    def test_fried_high_sugar_penalties(self, meal_factory):
        """Fried and sugary meals are penalized."""
        meal = meal_factory(
            "m1", calories=650, fiber=6, sugar=25, fat=30, protein=10,
            preparation_method=PreparationMethod.FRIED,
        )
        # 5 (cal<700) + 5 (fiber>5) - 5 (fried) - 3 (sugar>20)
        assert score_weight_loss(meal) == 2

    def test_boundaries_are_strict(self, meal_factory):
        """Thresholds exactly at the limit earn nothing."""
        meal = meal_factory("m1", calories=700, fiber=5, sugar=10, fat=15)
        # only not-fried applies
        assert score_weight_loss(meal) == 8


class TestMuscleGain:
    """Tests for muscle gain scoring rules."""

    def test_high_protein_baked(self, meal_factory):
        """High protein, calorie-dense baked meal."""
        meal = meal_factory(
            "m1", calories=700, protein=40, carbs=60, fiber=0,
            preparation_method=PreparationMethod.BAKED,
        )
        assert score_muscle_gain(meal) == 23
        assert score_meal(meal, HealthGoal.MUSCLE_GAIN) == 25

    def test_protein_tiers(self, meal_factory):
        """Protein above 30g scores more than above 25g."""
        assert score_muscle_gain(meal_factory("a", protein=32, calories=500, carbs=10,
                                              preparation_method=PreparationMethod.RAW)) == 8
        assert score_muscle_gain(meal_factory("b", protein=26, calories=500, carbs=10,
                                              preparation_method=PreparationMethod.RAW)) == 5

    def test_low_calorie_penalty(self, meal_factory):
        """Light meals are penalized for muscle gain."""
        meal = meal_factory("m1", calories=350, protein=10, carbs=10,
                            preparation_method=PreparationMethod.STEAMED)
        assert score_muscle_gain(meal) == -3


class TestDiabetesManagement:
    """Tests for diabetes management scoring rules."""

    def test_ideal_meal(self, meal_factory):
        """Low sugar, high fiber, low GI meal."""
        meal = meal_factory(
            "m1", calories=500, sugar=5, fiber=8, protein=10,
            glycemic_index=GlycemicIndex.LOW,
            preparation_method=PreparationMethod.STEAMED,
        )
        assert score_diabetes_management(meal) == 38
        assert score_meal(meal, HealthGoal.DIABETES_MANAGEMENT) == 40

    def test_high_sugar_high_gi(self, meal_factory):
        """Sugary high GI meals score negative."""
        meal = meal_factory(
            "m1", calories=800, sugar=20, fiber=2,
            glycemic_index=GlycemicIndex.HIGH,
            preparation_method=PreparationMethod.FRIED,
        )
        assert score_diabetes_management(meal) == -13


class TestHeartHealth:
    """Tests for heart health scoring rules."""

    def test_steamed_low_fat(self, meal_factory):
        """Steamed low-fat meal."""
        meal = meal_factory(
            "m1", calories=450, fat=10, fiber=6, protein=10,
            preparation_method=PreparationMethod.STEAMED,
        )
        assert score_heart_health(meal) == 35
        assert score_meal(meal, HealthGoal.HEART_HEALTH) == 37

    def test_fried_high_fat(self, meal_factory):
        """Fried fatty meals score negative."""
        meal = meal_factory(
            "m1", calories=900, fat=30, fiber=1,
            preparation_method=PreparationMethod.FRIED,
        )
        assert score_heart_health(meal) == -13


class TestMaintenance:
    """Tests for maintenance scoring rules."""

    def test_balanced_meal(self, meal_factory):
        """Meal inside every maintenance range."""
        meal = meal_factory("m1", calories=600, protein=30, fiber=6)
        assert score_maintenance(meal) == 14
        assert score_meal(meal, HealthGoal.MAINTENANCE) == 18

    def test_inclusive_ranges(self, meal_factory):
        """Range upper bounds are included."""
        meal = meal_factory("m1", calories=800, protein=40, fiber=0,
                            preparation_method=PreparationMethod.FRIED)
        assert score_maintenance(meal) == 8


class TestScoreMeals:
    """Tests for score_meals sorting."""

    def test_every_goal_has_scorer(self):
        """Each health goal has a scorer."""
        assert set(GOAL_SCORERS) == set(HealthGoal)

    def test_general_bonus(self, meal_factory):
        """Protein and fiber bonuses apply above their thresholds."""
        assert general_bonus(meal_factory("m1", protein=21, fiber=6)) == 4
        assert general_bonus(meal_factory("m2", protein=20, fiber=5)) == 0

    def test_sorted_descending(self, meal_factory):
        """Higher scores come first."""
        low = meal_factory("low", calories=900, fiber=1, preparation_method=PreparationMethod.FRIED)
        high = meal_factory("high", calories=500, fiber=8, sugar=5, fat=10)
        scored = score_meals([low, high], HealthGoal.WEIGHT_LOSS)
        assert [s.meal.meal_id for s in scored] == ["high", "low"]
        assert scored[0].score > scored[1].score

    def test_ties_keep_input_order(self, meal_factory):
        """Equal scores keep input order."""
        meals = [meal_factory(f"m{i}") for i in range(5)]
        scored = score_meals(meals, HealthGoal.MAINTENANCE)
        assert [s.meal.meal_id for s in scored] == ["m0", "m1", "m2", "m3", "m4"]

    def test_unknown_goal(self, meal_factory):
        """Unknown goals raise ValueError."""
        with pytest.raises(ValueError):
            score_meals([meal_factory("m1")], "paleo")
