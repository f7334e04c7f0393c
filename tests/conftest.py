"""Pytest fixtures for mealmatch tests."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from mealmatch.catalog import InMemoryMealCatalog
from mealmatch.db.connection import DatabaseConnection
from mealmatch.planner.models import (
    CandidateMeal,
    GlycemicIndex,
    Ingredient,
    Nutrition,
    PreparationMethod,
)


def build_meal(
    meal_id: str,
    category: str = "lunch",
    calories: float = 600,
    protein: float = 30,
    carbs: float = 60,
    fat: float = 20,
    fiber: float = 4,
    sugar: float = 12,
    allergens: tuple[str, ...] = (),
    dietary_tags: tuple[str, ...] = (),
    health_goals: tuple[str, ...] = (),
    preparation_method: PreparationMethod = PreparationMethod.GRILLED,
    glycemic_index: GlycemicIndex = GlycemicIndex.MEDIUM,
    ingredients: tuple[str, ...] = (),
    name: str | None = None,
) -> CandidateMeal:
    """Build a candidate meal with sensible defaults."""
    return CandidateMeal(
        meal_id=meal_id,
        name=name or f"Meal {meal_id}",
        category=category,
        nutrition=Nutrition(
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
            fiber=fiber,
            sugar=sugar,
        ),
        allergens=frozenset(allergens),
        dietary_tags=frozenset(dietary_tags),
        health_goals=frozenset(health_goals),
        preparation_method=preparation_method,
        glycemic_index=glycemic_index,
        ingredients=tuple(Ingredient(name=i) for i in ingredients),
    )


@pytest.fixture
def meal_factory():
    """Return the meal builder for tests that need custom meals."""
    return build_meal


@pytest.fixture
def maintenance_meals() -> list[CandidateMeal]:
    """36 meals (12 per breakfast/lunch/dinner) tuned to ~733 kcal each.

    None carry peanuts; some carry dairy or eggs.
    """
    meals = []
    for category in ("breakfast", "lunch", "dinner"):
        for i in range(12):
            meals.append(
                build_meal(
                    f"{category[:2]}-{i:02d}",
                    category=category,
                    calories=700 + 5 * i,
                    protein=55,
                    carbs=70,
                    fat=24,
                    fiber=6 + (i % 3),
                    sugar=8,
                    allergens=("dairy",) if i % 4 == 0 else (("eggs",) if i % 4 == 1 else ()),
                    health_goals=("maintenance",) if i % 2 == 0 else (),
                    ingredients=("rice", "spinach") if i % 3 == 0 else (),
                )
            )
    return meals


@pytest.fixture
def maintenance_catalog(maintenance_meals) -> InMemoryMealCatalog:
    return InMemoryMealCatalog(maintenance_meals)


@pytest.fixture
def temp_db():
    """Create a temporary database with schema."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    db = DatabaseConnection(db_path)
    db.initialize_schema()

    yield db

    db_path.unlink(missing_ok=True)
