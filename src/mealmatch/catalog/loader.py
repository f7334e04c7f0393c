"""Load meal catalogs from YAML documents.

Expected layout::

    meals:
      - id: cm-001
        name: Grilled chicken quinoa bowl
        category: lunch
        nutrition: {calories: 650, protein: 45, carbs: 60, fat: 18, fiber: 8, sugar: 6}
        allergens: []
        dietary_tags: [gluten-free]
        health_goals: [muscle_gain, maintenance]
        preparation_method: grilled
        glycemic_index: low
        ingredients:
          - {name: chicken breast, category: protein}
          - {name: cilantro, category: spice, can_omit: true}
        status: active
        available_for_custom_plans: true
        price: 14.5
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from mealmatch.planner.models import (
    CandidateMeal,
    Ingredient,
    IngredientCategory,
    Nutrition,
    as_tag_list,
    parse_glycemic_index,
    parse_health_goal,
    parse_meal_time,
    parse_preparation_method,
)

NUTRITION_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium")


@dataclass(frozen=True)
class CatalogEntry:
    """A catalog meal plus its availability flags."""

    meal: CandidateMeal
    status: str = "active"
    available_for_custom_plans: bool = True


def _ingredients_from_data(value: Any) -> tuple[Ingredient, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, dict)):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"ingredients must be a list, got {type(value).__name__}")
    return tuple(_ingredient_from_dict(i) for i in value)


def _ingredient_from_dict(data: Any) -> Ingredient:
    if isinstance(data, str):
        return Ingredient(name=data)
    category = data.get("category")
    return Ingredient(
        name=str(data["name"]),
        category=IngredientCategory(category) if category else None,
        can_omit=bool(data.get("can_omit", False)),
    )


def meal_from_dict(data: dict[str, Any]) -> CandidateMeal:
    """Build a CandidateMeal from a catalog record.

    Raises:
        KeyError: If ``id``, ``name`` or ``category`` is missing
        ValueError: If an enum-valued field holds an unknown value
    """
    nutrition_data = data.get("nutrition") or {}
    nutrition = Nutrition(**{
        key: float(nutrition_data.get(key, 0) or 0) for key in NUTRITION_FIELDS
    })

    return CandidateMeal(
        meal_id=str(data["id"]),
        name=str(data["name"]),
        category=parse_meal_time(data["category"]).value,
        nutrition=nutrition,
        allergens=frozenset(as_tag_list(data.get("allergens"), "allergens")),
        dietary_tags=frozenset(as_tag_list(data.get("dietary_tags"), "dietary_tags")),
        health_goals=frozenset(
            parse_health_goal(g).value for g in as_tag_list(data.get("health_goals"), "health_goals")
        ),
        preparation_method=parse_preparation_method(data.get("preparation_method", "mixed")),
        glycemic_index=parse_glycemic_index(data.get("glycemic_index", "medium")),
        ingredients=_ingredients_from_data(data.get("ingredients")),
        description=str(data.get("description") or ""),
        price=float(data.get("price", 0) or 0),
    )


def meal_to_dict(meal: CandidateMeal) -> dict[str, Any]:
    """Inverse of meal_from_dict (without availability flags)."""
    return {
        "id": meal.meal_id,
        "name": meal.name,
        "category": meal.category,
        "nutrition": {key: getattr(meal.nutrition, key) for key in NUTRITION_FIELDS},
        "allergens": sorted(meal.allergens),
        "dietary_tags": sorted(meal.dietary_tags),
        "health_goals": sorted(meal.health_goals),
        "preparation_method": meal.preparation_method.value,
        "glycemic_index": meal.glycemic_index.value,
        "ingredients": [
            {
                "name": i.name,
                "category": i.category.value if i.category else None,
                "can_omit": i.can_omit,
            }
            for i in meal.ingredients
        ],
        "description": meal.description,
        "price": meal.price,
    }


def entries_from_data(data: dict[str, Any]) -> list[CatalogEntry]:
    """Parse an already-loaded catalog document."""
    entries = []
    for record in data.get("meals") or []:
        entries.append(
            CatalogEntry(
                meal=meal_from_dict(record),
                status=str(record.get("status", "active")),
                available_for_custom_plans=bool(record.get("available_for_custom_plans", True)),
            )
        )
    return entries


def load_catalog_yaml(yaml_path: Path) -> list[CatalogEntry]:
    """Parse a YAML catalog file.

    Args:
        yaml_path: Path to the YAML catalog

    Returns:
        Catalog entries in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If a record holds an invalid value
    """
    with open(yaml_path) as f:
        data = yaml.safe_load(f) or {}
    return entries_from_data(data)
