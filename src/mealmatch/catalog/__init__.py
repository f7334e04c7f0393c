"""Meal catalog providers and loaders."""

from __future__ import annotations

from mealmatch.catalog.loader import (
    CatalogEntry,
    load_catalog_yaml,
    meal_from_dict,
    meal_to_dict,
)
from mealmatch.catalog.providers import (
    CatalogCriteria,
    InMemoryMealCatalog,
    MealCatalog,
    SQLiteMealCatalog,
)

__all__ = [
    "CatalogCriteria",
    "CatalogEntry",
    "InMemoryMealCatalog",
    "MealCatalog",
    "SQLiteMealCatalog",
    "load_catalog_yaml",
    "meal_from_dict",
    "meal_to_dict",
]
