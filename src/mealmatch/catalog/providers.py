"""Meal catalog providers.

The planner fetches its candidate meals once per run through the
``MealCatalog`` protocol. Two providers are available: an in-memory one for
fixtures and YAML catalogs, and a SQLite-backed one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol, Union

from mealmatch.catalog.loader import CatalogEntry
from mealmatch.db.connection import DatabaseConnection
from mealmatch.planner.models import (
    CandidateMeal,
    Ingredient,
    IngredientCategory,
    Nutrition,
    parse_glycemic_index,
    parse_preparation_method,
)


@dataclass(frozen=True)
class CatalogCriteria:
    """Availability flags a meal must carry to be plan-eligible."""

    status: str = "active"
    available_for_custom_plans: bool = True

    def matches(self, entry: CatalogEntry) -> bool:
        """True if the entry carries the required status and availability flag."""
        return (
            entry.status == self.status
            and entry.available_for_custom_plans == self.available_for_custom_plans
        )


class MealCatalog(Protocol):
    """Source of candidate meals for a planning run."""

    def list_eligible_meals(self, criteria: CatalogCriteria) -> list[CandidateMeal]:
        """Return every meal matching ``criteria``, in a stable order."""
        ...


class InMemoryMealCatalog:
    """Catalog backed by a list held in memory.

    Bare ``CandidateMeal`` records are treated as active and available.
    """

    def __init__(self, records: Iterable[Union[CatalogEntry, CandidateMeal]] = ()):
        self._entries: list[CatalogEntry] = [
            r if isinstance(r, CatalogEntry) else CatalogEntry(meal=r) for r in records
        ]

    def add(self, record: Union[CatalogEntry, CandidateMeal]) -> None:
        """Append a meal (bare meals count as active and available)."""
        self._entries.append(record if isinstance(record, CatalogEntry) else CatalogEntry(meal=record))

    def __len__(self) -> int:
        return len(self._entries)

    def list_eligible_meals(self, criteria: CatalogCriteria) -> list[CandidateMeal]:
        """Matching meals in insertion order."""
        return [e.meal for e in self._entries if criteria.matches(e)]


class SQLiteMealCatalog:
    """Catalog stored in the ``custom_meals`` tables."""

    def __init__(self, db: DatabaseConnection):
        """Initialize the catalog.

        Args:
            db: Database connection manager (schema must be initialized)
        """
        self.db = db

    def add_meal(
        self,
        meal: CandidateMeal,
        status: str = "active",
        available_for_custom_plans: bool = True,
    ) -> None:
        """Insert or replace a meal and its tag/ingredient rows."""
        n = meal.nutrition
        with self.db.get_connection() as conn:
            for table in ("meal_allergens", "meal_dietary_tags", "meal_health_goals", "meal_ingredients"):
                conn.execute(f"DELETE FROM {table} WHERE meal_id = ?", (meal.meal_id,))
            conn.execute("DELETE FROM custom_meals WHERE meal_id = ?", (meal.meal_id,))

            conn.execute(
                """
                INSERT INTO custom_meals (
                    meal_id, name, description, category,
                    calories, protein, carbs, fat, fiber, sugar, sodium,
                    preparation_method, glycemic_index, price,
                    status, available_for_custom_plans
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    meal.meal_id, meal.name, meal.description, meal.category,
                    n.calories, n.protein, n.carbs, n.fat, n.fiber, n.sugar, n.sodium,
                    meal.preparation_method.value, meal.glycemic_index.value, meal.price,
                    status, available_for_custom_plans,
                ),
            )
            conn.executemany(
                "INSERT INTO meal_allergens VALUES (?, ?)",
                [(meal.meal_id, a) for a in sorted(meal.allergens)],
            )
            conn.executemany(
                "INSERT INTO meal_dietary_tags VALUES (?, ?)",
                [(meal.meal_id, t) for t in sorted(meal.dietary_tags)],
            )
            conn.executemany(
                "INSERT INTO meal_health_goals VALUES (?, ?)",
                [(meal.meal_id, g) for g in sorted(meal.health_goals)],
            )
            conn.executemany(
                "INSERT INTO meal_ingredients VALUES (?, ?, ?, ?, ?)",
                [
                    (meal.meal_id, pos, i.name, i.category.value if i.category else None, i.can_omit)
                    for pos, i in enumerate(meal.ingredients)
                ],
            )

    def import_entries(self, entries: Iterable[CatalogEntry]) -> int:
        """Store catalog entries, returning how many were written."""
        count = 0
        for entry in entries:
            self.add_meal(entry.meal, entry.status, entry.available_for_custom_plans)
            count += 1
        return count

    def count(self) -> int:
        """Number of stored meals, regardless of availability."""
        with self.db.get_connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM custom_meals").fetchone()[0]

    def list_eligible_meals(self, criteria: CatalogCriteria) -> list[CandidateMeal]:
        """Load all meals matching the availability criteria, in insertion order."""
        with self.db.get_connection() as conn:
            rows = conn.execute(
                """
                SELECT * FROM custom_meals
                WHERE status = ? AND available_for_custom_plans = ?
                ORDER BY rowid
                """,
                (criteria.status, criteria.available_for_custom_plans),
            ).fetchall()

            tags = {
                table: self._load_tags(conn, table, column)
                for table, column in (
                    ("meal_allergens", "allergen"),
                    ("meal_dietary_tags", "tag"),
                    ("meal_health_goals", "health_goal"),
                )
            }
            ingredients = self._load_ingredients(conn)

        return [
            CandidateMeal(
                meal_id=row["meal_id"],
                name=row["name"],
                category=row["category"],
                nutrition=Nutrition(
                    calories=row["calories"] or 0,
                    protein=row["protein"] or 0,
                    carbs=row["carbs"] or 0,
                    fat=row["fat"] or 0,
                    fiber=row["fiber"] or 0,
                    sugar=row["sugar"] or 0,
                    sodium=row["sodium"] or 0,
                ),
                allergens=frozenset(tags["meal_allergens"].get(row["meal_id"], ())),
                dietary_tags=frozenset(tags["meal_dietary_tags"].get(row["meal_id"], ())),
                health_goals=frozenset(tags["meal_health_goals"].get(row["meal_id"], ())),
                preparation_method=parse_preparation_method(row["preparation_method"] or "mixed"),
                glycemic_index=parse_glycemic_index(row["glycemic_index"] or "medium"),
                ingredients=tuple(ingredients.get(row["meal_id"], ())),
                description=row["description"] or "",
                price=row["price"] or 0,
            )
            for row in rows
        ]

    @staticmethod
    def _load_tags(conn, table: str, column: str) -> dict[str, list[str]]:
        result: dict[str, list[str]] = {}
        for row in conn.execute(f"SELECT meal_id, {column} FROM {table}"):
            result.setdefault(row[0], []).append(row[1])
        return result

    @staticmethod
    def _load_ingredients(conn) -> dict[str, list[Ingredient]]:
        result: dict[str, list[Ingredient]] = {}
        cursor = conn.execute(
            "SELECT meal_id, name, category, can_omit FROM meal_ingredients ORDER BY meal_id, position"
        )
        for row in cursor:
            result.setdefault(row["meal_id"], []).append(
                Ingredient(
                    name=row["name"],
                    category=IngredientCategory(row["category"]) if row["category"] else None,
                    can_omit=bool(row["can_omit"]),
                )
            )
        return result
