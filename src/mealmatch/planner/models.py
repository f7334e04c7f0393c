"""Data models for custom meal plan generation.

A planning run takes a read-only snapshot of candidate meals and a set of
user preferences and produces a week-by-week schedule of meal assignments:

1. Targets: derive daily and per-meal nutrition goals from the health goal
2. Filtering: drop meals that violate allergies, diet or exclusions
3. Scoring: rank the survivors by how well they suit the health goal
4. Assembly: fill every (week, day, meal time) slot greedily
5. Variety: swap out meals repeated within the lookback window
6. Validation: compare achieved nutrition with the targets (advisory)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class HealthGoal(Enum):
    """Dietary objective that selects targets and scoring rules."""

    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"
    MAINTENANCE = "maintenance"
    DIABETES_MANAGEMENT = "diabetes_management"
    HEART_HEALTH = "heart_health"


class MealTime(Enum):
    """Meal times a plan can request."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class PreparationMethod(Enum):
    """How a meal is cooked."""

    GRILLED = "grilled"
    STEAMED = "steamed"
    FRIED = "fried"
    BAKED = "baked"
    BOILED = "boiled"
    RAW = "raw"
    ROASTED = "roasted"
    MIXED = "mixed"


class GlycemicIndex(Enum):
    """Blood-sugar impact classification of a meal."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class IngredientCategory(Enum):
    PROTEIN = "protein"
    VEGETABLE = "vegetable"
    GRAIN = "grain"
    SPICE = "spice"
    DAIRY = "dairy"
    OIL = "oil"
    SAUCE = "sauce"
    OTHER = "other"


def _parse_enum(enum_cls: type[Enum], value: Any, label: str) -> Any:
    """Coerce a string (or enum member) into ``enum_cls``.

    Raises:
        ValueError: If the value is not a valid member, naming the choices.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"Invalid {label} '{value}'. Must be one of: {choices}") from None


def as_tag_list(value: Any, label: str) -> list[str]:
    """Normalize a tag or name field to a list of strings.

    A bare string is one tag, not a sequence of characters.

    Raises:
        ValueError: If the value is neither a string nor a list-like of strings
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise ValueError(f"{label} must be a string or a list, got {type(value).__name__}")
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{label} entries must be strings, got {item!r}")
    return list(value)


def parse_health_goal(value: Any) -> HealthGoal:
    """Parse a health goal name such as "weight_loss"."""
    return _parse_enum(HealthGoal, value, "health goal")


def parse_meal_time(value: Any) -> MealTime:
    """Parse a meal time name such as "lunch"."""
    return _parse_enum(MealTime, value, "meal type")


def parse_preparation_method(value: Any) -> PreparationMethod:
    """Parse a cooking method name such as "grilled"."""
    return _parse_enum(PreparationMethod, value, "preparation method")


def parse_glycemic_index(value: Any) -> GlycemicIndex:
    """Parse a glycemic index class: low, medium or high."""
    return _parse_enum(GlycemicIndex, value, "glycemic index")


@dataclass(frozen=True)
class Nutrition:
    """Nutrition facts for one serving of a meal.

    Attributes:
        calories: Energy in kcal
        protein: Protein in grams
        carbs: Carbohydrates in grams
        fat: Total fat in grams
        fiber: Dietary fiber in grams
        sugar: Sugars in grams
        sodium: Sodium in milligrams
    """

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0.0

    def __post_init__(self) -> None:
        for name in ("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")


@dataclass(frozen=True)
class Ingredient:
    """A named ingredient of a meal.

    Attributes:
        name: Ingredient name (matched case-insensitively against exclusions)
        category: Optional ingredient category
        can_omit: Whether the kitchen can leave this ingredient out
    """

    name: str
    category: Optional[IngredientCategory] = None
    can_omit: bool = False


@dataclass(frozen=True)
class CandidateMeal:
    """A meal from the catalog that the planner may schedule.

    Candidate meals are never mutated by the planner. Tag sets are frozen so
    the same meal object can be shared between assignments.

    Attributes:
        meal_id: Catalog identifier
        name: Display name
        category: Meal time this meal is served at (e.g. "lunch")
        nutrition: Nutrition facts
        allergens: Allergen tags (e.g. "peanuts", "dairy")
        dietary_tags: Dietary tags (e.g. "vegan", "gluten-free")
        health_goals: Goals this meal is curated for; empty means generic
        preparation_method: Cooking method
        glycemic_index: Glycemic index classification
        ingredients: Detailed ingredient breakdown (may be empty)
        description: Optional longer description
        price: Catalog price, carried for display only
    """

    meal_id: str
    name: str
    category: str
    nutrition: Nutrition = field(default_factory=Nutrition)
    allergens: frozenset[str] = frozenset()
    dietary_tags: frozenset[str] = frozenset()
    health_goals: frozenset[str] = frozenset()
    preparation_method: PreparationMethod = PreparationMethod.MIXED
    glycemic_index: GlycemicIndex = GlycemicIndex.MEDIUM
    ingredients: tuple[Ingredient, ...] = ()
    description: str = ""
    price: float = 0.0

    @property
    def calories(self) -> float:
        """Calories per serving."""
        return self.nutrition.calories


@dataclass
class UserPreferences:
    """What the user asked for.

    Attributes:
        health_goal: Active health goal
        dietary_restrictions: Tags that must ALL be present on a chosen meal
        allergies: Allergen tags that must NOT be present on a chosen meal
        exclude_ingredients: Ingredient names to avoid
        meal_types: Requested meal times, in serving order
        duration_weeks: Plan length in weeks
    """

    health_goal: HealthGoal
    dietary_restrictions: list[str] = field(default_factory=list)
    allergies: list[str] = field(default_factory=list)
    exclude_ingredients: list[str] = field(default_factory=list)
    meal_types: list[MealTime] = field(
        default_factory=lambda: [MealTime.BREAKFAST, MealTime.LUNCH, MealTime.DINNER]
    )
    duration_weeks: int = 4

    def __post_init__(self) -> None:
        self.health_goal = parse_health_goal(self.health_goal)
        self.dietary_restrictions = as_tag_list(self.dietary_restrictions, "dietary_restrictions")
        self.allergies = as_tag_list(self.allergies, "allergies")
        self.exclude_ingredients = as_tag_list(self.exclude_ingredients, "exclude_ingredients")
        self.meal_types = [parse_meal_time(m) for m in self.meal_types]
        if not self.meal_types:
            raise ValueError("At least one meal type must be selected")
        if len(set(self.meal_types)) != len(self.meal_types):
            raise ValueError("Meal types must not repeat")
        if self.duration_weeks < 1:
            raise ValueError(f"duration_weeks must be positive, got {self.duration_weeks}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserPreferences":
        """Build preferences from a request-style dict.

        Missing optional keys fall back to the defaults of the request handler
        (breakfast/lunch/dinner for four weeks).

        Raises:
            ValueError: If the health goal is missing or any value is invalid
        """
        if not data.get("health_goal"):
            raise ValueError("Health goal is required")

        kwargs: dict[str, Any] = {"health_goal": data["health_goal"]}
        for key in ("dietary_restrictions", "allergies", "exclude_ingredients"):
            if data.get(key) is not None:
                kwargs[key] = as_tag_list(data[key], key)
        meal_types = data.get("meal_types")
        if meal_types is not None:
            # Members may already be MealTime values
            kwargs["meal_types"] = [meal_types] if isinstance(meal_types, str) else list(meal_types)
        if data.get("duration_weeks") is not None:
            kwargs["duration_weeks"] = int(data["duration_weeks"])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form with enum values as strings."""
        return {
            "health_goal": self.health_goal.value,
            "dietary_restrictions": list(self.dietary_restrictions),
            "allergies": list(self.allergies),
            "exclude_ingredients": list(self.exclude_ingredients),
            "meal_types": [m.value for m in self.meal_types],
            "duration_weeks": self.duration_weeks,
        }


@dataclass(frozen=True)
class CalorieRange:
    min: int
    max: int
    target: int


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets in grams."""

    protein_grams: int
    carbs_grams: int
    fat_grams: int


@dataclass(frozen=True)
class NutritionalTargets:
    """Targets derived from a health goal and the number of meals per day.

    Attributes:
        calories_per_day: Acceptable daily calorie range and target
        target_calories_per_day: Daily calorie target
        target_calories_per_meal: Daily target split evenly across meals
        meals_per_day: Number of requested meal times
        macros: Macronutrient gram targets
        fiber_min: Minimum daily fiber in grams
        sugar_max: Maximum daily sugar in grams
    """

    calories_per_day: CalorieRange
    target_calories_per_day: int
    target_calories_per_meal: int
    meals_per_day: int
    macros: MacroTargets
    fiber_min: int
    sugar_max: int


@dataclass(frozen=True)
class ScoredMeal:
    """A candidate meal with its goal-fit score.

    Scores are only comparable within the same health-goal scoring pass.
    """

    meal: CandidateMeal
    score: int


@dataclass(frozen=True)
class MealAssignment:
    """One filled slot of the plan.

    Attributes:
        week_number: 1-based week
        day_of_week: 1-7
        meal_time: Meal time of the slot
        meal: The scheduled meal
        sequence: Position on the plan's time axis (0-based, assembly order)
        customizations: Per-slot customizations (empty at generation time)
    """

    week_number: int
    day_of_week: int
    meal_time: MealTime
    meal: CandidateMeal
    sequence: int
    customizations: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def meal_id(self) -> str:
        """Catalog id of the scheduled meal."""
        return self.meal.meal_id

    @property
    def day_key(self) -> tuple[int, int]:
        """(week, day) pair identifying the plan day."""
        return (self.week_number, self.day_of_week)


@dataclass(frozen=True)
class UnfilledSlot:
    """A slot left empty because no eligible meal exists for its meal time."""

    week_number: int
    day_of_week: int
    meal_time: MealTime


@dataclass
class NutritionSummary:
    """Aggregate nutrition of a plan."""

    total_calories: float = 0.0
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fat: float = 0.0
    total_fiber: float = 0.0
    days: int = 0
    avg_calories_per_day: int = 0
    avg_protein_per_day: int = 0
    avg_carbs_per_day: int = 0
    avg_fat_per_day: int = 0


@dataclass
class PlanStats:
    """Meal counts of a plan."""

    total_meals: int = 0
    counts: dict[MealTime, int] = field(default_factory=dict)

    def count_for(self, meal_time: MealTime) -> int:
        """Number of meals scheduled at ``meal_time``."""
        return self.counts.get(meal_time, 0)


@dataclass(frozen=True)
class ValidationReport:
    """Achieved nutrition compared with the targets.

    Attributes:
        avg_calories_per_day: Rounded average daily calories
        avg_protein_per_day: Rounded average daily protein (g)
        calories_in_range: Average calories within the goal's daily range
        protein_deficit: Average protein below the tolerated fraction of target
    """

    avg_calories_per_day: int
    avg_protein_per_day: int
    calories_in_range: bool
    protein_deficit: bool

    @property
    def meets_targets(self) -> bool:
        """True when calories are in range and protein is sufficient."""
        return self.calories_in_range and not self.protein_deficit


@dataclass
class MealPlanResult:
    """Everything a planning run produces.

    The plan itself is ``assignments``; the remaining fields are diagnostics
    the caller can use to decide whether the plan is acceptable.
    """

    preferences: UserPreferences
    targets: NutritionalTargets
    assignments: list[MealAssignment]
    unfilled_slots: list[UnfilledSlot]
    report: ValidationReport
    summary: NutritionSummary
    stats: PlanStats
    eligible_meals: int = 0
    swaps: int = 0
    unresolved_repeats: int = 0

    @property
    def expected_slots(self) -> int:
        """Slots requested: weeks x 7 days x meal times."""
        return self.preferences.duration_weeks * 7 * len(self.preferences.meal_types)

    @property
    def is_complete(self) -> bool:
        """True when every requested slot was filled."""
        return not self.unfilled_slots
