"""SQLite database schema definitions."""

SCHEMA_SQL = """
-- Curated meals the planner may schedule
CREATE TABLE IF NOT EXISTS custom_meals (
    meal_id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT,
    category TEXT NOT NULL,
    calories REAL DEFAULT 0,
    protein REAL DEFAULT 0,
    carbs REAL DEFAULT 0,
    fat REAL DEFAULT 0,
    fiber REAL DEFAULT 0,
    sugar REAL DEFAULT 0,
    sodium REAL DEFAULT 0,
    preparation_method TEXT DEFAULT 'mixed',
    glycemic_index TEXT DEFAULT 'medium',
    price REAL DEFAULT 0,
    status TEXT DEFAULT 'active',
    available_for_custom_plans BOOLEAN DEFAULT TRUE,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_custom_meals_category ON custom_meals(category);
CREATE INDEX IF NOT EXISTS idx_custom_meals_status ON custom_meals(status);

-- Allergen tags per meal
CREATE TABLE IF NOT EXISTS meal_allergens (
    meal_id TEXT,
    allergen TEXT NOT NULL,
    PRIMARY KEY (meal_id, allergen),
    FOREIGN KEY (meal_id) REFERENCES custom_meals(meal_id)
);

-- Dietary tags per meal
CREATE TABLE IF NOT EXISTS meal_dietary_tags (
    meal_id TEXT,
    tag TEXT NOT NULL,
    PRIMARY KEY (meal_id, tag),
    FOREIGN KEY (meal_id) REFERENCES custom_meals(meal_id)
);

-- Health goals a meal is curated for (none = generic)
CREATE TABLE IF NOT EXISTS meal_health_goals (
    meal_id TEXT,
    health_goal TEXT NOT NULL,
    PRIMARY KEY (meal_id, health_goal),
    FOREIGN KEY (meal_id) REFERENCES custom_meals(meal_id)
);

-- Detailed ingredient breakdown, in recipe order
CREATE TABLE IF NOT EXISTS meal_ingredients (
    meal_id TEXT,
    position INTEGER NOT NULL,
    name TEXT NOT NULL,
    category TEXT,
    can_omit BOOLEAN DEFAULT FALSE,
    PRIMARY KEY (meal_id, position),
    FOREIGN KEY (meal_id) REFERENCES custom_meals(meal_id)
);

CREATE INDEX IF NOT EXISTS idx_meal_ingredients_name ON meal_ingredients(name);
"""


def get_schema_sql() -> str:
    """Return the complete schema SQL."""
    return SCHEMA_SQL
