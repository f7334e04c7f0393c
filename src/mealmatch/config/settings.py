"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".mealmatch"


def _default_db_path() -> Path:
    """Return the default catalog database path."""
    return _default_config_dir() / "catalog.db"


@dataclass
class DatabaseConfig:
    """Catalog database configuration."""

    path: Path = field(default_factory=_default_db_path)


@dataclass
class PlannerConfig:
    """Tunable constants of the planning pipeline."""

    min_eligible_meals: int = 20
    lookback_window: int = 21
    calorie_flex: float = 0.3  # per-slot window is target +/- 30%
    daily_overshoot: float = 1.1
    protein_tolerance: float = 0.9


@dataclass
class DefaultsConfig:
    """Default values for plan requests and output."""

    meal_types: list[str] = field(
        default_factory=lambda: ["breakfast", "lunch", "dinner"]
    )
    duration_weeks: int = 4
    output_format: str = "table"  # "table", "json", "markdown"


@dataclass
class Settings:
    """Main application settings."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.mealmatch/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        if "database" in data:
            db_data = data["database"] or {}
            if "path" in db_data:
                settings.database.path = Path(db_data["path"]).expanduser()

        if "planner" in data:
            planner_data = data["planner"] or {}
            if "min_eligible_meals" in planner_data:
                settings.planner.min_eligible_meals = int(planner_data["min_eligible_meals"])
            if "lookback_window" in planner_data:
                settings.planner.lookback_window = int(planner_data["lookback_window"])
            if "calorie_flex" in planner_data:
                settings.planner.calorie_flex = float(planner_data["calorie_flex"])
            if "daily_overshoot" in planner_data:
                settings.planner.daily_overshoot = float(planner_data["daily_overshoot"])
            if "protein_tolerance" in planner_data:
                settings.planner.protein_tolerance = float(planner_data["protein_tolerance"])

        if "defaults" in data:
            def_data = data["defaults"] or {}
            if "meal_types" in def_data:
                settings.defaults.meal_types = list(def_data["meal_types"])
            if "duration_weeks" in def_data:
                settings.defaults.duration_weeks = int(def_data["duration_weeks"])
            if "output_format" in def_data:
                settings.defaults.output_format = def_data["output_format"]

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.mealmatch/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "database": {
                "path": str(self.database.path),
            },
            "planner": {
                "min_eligible_meals": self.planner.min_eligible_meals,
                "lookback_window": self.planner.lookback_window,
                "calorie_flex": self.planner.calorie_flex,
                "daily_overshoot": self.planner.daily_overshoot,
                "protein_tolerance": self.planner.protein_tolerance,
            },
            "defaults": {
                "meal_types": self.defaults.meal_types,
                "duration_weeks": self.defaults.duration_weeks,
                "output_format": self.defaults.output_format,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load()
    return _settings
