"""Configuration management."""

from mealmatch.config.settings import (
    DatabaseConfig,
    DefaultsConfig,
    PlannerConfig,
    Settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "DatabaseConfig",
    "DefaultsConfig",
    "PlannerConfig",
    "Settings",
    "get_settings",
    "reload_settings",
]
