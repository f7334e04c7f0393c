"""SQLite storage for the meal catalog."""

from mealmatch.db.connection import DatabaseConnection, get_db

__all__ = ["DatabaseConnection", "get_db"]
