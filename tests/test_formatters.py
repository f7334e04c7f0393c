"""Tests for plan output formatters."""

from __future__ import annotations

import io
import json
from datetime import datetime

import pytest
from rich.console import Console

from mealmatch.export import format_plan
from mealmatch.planner.engine import MealPlanner
from mealmatch.planner.models import HealthGoal, UserPreferences


@pytest.fixture
def plan_result(maintenance_catalog):
    prefs = UserPreferences(health_goal=HealthGoal.MAINTENANCE, duration_weeks=1)
    return MealPlanner(maintenance_catalog).generate(prefs)


class TestJSONFormatter:
    """Tests for JSON output."""

    def test_structure(self, plan_result):
        """Top-level sections and key values are present."""
        data = json.loads(format_plan(plan_result, "json"))

        assert set(data) == {
            "preferences", "targets", "meal_assignments", "unfilled_slots",
            "validation", "nutrition_summary", "stats", "variety",
        }
        assert len(data["meal_assignments"]) == 21
        assert data["meal_assignments"][0]["meal_time"] == "breakfast"
        assert data["preferences"]["health_goal"] == "maintenance"
        assert data["targets"]["target_calories_per_meal"] == 733
        assert data["stats"]["total_meals"] == 21
        assert data["stats"]["lunch_count"] == 7
        assert data["stats"]["snack_count"] == 0
        assert data["validation"]["calories_in_range"] is True
        assert data["unfilled_slots"] == []

    def test_output_is_reproducible(self, plan_result):
        """Without a timestamp the JSON depends only on the plan."""
        assert format_plan(plan_result, "json") == format_plan(plan_result, "json")

    def test_timestamp_included_when_given(self, plan_result):
        """An explicit timestamp is serialized in ISO format."""
        stamp = datetime(2026, 3, 1, 9, 30)
        data = json.loads(format_plan(plan_result, "json", timestamp=stamp))
        assert data["timestamp"] == "2026-03-01T09:30:00"


class TestMarkdownFormatter:
    """Tests for Markdown output."""

    def test_header_and_weeks(self, plan_result):
        """Document starts with the title and has a section per week."""
        text = format_plan(plan_result, "markdown")
        assert text.startswith("# Custom Meal Plan")
        assert "## Week 1" in text
        assert "**Health goal:** maintenance" in text
        assert "Unfilled" not in text


class TestTableFormatter:
    """Tests for Rich table output."""

    def test_prints_to_console(self, plan_result):
        """Tables go to the console and nothing is returned."""
        buffer = io.StringIO()
        console = Console(file=buffer, width=120)

        assert format_plan(plan_result, "table", console) is None

        output = buffer.getvalue()
        assert "Week 1" in output
        assert "MEETS TARGETS" in output

    def test_header_timestamp(self, plan_result):
        """An explicit timestamp appears in the table header."""
        buffer = io.StringIO()
        format_plan(plan_result, "table", Console(file=buffer, width=120), timestamp=datetime(2026, 3, 1, 9, 30))
        assert "2026-03-01 09:30" in buffer.getvalue()


def test_unknown_format(plan_result):
    """Unsupported formats raise ValueError."""
    with pytest.raises(ValueError, match="Unknown output format"):
        format_plan(plan_result, "csv")
