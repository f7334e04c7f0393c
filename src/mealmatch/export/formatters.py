"""Output formatters for generated meal plans."""

from __future__ import annotations

import json
from datetime import datetime
from itertools import groupby
from typing import Any, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from mealmatch.planner.models import MealAssignment, MealPlanResult, MealTime, NutritionalTargets


def targets_to_dict(targets: NutritionalTargets) -> dict[str, Any]:
    """Nested dict form of the targets for JSON output."""
    return {
        "calories_per_day": {
            "min": targets.calories_per_day.min,
            "max": targets.calories_per_day.max,
            "target": targets.calories_per_day.target,
        },
        "target_calories_per_day": targets.target_calories_per_day,
        "target_calories_per_meal": targets.target_calories_per_meal,
        "meals_per_day": targets.meals_per_day,
        "macros": {
            "protein_grams": targets.macros.protein_grams,
            "carbs_grams": targets.macros.carbs_grams,
            "fat_grams": targets.macros.fat_grams,
        },
        "fiber_min": targets.fiber_min,
        "sugar_max": targets.sugar_max,
    }


def _by_week(assignments: list[MealAssignment]):
    ordered = sorted(assignments, key=lambda a: a.sequence)
    return groupby(ordered, key=lambda a: a.week_number)


class TableFormatter:
    """Format plans as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format(self, result: MealPlanResult, timestamp: Optional[datetime] = None) -> None:
        """Print formatted tables to console.

        Args:
            result: Generated plan
            timestamp: Shown in the header when given
        """
        prefs = result.preferences
        report = result.report
        status_color = "green" if report.meets_targets else "yellow"
        status = "MEETS TARGETS" if report.meets_targets else "NEEDS ADJUSTMENT"
        cal_range = result.targets.calories_per_day

        header_lines = [
            "[bold]CUSTOM MEAL PLAN[/bold]"
            + (f" - {timestamp.strftime('%Y-%m-%d %H:%M')}" if timestamp else ""),
            f"Goal: {prefs.health_goal.value} | {prefs.duration_weeks} week(s) | "
            f"{', '.join(m.value for m in prefs.meal_types)}",
            f"Calories/day: {report.avg_calories_per_day} (target {cal_range.min}-{cal_range.max})",
            f"Protein/day: {report.avg_protein_per_day}g (target {result.targets.macros.protein_grams}g)",
            f"Status: [{status_color}]{status}[/{status_color}]",
        ]
        self.console.print(Panel("\n".join(header_lines), title="Meal Plan"))

        for week, week_assignments in _by_week(result.assignments):
            table = Table(title=f"Week {week}")
            table.add_column("Day", justify="right")
            table.add_column("Meal Time")
            table.add_column("Meal", style="cyan", max_width=50)
            table.add_column("kcal", justify="right")
            table.add_column("Protein", justify="right")

            for a in week_assignments:
                n = a.meal.nutrition
                table.add_row(
                    str(a.day_of_week),
                    a.meal_time.value,
                    a.meal.name[:50],
                    f"{n.calories:.0f}",
                    f"{n.protein:.0f}g",
                )
            self.console.print(table)

        for slot in result.unfilled_slots:
            self.console.print(
                f"[yellow]Unfilled: week {slot.week_number}, day {slot.day_of_week}, "
                f"{slot.meal_time.value}[/yellow]"
            )

        info_parts = [
            f"Eligible meals: {result.eligible_meals}",
            f"Swaps: {result.swaps}",
            f"Repeats kept: {result.unresolved_repeats}",
        ]
        self.console.print(f"[dim]{' | '.join(info_parts)}[/dim]")


class JSONFormatter:
    """Format plans as JSON for programmatic use."""

    def format(self, result: MealPlanResult, timestamp: Optional[datetime] = None) -> str:
        """Serialize a plan. The output depends only on the plan and ``timestamp``."""
        summary = result.summary
        data: dict[str, Any] = {}
        if timestamp is not None:
            data["timestamp"] = timestamp.isoformat()
        data.update({
            "preferences": result.preferences.to_dict(),
            "targets": targets_to_dict(result.targets),
            "meal_assignments": [
                {
                    "week_number": a.week_number,
                    "day_of_week": a.day_of_week,
                    "meal_time": a.meal_time.value,
                    "meal_id": a.meal_id,
                    "meal_name": a.meal.name,
                    "calories": a.meal.nutrition.calories,
                    "protein": a.meal.nutrition.protein,
                    "customizations": a.customizations,
                }
                for a in sorted(result.assignments, key=lambda a: a.sequence)
            ],
            "unfilled_slots": [
                {
                    "week_number": s.week_number,
                    "day_of_week": s.day_of_week,
                    "meal_time": s.meal_time.value,
                }
                for s in result.unfilled_slots
            ],
            "validation": {
                "avg_calories_per_day": result.report.avg_calories_per_day,
                "avg_protein_per_day": result.report.avg_protein_per_day,
                "calories_in_range": result.report.calories_in_range,
                "protein_deficit": result.report.protein_deficit,
                "meets_targets": result.report.meets_targets,
            },
            "nutrition_summary": {
                "total_calories": round(summary.total_calories, 1),
                "avg_calories_per_day": summary.avg_calories_per_day,
                "avg_protein_per_day": summary.avg_protein_per_day,
                "avg_carbs_per_day": summary.avg_carbs_per_day,
                "avg_fat_per_day": summary.avg_fat_per_day,
                "total_protein": round(summary.total_protein, 1),
                "total_carbs": round(summary.total_carbs, 1),
                "total_fat": round(summary.total_fat, 1),
                "total_fiber": round(summary.total_fiber, 1),
            },
            "stats": {
                "total_meals": result.stats.total_meals,
                **{f"{mt.value}_count": result.stats.count_for(mt) for mt in MealTime},
            },
            "variety": {
                "swaps": result.swaps,
                "unresolved_repeats": result.unresolved_repeats,
            },
        })
        return json.dumps(data, indent=2)


class MarkdownFormatter:
    """Format plans as Markdown for sharing or documentation."""

    def format(self, result: MealPlanResult) -> str:
        """Render the plan as a Markdown document, one table per week."""
        prefs = result.preferences
        report = result.report
        lines = [
            "# Custom Meal Plan",
            "",
            f"**Health goal:** {prefs.health_goal.value}",
            f"**Duration:** {prefs.duration_weeks} week(s)",
            f"**Average calories/day:** {report.avg_calories_per_day} kcal",
            f"**Average protein/day:** {report.avg_protein_per_day} g",
            f"**Meets targets:** {'yes' if report.meets_targets else 'no'}",
        ]

        for week, week_assignments in _by_week(result.assignments):
            lines.extend(["", f"## Week {week}", "", "| Day | Meal Time | Meal | kcal |", "|-----|-----------|------|------|"])
            for a in week_assignments:
                lines.append(
                    f"| {a.day_of_week} | {a.meal_time.value} | {a.meal.name} | {a.meal.nutrition.calories:.0f} |"
                )

        if result.unfilled_slots:
            lines.extend(["", "## Unfilled Slots", ""])
            for s in result.unfilled_slots:
                lines.append(f"- Week {s.week_number}, day {s.day_of_week}: {s.meal_time.value}")

        return "\n".join(lines)


def format_plan(
    result: MealPlanResult,
    output_format: str = "table",
    console: Optional[Console] = None,
    timestamp: Optional[datetime] = None,
) -> Optional[str]:
    """Format a meal plan in the specified format.

    Args:
        result: Generated plan
        output_format: One of 'table', 'json', 'markdown'
        console: Rich console (for table format)
        timestamp: Generation time to include (omitted when None)

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    if output_format == "table":
        TableFormatter(console).format(result, timestamp)
        return None
    elif output_format == "json":
        return JSONFormatter().format(result, timestamp)
    elif output_format == "markdown":
        return MarkdownFormatter().format(result)
    else:
        raise ValueError(f"Unknown output format: {output_format}")
