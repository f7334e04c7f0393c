"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from mealmatch.catalog import (
    CatalogCriteria,
    InMemoryMealCatalog,
    SQLiteMealCatalog,
    load_catalog_yaml,
)
from mealmatch.config import get_settings
from mealmatch.db import DatabaseConnection, get_db
from mealmatch.export import format_plan, targets_to_dict
from mealmatch.planner import InsufficientMealsError, UserPreferences
from mealmatch.planner.engine import MealPlanner
from mealmatch.planner.models import parse_health_goal, parse_meal_time
from mealmatch.planner.targets import calculate_nutritional_targets

app = typer.Typer(
    help="Goal-driven custom meal plan generation",
    no_args_is_help=True,
)
console = Console()

catalog_app = typer.Typer(help="Manage the meal catalog")
app.add_typer(catalog_app, name="catalog")


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def _open_db(db_path: Optional[Path]) -> DatabaseConnection:
    return DatabaseConnection(db_path) if db_path else get_db()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline progress"),
) -> None:
    """Goal-driven custom meal plan generation."""
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@app.command()
def init(
    db_path: Optional[Path] = typer.Option(None, "--db", help="Custom database path"),
) -> None:
    """Create the meal catalog database."""
    db = _open_db(db_path)
    db.initialize_schema()
    console.print(f"[green]Catalog database ready at {db.db_path}[/green]")


@catalog_app.command("import")
def catalog_import(
    catalog_file: Path = typer.Argument(..., help="YAML catalog file"),
    db_path: Optional[Path] = typer.Option(None, "--db", help="Custom database path"),
) -> None:
    """Import meals from a YAML catalog into the database."""
    if not catalog_file.exists():
        console.print(f"[red]Catalog file not found: {catalog_file}[/red]")
        raise typer.Exit(1)

    try:
        entries = load_catalog_yaml(catalog_file)
    except (KeyError, ValueError) as e:
        console.print(f"[red]Invalid catalog: {e}[/red]")
        raise typer.Exit(1)

    db = _open_db(db_path)
    db.initialize_schema()
    count = SQLiteMealCatalog(db).import_entries(entries)
    console.print(f"[green]Imported {count} meals into {db.db_path}[/green]")


@catalog_app.command("list")
def catalog_list(
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Only this meal time"),
    db_path: Optional[Path] = typer.Option(None, "--db", help="Custom database path"),
) -> None:
    """List plan-eligible meals stored in the database."""
    db = _open_db(db_path)
    if not db.table_exists("custom_meals"):
        console.print("[red]Catalog database not initialized.[/red]")
        console.print("Run: [cyan]mealmatch init[/cyan]")
        raise typer.Exit(1)

    try:
        meals = SQLiteMealCatalog(db).list_eligible_meals(CatalogCriteria())
    except ValueError as e:
        console.print(f"[red]Invalid catalog data: {e}[/red]")
        raise typer.Exit(1)
    if category:
        meals = [m for m in meals if m.category.lower() == category.lower()]

    if not meals:
        console.print("[yellow]No meals found[/yellow]")
        return

    table = Table(title="Meal Catalog")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category", style="dim")
    table.add_column("kcal", justify="right")
    table.add_column("Goals", style="blue")
    table.add_column("Allergens", style="red")

    for m in meals:
        table.add_row(
            m.meal_id,
            m.name,
            m.category,
            f"{m.nutrition.calories:.0f}",
            ", ".join(sorted(m.health_goals)) or "generic",
            ", ".join(sorted(m.allergens)),
        )

    console.print(table)
    console.print(f"[dim]{len(meals)} meals[/dim]")


@app.command()
def targets(
    goal: str = typer.Argument(..., help="Health goal (e.g. weight_loss)"),
    meal_types: Optional[list[str]] = typer.Option(
        None, "--meal-type", "-m", help="Meal time to include (repeatable)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show nutritional targets for a health goal."""
    settings = get_settings()
    try:
        health_goal = parse_health_goal(goal)
        times = [parse_meal_time(m) for m in (meal_types or settings.defaults.meal_types)]
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    result = calculate_nutritional_targets(health_goal, len(times))

    if json_output:
        output_json(targets_to_dict(result))
        return

    table = Table(title=f"Targets: {health_goal.value}")
    table.add_column("Target")
    table.add_column("Value", justify="right")
    table.add_row("Calories/day", f"{result.calories_per_day.min}-{result.calories_per_day.max} (target {result.target_calories_per_day})")
    table.add_row("Calories/meal", str(result.target_calories_per_meal))
    table.add_row("Protein", f"{result.macros.protein_grams}g")
    table.add_row("Carbs", f"{result.macros.carbs_grams}g")
    table.add_row("Fat", f"{result.macros.fat_grams}g")
    table.add_row("Fiber min", f"{result.fiber_min}g")
    table.add_row("Sugar max", f"{result.sugar_max}g")
    console.print(table)


@app.command()
def generate(
    goal: str = typer.Option(..., "--goal", "-g", help="Health goal"),
    restrictions: Optional[list[str]] = typer.Option(
        None, "--restriction", "-r", help="Required dietary tag (repeatable)"
    ),
    allergies: Optional[list[str]] = typer.Option(
        None, "--allergy", "-a", help="Allergen to avoid (repeatable)"
    ),
    exclude: Optional[list[str]] = typer.Option(
        None, "--exclude", "-x", help="Ingredient to exclude (repeatable)"
    ),
    meal_types: Optional[list[str]] = typer.Option(
        None, "--meal-type", "-m", help="Meal time to plan (repeatable, in order)"
    ),
    weeks: Optional[int] = typer.Option(None, "--weeks", "-w", help="Plan duration in weeks"),
    catalog_file: Optional[Path] = typer.Option(
        None, "--catalog", help="YAML catalog to use instead of the database"
    ),
    db_path: Optional[Path] = typer.Option(None, "--db", help="Custom database path"),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, markdown"
    ),
    output_file: Optional[Path] = typer.Option(None, "--output", "-o", help="Write output to file"),
) -> None:
    """Generate a custom meal plan."""
    settings = get_settings()
    output_format = output_format or settings.defaults.output_format

    try:
        preferences = UserPreferences.from_dict({
            "health_goal": goal,
            "dietary_restrictions": restrictions or [],
            "allergies": allergies or [],
            "exclude_ingredients": exclude or [],
            "meal_types": meal_types or settings.defaults.meal_types,
            "duration_weeks": weeks if weeks is not None else settings.defaults.duration_weeks,
        })
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if catalog_file is not None:
        if not catalog_file.exists():
            console.print(f"[red]Catalog file not found: {catalog_file}[/red]")
            raise typer.Exit(1)
        try:
            catalog = InMemoryMealCatalog(load_catalog_yaml(catalog_file))
        except (KeyError, ValueError) as e:
            console.print(f"[red]Invalid catalog: {e}[/red]")
            raise typer.Exit(1)
    else:
        db = _open_db(db_path)
        if not db.table_exists("custom_meals"):
            console.print("[red]Catalog database not initialized.[/red]")
            console.print("Run: [cyan]mealmatch catalog import <catalog.yaml>[/cyan]")
            raise typer.Exit(1)
        catalog = SQLiteMealCatalog(db)

    planner = MealPlanner(catalog, settings.planner)
    try:
        result = planner.generate(preferences)
    except InsufficientMealsError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Invalid catalog data: {e}[/red]")
        raise typer.Exit(1)

    try:
        rendered = format_plan(result, output_format, console)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if rendered is None:
        return
    if output_file:
        output_file.write_text(rendered)
        console.print(f"[green]Plan written to {output_file}[/green]")
    else:
        print(rendered)


if __name__ == "__main__":
    app()
