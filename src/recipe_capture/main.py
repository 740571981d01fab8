"""
Recipe Capture - CLI Entry Point.

Usage:
    recipe-capture parse scan.txt              Parse OCR text into a recipe
    recipe-capture parse scan.txt --json       Same, as JSON
    recipe-capture classify scan.txt           Show per-line classification
    recipe-capture import-csv recipes.csv      Bulk import from CSV
    recipe-capture notion export.md            Import a Notion page/CSV
    recipe-capture import-json recipe.json     Import a JSON recipe
    recipe-capture serve                       Start the web API
    recipe-capture health                      Check configuration
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from recipe_capture.exceptions import RecipeCaptureError
from recipe_capture.recipe_import import (
    ItemKind,
    LineType,
    ListItem,
    RecipeDraft,
    ValidationReport,
    get_validation_summary,
    import_from_json,
    parse_delimited_recipes,
    parse_single_notion_document,
    parse_smart,
)
from recipe_capture.recipe_import.classifier import default_classifier
from recipe_capture.recipe_import.normalizer import format_ingredient_spacing

app = typer.Typer(
    name="recipe-capture",
    help="Recipe Capture - Turn scanned or exported recipe text into structured recipes.",
    add_completion=False,
)
console = Console()


def setup_logging(level: str = "INFO") -> None:
    """Log to stderr so --json output stays clean."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    # Quiet down noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    from recipe_capture.config import settings

    setup_logging("DEBUG" if verbose else settings.log_level)


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def _with_spacing(recipe: RecipeDraft) -> RecipeDraft:
    ingredients = tuple(
        item if item.kind == ItemKind.HEADING else ListItem(kind=item.kind, text=format_ingredient_spacing(item.text))
        for item in recipe.ingredients
    )
    return recipe.model_copy(update={"ingredients": ingredients})


def _print_items(title: str, items: tuple[ListItem, ...], numbered: bool = False) -> None:
    console.print(f"\n[bold]{title}[/bold]")
    if not items:
        console.print("  [dim](none)[/dim]")
        return

    number = 0
    for item in items:
        if item.kind == ItemKind.HEADING:
            console.print(f"  [bold blue]{item.text}[/bold blue]")
        elif numbered:
            number += 1
            console.print(f"  {number}. {item.text}")
        else:
            console.print(f"  • {item.text}")


def _print_recipe(recipe: RecipeDraft) -> None:
    cuisines = ", ".join(recipe.cuisines) or "-"
    console.print(
        Panel.fit(
            f"[bold green]{recipe.title}[/bold green]\n"
            f"[dim]Servings: {recipe.servings} ({recipe.servings_unit}) · "
            f"Time: {recipe.cooking_time_minutes} min · "
            f"Difficulty: {recipe.difficulty}/5 · "
            f"Cuisine: {cuisines}[/dim]",
            border_style="green",
        )
    )
    _print_items("Ingredients", recipe.ingredients)
    _print_items("Steps", recipe.steps, numbered=True)
    if recipe.notes:
        console.print(f"\n[bold]Notes:[/bold] {recipe.notes}")


def _print_validation(report: ValidationReport, lang: str) -> None:
    color = "green" if report.score >= 70 else "yellow" if report.score >= 50 else "red"
    console.print(f"\n[{color}]{get_validation_summary(report, lang)}[/{color}]")
    for warning in report.warnings:
        console.print(f"[yellow]WARN[/yellow] {warning}")
    for suggestion in report.suggestions:
        console.print(f"[dim]TIP  {suggestion}[/dim]")


@app.command()
def parse(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Input file"),
    lang: str | None = typer.Option(None, "--lang", "-l", help="Recipe language: de or en"),
    as_json: bool = typer.Option(False, "--json", help="Print recipe and validation as JSON"),
    spacing: bool = typer.Option(False, "--spacing", help='Normalize "100ml" to "100 ml" in ingredients'),
) -> None:
    """Parse OCR text into a recipe and rate the recognition quality."""
    from recipe_capture.config import settings

    lang = lang or settings.default_language
    try:
        result = parse_smart(_read(file), lang)
    except RecipeCaptureError as e:
        _fail(str(e))

    recipe = _with_spacing(result.recipe) if spacing else result.recipe

    if as_json:
        payload = {
            "recipe": recipe.model_dump(mode="json"),
            "validation": result.validation.model_dump(mode="json"),
        }
        typer.echo(_dump_json(payload))
        return

    _print_recipe(recipe)
    _print_validation(result.validation, lang)


@app.command()
def classify(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Input file"),
    lang: str | None = typer.Option(None, "--lang", "-l", help="Recipe language: de or en"),
) -> None:
    """Show how each line would be classified (ingredient, step or unknown)."""
    from recipe_capture.config import settings

    lang = lang or settings.default_language
    lines = [line.strip() for line in _read(file).split("\n") if line.strip()]

    table = Table(title="Line classification")
    table.add_column("Line")
    table.add_column("Kind")
    table.add_column("Confidence", justify="right")

    styles = {LineType.INGREDIENT: "green", LineType.STEP: "blue", LineType.UNKNOWN: "dim"}
    for line in lines:
        result = default_classifier.classify_line(line, lang)
        style = styles[result.kind]
        table.add_row(line, f"[{style}]{result.kind.value}[/{style}]", str(result.confidence))

    console.print(table)


@app.command("import-csv")
def import_csv(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Input file"),
    author: str = typer.Option("", "--author", "-a", help="Author for rows without 'Erstellt von'"),
    as_json: bool = typer.Option(False, "--json", help="Print recipes as JSON"),
) -> None:
    """Bulk import recipes from a CSV export."""
    try:
        recipes = asyncio.run(parse_delimited_recipes(_read(file), author))
    except RecipeCaptureError as e:
        _fail(str(e))

    if as_json:
        typer.echo(_dump_json([recipe.model_dump(mode="json") for recipe in recipes]))
        return

    table = Table(title=f"Imported {len(recipes)} recipes")
    table.add_column("Title")
    table.add_column("Servings", justify="right")
    table.add_column("Time", justify="right")
    table.add_column("Ingredients", justify="right")
    table.add_column("Steps", justify="right")
    table.add_column("Author")
    for recipe in recipes:
        table.add_row(
            recipe.title,
            f"{recipe.servings} {recipe.servings_unit}",
            f"{recipe.cooking_time_minutes} min",
            str(len(recipe.ingredient_texts)),
            str(len(recipe.step_texts)),
            recipe.author_name or "-",
        )
    console.print(table)


@app.command()
def notion(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Input file"),
    as_json: bool = typer.Option(False, "--json", help="Print recipe as JSON"),
) -> None:
    """Import a recipe from a Notion Markdown or CSV export."""
    try:
        recipe = parse_single_notion_document(_read(file))
    except RecipeCaptureError as e:
        _fail(str(e))

    if as_json:
        typer.echo(recipe.model_dump_json(indent=2))
        return
    _print_recipe(recipe)


@app.command("import-json")
def import_json(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Input file"),
) -> None:
    """Import a recipe from JSON (German or English keys)."""
    try:
        recipe = import_from_json(_read(file))
    except RecipeCaptureError as e:
        _fail(str(e))

    _print_recipe(recipe)


@app.command()
def health() -> None:
    """Check configuration."""
    from recipe_capture.config import get_settings

    console.print("\n[bold]Recipe Capture Health Check[/bold]\n")

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"\n[red]FAIL Configuration error: {e}[/red]")
        console.print("[dim]Check your RECIPE_CAPTURE_* environment variables or .env file.[/dim]")
        raise typer.Exit(1)

    console.print("[green]OK[/green] Configuration loaded")
    console.print(f"   Environment: {settings.environment}")
    console.print(f"   Log level: {settings.log_level}")
    console.print(f"   Default language: {settings.default_language}")
    console.print(f"   Minimum acceptable score: {settings.min_acceptable_score}")
    console.print(f"   OCR auto-language threshold: {settings.ocr_auto_threshold:.0f}")
    console.print("\n[green]All checks passed![/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from recipe_capture import __version__

    console.print(f"Recipe Capture version {__version__}")


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the web API server."""
    import uvicorn

    console.print("\n[bold green]Recipe Capture API[/bold green]")
    console.print(f"Starting server on http://localhost:{port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "recipe_capture.web.app:create_app",
        factory=True,
        host="0.0.0.0",
        port=port,
        reload=reload,
    )


def _dump_json(payload) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


if __name__ == "__main__":
    app()
