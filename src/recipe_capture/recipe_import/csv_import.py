"""
CSV bulk import - many recipes from one spreadsheet export.

Delimiter is auto-detected from the header row (comma or semicolon).

Supported columns:
- Name -> title
- Erstellt am -> created_at_raw (kept as text)
- Erstellt von -> author_name
- Kulinarik -> cuisines (comma-separated)
- Speisenkategorie -> categories (comma-separated)
- Portionen -> servings + servings_unit ("4 Portionen", "2 Personen", "12 Stück")
- Zubereitung -> cooking time in minutes
- Schwierigkeit -> difficulty (1-5)
- Zutat1..ZutatN -> ingredients
- Zubereitungsschritt1..N -> steps (leading "1. " numbering removed)

Fields starting with "###" become headings. Every imported recipe is private.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence

from recipe_capture.exceptions import CsvImportError, CsvRowError, RecipeInputError

from .models import DraftBuilder, ItemKind, RecipeDraft
from .normalizer import (
    parse_cooking_time,
    parse_difficulty,
    parse_portion,
    split_comma_separated,
    strip_step_number,
)

logger = logging.getLogger(__name__)

BOM = "\ufeff"

# Async (or plain) callable: categories -> image reference
CategoryImageLookup = Callable[[list[str]], Awaitable[str | None] | str | None]


def detect_delimiter(header_line: str) -> str:
    """
    Detect the delimiter of a CSV header line.

    Counts commas and semicolons outside quotes; semicolon wins only when
    strictly more frequent.
    """
    comma_count = 0
    semicolon_count = 0
    in_quotes = False

    i = 0
    while i < len(header_line):
        char = header_line[i]
        if char == '"':
            if in_quotes and i + 1 < len(header_line) and header_line[i + 1] == '"':
                i += 1  # escaped quote
            else:
                in_quotes = not in_quotes
        elif not in_quotes:
            if char == ",":
                comma_count += 1
            elif char == ";":
                semicolon_count += 1
        i += 1

    return ";" if semicolon_count > comma_count else ","


def split_csv_line(line: str, delimiter: str = ",") -> list[str]:
    """
    Split one CSV line into raw field values.

    '"' toggles quoting, '""' inside quotes is a literal quote and the
    delimiter is literal inside quotes.
    """
    values: list[str] = []
    current: list[str] = []
    in_quotes = False

    i = 0
    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            values.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    values.append("".join(current))
    return values


def _parse_row(headers: Sequence[str], values: Sequence[str]) -> DraftBuilder:
    builder = DraftBuilder(is_private=True)

    for header, raw in zip(headers, values):
        header = header.strip()
        value = raw.strip()
        if not value:
            continue

        if header == "Name":
            builder.title = value
        elif header == "Erstellt am":
            builder.created_at_raw = value
        elif header == "Erstellt von":
            builder.author_name = value
        elif header == "Kulinarik":
            builder.cuisines = split_comma_separated(value)
        elif header == "Speisenkategorie":
            builder.categories = split_comma_separated(value)
        elif header == "Portionen":
            builder.servings, builder.servings_unit = parse_portion(value)
        elif header == "Zubereitung":
            builder.cooking_time_minutes = parse_cooking_time(value)
        elif header == "Schwierigkeit":
            builder.difficulty = parse_difficulty(value)
        elif header.startswith("Zubereitungsschritt"):
            if value.startswith("###"):
                builder.add_item(ItemKind.STEP, value)
            else:
                builder.add_item(ItemKind.STEP, strip_step_number(value))
        elif header.startswith("Zutat"):
            builder.add_item(ItemKind.INGREDIENT, value)

    return builder


def _check_row(builder: DraftBuilder, row_number: int) -> None:
    if not builder.title:
        raise CsvRowError(row_number, "Rezeptname fehlt")

    if not builder.ingredients:
        raise CsvRowError(row_number, "Mindestens eine Zutat erforderlich", title=builder.title)

    if not builder.steps:
        raise CsvRowError(row_number, "Mindestens ein Zubereitungsschritt erforderlich", title=builder.title)


async def _resolve_category_image(
    get_category_image: CategoryImageLookup,
    categories: list[str],
) -> str | None:
    image = get_category_image(categories)
    if inspect.isawaitable(image):
        image = await image
    return image or None


async def parse_delimited_recipes(
    content: str,
    current_user_name: str = "",
    *,
    get_category_image: CategoryImageLookup | None = None,
) -> list[RecipeDraft]:
    """
    Parse CSV content into recipe drafts, one per data row.

    Rows missing a title, ingredients or steps are skipped and reported;
    the call only fails when no row is usable.

    Args:
        content: CSV text (a leading UTF-8 BOM is ignored)
        current_user_name: Author for rows without an "Erstellt von" value
        get_category_image: Optional lookup for recipes without an image

    Returns:
        Drafts in row order

    Raises:
        RecipeInputError: If content is not text or has no data row
        CsvImportError: If every row failed (carries the row messages)
    """
    if not isinstance(content, str) or not content:
        raise RecipeInputError("Ungültiger CSV-Inhalt")

    if content.startswith(BOM):
        content = content[len(BOM):]

    lines = [line for line in content.split("\n") if line.strip()]
    if len(lines) < 2:
        raise RecipeInputError("CSV muss mindestens Header und eine Datenzeile enthalten")

    delimiter = detect_delimiter(lines[0])
    headers = split_csv_line(lines[0], delimiter)
    logger.debug(f"CSV import: {len(lines) - 1} rows, delimiter {delimiter!r}")

    recipes: list[RecipeDraft] = []
    errors: list[str] = []

    for row_number, line in enumerate(lines[1:], start=2):
        builder = _parse_row(headers, split_csv_line(line, delimiter))
        try:
            _check_row(builder, row_number)
        except CsvRowError as e:
            errors.append(str(e))
            continue

        if not builder.author_name:
            builder.author_name = current_user_name

        if get_category_image and not builder.image_ref and builder.categories:
            try:
                image = await _resolve_category_image(get_category_image, list(builder.categories))
            except Exception as e:
                logger.warning(f"Category image lookup failed for '{builder.title}': {e}")
                image = None
            if image:
                builder.image_ref = image

        recipes.append(builder.build())

    if errors:
        if not recipes:
            raise CsvImportError(errors)
        logger.warning(f"Einige Rezepte konnten nicht importiert werden: {errors}")

    if not recipes:
        raise CsvImportError([])

    return recipes


# Name used by the bulk import UI
parse_bulk_csv = parse_delimited_recipes
