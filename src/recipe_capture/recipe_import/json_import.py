"""
JSON recipe import.

Accepts hand-written JSON, Notion-style exports and the structured output
of the vision extraction service (German or English keys, optionally
wrapped in a ```json code fence).
"""

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from recipe_capture.exceptions import RecipeInputError

from .models import DraftBuilder, ItemKind, RecipeDraft
from .normalizer import parse_duration_minutes, parse_leading_int, split_comma_separated
from .sections import apply_tags

logger = logging.getLogger(__name__)

# Field -> accepted keys, first non-empty wins
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "title": ("title", "name", "titel"),
    "image": ("image", "imageUrl", "foto"),
    "servings": ("portionen", "servings", "portions"),
    "cuisines": ("kulinarik", "cuisine", "kulinarisch"),
    "difficulty": ("schwierigkeit", "difficulty", "schwierigkeitsgrad"),
    "cooking_time": ("kochdauer", "cookingTime", "zeit", "cookTime", "zubereitungszeit", "kochzeit", "prepTime"),
    "category": ("speisekategorie", "category", "kategorie"),
    "ingredients": ("ingredients", "zutaten"),
    "steps": ("steps", "schritte", "zubereitung"),
    "notes": ("notes", "notizen"),
    "tags": ("tags",),
}

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def _first(data: Mapping[str, Any], field: str) -> Any:
    for key in FIELD_ALIASES[field]:
        value = data.get(key)
        if value not in (None, "", [], {}):
            return value
    return None


def parse_number(value: Any, min_value: int = 1, max_value: int = 10000) -> int:
    """
    Parse a number field, clamped to [min_value, max_value].

    An explicit 0 is kept; unparseable values fall back to min_value.
    """
    num = parse_leading_int(value)
    if num is None:
        return min_value
    if num == 0:
        return 0
    return min(max(num, min_value), max_value)


def _number_field(data: Mapping[str, Any], field: str, default: int, min_value: int = 1, max_value: int = 10000) -> int:
    value = _first(data, field)
    if value is None:
        return default
    return parse_number(value, min_value, max_value)


def parse_list(value: Any) -> list[str]:
    """
    Normalize a list field.

    Accepts a list, a JSON array string, or a string separated by
    commas, semicolons or newlines.
    """
    if not value:
        return []

    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None and str(item).strip()]

    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            return [item.strip() for item in re.split(r"[,;\n]", value) if item.strip()]
        if isinstance(parsed, list):
            return [str(item) for item in parsed if item is not None and str(item).strip()]

    return [str(value)]


def _add_items(builder: DraftBuilder, kind: ItemKind, value: Any) -> None:
    # Already-structured items ({"type": "heading", "text": "Teig"})
    if isinstance(value, list):
        for entry in value:
            if isinstance(entry, Mapping):
                text = str(entry.get("text") or "")
                if entry.get("type") == ItemKind.HEADING.value or entry.get("kind") == ItemKind.HEADING.value:
                    text = "###" + text
                builder.add_item(kind, text)
            elif entry is not None:
                builder.add_item(kind, str(entry))
        return

    for item in parse_list(value):
        builder.add_item(kind, item)


def parse_recipe_data(data: Any) -> RecipeDraft:
    """
    Map raw recipe data onto a RecipeDraft.

    Raises:
        RecipeInputError: If data is missing, has no title, or has no
            ingredients or steps
    """
    if not data:
        raise RecipeInputError("Keine Rezeptdaten bereitgestellt")
    if not isinstance(data, Mapping):
        raise RecipeInputError("Rezeptdaten müssen ein JSON-Objekt sein")

    title = _first(data, "title")
    if not title:
        raise RecipeInputError("Rezepttitel fehlt")

    builder = DraftBuilder(title=str(title).strip())
    builder.image_ref = str(_first(data, "image") or "")
    builder.servings = _number_field(data, "servings", 4)
    builder.difficulty = _number_field(data, "difficulty", 3, 1, 5)

    cooking_time = _first(data, "cooking_time")
    if isinstance(cooking_time, str):
        cooking_time = parse_duration_minutes(cooking_time)
    builder.cooking_time_minutes = 30 if cooking_time is None else parse_number(cooking_time)

    cuisines = _first(data, "cuisines")
    if isinstance(cuisines, str):
        builder.cuisines = split_comma_separated(cuisines)
    else:
        builder.cuisines = parse_list(cuisines)

    tags = _first(data, "tags")
    if tags:
        apply_tags(builder, ",".join(parse_list(tags)))

    builder.category = str(_first(data, "category") or "")
    builder.notes = str(_first(data, "notes") or "")

    _add_items(builder, ItemKind.INGREDIENT, _first(data, "ingredients"))
    _add_items(builder, ItemKind.STEP, _first(data, "steps"))

    if not builder.ingredients:
        raise RecipeInputError("Rezept muss mindestens eine Zutat enthalten")
    if not builder.steps:
        raise RecipeInputError("Rezept muss mindestens einen Zubereitungsschritt enthalten")

    return builder.build()


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence, if any."""
    stripped = text.strip()
    match = _CODE_FENCE.match(stripped)
    return match.group(1) if match else stripped


def import_from_json(text: str) -> RecipeDraft:
    """
    Parse a JSON string into a RecipeDraft.

    Raises:
        RecipeInputError: On invalid JSON or invalid recipe data
    """
    if not isinstance(text, str) or not text.strip():
        raise RecipeInputError("Keine Rezeptdaten bereitgestellt")

    try:
        data = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        logger.debug(f"JSON import failed: {e}")
        raise RecipeInputError("Ungültiges JSON-Format. Bitte überprüfen Sie die Eingabe.") from e

    return parse_recipe_data(data)
