"""
Section and property detection for free-text recipes.

Recognizes section headings ("Zutaten", "## Instructions:"), "Key: Value"
property lines and list markers, and routes property values into a
DraftBuilder.
"""

import re
from collections.abc import Sequence

from .lexicon import (
    DIETARY_TAGS,
    INGREDIENT_SECTION_KEYWORDS,
    NOTION_INGREDIENT_KEYWORDS,
    NOTION_STEP_KEYWORDS,
    STEP_SECTION_KEYWORDS,
)
from .models import DraftBuilder, ItemKind
from .normalizer import (
    extract_image_url,
    extract_number,
    parse_duration_minutes,
    split_comma_separated,
    strip_markdown_emphasis,
)

_FORMATTING_CHARS = re.compile(r"[#*\-:]")
_PROPERTY_LINE = re.compile(r"^([A-Za-zäöüÄÖÜß]+[A-Za-zäöüÄÖÜß\s]*):\s*(.+)$")
_LIST_ITEM = re.compile(r"^(?:[-*•]\s|\d+[.)]\s)")
_STANDALONE_BULLET = re.compile(r"^[-*•]+\s*$")
_SERVINGS_SENTENCE = re.compile(r"^(für|for)\s+(\d+)\s+(personen|people|person)", re.IGNORECASE)

# (key substrings, field) in routing order; first match wins
_PROPERTY_ROUTES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("tag",), "tags"),
    (("portion", "serving"), "servings"),
    (("für", "for"), "servings"),
    (("kulinarik", "cuisine", "küche"), "cuisines"),
    (("schwierigkeit", "difficulty"), "difficulty"),
    (("kochdauer", "dauer", "zeit", "time", "cook"), "cooking_time"),
    (("kategorie", "category", "type", "speise"), "category"),
    (("bild", "foto", "image", "photo"), "image"),
    (("notiz", "note", "tipp", "tip"), "notes"),
)


def _match_keywords(
    cleaned: str,
    ingredient_keywords: Sequence[str],
    step_keywords: Sequence[str],
) -> ItemKind | None:
    for keyword in ingredient_keywords:
        if cleaned == keyword or cleaned.startswith(keyword):
            return ItemKind.INGREDIENT

    for keyword in step_keywords:
        if cleaned == keyword or cleaned.startswith(keyword):
            return ItemKind.STEP

    return None


def detect_section(line: str) -> ItemKind | None:
    """
    Detect a section heading.

    Returns ItemKind.INGREDIENT or ItemKind.STEP, or None for other lines.

    Examples:
        "Zutaten" -> INGREDIENT
        "## Zubereitung:" -> STEP
        "Zutaten für den Teig" -> INGREDIENT (prefix match)
        "400g Mehl" -> None
    """
    cleaned = _FORMATTING_CHARS.sub("", line.lower()).strip()
    if not cleaned:
        return None
    return _match_keywords(cleaned, INGREDIENT_SECTION_KEYWORDS, STEP_SECTION_KEYWORDS)


def detect_heading_section(heading: str) -> ItemKind | None:
    """Detect the section of a Markdown heading (contains match, Notion vocabulary)."""
    cleaned = heading.lower().strip()
    if any(keyword in cleaned for keyword in NOTION_INGREDIENT_KEYWORDS):
        return ItemKind.INGREDIENT
    if any(keyword in cleaned for keyword in NOTION_STEP_KEYWORDS):
        return ItemKind.STEP
    return None


def is_property_line(line: str) -> bool:
    return bool(_PROPERTY_LINE.match(line))


def parse_property_line(line: str) -> tuple[str, str] | None:
    """Split "Portionen: 4" into ("portionen", "4")."""
    match = _PROPERTY_LINE.match(line)
    if not match:
        return None
    return match.group(1).strip().lower(), match.group(2).strip()


def is_list_item(line: str) -> bool:
    return bool(_LIST_ITEM.match(line))


def is_standalone_bullet(line: str) -> bool:
    return bool(_STANDALONE_BULLET.match(line))


def match_servings_sentence(line: str) -> int | None:
    """Recognize "für 8 Personen" / "for 2 people" at the start of a line."""
    match = _SERVINGS_SENTENCE.match(line)
    if not match:
        return None
    return int(match.group(2))


def _route(key: str) -> str | None:
    for keywords, target in _PROPERTY_ROUTES:
        if any(keyword in key for keyword in keywords):
            return target
    return None


def apply_tags(builder: DraftBuilder, value: str) -> bool:
    """Map dietary tag tokens ("vegetarisch", "vegan", ...) into cuisines."""
    applied = False
    for token in split_comma_separated(value):
        label = DIETARY_TAGS.get(token.lower())
        if label and builder.add_cuisine(label):
            applied = True
    return applied


def apply_property(builder: DraftBuilder, key: str, value: str) -> bool:
    """
    Apply a "Key: Value" property to the builder.

    The key is matched by case-insensitive substring, German and English.
    Returns False when the key is not recognized or the value is unusable.
    """
    target = _route(key.lower().strip())
    if target is None:
        return False

    value = strip_markdown_emphasis(value)
    if not value:
        return False

    if target == "tags":
        apply_tags(builder, value)
        return True

    if target == "servings":
        num = extract_number(value)
        if num:
            builder.servings = num
            return True
        return False

    if target == "cuisines":
        cuisines = split_comma_separated(value)
        if cuisines:
            builder.cuisines = cuisines
            return True
        return False

    if target == "difficulty":
        num = extract_number(value, 1, 5)
        if num:
            builder.difficulty = num
            return True
        return False

    if target == "cooking_time":
        minutes = parse_duration_minutes(value)
        if minutes:
            builder.cooking_time_minutes = minutes
            return True
        return False

    if target == "category":
        builder.category = value
        return True

    if target == "image":
        url = extract_image_url(value)
        if url:
            builder.image_ref = url
            return True
        return False

    builder.notes = value
    return True
