"""Normalization utilities for recipe data."""

import re

from .quantities import normalize_fractions

# Units recognized when fixing "100ml" -> "100 ml" (German and international)
SPACING_UNITS = [
    "ml", "l", "g", "kg", "mg",
    "EL", "TL", "Tl", "El",
    "Prise", "Prisen",
    "Tasse", "Tassen",
    "Becher",
    "Stück", "Stk",
    "Bund",
    "Pck", "Pkg",
    "Dose", "Dosen",
    "cl", "dl",
]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LIST_MARKER = re.compile(r"^[-*•]\s*")
_NUMBER_MARKER = re.compile(r"^\d+[.)](?!\d)\s*")
_STEP_NUMBER = re.compile(r"^\d+(?:[.):](?!\d)\s*|\s+-\s+)")


def parse_leading_int(value: str | int | float | None) -> int | None:
    """
    Parse an integer from the start of a value.

    Examples:
        "45 Minuten" -> 45
        " 3" -> 3
        "ca. 45" -> None
        4.7 -> 4
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return int(value)

    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def extract_number(text: str, min_value: int = 0, max_value: int = 10000) -> int | None:
    """
    Extract the first integer found anywhere in the text, clamped to [min_value, max_value].

    Examples:
        "45 Minuten" -> 45
        "Stufe 9" with (1, 5) -> 5
        "keine Angabe" -> None
    """
    match = re.search(r"\d+", text or "")
    if not match:
        return None

    return min(max(int(match.group(0)), min_value), max_value)


def parse_difficulty(value: str | int | float | None) -> int:
    """
    Parse a difficulty rating, always returning a value in 1..5.

    Missing or unparseable values default to 3.
    """
    if value is None or value == "":
        return 3

    num = parse_leading_int(value)
    if num is None:
        return 3

    return min(max(num, 1), 5)


def parse_cooking_time(value: str | int | None) -> int:
    """
    Parse a cooking time in minutes (never negative).

    Missing or unparseable values default to 30.
    """
    if value is None or value == "":
        return 30

    num = parse_leading_int(value)
    if num is None:
        return 30

    return max(num, 0)


def parse_duration_minutes(duration: str | int | None) -> int | None:
    """
    Parse a duration to minutes.

    Examples:
        PT1H30M -> 90
        "45 Minuten" -> 45
        "1 Std 30 Min" -> 90
        "1,5 Stunden" -> 90
        "1 1/2 Stunden" -> 90
        "2 hours" -> 120
        "30" -> 30
    """
    if not duration:
        return None

    # Handle already-integer values
    if isinstance(duration, int):
        return duration

    text = normalize_fractions(str(duration).strip())

    # ISO 8601 duration
    match = re.fullmatch(r"PT(?:(\d+)H)?(?:(\d+)M)?", text, re.IGNORECASE)
    if match and (match.group(1) or match.group(2)):
        return int(match.group(1) or 0) * 60 + int(match.group(2) or 0)

    hours = re.search(r"(\d+(?:[.,]\d+)?)\s*(?:h|std|stunden?|hours?|hrs?)\b", text, re.IGNORECASE)
    if hours:
        total = round(float(hours.group(1).replace(",", ".")) * 60)
        minutes = re.search(r"(\d+)\s*(?:min|minuten|minutes?|mins?)\b", text[hours.end():], re.IGNORECASE)
        if minutes:
            total += int(minutes.group(1))
        return total

    return extract_number(text)


def parse_portion(value: str | None) -> tuple[int, str]:
    """
    Parse a portion string into (count, unit id).

    Examples:
        "4 Portionen" -> (4, "portion")
        "2 Personen" -> (2, "person")
        "12 Stück" -> (12, "piece")
        "6" -> (6, "portion")
        "" -> (4, "portion")
    """
    if not value:
        return (4, "portion")

    match = re.match(r"^(\d+)\s*(.*)$", value.strip())
    if not match:
        return (4, "portion")

    count = int(match.group(1))
    unit = match.group(2).lower()

    if "person" in unit:
        return (count, "person")
    if "stück" in unit or "stueck" in unit:
        return (count, "piece")
    return (count, "portion")


def split_comma_separated(value: str | None) -> list[str]:
    """Split "Italienisch, Klassisch" into ["Italienisch", "Klassisch"]."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def strip_list_marker(line: str) -> str:
    """Remove a leading bullet ("-", "*", "•") and/or "1." / "1)" numbering."""
    cleaned = _LIST_MARKER.sub("", line)
    cleaned = _NUMBER_MARKER.sub("", cleaned)
    return cleaned.strip()


def strip_step_number(text: str) -> str:
    """
    Remove leading step numbering.

    Handles "1. ", "2) ", "3 - " and "4: ". Decimals such as "1.5 l" and
    ranges such as "10-12 Minuten" are left alone.
    """
    return _STEP_NUMBER.sub("", text.strip(), count=1).strip()


def strip_markdown_emphasis(value: str) -> str:
    """Remove "**" and "*" emphasis markers."""
    return value.replace("**", "").replace("*", "").strip()


def extract_image_url(value: str | None) -> str | None:
    """
    Extract an image URL from a property value.

    Handles:
        - Markdown image syntax: ![Bild](https://example.com/pizza.jpg)
        - Plain URL string
    """
    if not value:
        return None

    match = re.search(r"\(([^)]+)\)", value)
    if match:
        return match.group(1).strip()

    if value.startswith("http"):
        return value

    return None


def format_ingredient_spacing(ingredient: str) -> str:
    """
    Ensure a single space between a number and its unit.

    Examples:
        "100ml Milch" -> "100 ml Milch"
        "2EL Öl" -> "2 EL Öl"
        "1.5kg Kartoffeln" -> "1.5 kg Kartoffeln"
        "100 ml" -> "100 ml" (already formatted)
    """
    if not ingredient:
        return ingredient

    # Longer units first so "Tassen" wins over "Tasse"
    units = sorted(SPACING_UNITS, key=len, reverse=True)
    units_pattern = "|".join(re.escape(unit) for unit in units)
    pattern = re.compile(
        rf"(\d+(?:[.,]\d+)?)(\s*)({units_pattern})(?![A-Za-zäöüÄÖÜß])",
        re.IGNORECASE,
    )

    return pattern.sub(lambda m: f"{m.group(1)} {m.group(3)}", ingredient)
