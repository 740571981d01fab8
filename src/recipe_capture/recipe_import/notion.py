"""
Notion export parser - single recipes from Notion pages or databases.

Supported structures:
- "# Title" as the first heading
- "## Zutaten" / "## Zubereitung" (and English/Italian/French) sections
- "- " / "* " bullet lists and "1. " numbered steps
- "### Teig" sub-headings inside a section
- "Key: Value" and "**Key:** Value" property lines
- Markdown tables (two-column Property|Value or one header row of properties)
- Notion database CSV exports (first data row)
"""

import logging
import re

from recipe_capture.exceptions import RecipeInputError

from .csv_import import BOM, split_csv_line
from .models import DraftBuilder, ItemKind, RecipeDraft
from .sections import apply_property, detect_heading_section

logger = logging.getLogger(__name__)

_BULLET = re.compile(r"^[-*]\s+")
_NUMBERED = re.compile(r"^\d+\.\s+")
_STEP_NUMBER = re.compile(r"^\d+\.\s*")
_PROPERTY = re.compile(r"^(?:\*\*)?([A-Za-zäöüÄÖÜß\s]+)(?:\*\*)?:\s*(.+)$")

_PROPERTY_HEADERS = ("property", "eigenschaft")
_VALUE_HEADERS = ("value", "wert")
_TITLE_HEADERS = ("name", "title", "rezept")


def _split_table_row(line: str) -> list[str]:
    return [cell.strip() for cell in line.split("|") if cell.strip()]


def _is_property_table(headers: list[str]) -> bool:
    if len(headers) != 2:
        return False
    return headers[0].lower() in _PROPERTY_HEADERS or headers[1].lower() in _VALUE_HEADERS


def _apply_table_row(builder: DraftBuilder, headers: list[str], values: list[str]) -> None:
    if _is_property_table(headers):
        if len(values) >= 2:
            apply_property(builder, values[0], values[1])
        return

    for header, value in zip(headers, values):
        apply_property(builder, header, value)


def parse_notion_markdown(markdown: str) -> RecipeDraft:
    """
    Parse a Notion Markdown export into a RecipeDraft.

    Raises:
        RecipeInputError: If markdown is empty or not a string
    """
    if not isinstance(markdown, str) or not markdown:
        raise RecipeInputError("Ungültiger Markdown-Inhalt")

    lines = markdown.split("\n")
    builder = DraftBuilder()
    current_section: ItemKind | None = None
    in_table = False
    table_headers: list[str] = []

    i = 0
    while i < len(lines):
        line = lines[i].strip()
        i += 1

        if not line:
            continue

        if line.startswith("# ") and not builder.title:
            builder.title = line[2:].strip()
            continue

        if line.startswith("## "):
            current_section = detect_heading_section(line[3:])
            in_table = False
            continue

        if line.startswith("###"):
            section = detect_heading_section(line[3:])
            if section is not None:
                current_section = section
            elif current_section is not None:
                builder.add_item(current_section, line)
            continue

        if "|" in line:
            if not in_table:
                table_headers = _split_table_row(line)
                in_table = True
                # Skip the |---|---| separator
                if i < len(lines) and "---" in lines[i]:
                    i += 1
            else:
                _apply_table_row(builder, table_headers, _split_table_row(line))
            continue
        in_table = False

        if _BULLET.match(line):
            content = _BULLET.sub("", line).strip()
            if not content:
                continue
            if current_section == ItemKind.INGREDIENT:
                builder.add_item(ItemKind.INGREDIENT, content)
            elif current_section == ItemKind.STEP:
                builder.add_item(ItemKind.STEP, _STEP_NUMBER.sub("", content))
            continue

        if _NUMBERED.match(line):
            builder.add_item(ItemKind.STEP, _STEP_NUMBER.sub("", line))
            continue

        match = _PROPERTY.match(line)
        if match:
            apply_property(builder, match.group(1).strip(), match.group(2).strip())

    logger.debug(
        f"Notion page '{builder.title}': {len(builder.ingredients)} ingredients, {len(builder.steps)} steps"
    )
    return builder.build()


def parse_notion_csv(content: str) -> RecipeDraft:
    """
    Parse a Notion database CSV export (first recipe row only).

    Columns are matched by substring: name/title/rezept become the title,
    everything else goes through the property rules.

    Raises:
        RecipeInputError: If content is not text or has no data row
    """
    if not isinstance(content, str) or not content:
        raise RecipeInputError("Ungültiger CSV-Inhalt")

    if content.startswith(BOM):
        content = content[len(BOM):]

    lines = [line for line in content.split("\n") if line.strip()]
    if len(lines) < 2:
        raise RecipeInputError("CSV muss mindestens Header und eine Datenzeile enthalten")

    headers = [header.strip() for header in split_csv_line(lines[0])]
    values = [value.strip() for value in split_csv_line(lines[1])]

    builder = DraftBuilder()
    for header, value in zip(headers, values):
        if not value:
            continue
        key = header.lower()
        if any(name in key for name in _TITLE_HEADERS):
            builder.title = value
        else:
            apply_property(builder, key, value)

    return builder.build()


def looks_like_csv(content: str) -> bool:
    """True if the first non-blank line looks like a CSV header row."""
    for line in content.split("\n"):
        stripped = line.strip().lstrip(BOM)
        if not stripped:
            continue
        return "," in stripped and not stripped.startswith("#") and "|" not in stripped
    return False


def parse_single_notion_document(content: str) -> RecipeDraft:
    """Parse a Notion export, choosing CSV or Markdown from its first line."""
    if not isinstance(content, str) or not content.strip():
        raise RecipeInputError("Ungültiger Notion-Inhalt")

    if looks_like_csv(content):
        return parse_notion_csv(content)
    return parse_notion_markdown(content)
