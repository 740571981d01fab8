"""Recipe import module for turning OCR text and exports into recipe drafts."""

from .models import (
    Classification,
    ClassifiedText,
    DraftBuilder,
    ItemKind,
    LineType,
    ListItem,
    RecipeDraft,
    SmartParseResult,
    ValidationReport,
)
from .classifier import LineClassifier, auto_classify_text, classify_line, classify_text
from .quantities import normalize_fractions
from .steps import merge_step_lines
from .text_parser import parse_smart, parse_structured_text, parse_with_classification_fallback
from .validation import get_validation_summary, is_acceptable, validate_recipe
from .csv_import import detect_delimiter, parse_bulk_csv, parse_delimited_recipes
from .notion import parse_notion_csv, parse_notion_markdown, parse_single_notion_document
from .json_import import import_from_json, parse_recipe_data
from .category_images import CategoryImage, CategoryImageLibrary

__all__ = [
    "Classification",
    "ClassifiedText",
    "DraftBuilder",
    "ItemKind",
    "LineType",
    "ListItem",
    "RecipeDraft",
    "SmartParseResult",
    "ValidationReport",
    "LineClassifier",
    "auto_classify_text",
    "classify_line",
    "classify_text",
    "normalize_fractions",
    "merge_step_lines",
    "parse_smart",
    "parse_structured_text",
    "parse_with_classification_fallback",
    "get_validation_summary",
    "is_acceptable",
    "validate_recipe",
    "detect_delimiter",
    "parse_bulk_csv",
    "parse_delimited_recipes",
    "parse_notion_csv",
    "parse_notion_markdown",
    "parse_single_notion_document",
    "import_from_json",
    "parse_recipe_data",
    "CategoryImage",
    "CategoryImageLibrary",
]
