"""
Structured text parser - turn OCR text into a RecipeDraft.

Understands German and English layouts:

    Spaghetti Carbonara
    Portionen: 4

    Zutaten
    400g Spaghetti
    200g Pancetta

    Zubereitung
    1. Nudeln kochen
    2. Pancetta braten

The first plain line is the title. Section headings switch between the
ingredient and step lists, "Key: Value" lines set scalar fields, and wrapped
step lines are merged back together. When a scan has no headings at all,
parse_with_classification_fallback() sorts the lines with the classifier.
"""

import logging
from dataclasses import dataclass, field

from recipe_capture.exceptions import RecipeInputError

from .classifier import classify_text
from .lexicon import get_lexicon
from .models import DraftBuilder, ItemKind, RecipeDraft, SmartParseResult
from .normalizer import strip_list_marker
from .quantities import normalize_fractions
from .sections import (
    apply_property,
    detect_section,
    is_list_item,
    is_property_line,
    is_standalone_bullet,
    match_servings_sentence,
    parse_property_line,
)
from .steps import merge_step_lines, parse_step_line
from .validation import validate_recipe

logger = logging.getLogger(__name__)


@dataclass
class _ParseState:
    builder: DraftBuilder = field(default_factory=DraftBuilder)
    current_section: ItemKind | None = None
    seen_sections: set[ItemKind] = field(default_factory=set)
    raw_step_lines: list[str] = field(default_factory=list)
    candidates: list[str] = field(default_factory=list)

    def flush_steps(self) -> None:
        for step in merge_step_lines(self.raw_step_lines):
            self.builder.add_item(ItemKind.STEP, normalize_fractions(step))
        self.raw_step_lines.clear()


def _split_lines(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


def _check_text(text: str) -> None:
    if not isinstance(text, str) or not text.strip():
        raise RecipeInputError("Ungültiger OCR-Text")


def _parse(text: str) -> _ParseState:
    state = _ParseState()
    builder = state.builder
    title_found = False

    for line in _split_lines(text):
        if is_standalone_bullet(line):
            continue

        section = detect_section(line)

        if not title_found and section is None and not is_property_line(line) and not is_list_item(line):
            builder.title = line
            title_found = True
            continue

        if section is not None:
            if state.current_section == ItemKind.STEP and state.raw_step_lines:
                state.flush_steps()
            logger.debug(f"Section switch: {state.current_section} -> {section.value}")
            state.current_section = section
            state.seen_sections.add(section)
            continue

        prop = parse_property_line(line)
        if prop:
            apply_property(builder, *prop)
            continue

        servings = match_servings_sentence(line)
        if servings is not None:
            builder.servings = servings
            continue

        state.candidates.append(line)

        if state.current_section == ItemKind.INGREDIENT:
            if line.startswith("###"):
                builder.add_item(ItemKind.INGREDIENT, line)
                continue
            cleaned = strip_list_marker(line)
            if cleaned:
                builder.add_item(ItemKind.INGREDIENT, normalize_fractions(cleaned))

        elif state.current_section == ItemKind.STEP:
            if line.startswith("###"):
                state.flush_steps()
                builder.add_item(ItemKind.STEP, line)
                continue
            state.raw_step_lines.append(line)

    if state.raw_step_lines:
        state.flush_steps()

    return state


def parse_structured_text(text: str, lang: str = "de") -> RecipeDraft:
    """
    Parse OCR text with explicit section headings into a RecipeDraft.

    Args:
        text: Raw OCR text
        lang: "de" or "en" (placeholder title language)

    Raises:
        RecipeInputError: If text is empty or not a string
    """
    _check_text(text)
    state = _parse(text)
    return state.builder.build(fallback_title=get_lexicon(lang).placeholder_title)


def parse_with_classification_fallback(text: str, lang: str = "de") -> RecipeDraft:
    """
    Structured parse, then fill lists whose section heading was never found.

    Every non-title, non-heading, non-property line is run through the
    classifier; hits with confidence >= 50 fill the missing list.
    """
    _check_text(text)
    state = _parse(text)
    builder = state.builder

    missing = {ItemKind.INGREDIENT, ItemKind.STEP} - state.seen_sections
    if missing and state.candidates:
        classified = classify_text(state.candidates, lang)

        if ItemKind.INGREDIENT in missing:
            for line in classified.ingredients:
                cleaned = strip_list_marker(line)
                if cleaned:
                    builder.add_item(ItemKind.INGREDIENT, normalize_fractions(cleaned))
            logger.debug(f"Classifier fallback found {len(classified.ingredients)} ingredients")

        if ItemKind.STEP in missing:
            for line in classified.steps:
                cleaned = parse_step_line(line)
                if cleaned:
                    builder.add_item(ItemKind.STEP, normalize_fractions(cleaned))
            logger.debug(f"Classifier fallback found {len(classified.steps)} steps")

    return builder.build(fallback_title=get_lexicon(lang).placeholder_title)


def parse_smart(text: str, lang: str = "de") -> SmartParseResult:
    """Parse with classification fallback and validate the result."""
    recipe = parse_with_classification_fallback(text, lang)
    return SmartParseResult(recipe=recipe, validation=validate_recipe(recipe, lang))
