"""
Line Classifier - Sort OCR lines into ingredients and preparation steps.

Used when a scan has no recognizable section headings. Each line is scored
with additive keyword/pattern heuristics from the language tables:

Ingredient signals:
- quantity (200, 1.5, 1/2, 1 1/2)      +40
- unit word (g, EL, cups, ...)         +30
- ingredient noun (Mehl, flour, ...)   +20
- short line (<= 5 words)              +10

Step signals:
- cooking verb (kochen, stir, ...)     +35
- imperative construction              +30
- step context (Ofen, minutes, ...)    +25
- long line (> 8 words)                +15
"""

import logging
import re
from collections.abc import Mapping, Sequence

from recipe_capture.exceptions import RecipeInputError

from .lexicon import LEXICONS, Lexicon, get_lexicon
from .models import Classification, ClassifiedText, LineType

logger = logging.getLogger(__name__)

MIN_DECISION_SCORE = 30
MIN_ACCEPT_CONFIDENCE = 50

QUANTITY_PATTERNS = (
    re.compile(r"^\d+"),                     # Starts with number
    re.compile(r"\d+\s*[.,]\s*\d+"),         # Decimal numbers
    re.compile(r"\d+\s*/\s*\d+"),            # Fractions
    re.compile(r"\d+\s+\d+\s*/\s*\d+"),      # Mixed numbers
)


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    lower = text.lower()
    return any(keyword.lower() in lower for keyword in keywords)


class LineClassifier:
    """
    Heuristic ingredient/step classifier.

    Pure and deterministic: the same (line, lang) always yields the same result.
    """

    def __init__(self, lexicons: Mapping[str, Lexicon] | None = None):
        self.lexicons = dict(lexicons) if lexicons is not None else dict(LEXICONS)

    def _lexicon(self, lang: str) -> Lexicon:
        return self.lexicons.get(lang) or get_lexicon(lang)

    def scores(self, line: str, lang: str = "de") -> tuple[int, int]:
        """Return (ingredient_score, step_score) for an already-trimmed line."""
        lexicon = self._lexicon(lang)
        ingredient_score = 0
        step_score = 0

        if any(pattern.search(line) for pattern in QUANTITY_PATTERNS):
            ingredient_score += 40

        if lexicon.unit_pattern.search(line):
            ingredient_score += 30

        if _contains_any(line, lexicon.ingredient_keywords):
            ingredient_score += 20

        if _contains_any(line, lexicon.action_verbs):
            step_score += 35

        if any(pattern.search(line) for pattern in lexicon.imperative_patterns):
            step_score += 30

        if _contains_any(line, lexicon.step_keywords):
            step_score += 25

        # Ingredients are typically short, steps long
        word_count = len(line.split())
        if word_count <= 5:
            ingredient_score += 10
        elif word_count > 8:
            step_score += 15

        return ingredient_score, step_score

    def classify_line(self, line: str, lang: str = "de") -> Classification:
        """
        Classify a single line as ingredient, step or unknown.

        Below-threshold results are always unknown with confidence 0; an exact
        tie is unknown with the tied score as confidence.
        """
        if not isinstance(line, str) or not line.strip():
            return Classification(LineType.UNKNOWN, 0)

        ingredient_score, step_score = self.scores(line.strip(), lang)
        max_score = max(ingredient_score, step_score)

        if max_score < MIN_DECISION_SCORE:
            return Classification(LineType.UNKNOWN, 0)

        if ingredient_score > step_score:
            return Classification(LineType.INGREDIENT, min(100, ingredient_score))
        if step_score > ingredient_score:
            return Classification(LineType.STEP, min(100, step_score))
        return Classification(LineType.UNKNOWN, max_score)

    def classify_text(
        self,
        lines: Sequence[str],
        lang: str = "de",
        min_confidence: int = MIN_ACCEPT_CONFIDENCE,
    ) -> ClassifiedText:
        """Sort lines into ingredients, steps and unclassified (order preserved)."""
        if not isinstance(lines, (list, tuple)):
            raise RecipeInputError("Lines must be a list")

        result = ClassifiedText()
        for line in lines:
            classification = self.classify_line(line, lang)
            if classification.kind == LineType.INGREDIENT and classification.confidence >= min_confidence:
                result.ingredients.append(line)
            elif classification.kind == LineType.STEP and classification.confidence >= min_confidence:
                result.steps.append(line)
            else:
                result.unclassified.append(line)

        logger.debug(
            f"Classified {len(lines)} lines: {len(result.ingredients)} ingredients, "
            f"{len(result.steps)} steps, {len(result.unclassified)} unclassified"
        )
        return result

    def auto_classify_text(self, text: str, lang: str = "de") -> ClassifiedText:
        """Split free text into lines and classify them."""
        if not isinstance(text, str) or not text:
            return ClassifiedText()

        lines = [line.strip() for line in text.split("\n") if line.strip()]
        return self.classify_text(lines, lang)


default_classifier = LineClassifier()


def classify_line(line: str, lang: str = "de") -> Classification:
    return default_classifier.classify_line(line, lang)


def classify_text(
    lines: Sequence[str],
    lang: str = "de",
    min_confidence: int = MIN_ACCEPT_CONFIDENCE,
) -> ClassifiedText:
    return default_classifier.classify_text(lines, lang, min_confidence)


def auto_classify_text(text: str, lang: str = "de") -> ClassifiedText:
    return default_classifier.auto_classify_text(text, lang)
