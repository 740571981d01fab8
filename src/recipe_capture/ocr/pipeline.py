"""
Scan pipeline - image bytes to validated recipe draft.

    image -> OcrEngine.recognize() -> parse_smart() -> ScanResult
"""

import logging
from dataclasses import dataclass

from recipe_capture.config import settings
from recipe_capture.exceptions import OcrError, RecipeCaptureError, RecipeInputError
from recipe_capture.recipe_import.models import RecipeDraft, ValidationReport
from recipe_capture.recipe_import.text_parser import parse_smart

from .engine import OcrEngine, OcrResult, to_engine_language, to_recipe_language

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Everything a scan produced, for the review form."""

    ocr: OcrResult
    recipe: RecipeDraft
    validation: ValidationReport


def _recognize(engine: OcrEngine, image: bytes, lang: str) -> OcrResult:
    if not image:
        raise RecipeInputError("No image provided for OCR")

    engine_lang = to_engine_language(lang)
    try:
        result = engine.recognize(image, engine_lang)
    except RecipeCaptureError:
        raise
    except Exception as e:
        logger.warning(f"OCR engine failed ({engine_lang}): {e}")
        raise OcrError(str(e)) from e

    if result.language is None:
        result = result.model_copy(update={"language": engine_lang})
    return result


def recognize_text(engine: OcrEngine, image: bytes, lang: str = "eng") -> OcrResult:
    """
    Recognize text with one language.

    Raises:
        RecipeInputError: If image is empty or lang unsupported
        OcrError: If the engine fails
    """
    return _recognize(engine, image, lang)


def recognize_auto(
    engine: OcrEngine,
    image: bytes,
    threshold: float | None = None,
) -> OcrResult:
    """
    Recognize text without knowing the language.

    Tries English first; below the confidence threshold German is tried too
    and the more confident result wins (ties keep English).

    The threshold defaults to settings.ocr_auto_threshold.
    """
    if threshold is None:
        threshold = settings.ocr_auto_threshold

    english = _recognize(engine, image, "eng")
    if english.confidence >= threshold:
        return english

    logger.info(f"English OCR confidence {english.confidence:.0f} below {threshold:.0f}, trying German")
    german = _recognize(engine, image, "deu")
    if german.confidence > english.confidence:
        return german
    return english


def scan_recipe(
    image: bytes,
    engine: OcrEngine,
    lang: str | None = "de",
    auto_threshold: float | None = None,
) -> ScanResult:
    """
    Run OCR on an image and parse the text into a validated draft.

    Args:
        image: Encoded image bytes
        engine: OCR engine to use
        lang: "de"/"en", or None to detect the language with recognize_auto()
        auto_threshold: Confidence threshold for language detection
            (defaults to settings.ocr_auto_threshold)

    Raises:
        RecipeInputError: If image is empty or no text was recognized
        OcrError: If the engine fails
    """
    if lang is None:
        ocr = recognize_auto(engine, image, auto_threshold)
        recipe_lang = to_recipe_language(ocr.language)
    else:
        ocr = _recognize(engine, image, lang)
        recipe_lang = to_recipe_language(to_engine_language(lang))

    if not ocr.text or not ocr.text.strip():
        raise RecipeInputError("Kein Text im Bild erkannt")

    logger.info(f"OCR recognized {len(ocr.text)} chars (confidence {ocr.confidence:.0f}, {ocr.language})")
    parsed = parse_smart(ocr.text, recipe_lang)
    return ScanResult(ocr=ocr, recipe=parsed.recipe, validation=parsed.validation)
