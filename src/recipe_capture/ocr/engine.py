"""
OCR engine interface.

The text-recognition engine is an external collaborator: callers pass an
OcrEngine into every function that needs one. Nothing here keeps a global
engine or worker around.
"""

import logging
from abc import ABC, abstractmethod

from pydantic import BaseModel

from recipe_capture.exceptions import RecipeInputError

logger = logging.getLogger(__name__)

# Recipe language -> engine language code
ENGINE_LANGUAGES: dict[str, str] = {
    "de": "deu",
    "en": "eng",
}
SUPPORTED_ENGINE_LANGUAGES = tuple(ENGINE_LANGUAGES.values())


class OcrResult(BaseModel):
    """Text recognized from one image."""

    text: str
    confidence: float  # 0-100
    language: str | None = None  # Engine code the text was recognized with


class OcrEngine(ABC):
    """Anything that turns image bytes into text."""

    @abstractmethod
    def recognize(self, image: bytes, lang: str = "eng") -> OcrResult:
        """
        Recognize the text in an image.

        Args:
            image: Encoded image bytes (PNG, JPEG, ...)
            lang: Engine language code ("deu" or "eng")
        """


def to_engine_language(lang: str) -> str:
    """
    Map a recipe language ("de"/"en") to an engine code ("deu"/"eng").

    Engine codes pass through unchanged.

    Raises:
        RecipeInputError: For unsupported languages
    """
    if lang in SUPPORTED_ENGINE_LANGUAGES:
        return lang
    if lang in ENGINE_LANGUAGES:
        return ENGINE_LANGUAGES[lang]
    supported = ", ".join(SUPPORTED_ENGINE_LANGUAGES)
    raise RecipeInputError(f"Invalid language: {lang}. Supported languages: {supported}")


def to_recipe_language(engine_lang: str | None) -> str:
    """Map an engine code back to a recipe language (German by default)."""
    for recipe_lang, code in ENGINE_LANGUAGES.items():
        if code == engine_lang:
            return recipe_lang
    return "de"
