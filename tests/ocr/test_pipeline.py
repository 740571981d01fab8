"""
Tests for the OCR scan pipeline with a fake engine.
"""

import pytest

from recipe_capture.config import CaptureSettings, settings
from recipe_capture.exceptions import OcrError, RecipeInputError
from recipe_capture.ocr import (
    OcrEngine,
    OcrResult,
    recognize_auto,
    recognize_text,
    scan_recipe,
    to_engine_language,
    to_recipe_language,
)

IMAGE = b"\x89PNG fake image bytes"


class FakeEngine(OcrEngine):
    """Returns canned results per engine language and records the calls."""

    def __init__(self, results: dict[str, OcrResult]):
        self.results = results
        self.calls: list[str] = []

    def recognize(self, image: bytes, lang: str = "eng") -> OcrResult:
        self.calls.append(lang)
        return self.results[lang]


class BrokenEngine(OcrEngine):
    def recognize(self, image: bytes, lang: str = "eng") -> OcrResult:
        raise RuntimeError("engine crashed")


class TestLanguages:
    """Tests for language code mapping."""

    def test_to_engine_language(self):
        assert to_engine_language("de") == "deu"
        assert to_engine_language("en") == "eng"
        assert to_engine_language("eng") == "eng"

    def test_unsupported_language(self):
        with pytest.raises(RecipeInputError, match="Invalid language: fr"):
            to_engine_language("fr")

    def test_to_recipe_language(self):
        assert to_recipe_language("eng") == "en"
        assert to_recipe_language("deu") == "de"
        assert to_recipe_language(None) == "de"


class TestRecognize:
    """Tests for recognize_text / recognize_auto."""

    def test_recognize_text_fills_language(self):
        engine = FakeEngine({"deu": OcrResult(text="Hallo", confidence=90)})
        result = recognize_text(engine, IMAGE, "de")

        assert engine.calls == ["deu"]
        assert result.language == "deu"

    def test_empty_image(self):
        with pytest.raises(RecipeInputError, match="No image provided"):
            recognize_text(FakeEngine({}), b"", "de")

    def test_engine_failure(self):
        with pytest.raises(OcrError, match="engine crashed"):
            recognize_text(BrokenEngine(), IMAGE, "en")

    def test_auto_confident_english(self):
        engine = FakeEngine({"eng": OcrResult(text="Cookies", confidence=85)})
        result = recognize_auto(engine, IMAGE)

        assert engine.calls == ["eng"]
        assert result.language == "eng"

    def test_auto_switches_to_german(self):
        engine = FakeEngine(
            {
                "eng": OcrResult(text="Kase", confidence=40),
                "deu": OcrResult(text="Käse", confidence=80),
            }
        )
        result = recognize_auto(engine, IMAGE)

        assert engine.calls == ["eng", "deu"]
        assert result.text == "Käse"
        assert result.language == "deu"

    def test_auto_keeps_english_on_tie(self):
        engine = FakeEngine(
            {
                "eng": OcrResult(text="Cookies", confidence=40),
                "deu": OcrResult(text="Kekse", confidence=40),
            }
        )
        assert recognize_auto(engine, IMAGE).text == "Cookies"

    def test_auto_threshold_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "_instance", CaptureSettings(ocr_auto_threshold=30))
        engine = FakeEngine({"eng": OcrResult(text="Cookies", confidence=40)})

        assert recognize_auto(engine, IMAGE).text == "Cookies"
        assert engine.calls == ["eng"]

    def test_explicit_threshold_wins(self, monkeypatch):
        monkeypatch.setattr(settings, "_instance", CaptureSettings(ocr_auto_threshold=30))
        engine = FakeEngine(
            {
                "eng": OcrResult(text="Kase", confidence=40),
                "deu": OcrResult(text="Käse", confidence=80),
            }
        )

        assert recognize_auto(engine, IMAGE, threshold=50).text == "Käse"
        assert engine.calls == ["eng", "deu"]


class TestScanRecipe:
    """Tests for scan_recipe."""

    def test_scan(self, carbonara_text):
        engine = FakeEngine({"deu": OcrResult(text=carbonara_text, confidence=92)})
        result = scan_recipe(IMAGE, engine, "de")

        assert result.ocr.confidence == 92
        assert result.recipe.title == "Spaghetti Carbonara"
        assert result.validation.score == 55

    def test_auto_language(self, english_ocr_text):
        engine = FakeEngine({"eng": OcrResult(text=english_ocr_text, confidence=88)})
        result = scan_recipe(IMAGE, engine, lang=None)

        assert result.recipe.title == "Chocolate Chip Cookies"
        assert "Cuisine not detected" in result.validation.warnings

    def test_scan_uses_configured_threshold(self, monkeypatch, english_ocr_text):
        monkeypatch.setattr(settings, "_instance", CaptureSettings(ocr_auto_threshold=95))
        engine = FakeEngine(
            {
                "eng": OcrResult(text=english_ocr_text, confidence=88),
                "deu": OcrResult(text="", confidence=20),
            }
        )
        result = scan_recipe(IMAGE, engine, lang=None)

        assert engine.calls == ["eng", "deu"]
        assert result.recipe.title == "Chocolate Chip Cookies"

    def test_no_text_recognized(self):
        engine = FakeEngine({"deu": OcrResult(text="  \n ", confidence=10)})
        with pytest.raises(RecipeInputError, match="Kein Text im Bild erkannt"):
            scan_recipe(IMAGE, engine, "de")
