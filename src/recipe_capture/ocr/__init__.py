"""OCR collaborator seam: engine interface and the scan pipeline."""

from .engine import OcrEngine, OcrResult, to_engine_language, to_recipe_language
from .pipeline import ScanResult, recognize_auto, recognize_text, scan_recipe

__all__ = [
    "OcrEngine",
    "OcrResult",
    "to_engine_language",
    "to_recipe_language",
    "ScanResult",
    "recognize_auto",
    "recognize_text",
    "scan_recipe",
]
