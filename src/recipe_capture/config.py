"""
Recipe Capture - Configuration and settings.

Settings only provide defaults for the outer surfaces (CLI, web app, OCR pipeline).
The parsing core takes every knob as an explicit argument.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class CaptureSettings(BaseSettings):
    """
    Settings shared by the CLI and the web app.

    Values come from RECIPE_CAPTURE_* environment variables or a local .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="RECIPE_CAPTURE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Parsing defaults
    default_language: Literal["de", "en"] = "de"
    min_acceptable_score: int = 40
    ocr_auto_threshold: float = 70.0  # Below this, auto-OCR retries in German

    # Application
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> CaptureSettings:
    """Get cached settings instance."""
    return CaptureSettings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: CaptureSettings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
