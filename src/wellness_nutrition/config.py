"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_PLACEHOLDER_MARKERS = ("placeholder", "example", "demo")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    analysis_provider: str = "auto"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-1.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    nutrient_reference_path: str | None = None
    analysis_batch_size: int = 3
    analysis_batch_delay_seconds: float = 1.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def is_configured_key(raw: str | None) -> bool:
    """Return True when an API key looks real rather than a template value."""
    if raw is None:
        return False
    key = raw.strip()
    if not key:
        return False
    lowered = key.lower()
    if lowered.startswith("your_") and lowered.endswith("_here"):
        return False
    return not any(marker in lowered for marker in _PLACEHOLDER_MARKERS)
