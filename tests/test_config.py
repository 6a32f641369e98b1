"""Tests for configuration helpers."""

import pytest

from wellness_nutrition.config import Settings, is_configured_key


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, False),
        ("", False),
        ("   ", False),
        ("your_gemini_api_key_here", False),
        ("sk-placeholder", False),
        ("example-key", False),
        ("demo-key", False),
        ("sk-live-abc123", True),
    ],
)
def test_is_configured_key(raw: str | None, expected: bool) -> None:
    assert is_configured_key(raw) is expected


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ANALYSIS_PROVIDER", "gemini")
    monkeypatch.setenv("GEMINI_API_KEY", "gm-live-456")
    monkeypatch.setenv("ANALYSIS_BATCH_SIZE", "5")

    settings = Settings()

    assert settings.analysis_provider == "gemini"
    assert settings.gemini_api_key == "gm-live-456"
    assert settings.analysis_batch_size == 5
    assert settings.openai_model == "gpt-4o-mini"
