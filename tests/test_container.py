"""Tests for container wiring."""

import asyncio
import json
from pathlib import Path

import pytest

from wellness_nutrition.adapters.gemini_client import HttpxGeminiClient
from wellness_nutrition.adapters.openai_analysis_client import OpenAIAnalysisClient
from wellness_nutrition.config import Settings
from wellness_nutrition.containers import build_analysis_client, build_container
from wellness_nutrition.domain.nutrients import StatusLevel
from wellness_nutrition.errors import ConfigurationError


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.analysis_service.client is None
    assert container.analysis_service.batch_delay_seconds == 0
    assert container.evaluator.reference is container.reference
    status = container.evaluator.evaluate(2000, "calories")
    assert status.status is StatusLevel.OPTIMAL
    asyncio.run(container.close_resources())


def test_build_container_applies_reference_overrides(
    settings: Settings, tmp_path: Path
) -> None:
    path = tmp_path / "targets.json"
    path.write_text(json.dumps({"calories": 2500}), encoding="utf-8")
    settings = settings.model_copy(update={"nutrient_reference_path": str(path)})

    container = build_container(settings)

    assert container.evaluator.target("calories") == 2500


def test_auto_provider_prefers_openai(settings: Settings) -> None:
    settings = settings.model_copy(
        update={
            "analysis_provider": "auto",
            "openai_api_key": "sk-live-123",
            "gemini_api_key": "gm-live-456",
        }
    )

    container = build_container(settings)

    assert isinstance(container.analysis_service.client, OpenAIAnalysisClient)
    asyncio.run(container.close_resources())


def test_auto_provider_falls_back_to_gemini(settings: Settings) -> None:
    settings = settings.model_copy(
        update={
            "analysis_provider": "auto",
            "openai_api_key": "your_openai_api_key_here",
            "gemini_api_key": "gm-live-456",
        }
    )

    client = build_analysis_client(settings)

    assert isinstance(client, HttpxGeminiClient)
    asyncio.run(client.close())


def test_auto_provider_without_keys_uses_mock(settings: Settings) -> None:
    settings = settings.model_copy(update={"analysis_provider": "auto"})

    assert build_analysis_client(settings) is None


@pytest.mark.parametrize("provider", ["openai", "gemini", "perplexity"])
def test_explicit_provider_requires_key(settings: Settings, provider: str) -> None:
    settings = settings.model_copy(update={"analysis_provider": provider})

    with pytest.raises(ConfigurationError):
        build_analysis_client(settings)
