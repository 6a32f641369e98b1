"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from wellness_nutrition.adapters.gemini_client import HttpxGeminiClient
from wellness_nutrition.adapters.openai_analysis_client import OpenAIAnalysisClient
from wellness_nutrition.config import Settings, is_configured_key
from wellness_nutrition.errors import ConfigurationError
from wellness_nutrition.services.analysis import NutritionAnalysisService
from wellness_nutrition.services.evaluator import NutrientEvaluator
from wellness_nutrition.services.normalizer import NutritionResponseNormalizer
from wellness_nutrition.services.reference import ReferenceTable, load_reference_table

_logger = logging.getLogger(__name__)

_PROVIDERS = {"auto", "openai", "gemini", "mock"}


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    reference: ReferenceTable
    evaluator: NutrientEvaluator
    normalizer: NutritionResponseNormalizer
    analysis_service: NutritionAnalysisService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    reference = load_reference_table(resolved_settings.nutrient_reference_path)
    normalizer = NutritionResponseNormalizer()
    client = build_analysis_client(resolved_settings)
    analysis_service = NutritionAnalysisService(
        client=client,
        normalizer=normalizer,
        batch_size=resolved_settings.analysis_batch_size,
        batch_delay_seconds=resolved_settings.analysis_batch_delay_seconds,
    )

    async def close_resources() -> None:
        if client is not None:
            await client.close()

    return AppContainer(
        settings=resolved_settings,
        reference=reference,
        evaluator=NutrientEvaluator(reference),
        normalizer=normalizer,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )


def build_analysis_client(
    settings: Settings,
) -> OpenAIAnalysisClient | HttpxGeminiClient | None:
    """Pick the analysis backend; None means synthetic offline data."""
    provider = settings.analysis_provider.strip().lower()
    if provider not in _PROVIDERS:
        raise ConfigurationError(f"Unknown analysis provider: {provider!r}")
    openai_ready = is_configured_key(settings.openai_api_key)
    gemini_ready = is_configured_key(settings.gemini_api_key)

    if provider == "openai" and not openai_ready:
        raise ConfigurationError("OPENAI_API_KEY is required for the openai provider")
    if provider == "gemini" and not gemini_ready:
        raise ConfigurationError("GEMINI_API_KEY is required for the gemini provider")

    if provider == "openai" or (provider == "auto" and openai_ready):
        return OpenAIAnalysisClient.create(
            api_key=settings.openai_api_key, model=settings.openai_model
        )
    if provider == "gemini" or (provider == "auto" and gemini_ready):
        return HttpxGeminiClient.create(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
        )
    _logger.info("No analysis API key configured, using mock nutrition data")
    return None
