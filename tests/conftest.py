"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import pytest

from wellness_nutrition.config import Settings
from wellness_nutrition.services.analysis import AnalysisClient
from wellness_nutrition.services.evaluator import NutrientEvaluator
from wellness_nutrition.services.normalizer import NutritionResponseNormalizer

APPLE_ITEM: dict[str, object] = {
    "foodItem": "apple",
    "calories": 95,
    "macronutrients": {
        "protein": 0.5,
        "carbohydrates": 25,
        "fat": 0.3,
        "fiber": 4.4,
        "sugar": 19,
    },
    "micronutrients": {
        "sodium": 2,
        "potassium": 195,
        "calcium": 11,
        "iron": 0.2,
        "vitaminC": 8.4,
        "vitaminA": 98,
    },
    "servingSize": "1 medium",
    "confidence": 0.9,
}


def apple_response() -> str:
    return json.dumps([APPLE_ITEM])


@dataclass
class FakeAnalysisClient(AnalysisClient):
    """Fake model client returning a fixed text response."""

    response: str = field(default_factory=apple_response)
    prompts: list[str] = field(default_factory=list)
    closed: bool = False

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.response

    async def close(self) -> None:
        self.closed = True


@dataclass
class FailingAnalysisClient(AnalysisClient):
    """Fake model client whose calls always fail."""

    message: str = "quota exceeded"

    async def complete(self, prompt: str) -> str:
        raise RuntimeError(self.message)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        analysis_provider="mock",
        openai_api_key=None,
        gemini_api_key=None,
        nutrient_reference_path=None,
        analysis_batch_delay_seconds=0,
    )


@pytest.fixture
def evaluator() -> NutrientEvaluator:
    return NutrientEvaluator()


@pytest.fixture
def normalizer() -> NutritionResponseNormalizer:
    return NutritionResponseNormalizer()
