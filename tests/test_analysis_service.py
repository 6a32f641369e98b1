"""Tests for the nutrition analysis service."""

import asyncio
import random

import pytest

from wellness_nutrition.domain.records import MealType
from wellness_nutrition.services.analysis import (
    MOCK_CONFIDENCE,
    NutritionAnalysisService,
    build_nutrition_prompt,
    mock_record,
)
from tests.conftest import FailingAnalysisClient, FakeAnalysisClient


def test_analyze_normalizes_model_output() -> None:
    client = FakeAnalysisClient()
    service = NutritionAnalysisService(client=client)

    result = asyncio.run(service.analyze("an apple", MealType.SNACK))

    assert result.success
    assert result.error is None
    assert result.records[0].food_item == "apple"
    assert result.raw_response == client.response
    assert '"an apple"' in client.prompts[0]
    assert "Meal type: snack" in client.prompts[0]


def test_analyze_returns_placeholder_for_garbled_output() -> None:
    client = FakeAnalysisClient(response="I could not identify that food.")
    service = NutritionAnalysisService(client=client)

    result = asyncio.run(service.analyze("mystery stew"))

    assert result.success
    assert len(result.records) == 1
    assert result.records[0].confidence == 0.1


def test_analyze_reports_client_failure() -> None:
    service = NutritionAnalysisService(client=FailingAnalysisClient())

    result = asyncio.run(service.analyze("pizza"))

    assert not result.success
    assert result.records == []
    assert result.error == "quota exceeded"


def test_analyze_without_client_uses_mock_data() -> None:
    service = NutritionAnalysisService(client=None, rng=random.Random(7))

    result = asyncio.run(service.analyze("green smoothie"))

    assert result.success
    (record,) = result.records
    assert record.food_item == "green smoothie"
    assert record.confidence == MOCK_CONFIDENCE
    assert 150 <= record.calories < 350
    assert result.raw_response == "Mock analysis for: green smoothie"


def test_mock_record_is_reproducible_with_seed() -> None:
    first = mock_record("bagel", random.Random(42))
    second = mock_record("bagel", random.Random(42))

    assert first == second
    assert 5 <= first.macronutrients.protein < 25
    assert 50 <= first.micronutrients.sodium < 550


def test_analyze_many_batches_and_keeps_order() -> None:
    client = FakeAnalysisClient()
    service = NutritionAnalysisService(
        client=client, batch_size=2, batch_delay_seconds=0
    )
    descriptions = ["eggs", "toast", "coffee", "orange", "bacon"]

    results = asyncio.run(service.analyze_many(descriptions))

    assert len(results) == 5
    assert all(result.success for result in results)
    for description, prompt in zip(descriptions, client.prompts, strict=True):
        assert f'"{description}"' in prompt


def test_build_prompt_without_meal_type() -> None:
    prompt = build_nutrition_prompt("lentil soup")

    assert "Meal type" not in prompt
    assert '"pantothenicAcid": number (mg)' in prompt
    assert "Return ONLY the JSON array" in prompt


def test_analyze_many_pauses_between_batches_only_with_client(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    delays: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    monkeypatch.setattr(
        "wellness_nutrition.services.analysis.asyncio.sleep", fake_sleep
    )
    descriptions = ["eggs", "toast", "coffee", "orange", "bacon"]

    mock_service = NutritionAnalysisService(
        client=None, batch_size=2, batch_delay_seconds=5
    )
    mock_results = asyncio.run(mock_service.analyze_many(descriptions))

    assert len(mock_results) == 5
    assert delays == []

    live_service = NutritionAnalysisService(
        client=FakeAnalysisClient(), batch_size=2, batch_delay_seconds=5
    )
    asyncio.run(live_service.analyze_many(descriptions))

    assert delays == [5, 5]
