"""Food description analysis via generative models."""

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Protocol

from wellness_nutrition.domain.records import (
    Macronutrients,
    MealType,
    Micronutrients,
    NutritionRecord,
)
from wellness_nutrition.services.normalizer import NutritionResponseNormalizer

_logger = logging.getLogger(__name__)

MOCK_CONFIDENCE = 0.85

_PROMPT_TEMPLATE = """
Analyze the following food description and provide detailed nutrition
information in JSON format.

Food description: "{description}"
{meal_line}
Provide nutrition information for each food item mentioned.
Return ONLY a valid JSON array with this exact structure:

[
  {{
    "foodItem": "name of food item",
    "calories": number,
    "macronutrients": {{
      "protein": number (grams),
      "carbohydrates": number (grams),
      "fat": number (grams),
      "fiber": number (grams),
      "sugar": number (grams)
    }},
    "micronutrients": {{
      "sodium": number (mg),
      "potassium": number (mg),
      "calcium": number (mg),
      "iron": number (mg),
      "magnesium": number (mg),
      "phosphorus": number (mg),
      "zinc": number (mg),
      "copper": number (mg),
      "manganese": number (mg),
      "selenium": number (mcg),
      "iodine": number (mcg),
      "vitaminA": number (IU),
      "vitaminD": number (IU),
      "vitaminE": number (mg),
      "vitaminK": number (mcg),
      "vitaminC": number (mg),
      "thiamine": number (mg),
      "riboflavin": number (mg),
      "niacin": number (mg),
      "pantothenicAcid": number (mg),
      "vitaminB6": number (mg),
      "biotin": number (mcg),
      "folate": number (mcg),
      "vitaminB12": number (mcg),
      "choline": number (mg)
    }},
    "servingSize": "description of serving size",
    "confidence": number (0-1 scale)
  }}
]

Important notes:
- Estimate reasonable serving sizes if not specified
- If multiple foods are mentioned, create separate entries
- Use standard USDA nutrition values when possible
- Set confidence based on how specific the description is
- Return ONLY the JSON array, no additional text
"""


class AnalysisClient(Protocol):
    """Interface for a generative model that answers a text prompt."""

    async def complete(self, prompt: str) -> str:
        """Return the raw model text for a prompt."""


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of analyzing one food description."""

    success: bool
    records: list[NutritionRecord] = field(default_factory=list)
    error: str | None = None
    raw_response: str | None = None


@dataclass
class NutritionAnalysisService:
    """Service that prompts a model and normalizes what comes back.

    Without a client it produces synthetic data so the journal keeps working
    when no API key is configured.
    """

    client: AnalysisClient | None
    normalizer: NutritionResponseNormalizer = field(
        default_factory=NutritionResponseNormalizer
    )
    batch_size: int = 3
    batch_delay_seconds: float = 1.0
    rng: random.Random = field(default_factory=random.Random)

    async def analyze(
        self, description: str, meal_type: MealType | None = None
    ) -> AnalysisResult:
        """Estimate nutrition for a free-text food description."""
        if self.client is None:
            return AnalysisResult(
                success=True,
                records=[mock_record(description, self.rng)],
                raw_response=f"Mock analysis for: {description}",
            )

        prompt = build_nutrition_prompt(description, meal_type)
        try:
            raw = await self.client.complete(prompt)
        except Exception as exc:
            _logger.exception("Nutrition analysis failed for %r", description)
            return AnalysisResult(success=False, error=str(exc))
        return AnalysisResult(
            success=True,
            records=self.normalizer.normalize(raw),
            raw_response=raw,
        )

    async def analyze_many(
        self, descriptions: list[str], meal_type: MealType | None = None
    ) -> list[AnalysisResult]:
        """Analyze descriptions in small concurrent batches, preserving order.

        Batches are spaced by ``batch_delay_seconds`` only when a real client
        is configured.
        """
        results: list[AnalysisResult] = []
        size = max(1, self.batch_size)
        for start in range(0, len(descriptions), size):
            batch = descriptions[start : start + size]
            results.extend(
                await asyncio.gather(*(self.analyze(text, meal_type) for text in batch))
            )
            if self.client is not None and start + size < len(descriptions):
                await asyncio.sleep(self.batch_delay_seconds)
        return results


def build_nutrition_prompt(description: str, meal_type: MealType | None = None) -> str:
    """Build the text prompt asking for a JSON array of nutrition objects."""
    meal_line = f"Meal type: {meal_type}\n" if meal_type else ""
    return _PROMPT_TEMPLATE.format(description=description, meal_line=meal_line)


def mock_record(description: str, rng: random.Random) -> NutritionRecord:
    """Generate a plausible synthetic record for offline use."""
    return NutritionRecord(
        food_item=description.strip() or "Unknown food",
        calories=150 + rng.randrange(200),
        macronutrients=Macronutrients(
            protein=5 + rng.randrange(20),
            carbohydrates=20 + rng.randrange(30),
            fat=3 + rng.randrange(15),
            fiber=2 + rng.randrange(8),
            sugar=5 + rng.randrange(15),
        ),
        micronutrients=Micronutrients(
            sodium=50 + rng.randrange(500),
            potassium=100 + rng.randrange(400),
            calcium=20 + rng.randrange(200),
            iron=1 + rng.randrange(5),
            vitamin_c=5 + rng.randrange(50),
            vitamin_a=100 + rng.randrange(1000),
        ),
        serving_size="1 medium serving",
        confidence=MOCK_CONFIDENCE,
    )
