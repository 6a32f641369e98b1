"""Daily totals summed from normalized records."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from wellness_nutrition.domain.records import (
    MACRONUTRIENT_FIELDS,
    Macronutrients,
    Micronutrients,
    NutritionRecord,
)

CALORIES_PER_GRAM_PROTEIN = 4
CALORIES_PER_GRAM_CARBS = 4
CALORIES_PER_GRAM_FAT = 9


@dataclass(frozen=True)
class NutritionTotals:
    """Summed nutrition across any number of records."""

    calories: float = 0.0
    macronutrients: Macronutrients = field(default_factory=Macronutrients)
    micronutrients: Micronutrients = field(default_factory=Micronutrients)
    record_count: int = 0

    def amounts(self) -> dict[str, float]:
        """Return amounts keyed by reference nutrient id."""
        amounts = {"calories": self.calories}
        amounts.update(self.macronutrients.model_dump())
        amounts.update(self.micronutrients.model_dump(by_alias=True))
        return amounts


def sum_records(records: Iterable[NutritionRecord]) -> NutritionTotals:
    """Add up calories, macros and micros for the given records."""
    calories = 0.0
    macros = dict.fromkeys(MACRONUTRIENT_FIELDS, 0.0)
    micros = dict.fromkeys(Micronutrients.model_fields, 0.0)
    count = 0
    for record in records:
        count += 1
        calories += record.calories
        for name, value in record.macronutrients.model_dump().items():
            macros[name] += value
        for name, value in record.micronutrients.model_dump().items():
            micros[name] += value
    return NutritionTotals(
        calories=calories,
        macronutrients=Macronutrients(**macros),
        micronutrients=Micronutrients(**micros),
        record_count=count,
    )


def calories_from_macros(protein: float, carbohydrates: float, fat: float) -> int:
    """Estimate calories from macronutrient grams."""
    return round(
        protein * CALORIES_PER_GRAM_PROTEIN
        + carbohydrates * CALORIES_PER_GRAM_CARBS
        + fat * CALORIES_PER_GRAM_FAT
    )


def macros_consistent(record: NutritionRecord, tolerance: float = 0.2) -> bool:
    """Check that stated calories roughly match calories implied by macros."""
    if record.calories <= 0:
        return False
    macros = record.macronutrients
    estimated = calories_from_macros(macros.protein, macros.carbohydrates, macros.fat)
    return abs(estimated - record.calories) / record.calories <= tolerance
