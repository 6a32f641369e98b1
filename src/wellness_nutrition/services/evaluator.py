"""Nutrient status evaluation against daily targets."""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from fractions import Fraction

from wellness_nutrition.domain.nutrients import (
    NutrientCategory,
    NutrientStatus,
    StatusLevel,
)
from wellness_nutrition.services.reference import (
    ReferenceTable,
    standard_reference_table,
)
from wellness_nutrition.services.totals import NutritionTotals

DEFICIENT_BELOW = 50
ADEQUATE_BELOW = 80
OPTIMAL_UP_TO = 150

SODIUM_OPTIMAL_UP_TO = 65
SODIUM_ADEQUATE_UP_TO = 100

SUGAR_OPTIMAL_UP_TO = 100
SUGAR_ADEQUATE_UP_TO = 120

CALORIES_DEFICIENT_BELOW = 70
CALORIES_ADEQUATE_BELOW = 90
CALORIES_OPTIMAL_UP_TO = 110

_RECOMMENDATIONS: dict[str, tuple[str, ...]] = {
    "Vitamin C": (
        "Citrus fruits, berries, bell peppers",
        "Broccoli, tomatoes, leafy greens",
    ),
    "Iron": (
        "Lean red meat, poultry, fish",
        "Beans, lentils, fortified cereals",
        "Pair with Vitamin C for better absorption",
    ),
    "Calcium": (
        "Dairy products, fortified plant milks",
        "Leafy greens, sardines, almonds",
    ),
    "Vitamin D": (
        "Fatty fish, fortified milk",
        "Egg yolks, mushrooms",
        "Consider moderate sun exposure",
    ),
    "Potassium": ("Bananas, oranges, potatoes", "Spinach, beans, yogurt"),
    "Folate (B9)": ("Leafy greens, legumes", "Fortified grains, citrus fruits"),
    "Magnesium": ("Nuts, seeds, whole grains", "Dark chocolate, leafy greens"),
    "Zinc": ("Meat, shellfish, legumes", "Nuts, seeds, dairy products"),
}

_GENERIC_RECOMMENDATIONS: tuple[str, ...] = (
    "Eat a varied, balanced diet",
    "Consider consulting a nutritionist",
)


@dataclass(frozen=True)
class NutrientEvaluator:
    """Classify nutrient intake against a reference table."""

    reference: ReferenceTable = field(default_factory=standard_reference_table)

    def evaluate(self, current: float, nutrient_id: str) -> NutrientStatus:
        """Return the percentage of target and status for one nutrient."""
        row = self.reference.get(nutrient_id)
        amount = _clamp_amount(current)
        percentage = _round_half_up(Fraction(amount) * 100 / Fraction(row.daily_target))
        return NutrientStatus(
            id=row.id,
            display_name=row.display_name,
            unit=row.unit,
            current=amount,
            target=row.daily_target,
            percentage=percentage,
            status=classify(nutrient_id, percentage),
            category=row.category,
        )

    def evaluate_totals(self, totals: NutritionTotals) -> list[NutrientStatus]:
        """Evaluate every reference nutrient, in table order."""
        amounts = totals.amounts()
        return [
            self.evaluate(amounts.get(row.id, 0.0), row.id) for row in self.reference
        ]

    def display_name(self, nutrient_id: str) -> str:
        """Return the human-readable nutrient name."""
        return self.reference.get(nutrient_id).display_name

    def unit(self, nutrient_id: str) -> str:
        """Return the unit the daily target is expressed in."""
        return self.reference.get(nutrient_id).unit

    def category(self, nutrient_id: str) -> NutrientCategory:
        """Return the nutrient category."""
        return self.reference.get(nutrient_id).category

    def target(self, nutrient_id: str) -> float:
        """Return the daily target."""
        return self.reference.get(nutrient_id).daily_target

    def recommendations(self, status: NutrientStatus) -> list[str]:
        """Return food suggestions for improving the given nutrient."""
        return recommendations(status)


def classify(nutrient_id: str, percentage: int) -> StatusLevel:
    """Bucket a percentage of target into a status level.

    Sodium and sugar are limits, so lower is better. Calories are judged on a
    tight band around the target.
    """
    if nutrient_id == "sodium":
        if percentage <= SODIUM_OPTIMAL_UP_TO:
            return StatusLevel.OPTIMAL
        if percentage <= SODIUM_ADEQUATE_UP_TO:
            return StatusLevel.ADEQUATE
        return StatusLevel.EXCESSIVE
    if nutrient_id == "sugar":
        if percentage <= SUGAR_OPTIMAL_UP_TO:
            return StatusLevel.OPTIMAL
        if percentage <= SUGAR_ADEQUATE_UP_TO:
            return StatusLevel.ADEQUATE
        return StatusLevel.EXCESSIVE
    if nutrient_id == "calories":
        return _banded(
            percentage,
            CALORIES_DEFICIENT_BELOW,
            CALORIES_ADEQUATE_BELOW,
            CALORIES_OPTIMAL_UP_TO,
        )
    return _banded(percentage, DEFICIENT_BELOW, ADEQUATE_BELOW, OPTIMAL_UP_TO)


def _clamp_amount(current: float) -> float:
    """Clamp to a finite, non-negative amount; NaN and infinity count as zero."""
    try:
        amount = float(current)
    except OverflowError:
        return 0.0
    if not math.isfinite(amount):
        return 0.0
    return max(0.0, amount)


def _round_half_up(value: Fraction) -> int:
    return math.floor(value + Fraction(1, 2))


def _banded(
    percentage: int, deficient_below: int, adequate_below: int, optimal_up_to: int
) -> StatusLevel:
    if percentage < deficient_below:
        return StatusLevel.DEFICIENT
    if percentage < adequate_below:
        return StatusLevel.ADEQUATE
    if percentage <= optimal_up_to:
        return StatusLevel.OPTIMAL
    return StatusLevel.EXCESSIVE


def recommendations(status: NutrientStatus) -> list[str]:
    """Return food suggestions for improving a nutrient."""
    return list(_RECOMMENDATIONS.get(status.display_name, _GENERIC_RECOMMENDATIONS))


def deficiencies(statuses: Iterable[NutrientStatus]) -> list[NutrientStatus]:
    """Return only the deficient statuses."""
    return [status for status in statuses if status.status is StatusLevel.DEFICIENT]
