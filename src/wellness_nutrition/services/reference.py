"""Recommended daily allowance reference table."""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from types import MappingProxyType

from pydantic import PositiveFloat, TypeAdapter, ValidationError

from wellness_nutrition.domain.nutrients import NutrientCategory, NutrientReference
from wellness_nutrition.errors import ConfigurationError

_logger = logging.getLogger(__name__)

_MACRO = NutrientCategory.MACRONUTRIENT
_MINERAL = NutrientCategory.MINERAL
_FAT_SOLUBLE = NutrientCategory.FAT_SOLUBLE_VITAMIN
_WATER_SOLUBLE = NutrientCategory.WATER_SOLUBLE_VITAMIN

# Healthy adult targets, averaged across male and female recommendations.
STANDARD_REFERENCES: tuple[NutrientReference, ...] = (
    NutrientReference("calories", "Calories", "cal", 2000, _MACRO),
    NutrientReference("protein", "Protein", "g", 50, _MACRO),
    NutrientReference("carbohydrates", "Carbohydrates", "g", 130, _MACRO),
    NutrientReference("fat", "Fat", "g", 65, _MACRO),
    NutrientReference("fiber", "Fiber", "g", 28, _MACRO),
    # WHO: under 10% of calories
    NutrientReference("sugar", "Sugar", "g", 50, _MACRO),
    # Upper limit, the adequate intake is 1500 mg
    NutrientReference("sodium", "Sodium", "mg", 2300, _MINERAL),
    NutrientReference("potassium", "Potassium", "mg", 4700, _MINERAL),
    NutrientReference("calcium", "Calcium", "mg", 1000, _MINERAL),
    NutrientReference("iron", "Iron", "mg", 15, _MINERAL),
    NutrientReference("magnesium", "Magnesium", "mg", 350, _MINERAL),
    NutrientReference("phosphorus", "Phosphorus", "mg", 700, _MINERAL),
    NutrientReference("zinc", "Zinc", "mg", 10, _MINERAL),
    NutrientReference("copper", "Copper", "mg", 0.9, _MINERAL),
    NutrientReference("manganese", "Manganese", "mg", 2, _MINERAL),
    NutrientReference("selenium", "Selenium", "mcg", 55, _MINERAL),
    NutrientReference("iodine", "Iodine", "mcg", 150, _MINERAL),
    NutrientReference("vitaminA", "Vitamin A", "IU", 2500, _FAT_SOLUBLE),
    NutrientReference("vitaminD", "Vitamin D", "IU", 600, _FAT_SOLUBLE),
    NutrientReference("vitaminE", "Vitamin E", "mg", 15, _FAT_SOLUBLE),
    NutrientReference("vitaminK", "Vitamin K", "mcg", 100, _FAT_SOLUBLE),
    NutrientReference("vitaminC", "Vitamin C", "mg", 80, _WATER_SOLUBLE),
    NutrientReference("thiamine", "Thiamine (B1)", "mg", 1.1, _WATER_SOLUBLE),
    NutrientReference("riboflavin", "Riboflavin (B2)", "mg", 1.2, _WATER_SOLUBLE),
    NutrientReference("niacin", "Niacin (B3)", "mg", 15, _WATER_SOLUBLE),
    NutrientReference(
        "pantothenicAcid", "Pantothenic Acid (B5)", "mg", 5, _WATER_SOLUBLE
    ),
    NutrientReference("vitaminB6", "Vitamin B6", "mg", 1.4, _WATER_SOLUBLE),
    NutrientReference("biotin", "Biotin (B7)", "mcg", 30, _WATER_SOLUBLE),
    NutrientReference("folate", "Folate (B9)", "mcg", 400, _WATER_SOLUBLE),
    NutrientReference("vitaminB12", "Vitamin B12", "mcg", 2.4, _WATER_SOLUBLE),
    NutrientReference("choline", "Choline", "mg", 475, _WATER_SOLUBLE),
)

_TARGET_OVERRIDES = TypeAdapter(dict[str, PositiveFloat])


@dataclass(frozen=True)
class ReferenceTable:
    """Read-only lookup of nutrient references by id."""

    _rows: Mapping[str, NutrientReference]

    @classmethod
    def from_rows(cls, rows: tuple[NutrientReference, ...]) -> "ReferenceTable":
        """Build a table, rejecting duplicate ids and non-positive targets."""
        by_id: dict[str, NutrientReference] = {}
        for row in rows:
            if row.id in by_id:
                raise ConfigurationError(f"Duplicate nutrient id: {row.id}")
            if row.daily_target <= 0:
                raise ConfigurationError(
                    f"Daily target for {row.id} must be positive, "
                    f"got {row.daily_target}"
                )
            by_id[row.id] = row
        return cls(MappingProxyType(by_id))

    def get(self, nutrient_id: str) -> NutrientReference:
        """Return the reference row or raise ConfigurationError."""
        row = self._rows.get(nutrient_id)
        if row is None:
            raise ConfigurationError(f"Unknown nutrient id: {nutrient_id!r}")
        return row

    def ids(self) -> tuple[str, ...]:
        """Return nutrient ids in table order."""
        return tuple(self._rows)

    def with_targets(self, targets: Mapping[str, float]) -> "ReferenceTable":
        """Return a copy with daily targets replaced for the given ids."""
        unknown = sorted(set(targets) - set(self._rows))
        if unknown:
            raise ConfigurationError(f"Unknown nutrient ids in overrides: {unknown}")
        rows = tuple(
            replace(row, daily_target=targets[row.id]) if row.id in targets else row
            for row in self._rows.values()
        )
        return ReferenceTable.from_rows(rows)

    def __contains__(self, nutrient_id: object) -> bool:
        return nutrient_id in self._rows

    def __iter__(self) -> Iterator[NutrientReference]:
        return iter(self._rows.values())

    def __len__(self) -> int:
        return len(self._rows)


def standard_reference_table() -> ReferenceTable:
    """Return the built-in adult reference table."""
    return ReferenceTable.from_rows(STANDARD_REFERENCES)


def load_reference_table(path: str | Path | None = None) -> ReferenceTable:
    """Load the standard table, applying target overrides from a JSON file.

    The file holds a JSON object mapping nutrient id to a positive daily
    target, for example ``{"sodium": 1500, "protein": 60}``.
    """
    table = standard_reference_table()
    if path is None:
        return table
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read reference overrides: {path}") from exc
    try:
        targets = _TARGET_OVERRIDES.validate_json(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid reference overrides in {path}") from exc
    _logger.info("Loaded %s reference target overrides from %s", len(targets), path)
    return table.with_targets(targets)
