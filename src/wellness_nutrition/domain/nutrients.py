"""Nutrient reference and status domain models."""

from dataclasses import dataclass
from enum import StrEnum


class NutrientCategory(StrEnum):
    """Grouping used for nutrient dashboards."""

    MACRONUTRIENT = "macronutrient"
    MINERAL = "mineral"
    FAT_SOLUBLE_VITAMIN = "fat-soluble-vitamin"
    WATER_SOLUBLE_VITAMIN = "water-soluble-vitamin"


class StatusLevel(StrEnum):
    """Qualitative comparison of intake against a daily target."""

    DEFICIENT = "deficient"
    ADEQUATE = "adequate"
    OPTIMAL = "optimal"
    EXCESSIVE = "excessive"


@dataclass(frozen=True)
class NutrientReference:
    """Recommended daily target for a single nutrient."""

    id: str
    display_name: str
    unit: str
    daily_target: float
    category: NutrientCategory


@dataclass(frozen=True)
class NutrientStatus:
    """Evaluated intake for one nutrient."""

    id: str
    display_name: str
    unit: str
    current: float
    target: float
    percentage: int
    status: StatusLevel
    category: NutrientCategory
