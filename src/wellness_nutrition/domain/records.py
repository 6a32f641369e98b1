"""Models for normalized nutrition records."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MealType(StrEnum):
    """Meal a journal entry belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


_RECORD_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


class Macronutrients(BaseModel):
    """Macronutrients in grams."""

    model_config = _RECORD_CONFIG

    protein: float = Field(default=0.0, ge=0.0)
    carbohydrates: float = Field(default=0.0, ge=0.0)
    fat: float = Field(default=0.0, ge=0.0)
    fiber: float = Field(default=0.0, ge=0.0)
    sugar: float = Field(default=0.0, ge=0.0)


class Micronutrients(BaseModel):
    """Minerals and vitamins, in the unit of the matching reference row."""

    model_config = _RECORD_CONFIG

    sodium: float = Field(default=0.0, ge=0.0)
    potassium: float = Field(default=0.0, ge=0.0)
    calcium: float = Field(default=0.0, ge=0.0)
    iron: float = Field(default=0.0, ge=0.0)
    magnesium: float = Field(default=0.0, ge=0.0)
    phosphorus: float = Field(default=0.0, ge=0.0)
    zinc: float = Field(default=0.0, ge=0.0)
    copper: float = Field(default=0.0, ge=0.0)
    manganese: float = Field(default=0.0, ge=0.0)
    selenium: float = Field(default=0.0, ge=0.0)
    iodine: float = Field(default=0.0, ge=0.0)
    vitamin_a: float = Field(default=0.0, ge=0.0)
    vitamin_d: float = Field(default=0.0, ge=0.0)
    vitamin_e: float = Field(default=0.0, ge=0.0)
    vitamin_k: float = Field(default=0.0, ge=0.0)
    vitamin_c: float = Field(default=0.0, ge=0.0)
    thiamine: float = Field(default=0.0, ge=0.0)
    riboflavin: float = Field(default=0.0, ge=0.0)
    niacin: float = Field(default=0.0, ge=0.0)
    pantothenic_acid: float = Field(default=0.0, ge=0.0)
    vitamin_b6: float = Field(default=0.0, ge=0.0)
    biotin: float = Field(default=0.0, ge=0.0)
    folate: float = Field(default=0.0, ge=0.0)
    vitamin_b12: float = Field(default=0.0, ge=0.0)
    choline: float = Field(default=0.0, ge=0.0)


class NutritionRecord(BaseModel):
    """A single food item with estimated nutrition."""

    model_config = _RECORD_CONFIG

    food_item: str = Field(default="Unknown food", min_length=1)
    calories: float = Field(default=0.0, ge=0.0)
    macronutrients: Macronutrients = Field(default_factory=Macronutrients)
    micronutrients: Micronutrients = Field(default_factory=Micronutrients)
    serving_size: str = "1 serving"
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)

    def to_canonical_json(self) -> str:
        """Serialize with the camelCase keys the normalizer reads first."""
        return self.model_dump_json(by_alias=True)


MACRONUTRIENT_FIELDS: tuple[str, ...] = tuple(Macronutrients.model_fields)
MICRONUTRIENT_FIELDS: tuple[str, ...] = tuple(Micronutrients.model_fields)
