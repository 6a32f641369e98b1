"""Normalization of AI nutrition responses into validated records."""

import json
import logging
import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from pydantic.alias_generators import to_camel

from wellness_nutrition.domain.records import (
    MACRONUTRIENT_FIELDS,
    Macronutrients,
    Micronutrients,
    NutritionRecord,
)
from wellness_nutrition.errors import MalformedResponseError

_logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")

DEFAULT_FOOD_ITEM = "Unknown food"
DEFAULT_SERVING_SIZE = "1 serving"
DEFAULT_CONFIDENCE = 0.5
FALLBACK_CONFIDENCE = 0.1

FALLBACK_RECORD = NutritionRecord(
    food_item="Unknown food item",
    calories=100,
    macronutrients=Macronutrients(protein=2, carbohydrates=15, fat=3, fiber=1, sugar=5),
    micronutrients=Micronutrients(
        sodium=50, potassium=100, calcium=20, iron=1, vitamin_c=5, vitamin_a=100
    ),
    serving_size=DEFAULT_SERVING_SIZE,
    confidence=FALLBACK_CONFIDENCE,
)

# Units used as key suffixes by snake_case response shapes, e.g. "vitamin_c_mg".
MICRONUTRIENT_UNITS: dict[str, str] = {
    "sodium": "mg",
    "potassium": "mg",
    "calcium": "mg",
    "iron": "mg",
    "magnesium": "mg",
    "phosphorus": "mg",
    "zinc": "mg",
    "copper": "mg",
    "manganese": "mg",
    "selenium": "mcg",
    "iodine": "mcg",
    "vitamin_a": "iu",
    "vitamin_d": "iu",
    "vitamin_e": "mg",
    "vitamin_k": "mcg",
    "vitamin_c": "mg",
    "thiamine": "mg",
    "riboflavin": "mg",
    "niacin": "mg",
    "pantothenic_acid": "mg",
    "vitamin_b6": "mg",
    "biotin": "mcg",
    "folate": "mcg",
    "vitamin_b12": "mcg",
    "choline": "mg",
}

KeyPath = tuple[str, ...]

FOOD_ITEM_KEYS: tuple[KeyPath, ...] = (
    ("foodItem",),
    ("food_item",),
    ("food_name",),
    ("product_name",),
    ("name",),
)
SERVING_SIZE_KEYS: tuple[KeyPath, ...] = (("servingSize",), ("serving_size",))
CALORIES_KEYS: tuple[KeyPath, ...] = (
    ("calories",),
    ("calories_kcal",),
    ("energy_kcal",),
)
CONFIDENCE_KEYS: tuple[KeyPath, ...] = (("confidence",),)


def _macro_keys(name: str) -> tuple[KeyPath, ...]:
    keys: list[KeyPath] = [("macronutrients", name), (name,), (f"{name}_g",)]
    if name == "carbohydrates":
        keys.extend([("carbs",), ("carbs_g",)])
    return tuple(keys)


def _micro_keys(name: str) -> tuple[KeyPath, ...]:
    camel = to_camel(name)
    return (
        ("micronutrients", camel),
        ("micronutrients", name),
        (camel,),
        (name,),
        (f"{name}_{MICRONUTRIENT_UNITS[name]}",),
    )


MACRONUTRIENT_KEYS: dict[str, tuple[KeyPath, ...]] = {
    name: _macro_keys(name) for name in MACRONUTRIENT_FIELDS
}
MICRONUTRIENT_KEYS: dict[str, tuple[KeyPath, ...]] = {
    name: _micro_keys(name) for name in MICRONUTRIENT_UNITS
}


def coerce_non_negative_number(value: object, default: float = 0.0) -> float:
    """Coerce a loose JSON value to a finite number no lower than zero.

    Missing, non-numeric and non-finite values fall back to ``default``, as do
    integers too large for a float. Booleans count as non-numeric.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            return default
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
    else:
        return default
    if not math.isfinite(number):
        return default
    return max(0.0, number)


def coerce_confidence(value: object) -> float:
    """Clamp a confidence score to [0, 1], defaulting to 0.5.

    An explicit 0 is kept as 0 so that normalizing a canonical record again
    yields the same record.
    """
    return min(1.0, coerce_non_negative_number(value, default=DEFAULT_CONFIDENCE))


def extract_json_array(raw_text: str) -> list[object]:
    """Pull the JSON array out of prose or markdown-fenced model output."""
    if not isinstance(raw_text, str):
        raise MalformedResponseError("Response text is not a string")
    cleaned = _FENCE_PATTERN.sub("", raw_text)
    match = _ARRAY_PATTERN.search(cleaned)
    if match:
        candidate = match.group(0)
    else:
        trimmed = cleaned.strip()
        if not (trimmed.startswith("[") and trimmed.endswith("]")):
            raise MalformedResponseError("No JSON array found in response")
        candidate = trimmed
    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        raise MalformedResponseError(f"Invalid JSON array: {exc}") from exc
    if not isinstance(parsed, list):
        raise MalformedResponseError("Parsed JSON is not an array")
    return parsed


@dataclass(frozen=True)
class NutritionResponseNormalizer:
    """Turn loosely structured model output into nutrition records.

    Malformed input never raises: the caller always gets at least one record,
    with a low-confidence placeholder standing in when nothing can be parsed.
    """

    fallback: NutritionRecord = FALLBACK_RECORD

    def normalize(self, raw_text: str) -> list[NutritionRecord]:
        """Parse model text into one record per food item."""
        try:
            items = extract_json_array(raw_text)
        except MalformedResponseError as exc:
            return self._fallback(exc)
        return self.normalize_items(items)

    def normalize_items(self, items: Iterable[object]) -> list[NutritionRecord]:
        """Normalize already-parsed items, skipping anything that isn't an object."""
        records = [to_record(item) for item in items if isinstance(item, Mapping)]
        if not records:
            return self._fallback(
                MalformedResponseError("Array contains no nutrition objects")
            )
        return records

    def _fallback(self, exc: MalformedResponseError) -> list[NutritionRecord]:
        _logger.warning("Using placeholder nutrition record: %s", exc)
        return [self.fallback]


def to_record(item: Mapping[str, object]) -> NutritionRecord:
    """Build a record from one response object, tolerating key variants."""
    macros = {
        name: coerce_non_negative_number(_lookup(item, keys))
        for name, keys in MACRONUTRIENT_KEYS.items()
    }
    micros = {
        name: coerce_non_negative_number(_lookup(item, keys))
        for name, keys in MICRONUTRIENT_KEYS.items()
    }
    return NutritionRecord(
        food_item=_text(_lookup(item, FOOD_ITEM_KEYS), DEFAULT_FOOD_ITEM),
        calories=coerce_non_negative_number(_lookup(item, CALORIES_KEYS)),
        macronutrients=Macronutrients(**macros),
        micronutrients=Micronutrients(**micros),
        serving_size=_text(_lookup(item, SERVING_SIZE_KEYS), DEFAULT_SERVING_SIZE),
        confidence=coerce_confidence(_lookup(item, CONFIDENCE_KEYS)),
    )


def _lookup(item: Mapping[str, object], keys: tuple[KeyPath, ...]) -> object | None:
    """Return the first non-null value found along the given key paths."""
    for path in keys:
        value: object | None = item
        for key in path:
            if not isinstance(value, Mapping):
                value = None
                break
            value = value.get(key)
        if value is not None:
            return value
    return None


def _text(value: object | None, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default
