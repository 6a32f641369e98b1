"""Exception types raised by the package."""


class WellnessNutritionError(Exception):
    """Base class for package errors."""


class ConfigurationError(WellnessNutritionError):
    """Raised for unknown nutrient ids or an invalid reference table."""


class MalformedResponseError(WellnessNutritionError):
    """Raised when AI output contains no usable nutrition array."""
