"""Unit conversion and serving scaling utilities."""

import math
from dataclasses import dataclass

from recipebook.errors import InvalidServingsError
from recipebook.logging_config import get_logger
from recipebook.schemas import ConvertedQuantity, Ingredient, ScaledIngredient, UnitSystem

logger = get_logger(__name__)


# =============================================================================
# Unit Conversion Table
# =============================================================================


@dataclass(frozen=True)
class UnitTarget:
    """Multiplier and resulting unit for one target system."""

    value: float
    unit: str


@dataclass(frozen=True)
class UnitConversion:
    """Metric and imperial equivalents of a recognized unit."""

    metric: UnitTarget
    imperial: UnitTarget

    def target(self, system: UnitSystem) -> UnitTarget:
        return self.metric if system == "metric" else self.imperial


# Keys are lowercase. The g/oz, kg/lb, ml/fl oz and l/pint pairs use independently
# specified constants and are not exact inverses of each other.
CONVERSION_TABLE: dict[str, UnitConversion] = {
    # Weight
    "g": UnitConversion(metric=UnitTarget(1, "g"), imperial=UnitTarget(0.035274, "oz")),
    "kg": UnitConversion(metric=UnitTarget(1, "kg"), imperial=UnitTarget(2.20462, "lb")),
    "oz": UnitConversion(metric=UnitTarget(28.3495, "g"), imperial=UnitTarget(1, "oz")),
    "lb": UnitConversion(metric=UnitTarget(0.453592, "kg"), imperial=UnitTarget(1, "lb")),
    # Volume
    "ml": UnitConversion(metric=UnitTarget(1, "ml"), imperial=UnitTarget(0.033814, "fl oz")),
    "l": UnitConversion(metric=UnitTarget(1, "l"), imperial=UnitTarget(1.75975, "pint")),
    "fl oz": UnitConversion(metric=UnitTarget(29.5735, "ml"), imperial=UnitTarget(1, "fl oz")),
    "pint": UnitConversion(metric=UnitTarget(568.261, "ml"), imperial=UnitTarget(1, "pint")),
    # Temperature (cross-system conversion handled in convert_units)
    "°c": UnitConversion(metric=UnitTarget(1, "°C"), imperial=UnitTarget(1, "°F")),
    "°f": UnitConversion(metric=UnitTarget(1, "°C"), imperial=UnitTarget(1, "°F")),
}


# =============================================================================
# Rounding
# =============================================================================


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round to ``digits`` decimal places with halves rounded towards +infinity.

    Python's round() uses banker's rounding; displayed quantities must instead
    match half-up rounding (2.5 -> 3, -2.5 -> -2). Infinities and NaN are
    returned unchanged.
    """
    if not math.isfinite(value):
        return value
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def format_quantity(value: float) -> str:
    """Render a number without a trailing ``.0`` for whole values."""
    if not math.isfinite(value):
        return str(value)
    if value == int(value):
        return str(int(value))
    return str(value)


# =============================================================================
# Conversion
# =============================================================================


def convert_units(quantity: float, unit: str, target_system: UnitSystem) -> ConvertedQuantity:
    """
    Convert a quantity to the requested unit system.

    Unrecognized units (``pieces``, ``to taste`` ...) are returned unchanged.
    Celsius to imperial and Fahrenheit to metric are converted with the exact
    temperature formulas and rounded to whole degrees. Everything else is
    multiplied by the table factor and rounded to 2 decimals below 1, or to
    1 decimal otherwise.
    """
    key = unit.strip().lower()

    if key == "°c" and target_system == "imperial":
        return ConvertedQuantity(value=round_half_up(quantity * 9 / 5 + 32), unit="°F")
    if key == "°f" and target_system == "metric":
        return ConvertedQuantity(value=round_half_up((quantity - 32) * 5 / 9), unit="°C")

    conversion = CONVERSION_TABLE.get(key)
    if conversion is None:
        logger.debug(f"No conversion for unit '{unit}', returning quantity unchanged")
        return ConvertedQuantity(value=quantity, unit=unit)

    target = conversion.target(target_system)
    converted = quantity * target.value

    if converted < 1:
        rounded = round_half_up(converted, 2)
    else:
        rounded = round_half_up(converted, 1)

    return ConvertedQuantity(value=rounded, unit=target.unit)


def scale_ingredient_quantity(
    original_quantity: float,
    original_servings: float,
    new_servings: float,
) -> float:
    """
    Scale a quantity from one serving count to another.

    The scaled result is rounded to 2 decimals below 1, to 1 decimal below 10,
    and to a whole number from 10 upwards.

    Raises:
        InvalidServingsError: If ``original_servings`` is not positive.
    """
    if original_servings <= 0:
        raise InvalidServingsError(original_servings)

    scaled = original_quantity * (new_servings / original_servings)

    if scaled < 1:
        return round_half_up(scaled, 2)
    elif scaled < 10:
        return round_half_up(scaled, 1)
    else:
        return round_half_up(scaled)


# =============================================================================
# Ingredient Display
# =============================================================================


def _describe(name: str, note: str | None) -> str:
    return f"{name} ({note})" if note else name


def scale_and_convert(
    ingredient: Ingredient,
    base_servings: int,
    servings: int,
    unit_system: UnitSystem,
) -> ScaledIngredient:
    """
    Rescale an ingredient to ``servings`` and express it in ``unit_system``.

    Scaling happens before conversion. Ingredients without a quantity are
    passed through untouched.
    """
    if ingredient.quantity is None or not ingredient.unit:
        return ScaledIngredient(
            name=ingredient.name,
            note=ingredient.note,
            display=_describe(ingredient.name, ingredient.note),
        )

    scaled = scale_ingredient_quantity(ingredient.quantity, base_servings, servings)
    converted = convert_units(scaled, ingredient.unit, unit_system)

    return ScaledIngredient(
        name=ingredient.name,
        quantity=converted.value,
        unit=converted.unit,
        note=ingredient.note,
        display=(
            f"{format_quantity(converted.value)} {converted.unit} "
            f"{_describe(ingredient.name, ingredient.note)}"
        ),
    )


def format_ingredient_line(
    ingredient: Ingredient,
    base_servings: int,
    servings: int,
    unit_system: UnitSystem,
) -> str:
    """Get the display line for an ingredient, e.g. ``"400 g plain flour (sifted)"``."""
    return scale_and_convert(ingredient, base_servings, servings, unit_system).display
