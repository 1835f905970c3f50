"""Quantity conversion, serving scaling and display formatting."""

from recipebook.normalize.text import (
    format_cooking_time,
    format_date_uk,
    generate_slug,
)
from recipebook.normalize.units import (
    CONVERSION_TABLE,
    UnitConversion,
    UnitTarget,
    convert_units,
    format_ingredient_line,
    format_quantity,
    round_half_up,
    scale_and_convert,
    scale_ingredient_quantity,
)

__all__ = [
    "CONVERSION_TABLE",
    "UnitConversion",
    "UnitTarget",
    "convert_units",
    "format_cooking_time",
    "format_date_uk",
    "format_ingredient_line",
    "format_quantity",
    "generate_slug",
    "round_half_up",
    "scale_and_convert",
    "scale_ingredient_quantity",
]
