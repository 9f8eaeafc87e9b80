"""Weight unit conversion and display formatting."""

import math

from ..models.logs import WeightUnit

LB_PER_KG = 2.20462


def to_kg(weight: float, unit: WeightUnit | str) -> float:
    """Convert a weight to kilograms.

    Args:
        weight: The weight as entered
        unit: Unit the weight was entered in ("kg" or "lb")

    Returns:
        Weight in kilograms

    Raises:
        ValueError: If the unit is not recognized
    """
    unit = WeightUnit(unit)
    if unit == WeightUnit.KG:
        return float(weight)
    return float(weight) / LB_PER_KG


def from_kg(weight_kg: float, unit: WeightUnit | str) -> float:
    """Convert kilograms to the given unit."""
    unit = WeightUnit(unit)
    if unit == WeightUnit.KG:
        return float(weight_kg)
    return float(weight_kg) * LB_PER_KG


def format_number(value: float) -> str:
    """Format a number without a trailing ``.0`` (135.0 -> "135", 2.5 -> "2.5")."""
    if not math.isfinite(value):
        return "n/a"
    rounded = round(value, 1)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.1f}"


def format_signed(value: float, suffix: str = "") -> str:
    """Format a delta with an explicit sign."""
    sign = "+" if value > 0 else ""
    return f"{sign}{format_number(value)}{suffix}"
