"""Weight unit conversion and display rounding."""

import math
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional, Union

KG_TO_LBS = 2.20462


class WeightUnit(Enum):
    """Display unit for weights. Stored weights are always kilograms."""
    KG = "kg"
    LBS = "lbs"

    @classmethod
    def parse(cls, value: Union[str, "WeightUnit", None]) -> "WeightUnit":
        """Accept 'kg'/'lbs' in any case; None falls back to kilograms."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.KG
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown weight unit '{value}'. Expected 'kg' or 'lbs'")


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from zero on the positive side, like a UI Math.round.

    Python's built-in round() uses banker's rounding (round(2.5) == 2), which
    would shift reported set counts for fractional secondary volume.
    """
    if digits == 0:
        return math.floor(value + 0.5)
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def kg_to_display(kg_value: Optional[float], unit: WeightUnit) -> float:
    """Convert a stored kilogram value to the display unit.

    Pounds are rounded to the nearest half pound so that converted loads
    line up with real plates.
    """
    if kg_value is None:
        return 0
    if unit == WeightUnit.LBS:
        lbs = kg_value * KG_TO_LBS
        return round_half_up(lbs * 2) / 2
    return kg_value


def display_to_kg(display_value: Optional[float], unit: WeightUnit) -> float:
    """Convert a display-unit value back to kilograms."""
    if display_value is None:
        return 0
    if unit == WeightUnit.LBS:
        return display_value / KG_TO_LBS
    return display_value
