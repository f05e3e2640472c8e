"""
Quantity model - a numeric value paired with its unit.

Every measurement the grouping engine touches (distance, duration,
pace, elevation) travels as a Quantity. Units are compared as plain
strings; callers are expected to hand over values that already share
a unit for the active dimension.
"""
import math
from dataclasses import dataclass
from typing import Iterable, Optional

from rungroups.core.exceptions import InvalidQuantityError, UnitMismatchError


@dataclass(frozen=True)
class Quantity:
    """Immutable value + unit pair."""
    value: float
    unit: str

    def to_dict(self) -> dict:
        return {"quantity": self.value, "unit": self.unit}


def new_quantity(value: float = 0.0, unit: str = "mi") -> Quantity:
    """
    Create a Quantity, rejecting negative and NaN values.

    Raises:
        InvalidQuantityError: If value is NaN or negative
    """
    if value is None or math.isnan(value) or value < 0:
        raise InvalidQuantityError(f"Invalid quantity value: {value!r}")
    return Quantity(float(value), unit)


def sum_quantities(quantities: Iterable[Quantity]) -> Quantity:
    """
    Sum quantities sharing one unit.

    Raises:
        InvalidQuantityError: If nothing is given to sum
        UnitMismatchError: If units differ
    """
    quantities = list(quantities)
    if not quantities:
        raise InvalidQuantityError("No quantities to sum")

    unit = quantities[0].unit
    for quantity in quantities:
        if quantity.unit != unit:
            raise UnitMismatchError(f"Unit mismatch: {quantity.unit} != {unit}")

    return new_quantity(sum(q.value for q in quantities), unit)


def average_quantity(total: Quantity, count: int) -> Quantity:
    """Divide an accumulated total by a count (0 when count is 0)."""
    if count <= 0:
        return new_quantity(0, total.unit)
    return new_quantity(total.value / count, total.unit)


def absolute_difference(a: Optional[Quantity], b: Optional[Quantity], unit: str) -> Quantity:
    """|a - b|; missing sides count as zero."""
    a_value = a.value if a is not None else 0.0
    b_value = b.value if b is not None else 0.0
    return new_quantity(abs(a_value - b_value), unit)


def pace_from_distance_and_duration(distance: Quantity, duration: Quantity) -> Quantity:
    """
    Calculate pace in minutes per distance unit.

    Duration is expected in seconds. A zero distance or zero duration
    yields a zero pace rather than dividing by zero.
    """
    unit = f"min/{distance.unit}"
    if distance.value <= 0 or duration.value <= 0:
        return new_quantity(0, unit)
    return new_quantity((duration.value / 60) / distance.value, unit)


def format_pace(pace: Quantity, include_unit: bool = True) -> str:
    """
    Format a decimal-minute pace as M:SS, e.g. 6.67 min/mi -> "6:40 min/mi".
    """
    if pace.value < 0 or math.isnan(pace.value):
        raise InvalidQuantityError(f"Pace must be a non-negative number, got {pace.value!r}")

    total_seconds = int(round(pace.value * 60))
    minutes, seconds = divmod(total_seconds, 60)
    formatted = f"{minutes}:{seconds:02d}"

    return f"{formatted} {pace.unit}" if include_unit else formatted
