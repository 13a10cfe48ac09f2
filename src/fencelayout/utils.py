"""Linear unit conversions (mm based)."""
from __future__ import annotations

from enum import StrEnum


class Unit(StrEnum):
    MM = "mm"
    CM = "cm"
    INCH = "in"


UNIT_FACTOR_TO_MM: dict[Unit, float] = {
    Unit.MM: 1.0,
    Unit.CM: 10.0,
    Unit.INCH: 25.4,
}


def to_mm(value: float, unit: Unit | str) -> float:
    """Convert a value expressed in `unit` to millimeters."""
    return value * UNIT_FACTOR_TO_MM[Unit(unit)]

def from_mm(value_mm: float, unit: Unit | str) -> float:
    """Convert millimeters to `unit`."""
    return value_mm / UNIT_FACTOR_TO_MM[Unit(unit)]

def convert_unit(value: float, source: Unit | str, target: Unit | str) -> float:
    """Convert between any two supported units (through millimeters)."""
    if Unit(source) == Unit(target):
        return value
    return from_mm(to_mm(value, source), target)
