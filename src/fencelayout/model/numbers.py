"""
Numeric Formatting
==================
Consistent rounding, two-decimal formatting and lenient number parsing for
every label the layout engine emits.

Why is this file needed?
------------------------
1. Binary floats make "round half up" unreliable (2.005 is stored slightly
   below 2.005). Rounding happens on the shortest decimal representation of
   the value, so what the user typed is what gets rounded.
2. Users type decimals with either ',' or '.', parsing accepts both.
"""
from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Iterable

NOT_A_NUMBER: float = math.nan

_HUNDREDTH = Decimal("0.01")


def _quantize(value: float) -> Decimal:
    # repr() gives the shortest string that round-trips to the same float
    exact = Decimal(repr(float(value)))
    with localcontext() as ctx:
        # integer digits plus two decimals must fit the context precision
        ctx.prec = max(28, exact.adjusted() + 3)
        return exact.quantize(_HUNDREDTH, rounding=ROUND_HALF_UP)


def round2(value: float) -> float:
    """
    Round to 2 decimal places, halves away from zero.

    Non-finite input is returned unchanged.
    """
    if not math.isfinite(value):
        return value
    result = float(_quantize(value))
    return result + 0.0  # normalizes -0.0


def fmt2(value: float) -> str:
    """Format with exactly two decimals after `round2` (12.3 -> '12.30')."""
    if not math.isfinite(value):
        return str(value)
    text = f"{_quantize(value):.2f}"
    if text == "-0.00":
        return "0.00"
    return text


def parse_number(raw: str) -> float:
    """
    Parse a user supplied decimal number.

    Accepts ',' or '.' as decimal separator. Empty, malformed or non-finite
    input yields NOT_A_NUMBER, and so do digit separators such as "1_000".
    """
    text = raw.strip()
    if not text or "_" in text:
        return NOT_A_NUMBER
    try:
        value = float(text.replace(",", ".", 1))
    except ValueError:
        return NOT_A_NUMBER
    return value if math.isfinite(value) else NOT_A_NUMBER


def is_not_a_number(value: float) -> bool:
    return isinstance(value, float) and math.isnan(value)


def total(values: Iterable[float]) -> float:
    """Plain sum of a sequence of lengths (0.0 for an empty one)."""
    return float(math.fsum(values))


def format_length(value: float, unit: str) -> str:
    """Label text of a length: '400.00 mm'."""
    return f"{fmt2(value)} {unit}"

