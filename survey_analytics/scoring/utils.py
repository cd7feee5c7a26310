"""Decimal utilities for percentage arithmetic.

Percentages are computed with Decimal and ROUND_HALF_UP so that a 2.5 rounds
to 3 the same way the dashboard's integer display does, independent of
binary floating-point representation.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

Number = Union[int, float, Decimal]

HUNDRED = Decimal(100)


def _quantum(places: int) -> Decimal:
    return Decimal(1).scaleb(-places)


def to_decimal(value: Number, places: int = 4) -> Decimal:
    """``value`` as a Decimal rounded half-up to ``places`` decimals.

    Floats go through ``str`` so that 73.6 stays 73.6 rather than its binary
    expansion.
    """
    number = value if isinstance(value, Decimal) else Decimal(str(value))
    return number.quantize(_quantum(places), rounding=ROUND_HALF_UP)


def clamp(value: Decimal, low: Decimal = Decimal(0), high: Decimal = HUNDRED) -> Decimal:
    """Bound a percentage to [low, high]."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def percentage(part: int, whole: int, places: int = 0) -> Decimal:
    """Share of ``part`` in ``whole`` as a percentage in [0, 100].

    Args:
        part: Numerator (e.g. positive answers).
        whole: Denominator (e.g. answered questions).
        places: Decimal places to round to (0 for the module snapshot,
            1 for group/driver bars).

    Returns:
        Rounded percentage; 0 when ``whole`` is 0.
    """
    if whole <= 0:
        return Decimal(0)
    raw = HUNDRED * Decimal(part) / Decimal(whole)
    return clamp(raw.quantize(_quantum(places), rounding=ROUND_HALF_UP))


def round_percentage(value: Number) -> int:
    """Round a server-side or averaged percentage to the nearest integer in [0, 100]."""
    return int(clamp(to_decimal(value, places=0)))


def mean(values: Iterable[Number]) -> Decimal:
    """Arithmetic mean of the values; 0 for an empty input."""
    items = [Decimal(str(v)) if not isinstance(v, Decimal) else v for v in values]
    if not items:
        return Decimal(0)
    return sum(items) / Decimal(len(items))
