"""Numeric helpers shared by the aggregators.

Invariants:
    - mean_or_none never divides by zero: an empty input yields None
    - round_half_up rounds .5 away from zero (85.125 -> 85.13), unlike round()
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable


def round_half_up(value: float, places: int) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def mean_or_none(values: Iterable[float]) -> float | None:
    values = list(values)
    if not values:
        return None
    return sum(values) / len(values)


def percentage(part: int, whole: int) -> float:
    """part/whole as a percentage with one decimal; 0.0 when whole is 0."""
    if not whole:
        return 0.0
    return round_half_up(part / whole * 100, 1)
