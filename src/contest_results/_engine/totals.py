# Area: Engine
"""Exact summation of mark values (no binary float drift)."""

from decimal import Decimal
from typing import Iterable, Union

Score = Union[int, float]


def sum_scores(values: Iterable[Score]) -> Score:
    """
    Sum marks exactly and return an int when the total is integral.

    Each value goes through its shortest repr, so 0.1 + 0.2 sums to 0.3.
    """
    total = sum((Decimal(str(v)) for v in values), Decimal(0))
    if total == total.to_integral_value():
        return int(total)
    return float(total)
