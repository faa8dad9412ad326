"""Reward points policy.

Tiered rates, every band floored before it is weighted:

- up to $50: no points
- $50 to $100: 1 point per whole dollar above $50
- above $100: 50 points for the $50-$100 band plus 2 points per whole
  dollar above $100

Examples:
    >>> calculate_points(120)
    90
    >>> calculate_points(Decimal("99.99"))
    49
"""

from __future__ import annotations

import math
from decimal import Decimal

LOWER_THRESHOLD = Decimal(50)
UPPER_THRESHOLD = Decimal(100)

# Points earned for spending the full lower-to-upper band
BAND_POINTS = 50
UPPER_RATE = 2


def to_decimal(amount: Decimal | int | float | str) -> Decimal:
    """Convert an amount to Decimal, going through ``str`` for floats."""
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        return Decimal(str(amount))
    return Decimal(amount)


def calculate_points(amount: Decimal | int | float) -> int:
    """Calculate reward points for a single purchase amount.

    Args:
        amount: Purchase amount in dollars. Negative amounts earn nothing.

    Returns:
        Integer number of points, never negative.

    Examples:
        >>> calculate_points(50)
        0
        >>> calculate_points(100)
        50
        >>> calculate_points(101)
        52
    """
    value = to_decimal(amount)

    if value < LOWER_THRESHOLD:
        return 0
    if value <= UPPER_THRESHOLD:
        return math.floor(value - LOWER_THRESHOLD)
    return BAND_POINTS + math.floor(value - UPPER_THRESHOLD) * UPPER_RATE
