"""Rounding helpers.

Halves round toward +infinity (``floor(x * 10**p + 0.5)``), so -2.5 becomes
-2 and 2.5 becomes 3. Prices are quoted in cents; strikes carry a
thousandth for low-priced underlyings.

Values too large to scale (``x * 10**p`` overflows) have no fractional
digits left to round and are returned unchanged.
"""

import math
from decimal import Decimal

PRICE_DECIMALS = 2
STRIKE_DECIMALS = 3


def round_half_up(value: float, places: int) -> float:
    """Round ``value`` to ``places`` decimals, halves toward +infinity."""
    factor = 10 ** places
    scaled = value * factor
    if math.isinf(scaled) and math.isfinite(value):
        return value
    return math.floor(scaled + 0.5) / factor


def truncate(value: float, places: int) -> float:
    """Drop digits beyond ``places`` decimals (toward -infinity).

    A tolerance of 1e-9 keeps binary artefacts such as 0.29 * 100 ==
    28.999999999999996 from losing a whole unit.
    """
    factor = 10 ** places
    scaled = value * factor
    if math.isinf(scaled) and math.isfinite(value):
        return value
    return math.floor(scaled + 1e-9) / factor


def decimal_places(value: float) -> int:
    """Digits after the decimal point in the shortest repr of ``value``.

    Example:
        >>> decimal_places(1.16), decimal_places(0.00092), decimal_places(3400.0)
        (2, 5, 0)
    """
    exponent = Decimal(repr(value)).normalize().as_tuple().exponent
    return max(0, -exponent) if isinstance(exponent, int) else 0


def round_price(value: float) -> float:
    return round_half_up(value, PRICE_DECIMALS)


def round_strike(value: float) -> float:
    return round_half_up(value, STRIKE_DECIMALS)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
