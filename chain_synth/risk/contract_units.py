"""Conversion of order figures to the options contract's integer units.

The on-chain options contract stores strikes with 8 decimals, premiums with
6 decimals (the quote token's precision) and expirations as unix seconds.
Values pass through ``Decimal(str(x))`` so a 2-decimal price or 3-decimal
strike scales to an exact integer instead of picking up binary noise
(int(0.29 * 100) == 28).
"""

import calendar
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

from ..models.order import ContractOrderParams, OrderSpec, RiskProfile
from ..utils.error_handling import OrderValidationError

STRIKE_DECIMALS = 8
QUOTE_DECIMALS = 6

OPTION_TYPE_CODES = {"call": 0, "put": 1}


def _to_units(value: float, decimals: int) -> int:
    scaled = Decimal(str(value)).scaleb(decimals)
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def strike_to_units(strike: float) -> int:
    return _to_units(strike, STRIKE_DECIMALS)


def units_to_strike(units: int) -> float:
    return units / 10 ** STRIKE_DECIMALS


def premium_to_units(premium: float) -> int:
    return _to_units(premium, QUOTE_DECIMALS)


def units_to_premium(units: int) -> float:
    return units / 10 ** QUOTE_DECIMALS


def expiry_to_timestamp(expiry: str) -> int:
    """Unix seconds at 00:00 UTC of an ISO expiration date."""
    return calendar.timegm(date.fromisoformat(expiry).timetuple())


def timestamp_to_expiry(ts: int) -> str:
    """ISO date (UTC) of a unix timestamp."""
    return datetime.fromtimestamp(ts, tz=timezone.utc).date().isoformat()


def encode_contract_order(order: OrderSpec, expiry: str, risk: RiskProfile) -> ContractOrderParams:
    """Order fields as the contract call expects them.

    Args:
        order: Order ticket (supplies side and strike)
        expiry: ISO expiration date of the selected contract
        risk: RiskProfile from calculate_order_risk (supplies premium)

    Returns:
        ContractOrderParams in integer contract units
    """
    if order.side not in OPTION_TYPE_CODES:
        raise OrderValidationError(f"side must be 'call' or 'put', got {order.side!r}")

    return ContractOrderParams(
        option_type=OPTION_TYPE_CODES[order.side],
        strike_price=strike_to_units(order.strike),
        expiry_ts=expiry_to_timestamp(expiry),
        premium=premium_to_units(risk.premium),
    )
