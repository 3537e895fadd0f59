"""Order cost and payoff bounds for a single option leg.

Payoff at expiration for the whole order (K = strike, P = premium paid or
received, q = quantity, 100 = contract multiplier):

    Long call:   max profit unbounded,   max loss P,           breakeven K + price
    Long put:    max profit K*100*q - P, max loss P,           breakeven K - price
    Short call:  max profit P,           max loss unbounded,   breakeven K + price
    Short put:   max profit P,           max loss K*100*q - P, breakeven K - price

Margin and collateral requirements for short positions are not modelled.
"""

import logging
import math
from typing import Any, Dict

from ..models.order import CONTRACT_MULTIPLIER, OrderSpec, RiskProfile
from ..models.quote import OptionQuote
from ..utils.error_handling import OrderValidationError
from ..utils.rounding import STRIKE_DECIMALS, decimal_places, round_half_up, round_price

logger = logging.getLogger("chain_synth.order_risk")

_SIDES = ("call", "put")
_ORDER_SIDES = ("buy", "sell")
_ORDER_TYPES = ("limit", "market")


class FeeSchedule:
    """Flat per-contract fees applied to every order."""

    def __init__(
        self,
        reg_fee: float = 0.02,
        exchange_fee: float = 0.01,
        contract_fee: float = 0.50,
    ):
        """Initialize fee schedule.

        Args:
            reg_fee: Regulatory fee per contract
            exchange_fee: Exchange fee per contract
            contract_fee: Broker contract fee per contract
        """
        self.reg_fee = reg_fee
        self.exchange_fee = exchange_fee
        self.contract_fee = contract_fee

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "FeeSchedule":
        """Create FeeSchedule from dictionary (e.g., from YAML).

        Args:
            config: Dictionary with per-contract fees

        Returns:
            FeeSchedule instance
        """
        return cls(
            reg_fee=config.get('reg_fee', 0.02),
            exchange_fee=config.get('exchange_fee', 0.01),
            contract_fee=config.get('contract_fee', 0.50),
        )


def _validate_order(order: OrderSpec) -> None:
    if order.side not in _SIDES:
        raise OrderValidationError(f"side must be 'call' or 'put', got {order.side!r}")
    if order.order_side not in _ORDER_SIDES:
        raise OrderValidationError(f"order_side must be 'buy' or 'sell', got {order.order_side!r}")
    if order.order_type not in _ORDER_TYPES:
        raise OrderValidationError(f"order_type must be 'limit' or 'market', got {order.order_type!r}")


def effective_price(quote: OptionQuote, order: OrderSpec) -> float:
    """Per-share price the order is estimated to fill at.

    Market orders take the touch (ask to buy, bid to sell). Limit orders use
    the entered limit, or the touch when the limit was left blank.
    """
    touch = quote.ask if order.order_side == "buy" else quote.bid
    if order.order_type == "market" or order.limit_price is None:
        return touch
    return order.limit_price


def estimate_cost(price: float, quantity: float, fees: FeeSchedule | None = None) -> Dict[str, float]:
    """Premium plus per-contract fees for ``quantity`` contracts at ``price``.

    Returns:
        Dict with premium, reg_fee, exchange_fee, contract_fee and total
    """
    fees = fees or FeeSchedule()
    premium = price * quantity * CONTRACT_MULTIPLIER
    reg_fee = fees.reg_fee * quantity
    exchange_fee = fees.exchange_fee * quantity
    contract_fee = fees.contract_fee * quantity
    return {
        "premium": round_price(premium),
        "reg_fee": round_price(reg_fee),
        "exchange_fee": round_price(exchange_fee),
        "contract_fee": round_price(contract_fee),
        "total": round_price(premium + reg_fee + exchange_fee + contract_fee),
    }


def calculate_order_risk(
    quote: OptionQuote | None,
    order: OrderSpec,
    fees: FeeSchedule | None = None,
) -> RiskProfile | None:
    """Cost breakdown and payoff bounds for an order on the selected contract.

    Args:
        quote: Quote of the selected contract, or None when nothing is selected
        order: Order ticket parameters
        fees: Fee schedule (defaults used when None)

    Returns:
        RiskProfile, or None when no contract is selected or quantity is
        missing, NaN, infinite or <= 0

    Raises:
        OrderValidationError: side, order_side or order_type is not recognised

    Example:
        >>> order = OrderSpec(strike=1.20, side="call", order_side="buy",
        ...                   order_type="limit", quantity=1, limit_price=0.05)
        >>> risk = calculate_order_risk(quote, order)
        >>> risk.breakeven, risk.max_loss, risk.max_profit_unbounded
        (1.25, 5.0, True)
    """
    quantity = order.quantity
    if quote is None or quantity is None or not (quantity > 0 and math.isfinite(quantity)):
        return None

    _validate_order(order)

    price = effective_price(quote, order)
    cost = estimate_cost(price, order.quantity, fees)
    premium = price * order.quantity * CONTRACT_MULTIPLIER

    # Value of the put if the underlying goes to zero
    put_floor = order.strike * CONTRACT_MULTIPLIER * order.quantity - premium

    breakeven = order.strike + price if order.is_call else order.strike - price

    if order.is_long:
        max_profit = None if order.is_call else round_price(put_floor)
        max_loss = round_price(premium)
    else:
        max_profit = round_price(premium)
        max_loss = None if order.is_call else round_price(put_floor)

    logger.debug(
        "%s %s %s x%s @ %.4f: premium=%.2f breakeven=%.4f",
        order.order_side, order.side, order.strike, order.quantity, price, premium, breakeven
    )

    return RiskProfile(
        effective_price=price,
        premium=cost["premium"],
        reg_fee=cost["reg_fee"],
        exchange_fee=cost["exchange_fee"],
        contract_fee=cost["contract_fee"],
        total=cost["total"],
        max_profit=max_profit,
        max_profit_unbounded=max_profit is None,
        breakeven=round_half_up(breakeven, max(STRIKE_DECIMALS, decimal_places(order.strike))),
        max_loss=max_loss,
        max_loss_unbounded=max_loss is None,
    )
