"""Order ticket and risk profile models."""

from dataclasses import dataclass
from typing import Any, Dict, Literal

OrderSide = Literal["buy", "sell"]
OrderType = Literal["limit", "market"]

CONTRACT_MULTIPLIER = 100


@dataclass(frozen=True)
class OrderSpec:
    """Order parameters as entered on the order ticket.

    ``limit_price`` of None means the field was left blank; the calculator
    then uses the current ask (buy) or bid (sell).
    """

    strike: float
    side: Literal["call", "put"]
    order_side: OrderSide
    order_type: OrderType
    quantity: float
    limit_price: float | None = None

    @property
    def is_long(self) -> bool:
        return self.order_side == "buy"

    @property
    def is_call(self) -> bool:
        return self.side == "call"


@dataclass(frozen=True)
class RiskProfile:
    """Cost breakdown and payoff bounds for one order.

    All money values are for the whole order (price * quantity * 100).
    An unbounded side has its numeric field set to None and its flag set,
    so a renderer shows "Unlimited" instead of a number.
    """

    effective_price: float
    premium: float
    reg_fee: float
    exchange_fee: float
    contract_fee: float
    total: float
    max_profit: float | None
    max_profit_unbounded: bool
    breakeven: float
    max_loss: float | None
    max_loss_unbounded: bool

    @property
    def fees(self) -> float:
        """Sum of all per-contract fees."""
        return self.reg_fee + self.exchange_fee + self.contract_fee

    def to_dict(self) -> Dict[str, Any]:
        return {
            "effectivePrice": self.effective_price,
            "premium": self.premium,
            "regFee": self.reg_fee,
            "exchangeFee": self.exchange_fee,
            "contractFee": self.contract_fee,
            "total": self.total,
            "maxProfit": self.max_profit,
            "maxProfitUnbounded": self.max_profit_unbounded,
            "breakeven": self.breakeven,
            "maxLoss": self.max_loss,
            "maxLossUnbounded": self.max_loss_unbounded,
        }


@dataclass(frozen=True)
class ContractOrderParams:
    """Order fields in the integer units the options contract expects.

    option_type: 0 = call, 1 = put
    strike_price: strike * 10**8
    expiry_ts: unix seconds at 00:00 UTC of the expiration date
    premium: premium * 10**6
    """

    option_type: int
    strike_price: int
    expiry_ts: int
    premium: int
