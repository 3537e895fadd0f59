"""Order cost, payoff bounds and contract unit encoding."""

from .contract_units import encode_contract_order
from .order_risk import FeeSchedule, calculate_order_risk, effective_price, estimate_cost

__all__ = [
    "FeeSchedule",
    "calculate_order_risk",
    "effective_price",
    "encode_contract_order",
    "estimate_cost",
]
