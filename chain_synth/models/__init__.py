"""Data models for chain synthesis and order risk."""

from .order import CONTRACT_MULTIPLIER, ContractOrderParams, OrderSpec, RiskProfile
from .quote import OptionQuote, OptionsChainSnapshot, StrikeRow
from .spot import SpotQuote

__all__ = [
    "CONTRACT_MULTIPLIER",
    "ContractOrderParams",
    "OptionQuote",
    "OptionsChainSnapshot",
    "OrderSpec",
    "RiskProfile",
    "SpotQuote",
    "StrikeRow",
]
