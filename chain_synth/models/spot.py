"""Spot price model returned by the price feed."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SpotQuote:
    """Latest underlying price and 24h market data.

    ``fallback`` is True when the provider could not be reached and the
    values are the built-in defaults.
    """

    symbol: str
    price: float
    change_24h: float | None = None
    volume_24h: float | None = None
    high_24h: float | None = None
    low_24h: float | None = None
    fallback: bool = False
