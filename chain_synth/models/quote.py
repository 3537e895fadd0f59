"""Synthetic quote and chain snapshot models."""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Tuple

OptionSide = Literal["call", "put"]
ChainView = Literal["all", "calls", "puts"]

OPTION_SIDES: Tuple[str, ...] = ("call", "put")


@dataclass(frozen=True)
class OptionQuote:
    """One contract's synthetic market quote.

    Prices in quote currency (2 decimals), IV in percent (52.0 = 52%),
    Greeks in per-contract model units. Regenerated on every chain build.
    """

    bid: float
    ask: float
    last: float
    change: float
    volume: int
    open_interest: int
    bid_size: int
    ask_size: int
    iv: float
    delta: float
    gamma: float
    theta: float
    vega: float

    @property
    def mid(self) -> float:
        """Mid price between bid and ask."""
        return (self.bid + self.ask) / 2.0

    @property
    def spread(self) -> float:
        return self.ask - self.bid

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape used by the dashboard (camelCase keys)."""
        return {
            "bid": self.bid,
            "ask": self.ask,
            "last": self.last,
            "change": self.change,
            "volume": self.volume,
            "openInterest": self.open_interest,
            "bidSize": self.bid_size,
            "askSize": self.ask_size,
            "iv": self.iv,
            "delta": self.delta,
            "gamma": self.gamma,
            "theta": self.theta,
            "vega": self.vega,
        }

    def __repr__(self) -> str:
        return (f"OptionQuote({self.bid:.2f}/{self.ask:.2f} "
                f"IV={self.iv:.1f} Δ={self.delta:.2f} vol={self.volume})")


@dataclass(frozen=True)
class StrikeRow:
    """Call and put quotes for one strike of one expiration."""

    strike: float
    call: OptionQuote
    put: OptionQuote

    def quote(self, side: str) -> OptionQuote:
        """Return the quote for ``side`` ('call' or 'put')."""
        if side == "call":
            return self.call
        if side == "put":
            return self.put
        raise ValueError(f"side must be 'call' or 'put', got {side!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "strike": self.strike,
            "call": self.call.to_dict(),
            "put": self.put.to_dict(),
        }


@dataclass(frozen=True)
class OptionsChainSnapshot:
    """Complete result of one chain synthesis call.

    Treated as immutable by every consumer: a new spot or 24h change
    produces a new snapshot rather than an update to this one.
    """

    symbol: str
    spot: float
    expirations: Tuple[str, ...]
    chains_by_expiry: Dict[str, Tuple[StrikeRow, ...]]
    base_ivs: Dict[str, float] = field(default_factory=dict)

    @property
    def strikes(self) -> Tuple[float, ...]:
        """Strike ladder shared by every expiration."""
        if not self.expirations:
            return ()
        return tuple(row.strike for row in self.chains_by_expiry[self.expirations[0]])

    @property
    def default_expiry(self) -> str | None:
        """Nearest expiration, the one selected when the chain first loads."""
        return self.expirations[0] if self.expirations else None

    def rows(self, expiry: str) -> Tuple[StrikeRow, ...]:
        """Strike rows for ``expiry``; empty when the expiry is not listed."""
        return self.chains_by_expiry.get(expiry, ())

    def atm_strike(self, expiry: str | None = None) -> float | None:
        """Strike closest to spot (lower strike wins ties)."""
        rows = self.rows(expiry or self.default_expiry or "")
        if not rows:
            return None
        return min(rows, key=lambda row: (abs(row.strike - self.spot), row.strike)).strike

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape used by the dashboard (camelCase keys)."""
        return {
            "symbol": self.symbol,
            "spot": self.spot,
            "expirations": list(self.expirations),
            "chainsByExpiry": {
                expiry: [row.to_dict() for row in rows]
                for expiry, rows in self.chains_by_expiry.items()
            },
            "baseIvs": dict(self.base_ivs),
        }
