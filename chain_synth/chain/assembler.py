"""Options chain assembly from a live spot price.

Strikes are generated once around spot and shared by every expiration.
Each expiration gets its own base IV (a rising term structure, nudged up by
the underlying's recent 24h move) and its own seed, then one call and one
put quote per strike.
"""

import logging
import math
from datetime import date
from typing import Any, Dict, List, Sequence, Tuple

from ..models.quote import OptionQuote, OptionsChainSnapshot, StrikeRow
from ..utils.error_handling import ConfigurationError
from .expirations import DEFAULT_EXPIRATION_COUNT, get_next_expirations
from .noise import contract_seed, expiry_seed
from .quotes import model_quote
from .strikes import strikes_for_spot

logger = logging.getLogger("chain_synth.assembler")

DEFAULT_SYMBOL = "MON-USD"
DEFAULT_SPOT_FALLBACK = 1.15

BASE_IV = 52.0
IV_TERM_STEP = 3.0
VOL_NUDGE_PER_PCT = 0.5
MAX_VOL_NUDGE = 15.0

CHAIN_VIEWS = ("all", "calls", "puts")


class ChainConfig:
    """Configuration for chain synthesis."""

    def __init__(
        self,
        symbol: str = DEFAULT_SYMBOL,
        expiration_count: int = DEFAULT_EXPIRATION_COUNT,
        fallback_spot: float = DEFAULT_SPOT_FALLBACK,
    ):
        """Initialize chain configuration.

        Args:
            symbol: Display symbol of the underlying
            expiration_count: Number of monthly expirations to list
            fallback_spot: Spot used when the live price is missing or <= 0
        """
        if expiration_count < 1:
            raise ConfigurationError(f"expiration_count must be >= 1, got {expiration_count}")
        if fallback_spot <= 0:
            raise ConfigurationError(f"fallback_spot must be > 0, got {fallback_spot}")

        self.symbol = symbol
        self.expiration_count = expiration_count
        self.fallback_spot = fallback_spot

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "ChainConfig":
        """Create ChainConfig from dictionary (e.g., from YAML).

        Args:
            config: Dictionary with chain parameters

        Returns:
            ChainConfig instance
        """
        return cls(
            symbol=config.get('symbol', DEFAULT_SYMBOL),
            expiration_count=config.get('expiration_count', DEFAULT_EXPIRATION_COUNT),
            fallback_spot=config.get('fallback_spot', DEFAULT_SPOT_FALLBACK),
        )


def vol_nudge(change_24h: float | None) -> float:
    """IV points added across the term structure for a 24h move (in %)."""
    if change_24h is None:
        return 0.0
    return min(MAX_VOL_NUDGE, abs(change_24h) * VOL_NUDGE_PER_PCT)


def base_iv_for_expiry(expiry_index: int, change_24h: float | None = None) -> float:
    """At-the-money IV for the expiry at ``expiry_index`` (0 = nearest)."""
    return BASE_IV + expiry_index * IV_TERM_STEP + vol_nudge(change_24h)


def build_chain_for_expiry(
    expiry: str,
    spot: float,
    base_iv: float,
    strikes: Sequence[float],
    expiry_index: int,
) -> Tuple[StrikeRow, ...]:
    """Quote every strike of one expiration."""
    seed = expiry_seed(expiry, expiry_index)
    return tuple(
        StrikeRow(
            strike=strike,
            call=model_quote(strike, "call", spot, base_iv, contract_seed(seed, strike, "call")),
            put=model_quote(strike, "put", spot, base_iv, contract_seed(seed, strike, "put")),
        )
        for strike in strikes
    )


def get_options_chain_with_spot(
    spot: float | None,
    change_24h: float | None = None,
    config: ChainConfig | None = None,
    today: date | None = None,
) -> OptionsChainSnapshot:
    """Build a full options chain around a live spot price.

    Args:
        spot: Underlying price; None, NaN, infinite or <= 0 falls back to
            config.fallback_spot
        change_24h: Underlying's 24h % change; nudges every expiration's IV up
        config: ChainConfig (defaults used when None)
        today: Reference date for the expiration schedule

    Returns:
        OptionsChainSnapshot with one StrikeRow per strike per expiration

    Example:
        >>> snapshot = get_options_chain_with_spot(1.15, change_24h=-4.2)
        >>> row = snapshot.rows(snapshot.default_expiry)[0]
        >>> row.call.bid <= row.call.ask
        True
    """
    config = config or ChainConfig()

    if spot is None or not math.isfinite(spot) or spot <= 0:
        logger.debug("Spot %s unusable, falling back to %s", spot, config.fallback_spot)
        spot = config.fallback_spot

    strikes = strikes_for_spot(spot)
    expirations = get_next_expirations(config.expiration_count, today=today)

    chains_by_expiry: Dict[str, Tuple[StrikeRow, ...]] = {}
    base_ivs: Dict[str, float] = {}
    for i, expiry in enumerate(expirations):
        base_iv = base_iv_for_expiry(i, change_24h)
        base_ivs[expiry] = base_iv
        chains_by_expiry[expiry] = build_chain_for_expiry(expiry, spot, base_iv, strikes, i)

    logger.debug(
        "Built %s chain: spot=%s, %d strikes x %d expirations",
        config.symbol, spot, len(strikes), len(expirations)
    )

    return OptionsChainSnapshot(
        symbol=config.symbol,
        spot=spot,
        expirations=tuple(expirations),
        chains_by_expiry=chains_by_expiry,
        base_ivs=base_ivs,
    )


def get_mock_options_chain(today: date | None = None) -> OptionsChainSnapshot:
    """Chain at the fallback spot, for use before a live price arrives."""
    return get_options_chain_with_spot(DEFAULT_SPOT_FALLBACK, today=today)


def filter_chain_view(rows: Sequence[StrikeRow], view: str = "all") -> List[Dict[str, Any]]:
    """Flatten rows for a chain table showing all, calls only, or puts only.

    Returns:
        One dict per row with 'strike' plus 'call' and/or 'put' OptionQuote
    """
    if view not in CHAIN_VIEWS:
        raise ValueError(f"view must be one of {CHAIN_VIEWS}, got {view!r}")

    table = []
    for row in rows:
        entry: Dict[str, Any] = {"strike": row.strike}
        if view in ("all", "calls"):
            entry["call"] = row.call
        if view in ("all", "puts"):
            entry["put"] = row.put
        table.append(entry)
    return table


def select_contract(
    snapshot: OptionsChainSnapshot,
    expiry: str,
    strike: float,
    side: str,
) -> OptionQuote | None:
    """Look up one contract's quote; None when expiry or strike is not listed."""
    for row in snapshot.rows(expiry):
        if abs(row.strike - strike) < 1e-9:
            return row.quote(side)
    return None
