"""Model-derived option quotes.

There is no order book behind these numbers. A small parametric model gives
plausible, internally consistent quotes: IV and spreads widen away from the
money, in-the-money contracts carry intrinsic-like value, and everything
else (sizes, volume, open interest, Greeks) is drawn from hash_noise so the
same inputs always give the same quote.
"""

import math

from ..models.quote import OptionQuote
from ..utils.rounding import clamp, round_half_up, round_price
from .noise import hash_noise

IV_FLOOR = 35.0
IV_CAP = 95.0
IV_MONEYNESS_SLOPE = 15.0
IV_JITTER = 4.0

DELTA_FLOOR = 0.05
DELTA_CAP = 0.95

MIN_MID = 0.02
INTRINSIC_WEIGHT = 0.4
TIME_VALUE_WEIGHT = 0.15
BASE_SPREAD_PCT = 0.02
SPREAD_DISTANCE_PCT = 0.01

QUOTE_SIZES = (50, 100, 250)

# Second hash input per drawn field; keeps each field's noise independent
_IV_SALT = {"call": 1, "put": 0}
_SIZE_SALT = {"call": 2, "put": 3}
_CHANGE_SALT = 4
_VOLUME_SALT = 5
_OPEN_INTEREST_SALT = 6
_GAMMA_SALT = 7
_THETA_SALT = 8
_VEGA_SALT = 9


def model_quote(
    strike: float,
    side: str,
    spot: float,
    base_iv: float,
    seed: float,
) -> OptionQuote:
    """Synthesize one contract's quote.

    Args:
        strike: Contract strike
        side: 'call' or 'put'
        spot: Underlying price (must be > 0)
        base_iv: At-the-money IV for this expiration, in percent
        seed: Contract seed (see noise.contract_seed)

    Returns:
        OptionQuote with 0 < bid <= ask, iv in [35, 95], delta in [0.05, 0.95]
    """
    is_call = side == "call"
    signed_distance = (strike - spot) / spot
    moneyness = -signed_distance if is_call else signed_distance

    iv_jitter = (hash_noise(seed, strike, _IV_SALT[side]) - 0.5) * IV_JITTER
    iv = clamp(base_iv + moneyness * IV_MONEYNESS_SLOPE + iv_jitter, IV_FLOOR, IV_CAP)

    atm_distance = abs(strike - spot)
    intrinsic_like = (spot - strike) if is_call else (strike - spot)
    mid = max(MIN_MID, intrinsic_like * INTRINSIC_WEIGHT + atm_distance * TIME_VALUE_WEIGHT)

    spread = mid * (BASE_SPREAD_PCT + (atm_distance / spot) * SPREAD_DISTANCE_PCT)
    bid = round_price(mid - spread / 2)
    ask = round_price(mid + spread / 2)
    last = round_price((bid + ask) / 2)

    size_choice = math.floor(hash_noise(seed, strike, _SIZE_SALT[side]) * 3) % 3
    bid_size = QUOTE_SIZES[size_choice]
    ask_size = QUOTE_SIZES[(size_choice + 1) % 3]

    if is_call:
        delta = 0.5 + moneyness * 2 - signed_distance * 1.5
    else:
        delta = 0.5 - moneyness * 2 + signed_distance * 1.5
    delta = clamp(delta, DELTA_FLOOR, DELTA_CAP)

    change = (hash_noise(seed, strike, _CHANGE_SALT) - 0.5) * 4
    volume = math.floor(hash_noise(seed, strike, _VOLUME_SALT) * 800) + 50
    open_interest = math.floor(hash_noise(seed, strike, _OPEN_INTEREST_SALT) * 2000) + 100
    gamma = 0.001 + hash_noise(seed, strike, _GAMMA_SALT) * 0.002
    theta = -0.02 - hash_noise(seed, strike, _THETA_SALT) * 0.03
    vega = 0.08 + hash_noise(seed, strike, _VEGA_SALT) * 0.04

    return OptionQuote(
        bid=bid,
        ask=ask,
        last=last,
        change=round_price(change),
        volume=volume,
        open_interest=open_interest,
        bid_size=bid_size,
        ask_size=ask_size,
        iv=round_half_up(iv, 1),
        delta=round_price(delta),
        gamma=round_half_up(gamma, 3),
        theta=round_price(theta),
        vega=round_price(vega),
    )
