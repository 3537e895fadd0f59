"""Strike ladder generation around a spot price."""

import logging
import math
from typing import List

from ..utils.rounding import round_half_up, round_price, round_strike, truncate, STRIKE_DECIMALS

logger = logging.getLogger("chain_synth.strikes")

MIN_STRIKE_ROWS = 9
MAX_STRIKE_STEPS = 26
LOW_BAND = 0.8
HIGH_BAND = 1.25
MIN_RANGE_PCT = 0.08
NATURAL_STEP_PCT = 0.05
MIN_STEP = 0.001

DEFAULT_LADDER = [1.0, 1.05, 1.1, 1.15, 1.2, 1.25, 1.3]

# Below this the fine ladder's decimal scaling leaves float range
_MIN_FINE_SPOT = 1e-12


def strikes_for_spot(spot: float) -> List[float]:
    """Generate strikes covering roughly 80%-125% of spot.

    The step is the smaller of 5% of spot (in cents, at least one cent) and
    whatever spacing still fits MIN_STRIKE_ROWS strikes into the band, so
    low-priced underlyings get thousandth-spaced strikes.

    Args:
        spot: Current underlying price

    Returns:
        Strictly increasing list of strikes. At least MIN_STRIKE_ROWS long
        for any finite spot > 0 except float-degenerate values, where [spot]
        is returned. Non-finite or non-positive spots give DEFAULT_LADDER.

    Example:
        >>> strikes_for_spot(1.15)
        [0.92, 0.98, 1.04, 1.1, 1.16, 1.22, 1.28, 1.34, 1.4]
    """
    if not math.isfinite(spot) or spot <= 0:
        return list(DEFAULT_LADDER)

    low = round_price(spot * LOW_BAND)
    high = round_price(spot * HIGH_BAND)
    band = max(high - low, spot * MIN_RANGE_PCT)

    raw_step = max(0.01, round_price(spot * NATURAL_STEP_PCT))
    step = min(raw_step, band / (MIN_STRIKE_ROWS - 1))
    step = max(MIN_STEP, truncate(step, STRIKE_DECIMALS))

    strikes: List[float] = []
    for i in range(MAX_STRIKE_STEPS):
        strike = round_strike(low + i * step)
        if strike > high:
            break
        if strike <= 0:
            continue
        if not strikes or strike > strikes[-1]:
            strikes.append(strike)

    if len(strikes) < MIN_STRIKE_ROWS:
        logger.debug(
            "Cent-rounded band [%s, %s] too narrow for spot %s (%d strikes), using fine ladder",
            low, high, spot, len(strikes)
        )
        strikes = _fine_ladder(spot) or strikes

    if not strikes:
        logger.warning("No strikes generated for spot %s, using single-strike ladder", spot)
        return [spot]

    return strikes


def _fine_ladder(spot: float) -> List[float]:
    """MIN_STRIKE_ROWS evenly spaced strikes from 80% to 125% of spot.

    Precision grows with the spot's order of magnitude (three significant
    digits past the leading one), never below the regular strike precision.
    """
    if spot < _MIN_FINE_SPOT:
        return []

    places = max(STRIKE_DECIMALS, 4 - math.floor(math.log10(spot)))
    width = (HIGH_BAND - LOW_BAND) / (MIN_STRIKE_ROWS - 1)

    strikes: List[float] = []
    for i in range(MIN_STRIKE_ROWS):
        strike = round_half_up(spot * (LOW_BAND + i * width), places)
        if strike > 0 and (not strikes or strike > strikes[-1]):
            strikes.append(strike)

    return strikes
