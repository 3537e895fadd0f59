"""Deterministic noise and seed derivation.

The chain must look lively without using a random number generator: the
same spot and date always give the same quotes. Noise is therefore a hash
of the numbers that identify a contract.
"""

import math

_UINT32 = 0x100000000
_INT32_SIGN = 0x80000000
_NOISE_SCALE = float(_INT32_SIGN)


def to_int32(value: float) -> int:
    """Truncate toward zero and wrap into the signed 32-bit range.

    Non-finite values map to 0.
    """
    if not math.isfinite(value):
        return 0
    n = int(value) % _UINT32
    return n - _UINT32 if n >= _INT32_SIGN else n


def hash_noise(*values: float) -> float:
    """Mix ``values`` into a pseudo-random number in [0, 1).

    Each value is scaled by 1000 (so three decimals of a strike or seed
    still change the result) and folded in with ``h = int32(31*h + v)``.
    The output is ``|h| / 2**31``, with ``|h|`` capped at ``2**31 - 1``.

    Example:
        >>> hash_noise(1234.5, 1.15, 1) == hash_noise(1234.5, 1.15, 1)
        True
    """
    h = 0
    for value in values:
        h = to_int32(to_int32(31 * h) + value * 1000)
    return min(abs(h), _INT32_SIGN - 1) / _NOISE_SCALE


def expiry_seed(expiry: str, expiry_index: int) -> int:
    """Seed for one expiration's quotes.

    Character-code checksum of the ISO date plus ``expiry_index * 1000``.
    Checksums of ``YYYY-MM-DD`` strings differ by far less than 1000, so
    expirations at different positions in the schedule never share a seed.
    """
    return sum(ord(ch) for ch in expiry) + expiry_index * 1000


def contract_seed(base_seed: float, strike: float, side: str) -> float:
    """Seed for one contract: call ``base + strike*10``, put one above it."""
    seed = base_seed + strike * 10
    return seed if side == "call" else seed + 1
