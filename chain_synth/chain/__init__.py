"""Options chain synthesis: strikes, expirations, quotes and assembly."""

from .assembler import (
    ChainConfig,
    DEFAULT_SPOT_FALLBACK,
    base_iv_for_expiry,
    filter_chain_view,
    get_mock_options_chain,
    get_options_chain_with_spot,
    select_contract,
)
from .expirations import format_expiry_label, format_expiry_short, get_next_expirations
from .noise import expiry_seed, hash_noise
from .quotes import model_quote
from .strikes import MIN_STRIKE_ROWS, strikes_for_spot

__all__ = [
    "ChainConfig",
    "DEFAULT_SPOT_FALLBACK",
    "MIN_STRIKE_ROWS",
    "base_iv_for_expiry",
    "expiry_seed",
    "filter_chain_view",
    "format_expiry_label",
    "format_expiry_short",
    "get_mock_options_chain",
    "get_next_expirations",
    "get_options_chain_with_spot",
    "hash_noise",
    "model_quote",
    "select_contract",
    "strikes_for_spot",
]
