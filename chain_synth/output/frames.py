"""Tabular (pandas) view of a chain snapshot."""

from typing import List

import pandas as pd

from ..models.quote import OptionsChainSnapshot

CHAIN_COLUMNS = [
    'symbol', 'expiration', 'strike', 'option_type',
    'bid', 'ask', 'last', 'change', 'volume', 'open_interest',
    'bid_size', 'ask_size', 'iv', 'delta', 'gamma', 'theta', 'vega',
]


def chain_to_dataframe(snapshot: OptionsChainSnapshot, expiry: str | None = None) -> pd.DataFrame:
    """Long-format DataFrame with one row per contract.

    Args:
        snapshot: OptionsChainSnapshot to flatten
        expiry: Restrict to one expiration (all expirations when None)

    Returns:
        DataFrame with CHAIN_COLUMNS, ordered by expiration, strike, call before put
    """
    expirations = [expiry] if expiry else list(snapshot.expirations)

    records: List[dict] = []
    for exp in expirations:
        for row in snapshot.rows(exp):
            for option_type in ('call', 'put'):
                q = row.quote(option_type)
                records.append({
                    'symbol': snapshot.symbol,
                    'expiration': exp,
                    'strike': row.strike,
                    'option_type': option_type,
                    'bid': q.bid,
                    'ask': q.ask,
                    'last': q.last,
                    'change': q.change,
                    'volume': q.volume,
                    'open_interest': q.open_interest,
                    'bid_size': q.bid_size,
                    'ask_size': q.ask_size,
                    'iv': q.iv,
                    'delta': q.delta,
                    'gamma': q.gamma,
                    'theta': q.theta,
                    'vega': q.vega,
                })

    return pd.DataFrame(records, columns=CHAIN_COLUMNS)
