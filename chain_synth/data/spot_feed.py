"""Spot price feed from CoinGecko.

Setup:
    Optional: set COINGECKO_API_KEY (Demo API key) for higher rate limits.

The chain must stay renderable when the provider is down, so every failure
ends in the built-in fallback quote rather than an exception.
"""

import logging
import os
from typing import Any, Dict, Optional

import requests

from ..models.spot import SpotQuote
from ..utils.error_handling import SpotFeedError, retry_with_backoff

logger = logging.getLogger("chain_synth.spot_feed")

MARKETS_URL = "https://api.coingecko.com/api/v3/coins/markets"
DEFAULT_COIN_ID = "monad"
DEFAULT_SYMBOL = "MON-USD"
DEFAULT_TIMEOUT = 8.0

FALLBACK_PRICE = 0.02162
FALLBACK_CHANGE_24H = 7.9


class RetryableFeedError(SpotFeedError):
    """Rate limit or server error; worth one more attempt."""
    pass


def fallback_quote(symbol: str = DEFAULT_SYMBOL) -> SpotQuote:
    return SpotQuote(
        symbol=symbol,
        price=FALLBACK_PRICE,
        change_24h=FALLBACK_CHANGE_24H,
        fallback=True,
    )


def parse_markets_payload(data: Any, symbol: str = DEFAULT_SYMBOL) -> SpotQuote:
    """Turn a /coins/markets response body into a SpotQuote.

    Args:
        data: Decoded JSON (a list with one coin object)
        symbol: Symbol to stamp on the quote

    Returns:
        SpotQuote with price and 24h fields

    Raises:
        SpotFeedError: payload has no numeric current_price
    """
    coin = data[0] if isinstance(data, list) and data else None
    if not isinstance(coin, dict):
        raise SpotFeedError(f"Unexpected markets payload: {data!r:.200}")

    price = coin.get('current_price')
    if not isinstance(price, (int, float)) or isinstance(price, bool):
        raise SpotFeedError(f"Missing current_price in markets payload for {coin.get('id')}")

    return SpotQuote(
        symbol=symbol,
        price=float(price),
        change_24h=coin.get('price_change_percentage_24h'),
        volume_24h=coin.get('total_volume'),
        high_24h=coin.get('high_24h'),
        low_24h=coin.get('low_24h'),
    )


@retry_with_backoff(max_retries=2, backoff_factor=0.8, exceptions=(RetryableFeedError,))
def _get_markets(coin_id: str, api_key: Optional[str], timeout: float) -> Any:
    params = {
        'vs_currency': 'usd',
        'ids': coin_id,
        'order': 'market_cap_desc',
        'per_page': 1,
        'page': 1,
    }
    headers: Dict[str, str] = {}
    if api_key:
        headers['x-cg-demo-api-key'] = api_key

    response = requests.get(MARKETS_URL, params=params, headers=headers, timeout=timeout)

    if response.status_code == 429 or response.status_code >= 500:
        raise RetryableFeedError(f"CoinGecko {response.status_code}")
    if response.status_code != 200:
        raise SpotFeedError(f"CoinGecko {response.status_code}: {response.text[:200]}")

    return response.json()


def fetch_spot_quote(
    coin_id: str = DEFAULT_COIN_ID,
    api_key: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    symbol: str = DEFAULT_SYMBOL,
) -> SpotQuote:
    """Fetch the latest price and 24h data for ``coin_id``.

    Args:
        coin_id: CoinGecko coin id
        api_key: Demo API key (defaults to the COINGECKO_API_KEY env var)
        timeout: Request timeout in seconds
        symbol: Symbol to stamp on the quote

    Returns:
        Live SpotQuote, or the fallback quote (fallback=True) on any failure
    """
    api_key = api_key or os.getenv('COINGECKO_API_KEY', '').strip() or None

    try:
        data = _get_markets(coin_id, api_key, timeout)
        return parse_markets_payload(data, symbol=symbol)
    except (requests.RequestException, ValueError, SpotFeedError) as e:
        logger.warning("Spot price fetch for %s failed (%s), using fallback %.5f",
                       coin_id, e, FALLBACK_PRICE)
        return fallback_quote(symbol)
