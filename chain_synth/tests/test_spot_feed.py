"""Tests for the CoinGecko spot feed (network calls are faked)."""

import pytest
import requests

from chain_synth.data import spot_feed
from chain_synth.data.spot_feed import (
    FALLBACK_CHANGE_24H,
    FALLBACK_PRICE,
    fetch_spot_quote,
    parse_markets_payload,
)
from chain_synth.utils import error_handling
from chain_synth.utils.error_handling import SpotFeedError


MARKETS_BODY = [{
    'id': 'monad',
    'symbol': 'mon',
    'current_price': 0.02471,
    'price_change_percentage_24h': -3.2,
    'total_volume': 18_500_000,
    'high_24h': 0.0261,
    'low_24h': 0.0240,
}]


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body
        self.text = str(body)

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


@pytest.fixture
def calls(monkeypatch):
    """Record of requests.get calls; responses are queued per test."""
    record = {'responses': [], 'requests': []}

    def fake_get(url, params=None, headers=None, timeout=None):
        record['requests'].append({'url': url, 'params': params, 'headers': headers, 'timeout': timeout})
        response = record['responses'].pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(spot_feed.requests, 'get', fake_get)
    monkeypatch.setattr(error_handling.time, 'sleep', lambda seconds: None)
    monkeypatch.delenv('COINGECKO_API_KEY', raising=False)
    return record


class TestParseMarketsPayload:
    """Test suite for payload parsing."""

    def test_full_payload(self):
        quote = parse_markets_payload(MARKETS_BODY)
        assert quote.symbol == 'MON-USD'
        assert quote.price == 0.02471
        assert quote.change_24h == -3.2
        assert quote.volume_24h == 18_500_000
        assert quote.high_24h == 0.0261
        assert quote.low_24h == 0.0240
        assert quote.fallback is False

    def test_missing_optional_fields(self):
        quote = parse_markets_payload([{'id': 'monad', 'current_price': 1}], symbol='X')
        assert quote.price == 1.0
        assert quote.change_24h is None

    @pytest.mark.parametrize("body", [
        [],
        {},
        None,
        [{'id': 'monad'}],
        [{'id': 'monad', 'current_price': None}],
        [{'id': 'monad', 'current_price': '0.02'}],
    ])
    def test_unusable_payload_raises(self, body):
        with pytest.raises(SpotFeedError):
            parse_markets_payload(body)


class TestFetchSpotQuote:
    """Test suite for fetch_spot_quote."""

    def test_success(self, calls):
        calls['responses'] = [FakeResponse(200, MARKETS_BODY)]
        quote = fetch_spot_quote()

        assert quote.price == 0.02471
        assert quote.fallback is False
        assert len(calls['requests']) == 1
        request = calls['requests'][0]
        assert request['url'] == spot_feed.MARKETS_URL
        assert request['params']['ids'] == 'monad'
        assert request['params']['vs_currency'] == 'usd'
        assert request['timeout'] == 8.0
        assert 'x-cg-demo-api-key' not in request['headers']

    def test_rate_limit_then_success(self, calls):
        calls['responses'] = [FakeResponse(429, 'slow down'), FakeResponse(200, MARKETS_BODY)]
        quote = fetch_spot_quote()
        assert quote.price == 0.02471
        assert len(calls['requests']) == 2

    def test_server_errors_exhaust_retries(self, calls):
        calls['responses'] = [FakeResponse(503, 'down'), FakeResponse(503, 'down')]
        quote = fetch_spot_quote()
        assert quote.fallback is True
        assert quote.price == FALLBACK_PRICE
        assert quote.change_24h == FALLBACK_CHANGE_24H
        assert len(calls['requests']) == 2

    def test_client_error_not_retried(self, calls):
        calls['responses'] = [FakeResponse(404, 'unknown coin')]
        quote = fetch_spot_quote(coin_id='nope')
        assert quote.fallback is True
        assert len(calls['requests']) == 1

    def test_connection_error_falls_back(self, calls):
        calls['responses'] = [requests.ConnectionError('no route to host')]
        assert fetch_spot_quote().fallback is True

    def test_bad_json_falls_back(self, calls):
        calls['responses'] = [FakeResponse(200, ValueError('Expecting value'))]
        assert fetch_spot_quote().fallback is True

    def test_fallback_keeps_symbol(self, calls):
        calls['responses'] = [FakeResponse(404, 'unknown coin')]
        assert fetch_spot_quote(symbol='ETH-USD').symbol == 'ETH-USD'

    def test_api_key_argument_sent_as_header(self, calls):
        calls['responses'] = [FakeResponse(200, MARKETS_BODY)]
        fetch_spot_quote(api_key='demo-key')
        assert calls['requests'][0]['headers'] == {'x-cg-demo-api-key': 'demo-key'}

    def test_api_key_from_environment(self, calls, monkeypatch):
        monkeypatch.setenv('COINGECKO_API_KEY', '  env-key  ')
        calls['responses'] = [FakeResponse(200, MARKETS_BODY)]
        fetch_spot_quote()
        assert calls['requests'][0]['headers'] == {'x-cg-demo-api-key': 'env-key'}
