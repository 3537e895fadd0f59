"""Tests for conversion to on-chain contract units."""

import pytest
from datetime import datetime, timezone

from chain_synth.models.order import OrderSpec, RiskProfile
from chain_synth.risk.contract_units import (
    encode_contract_order,
    expiry_to_timestamp,
    premium_to_units,
    strike_to_units,
    timestamp_to_expiry,
    units_to_premium,
    units_to_strike,
)
from chain_synth.utils.error_handling import OrderValidationError


@pytest.fixture
def risk():
    """RiskProfile for two 1.10 puts bought at 0.03."""
    return RiskProfile(
        effective_price=0.03, premium=6.00, reg_fee=0.04, exchange_fee=0.02,
        contract_fee=1.00, total=7.06, max_profit=214.00, max_profit_unbounded=False,
        breakeven=1.07, max_loss=6.00, max_loss_unbounded=False,
    )


class TestScaling:
    """Integer scaling of strikes and premiums."""

    @pytest.mark.parametrize("strike, units", [
        (1.15, 115_000_000),
        (0.021, 2_100_000),
        (3400.0, 340_000_000_000),
        (0.29, 29_000_000),
    ])
    def test_strike_units_exact(self, strike, units):
        assert strike_to_units(strike) == units

    @pytest.mark.parametrize("premium, units", [
        (5.53, 5_530_000),
        (0.29, 290_000),
        (214.0, 214_000_000),
    ])
    def test_premium_units_exact(self, premium, units):
        assert premium_to_units(premium) == units

    def test_inverse_conversions(self):
        assert units_to_strike(strike_to_units(1.16)) == pytest.approx(1.16)
        assert units_to_premium(premium_to_units(5.53)) == pytest.approx(5.53)


class TestExpiryTimestamp:
    """Expiration dates as unix seconds at 00:00 UTC."""

    def test_midnight_utc(self):
        expected = int(datetime(2026, 11, 20, tzinfo=timezone.utc).timestamp())
        assert expiry_to_timestamp('2026-11-20') == expected

    def test_timestamp_back_to_date(self):
        assert timestamp_to_expiry(expiry_to_timestamp('2027-03-19')) == '2027-03-19'


class TestEncodeContractOrder:
    """Full order encoding."""

    def test_put_order(self, risk):
        order = OrderSpec(strike=1.10, side='put', order_side='buy', order_type='limit', quantity=2)
        params = encode_contract_order(order, '2026-11-20', risk)

        assert params.option_type == 1
        assert params.strike_price == 110_000_000
        assert params.expiry_ts == expiry_to_timestamp('2026-11-20')
        assert params.premium == 6_000_000

    def test_call_code(self, risk):
        order = OrderSpec(strike=1.22, side='call', order_side='buy', order_type='market', quantity=1)
        assert encode_contract_order(order, '2026-11-20', risk).option_type == 0

    def test_invalid_side(self, risk):
        order = OrderSpec(strike=1.22, side='both', order_side='buy', order_type='market', quantity=1)
        with pytest.raises(OrderValidationError):
            encode_contract_order(order, '2026-11-20', risk)
