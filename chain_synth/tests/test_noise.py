"""Tests for deterministic noise and seed derivation."""

import pytest

from chain_synth.chain.noise import contract_seed, expiry_seed, hash_noise, to_int32


class TestToInt32:
    """Test suite for 32-bit wrapping."""

    def test_small_values_unchanged(self):
        assert to_int32(0) == 0
        assert to_int32(12345) == 12345
        assert to_int32(-12345) == -12345

    def test_truncates_toward_zero(self):
        assert to_int32(1.9) == 1
        assert to_int32(-1.7) == -1

    def test_wraps_past_int32_max(self):
        assert to_int32(2 ** 31) == -(2 ** 31)
        assert to_int32(2 ** 32 + 5) == 5
        assert to_int32(-(2 ** 31) - 1) == 2 ** 31 - 1

    def test_non_finite_is_zero(self):
        assert to_int32(float('nan')) == 0
        assert to_int32(float('inf')) == 0


class TestHashNoise:
    """Test suite for the hash-based noise function."""

    def test_known_values(self):
        """Values are folded as h = int32(31*h + v*1000)."""
        assert hash_noise() == 0.0
        assert hash_noise(1) == 1000 / 2 ** 31
        assert hash_noise(1, 2) == 33000 / 2 ** 31

    def test_order_matters(self):
        assert hash_noise(2, 1) == 63000 / 2 ** 31
        assert hash_noise(1, 2) != hash_noise(2, 1)

    def test_deterministic(self):
        assert hash_noise(1488.5, 1.16, 7) == hash_noise(1488.5, 1.16, 7)

    @pytest.mark.parametrize("values", [
        (0.0,),
        (1234.5, 1.15, 1),
        (3e6,),
        (-987654.321, 42.0, 9),
        (2 ** 40, 2 ** 40, 2 ** 40),
        (4488.2, 0.021, 5),
    ])
    def test_range_is_unit_interval(self, values):
        noise = hash_noise(*values)
        assert 0.0 <= noise < 1.0

    def test_large_values_wrap(self):
        """3e9 wraps to -1294967296 in 32 bits."""
        assert hash_noise(3e6) == 1294967296 / 2 ** 31

    def test_strike_hundredths_change_the_result(self):
        assert hash_noise(500, 1.15, 5) != hash_noise(500, 1.16, 5)


class TestSeeds:
    """Test suite for expiry and contract seeds."""

    def test_expiry_seed_checksum(self):
        """Checksum of '2026-11-20' is 488."""
        assert expiry_seed('2026-11-20', 0) == 488
        assert expiry_seed('2026-11-20', 2) == 2488

    def test_expiry_seeds_distinct_across_schedule(self):
        expirations = ['2026-11-20', '2026-12-18', '2027-01-15', '2027-02-19', '2027-03-19']
        seeds = [expiry_seed(exp, i) for i, exp in enumerate(expirations)]
        assert len(set(seeds)) == len(seeds)
        assert seeds == sorted(seeds)

    def test_contract_seed_call_and_put(self):
        assert contract_seed(100, 1.15, 'call') == pytest.approx(111.5)
        assert contract_seed(100, 1.15, 'put') == pytest.approx(112.5)
