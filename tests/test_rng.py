"""Tests for the deterministic splitmix64 generator."""

import logging
import math

import pytest

from garden.exceptions import GardenError, InvalidRangeError
from garden.rng import UINT64_MASK, SeededRandom, derive_seed


class TestDeterminism:
    """Same seed, same sequence."""

    def test_known_sequence_for_seed_zero(self):
        """Seed 0 starts the canonical splitmix64 stream."""
        rng = SeededRandom(0)
        assert rng.next_uint64() == 0xE220A8397B1DCDAF
        assert rng.next_uint64() == 0x6E789E6AA1B965F4

    def test_independent_generators_agree(self):
        a = SeededRandom(12345)
        b = SeededRandom(12345)
        assert [a.next_uint64() for _ in range(1000)] == [b.next_uint64() for _ in range(1000)]

    def test_range_helpers_agree(self):
        a = SeededRandom(7)
        b = SeededRandom(7)
        for _ in range(200):
            assert a.next_double(-3.0, 9.5) == b.next_double(-3.0, 9.5)
            assert a.next_int(0, 99) == b.next_int(0, 99)

    def test_different_seeds_diverge(self):
        a = [SeededRandom(1).next_uint64() for _ in range(3)]
        b = [SeededRandom(2).next_uint64() for _ in range(3)]
        assert a != b

    def test_seed_is_reduced_to_64_bits(self):
        assert SeededRandom(-1).seed == UINT64_MASK
        assert SeededRandom(2**64 + 5).seed == 5

    def test_values_fit_in_64_bits(self, seeded_rng):
        for _ in range(1000):
            assert 0 <= seeded_rng.next_uint64() <= UINT64_MASK


class TestRanges:
    """Range helpers stay inside their closed ranges."""

    def test_next_double_within_range_for_many_pairs(self):
        """10,000 random (seed, range) pairs, a share of them degenerate."""
        meta = SeededRandom(2024)
        for i in range(10_000):
            lo = meta.next_double(-1000.0, 1000.0)
            hi = lo if i % 10 == 0 else lo + meta.next_double(0.0, 500.0)
            value = SeededRandom(meta.next_uint64()).next_double(lo, hi)
            assert lo <= value <= hi

    def test_degenerate_double_range_returns_bound(self, seeded_rng):
        assert seeded_rng.next_double(5.0, 5.0) == 5.0

    def test_next_int_within_range(self, seeded_rng):
        seen = set()
        for _ in range(2000):
            value = seeded_rng.next_int(5, 12)
            assert 5 <= value <= 12
            seen.add(value)
        assert seen == set(range(5, 13))

    def test_degenerate_int_range_returns_bound(self, seeded_rng):
        assert seeded_rng.next_int(3, 3) == 3

    def test_next_unit_in_unit_interval(self, seeded_rng):
        for _ in range(1000):
            assert 0.0 <= seeded_rng.next_unit() <= 1.0

    def test_next_angle_below_tau(self, seeded_rng):
        for _ in range(1000):
            assert 0.0 <= seeded_rng.next_angle() < math.tau

    def test_next_float_aliases_next_double(self):
        assert SeededRandom(9).next_float(0.0, 2.0) == SeededRandom(9).next_double(0.0, 2.0)


class TestInvalidRanges:
    """lo > hi is a programming error."""

    def test_strict_raises(self, seeded_rng):
        with pytest.raises(InvalidRangeError):
            seeded_rng.next_double(2.0, 1.0)
        with pytest.raises(InvalidRangeError):
            seeded_rng.next_int(10, 0)

    def test_strict_error_is_value_error_and_garden_error(self, seeded_rng):
        with pytest.raises(ValueError):
            seeded_rng.next_double(1.0, 0.0)
        with pytest.raises(GardenError):
            seeded_rng.next_double(1.0, 0.0)

    def test_lenient_clamps_to_lo_and_warns(self, caplog):
        rng = SeededRandom(1, strict=False)
        with caplog.at_level(logging.WARNING, logger="garden.rng"):
            assert rng.next_double(2.0, 1.0) == 2.0
            assert rng.next_int(10, 0) == 10
        assert "Clamping invalid range" in caplog.text


class TestDeriveSeed:
    def test_derived_seeds_follow_parent(self):
        assert derive_seed(SeededRandom(3)) == derive_seed(SeededRandom(3))

    def test_missing_parent_falls_back_to_clock(self):
        assert 0 <= derive_seed(None) <= UINT64_MASK
