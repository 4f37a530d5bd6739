#!/usr/bin/env python3
"""
Unit tests for the error-free transformations.

Exactness is checked with fractions.Fraction, which represents every double
and every sum or product of doubles without rounding.
"""

import math
from fractions import Fraction

import numpy as np
import pytest
import sys
sys.path.append('..')

from ddfloat import eft
from ddfloat.eft import (
    quick_two_diff,
    quick_two_sum,
    renormalize,
    split,
    two_diff,
    two_prod,
    two_prod_dekker,
    two_sum,
)


def random_pairs(n=200, scale=1e3, seed=7):
    rng = np.random.default_rng(seed)
    a = rng.uniform(-scale, scale, n) * 10.0 ** rng.integers(-8, 8, n)
    b = rng.uniform(-scale, scale, n) * 10.0 ** rng.integers(-8, 8, n)
    return list(zip(a.tolist(), b.tolist()))


class TestTwoSum:
    """Test cases for two_sum and its variants."""

    def test_exact_for_random_pairs(self):
        """Test that s + e equals a + b exactly."""
        for a, b in random_pairs():
            s, e = two_sum(a, b)
            assert s == a + b
            assert Fraction(s) + Fraction(e) == Fraction(a) + Fraction(b)

    def test_catastrophic_case(self):
        """Test a sum whose low part vanishes in plain float addition."""
        s, e = two_sum(1e16, 1.0)
        assert s == 1e16
        assert e == 1.0

    def test_quick_two_sum_ordered(self):
        """Test quick_two_sum when |a| >= |b|."""
        for a, b in random_pairs(seed=11):
            if abs(a) < abs(b):
                a, b = b, a
            s, e = quick_two_sum(a, b)
            assert Fraction(s) + Fraction(e) == Fraction(a) + Fraction(b)

    def test_two_diff_exact(self):
        """Test that s + e equals a - b exactly."""
        for a, b in random_pairs(seed=3):
            s, e = two_diff(a, b)
            assert s == a - b
            assert Fraction(s) + Fraction(e) == Fraction(a) - Fraction(b)

    def test_quick_two_diff_ordered(self):
        """Test quick_two_diff when |a| >= |b|."""
        for a, b in random_pairs(seed=5):
            if abs(a) < abs(b):
                a, b = b, a
            s, e = quick_two_diff(a, b)
            assert Fraction(s) + Fraction(e) == Fraction(a) - Fraction(b)

    def test_error_term_is_small(self):
        """Test that the error is bounded by half an ulp of the sum."""
        for a, b in random_pairs(seed=13):
            s, e = two_sum(a, b)
            if s != 0.0:
                assert abs(e) <= 0.5 * math.ulp(s)


class TestSplit:
    """Test cases for the Dekker split."""

    @pytest.mark.parametrize("value", [1.0, math.pi, -123456.789, 1e-200, 3.5e250])
    def test_halves_sum_to_value(self, value):
        """Test that both halves add up to the input."""
        hi, lo = split(value)
        assert hi + lo == value
        assert Fraction(hi) + Fraction(lo) == Fraction(value)

    def test_large_values_do_not_overflow(self):
        """Test the scaled path above 2^996."""
        for value in (1e300, -1.7e308, 2.0 ** 1000 * 1.5):
            hi, lo = split(value)
            assert math.isfinite(hi)
            assert math.isfinite(lo)
            assert Fraction(hi) + Fraction(lo) == Fraction(value)

    def test_halves_have_short_mantissas(self):
        """Test that each half fits in 27 significant bits."""
        for value in (math.pi, 1.0 / 3.0, -2.0 ** 0.5 * 1e10):
            for half in split(value):
                mantissa, _ = math.frexp(half)
                assert (mantissa * 2.0 ** 27).is_integer()


class TestTwoProd:
    """Test cases for exact multiplication."""

    def test_exact_for_random_pairs(self):
        """Test that p + e equals a * b exactly."""
        for a, b in random_pairs(seed=17):
            p, e = two_prod(a, b)
            assert p == a * b
            assert Fraction(p) + Fraction(e) == Fraction(a) * Fraction(b)

    def test_dekker_exact_for_random_pairs(self):
        """Test the split-based product on its own."""
        for a, b in random_pairs(seed=19):
            p, e = two_prod_dekker(a, b)
            assert p == a * b
            assert Fraction(p) + Fraction(e) == Fraction(a) * Fraction(b)

    def test_dekker_large_operands(self):
        """Test the split-based product with an operand above 2^996."""
        a = 2.0 ** 1000 * 1.25
        b = 1.0 / 3.0
        p, e = two_prod_dekker(a, b)
        assert Fraction(p) + Fraction(e) == Fraction(a) * Fraction(b)

    @pytest.mark.parametrize("product", [two_prod, two_prod_dekker])
    def test_overflow(self, product):
        """Test that an overflowing product reports a zero error."""
        assert product(1e200, 1e200) == (math.inf, 0.0)
        assert product(-1e200, 1e200) == (-math.inf, 0.0)

    def test_backend_switch(self, monkeypatch):
        """Test that disabling FMA routes two_prod through Dekker splitting."""
        monkeypatch.setattr(eft, "USE_FMA", False)
        a, b = 1.0 / 3.0, 2.0 / 7.0
        assert two_prod(a, b) == two_prod_dekker(a, b)

    @pytest.mark.parametrize("setting,expected", [
        ("1", True),
        ("true", True),
        ("YES", True),
        ("0", False),
        ("", False),
    ])
    def test_fma_environment_switch(self, monkeypatch, setting, expected):
        """Test parsing of the DDFLOAT_NO_FMA environment variable."""
        monkeypatch.setenv("DDFLOAT_NO_FMA", setting)
        assert eft._fma_disabled() is expected


class TestRenormalize:
    """Test cases for renormalization."""

    def test_restores_half_ulp_bound(self):
        """Test that renormalized pairs satisfy the half-ulp invariant."""
        for a, b in random_pairs(seed=23):
            hi, lo = renormalize(a, b)
            assert hi + lo == hi
            if hi != 0.0:
                assert abs(lo) <= 0.5 * math.ulp(hi)
            assert Fraction(hi) + Fraction(lo) == Fraction(a) + Fraction(b)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
