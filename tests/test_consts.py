#!/usr/bin/env python3
"""
Unit tests for the constant catalog.
"""

import math
import sys

import mpmath
import pytest
sys.path.append('..')

from ddfloat import DoubleDouble, consts


def reference_values():
    pi = mpmath.pi
    return {
        "E": mpmath.e,
        "FRAC_1_PI": 1 / pi,
        "FRAC_2_PI": 2 / pi,
        "FRAC_2_SQRT_PI": 2 / mpmath.sqrt(pi),
        "FRAC_1_SQRT_2": 1 / mpmath.sqrt(2),
        "FRAC_PI_2": pi / 2,
        "FRAC_PI_3": pi / 3,
        "FRAC_PI_4": pi / 4,
        "FRAC_PI_6": pi / 6,
        "FRAC_PI_8": pi / 8,
        "LN_2": mpmath.log(2),
        "LN_10": mpmath.log(10),
        "LOG2_E": 1 / mpmath.log(2),
        "LOG10_E": 1 / mpmath.log(10),
        "LOG10_2": mpmath.log10(2),
        "LOG2_10": mpmath.log(10, 2),
        "PI": pi,
        "SQRT_2": mpmath.sqrt(2),
        "TAU": 2 * pi,
    }


DERIVED = {
    "FRAC_PI_16": 16,
    "FRAC_3_PI_2": mpmath.mpf(2) / 3,
    "FRAC_3_PI_4": mpmath.mpf(4) / 3,
    "FRAC_5_PI_4": mpmath.mpf(4) / 5,
    "FRAC_7_PI_4": mpmath.mpf(4) / 7,
}


class TestCatalog:
    """Test cases for the mathematical constants."""

    @pytest.mark.parametrize("name,expected", sorted(reference_values().items()))
    def test_against_mpmath(self, name, expected, accuracy_checker):
        """Test that each constant is within 2^-104 of its true value."""
        value = getattr(consts, name)
        assert value.is_valid()
        accuracy_checker.assert_relative(value, expected, 2.0 ** -104)

    @pytest.mark.parametrize("name,divisor", sorted(DERIVED.items()))
    def test_pi_multiples(self, name, divisor, accuracy_checker):
        """Test the multiples of pi used by argument reduction."""
        value = getattr(consts, name)
        assert value.is_valid()
        accuracy_checker.assert_relative(value, mpmath.pi / divisor, 1e-30)

    def test_hi_is_float_constant(self):
        """Test that the high words agree with the math module."""
        assert consts.PI.hi == math.pi
        assert consts.E.hi == math.e
        assert consts.TAU.hi == math.tau
        assert consts.LN_2.hi == math.log(2.0)
        assert consts.SQRT_2.hi == math.sqrt(2.0)


class TestLimits:
    """Test cases for limits and special values."""

    def test_epsilon(self):
        """Test that EPSILON is 2^-104."""
        assert consts.EPSILON == DoubleDouble(2.0 ** -104)
        assert consts.ONE + consts.EPSILON > consts.ONE

    def test_max_and_min(self):
        """Test the largest finite values."""
        assert consts.MAX.is_valid()
        assert consts.MAX.is_finite()
        assert float(consts.MAX) == sys.float_info.max
        assert consts.MIN == -consts.MAX
        assert consts.MIN < consts.ZERO < consts.MAX

    def test_min_positive(self):
        """Test the smallest normal value."""
        assert consts.MIN_POSITIVE.hi == sys.float_info.min
        assert consts.MIN_POSITIVE.is_normal()

    def test_special_values(self):
        """Test the special value constants."""
        assert consts.NAN.is_nan()
        assert consts.INFINITY.is_infinite() and consts.INFINITY.is_sign_positive()
        assert consts.NEG_INFINITY.is_infinite() and consts.NEG_INFINITY.is_sign_negative()
        assert consts.ZERO.is_zero() and consts.ZERO.is_sign_positive()
        assert consts.NEG_ZERO.is_zero() and consts.NEG_ZERO.is_sign_negative()
        assert consts.ONE.as_tuple() == (1.0, 0.0)
        assert consts.NEG_ONE.as_tuple() == (-1.0, 0.0)

    def test_integer_limits(self):
        """Test the numeric description of the format."""
        assert consts.RADIX == 2
        assert consts.MANTISSA_DIGITS == 106
        assert consts.DIGITS == 31
        assert (consts.MIN_EXP, consts.MAX_EXP) == (-1021, 1024)
        assert (consts.MIN_10_EXP, consts.MAX_10_EXP) == (-307, 308)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
