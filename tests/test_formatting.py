#!/usr/bin/env python3
"""
Unit tests for decimal formatting.

Exact strings are only asserted where every digit is known; long expansions
are checked by prefix or by parsing them back.
"""

import pytest
import sys
sys.path.append('..')

from ddfloat import (
    DoubleDouble,
    E,
    INFINITY,
    LN_2,
    NAN,
    NEG_INFINITY,
    NEG_ZERO,
    PI,
    ZERO,
    extract_digits,
    format_dd,
    parse,
    to_string,
)


class TestExtractDigits:
    """Test cases for digit extraction."""

    def test_simple_value(self):
        assert extract_digits(1.5, 3) == ([1, 5, 0], 0)

    def test_exponent(self):
        digits, exp = extract_digits(DoubleDouble(0.025), 2)
        assert (digits, exp) == ([2, 5], -2)

    def test_rounding_carries_into_new_digit(self):
        """Test that rounding 9.99 to two digits yields 10."""
        assert extract_digits(9.99, 2) == ([1, 0], 1)

    def test_borrow_from_negative_low_word(self):
        """Test a value just below an integer, where lo is negative."""
        value = DoubleDouble(1.0, -2.0 ** -60)
        digits, exp = extract_digits(value)
        assert exp == -1
        assert digits[:18] == [9] * 18
        assert all(0 <= d <= 9 for d in digits)

    def test_thirty_one_digits_of_pi(self):
        digits, exp = extract_digits(PI)
        assert exp == 0
        assert len(digits) == 31
        assert "".join(map(str, digits[:29])) == "31415926535897932384626433832"

    @pytest.mark.parametrize("value", [ZERO, NAN, INFINITY])
    def test_rejects_non_finite_and_zero(self, value):
        with pytest.raises(ValueError):
            extract_digits(value)


class TestToString:
    """Test cases for str()."""

    @pytest.mark.parametrize("value,expected", [
        (1.5, "1.5"),
        (123456.0, "123456"),
        (0.25, "0.25"),
        (-2.5, "-2.5"),
        (1.0, "1"),
        (0.0, "0"),
    ])
    def test_exact_values(self, value, expected):
        assert str(DoubleDouble(value)) == expected
        assert to_string(value) == expected

    def test_special_values(self):
        assert str(NAN) == "nan"
        assert str(INFINITY) == "inf"
        assert str(NEG_INFINITY) == "-inf"
        assert str(NEG_ZERO) == "-0"

    def test_pi(self):
        assert str(PI).startswith("3.1415926535897932384626433832")

    def test_value_below_integer(self):
        text = str(DoubleDouble(1.0, -2.0 ** -60))
        assert text.startswith("0.999999999999999999132638")

    def test_scientific_for_large_exponents(self):
        text = str(DoubleDouble(1e100))
        assert text.startswith("1.0000000000000000159")
        assert text.endswith("e+100")

    def test_scientific_for_small_exponents(self):
        text = str(DoubleDouble(1e-7))
        assert text.startswith("9.999999999999999547481")
        assert text.endswith("e-08")

    def test_round_trip(self, random_dd, accuracy_checker):
        """Test that parsing the decimal form recovers the value."""
        for scale in (1e-20, 1e-3, 1.0, 1e5, 1e40):
            for _ in range(20):
                value = random_dd(-scale, scale)
                reference = accuracy_checker.to_mp(value)
                accuracy_checker.assert_relative(parse(str(value)), reference, 1e-29)

    @pytest.mark.parametrize("value", [PI, E, LN_2, DoubleDouble(1.0, -2.0 ** -60)])
    def test_str_is_display_form(self, value, accuracy_checker):
        """Test that str keeps 31 digits while repr reproduces the exact pair."""
        digits = str(value).replace(".", "").lstrip("0")
        assert len(digits) <= 31
        accuracy_checker.assert_relative(parse(str(value)), accuracy_checker.to_mp(value), 2.0 ** -100)

        restored = eval(repr(value), {"DoubleDouble": DoubleDouble})
        assert restored.as_tuple() == value.as_tuple()


class TestFormat:
    """Test cases for format() and f-strings."""

    def test_fixed_pi(self):
        assert format(PI, ".20f") == "3.14159265358979323846"

    def test_fixed_ln2(self):
        assert format(LN_2, ".20f") == "0.69314718055994530942"

    @pytest.mark.parametrize("value,expected", [
        (LN_2, "1"),
        (LN_2 / 100, "0"),
        (-LN_2 / 100, "-0"),
    ])
    def test_fixed_no_places(self, value, expected):
        assert format(value, ".0f") == expected

    def test_fixed_beyond_available_digits(self):
        """Test that digits past the 31st are written as zeros."""
        text = format(PI, ".40f")
        assert len(text) == 42
        assert text.startswith("3.1415926535897932384626433832")
        assert text.endswith("0" * 10)

    def test_fixed_zero(self):
        assert format(ZERO, ".3f") == "0.000"
        assert format(NEG_ZERO, ".1f") == "-0.0"

    def test_scientific(self):
        assert format(DoubleDouble(1.5), "e") == "1.500000e+00"
        assert format(DoubleDouble(1234.5), ".2E") == "1.23E+03"
        assert format(ZERO, ".2e") == "0.00e+00"

    @pytest.mark.parametrize("value,spec,expected", [
        (0.0001, "g", "0.0001"),
        (1e-5, "g", "1e-05"),
        (1234567.0, "g", "1.23457e+06"),
        (3.14159, ".3", "3.14"),
        (2.5, "G", "2.5"),
    ])
    def test_general(self, value, spec, expected):
        assert format(DoubleDouble(value), spec) == expected

    def test_empty_spec_matches_str(self):
        value = DoubleDouble(-2.5)
        assert format(value, "") == str(value)
        assert f"{value}" == "-2.5"

    @pytest.mark.parametrize("spec,expected", [
        (">10.2f", "      3.14"),
        ("<8.2f", "3.14    "),
        ("^10.2f", "   3.14   "),
        ("*<8.2f", "3.14****"),
        ("+.1f", "+3.1"),
        (" .1f", " 3.1"),
        ("08.2f", "00003.14"),
    ])
    def test_alignment_and_sign(self, spec, expected):
        assert format(DoubleDouble(3.14159), spec) == expected

    def test_zero_padding_after_sign(self):
        assert format(DoubleDouble(-1.5), "010.3f") == "-00001.500"

    def test_special_values(self):
        assert format(NAN, "+") == "+nan"
        assert format(NAN, "f") == "nan"
        assert format(INFINITY, "F") == "INF"
        assert format(NEG_INFINITY, ".2e") == "-inf"
        assert format(INFINITY, ">6") == "   inf"

    @pytest.mark.parametrize("spec", ["d", "x", "%", ".2q", "10.2fx"])
    def test_invalid_spec(self, spec):
        with pytest.raises(ValueError):
            format(PI, spec)

    def test_format_dd_accepts_numbers(self):
        assert format_dd(2.5, ".1f") == "2.5"
        assert format_dd(7, "") == "7"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
