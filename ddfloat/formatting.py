"""
Decimal formatting of double-double values.

Digits are produced by repeatedly truncating the leading component,
subtracting it and multiplying the remainder by ten. Negative and oversized
digits, which appear when ``hi`` sits exactly on an integer and ``lo`` has the
opposite sign, are fixed afterwards by a borrow/carry pass.
"""

import math
import re
from typing import List, Tuple

from .consts import DIGITS
from .core import DoubleDouble, coerce

_TEN = DoubleDouble.from_float(10.0)

_FORMAT_SPEC = re.compile(
    r"""
    \A
    (?:(?P<fill>.)?(?P<align>[<>=^]))?
    (?P<sign>[-+ ])?
    (?P<zero>0)?
    (?P<width>\d+)?
    (?:\.(?P<precision>\d+))?
    (?P<type>[eEfFgG])?
    \Z
    """,
    re.VERBOSE | re.DOTALL,
)


def _normalize_digits(digits: List[int]) -> None:
    """Bring every digit into [0, 9] by propagating borrows and carries leftwards."""
    for i in range(len(digits) - 1, 0, -1):
        carry, digits[i] = divmod(digits[i], 10)
        digits[i - 1] += carry


def _round_digits(digits: List[int], exp: int, n: int) -> Tuple[List[int], int]:
    """
    Round a digit string to ``n`` significant digits, half up.

    Returns:
        Tuple of (digits, exponent); an empty digit list means the value
        rounded to zero
    """
    if n >= len(digits):
        return digits + [0] * (n - len(digits)), exp
    if n < 0:
        return [], exp

    round_up = digits[n] >= 5
    kept = digits[:n]
    if not round_up:
        return kept, exp

    i = n - 1
    while i >= 0:
        kept[i] += 1
        if kept[i] < 10:
            return kept, exp
        kept[i] = 0
        i -= 1
    # Carry out of the leading digit
    return [1] + kept[:-1] if kept else [1], exp + 1


def extract_digits(value, ndigits: int = DIGITS) -> Tuple[List[int], int]:
    """
    Decimal digits of a finite non-zero value.

    Args:
        value: Number to convert; its sign is ignored
        ndigits: Number of significant digits, at most 31

    Returns:
        Tuple of (digits, exponent) such that the magnitude is approximately
        ``d0.d1d2... * 10**exponent``

    Raises:
        ValueError: If the value is zero, infinite or NaN
    """
    value = coerce(value).abs()
    if not value.is_finite() or value.is_zero():
        raise ValueError(f"Cannot extract digits from {value!r}")
    ndigits = max(1, min(ndigits, DIGITS))

    exp = math.floor(math.log10(value.hi))
    if exp > 0:
        scaled = value.divide(_TEN.powi(exp))
    elif exp < -300:
        scaled = value.multiply(_TEN.powi(300)).multiply(_TEN.powi(-exp - 300))
    elif exp < 0:
        scaled = value.multiply(_TEN.powi(-exp))
    else:
        scaled = value

    if scaled.hi >= 10.0:
        scaled = scaled.divide(_TEN)
        exp += 1
    elif scaled.hi < 1.0:
        scaled = scaled.multiply(_TEN)
        exp -= 1

    digits = []
    for _ in range(DIGITS + 3):
        digit = math.trunc(scaled.hi)
        scaled = scaled.subtract(DoubleDouble.from_float(float(digit))).multiply(_TEN)
        digits.append(digit)

    _normalize_digits(digits)
    while digits[0] == 0:
        digits.pop(0)
        exp -= 1
    if digits[0] >= 10:
        head, digits[0] = divmod(digits[0], 10)
        digits.insert(0, head)
        exp += 1

    return _round_digits(digits, exp, ndigits)


def _special(value: DoubleDouble, upper: bool = False) -> str:
    if value.is_nan():
        text = "nan"
    else:
        text = "inf"
    return text.upper() if upper else text


def _exponent_suffix(exp: int, marker: str = "e") -> str:
    sign = "-" if exp < 0 else "+"
    return f"{marker}{sign}{abs(exp):02d}"


def _place_fixed(digits: List[int], exp: int, precision: int) -> str:
    """Render digits with weight 10**(exp - i) in positional notation."""

    def digit_at(i: int) -> str:
        return str(digits[i]) if 0 <= i < len(digits) else "0"

    integer = "".join(digit_at(i) for i in range(0, exp + 1)) or "0"
    if precision <= 0:
        return integer
    fraction = "".join(digit_at(exp + j) for j in range(1, precision + 1))
    return f"{integer}.{fraction}"


def _place_scientific(digits: List[int], exp: int, marker: str = "e") -> str:
    head = str(digits[0])
    tail = "".join(str(d) for d in digits[1:])
    mantissa = f"{head}.{tail}" if tail else head
    return mantissa + _exponent_suffix(exp, marker)


def _strip_zeros(digits: List[int]) -> List[int]:
    end = len(digits)
    while end > 1 and digits[end - 1] == 0:
        end -= 1
    return digits[:end]


def _shortest(value: DoubleDouble) -> str:
    """Magnitude with up to 31 significant digits and no trailing zeros."""
    if value.is_zero():
        return "0"
    digits, exp = extract_digits(value, DIGITS)
    digits = _strip_zeros(digits)
    if -5 <= exp < DIGITS:
        return _place_fixed(digits, exp, max(0, len(digits) - exp - 1))
    return _place_scientific(digits, exp)


def to_string(value) -> str:
    """
    Decimal representation with up to 31 significant digits.

    Positional notation is used for decimal exponents in [-5, 31) and
    ``d.ddd...e+XX`` otherwise. Non-finite values are ``nan``, ``inf`` and
    ``-inf``; negative zero is ``-0``.

    This is a display form: 31 digits parse back to within 2^-100 relative
    but not always to the same pair. ``repr()`` and pickling preserve both
    components exactly.

    Example:
        >>> to_string(DoubleDouble(1.5))
        '1.5'
    """
    value = coerce(value)
    if value.is_nan():
        return "nan"
    sign = "-" if value.is_sign_negative() else ""
    if value.is_infinite():
        return sign + "inf"
    return sign + _shortest(value.abs())


def _format_fixed(value: DoubleDouble, precision: int) -> str:
    if value.is_zero():
        return _place_fixed([], 0, precision)
    digits, exp = extract_digits(value, DIGITS)
    digits, exp = _round_digits(digits, exp, exp + 1 + precision)
    return _place_fixed(digits, exp, precision)


def _format_scientific(value: DoubleDouble, precision: int, marker: str) -> str:
    if value.is_zero():
        return _place_scientific([0] * (precision + 1), 0, marker)
    digits, exp = extract_digits(value, DIGITS)
    digits, exp = _round_digits(digits, exp, precision + 1)
    return _place_scientific(digits, exp, marker)


def _format_general(value: DoubleDouble, precision: int, marker: str) -> str:
    precision = max(precision, 1)
    if value.is_zero():
        return "0"
    digits, exp = extract_digits(value, DIGITS)
    digits, exp = _round_digits(digits, exp, precision)
    digits = _strip_zeros(digits)
    if -4 <= exp < precision:
        return _place_fixed(digits, exp, max(0, len(digits) - exp - 1))
    return _place_scientific(digits, exp, marker)


def _pad(sign: str, body: str, fill: str, align: str, width: int) -> str:
    padding = width - len(sign) - len(body)
    if padding <= 0:
        return sign + body
    if align == "<":
        return sign + body + fill * padding
    if align == "^":
        left = padding // 2
        return fill * left + sign + body + fill * (padding - left)
    if align == "=":
        return sign + fill * padding + body
    return fill * padding + sign + body


def format_dd(value, format_spec: str = "") -> str:
    """
    Format a value according to a standard format specification.

    Supports ``[[fill]align][sign][0][width][.precision][type]`` with the
    presentation types ``e``, ``E``, ``f``, ``F``, ``g``, ``G`` and none.
    Without a type and precision the result matches :func:`to_string`;
    with a precision but no type it behaves like ``g``. Digits past the
    31st significant one are written as zeros.

    Raises:
        ValueError: If the format specification is not understood
    """
    value = coerce(value)
    match = _FORMAT_SPEC.match(format_spec)
    if match is None:
        raise ValueError(f"Invalid format specifier '{format_spec}' for DoubleDouble")

    fill = match.group("fill") or " "
    align = match.group("align") or ">"
    if match.group("zero") and not match.group("align"):
        fill, align = "0", "="
    sign_option = match.group("sign") or "-"
    width = int(match.group("width") or 0)
    precision = match.group("precision")
    kind = match.group("type") or ""

    if value.is_nan():
        negative = False
    else:
        negative = value.is_sign_negative()
    if negative:
        sign = "-"
    elif sign_option == "+":
        sign = "+"
    elif sign_option == " ":
        sign = " "
    else:
        sign = ""

    magnitude = value.abs()
    upper = kind in ("E", "F", "G")
    marker = "E" if upper else "e"
    places = 6 if precision is None else int(precision)
    if not magnitude.is_finite():
        body = _special(magnitude, upper)
    elif kind in ("f", "F"):
        body = _format_fixed(magnitude, places)
    elif kind in ("e", "E"):
        body = _format_scientific(magnitude, places, marker)
    elif kind in ("g", "G") or precision is not None:
        body = _format_general(magnitude, places, marker)
    else:
        body = _shortest(magnitude)

    return _pad(sign, body, fill, align, width)
