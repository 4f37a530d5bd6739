"""
Decimal string parsing.

The parser accepts the same shapes as ``float()`` minus hexadecimal input:
an optional sign, digits with at most one decimal point, ``_`` separators
and an optional ``e`` exponent. Digits are accumulated in double-double
arithmetic so that up to 31 significant digits survive the conversion.
"""

import re

from .consts import INFINITY, NAN, NEG_INFINITY, ZERO
from .core import DoubleDouble

_TEN = DoubleDouble.from_float(10.0)
_EXPONENT = re.compile(r"[+-]?\d+\Z")

# Smallest exponent for which 10**exp stays a normal double
_MIN_SAFE_EXPONENT = -307

_SPECIALS = {
    "nan": NAN,
    "+nan": NAN,
    "-nan": NAN,
    "inf": INFINITY,
    "+inf": INFINITY,
    "infinity": INFINITY,
    "+infinity": INFINITY,
    "-inf": NEG_INFINITY,
    "-infinity": NEG_INFINITY,
}


class ParseError(ValueError):
    """
    Raised when a string does not describe a number.

    Attributes:
        kind: ``"empty"`` for blank input, ``"invalid"`` for malformed input
        text: The string that failed to parse
    """

    def __init__(self, kind: str, text: str):
        self.kind = kind
        self.text = text
        if kind == "empty":
            message = "cannot parse DoubleDouble from empty string"
        else:
            message = f"invalid DoubleDouble literal: {text!r}"
        super().__init__(message)


def parse(text: str) -> DoubleDouble:
    """
    Parse a decimal string.

    Args:
        text: String such as ``"3.14159"``, ``"-1_000.5e-3"`` or ``"inf"``;
            surrounding whitespace and letter case are ignored

    Returns:
        The parsed value

    Raises:
        ParseError: If the string is empty or malformed

    Example:
        >>> parse("1.5e3")
        DoubleDouble(1500.0, 0.0)
    """
    cleaned = text.strip().lower()
    if not cleaned:
        raise ParseError("empty", text)
    special = _SPECIALS.get(cleaned)
    if special is not None:
        return special

    result = ZERO
    digits = 0
    point = -1
    sign = 0
    exp = 0

    for index, ch in enumerate(cleaned):
        if ch.isdigit() and ch.isascii():
            result = result.multiply(_TEN).add(DoubleDouble.from_float(float(ch)))
            digits += 1
        elif ch == ".":
            if point >= 0:
                raise ParseError("invalid", text)
            point = digits
        elif ch in "+-":
            if sign != 0 or digits > 0 or point >= 0:
                raise ParseError("invalid", text)
            sign = -1 if ch == "-" else 1
        elif ch == "e":
            tail = cleaned[index + 1:]
            if digits == 0 or _EXPONENT.match(tail) is None:
                raise ParseError("invalid", text)
            exp = int(tail)
            break
        elif ch == "_":
            continue
        else:
            raise ParseError("invalid", text)

    if digits == 0:
        raise ParseError("invalid", text)

    if point >= 0:
        exp -= digits - point
    if exp != 0 and not result.is_zero():
        # 10**exp underflows below 1e-307, so scale in two steps
        if exp < _MIN_SAFE_EXPONENT:
            adjust = exp - _MIN_SAFE_EXPONENT
            result = result.multiply(_TEN.powi(adjust))
            exp -= adjust
        result = result.multiply(_TEN.powi(exp))

    if sign == -1:
        result = result.negate()
    return result
