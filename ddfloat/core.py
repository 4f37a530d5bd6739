"""
Core double-double value type.

This module contains :class:`DoubleDouble`, an immutable unevaluated pair of
doubles (hi, lo) representing the real number hi + lo, together with the
arithmetic, comparison, sign and classification operators built directly on
the error-free transformations in :mod:`ddfloat.eft`.

Non-finite operands are resolved with IEEE-754 double semantics on the ``hi``
components before any error-free transformation runs. No operator in this
module raises on a float operand: domain errors produce NaN.
"""

import enum
import math
import numbers
import sys
from fractions import Fraction
from typing import Optional, Tuple, Union

from .eft import (
    quick_two_sum,
    renormalize,
    two_diff,
    two_prod,
    two_sum,
)

_MIN_POSITIVE = sys.float_info.min


class FpCategory(enum.Enum):
    """Floating point category of a value, decided by its ``hi`` component."""

    ZERO = "zero"
    INFINITE = "infinite"
    NAN = "nan"
    SUBNORMAL = "subnormal"
    NORMAL = "normal"


def _make(hi: float, lo: float) -> "DoubleDouble":
    """Build a value from raw components without any normalization."""
    obj = object.__new__(DoubleDouble)
    object.__setattr__(obj, "_hi", hi)
    object.__setattr__(obj, "_lo", lo)
    return obj


def _from_double(x: float) -> "DoubleDouble":
    if math.isnan(x):
        return _make(math.nan, math.nan)
    return _make(x, 0.0)


def _ieee_div(x: float, y: float) -> float:
    """Float division with IEEE-754 results instead of ZeroDivisionError."""
    if y == 0.0:
        if x == 0.0 or math.isnan(x):
            return math.nan
        return math.copysign(math.inf, x) * math.copysign(1.0, y)
    return x / y


def coerce(value: Union["DoubleDouble", float, int]) -> "DoubleDouble":
    """
    Convert a number to :class:`DoubleDouble`.

    Integers are converted exactly up to 106 significant bits. Floats,
    numpy scalars and any other :class:`numbers.Real` go through ``float()``.

    Raises:
        TypeError: If the value is not a real number
    """
    if isinstance(value, DoubleDouble):
        return value
    if isinstance(value, numbers.Integral):
        return DoubleDouble.from_int(int(value))
    if isinstance(value, numbers.Real):
        return _from_double(float(value))
    raise TypeError(f"Cannot convert {type(value).__name__} to DoubleDouble")


def _operand(value) -> Optional["DoubleDouble"]:
    try:
        return coerce(value)
    except TypeError:
        return None


class DoubleDouble:
    """
    Extended precision number stored as an unevaluated sum of two doubles.

    For a valid finite non-zero value ``|lo| <= ulp(hi) / 2``, so ``lo`` holds
    the rounding error of ``hi``. NaN is stored as (nan, nan), infinities as
    (+/-inf, 0.0) and zeros as (+/-0.0, 0.0). The sign of the value is the
    sign of ``hi``.

    Instances are immutable. Every operator returns a new value.

    Attributes:
        hi: Leading component, the value rounded to double precision
        lo: Trailing component, the rounding error of ``hi``
    """

    __slots__ = ("_hi", "_lo")

    def __new__(cls, hi: float = 0.0, lo: float = 0.0):
        """
        Normalizing constructor.

        Args:
            hi: Leading component
            lo: Trailing component, renormalized into ``hi`` when both are
                finite

        Returns:
            The canonical pair for hi + lo
        """
        hi = float(hi)
        lo = float(lo)
        if lo == 0.0:
            return _from_double(hi)
        if math.isfinite(hi) and math.isfinite(lo):
            s, e = renormalize(hi, lo)
            if not math.isfinite(s):
                return _make(s, 0.0)
            return _make(s, e)
        return _from_double(hi + lo)

    def __setattr__(self, name, value):
        raise AttributeError("DoubleDouble is immutable")

    def __delattr__(self, name):
        raise AttributeError("DoubleDouble is immutable")

    @property
    def hi(self) -> float:
        return self._hi

    @property
    def lo(self) -> float:
        return self._lo

    # Construction

    @classmethod
    def from_float(cls, x: float) -> "DoubleDouble":
        """Promote a double; the value is exact and ``lo`` is zero."""
        return _from_double(float(x))

    @classmethod
    def from_int(cls, n: int) -> "DoubleDouble":
        """
        Convert an integer exactly when it fits in 106 significant bits.

        Raises:
            OverflowError: If the integer is too large for a double
        """
        hi = float(n)
        lo = float(n - int(hi))
        return _make(hi, lo)

    @classmethod
    def from_raw(cls, hi: float, lo: float) -> "DoubleDouble":
        """
        Unchecked construction from components.

        The caller is responsible for the half-ulp invariant; use
        :meth:`is_valid` to check a pair built this way.
        """
        return _make(float(hi), float(lo))

    @classmethod
    def new_add(cls, a: float, b: float) -> "DoubleDouble":
        """Exact sum of two doubles."""
        a, b = float(a), float(b)
        if not (math.isfinite(a) and math.isfinite(b)):
            return _from_double(a + b)
        s, e = two_sum(a, b)
        if not math.isfinite(s):
            return _make(s, 0.0)
        if s == 0.0:
            return _make(s, 0.0)
        return _make(s, e)

    @classmethod
    def new_sub(cls, a: float, b: float) -> "DoubleDouble":
        """Exact difference of two doubles."""
        a, b = float(a), float(b)
        if not (math.isfinite(a) and math.isfinite(b)):
            return _from_double(a - b)
        s, e = two_diff(a, b)
        if not math.isfinite(s):
            return _make(s, 0.0)
        if s == 0.0:
            return _make(s, 0.0)
        return _make(s, e)

    @classmethod
    def new_mul(cls, a: float, b: float) -> "DoubleDouble":
        """Exact product of two doubles."""
        a, b = float(a), float(b)
        if not (math.isfinite(a) and math.isfinite(b)):
            return _from_double(a * b)
        p, e = two_prod(a, b)
        if not math.isfinite(p) or p == 0.0:
            return _make(p, 0.0)
        return _make(p, e)

    @classmethod
    def new_div(cls, a: float, b: float) -> "DoubleDouble":
        """Quotient of two doubles to double-double accuracy."""
        return _from_double(float(a)).divide(_from_double(float(b)))

    # Validity, sign and classification

    def is_valid(self) -> bool:
        """
        Check the half-ulp invariant.

        Infinities are valid when ``lo`` is zero, zeros are valid when ``lo``
        is zero, and NaN is never valid.
        """
        hi, lo = self._hi, self._lo
        if math.isnan(hi) or math.isnan(lo):
            return False
        if math.isinf(hi):
            return lo == 0.0
        if not math.isfinite(lo):
            return False
        if hi == 0.0:
            return lo == 0.0
        return hi + lo == hi and abs(lo) <= 0.5 * math.ulp(hi)

    def is_nan(self) -> bool:
        return math.isnan(self._hi)

    def is_infinite(self) -> bool:
        return math.isinf(self._hi)

    def is_finite(self) -> bool:
        return math.isfinite(self._hi)

    def is_zero(self) -> bool:
        return self._hi == 0.0

    def is_subnormal(self) -> bool:
        return self.classify() is FpCategory.SUBNORMAL

    def is_normal(self) -> bool:
        return self.classify() is FpCategory.NORMAL

    def classify(self) -> FpCategory:
        hi = self._hi
        if math.isnan(hi):
            return FpCategory.NAN
        if math.isinf(hi):
            return FpCategory.INFINITE
        if hi == 0.0:
            return FpCategory.ZERO
        if abs(hi) < _MIN_POSITIVE:
            return FpCategory.SUBNORMAL
        return FpCategory.NORMAL

    def is_sign_positive(self) -> bool:
        """True for values whose ``hi`` has a clear sign bit, including +0.0."""
        return math.copysign(1.0, self._hi) > 0.0

    def is_sign_negative(self) -> bool:
        """True for values whose ``hi`` has a set sign bit, including -0.0."""
        return math.copysign(1.0, self._hi) < 0.0

    def abs(self) -> "DoubleDouble":
        """
        Absolute value.

        Both components are negated when the value is negative. A zero is
        left untouched only when both of its components carry a positive
        sign.
        """
        hi = self._hi
        if hi > 0.0 or (
            hi == 0.0
            and math.copysign(1.0, hi) > 0.0
            and math.copysign(1.0, self._lo) > 0.0
        ):
            return self
        return self.negate()

    def copysign(self, sign: Union["DoubleDouble", float]) -> "DoubleDouble":
        """Magnitude of ``self`` with the sign of ``sign``."""
        sign = coerce(sign)
        if self.is_sign_positive() == sign.is_sign_positive():
            return self
        return self.negate()

    def signum(self) -> "DoubleDouble":
        """
        1.0 for positive values and +0.0, -1.0 for negative values and -0.0.

        NaN for NaN and for any pair that breaks the half-ulp invariant.
        """
        if not self.is_valid():
            return _from_double(math.nan)
        if self.is_sign_positive():
            return _make(1.0, 0.0)
        return _make(-1.0, 0.0)

    # Arithmetic

    def negate(self) -> "DoubleDouble":
        return _make(-self._hi, -self._lo)

    def add(self, other: Union["DoubleDouble", float]) -> "DoubleDouble":
        """
        Sum of two values.

        The hi and lo components are summed separately with two_sum, and
        both error terms are folded back through two renormalizations, which
        keeps the relative error near 2^-106 even under cancellation.
        """
        other = coerce(other)
        a_hi, a_lo = self._hi, self._lo
        b_hi, b_lo = other._hi, other._lo
        if not (math.isfinite(a_hi) and math.isfinite(b_hi)):
            return _from_double(a_hi + b_hi)

        s, e = two_sum(a_hi, b_hi)
        if not math.isfinite(s):
            return _make(s, 0.0)
        t, f = two_sum(a_lo, b_lo)
        e += t
        s, e = quick_two_sum(s, e)
        e += f
        hi, lo = quick_two_sum(s, e)

        if hi == 0.0:
            naive = a_hi + b_hi
            return _make(naive if naive == 0.0 else 0.0, 0.0)
        if math.isinf(hi):
            return _make(hi, 0.0)
        return _make(hi, lo)

    def subtract(self, other: Union["DoubleDouble", float]) -> "DoubleDouble":
        """Difference of two values, the two_diff mirror of :meth:`add`."""
        other = coerce(other)
        a_hi, a_lo = self._hi, self._lo
        b_hi, b_lo = other._hi, other._lo
        if not (math.isfinite(a_hi) and math.isfinite(b_hi)):
            return _from_double(a_hi - b_hi)

        s, e = two_diff(a_hi, b_hi)
        if not math.isfinite(s):
            return _make(s, 0.0)
        t, f = two_diff(a_lo, b_lo)
        e += t
        s, e = quick_two_sum(s, e)
        e += f
        hi, lo = quick_two_sum(s, e)

        if hi == 0.0:
            naive = a_hi - b_hi
            return _make(naive if naive == 0.0 else 0.0, 0.0)
        if math.isinf(hi):
            return _make(hi, 0.0)
        return _make(hi, lo)

    def multiply(self, other: Union["DoubleDouble", float]) -> "DoubleDouble":
        """
        Product of two values.

        The lo * lo cross term is below the precision of the result and is
        dropped.
        """
        other = coerce(other)
        a_hi, a_lo = self._hi, self._lo
        b_hi, b_lo = other._hi, other._lo
        if not (math.isfinite(a_hi) and math.isfinite(b_hi)):
            return _from_double(a_hi * b_hi)

        p, e = two_prod(a_hi, b_hi)
        if not math.isfinite(p):
            return _make(p, 0.0)
        e += a_hi * b_lo + a_lo * b_hi
        hi, lo = quick_two_sum(p, e)

        if hi == 0.0:
            return _make(p, 0.0)
        if math.isinf(hi):
            return _make(hi, 0.0)
        return _make(hi, lo)

    def divide(self, other: Union["DoubleDouble", float]) -> "DoubleDouble":
        """
        Quotient of two values.

        A double-precision quotient is refined by one correction step
        computed from the double-double remainder.
        """
        other = coerce(other)
        a_hi = self._hi
        b_hi = other._hi
        if not (math.isfinite(a_hi) and math.isfinite(b_hi)) or b_hi == 0.0:
            return _from_double(_ieee_div(a_hi, b_hi))
        if a_hi == 0.0:
            return _make(a_hi / b_hi, 0.0)

        q0 = a_hi / b_hi
        if not math.isfinite(q0) or q0 == 0.0:
            return _make(q0, 0.0)
        r = self.subtract(other.multiply(_make(q0, 0.0)))
        q1 = r._hi / b_hi
        hi, lo = renormalize(q0, q1)
        if not math.isfinite(hi) or not math.isfinite(lo):
            return _make(q0, 0.0)
        return _make(hi, lo)

    def recip(self) -> "DoubleDouble":
        return _make(1.0, 0.0).divide(self)

    def ldexp(self, n: int) -> "DoubleDouble":
        """
        Exact scaling by 2**n.

        Overflow saturates to a signed infinity; results in the subnormal
        range are renormalized.
        """
        hi = self._hi
        if not math.isfinite(hi) or hi == 0.0:
            return self
        try:
            new_hi = math.ldexp(hi, n)
        except OverflowError:
            return _make(math.copysign(math.inf, hi), 0.0)
        new_lo = math.ldexp(self._lo, n)
        if new_hi == 0.0:
            return _make(new_hi, 0.0)
        return _make(*renormalize(new_hi, new_lo))

    def sqrt(self) -> "DoubleDouble":
        """
        Square root.

        Seeded with the double square root of ``hi`` and refined by one
        Newton-Raphson step ``x + (a - x*x) / (2*x)``. Negative operands give
        NaN; -0.0 gives -0.0.
        """
        hi = self._hi
        if math.isnan(hi) or hi < 0.0:
            return _from_double(math.nan)
        if hi == 0.0:
            return _make(hi, 0.0)
        if math.isinf(hi):
            return self

        _, exponent = math.frexp(hi)
        if exponent > 1000 or exponent < -900:
            half = exponent // 2
            return self.ldexp(-2 * half).sqrt().ldexp(half)

        x0 = _make(math.sqrt(hi), 0.0)
        residual = self.subtract(x0.multiply(x0))
        return x0.add(residual.divide(x0.multiply(_make(2.0, 0.0))))

    def powi(self, n: int) -> "DoubleDouble":
        """
        Integer power by repeated squaring.

        ``x.powi(0)`` is one for every ``x``, NaN included. Negative
        exponents return the reciprocal of the positive power, so a zero base
        gives a signed infinity.
        """
        n = int(n)
        one = _make(1.0, 0.0)
        if n == 0:
            return one

        result = one
        base = self
        k = -n if n < 0 else n
        while k:
            if k & 1:
                result = result.multiply(base)
            k >>= 1
            if k:
                base = base.multiply(base)

        if n < 0:
            return one.divide(result)
        return result

    # Rounding

    def floor(self) -> "DoubleDouble":
        hi = self._hi
        if not math.isfinite(hi) or hi == 0.0:
            return self
        floor_hi = float(math.floor(hi))
        if floor_hi != hi:
            return _make(floor_hi, 0.0)
        floor_lo = float(math.floor(self._lo))
        return _make(*quick_two_sum(floor_hi, floor_lo))

    def ceil(self) -> "DoubleDouble":
        return self.negate().floor().negate()

    def trunc(self) -> "DoubleDouble":
        if self._hi > 0.0:
            return self.floor()
        return self.ceil()

    def round(self) -> "DoubleDouble":
        """Round to the nearest integer, halfway cases away from zero."""
        if not self.is_finite():
            return self
        whole = self.trunc()
        remainder = self.subtract(whole)
        if abs(remainder._hi) >= 0.5:
            return whole.add(_make(math.copysign(1.0, self._hi), 0.0))
        return whole

    def fract(self) -> "DoubleDouble":
        """Fractional part, carrying the sign of ``self``."""
        return self.subtract(self.trunc())

    # Comparison

    def compare(self, other: Union["DoubleDouble", float]) -> Optional[int]:
        """
        Three-way comparison.

        Returns:
            -1, 0 or 1, or None when either operand is NaN
        """
        other = coerce(other)
        if self.is_nan() or other.is_nan():
            return None
        if _lt(self, other):
            return -1
        if _eq(self, other):
            return 0
        return 1

    def __eq__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return _eq(self, other)

    def __lt__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return _lt(self, other)

    def __le__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return _le(self, other)

    def __gt__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return _lt(other, self)

    def __ge__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return _le(other, self)

    def __hash__(self):
        hi, lo = self._hi, self._lo
        if lo == 0.0 or not math.isfinite(hi) or not math.isfinite(lo):
            return hash(hi)
        return hash(Fraction(hi) + Fraction(lo))

    # Operator protocol

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    def __add__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return other.add(self)

    def __sub__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return other.subtract(self)

    def __mul__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return other.multiply(self)

    def __truediv__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other):
        other = _operand(other)
        if other is None:
            return NotImplemented
        return other.divide(self)

    def __pow__(self, exponent, modulo=None):
        if modulo is not None:
            return NotImplemented
        if isinstance(exponent, numbers.Integral):
            return self.powi(int(exponent))
        exponent = _operand(exponent)
        if exponent is None:
            return NotImplemented
        from .functions import powf

        return powf(self, exponent)

    def __rpow__(self, base):
        base = _operand(base)
        if base is None:
            return NotImplemented
        from .functions import powf

        return powf(base, self)

    # Conversions

    def as_tuple(self) -> Tuple[float, float]:
        return self._hi, self._lo

    def __float__(self):
        return self._hi + self._lo

    def __int__(self):
        if not self.is_finite():
            return int(self._hi)
        truncated = self.trunc()
        return int(truncated._hi) + int(truncated._lo)

    def __bool__(self):
        return self._hi != 0.0

    def __trunc__(self):
        return int(self)

    def __floor__(self):
        return int(self.floor())

    def __ceil__(self):
        return int(self.ceil())

    def __round__(self, ndigits=None):
        if ndigits is None:
            return int(self.round())
        scale = _make(10.0, 0.0).powi(ndigits)
        return self.multiply(scale).round().divide(scale)

    def __reduce__(self):
        return (DoubleDouble.from_raw, (self._hi, self._lo))

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __repr__(self):
        return f"DoubleDouble({self._hi!r}, {self._lo!r})"

    def __str__(self):
        from .formatting import to_string

        return to_string(self)

    def __format__(self, format_spec):
        from .formatting import format_dd

        return format_dd(self, format_spec)


def _eq(a: DoubleDouble, b: DoubleDouble) -> bool:
    if a.is_nan() or b.is_nan():
        return False
    return a._hi == b._hi and a._lo == b._lo


def _lt(a: DoubleDouble, b: DoubleDouble) -> bool:
    if a.is_nan() or b.is_nan():
        return False
    return a._hi < b._hi or (a._hi == b._hi and a._lo < b._lo)


def _le(a: DoubleDouble, b: DoubleDouble) -> bool:
    if a.is_nan() or b.is_nan():
        return False
    return a._hi < b._hi or (a._hi == b._hi and a._lo <= b._lo)
