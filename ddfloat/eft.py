"""
Error-free transformations of IEEE-754 doubles.

Each primitive returns a pair (value, error) where value is the ordinary
rounded double result and value + error equals the exact real result. These
are the building blocks of every double-double operator in :mod:`ddfloat.core`.

The primitives assume finite inputs. NaN and infinities must be resolved by
the caller before they are invoked.
"""

import logging
import math
import os
from typing import Tuple

logger = logging.getLogger(__name__)

_SPLITTER = 134217729.0  # 2^27 + 1
_SPLIT_THRESHOLD = 2.0 ** 996
_SPLIT_SCALE_DOWN = 2.0 ** -28
_SPLIT_SCALE_UP = 2.0 ** 28


def _fma_disabled() -> bool:
    """Check whether the fused multiply-add path has been switched off."""
    return os.environ.get("DDFLOAT_NO_FMA", "").lower() in ("1", "true", "yes")


USE_FMA = hasattr(math, "fma") and not _fma_disabled()

logger.debug("two_prod backend: %s", "fma" if USE_FMA else "dekker")


def two_sum(a: float, b: float) -> Tuple[float, float]:
    """
    Knuth's branch-free exact addition.

    Args:
        a: First addend
        b: Second addend

    Returns:
        Tuple of (rounded_sum, rounding_error)
    """
    s = a + b
    bb = s - a
    e = (a - (s - bb)) + (b - bb)
    return s, e


def quick_two_sum(a: float, b: float) -> Tuple[float, float]:
    """Exact addition assuming ``|a| >= |b|`` (or ``a == 0``)."""
    s = a + b
    e = b - (s - a)
    return s, e


def two_diff(a: float, b: float) -> Tuple[float, float]:
    """
    Exact subtraction.

    Args:
        a: Minuend
        b: Subtrahend

    Returns:
        Tuple of (rounded_difference, rounding_error)
    """
    s = a - b
    bb = s - a
    e = (a - (s - bb)) - (b + bb)
    return s, e


def quick_two_diff(a: float, b: float) -> Tuple[float, float]:
    """Exact subtraction assuming ``|a| >= |b|``."""
    s = a - b
    e = (a - s) - b
    return s, e


def split(a: float) -> Tuple[float, float]:
    """
    Dekker split of a double into two non-overlapping 26-bit halves.

    Values above 2^996 are scaled down first so that the multiplication by
    the splitter cannot overflow.

    Args:
        a: Finite double to split

    Returns:
        Tuple of (high_half, low_half) with high_half + low_half == a
    """
    if a > _SPLIT_THRESHOLD or a < -_SPLIT_THRESHOLD:
        a *= _SPLIT_SCALE_DOWN
        t = _SPLITTER * a
        hi = t - (t - a)
        lo = a - hi
        return hi * _SPLIT_SCALE_UP, lo * _SPLIT_SCALE_UP

    t = _SPLITTER * a
    hi = t - (t - a)
    lo = a - hi
    return hi, lo


def two_prod_dekker(a: float, b: float) -> Tuple[float, float]:
    """
    Exact multiplication through Dekker splitting.

    Args:
        a: First factor
        b: Second factor

    Returns:
        Tuple of (rounded_product, rounding_error)
    """
    p = a * b
    if not math.isfinite(p):
        return p, 0.0
    a_hi, a_lo = split(a)
    b_hi, b_lo = split(b)
    e = ((a_hi * b_hi - p) + a_hi * b_lo + a_lo * b_hi) + a_lo * b_lo
    return p, e


def two_prod(a: float, b: float) -> Tuple[float, float]:
    """
    Exact multiplication.

    Uses a fused multiply-add when the interpreter provides one, which
    yields the rounding error in a single operation. Falls back to
    :func:`two_prod_dekker` otherwise, or when ``DDFLOAT_NO_FMA`` is set.

    Args:
        a: First factor
        b: Second factor

    Returns:
        Tuple of (rounded_product, rounding_error). An overflowing product
        is returned as (inf, 0.0).
    """
    if not USE_FMA:
        return two_prod_dekker(a, b)
    p = a * b
    if not math.isfinite(p):
        return p, 0.0
    return p, math.fma(a, b, -p)


def renormalize(hi: float, lo: float) -> Tuple[float, float]:
    """
    Restore the half-ulp invariant of a finite (hi, lo) pair.

    A single :func:`two_sum` pass captures the exact rounding error of
    folding ``lo`` back into ``hi``.
    """
    return two_sum(hi, lo)
