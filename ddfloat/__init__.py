"""
Double-Double Arithmetic Library

An extended precision number type represented as an unevaluated sum of two
IEEE-754 doubles, giving about 106 significant bits (31 decimal digits)
without arbitrary precision machinery.

This library provides:
- Error-free transformations of doubles (two_sum, two_prod, ...)
- The DoubleDouble type with IEEE-754 special value handling
- Square root, integer powers and transcendental functions
- A catalog of mathematical constants
- Decimal parsing and formatting
- Compensated reductions over lists, numpy arrays and torch tensors
"""

from .core import DoubleDouble, FpCategory
from .eft import (
    quick_two_diff,
    quick_two_sum,
    renormalize,
    split,
    two_diff,
    two_prod,
    two_prod_dekker,
    two_sum,
)
from .consts import (
    DIGITS,
    E,
    EPSILON,
    FRAC_1_PI,
    FRAC_1_SQRT_2,
    FRAC_2_PI,
    FRAC_2_SQRT_PI,
    FRAC_3_PI_2,
    FRAC_3_PI_4,
    FRAC_5_PI_4,
    FRAC_7_PI_4,
    FRAC_PI_16,
    FRAC_PI_2,
    FRAC_PI_3,
    FRAC_PI_4,
    FRAC_PI_6,
    FRAC_PI_8,
    INFINITY,
    LN_10,
    LN_2,
    LOG10_2,
    LOG10_E,
    LOG2_10,
    LOG2_E,
    MANTISSA_DIGITS,
    MAX,
    MAX_10_EXP,
    MAX_EXP,
    MIN,
    MIN_10_EXP,
    MIN_EXP,
    MIN_POSITIVE,
    NAN,
    NEG_INFINITY,
    NEG_ONE,
    NEG_ZERO,
    ONE,
    PI,
    RADIX,
    SQRT_2,
    TAU,
    ZERO,
)
from .functions import (
    acos,
    acosh,
    asin,
    asinh,
    atan,
    atan2,
    atanh,
    cbrt,
    cos,
    cosh,
    exp,
    exp2,
    exp_m1,
    hypot,
    ln,
    ln_1p,
    log,
    log10,
    log2,
    powf,
    sin,
    sin_cos,
    sinh,
    tan,
    tanh,
)
from .parse import ParseError, parse
from .formatting import extract_digits, format_dd, to_string
from .algorithms import (
    BatchSummator,
    DoubleDoubleAccumulator,
    dd_dot,
    dd_mean,
    dd_prod,
    dd_sum,
    dd_variance,
    from_numpy,
    from_tensor,
    to_numpy,
    to_tensor,
    tree_reduce_dd,
)

__version__ = "1.0.0"
__author__ = "ddfloat Contributors"

__all__ = [
    "DoubleDouble",
    "FpCategory",
    "two_sum",
    "quick_two_sum",
    "two_diff",
    "quick_two_diff",
    "split",
    "two_prod",
    "two_prod_dekker",
    "renormalize",
    "E",
    "FRAC_1_PI",
    "FRAC_2_PI",
    "FRAC_2_SQRT_PI",
    "FRAC_1_SQRT_2",
    "FRAC_PI_2",
    "FRAC_PI_3",
    "FRAC_PI_4",
    "FRAC_PI_6",
    "FRAC_PI_8",
    "FRAC_PI_16",
    "FRAC_3_PI_2",
    "FRAC_3_PI_4",
    "FRAC_5_PI_4",
    "FRAC_7_PI_4",
    "LN_2",
    "LN_10",
    "LOG2_E",
    "LOG10_E",
    "LOG10_2",
    "LOG2_10",
    "PI",
    "SQRT_2",
    "TAU",
    "EPSILON",
    "MIN",
    "MIN_POSITIVE",
    "MAX",
    "NAN",
    "INFINITY",
    "NEG_INFINITY",
    "ZERO",
    "NEG_ZERO",
    "ONE",
    "NEG_ONE",
    "RADIX",
    "MANTISSA_DIGITS",
    "DIGITS",
    "MIN_EXP",
    "MAX_EXP",
    "MIN_10_EXP",
    "MAX_10_EXP",
    "exp",
    "exp_m1",
    "exp2",
    "ln",
    "ln_1p",
    "log2",
    "log10",
    "log",
    "sin",
    "cos",
    "tan",
    "sin_cos",
    "atan2",
    "atan",
    "asin",
    "acos",
    "sinh",
    "cosh",
    "tanh",
    "asinh",
    "acosh",
    "atanh",
    "powf",
    "cbrt",
    "hypot",
    "parse",
    "ParseError",
    "extract_digits",
    "to_string",
    "format_dd",
    "DoubleDoubleAccumulator",
    "dd_sum",
    "tree_reduce_dd",
    "dd_prod",
    "dd_dot",
    "dd_mean",
    "dd_variance",
    "BatchSummator",
    "to_numpy",
    "from_numpy",
    "to_tensor",
    "from_tensor",
]
