"""
Mathematical constants and limits as double-double pairs.

Each constant is the correctly rounded double of its value in ``hi`` and the
rounded remainder in ``lo``.
"""

import math
import sys

from .core import DoubleDouble

_raw = DoubleDouble.from_raw

# Euler's number
E = _raw(2.718281828459045, 1.4456468917292502e-16)

FRAC_1_PI = _raw(0.3183098861837907, -1.9678676675182486e-17)
FRAC_2_PI = _raw(0.6366197723675814, -3.935735335036497e-17)
FRAC_2_SQRT_PI = _raw(1.1283791670955126, 1.533545961316588e-17)
FRAC_1_SQRT_2 = _raw(0.7071067811865476, -4.833646656726457e-17)

FRAC_PI_2 = _raw(1.5707963267948966, 6.123233995736766e-17)
FRAC_PI_3 = _raw(1.0471975511965979, -1.072081766451091e-16)
FRAC_PI_4 = _raw(0.7853981633974483, 3.061616997868383e-17)
FRAC_PI_6 = _raw(0.5235987755982989, -5.360408832255455e-17)
FRAC_PI_8 = _raw(0.39269908169872414, 1.5308084989341915e-17)
FRAC_PI_16 = _raw(0.19634954084936207, 7.654042494670953e-18)
FRAC_3_PI_2 = _raw(4.71238898038469, 1.8369701987210292e-16)
FRAC_3_PI_4 = _raw(2.356194490192345, 9.184850993605146e-17)
FRAC_5_PI_4 = _raw(3.9269908169872414, 1.5308084989341908e-16)
FRAC_7_PI_4 = _raw(5.497787143782138, 2.143131898507869e-16)

LN_2 = _raw(0.6931471805599453, 2.3190468138462996e-17)
LN_10 = _raw(2.302585092994046, -2.1707562233822494e-16)
LOG2_E = _raw(1.4426950408889634, 2.0355273740931033e-17)
LOG10_E = _raw(0.4342944819032518, 1.098319650216765e-17)
LOG10_2 = _raw(0.3010299956639812, -2.8037281277851704e-18)
LOG2_10 = _raw(3.321928094887362, 1.661617516973592e-16)

PI = _raw(3.141592653589793, 1.2246467991473532e-16)
SQRT_2 = _raw(1.4142135623730951, -9.667293313452913e-17)
TAU = _raw(6.283185307179586, 2.4492935982947064e-16)

# Limits
# 2^-104, the spacing of double-double values just above one
EPSILON = _raw(2.0 ** -104, 0.0)
# lo is the largest double below half an ulp of hi, so hi + lo rounds to hi
MAX = _raw(sys.float_info.max, math.ldexp(1.0 - 2.0 ** -53, 970))
MIN = MAX.negate()
MIN_POSITIVE = _raw(sys.float_info.min, 0.0)

# Special values
NAN = _raw(math.nan, math.nan)
INFINITY = _raw(math.inf, 0.0)
NEG_INFINITY = _raw(-math.inf, 0.0)
ZERO = _raw(0.0, 0.0)
NEG_ZERO = _raw(-0.0, 0.0)
ONE = _raw(1.0, 0.0)
NEG_ONE = _raw(-1.0, 0.0)

RADIX = 2
MANTISSA_DIGITS = 106
DIGITS = 31
MIN_EXP = -1021
MAX_EXP = 1024
MIN_10_EXP = -307
MAX_10_EXP = 308
