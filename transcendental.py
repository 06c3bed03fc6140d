"""Precision-controlled square root, logarithm, exponential and real power.

Each function takes `precision`, a target number of decimal digits, and runs in
one of two regimes:

  fast path   precision <= FAST_PATH_DIGITS: evaluate in float64 with numpy and
              read the double's shortest decimal text back as an exact Number.
              A non-finite (or, where the true value cannot be zero, a zero)
              result is unusable and falls through to the exact path.
  exact path  Newton-Raphson / series evaluation on Fractions. Iteration and
              term counts grow with precision but are clamped, so precision
              far past the clamps is not honoured.

Intermediate values on the exact path are rounded to precision + GUARD_DIGITS
significant digits so numerators and denominators stay bounded.
"""

import logging
import math
from typing import Callable, Optional

import numpy as np

from arithmetic import Q, Number, round_half_away, round_to_digits
from constants import LN2
from errors import DomainError, Overflow

logger = logging.getLogger(__name__)

# Regime switch: requests at or below this many digits use float64
FAST_PATH_DIGITS = 15
# Extra significant digits carried through exact-path intermediates
GUARD_DIGITS = 10
DEFAULT_PRECISION = 50

# Integers below this are checked for an exact root through a double
EXACT_SQRT_LIMIT = 2 ** 53
SQRT_ITERATIONS_MIN, SQRT_ITERATIONS_MAX = 3, 10
LN_TERMS_MIN, LN_TERMS_MAX = 10, 60
EXP_TERMS_MIN, EXP_TERMS_MAX = 15, 80
# Integer exponents within this magnitude are raised exactly by pow_real
POW_INT_LIMIT = 2 ** 31 - 1
# Largest power-of-two scale exp will build, about 10^315000
EXP_MAX_SCALE = 2 ** 20


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def fast_path(fn: Callable, *operands: Number, nonzero: bool = False) -> Optional[Number]:
    """Evaluate fn on the float64 images of operands; None when that is unusable."""
    args = []
    for x in operands:
        f = x.to_float()
        if f is None:
            logger.debug("fast path: operand %r does not narrow to float64", x)
            return None
        args.append(np.float64(f))
    with np.errstate(all="ignore"):
        result = float(fn(*args))
    if not math.isfinite(result) or (nonzero and result == 0.0):
        logger.debug("fast path: %s gave unusable %r", getattr(fn, "__name__", fn), result)
        return None
    return Number.from_float(result)


# ==============================================================================
# Square root
# ==============================================================================

def sqrt_iterations(precision: int) -> int:
    """ceil(log2(precision / 15)) + 2, clamped; each step roughly doubles the digits."""
    ratio = max(precision, 1) / 15
    return clamp(math.ceil(math.log2(ratio)) + 2, SQRT_ITERATIONS_MIN, SQRT_ITERATIONS_MAX)


def exact_sqrt(x: Number) -> Optional[Number]:
    """Return the root when x is a perfect square (integer or ratio of squares), else None."""
    n, d = x.numerator, x.denominator
    if d == 1 and n < EXACT_SQRT_LIMIT:
        root = int(math.sqrt(n))
        return Number(root) if root * root == n else None
    n_root, d_root = math.isqrt(n), math.isqrt(d)
    if n_root * n_root == n and d_root * d_root == d:
        return Number(Q(n_root, d_root))
    return None


def _sqrt_estimate(x: Number) -> Q:
    f = x.to_float()
    if f is not None and f > 0.0:
        root = math.sqrt(f)
        if root > 0.0:
            return Q(root)
    # sqrt(n/d) = sqrt(n*d)/d
    return Q(math.isqrt(x.numerator * x.denominator), x.denominator)


def newton_sqrt(x: Number, precision: int) -> Q:
    """Newton-Raphson x <- (x + v/x) / 2 from a float64 (or integer-root) estimate."""
    v = x.q
    digits = precision + GUARD_DIGITS
    r = _sqrt_estimate(x)
    iterations = sqrt_iterations(precision)
    logger.debug("sqrt: %d Newton iterations for precision %d", iterations, precision)
    for _ in range(iterations):
        r = round_to_digits((r + v / r) / 2, digits)
    return r


def sqrt(x: Number, precision: int = DEFAULT_PRECISION) -> Number:
    if x.is_negative():
        raise DomainError("square root of negative number")
    if x.is_zero():
        return Number(0)

    root = exact_sqrt(x)
    if root is not None:
        return root

    if precision <= FAST_PATH_DIGITS:
        result = fast_path(np.sqrt, x)
        if result is not None:
            return result

    return Number(newton_sqrt(x, precision))


# ==============================================================================
# Natural logarithm
# ==============================================================================

def ln_terms(precision: int) -> int:
    # |y| <= 1/3 gives a factor of at least 9 per term
    return clamp(math.ceil(precision * 1.05) + 2, LN_TERMS_MIN, LN_TERMS_MAX)


def reduce_by_two(v: Q):
    """Return (r, k) with v = r * 2^k and r in [1/2, 2]."""
    k = v.numerator.bit_length() - v.denominator.bit_length()
    r = v / 2 ** k if k >= 0 else v * 2 ** -k
    while r > 2:
        r /= 2
        k += 1
    while r < Q(1, 2):
        r *= 2
        k -= 1
    return r, k


def atanh_series(y: Q, terms: int, digits: int) -> Q:
    """y + y^3/3 + y^5/5 + ... over `terms` terms."""
    y2 = round_to_digits(y * y, digits)
    power = y
    total = y
    for i in range(1, terms):
        power = round_to_digits(power * y2, digits)
        total += power / (2 * i + 1)
    return total


def ln(x: Number, precision: int = DEFAULT_PRECISION) -> Number:
    if x.is_zero() or x.is_negative():
        raise DomainError("logarithm of non-positive number")

    if precision <= FAST_PATH_DIGITS:
        result = fast_path(np.log, x)
        if result is not None:
            return result

    digits = precision + GUARD_DIGITS
    r, k = reduce_by_two(x.q)
    y = round_to_digits((r - 1) / (r + 1), digits)
    terms = ln_terms(precision)
    logger.debug("ln: reduced by 2^%d, %d atanh terms", k, terms)

    # ln(x) = k*ln(2) + 2*atanh((r-1)/(r+1))
    value = k * LN2.q + 2 * atanh_series(y, terms, digits)
    return Number(round_to_digits(value, digits))


# ==============================================================================
# Exponential
# ==============================================================================

def exp_terms(precision: int) -> int:
    return clamp(precision, EXP_TERMS_MIN, EXP_TERMS_MAX)


def exp(x: Number, precision: int = DEFAULT_PRECISION) -> Number:
    if x.is_zero():
        return Number(1)

    if precision <= FAST_PATH_DIGITS:
        result = fast_path(np.exp, x, nonzero=True)
        if result is not None:
            return result

    digits = precision + GUARD_DIGITS
    ln2 = LN2.q
    k = round_half_away(x.q / ln2)
    if abs(k) > EXP_MAX_SCALE:
        raise Overflow(f"exp argument out of range: scale 2^{k} is beyond 2^{EXP_MAX_SCALE}")
    reduced = round_to_digits(x.q - k * ln2, digits)
    terms = exp_terms(precision)
    logger.debug("exp: k=%d, %d Taylor terms", k, terms)

    total = Q(1)
    term = Q(1)
    for i in range(1, terms):
        term = round_to_digits(term * reduced / i, digits)
        total += term

    # exact power of two: no rounding in the reconstruction
    scale = 2 ** abs(k)
    value = total * scale if k >= 0 else total / scale
    return Number(round_to_digits(value, digits))


# ==============================================================================
# Real power
# ==============================================================================

def pow_real(base: Number, exponent: Number, precision: int = DEFAULT_PRECISION) -> Number:
    """
    base^exponent over the reals.
      exponent 0           -> 1
      base 0               -> 0
      integer exponent     -> exact Number.pow
      negative base with a non-integer exponent -> DomainError
      otherwise            -> exp(exponent * ln(base))
    """
    if exponent.is_zero():
        return Number(1)
    if base.is_zero():
        return Number(0)

    if exponent.is_integer() and abs(exponent.numerator) <= POW_INT_LIMIT:
        return base.pow(exponent.numerator)

    if base.is_negative():
        if not exponent.is_integer():
            raise DomainError("negative base with non-integer exponent")
        # integer exponent too large to raise exactly
        magnitude = pow_real(base.abs(), exponent, precision)
        return magnitude.neg() if exponent.numerator % 2 else magnitude

    if precision <= FAST_PATH_DIGITS:
        result = fast_path(np.power, base, exponent, nonzero=True)
        if result is not None:
            return result

    log_base = ln(base, precision + GUARD_DIGITS)
    return exp(exponent.mul(log_base), precision)
