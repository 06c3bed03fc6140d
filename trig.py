import logging
from typing import Callable

import numpy as np

from arithmetic import Q, Number, round_half_away, round_to_digits
from constants import PI
from errors import DomainError
from transcendental import DEFAULT_PRECISION, FAST_PATH_DIGITS, GUARD_DIGITS, clamp, fast_path

logger = logging.getLogger(__name__)

TRIG_TERMS_MIN, TRIG_TERMS_MAX = 12, 60


def trig_terms(precision: int) -> int:
    """Series length: at least 12 terms, growing with precision."""
    return clamp(precision // 2 + TRIG_TERMS_MIN, TRIG_TERMS_MIN, TRIG_TERMS_MAX)


def reduce_angle(v: Q) -> Q:
    """Shift v by a multiple of 2*pi into [-pi, pi]."""
    pi = PI.q
    if -pi <= v <= pi:
        return v
    two_pi = 2 * pi
    k = round_half_away(v / two_pi)
    logger.debug("trig: reducing argument by %d turns", k)
    return v - k * two_pi


def sin_series(x: Q, terms: int, digits: int) -> Q:
    x2 = round_to_digits(x * x, digits)
    term = x
    total = x
    for k in range(1, terms):
        term = round_to_digits(-term * x2 / ((2 * k) * (2 * k + 1)), digits)
        total += term
    return total


def cos_series(x: Q, terms: int, digits: int) -> Q:
    x2 = round_to_digits(x * x, digits)
    term = Q(1)
    total = Q(1)
    for k in range(1, terms):
        term = round_to_digits(-term * x2 / ((2 * k - 1) * (2 * k)), digits)
        total += term
    return total


def _evaluate(x: Number, precision: int, native: Callable, series: Callable) -> Number:
    if precision <= FAST_PATH_DIGITS:
        result = fast_path(native, x)
        if result is not None:
            return result
    digits = precision + GUARD_DIGITS
    reduced = round_to_digits(reduce_angle(x.q), digits)
    value = series(reduced, trig_terms(precision), digits)
    return Number(round_to_digits(value, digits))


def sin(x: Number, precision: int = DEFAULT_PRECISION) -> Number:
    if x.is_zero():
        return Number(0)
    return _evaluate(x, precision, np.sin, sin_series)


def cos(x: Number, precision: int = DEFAULT_PRECISION) -> Number:
    if x.is_zero():
        return Number(1)
    return _evaluate(x, precision, np.cos, cos_series)


def tan(x: Number, precision: int = DEFAULT_PRECISION) -> Number:
    """sin(x) / cos(x); DomainError when the computed cosine is exactly zero."""
    c = cos(x, precision)
    if c.is_zero():
        raise DomainError("tan undefined at odd multiples of pi/2")
    s = sin(x, precision)
    return Number(round_to_digits(s.checked_div(c).q, precision + GUARD_DIGITS))
