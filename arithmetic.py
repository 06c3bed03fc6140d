from __future__ import annotations
import math
from fractions import Fraction
from typing import Optional, Union

from errors import DivisionByZero, Overflow
from formats import BINARY64, narrow_ratio

Q = Fraction  # rational type alias

Operand = Union["Number", int, Fraction]

# log10(2), used to estimate decimal magnitude from bit lengths
_LOG10_2 = 0.30102999566398120


def _terminating_places(d: int) -> Optional[int]:
    """Decimal places needed to write 1/d exactly, or None if the expansion repeats."""
    twos = fives = 0
    while d % 2 == 0:
        d //= 2
        twos += 1
    while d % 5 == 0:
        d //= 5
        fives += 1
    if d != 1:
        return None
    return max(twos, fives)


def qstr(q: Fraction) -> str:
    """
    Canonical text of a rational.
    - If the decimal expansion terminates, returns all digits, e.g. "-12.375".
    - Otherwise returns the reduced fraction, e.g. "1/3".
    Both forms are accepted by parsing.parse_number.
    """
    if q == 0:
        return "0"

    sign = '-' if q < 0 else ''
    n = abs(q.numerator)
    d = q.denominator

    places = _terminating_places(d)
    if places is None:
        return f"{sign}{n}/{d}"

    int_part, rem = divmod(n, d)
    if rem == 0:
        return f"{sign}{int_part}"
    frac = rem * 10 ** places // d
    return f"{sign}{int_part}.{frac:0{places}d}"


def decimal_magnitude(q: Fraction) -> int:
    """Approximate floor(log10(|q|)) from bit lengths; off by at most one."""
    n = abs(q.numerator)
    return math.floor((n.bit_length() - q.denominator.bit_length()) * _LOG10_2)


def round_to_digits(q: Fraction, digits: int) -> Fraction:
    """
    Round q to roughly `digits` significant decimal digits (half-to-even).
    Keeps the numerator and denominator of long iterative chains bounded.
    """
    if q == 0 or digits <= 0:
        return q
    places = digits - decimal_magnitude(q)
    if places >= 0:
        scale = 10 ** places
        return Q(round(q * scale), scale)
    scale = 10 ** -places
    return Q(round(q / scale) * scale)


def truncate_to_places(q: Fraction, places: int) -> Fraction:
    """Truncate q towards zero onto the 10^-places grid."""
    scale = 10 ** places
    return Q(math.trunc(q * scale), scale)


def round_half_away(q: Fraction) -> int:
    """Nearest integer, ties rounded away from zero."""
    if q >= 0:
        return math.floor(q + Q(1, 2))
    return -math.floor(-q + Q(1, 2))


def _coerce(value) -> Optional[Fraction]:
    if isinstance(value, Number):
        return value.q
    if isinstance(value, (int, Fraction)):
        return Q(value)
    return None


class Number:
    """
    Immutable exact rational: an arbitrary-precision numerator over a positive
    denominator, always kept in lowest terms.

    Equality, hashing and ordering are exact and interoperate with int and
    Fraction operands.
    """

    __slots__ = ("_q",)

    def __init__(self, value: Operand = 0):
        q = _coerce(value)
        if q is None:
            raise TypeError(f"cannot build a Number from {type(value).__name__}")
        object.__setattr__(self, "_q", q)

    def __setattr__(self, name, value):
        raise AttributeError("Number is immutable")

    def __delattr__(self, name):
        raise AttributeError("Number is immutable")

    def __reduce__(self):
        return (Number, (self._q,))

    # ---- construction ----

    @classmethod
    def from_int(cls, n: int) -> Number:
        return cls(Q(n))

    @classmethod
    def from_ratio(cls, numerator: int, denominator: int) -> Number:
        if denominator == 0:
            raise DivisionByZero(f"zero denominator in {numerator}/{denominator}")
        return cls(Q(numerator, denominator))

    @classmethod
    def from_float(cls, f: float) -> Number:
        """Exact value of the shortest decimal text of f; NaN and infinities become zero."""
        if not math.isfinite(f):
            return cls(0)
        from parsing import parse_number
        return parse_number(repr(float(f)))

    @classmethod
    def from_str(cls, text: str) -> Number:
        from parsing import parse_number
        return parse_number(text)

    # ---- representation ----

    @property
    def q(self) -> Fraction:
        return self._q

    @property
    def numerator(self) -> int:
        return self._q.numerator

    @property
    def denominator(self) -> int:
        return self._q.denominator

    # ---- predicates ----

    def is_zero(self) -> bool:
        return self._q.numerator == 0

    def is_negative(self) -> bool:
        return self._q.numerator < 0

    def is_integer(self) -> bool:
        return self._q.denominator == 1

    # ---- exact arithmetic ----

    @staticmethod
    def _operand(other) -> Fraction:
        q = _coerce(other)
        if q is None:
            raise TypeError(f"unsupported operand type: {type(other).__name__}")
        return q

    def add(self, other: Operand) -> Number:
        return Number(self._q + self._operand(other))

    def sub(self, other: Operand) -> Number:
        return Number(self._q - self._operand(other))

    def mul(self, other: Operand) -> Number:
        return Number(self._q * self._operand(other))

    def checked_div(self, other: Operand) -> Number:
        divisor = self._operand(other)
        if divisor == 0:
            raise DivisionByZero()
        return Number(self._q / divisor)

    def neg(self) -> Number:
        return Number(-self._q)

    def abs(self) -> Number:
        return Number(abs(self._q))

    def floor(self) -> Number:
        return Number(math.floor(self._q))

    def ceil(self) -> Number:
        return Number(math.ceil(self._q))

    def pow(self, exponent: int) -> Number:
        if exponent == 0:
            return Number(1)
        if exponent < 0 and self.is_zero():
            raise DivisionByZero("zero raised to a negative power")
        return Number(self._q ** exponent)

    # ---- conversion ----

    def to_int(self) -> Optional[int]:
        if not self.is_integer():
            return None
        return self._q.numerator

    def to_float(self) -> Optional[float]:
        return narrow_ratio(self._q.numerator, self._q.denominator, BINARY64)

    def __float__(self) -> float:
        f = self.to_float()
        if f is None:
            raise Overflow(f"{self!r} does not fit in a {BINARY64.name} float")
        return f

    def __int__(self) -> int:
        return math.trunc(self._q)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __str__(self) -> str:
        return qstr(self._q)

    def __repr__(self) -> str:
        return f"Number('{qstr(self._q)}')"

    # ---- operators ----

    def __eq__(self, other) -> bool:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self._q == o

    def __hash__(self) -> int:
        return hash(self._q)

    def __lt__(self, other) -> bool:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self._q < o

    def __le__(self, other) -> bool:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self._q <= o

    def __gt__(self, other) -> bool:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self._q > o

    def __ge__(self, other) -> bool:
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self._q >= o

    def __add__(self, other):
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return Number(self._q + o)

    __radd__ = __add__

    def __sub__(self, other):
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return Number(self._q - o)

    def __rsub__(self, other):
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return Number(o - self._q)

    def __mul__(self, other):
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return Number(self._q * o)

    __rmul__ = __mul__

    def __truediv__(self, other):
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return self.checked_div(Number(o))

    def __rtruediv__(self, other):
        o = _coerce(other)
        if o is None:
            return NotImplemented
        return Number(o).checked_div(self)

    def __pow__(self, exponent):
        if not isinstance(exponent, int):
            return NotImplemented
        return self.pow(exponent)

    def __neg__(self) -> Number:
        return self.neg()

    def __abs__(self) -> Number:
        return self.abs()

    def __floor__(self) -> int:
        return math.floor(self._q)

    def __ceil__(self) -> int:
        return math.ceil(self._q)
