from dataclasses import dataclass
from math import ldexp
from typing import Optional


@dataclass(frozen=True)
class BinaryFormat:
    """An IEEE-754 binary interchange format, as far as narrowing needs it."""
    name: str
    significand_bits: int   # including the implicit leading 1
    min_exponent: int       # smallest normal exponent, unbiased
    max_exponent: int       # largest finite exponent, unbiased

    @property
    def max_finite(self) -> float:
        # (2 - 2^(1-p)) * 2^emax
        return (2.0 - ldexp(1.0, 1 - self.significand_bits)) * ldexp(1.0, self.max_exponent)

    @property
    def smallest_subnormal(self) -> float:
        return ldexp(1.0, self.min_exponent - self.significand_bits + 1)

    @property
    def max_scale_shift(self) -> int:
        """Largest |power of two| a significand-sized ratio can be scaled by and stay in range."""
        return self.max_exponent + 1


BINARY64 = BinaryFormat("binary64", 53, -1022, 1023)


def narrow_ratio(numerator: int, denominator: int, fmt: BinaryFormat = BINARY64) -> Optional[float]:
    """Best-effort conversion of numerator/denominator to a native double.

    Integers that fit the significand are converted directly. Wider ones are
    right-shifted to about ``fmt.significand_bits`` bits each, divided, and
    the quotient is rescaled by 2^(n_shift - d_shift). Returns None when the
    rescale would leave the format's exponent range or exceed its largest
    finite value.
    """
    if denominator == 0:
        return None
    if numerator == 0:
        return 0.0

    bits = fmt.significand_bits
    magnitude = abs(numerator)
    n_bits = magnitude.bit_length()
    d_bits = denominator.bit_length()

    if n_bits <= bits and d_bits <= bits:
        return float(numerator) / float(denominator)

    n_shift = max(0, n_bits - bits)
    d_shift = max(0, d_bits - bits)
    shift = n_shift - d_shift
    if abs(shift) > fmt.max_scale_shift:
        return None

    ratio = float(magnitude >> n_shift) / float(denominator >> d_shift)
    try:
        result = ldexp(ratio, shift)
    except OverflowError:
        return None
    if result > fmt.max_finite:
        return None
    return -result if numerator < 0 else result
