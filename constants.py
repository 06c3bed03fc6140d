"""Fixed-digit mathematical constants.

pi, e and ln 2 come from 100-decimal literals only; asking for more digits
than the literal carries just returns the whole literal. phi, sqrt2 and sqrt3
are computed with the square-root routine past the literal budget.
"""

import logging

from arithmetic import Q, Number
from errors import ParseError
from parsing import parse_number

logger = logging.getLogger(__name__)

# Decimal places carried by each literal below
LITERAL_DIGITS = 100

PI_DIGITS = (
    "3.14159265358979323846264338327950288419716939937510"
    "58209749445923078164062862089986280348253421170679"
)
E_DIGITS = (
    "2.71828182845904523536028747135266249775724709369995"
    "95749669676277240766303535475945713821785251664274"
)
PHI_DIGITS = (
    "1.61803398874989484820458683436563811772030917980576"
    "28621354486227052604628189024497072072041893911374"
)
LN2_DIGITS = (
    "0.69314718055994530941723212145817656807550013436025"
    "52541206800094933936219696947156058633269964186875"
)

# Safe defaults used only if a literal cannot be parsed
PI_FALLBACK = Q(355, 113)
E_FALLBACK = Q(19601, 7211)
PHI_FALLBACK = Q(161803, 100000)
LN2_FALLBACK = Q(6931471805599453, 10 ** 16)


def from_literal(digits: str, precision: int, fallback: Q, name: str = "constant") -> Number:
    """Parse `digits` truncated to `precision` decimal places (one integer digit assumed)."""
    end = max(precision, 0) + 2
    try:
        return parse_number(digits[:end])
    except ParseError:
        logger.warning("Malformed %s literal, using fallback %s", name, fallback)
        return Number(fallback)


def pi(precision: int = LITERAL_DIGITS) -> Number:
    return from_literal(PI_DIGITS, precision, PI_FALLBACK, "pi")


def e(precision: int = LITERAL_DIGITS) -> Number:
    return from_literal(E_DIGITS, precision, E_FALLBACK, "e")


def ln2(precision: int = LITERAL_DIGITS) -> Number:
    return from_literal(LN2_DIGITS, precision, LN2_FALLBACK, "ln2")


def phi(precision: int = LITERAL_DIGITS) -> Number:
    """Golden ratio. Literal up to LITERAL_DIGITS places, (1 + sqrt(5)) / 2 beyond."""
    if precision <= LITERAL_DIGITS:
        return from_literal(PHI_DIGITS, precision, PHI_FALLBACK, "phi")
    from transcendental import sqrt
    logger.debug("phi: computing (1 + sqrt(5)) / 2 at precision %d", precision)
    return (Number(1) + sqrt(Number(5), precision)) / 2


def sqrt2(precision: int = LITERAL_DIGITS) -> Number:
    from transcendental import sqrt
    return sqrt(Number(2), precision)


def sqrt3(precision: int = LITERAL_DIGITS) -> Number:
    from transcendental import sqrt
    return sqrt(Number(3), precision)


# Full-literal values shared by the series code
PI = pi(LITERAL_DIGITS)
LN2 = ln2(LITERAL_DIGITS)
