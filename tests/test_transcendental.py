"""
Tests for sqrt, ln, exp and pow_real.

Inverse pairs are checked within a tolerance scaled to the requested precision.
"""

import math

import pytest

import constants
from arithmetic import Q, Number
from errors import DomainError, Overflow
from parsing import parse_number
from transcendental import (
    exact_sqrt,
    exp,
    exp_terms,
    fast_path,
    ln,
    ln_terms,
    pow_real,
    reduce_by_two,
    sqrt,
    sqrt_iterations,
)

LN10_50 = parse_number("2.30258509299404568401799145468436420760110148862877")


def close(a: Number, b: Number, tol: Q) -> bool:
    return abs(a.q - b.q) <= tol


class TestIterationCounts:
    """Iteration/term counts grow with precision inside fixed clamps"""

    def test_sqrt_iterations(self) -> None:
        assert sqrt_iterations(15) == 3
        assert sqrt_iterations(50) == 4
        assert sqrt_iterations(10 ** 6) == 10
        assert sqrt_iterations(0) == 3

    def test_ln_terms(self) -> None:
        assert ln_terms(1) == 10
        assert ln_terms(30) == 34
        assert ln_terms(10 ** 4) == 60

    def test_exp_terms(self) -> None:
        assert exp_terms(1) == 15
        assert exp_terms(50) == 50
        assert exp_terms(500) == 80


class TestFastPath:
    """float64 shortcut"""

    def test_returns_exact_number_of_double(self) -> None:
        import numpy as np
        result = fast_path(np.sqrt, Number(2))
        assert isinstance(result, Number)
        assert result == Number.from_float(math.sqrt(2))

    def test_non_finite_is_unusable(self) -> None:
        import numpy as np
        assert fast_path(np.exp, Number(1000)) is None

    def test_zero_is_unusable_when_flagged(self) -> None:
        import numpy as np
        assert fast_path(np.exp, Number(-1000), nonzero=True) is None

    def test_operand_too_large(self) -> None:
        import numpy as np
        assert fast_path(np.log, Number(2 ** 2000)) is None


class TestSqrt:
    """Square root"""

    def test_perfect_square_is_exact(self) -> None:
        assert sqrt(Number(16), 50) == 4
        assert sqrt(Number(16), 5) == 4

    def test_ratio_of_squares_is_exact(self) -> None:
        assert sqrt(Number.from_ratio(9, 4), 50) == Number(Q(3, 2))
        assert exact_sqrt(Number(10 ** 40)) == 10 ** 20
        assert exact_sqrt(Number(2)) is None

    def test_zero(self) -> None:
        assert sqrt(Number(0), 50).is_zero()

    def test_negative(self) -> None:
        with pytest.raises(DomainError):
            sqrt(Number(-1), 50)

    def test_fast_path(self) -> None:
        assert sqrt(Number(2), 10) == Number.from_float(math.sqrt(2))

    @pytest.mark.parametrize("precision", [20, 50, 100])
    def test_square_recovers_value(self, precision: int) -> None:
        r = sqrt(Number(2), precision)
        assert abs(r.q * r.q - 2) < Q(1, 10 ** (precision - 2))

    def test_fraction_input(self) -> None:
        r = sqrt(Number.from_ratio(1, 3), 40)
        assert abs(r.q * r.q - Q(1, 3)) < Q(1, 10 ** 38)

    def test_huge_non_square(self) -> None:
        x = Number(10 ** 400 + 1)
        r = sqrt(x, 50)
        assert abs(r.q * r.q - x.q) / x.q < Q(1, 10 ** 45)

    def test_tiny_value(self) -> None:
        x = Number.from_ratio(2, 10 ** 401)
        r = sqrt(x, 30)
        assert abs(r.q * r.q - x.q) / x.q < Q(1, 10 ** 25)


class TestLn:
    """Natural logarithm"""

    def test_domain(self) -> None:
        with pytest.raises(DomainError):
            ln(Number(0), 50)
        with pytest.raises(DomainError):
            ln(Number(-2), 50)

    def test_one(self) -> None:
        assert ln(Number(1), 50).is_zero()
        assert ln(Number(1), 10).is_zero()

    def test_e_constant(self) -> None:
        result = ln(constants.e(50), 50)
        assert close(result, Number(1), Q(1, 10 ** 10))
        assert close(result, Number(1), Q(1, 10 ** 45))

    def test_two(self) -> None:
        assert close(ln(Number(2), 60), constants.LN2, Q(1, 10 ** 58))

    def test_ten(self) -> None:
        assert close(ln(Number(10), 50), LN10_50, Q(1, 10 ** 45))

    def test_small_argument(self) -> None:
        assert close(ln(Number.from_ratio(1, 10), 50), -LN10_50, Q(1, 10 ** 45))

    def test_fast_path(self) -> None:
        assert math.isclose(float(ln(Number(10), 10)), math.log(10), rel_tol=1e-15)

    def test_reduce_by_two(self) -> None:
        for v in (Q(1, 1000), Q(3), Q(2 ** 100 + 1), Q(1, 2), Q(2)):
            r, k = reduce_by_two(v)
            assert Q(1, 2) <= r <= 2
            assert r * Q(2) ** k == v


class TestExp:
    """Exponential"""

    def test_zero(self) -> None:
        assert exp(Number(0), 50) == 1

    def test_one(self) -> None:
        assert close(exp(Number(1), 50), constants.e(60), Q(1, 10 ** 45))

    def test_negative(self) -> None:
        product = exp(Number(-1), 30).q * constants.e(60).q
        assert abs(product - 1) < Q(1, 10 ** 28)

    def test_fast_path(self) -> None:
        assert math.isclose(float(exp(Number(1), 10)), math.e, rel_tol=1e-15)

    def test_overflowing_double_falls_back(self) -> None:
        result = exp(Number(1000), 10)
        assert result.to_float() is None
        assert close(ln(result, 30), Number(1000), Q(1, 10 ** 8))

    def test_underflowing_double_falls_back(self) -> None:
        result = exp(Number(-1000), 10)
        assert result > 0
        assert close(ln(result, 30), Number(-1000), Q(1, 10 ** 8))

    @pytest.mark.parametrize("precision", [10, 20])
    def test_out_of_range_argument(self, precision: int) -> None:
        with pytest.raises(Overflow):
            exp(Number(10 ** 20), precision)
        with pytest.raises(Overflow):
            exp(Number(-(10 ** 20)), precision)

    def test_large_argument_within_scale(self) -> None:
        result = exp(Number(700000), 20)
        assert result.to_float() is None
        assert result > 1


class TestInversePairs:
    """ln/exp round trips within precision-scaled tolerance"""

    @pytest.mark.parametrize("text", ["0.5", "2", "10", "1/3", "-3.25"])
    def test_ln_of_exp(self, text: str) -> None:
        x = parse_number(text)
        assert close(ln(exp(x, 30), 30), x, Q(1, 10 ** 25))

    @pytest.mark.parametrize("text", ["0.5", "2", "10", "1/3", "12345.678"])
    def test_exp_of_ln(self, text: str) -> None:
        x = parse_number(text)
        result = exp(ln(x, 30), 30)
        assert abs(result.q - x.q) / x.q < Q(1, 10 ** 25)


class TestPowReal:
    """Real-valued power"""

    def test_zero_exponent(self) -> None:
        assert pow_real(Number(7), Number(0), 30) == 1
        assert pow_real(Number(0), Number(0), 30) == 1

    def test_zero_base(self) -> None:
        assert pow_real(Number(0), parse_number("2.5"), 30) == 0

    @pytest.mark.parametrize("base, n", [("3/2", 5), ("-2", 3), ("7", -2), ("0.1", 4)])
    def test_integer_exponent_matches_pow(self, base: str, n: int) -> None:
        x = parse_number(base)
        assert pow_real(x, Number(n), 30) == x.pow(n)

    def test_negative_base_fractional_exponent(self) -> None:
        with pytest.raises(DomainError):
            pow_real(Number(-8), Number.from_ratio(1, 3), 30)

    def test_negative_base_huge_integer_exponent(self) -> None:
        assert pow_real(Number(-1), Number(2 ** 40 + 1), 20) == -1
        assert pow_real(Number(-1), Number(2 ** 40), 20) == 1

    def test_square_root_via_power(self) -> None:
        result = pow_real(Number(2), parse_number("0.5"), 40)
        assert close(result, sqrt(Number(2), 50), Q(1, 10 ** 35))

    def test_fast_path(self) -> None:
        result = pow_real(Number(2), parse_number("0.5"), 10)
        assert math.isclose(float(result), math.sqrt(2), rel_tol=1e-15)

    def test_out_of_range_result(self) -> None:
        with pytest.raises(Overflow):
            pow_real(Number(10), Number(Q(2 * 10 ** 20 + 1, 2)), 10)
