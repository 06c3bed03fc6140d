import math

from arithmetic import Number

# Below this magnitude as_decimal switches to showing significant digits
SMALL_MAGNITUDE = 1e-6


def _fallback(x: Number) -> str:
    return f"{x.numerator}/{x.denominator}"


def as_decimal(x: Number, places: int = 10) -> str:
    """
    Fixed-point text with `places` decimals, rendered through float64.
    Non-zero values under 1e-6 get at least three significant digits instead
    of an all-zero string; values that do not narrow to a double render as "n/d".
    """
    f = x.to_float()
    if f is None:
        return _fallback(x)
    if f != 0.0 and abs(f) < SMALL_MAGNITUDE:
        exponent = math.floor(math.log10(abs(f)))
        return f"{f:.{-exponent + 2}f}"
    return f"{f:.{max(places, 0)}f}"


def as_sigfigs(x: Number, sigfigs: int) -> str:
    """
    Text with `sigfigs` significant figures. Base-10 exponents in [-3, 4] use
    plain notation, anything else "<mantissa>e<exponent>", e.g. "6.022e23".
    The exponent is taken after rounding, so 9.9996 at 4 figures is "10.00".
    """
    f = x.to_float()
    if f is None:
        return _fallback(x)
    if f == 0.0:
        return "0"

    sigfigs = max(sigfigs, 1)
    # the e-format rounds the mantissa and carries into the exponent
    mantissa, exponent_text = f"{f:.{sigfigs - 1}e}".split("e")
    exponent = int(exponent_text)

    if -3 <= exponent <= 4:
        if exponent >= 0:
            places = max(sigfigs - exponent - 1, 0)
        else:
            places = sigfigs + (-exponent - 1)
        return f"{f:.{places}f}"
    return f"{mantissa}e{exponent}"


def as_exact_decimal(x: Number, max_digits: int = 1000) -> str:
    """
    Exact decimal expansion without float rounding, e.g. "0.125", "0.(3)", "1.1(6)".
    The repeating block is wrapped in parentheses. Expansions that neither
    terminate nor repeat within `max_digits` digits end in "...".
    """
    if x.is_zero():
        return "0"

    sign = '-' if x.is_negative() else ''
    n = abs(x.numerator)
    d = x.denominator
    int_part, rem = divmod(n, d)
    if rem == 0:
        return f"{sign}{int_part}"

    # long division, remembering where each remainder first appeared
    digits = []
    seen = {}
    while rem and rem not in seen:
        if len(digits) >= max_digits:
            return f"{sign}{int_part}.{''.join(digits)}..."
        seen[rem] = len(digits)
        digit, rem = divmod(rem * 10, d)
        digits.append(str(digit))

    if not rem:
        return f"{sign}{int_part}.{''.join(digits)}"
    start = seen[rem]
    return f"{sign}{int_part}.{''.join(digits[:start])}({''.join(digits[start:])})"
