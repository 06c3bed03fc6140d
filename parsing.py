from arithmetic import Q, Number
from errors import DivisionByZero, ParseError


def _is_digits(s: str) -> bool:
    return s.isascii() and s.isdigit()


def _split_sign(token: str):
    if token[:1] in ("+", "-"):
        return token[0], token[1:]
    return "", token


def parse_integer(token: str, text: str) -> int:
    """Parse an optionally signed run of ASCII digits; anything else raises ParseError(text)."""
    sign, digits = _split_sign(token.strip())
    if not _is_digits(digits):
        raise ParseError(text)
    try:
        value = int(digits)
    except ValueError:
        # int() refuses digit strings beyond the interpreter's conversion limit
        raise ParseError(text) from None
    return -value if sign == "-" else value


def parse_fraction(s: str, text: str) -> Number:
    parts = s.split("/")
    if len(parts) != 2:
        raise ParseError(text)
    num = parse_integer(parts[0], text)
    den = parse_integer(parts[1], text)
    if den == 0:
        raise DivisionByZero(f"zero denominator in {text!r}")
    return Number(Q(num, den))


def parse_scientific(s: str, text: str) -> Number:
    parts = s.lower().split("e")
    if len(parts) != 2 or not parts[0]:
        raise ParseError(text)
    exponent = parse_integer(parts[1], text)
    try:
        mantissa = parse_number(parts[0])
    except ParseError:
        raise ParseError(text) from None
    scale = 10 ** abs(exponent)
    if exponent >= 0:
        return Number(mantissa.q * scale)
    return Number(mantissa.q / scale)


def parse_decimal(s: str, text: str) -> Number:
    parts = s.split(".")
    if len(parts) != 2:
        raise ParseError(text)
    sign, int_digits = _split_sign(parts[0])
    frac_digits = parts[1]
    if not int_digits and not frac_digits:
        raise ParseError(text)
    if int_digits and not _is_digits(int_digits):
        raise ParseError(text)
    if frac_digits and not _is_digits(frac_digits):
        raise ParseError(text)
    try:
        numerator = int(int_digits + frac_digits)
    except ValueError:
        raise ParseError(text) from None
    if sign == "-":
        numerator = -numerator
    return Number(Q(numerator, 10 ** len(frac_digits)))


def parse_number(text: str) -> Number:
    """
    Parse text into an exact Number. Formats are tried in this order:
      "a/b"      fraction (no '.')
      "1.5e10"   scientific notation, mantissa parsed recursively, exact power of ten
      "3.14"     decimal
      "-42"      integer
    Raises ParseError (carrying the original text) or DivisionByZero for "a/0".
    """
    if not isinstance(text, str):
        raise ParseError(repr(text))
    s = text.strip()
    if not s:
        raise ParseError(text)

    if "/" in s and "." not in s:
        return parse_fraction(s, text)
    if "e" in s or "E" in s:
        return parse_scientific(s, text)
    if "." in s:
        return parse_decimal(s, text)
    return Number(parse_integer(s, text))
