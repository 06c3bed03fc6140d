"""Failure kinds raised by the numeric core.

The evaluator layer maps these onto its own error type through ``code``.
"""

PARSE_ERROR = "PARSE_ERROR"
DIV_ZERO = "DIV_ZERO"
DOMAIN_ERROR = "DOMAIN_ERROR"
OVERFLOW = "OVERFLOW"


class NumberError(ValueError):
    code = "NUMBER_ERROR"


class ParseError(NumberError):
    code = PARSE_ERROR

    def __init__(self, text: str):
        super().__init__(f"Invalid number format: {text!r}")
        self.text = text


class DivisionByZero(NumberError, ZeroDivisionError):
    code = DIV_ZERO

    def __init__(self, message: str = "Division by zero"):
        super().__init__(message)


class DomainError(NumberError):
    code = DOMAIN_ERROR

    def __init__(self, reason: str):
        super().__init__(f"Domain error: {reason}")
        self.reason = reason


class Overflow(NumberError, ArithmeticError):
    # Raised by float(Number) when it cannot narrow and by exp when its power-of-two scale is out of range.
    code = OVERFLOW

    def __init__(self, message: str = "Overflow: result too large"):
        super().__init__(message)
