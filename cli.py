import logging
import os
import sys
from typing import List, Optional

import constants
from arithmetic import Number
from display import as_decimal, as_exact_decimal, as_sigfigs
from errors import NumberError
from parsing import parse_number
from transcendental import DEFAULT_PRECISION, exp, ln, pow_real, sqrt
from trig import cos, sin, tan

USAGE = (
    "Usage: folio-numeric <operation> [<value>] [<argument>] [<precision>]\n"
    "  sqrt|ln|exp|sin|cos|tan <value> [<precision>]\n"
    "  pow <base> <exponent> [<precision>]\n"
    "  decimal <value> [<places>]\n"
    "  sigfigs <value> <figures>\n"
    "  exact|parse <value>\n"
    "  pi|e|phi [<precision>]"
)

UNARY = {"sqrt": sqrt, "ln": ln, "exp": exp, "sin": sin, "cos": cos, "tan": tan}
CONSTANTS = {"pi": constants.pi, "e": constants.e, "phi": constants.phi}


def default_precision() -> int:
    raw = os.environ.get("FOLIO_PRECISION")
    if raw is None:
        return DEFAULT_PRECISION
    try:
        return int(raw)
    except ValueError:
        print(f"Warning: ignoring non-integer FOLIO_PRECISION={raw!r}")
        return DEFAULT_PRECISION


def parse_count(text: str, what: str) -> int:
    try:
        return int(text)
    except ValueError:
        raise ValueError(f"<{what}> must be an integer, got {text!r}") from None


def run(op: str, args: List[str]) -> str:
    precision = default_precision()

    if op in CONSTANTS:
        if args:
            precision = parse_count(args[0], "precision")
        return str(CONSTANTS[op](precision))

    if not args:
        raise ValueError(f"'{op}' needs a value")
    x = parse_number(args[0])
    rest = args[1:]

    if op in UNARY:
        if rest:
            precision = parse_count(rest[0], "precision")
        return str(UNARY[op](x, precision))
    if op == "pow":
        if not rest:
            raise ValueError("'pow' needs an exponent")
        if len(rest) > 1:
            precision = parse_count(rest[1], "precision")
        return str(pow_real(x, parse_number(rest[0]), precision))
    if op == "decimal":
        places = parse_count(rest[0], "places") if rest else 10
        return as_decimal(x, places)
    if op == "sigfigs":
        if not rest:
            raise ValueError("'sigfigs' needs a figure count")
        return as_sigfigs(x, parse_count(rest[0], "figures"))
    if op == "exact":
        return as_exact_decimal(x)
    if op == "parse":
        return str(x)
    raise ValueError(f"unknown operation '{op}'")


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv if argv is None else argv
    level = logging.getLevelName(os.environ.get("FOLIO_LOG_LEVEL", "WARNING").upper())
    logging.basicConfig(level=level if isinstance(level, int) else logging.WARNING)

    if len(argv) < 2:
        print(USAGE)
        return 1

    try:
        print(run(argv[1], argv[2:]))
    except NumberError as e:
        print(f"Error [{e.code}]: {e}")
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        print(USAGE)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
