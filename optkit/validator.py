import re
import decimal

from decimal import Decimal
from typing import Callable

from . import const

# --- Grammars --------------------------------------------------------------- #

SIGNED_PATTERN = re.compile(r"[+-]?(0|[1-9][0-9]{0,18})")
UNSIGNED_PATTERN = re.compile(r"\+?(0|[1-9][0-9]{0,19})")
REAL_PATTERN = re.compile(r"[+-]?(0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]{1,4})?")
DOUBLE_PATTERN = re.compile(r"[+-]?(0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]{1,3})?")
BOOLEAN_PATTERN = re.compile(r"true|false", re.IGNORECASE | re.ASCII)

# Same precision and exponent range as an 80-bit extended long double.
REAL_CONTEXT = decimal.Context(
    prec=19,
    Emax=4932,
    Emin=-4931,
    traps=[decimal.Overflow, decimal.Underflow, decimal.InvalidOperation],
)


# --- Parsers ---------------------------------------------------------------- #


def parseSigned(s: str) -> int:
    value = int(s)
    if value < const.INT64_MIN or value > const.INT64_MAX:
        raise OverflowError(f"'{s}' does not fit in a signed 64-bit integer")
    return value


def parseUnsigned(s: str) -> int:
    value = int(s)
    if value < 0 or value > const.UINT64_MAX:
        raise OverflowError(f"'{s}' does not fit in an unsigned 64-bit integer")
    return value


def parseReal(s: str) -> Decimal:
    """
    Parse an extended precision real.

    Raises:
        decimal.Overflow: The magnitude is too large.
        decimal.Underflow: A non-zero value rounds to zero.
        decimal.InvalidOperation: The string is not a number.
    """
    return REAL_CONTEXT.create_decimal(s)


def parseDouble(s: str) -> float:
    value = float(s)
    if value in (float("inf"), float("-inf")):
        raise OverflowError(f"'{s}' overflows a double")
    if value == 0.0 and Decimal(s) != 0:
        raise OverflowError(f"'{s}' underflows a double")
    return value


# --- Validators ------------------------------------------------------------- #


def _validate(s: str, pattern: re.Pattern, parse: Callable[[str], object]) -> bool:
    if pattern.fullmatch(s) is None:
        return False
    try:
        parse(s)
    except (ValueError, ArithmeticError):
        return False
    return True


def isValidSigned(s: str) -> bool:
    """Check that `s` is a decimal literal of a signed 64-bit integer."""
    return _validate(s, SIGNED_PATTERN, parseSigned)


def isValidUnsigned(s: str) -> bool:
    """Check that `s` is a decimal literal of an unsigned 64-bit integer, `-` is never allowed."""
    return _validate(s, UNSIGNED_PATTERN, parseUnsigned)


def isValidReal(s: str) -> bool:
    return _validate(s, REAL_PATTERN, parseReal)


def isValidDouble(s: str) -> bool:
    return _validate(s, DOUBLE_PATTERN, parseDouble)


def isValidBoolean(s: str) -> bool:
    """Case-insensitive `true` or `false`, without surrounding whitespace."""
    return BOOLEAN_PATTERN.fullmatch(s) is not None
