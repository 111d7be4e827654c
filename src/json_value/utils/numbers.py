"""Numeric text helpers used by conversions and the serializer."""

import math
import re
from typing import Tuple

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Leading float prefix: optional whitespace and sign, decimal mantissa with
# optional exponent, or an infinity / nan literal.
_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|(inf(?:inity)?|nan))",
    re.IGNORECASE
)
# Leading integer prefix: no whitespace and no plus sign.
_INT_PREFIX = re.compile(r"-?\d+")


def format_int(value: int) -> str:
    return str(value)


def format_float(value: float) -> str:
    """
    Shortest text that reads back as the same float.

    Finite results always contain a ``.`` or an exponent, so they parse
    back as floating values rather than integers.
    """
    return repr(float(value))


def parse_float_prefix(text: str) -> Tuple[float, bool]:
    """
    Parse a float from the leading part of ``text``.

    Args:
        text: Text to read

    Returns:
        Tuple of (value, ok); ``(0.0, False)`` when there is no numeric
        prefix or the number overflows.
    """
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return 0.0, False

    value = float(match.group(0))
    if math.isinf(value) and not match.group(1):
        return 0.0, False

    return value, True


def parse_int_prefix(text: str, bits: int = 64) -> Tuple[int, bool]:
    """
    Parse a signed integer from the leading part of ``text``.

    Args:
        text: Text to read
        bits: Width of the signed integer range the result must fit in

    Returns:
        Tuple of (value, ok); ``(0, False)`` when there is no integer prefix
        or it does not fit in the range.
    """
    match = _INT_PREFIX.match(text)
    if not match:
        return 0, False

    literal = match.group(0)
    digits = literal.lstrip("-").lstrip("0")
    if len(digits) > bits:
        return 0, False

    value = int(digits or "0")
    if literal.startswith("-"):
        value = -value
    limit = 2 ** (bits - 1)
    if not -limit <= value < limit:
        return 0, False

    return value, True
