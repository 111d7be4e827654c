"""Utility functions for the JSON value library."""

from .text import escape, quote
from .numbers import (
    INT64_MIN,
    INT64_MAX,
    format_float,
    format_int,
    parse_float_prefix,
    parse_int_prefix,
)

__all__ = [
    "escape",
    "quote",
    "INT64_MIN",
    "INT64_MAX",
    "format_float",
    "format_int",
    "parse_float_prefix",
    "parse_int_prefix",
]
