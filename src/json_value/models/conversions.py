"""Lossy coercions between a JSON value's tag and Python scalars."""

import math
from typing import Tuple

from ..types import JSONType
from ..utils.numbers import (
    INT64_MAX,
    INT64_MIN,
    format_float,
    format_int,
    parse_float_prefix,
    parse_int_prefix,
)
from ..utils.text import escape


class ConversionMixin:
    """
    Best-effort conversions layered on a tagged JSON value.

    Each family has a plain form returning the converted value and a
    ``_checked`` form returning ``(value, ok)``. Rules are tried in a fixed
    order and the first one matching the current tag wins; when none
    matches the zero value of the target type is returned with
    ``ok=False``.

    The host class provides ``_type``, ``_data`` and ``dump_minified()``.
    """

    def to_string(self) -> str:
        return self.to_string_checked()[0]

    def to_string_checked(self) -> Tuple[str, bool]:
        """String form with string payloads escaped."""
        if self._type is JSONType.STRING:
            return escape(self._data), True
        return self._text_checked()

    def to_unescaped_string(self) -> str:
        return self.to_unescaped_string_checked()[0]

    def to_unescaped_string_checked(self) -> Tuple[str, bool]:
        """String form with string payloads returned verbatim."""
        if self._type is JSONType.STRING:
            return self._data, True
        return self._text_checked()

    def _text_checked(self) -> Tuple[str, bool]:
        if self._type in (JSONType.OBJECT, JSONType.ARRAY):
            return self.dump_minified(), True
        if self._type is JSONType.BOOLEAN:
            return ("true" if self._data else "false"), True
        if self._type is JSONType.FLOATING:
            return format_float(self._data), True
        if self._type is JSONType.INTEGRAL:
            return format_int(self._data), True
        if self._type is JSONType.NULL:
            return "null", True
        return "", False

    def to_float(self) -> float:
        return self.to_float_checked()[0]

    def to_float_checked(self) -> Tuple[float, bool]:
        if self._type is JSONType.FLOATING:
            return self._data, True
        if self._type is JSONType.BOOLEAN:
            return (1.0 if self._data else 0.0), True
        if self._type is JSONType.INTEGRAL:
            return float(self._data), True
        if self._type is JSONType.STRING:
            return parse_float_prefix(self._data)
        return 0.0, False

    def to_int(self) -> int:
        return self.to_int_checked()[0]

    def to_int_checked(self) -> Tuple[int, bool]:
        if self._type is JSONType.INTEGRAL:
            return self._data, True
        if self._type is JSONType.BOOLEAN:
            return (1 if self._data else 0), True
        if self._type is JSONType.FLOATING:
            if not math.isfinite(self._data):
                return 0, False
            truncated = int(self._data)
            if not INT64_MIN <= truncated <= INT64_MAX:
                return 0, False
            return truncated, True
        if self._type is JSONType.STRING:
            return parse_int_prefix(self._data)
        return 0, False

    def to_bool(self) -> bool:
        return self.to_bool_checked()[0]

    def to_bool_checked(self) -> Tuple[bool, bool]:
        if self._type is JSONType.BOOLEAN:
            return self._data, True
        if self._type in (JSONType.INTEGRAL, JSONType.FLOATING):
            return self._data != 0, True
        if self._type is JSONType.STRING:
            if "true" in self._data:
                return True, True
            if "false" in self._data:
                return False, True
            parsed, ok = parse_int_prefix(self._data, bits=32)
            if ok:
                return parsed != 0, True
        return False, False
