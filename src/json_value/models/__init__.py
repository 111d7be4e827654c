"""Data models for the JSON value library."""

from .conversions import ConversionMixin
from .json_value import JSONValue, new_array, new_object

__all__ = ["JSONValue", "ConversionMixin", "new_array", "new_object"]
