"""Pretty and minified JSON text emitters."""

import logging
import math
from typing import Dict, Optional

from .config import DEFAULT_INDENT, JSONConfig
from .models.json_value import JSONValue
from .types import JSONSerializerInterface, JSONType
from .utils.numbers import format_float, format_int
from .utils.text import quote


class JSONSerializer(JSONSerializerInterface):
    """
    Tree-walking writer for JSON values.

    ``dump`` produces an indented, human readable form: objects put one
    key per line indented by ``indent * depth``, arrays stay on one line
    with elements separated by ``", "``. ``dump_minified`` walks the tree
    the same way without any whitespace and is the canonical form used for
    string conversion and byte-for-byte comparison.

    Object keys are always written in ascending order.
    """

    def __init__(self, indent: Optional[str] = None,
                 config: Optional[JSONConfig] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the serializer.

        Args:
            indent: Indent unit; overrides ``config.indent`` when given
            config: Optional JSONConfig instance
            logger: Optional logger instance
        """
        self.config = config or JSONConfig()
        self.indent = indent if indent is not None else self.config.indent
        self.logger = logger or logging.getLogger(__name__)

    def dump(self, value: JSONValue, depth: int = 1) -> str:
        """
        Render ``value`` as indented JSON text.

        Args:
            value: Value to render
            depth: Nesting level of ``value``; keys of an object at this
                level are indented ``depth`` times

        Returns:
            JSON text
        """
        json_type = value.json_type()

        if json_type is JSONType.OBJECT:
            pad = self.indent * depth
            entries = [
                f"{pad}{quote(key)} : {self.dump(child, depth + 1)}"
                for key, child in value.object_range()
            ]
            return "{\n" + ",\n".join(entries) + "\n" + self.indent * (depth - 1) + "}"

        if json_type is JSONType.ARRAY:
            items = [self.dump(child, depth + 1) for child in value.array_range()]
            return "[" + ", ".join(items) + "]"

        return self._dump_scalar(value)

    def dump_minified(self, value: JSONValue) -> str:
        """Render ``value`` as JSON text without whitespace."""
        json_type = value.json_type()

        if json_type is JSONType.OBJECT:
            entries = [
                f"{quote(key)}:{self.dump_minified(child)}"
                for key, child in value.object_range()
            ]
            return "{" + ",".join(entries) + "}"

        if json_type is JSONType.ARRAY:
            return "[" + ",".join(self.dump_minified(child) for child in value.array_range()) + "]"

        return self._dump_scalar(value)

    def _dump_scalar(self, value: JSONValue) -> str:
        json_type = value.json_type()

        if json_type is JSONType.STRING:
            return quote(value.to_unescaped_string())
        if json_type is JSONType.INTEGRAL:
            return format_int(value.to_int())
        if json_type is JSONType.FLOATING:
            number = value.to_float()
            if not math.isfinite(number):
                self.logger.warning(f"Non-finite float {number!r} has no JSON form, writing null")
                return "null"
            return format_float(number)
        if json_type is JSONType.BOOLEAN:
            return "true" if value.to_bool() else "false"
        return "null"


_serializers: Dict[str, JSONSerializer] = {}


def get_serializer(indent: str = DEFAULT_INDENT) -> JSONSerializer:
    """Get the shared serializer for an indent unit."""
    serializer = _serializers.get(indent)
    if serializer is None:
        serializer = _serializers[indent] = JSONSerializer(indent=indent)
    return serializer


def dump(value: JSONValue, depth: int = 1, indent: str = DEFAULT_INDENT) -> str:
    return get_serializer(indent).dump(value, depth)


def dump_minified(value: JSONValue) -> str:
    return get_serializer().dump_minified(value)
