"""
JSON Value - tagged-union JSON documents with a hand-written parser.

Provides a mutable JSON value model with auto-vivifying accessors and
lossy conversions, a recursive-descent parser that reports failures
instead of raising, and pretty and minified serializers.
"""

from .codec import JSONCodec
from .config import JSONConfig
from .models import JSONValue, new_array, new_object
from .parser import JSONParser, parse
from .serializer import JSONSerializer, dump, dump_minified
from .types import (
    ErrorType,
    IndexOutOfRange,
    JSONError,
    JSONType,
    KeyNotFound,
    ParseDiagnostic,
    ParseResult,
)

__version__ = "1.0.0"
__all__ = [
    "JSONCodec",
    "JSONConfig",
    "JSONValue",
    "new_array",
    "new_object",
    "JSONParser",
    "parse",
    "JSONSerializer",
    "dump",
    "dump_minified",
    "ErrorType",
    "IndexOutOfRange",
    "JSONError",
    "JSONType",
    "KeyNotFound",
    "ParseDiagnostic",
    "ParseResult",
]
