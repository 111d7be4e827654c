"""Core type definitions for the JSON value library."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple, Union


class JSONType(Enum):
    """Enumeration of the tags a JSON value can carry."""
    NULL = "null"
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    FLOATING = "floating"
    INTEGRAL = "integral"
    BOOLEAN = "boolean"


class ErrorType(Enum):
    """Enumeration of error types."""
    INPUT = "input"
    SYNTAX = "syntax"
    EOF = "eof"
    ESCAPE = "escape"
    NUMBER = "number"
    LITERAL = "literal"
    DEPTH = "depth"
    KEY = "key"
    INDEX = "index"
    FILESYSTEM = "filesystem"


@dataclass
class ParseDiagnostic:
    """A single problem found while reading JSON text."""
    type: ErrorType
    message: str
    offset: int
    line: int = 1
    column: int = 1

    def location(self) -> str:
        """Human readable position of the problem."""
        return f"line {self.line}, column {self.column}"

    def __str__(self) -> str:
        return f"{self.message} at {self.location()}"


@dataclass
class ParseResult:
    """Result of a parse operation.

    ``value`` is a best-effort partial result when ``ok`` is false and
    should be discarded by the caller in that case.
    """
    value: Any
    ok: bool
    errors: List[ParseDiagnostic] = field(default_factory=list)
    consumed: int = 0

    def as_tuple(self) -> Tuple[Any, bool]:
        return self.value, self.ok


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


class JSONError(Exception):
    """Base exception for the library."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.context = context

    def __str__(self) -> str:
        return self.message


class KeyNotFound(JSONError, KeyError):
    """Raised by read-only keyed access when the key is absent."""

    def __init__(self, key: str, context: Optional[Any] = None):
        super().__init__(f"Key not found: {key!r}", ErrorType.KEY, context)
        self.key = key


class IndexOutOfRange(JSONError, IndexError):
    """Raised by indexed access outside the bounds of an array."""

    def __init__(self, index: int, length: int, context: Optional[Any] = None):
        super().__init__(
            f"Index {index} out of range for array of length {max(length, 0)}",
            ErrorType.INDEX,
            context
        )
        self.index = index
        self.length = length


# Abstract base classes for interfaces

class JSONParserInterface(ABC):
    """Abstract interface for JSON text readers."""

    @abstractmethod
    def parse(self, text: Union[str, bytes]) -> ParseResult:
        """Parse JSON text into a value tree."""
        pass


class JSONSerializerInterface(ABC):
    """Abstract interface for JSON text writers."""

    @abstractmethod
    def dump(self, value: Any, depth: int = 1) -> str:
        """Render a value tree as indented JSON text."""
        pass

    @abstractmethod
    def dump_minified(self, value: Any) -> str:
        """Render a value tree as JSON text without whitespace."""
        pass
