"""Tagged-union JSON document node."""

import numbers
from typing import Any, Dict, Iterator, List, Tuple, Union

from ..config import DEFAULT_INDENT
from ..types import IndexOutOfRange, JSONType, KeyNotFound
from ..utils.numbers import INT64_MAX, INT64_MIN
from .conversions import ConversionMixin

Key = Union[str, int]


class JSONValue(ConversionMixin):
    """
    A single JSON document node.

    Exactly one tag is active at any time and the payload always matches
    it. String, array and object payloads are owned by the node holding
    them: anything stored into a container is deep-copied first, so a
    tree never shares nodes and can never contain itself.

    Mutable access through ``value[key]`` and ``value[index]`` coerces the
    node to an object or array and creates missing slots; read-only access
    through ``at()`` never changes the tree and raises instead.
    """

    __hash__ = None

    def __init__(self, value: Any = None):
        """
        Initialize a value from a Python literal or another JSON value.

        Args:
            value: None, bool, integer, float, str, list/tuple, dict or
                JSONValue (deep-copied)

        Raises:
            TypeError: If the value has no JSON representation
            OverflowError: If an integer does not fit in 64 bits
        """
        self._type, self._data = _convert(value)

    @classmethod
    def make(cls, json_type: JSONType) -> 'JSONValue':
        """Create an empty value carrying the given tag."""
        value = cls()
        value._set_type(json_type)
        return value

    @classmethod
    def from_pairs(cls, *items: Any) -> 'JSONValue':
        """
        Build an object from alternating keys and values.

        Keys are converted with ``JSONValue(key).to_string()``, so any
        literal can be used as a key. Later duplicates overwrite earlier
        ones.
        """
        if len(items) % 2:
            raise ValueError("from_pairs expects an even number of arguments")

        result = cls.make(JSONType.OBJECT)
        for i in range(0, len(items), 2):
            result[cls(items[i]).to_string()] = items[i + 1]
        return result

    @classmethod
    def from_python(cls, data: Any) -> 'JSONValue':
        return cls(data)

    @classmethod
    def load(cls, text: Union[str, bytes]) -> 'JSONValue':
        """Parse JSON text, returning the best-effort value."""
        return cls.load_checked(text)[0]

    @classmethod
    def load_checked(cls, text: Union[str, bytes]) -> Tuple['JSONValue', bool]:
        """Parse JSON text, returning ``(value, ok)``."""
        from ..parser import parse
        return parse(text)

    # Copy and move

    def copy(self) -> 'JSONValue':
        """Deep copy of this value."""
        return JSONValue(self)

    def __copy__(self) -> 'JSONValue':
        return self.copy()

    def __deepcopy__(self, memo: Dict[int, Any]) -> 'JSONValue':
        return self.copy()

    def take(self) -> 'JSONValue':
        """Move the payload into a new value and reset this one to null."""
        moved = JSONValue()
        moved._type, moved._data = self._type, self._data
        self._type, self._data = JSONType.NULL, None
        return moved

    def _adopt(self, other: 'JSONValue') -> 'JSONValue':
        """
        Take over a freshly built value's payload without copying.

        Package-internal: ``other`` must not be an ancestor of this node.
        """
        self._type, self._data = other._type, other._data
        other._type, other._data = JSONType.NULL, None
        return self

    def set(self, value: Any) -> 'JSONValue':
        """Replace this value's tag and payload with a copy of ``value``."""
        self._type, self._data = _convert(value)
        return self

    # Mutable access

    def __getitem__(self, key: Key) -> 'JSONValue':
        if isinstance(key, str):
            self._set_type(JSONType.OBJECT)
            slot = self._data.get(key)
            if slot is None:
                slot = self._data[key] = JSONValue()
            return slot

        index = self._check_index(key)
        self._set_type(JSONType.ARRAY)
        missing = index + 1 - len(self._data)
        if missing > 0:
            self._data.extend(JSONValue() for _ in range(missing))
        return self._data[index]

    def __setitem__(self, key: Key, value: Any) -> None:
        # Convert first: ``value`` may be this node or one of its children.
        json_type, data = _convert(value)
        slot = self[key]
        slot._type, slot._data = json_type, data

    def append(self, *items: Any) -> 'JSONValue':
        """
        Append items, converting this value to an array first.

        Existing elements are kept when the value already is an array;
        any other payload is discarded.
        """
        converted = [JSONValue(item) for item in items]
        self._set_type(JSONType.ARRAY)
        self._data.extend(converted)
        return self

    # Read-only access

    def at(self, key: Key) -> 'JSONValue':
        """
        Look up a key or index without changing the tree.

        Raises:
            KeyNotFound: If this is not an object or the key is absent
            IndexOutOfRange: If this is not an array or the index is out
                of bounds
        """
        if isinstance(key, str):
            if self._type is not JSONType.OBJECT or key not in self._data:
                raise KeyNotFound(key)
            return self._data[key]

        index = self._check_index(key)
        if self._type is not JSONType.ARRAY or index >= len(self._data):
            raise IndexOutOfRange(index, self.length())
        return self._data[index]

    def has_key(self, key: str) -> bool:
        if self._type is JSONType.OBJECT:
            return key in self._data
        return False

    def __contains__(self, key: str) -> bool:
        return self.has_key(key)

    def object_range(self) -> Iterator[Tuple[str, 'JSONValue']]:
        """Yield ``(key, value)`` pairs in ascending key order."""
        if self._type is JSONType.OBJECT:
            for key in sorted(self._data):
                yield key, self._data[key]

    def array_range(self) -> Iterator['JSONValue']:
        """Yield array elements in index order."""
        if self._type is JSONType.ARRAY:
            yield from list(self._data)

    def __iter__(self) -> Iterator[Any]:
        if self._type is JSONType.OBJECT:
            return iter(sorted(self._data))
        return self.array_range()

    # Introspection

    def json_type(self) -> JSONType:
        return self._type

    def is_null(self) -> bool:
        return self._type is JSONType.NULL

    def is_array(self) -> bool:
        return self._type is JSONType.ARRAY

    def is_boolean(self) -> bool:
        return self._type is JSONType.BOOLEAN

    def is_floating(self) -> bool:
        return self._type is JSONType.FLOATING

    def is_integral(self) -> bool:
        return self._type is JSONType.INTEGRAL

    def is_string(self) -> bool:
        return self._type is JSONType.STRING

    def is_object(self) -> bool:
        return self._type is JSONType.OBJECT

    def length(self) -> int:
        """Number of array elements, or -1 if this is not an array."""
        if self._type is JSONType.ARRAY:
            return len(self._data)
        return -1

    def size(self) -> int:
        """Number of array or object elements, or -1 for scalars."""
        if self._type in (JSONType.ARRAY, JSONType.OBJECT):
            return len(self._data)
        return -1

    # Serialization

    def dump(self, depth: int = 1, indent: str = DEFAULT_INDENT) -> str:
        from ..serializer import get_serializer
        return get_serializer(indent).dump(self, depth)

    def dump_minified(self) -> str:
        from ..serializer import get_serializer
        return get_serializer().dump_minified(self)

    def to_python(self) -> Any:
        """Convert to plain Python data; objects keep ascending key order."""
        if self._type is JSONType.ARRAY:
            return [item.to_python() for item in self._data]
        if self._type is JSONType.OBJECT:
            return {key: value.to_python() for key, value in self.object_range()}
        return self._data

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, JSONValue):
            try:
                other = JSONValue(other)
            except (TypeError, OverflowError):
                return NotImplemented
        return self._type is other._type and self._data == other._data

    def __str__(self) -> str:
        return self.dump()

    def __repr__(self) -> str:
        return f"JSONValue({self.dump_minified()})"

    # Internals

    def _set_type(self, json_type: JSONType) -> None:
        """Switch tag, resetting the payload unless the tag is unchanged."""
        if json_type is self._type:
            return
        self._type = json_type
        self._data = _EMPTY_PAYLOADS[json_type]()

    def _check_index(self, index: Any) -> int:
        if isinstance(index, bool) or not isinstance(index, numbers.Integral):
            raise TypeError(f"JSON keys must be str or int, not {type(index).__name__}")
        index = int(index)
        if index < 0:
            raise IndexOutOfRange(index, self.length())
        return index


_EMPTY_PAYLOADS = {
    JSONType.NULL: lambda: None,
    JSONType.OBJECT: dict,
    JSONType.ARRAY: list,
    JSONType.STRING: str,
    JSONType.FLOATING: float,
    JSONType.INTEGRAL: int,
    JSONType.BOOLEAN: bool,
}


def _convert(value: Any) -> Tuple[JSONType, Any]:
    """Map a Python literal or JSON value to a freshly owned (tag, payload)."""
    if value is None:
        return JSONType.NULL, None

    if isinstance(value, JSONValue):
        if value._type is JSONType.ARRAY:
            return JSONType.ARRAY, [item.copy() for item in value._data]
        if value._type is JSONType.OBJECT:
            return JSONType.OBJECT, {key: item.copy() for key, item in value._data.items()}
        return value._type, value._data

    if isinstance(value, bool):
        return JSONType.BOOLEAN, value

    if isinstance(value, numbers.Integral):
        value = int(value)
        if not INT64_MIN <= value <= INT64_MAX:
            raise OverflowError(f"Integer {value} does not fit in 64 bits")
        return JSONType.INTEGRAL, value

    if isinstance(value, numbers.Real):
        return JSONType.FLOATING, float(value)

    if isinstance(value, str):
        return JSONType.STRING, str(value)

    if isinstance(value, (list, tuple)):
        return JSONType.ARRAY, [JSONValue(item) for item in value]

    if isinstance(value, dict):
        items: Dict[str, JSONValue] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"Object keys must be str, not {type(key).__name__}")
            items[key] = JSONValue(item)
        return JSONType.OBJECT, items

    raise TypeError(f"Cannot convert {type(value).__name__} to a JSON value")


def new_array(*items: Any) -> JSONValue:
    """Create an array, optionally holding ``items``."""
    result = JSONValue.make(JSONType.ARRAY)
    result.append(*items)
    return result


def new_object() -> JSONValue:
    """Create an empty object."""
    return JSONValue.make(JSONType.OBJECT)
