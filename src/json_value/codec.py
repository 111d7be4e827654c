"""Main codec facade tying parser, serializer, file I/O and profiling together."""

import logging
from typing import Any, Dict, Optional, Union

from .config import JSONConfig
from .error_handler import ErrorHandler
from .io.file_io import JSONFileReader, JSONFileWriter, PathLike
from .models.json_value import JSONValue
from .parser import JSONParser
from .profiler import PerformanceProfiler
from .serializer import JSONSerializer
from .types import JSONType, ParseResult


class JSONCodec:
    """
    Entry point for reading and writing JSON documents.

    All components share one configuration and logger. With profiling
    enabled every parse and serialize call is timed and recorded in
    ``profiler.metrics_history``.
    """

    def __init__(self, config: Optional[JSONConfig] = None,
                 logger: Optional[logging.Logger] = None,
                 enable_profiling: bool = False):
        """
        Initialize the codec.

        Args:
            config: Optional JSONConfig instance
            logger: Optional logger instance
            enable_profiling: Record timing and memory metrics per call
        """
        self.config = config or JSONConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.enable_profiling = enable_profiling

        self.error_handler = ErrorHandler(self.logger, self.config)
        self.parser = JSONParser(self.error_handler, self.logger, self.config)
        self.serializer = JSONSerializer(config=self.config, logger=self.logger)
        self.reader = JSONFileReader(self.parser, self.logger)
        self.writer = JSONFileWriter(self.serializer, self.logger)
        self.profiler = PerformanceProfiler(self.logger) if enable_profiling else None

        self.logger.debug(f"Codec initialized: max_depth={self.config.max_depth}, "
                          f"profiling={'on' if enable_profiling else 'off'}")

    def loads(self, text: Union[str, bytes]) -> ParseResult:
        """Parse JSON text."""
        if not self.profiler:
            return self.parser.parse(text)

        with self.profiler.profile_operation("loads", _byte_size(text)):
            return self.parser.parse(text)

    def dumps(self, value: JSONValue, minified: bool = False) -> str:
        """Serialize a value, indented unless ``minified``."""
        if not self.profiler:
            return self._render(value, minified)

        with self.profiler.profile_operation("dumps") as session:
            text = self._render(value, minified)
            session.output_size = _byte_size(text)
        return text

    def load_file(self, path: PathLike) -> ParseResult:
        """Read and parse a JSON file."""
        text = self.reader.read_text(path)
        result = self.loads(text)
        if not result.ok:
            self.logger.error(f"Failed to parse {path}:\n{self.error_handler.format_errors(result.errors)}")
        return result

    def save_file(self, path: PathLike, value: JSONValue, minified: bool = False) -> Dict[str, Any]:
        """Serialize a value into a file."""
        return self.writer.write(path, value, minified)

    def lookup(self, value: JSONValue, path: str) -> JSONValue:
        """
        Read-only lookup of a dotted path such as ``users.0.name``.

        A segment made of digits indexes into arrays; every other segment
        is an object key. Nothing in the tree is created or modified.

        Raises:
            KeyNotFound: If an object has no such key
            IndexOutOfRange: If an array index is out of bounds
        """
        current = value
        for segment in filter(None, path.split(".")):
            if current.is_array() and segment.isdigit():
                current = current.at(int(segment))
            else:
                current = current.at(segment)
        return current

    def get_structure_statistics(self, value: JSONValue) -> Dict[str, Any]:
        """
        Get detailed statistics about a value tree.

        Args:
            value: Root of the tree to analyze

        Returns:
            Dictionary with structure statistics
        """
        stats = {
            "root_type": value.json_type().value,
            "minified_size": _byte_size(self.serializer.dump_minified(value)),
            "max_depth": self._calculate_nesting_depth(value),
            "object_count": 0,
            "array_count": 0,
            "scalar_count": 0,
            "total_keys": 0,
            "total_items": 0,
        }
        self._count_elements(value, stats)
        return stats

    def _render(self, value: JSONValue, minified: bool) -> str:
        if minified:
            return self.serializer.dump_minified(value)
        return self.serializer.dump(value)

    def _calculate_nesting_depth(self, value: JSONValue, current_depth: int = 0) -> int:
        """Calculate maximum nesting depth of a value tree."""
        json_type = value.json_type()
        if json_type is JSONType.OBJECT:
            children = [child for _, child in value.object_range()]
        elif json_type is JSONType.ARRAY:
            children = list(value.array_range())
        else:
            return current_depth

        max_child_depth = current_depth + 1
        for child in children:
            max_child_depth = max(max_child_depth, self._calculate_nesting_depth(child, current_depth + 1))
        return max_child_depth

    def _count_elements(self, value: JSONValue, stats: Dict[str, Any]) -> None:
        """Recursively count different types of elements."""
        json_type = value.json_type()
        if json_type is JSONType.OBJECT:
            stats["object_count"] += 1
            stats["total_keys"] += value.size()
            for _, child in value.object_range():
                self._count_elements(child, stats)
        elif json_type is JSONType.ARRAY:
            stats["array_count"] += 1
            stats["total_items"] += value.size()
            for child in value.array_range():
                self._count_elements(child, stats)
        else:
            stats["scalar_count"] += 1


def _byte_size(text: Union[str, bytes, Any]) -> int:
    if isinstance(text, str):
        return len(text.encode("utf-8"))
    if isinstance(text, (bytes, bytearray)):
        return len(text)
    return 0
