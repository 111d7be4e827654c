"""File reading and writing for JSON documents."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..models.json_value import JSONValue
from ..parser import JSONParser
from ..serializer import JSONSerializer
from ..types import ErrorType, JSONError, ParseResult

PathLike = Union[str, os.PathLike]


class JSONFileReader:
    """Loads raw JSON text from disk and hands it to the parser."""

    def __init__(self, parser: Optional[JSONParser] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the file reader.

        Args:
            parser: Optional JSONParser instance
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.parser = parser or JSONParser(logger=self.logger)

    def read_text(self, path: PathLike) -> str:
        """
        Read a file as UTF-8 text.

        Raises:
            JSONError: If the file cannot be read or decoded
        """
        file_path = Path(path)
        try:
            return file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise JSONError(
                f"Failed to read {file_path}: {e}",
                ErrorType.FILESYSTEM,
                context={"path": str(file_path)}
            ) from e

    def read(self, path: PathLike) -> ParseResult:
        """
        Read and parse a JSON file.

        Args:
            path: File to read

        Returns:
            ParseResult of the file contents

        Raises:
            JSONError: If the file cannot be read
        """
        text = self.read_text(path)
        result = self.parser.parse(text)

        if result.ok:
            self.logger.debug(f"Loaded {result.value.json_type().value} from {path}")
        else:
            self.logger.error(f"Failed to parse {path}: {len(result.errors)} error(s)")

        return result


class JSONFileWriter:
    """Writes serializer output to disk."""

    def __init__(self, serializer: Optional[JSONSerializer] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the file writer.

        Args:
            serializer: Optional JSONSerializer instance
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.serializer = serializer or JSONSerializer(logger=self.logger)

    def render(self, value: JSONValue, minified: bool = False) -> str:
        """Serialized text as written to disk, with a trailing newline."""
        if minified:
            return self.serializer.dump_minified(value) + "\n"
        return self.serializer.dump(value) + "\n"

    def write(self, path: PathLike, value: JSONValue,
              minified: bool = False) -> Dict[str, Any]:
        """
        Serialize a value into a file, creating parent directories.

        Args:
            path: Destination file
            value: Value to write
            minified: Write the minified form instead of the indented one

        Returns:
            Dictionary with the absolute path and size in bytes

        Raises:
            JSONError: If writing fails
        """
        file_path = Path(path)
        text = self.render(value, minified)

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, "w", encoding="utf-8") as f:
                f.write(text)
            file_size = file_path.stat().st_size
        except OSError as e:
            raise JSONError(
                f"Failed to write {file_path}: {e}",
                ErrorType.FILESYSTEM,
                context={"path": str(file_path)}
            ) from e

        self.logger.debug(f"Wrote {file_size} bytes to {file_path}")

        return {
            "path": str(file_path.absolute()),
            "size": file_size,
            "minified": minified
        }
