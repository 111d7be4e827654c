"""Configuration for parsing, serialization and logging."""

import logging
import os
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional

DEFAULT_INDENT = "  "
DEFAULT_MAX_DEPTH = 256
ENV_PREFIX = "JSON_VALUE_"


@dataclass
class JSONConfig:
    """
    Shared settings for the parser, serializer and command line.

    Attributes:
        indent: Indent unit used by the pretty printer
        max_depth: Maximum nesting depth accepted by the parser
        max_input_bytes: Optional cap on the size of parsed text
        log_level: Logging level name used by the command line
    """

    indent: str = DEFAULT_INDENT
    max_depth: int = DEFAULT_MAX_DEPTH
    max_input_bytes: Optional[int] = None
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        if not isinstance(self.indent, str):
            raise ValueError("indent must be a string")

        if self.indent.strip(" \t"):
            raise ValueError("indent may only contain spaces and tabs")

        if self.max_depth <= 0:
            raise ValueError("max_depth must be positive")

        if self.max_input_bytes is not None and self.max_input_bytes <= 0:
            raise ValueError("max_input_bytes must be positive")

        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Invalid log_level: {self.log_level}")

    def get_log_level(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(self.log_level)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'JSONConfig':
        """
        Create a config from a mapping, ignoring unknown keys.

        ``indent`` may be given as a number of spaces.
        """
        indent = data.get("indent", DEFAULT_INDENT)
        if isinstance(indent, int) or (isinstance(indent, str) and indent.isdigit()):
            indent = " " * int(indent)

        return cls(
            indent=indent,
            max_depth=int(data.get("max_depth", DEFAULT_MAX_DEPTH)),
            max_input_bytes=(
                int(data["max_input_bytes"])
                if data.get("max_input_bytes") is not None else None
            ),
            log_level=data.get("log_level", "WARNING")
        )

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX,
                 environ: Optional[Mapping[str, str]] = None) -> 'JSONConfig':
        """
        Create a config from environment variables.

        Recognised variables are ``<prefix>INDENT``, ``<prefix>MAX_DEPTH``,
        ``<prefix>MAX_INPUT_BYTES`` and ``<prefix>LOG_LEVEL``.
        """
        if environ is None:
            environ = os.environ

        data: Dict[str, Any] = {}
        for name in ("indent", "max_depth", "max_input_bytes", "log_level"):
            raw = environ.get(prefix + name.upper())
            if raw is not None and raw != "":
                data[name] = raw

        return cls.from_dict(data)
