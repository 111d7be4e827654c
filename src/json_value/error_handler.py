"""Error handling implementation for the JSON value library."""

import logging
import re
from typing import Any, Iterable, List, Optional, Tuple

from .config import JSONConfig
from .types import ErrorType, ParseDiagnostic, ValidationError, ValidationResult

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


class ErrorHandler:
    """
    Input validation and parse diagnostics.

    The parser never raises on malformed text; it reports every problem
    here, which turns a buffer offset into a line/column diagnostic and
    logs it.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 config: Optional[JSONConfig] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
            config: Optional JSONConfig with input limits
        """
        self.logger = logger or logging.getLogger(__name__)
        self.config = config or JSONConfig()

    def validate_input(self, input_data: Any) -> ValidationResult:
        """
        Check that input is usable as JSON text before parsing.

        Args:
            input_data: Candidate JSON text

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not isinstance(input_data, (str, bytes, bytearray)):
            errors.append(ValidationError(
                type=ErrorType.INPUT,
                message=f"JSON text must be str or bytes, got {type(input_data).__name__}",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if isinstance(input_data, str):
            surrogate = _LONE_SURROGATE.search(input_data)
            if surrogate:
                errors.append(ValidationError(
                    type=ErrorType.INPUT,
                    message=f"JSON text has no UTF-8 form: lone surrogate at position {surrogate.start()}",
                    location="input"
                ))

        limit = self.config.max_input_bytes
        if limit is not None:
            if isinstance(input_data, str):
                size = len(input_data.encode("utf-8", "surrogatepass"))
            else:
                size = len(input_data)
            if size > limit:
                errors.append(ValidationError(
                    type=ErrorType.INPUT,
                    message=f"JSON text is {size} bytes, larger than the {limit} byte limit",
                    location="input"
                ))

        if not input_data.strip():
            errors.append(ValidationError(
                type=ErrorType.INPUT,
                message="JSON text is empty",
                location="input"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    def report(self, text: str, offset: int, error_type: ErrorType,
               message: str) -> ParseDiagnostic:
        """
        Build and log a diagnostic for a problem at ``offset``.

        Args:
            text: Text being parsed
            offset: Position of the problem
            error_type: Category of the problem
            message: Description of the problem

        Returns:
            ParseDiagnostic with line and column filled in
        """
        line, column = self.locate(text, offset)
        diagnostic = ParseDiagnostic(
            type=error_type,
            message=message,
            offset=offset,
            line=line,
            column=column
        )
        self.logger.error(f"Parse error ({error_type.value}): {diagnostic}")
        return diagnostic

    def from_validation(self, result: ValidationResult) -> List[ParseDiagnostic]:
        """Turn input validation errors into parse diagnostics."""
        diagnostics = []
        for error in result.errors:
            self.logger.error(f"Invalid input: {error.message}")
            diagnostics.append(ParseDiagnostic(type=error.type, message=error.message, offset=0))
        return diagnostics

    @staticmethod
    def locate(text: str, offset: int) -> Tuple[int, int]:
        """1-based line and column of ``offset`` in ``text``."""
        offset = max(0, min(offset, len(text)))
        line = text.count("\n", 0, offset) + 1
        column = offset - (text.rfind("\n", 0, offset) + 1) + 1
        return line, column

    @staticmethod
    def format_errors(errors: Iterable[ParseDiagnostic]) -> str:
        """One line per diagnostic, for display."""
        return "\n".join(f"{error.type.value}: {error}" for error in errors)
