"""Recursive-descent JSON parser with explicit failure reporting."""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .config import JSONConfig
from .error_handler import ErrorHandler
from .models.json_value import JSONValue
from .types import ErrorType, JSONParserInterface, JSONType, ParseDiagnostic, ParseResult
from .utils.numbers import parse_int_prefix

_WHITESPACE = frozenset(" \t\n\r")
_DIGITS = frozenset("0123456789")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_NUMBER_TERMINATORS = frozenset(" \t\n\r,]}")
_SIMPLE_ESCAPES = {
    '"': '"',
    '\\': '\\',
    '/': '/',
    'b': '\b',
    'f': '\f',
    'n': '\n',
    'r': '\r',
    't': '\t',
}
_PLAIN_RUN = re.compile(r'[^"\\]+')


@dataclass
class ParserState:
    """
    Cursor shared by every production of one parse call.

    ``offset`` only ever moves forward and is compared against the text
    length before every read; ``ok`` is cleared by the first failure.
    """
    text: str
    offset: int = 0
    ok: bool = True
    depth: int = 0
    errors: List[ParseDiagnostic] = field(default_factory=list)

    def peek(self) -> str:
        """Current character, or an empty string at the end of input."""
        if self.offset < len(self.text):
            return self.text[self.offset]
        return ""


class JSONParser(JSONParserInterface):
    """
    Hand-written JSON reader producing JSONValue trees.

    Grammar deviations from RFC 8259: ``\\uXXXX`` escapes are kept as the
    literal six characters, duplicate object keys resolve last-write-wins
    and anything after the first complete value is ignored.

    Malformed or truncated text never raises. The first problem clears the
    ``ok`` flag, is reported to the error handler and parsing unwinds,
    returning a best-effort value of the type each production was building.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None,
                 config: Optional[JSONConfig] = None):
        """
        Initialize the JSON parser.

        Args:
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
            config: Optional JSONConfig with depth and size limits
        """
        self.logger = logger or logging.getLogger(__name__)
        self.config = config or JSONConfig()
        self.error_handler = error_handler or ErrorHandler(self.logger, self.config)

    def parse(self, text: Union[str, bytes]) -> ParseResult:
        """
        Parse JSON text.

        Args:
            text: JSON text; bytes are decoded as UTF-8

        Returns:
            ParseResult with the value, success flag, diagnostics and the
            offset where parsing stopped
        """
        validation = self.error_handler.validate_input(text)
        if not validation.is_valid:
            return ParseResult(
                value=JSONValue(),
                ok=False,
                errors=self.error_handler.from_validation(validation)
            )

        if isinstance(text, (bytes, bytearray)):
            try:
                text = bytes(text).decode("utf-8")
            except UnicodeDecodeError as e:
                message = f"Input is not valid UTF-8: {e.reason}"
                self.logger.error(message)
                return ParseResult(
                    value=JSONValue(),
                    ok=False,
                    errors=[ParseDiagnostic(type=ErrorType.INPUT, message=message, offset=e.start)]
                )

        state = ParserState(text)
        value = self._parse_value(state)

        if state.ok:
            self.logger.debug(f"Parsed {value.json_type().value} from {state.offset} characters")

        return ParseResult(value=value, ok=state.ok, errors=state.errors, consumed=state.offset)

    # Productions

    def _parse_value(self, state: ParserState) -> JSONValue:
        self._skip_whitespace(state)
        ch = state.peek()

        if ch == "":
            self._fail(state, ErrorType.EOF, "Parse: Unexpected end of input, expected a value")
            return JSONValue()
        if ch == "{":
            return self._parse_object(state)
        if ch == "[":
            return self._parse_array(state)
        if ch == '"':
            return self._parse_string(state)
        if ch == "t":
            return self._parse_literal(state, "true", True)
        if ch == "f":
            return self._parse_literal(state, "false", False)
        if ch == "n":
            return self._parse_literal(state, "null", None)
        if ch == "-" or ch in _DIGITS:
            return self._parse_number(state)

        self._fail(state, ErrorType.SYNTAX, f"Parse: Unknown starting character {ch!r}")
        return JSONValue()

    def _parse_object(self, state: ParserState) -> JSONValue:
        result = JSONValue.make(JSONType.OBJECT)
        if not self._enter(state):
            return result

        try:
            state.offset += 1
            self._skip_whitespace(state)
            if state.peek() == "}":
                state.offset += 1
                return result

            while True:
                self._skip_whitespace(state)
                if state.peek() != '"':
                    self._expected(state, "Object", "a string key")
                    return result

                key = self._parse_string(state).to_unescaped_string()
                if not state.ok:
                    return result

                self._skip_whitespace(state)
                if state.peek() != ":":
                    self._expected(state, "Object", "':'")
                    return result
                state.offset += 1

                value = self._parse_value(state)
                if not state.ok:
                    return result
                result[key]._adopt(value)

                self._skip_whitespace(state)
                ch = state.peek()
                if ch == ",":
                    state.offset += 1
                elif ch == "}":
                    state.offset += 1
                    return result
                else:
                    self._expected(state, "Object", "',' or '}'")
                    return result
        finally:
            state.depth -= 1

    def _parse_array(self, state: ParserState) -> JSONValue:
        result = JSONValue.make(JSONType.ARRAY)
        if not self._enter(state):
            return result

        try:
            state.offset += 1
            self._skip_whitespace(state)
            if state.peek() == "]":
                state.offset += 1
                return result

            index = 0
            while True:
                value = self._parse_value(state)
                if not state.ok:
                    return result
                result[index]._adopt(value)
                index += 1

                self._skip_whitespace(state)
                ch = state.peek()
                if ch == ",":
                    state.offset += 1
                elif ch == "]":
                    state.offset += 1
                    return result
                else:
                    self._expected(state, "Array", "',' or ']'")
                    return JSONValue.make(JSONType.ARRAY)
        finally:
            state.depth -= 1

    def _parse_string(self, state: ParserState) -> JSONValue:
        text = state.text
        start = state.offset
        state.offset += 1
        chunks = []

        while True:
            if state.offset >= len(text):
                self._fail(state, ErrorType.EOF, "String: Unterminated string", start)
                return JSONValue("")

            ch = text[state.offset]
            if ch == '"':
                state.offset += 1
                return JSONValue("".join(chunks))

            if ch != "\\":
                run = _PLAIN_RUN.match(text, state.offset)
                chunks.append(run.group(0))
                state.offset = run.end()
                continue

            state.offset += 1
            escape = state.peek()
            if escape == "":
                self._fail(state, ErrorType.EOF, "String: Unterminated escape sequence")
                return JSONValue("")

            if escape == "u":
                digits = text[state.offset + 1:state.offset + 5]
                for i, digit in enumerate(digits):
                    if digit not in _HEX_DIGITS:
                        self._fail(
                            state, ErrorType.ESCAPE,
                            f"String: Expected hex character in unicode escape, found {digit!r}",
                            state.offset + 1 + i
                        )
                        return JSONValue("")
                if len(digits) < 4:
                    self._fail(state, ErrorType.EOF, "String: Truncated unicode escape")
                    return JSONValue("")
                # Kept verbatim; code points are not decoded.
                chunks.append("\\u" + digits)
                state.offset += 5
                continue

            replacement = _SIMPLE_ESCAPES.get(escape)
            if replacement is None:
                self._fail(state, ErrorType.ESCAPE, f"String: Invalid escape sequence '\\{escape}'")
                return JSONValue("")
            chunks.append(replacement)
            state.offset += 1

    def _parse_number(self, state: ParserState) -> JSONValue:
        text = state.text
        start = state.offset
        is_floating = False

        if state.peek() == "-":
            state.offset += 1
        if not self._scan_digits(state):
            return self._bad_number(state, "Expected a digit")

        if state.peek() == ".":
            is_floating = True
            state.offset += 1
            if not self._scan_digits(state):
                return self._bad_number(state, "Expected a digit after the decimal point")
        mantissa = text[start:state.offset]

        exponent = None
        if state.peek() in ("e", "E"):
            state.offset += 1
            exponent_start = state.offset
            if state.peek() in ("+", "-"):
                state.offset += 1
            if not self._scan_digits(state):
                return self._bad_number(state, "Expected a number for exponent")
            exponent = text[exponent_start:state.offset]

        ch = state.peek()
        if ch != "" and ch not in _NUMBER_TERMINATORS:
            return self._bad_number(state, "Unexpected character")

        literal = text[start:state.offset]
        if is_floating or exponent is not None:
            # mantissa * 10^exponent, correctly rounded
            number = float(f"{mantissa}e{exponent or 0}")
            if math.isinf(number):
                self._fail(state, ErrorType.NUMBER, f"Number: {literal} is out of range", start)
                return JSONValue()
            return JSONValue(number)

        number, in_range = parse_int_prefix(mantissa)
        if not in_range:
            self._fail(state, ErrorType.NUMBER, f"Number: {literal} does not fit in 64 bits", start)
            return JSONValue()
        return JSONValue(number)

    def _parse_literal(self, state: ParserState, word: str, value: Optional[bool]) -> JSONValue:
        if state.text.startswith(word, state.offset):
            state.offset += len(word)
            return JSONValue(value)

        found = state.text[state.offset:state.offset + len(word)]
        error_type = ErrorType.EOF if word.startswith(found) else ErrorType.LITERAL
        self._fail(state, error_type, f"Literal: Expected '{word}', found {found!r}")
        return JSONValue()

    # Helpers

    def _skip_whitespace(self, state: ParserState) -> None:
        text = state.text
        while state.offset < len(text) and text[state.offset] in _WHITESPACE:
            state.offset += 1

    def _scan_digits(self, state: ParserState) -> int:
        text = state.text
        begin = state.offset
        while state.offset < len(text) and text[state.offset] in _DIGITS:
            state.offset += 1
        return state.offset - begin

    def _enter(self, state: ParserState) -> bool:
        """Count one nesting level; fails once the configured limit is passed."""
        state.depth += 1
        if state.depth > self.config.max_depth:
            state.depth -= 1
            self._fail(
                state, ErrorType.DEPTH,
                f"Parse: Maximum nesting depth of {self.config.max_depth} exceeded"
            )
            return False
        return True

    def _expected(self, state: ParserState, production: str, expected: str) -> None:
        ch = state.peek()
        if ch == "":
            self._fail(state, ErrorType.EOF,
                       f"{production}: Unexpected end of input, expected {expected}")
        else:
            self._fail(state, ErrorType.SYNTAX,
                       f"{production}: Expected {expected}, found {ch!r}")

    def _bad_number(self, state: ParserState, message: str) -> JSONValue:
        ch = state.peek()
        if ch == "":
            self._fail(state, ErrorType.EOF, f"Number: {message}, found end of input")
        else:
            self._fail(state, ErrorType.NUMBER, f"Number: {message}, found {ch!r}")
        return JSONValue()

    def _fail(self, state: ParserState, error_type: ErrorType, message: str,
              offset: Optional[int] = None) -> None:
        diagnostic = self.error_handler.report(
            state.text,
            state.offset if offset is None else offset,
            error_type,
            message
        )
        state.errors.append(diagnostic)
        state.ok = False


_default_parser: Optional[JSONParser] = None


def get_parser() -> JSONParser:
    """Get the shared default parser instance."""
    global _default_parser
    if _default_parser is None:
        _default_parser = JSONParser()
    return _default_parser


def parse(text: Union[str, bytes]) -> Tuple[JSONValue, bool]:
    """Parse JSON text, returning ``(value, ok)``."""
    return get_parser().parse(text).as_tuple()
