"""Text escaping helpers shared by the serializer and conversions."""

_ESCAPES = {
    '"': '\\"',
    '\\': '\\\\',
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}

_TRANSLATION = str.maketrans(_ESCAPES)


def escape(text: str) -> str:
    """
    Escape text for embedding in a JSON string literal.

    Only quote, backslash, backspace, form-feed, newline, carriage return
    and tab are rewritten; every other character passes through unchanged.
    """
    return text.translate(_TRANSLATION)


def quote(text: str) -> str:
    """Escape and wrap text in double quotes."""
    return '"' + escape(text) + '"'
