"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path

from json_value import JSONValue


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_document():
    """Nested document mixing every tag."""
    return {
        "users": [
            {"name": "Alice", "age": 30, "active": True},
            {"name": "Bob", "age": 25, "active": False},
        ],
        "settings": {
            "theme": "dark",
            "ratio": 0.75,
            "tags": ["a", "b"],
            "empty": {},
            "none": None,
        },
        "count": 2,
    }


@pytest.fixture
def sample_value(sample_document):
    """Sample document as a JSONValue."""
    return JSONValue(sample_document)


@pytest.fixture
def sample_text():
    """Minified JSON text used across parser tests."""
    return '{"a":1,"b":[1,2,3],"c":"x"}'
