"""Tests for JSONConfig."""

import logging

import pytest

from json_value import JSONConfig
from json_value.config import DEFAULT_INDENT, DEFAULT_MAX_DEPTH


class TestJSONConfig:
    """Test cases for JSONConfig."""

    def test_defaults(self):
        config = JSONConfig()

        assert config.indent == DEFAULT_INDENT == "  "
        assert config.max_depth == DEFAULT_MAX_DEPTH
        assert config.max_input_bytes is None
        assert config.log_level == "WARNING"
        assert config.get_log_level() == logging.WARNING

    def test_log_level_is_normalized(self):
        assert JSONConfig(log_level="debug").get_log_level() == logging.DEBUG

    @pytest.mark.parametrize("kwargs", [
        {"indent": "x"},
        {"indent": 2},
        {"max_depth": 0},
        {"max_input_bytes": 0},
        {"log_level": "LOUD"},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            JSONConfig(**kwargs)

    def test_to_dict(self):
        config = JSONConfig(indent="\t", max_depth=10)

        assert config.to_dict() == {
            "indent": "\t",
            "max_depth": 10,
            "max_input_bytes": None,
            "log_level": "WARNING",
        }

    def test_from_dict(self):
        """Test building from a mapping with a numeric indent."""
        config = JSONConfig.from_dict({
            "indent": 4,
            "max_depth": "32",
            "max_input_bytes": 1024,
            "unknown": True,
        })

        assert config.indent == "    "
        assert config.max_depth == 32
        assert config.max_input_bytes == 1024

    def test_from_dict_round_trip(self):
        config = JSONConfig(indent="\t", log_level="INFO")

        assert JSONConfig.from_dict(config.to_dict()) == config

    def test_from_env(self):
        environ = {
            "JSON_VALUE_INDENT": "3",
            "JSON_VALUE_MAX_DEPTH": "64",
            "JSON_VALUE_LOG_LEVEL": "error",
            "JSON_VALUE_MAX_INPUT_BYTES": "",
            "OTHER": "ignored",
        }

        config = JSONConfig.from_env(environ=environ)

        assert config.indent == "   "
        assert config.max_depth == 64
        assert config.max_input_bytes is None
        assert config.log_level == "ERROR"

    def test_from_env_prefix(self):
        config = JSONConfig.from_env(prefix="APP_", environ={"APP_MAX_DEPTH": "8"})

        assert config.max_depth == 8

    def test_from_env_invalid(self):
        with pytest.raises(ValueError):
            JSONConfig.from_env(environ={"JSON_VALUE_MAX_DEPTH": "deep"})
