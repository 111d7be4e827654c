"""File I/O operations for the JSON value library."""

from .file_io import JSONFileReader, JSONFileWriter

__all__ = ["JSONFileReader", "JSONFileWriter"]
