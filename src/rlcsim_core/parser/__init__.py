# src/rlcsim_core/parser/__init__.py
from .parser import ConfigParser
from .exceptions import ParsingError, SchemaValidationError

__all__ = [
    "ConfigParser",
    "ParsingError",
    "SchemaValidationError",
]
