from .dispatch import SourceType, file_handler
from .errors import (
    OpenError,
    ParseError,
    QueryError,
    ReadError,
    RedirectConfigError,
    UnsupportedTypeError,
)
from .handlers import RedirectHandler, json_handler, map_handler, sqlite_handler, yaml_handler

__all__ = [
    "OpenError",
    "ParseError",
    "QueryError",
    "ReadError",
    "RedirectConfigError",
    "RedirectHandler",
    "SourceType",
    "UnsupportedTypeError",
    "file_handler",
    "json_handler",
    "map_handler",
    "sqlite_handler",
    "yaml_handler",
]
