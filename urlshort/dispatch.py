from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from starlette.types import ASGIApp

from .errors import OpenError, ReadError, UnsupportedTypeError
from .handlers import RedirectHandler, json_handler, map_handler, sqlite_handler, yaml_handler

logger = logging.getLogger("urlshort")


class SourceType(str, Enum):
    YAML = "yaml"
    JSON = "json"
    SQLITE = "sqlite"


def read_source(path: str | Path) -> bytes:
    """Read a whole file; the handle is closed on every path out."""
    try:
        f = open(path, "rb")
    except OSError as e:
        raise OpenError(str(path), e.strerror or str(e)) from e
    with f:
        try:
            return f.read()
        except OSError as e:
            raise ReadError(str(path), e.strerror or str(e)) from e


def file_handler(
    source: str | Path,
    source_type: str | SourceType,
    fallback: ASGIApp,
    *,
    db_timeout: float = 5.0,
) -> RedirectHandler:
    """Pick a loader for ``source_type`` and wire it in front of ``fallback``.

    Raises OpenError / ReadError / ParseError when the source cannot be
    loaded. An unknown type raises UnsupportedTypeError whose ``handler``
    maps nothing and forwards everything to ``fallback``.
    """
    try:
        kind = SourceType(source_type)
    except ValueError:
        raise UnsupportedTypeError(str(source_type), map_handler({}, fallback)) from None

    if kind is SourceType.SQLITE:
        if not Path(source).is_file():
            raise OpenError(str(source), "no such database file")
        logger.info({"event": "source.loaded", "type": kind.value, "source": str(source)})
        return sqlite_handler(source, fallback, timeout=db_timeout)

    payload = read_source(source)
    if kind is SourceType.JSON:
        handler = json_handler(payload, fallback)
    else:
        handler = yaml_handler(payload, fallback)

    logger.info(
        {
            "event": "source.loaded",
            "type": kind.value,
            "source": str(source),
            "paths": len(handler.source.table),
        }
    )
    return handler
