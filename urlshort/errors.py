from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .handlers import RedirectHandler


class RedirectConfigError(Exception):
    """Base class for everything that can go wrong while building a redirect handler."""


class ParseError(RedirectConfigError):
    def __init__(self, fmt: str, reason: str):
        super().__init__(f"invalid {fmt} payload: {reason}")
        self.fmt = fmt
        self.reason = reason


class SourceReadError(RedirectConfigError):
    def __init__(self, source: str, reason: str):
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class OpenError(SourceReadError):
    pass


class ReadError(SourceReadError):
    pass


class UnsupportedTypeError(RedirectConfigError):
    """Raised for an unknown source type.

    ``handler`` still serves traffic: it maps nothing and hands every request
    to the fallback, so callers can log the error and keep running.
    """

    def __init__(self, source_type: str, handler: RedirectHandler):
        super().__init__(f"type {source_type}: unavailable")
        self.source_type = source_type
        self.handler = handler


class QueryError(RedirectConfigError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"lookup for {path!r} failed: {reason}")
        self.path = path
        self.reason = reason
