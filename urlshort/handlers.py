from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Mapping
from urllib.parse import quote

from sqlalchemy.engine import Engine
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

from .db import lookup_url, open_engine
from .errors import QueryError
from .loaders import parse_json, parse_yaml
from .lookup import LiveLookup, LookupSource, StaticLookup, build_path_table, freeze_table

logger = logging.getLogger("urlshort")


def escape_non_ascii(url: str) -> str:
    """Percent-encode only non-ASCII characters; everything else goes out as configured."""
    return "".join(c if ord(c) < 0x80 else quote(c, safe="") for c in url)


class RedirectHandler:
    """ASGI app: 302 to the mapped url, otherwise hand the request to ``fallback``.

    Lookups are exact on the decoded request path. The fallback is never
    called for a hit and always gets the untouched request on a miss.
    """

    def __init__(self, source: LookupSource, fallback: ASGIApp):
        self.source = source
        self.fallback = fallback

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.fallback(scope, receive, send)
            return

        path = scope["path"]
        url = await self.source.resolve(path)
        if url is None:
            await self.fallback(scope, receive, send)
            return

        logger.debug({"event": "redirect.hit", "path": path, "url": url})
        response = Response(status_code=302, headers={"location": escape_non_ascii(url)})
        await response(scope, receive, send)


def map_handler(paths_to_urls: Mapping[str, str], fallback: ASGIApp) -> RedirectHandler:
    return RedirectHandler(StaticLookup(freeze_table(paths_to_urls)), fallback)


def yaml_handler(payload: bytes, fallback: ASGIApp) -> RedirectHandler:
    """Build a handler from YAML bytes; raises ParseError on malformed input."""
    table = build_path_table(parse_yaml(payload))
    return RedirectHandler(StaticLookup(table), fallback)


def json_handler(payload: bytes, fallback: ASGIApp) -> RedirectHandler:
    table = build_path_table(parse_json(payload))
    return RedirectHandler(StaticLookup(table), fallback)


def sqlite_handler(db: Engine | str | Path, fallback: ASGIApp, timeout: float = 5.0) -> RedirectHandler:
    """Handler that queries the ``urls`` table on every request.

    Misses, query errors and timeouts all end at the fallback; nothing is
    surfaced to the client.
    """
    engine = db if isinstance(db, Engine) else open_engine(db, timeout=timeout)

    async def query(path: str) -> str | None:
        try:
            url = await asyncio.wait_for(asyncio.to_thread(lookup_url, engine, path), timeout)
        except QueryError as e:
            logger.warning({"event": "redirect.db.error", "path": path, "error": e.reason})
            return None
        except asyncio.TimeoutError:
            logger.warning({"event": "redirect.db.timeout", "path": path, "timeout_sec": timeout})
            return None

        if url is None:
            logger.debug({"event": "redirect.db.miss", "path": path})
        return url

    return RedirectHandler(LiveLookup(query), fallback)
