from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Awaitable, Callable, Iterable, Mapping, Protocol, Union

from .schemas import PathRedirect

PathTable = Mapping[str, str]
QueryFunction = Callable[[str], Awaitable[Union[str, None]]]


def build_path_table(entries: Iterable[PathRedirect]) -> PathTable:
    """Collapse entries into a read-only path -> url mapping.

    A path that appears more than once keeps the url of its last entry.
    """
    table: dict[str, str] = {}
    for entry in entries:
        table[entry.path] = entry.url
    return MappingProxyType(table)


def freeze_table(paths_to_urls: Mapping[str, str]) -> PathTable:
    return MappingProxyType(dict(paths_to_urls))


class LookupSource(Protocol):
    async def resolve(self, path: str) -> str | None: ...


@dataclass(frozen=True)
class StaticLookup:
    table: PathTable

    async def resolve(self, path: str) -> str | None:
        return self.table.get(path)


@dataclass(frozen=True)
class LiveLookup:
    query: QueryFunction

    async def resolve(self, path: str) -> str | None:
        return await self.query(path)
