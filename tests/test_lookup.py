import asyncio

import pytest

from urlshort.lookup import LiveLookup, StaticLookup, build_path_table, freeze_table
from urlshort.schemas import PathRedirect


def test_build_path_table_maps_each_path():
    table = build_path_table(
        [PathRedirect(path="/a", url="https://a.example"), PathRedirect(path="/b", url="https://b.example")]
    )
    assert dict(table) == {"/a": "https://a.example", "/b": "https://b.example"}


def test_duplicate_path_keeps_last_url():
    table = build_path_table(
        [
            PathRedirect(path="/dup", url="https://first.example"),
            PathRedirect(path="/other", url="https://other.example"),
            PathRedirect(path="/dup", url="https://last.example"),
        ]
    )
    assert table["/dup"] == "https://last.example"
    assert len(table) == 2


def test_table_is_read_only():
    table = build_path_table([PathRedirect(path="/a", url="https://a.example")])
    with pytest.raises(TypeError):
        table["/a"] = "https://evil.example"


def test_freeze_table_copies_input():
    source = {"/a": "https://a.example"}
    table = freeze_table(source)
    source["/b"] = "https://b.example"
    assert "/b" not in table


def test_missing_fields_default_to_empty_string():
    entry = PathRedirect.model_validate({"url": "https://a.example"})
    assert entry.path == ""
    assert build_path_table([entry]) == {"": "https://a.example"}


def test_static_lookup_resolves_exact_path_only():
    lookup = StaticLookup(freeze_table({"/a": "https://a.example"}))
    assert asyncio.run(lookup.resolve("/a")) == "https://a.example"
    assert asyncio.run(lookup.resolve("/a/")) is None
    assert asyncio.run(lookup.resolve("/A")) is None


def test_live_lookup_delegates_to_query():
    seen = []

    async def query(path):
        seen.append(path)
        return "https://live.example" if path == "/live" else None

    lookup = LiveLookup(query)
    assert asyncio.run(lookup.resolve("/live")) == "https://live.example"
    assert asyncio.run(lookup.resolve("/nope")) is None
    assert seen == ["/live", "/nope"]
