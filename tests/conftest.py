"""Shared fixtures: a recording fallback app and on-disk redirect sources."""

import pytest
from starlette.responses import PlainTextResponse

from urlshort.db import import_redirects, open_writable_engine
from urlshort.schemas import PathRedirect


class RecordingFallback:
    """ASGI app that answers every request and remembers which paths it saw."""

    def __init__(self):
        self.calls = []

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return
        self.calls.append(scope["path"])
        response = PlainTextResponse(f"fallback {scope['path']}", headers={"X-Fallback": "1"})
        await response(scope, receive, send)


@pytest.fixture
def fallback():
    return RecordingFallback()


@pytest.fixture
def sample_entries():
    return [
        PathRedirect(path="/gh", url="https://github.com"),
        PathRedirect(path="/yt", url="https://youtube.com"),
    ]


@pytest.fixture
def sample_yaml():
    return b"""
- path: /gh
  url: https://github.com
- path: /yt
  url: https://youtube.com
"""


@pytest.fixture
def sample_json():
    return b'[{"path": "/gh", "url": "https://github.com"}, {"path": "/yt", "url": "https://youtube.com"}]'


@pytest.fixture
def sqlite_db(tmp_path, sample_entries):
    db_path = tmp_path / "urls.db"
    engine = open_writable_engine(db_path)
    import_redirects(engine, sample_entries)
    engine.dispose()
    return db_path
