from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Iterable
from urllib.request import pathname2url

from sqlalchemy import Column, String, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base
from sqlalchemy.pool import NullPool

from .errors import QueryError
from .lookup import build_path_table
from .schemas import PathRedirect

Base = declarative_base()


class Redirect(Base):
    __tablename__ = "urls"
    path = Column(String, primary_key=True)
    url = Column(String)


def open_engine(db_path: str | Path, timeout: float = 5.0) -> Engine:
    """Read-only engine over an existing SQLite file.

    NullPool gives every checkout its own connection, closed again on release.
    """
    uri = f"file:{pathname2url(str(Path(db_path).resolve()))}?mode=ro"

    def _connect() -> sqlite3.Connection:
        return sqlite3.connect(uri, uri=True, timeout=timeout, check_same_thread=False)

    return create_engine("sqlite://", creator=_connect, poolclass=NullPool)


def open_writable_engine(db_path: str | Path) -> Engine:
    return create_engine(f"sqlite:///{Path(db_path)}", poolclass=NullPool)


def lookup_url(engine: Engine, path: str) -> str | None:
    stmt = select(Redirect.url).where(Redirect.path == path)
    try:
        with engine.connect() as conn:
            return conn.execute(stmt).scalars().first()
    except SQLAlchemyError as e:
        raise QueryError(path, str(e)) from e


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)


def import_redirects(engine: Engine, entries: Iterable[PathRedirect]) -> int:
    """Upsert entries into ``urls``; duplicates resolve last-write-wins."""
    table = build_path_table(entries)
    init_db(engine)
    with Session(engine) as session, session.begin():
        for path, url in table.items():
            session.merge(Redirect(path=path, url=url))
    return len(table)
