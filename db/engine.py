"""
db.engine - Catalog database bootstrap.

init_db() is called once by create_app() (and again by each test with its
own file); get_session() hands out sessions bound to the current engine.
"""

from __future__ import annotations

import logging

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from db.models import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_session_factory: sessionmaker | None = None

# Catalog lookups run on builder worker threads while imports write
_SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA foreign_keys=ON",
    "PRAGMA synchronous=NORMAL",
)


def _apply_sqlite_pragmas(dbapi_conn, _record) -> None:
    cur = dbapi_conn.cursor()
    for pragma in _SQLITE_PRAGMAS:
        cur.execute(pragma)
    cur.close()


def init_db(db_url: str) -> None:
    """Bind to `db_url` and create the glenair_* tables if missing."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()

    engine = create_engine(db_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _apply_sqlite_pragmas)

    Base.metadata.create_all(engine)
    _engine = engine
    _session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    logger.info(f"Catalog database: {engine.url.render_as_string(hide_password=True)}")


def get_session() -> Session:
    """New session on the current engine.  Close it when done."""
    if _session_factory is None:
        raise RuntimeError("init_db() has not been called")
    return _session_factory()
