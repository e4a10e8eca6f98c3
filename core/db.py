"""
core/db.py -- Shared SQLAlchemy engine and error translation for the stores.

One Engine is built per process from Settings.database_url and injected into
UserStore and ProjectStore. SQLAlchemy keeps the stores database-agnostic:
swapping SQLite for PostgreSQL is a connection string change.

store_errors() wraps every store query so callers only ever see StoreError,
never a driver exception.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from core.exceptions import StoreError

logger = logging.getLogger("projecthub.db")


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode for concurrent read safety.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def make_engine(db_url: str) -> Engine:
    """Create the process-wide Engine for db_url.

    SQLite needs check_same_thread=False because FastAPI runs sync handlers
    in a threadpool.
    """
    connect_args: dict = {}
    is_sqlite = db_url.startswith("sqlite")
    if is_sqlite:
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args, pool_pre_ping=not is_sqlite)
    if is_sqlite and "mode=memory" not in db_url and ":memory:" not in db_url:
        event.listen(engine, "connect", _set_wal_mode)
    logger.info("Database engine created (%s)", describe_url(db_url))
    return engine


def describe_url(db_url: str) -> str:
    """Return db_url with the password masked, safe for logs."""
    return make_url(db_url).render_as_string(hide_password=True)


@contextmanager
def store_errors() -> Iterator[None]:
    """Translate SQLAlchemy failures into StoreError, keeping the raw message."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise StoreError(str(exc.orig) if getattr(exc, "orig", None) is not None else str(exc)) from exc


@contextmanager
def connect(engine: Engine) -> Iterator[Connection]:
    """Open a connection with store_errors() translation applied."""
    with store_errors(), engine.connect() as conn:
        yield conn
