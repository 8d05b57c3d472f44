from __future__ import annotations

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine

from content_api.config import get_settings

_engine: Engine | None = None


def make_engine(db_url: str) -> Engine:
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    engine = create_engine(db_url, pool_pre_ping=True, future=True, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        _enable_sqlite_locking(engine)
    return engine


def _enable_sqlite_locking(engine: Engine) -> None:
    # pysqlite defers BEGIN until the first write, so SELECT ... FOR UPDATE
    # has nothing to attach to. Write transactions take the database write
    # lock up front instead; reads keep a plain deferred BEGIN.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, _record):
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        if conn.get_execution_options().get("sqlite_write_lock"):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


def begin_write(engine: Engine):
    """Transaction for read-modify-write paths; holds the write lock on SQLite."""
    return engine.execution_options(sqlite_write_lock=True).begin()


def get_engine() -> Engine:
    global _engine

    if _engine is not None:
        return _engine

    _engine = make_engine(get_settings().require_database_url())
    return _engine


def db_ping(engine: Engine) -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
