"""Database session configuration."""

from __future__ import annotations

from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from askhub.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import askhub.models  # noqa: E402,F401


# Execution option carrying the BEGIN mode for SQLite transactions.
SQLITE_BEGIN_OPTION = "askhub_sqlite_begin"


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite leaves foreign keys off per connection; cascades depend on them."""

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _enable_sqlite_write_serialization(engine: Engine) -> None:
    """Let write units take the SQLite write lock up front.

    SQLite ignores ``SELECT ... FOR UPDATE``. Transactions opened by
    :func:`atomic` begin with ``BEGIN IMMEDIATE`` so read-modify-write units
    cannot interleave; every other transaction is a plain deferred ``BEGIN``
    and never holds the write lock. WAL keeps readers off the writer's path.
    pysqlite's own transaction handling is disabled so the BEGIN is ours.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn: Any) -> None:
        mode = conn.get_execution_options().get(SQLITE_BEGIN_OPTION)
        conn.exec_driver_sql(f"BEGIN {mode}" if mode else "BEGIN")


def create_db_engine(url: str, *, serialize_writes: bool = True, **kwargs: Any) -> Engine:
    """Create an engine, applying SQLite locking rules where needed.

    ``serialize_writes=False`` is only meant for a single shared in-memory
    connection, where one BEGIN per session would nest.
    """
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        connect_args.setdefault("timeout", settings.sqlite_busy_timeout_seconds)
        engine = create_engine(url, connect_args=connect_args, **kwargs)
        _enable_sqlite_foreign_keys(engine)
        if serialize_writes:
            _enable_sqlite_write_serialization(engine)
        return engine
    return create_engine(url, pool_pre_ping=True, **kwargs)


engine = create_db_engine(settings.effective_database_url, echo=settings.sql_debug)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(session: Session) -> Iterator[Session]:
    """Commit the work done inside the block, or roll all of it back.

    The block runs in a fresh write transaction. A read transaction left
    open by earlier lookups is committed first; SQLite cannot upgrade it to
    a write lock without risking ``database is locked``.
    """
    if session.in_transaction():
        session.commit()
    try:
        session.connection(execution_options={SQLITE_BEGIN_OPTION: "IMMEDIATE"})
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop all database tables."""
    Base.metadata.drop_all(bind=engine)
