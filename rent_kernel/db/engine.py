"""
Module: rent_kernel.db.engine
Responsibility: Owns the process-wide SQLAlchemy engine and session factory
    for the rent ledger database, and the transaction scope the CLI and
    other callers wrap their work in.
Architecture position: Kernel > DB.  May import from db/base.py.
    ``create_tables`` also imports rent_kernel.models so every table is
    registered before ``create_all``.

Invariants enforced:
    - A file URL (``sqlite:///rent_ledger.db``), an in-memory URL
      (``sqlite://``) and server URLs are all accepted.  Every connection to
      an in-memory database shares one StaticPool connection, otherwise each
      session would see its own empty database.
    - ``session_scope()`` commits when the block succeeds and rolls back when
      it raises.  Services below it only flush.

Failure modes:
    - RuntimeError from get_engine/get_session/session_scope when
      ``init_engine_from_url`` has not been called.
"""

import atexit
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from rent_kernel.logging_config import get_logger

logger = get_logger("db.engine")

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _engine_options(url: URL, echo: bool) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": echo}
    if url.get_backend_name() != "sqlite":
        options["pool_pre_ping"] = True
        return options
    options["connect_args"] = {"check_same_thread": False}
    if url.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    return options


def init_engine_from_url(database_url: str, echo: bool = False) -> Engine:
    """
    Point the kernel at a database.  Calling it again replaces the engine.

    Args:
        database_url: SQLAlchemy URL, usually ``RentConfig.database_url``.
        echo: Log every SQL statement through SQLAlchemy.
    """
    global _engine, _session_factory

    url = make_url(database_url)
    if _engine is not None:
        _engine.dispose()
    _engine = create_engine(url, **_engine_options(url, echo))
    _session_factory = sessionmaker(bind=_engine, expire_on_commit=False)

    logger.info(
        "engine_initialized",
        extra={"dialect": _engine.dialect.name, "database": url.database or ":memory:"},
    )
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Database engine not initialized; call init_engine_from_url() first")
    return _engine


def get_session() -> Session:
    """New session bound to the current engine.  The caller closes it."""
    if _session_factory is None:
        raise RuntimeError("Database engine not initialized; call init_engine_from_url() first")
    return _session_factory()


@contextmanager
def session_scope() -> Iterator[Session]:
    """
    One transaction around a block of ledger work.

    Usage:
        with session_scope() as session:
            RentLedgerService(session, clock, config).add_payment(...)
    """
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


def create_tables() -> None:
    """Create the parties, properties, contracts and payments tables if missing."""
    from rent_kernel.db.base import Base
    import rent_kernel.models  # noqa: F401

    Base.metadata.create_all(get_engine())
    logger.info("tables_created", extra={"tables": sorted(Base.metadata.tables)})


def reset_engine() -> None:
    """Dispose of the engine and forget the session factory.  Used by tests."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


@atexit.register
def _dispose_on_exit() -> None:
    if _engine is not None:
        _engine.dispose()
