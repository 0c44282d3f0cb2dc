"""
Database bootstrap: engine, session factory and table creation.

The engine is process-wide startup state. init_engine() must be called
explicitly with the configured database URL (create_app does this); the
repositories never reach for it themselves, they receive a session.
"""

import logging
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pms.core.config import mask_url_password

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all models."""

    pass


_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def build_engine(database_url: str) -> Engine:
    """Create an engine with settings suited to the target backend."""
    url = make_url(database_url)

    if url.drivername.startswith("postgres"):
        engine = create_engine(
            database_url,
            pool_size=20,
            max_overflow=40,
            pool_pre_ping=True,  # Detects and refreshes stale connections
            pool_recycle=3600,  # Recycle connections every hour to avoid idle timeouts
            connect_args={
                "application_name": "pms",  # Visible in pg_stat_activity
                "connect_timeout": 10,
            },
            echo=False,
        )
    elif url.drivername.startswith("sqlite"):
        if url.database in (None, "", ":memory:"):
            # One shared in-memory database across the process so DDL persists
            # across connections
            engine = create_engine(
                database_url,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            engine = create_engine(
                database_url,
                echo=False,
                connect_args={"check_same_thread": False},
            )

        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    else:
        engine = create_engine(database_url, echo=False, pool_pre_ping=True)

    logger.debug(
        "SQLAlchemy engine created",
        extra={
            "context": {
                "url": mask_url_password(str(database_url)),
                "dialect": engine.dialect.name,
            }
        },
    )
    return engine


def init_engine(database_url: str) -> Engine:
    """Initialize (or replace) the process-wide engine and session factory."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = build_engine(database_url)
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Database engine is not initialized; call init_engine() first")
    return _engine


def SessionLocal() -> Session:
    """Return a new Session bound to the initialized engine."""
    if _SessionLocal is None:
        raise RuntimeError("Database engine is not initialized; call init_engine() first")
    return _SessionLocal()


def get_db() -> Iterator[Session]:
    """Yield a session and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(engine: Optional[Engine] = None) -> None:
    """Create all tables for the registered models."""
    # Importing the models populates Base.metadata
    from pms.db import base  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())


def drop_tables(engine: Optional[Engine] = None) -> None:
    from pms.db import base  # noqa: F401

    Base.metadata.drop_all(bind=engine or get_engine())
