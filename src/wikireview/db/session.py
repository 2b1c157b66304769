"""Database session configuration."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from wikireview.core.settings import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import wikireview.models  # noqa: E402,F401


def _on_sqlite_connect(dbapi_connection: Any, connection_record: Any) -> None:
    # Let SQLAlchemy issue BEGIN itself so SAVEPOINTs behave under pysqlite.
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _on_sqlite_begin(connection: Any) -> None:
    connection.exec_driver_sql("BEGIN")


def configure_sqlite(engine: Engine) -> None:
    """Enforce foreign keys and explicit transactions on SQLite engines."""
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _on_sqlite_connect)
        event.listen(engine, "begin", _on_sqlite_begin)


class Database:
    """Lazily initialised handle around one engine and its session factory.

    The engine is created and the schema ensured on first access; ``dispose``
    tears both down so a later access starts fresh.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        """Return the engine, creating it and the schema on first use."""
        if self._engine is None:
            self._engine = self._create_engine()
            Base.metadata.create_all(bind=self._engine)
            self._session_factory = sessionmaker(
                autocommit=False,
                autoflush=False,
                bind=self._engine,
            )
            logger.info("Database initialised at %s", make_url(self.url).render_as_string())
        return self._engine

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    def _create_engine(self) -> Engine:
        url = make_url(self.url)
        kwargs: dict[str, Any] = {"echo": self.echo}
        if url.get_backend_name() == "sqlite":
            kwargs["connect_args"] = {"check_same_thread": False}
            if url.database and url.database != ":memory:":
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)
            else:
                # One shared connection, otherwise every thread sees its own empty database.
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True
        engine = create_engine(url, **kwargs)
        configure_sqlite(engine)
        return engine

    def session(self) -> Session:
        """Return a new ORM session bound to the engine."""
        self.engine  # noqa: B018 - force lazy initialisation
        if self._session_factory is None:
            raise RuntimeError("Database session factory is not initialised")
        return self._session_factory()

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables."""
        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        """Close pooled connections and forget the engine."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database connections disposed")
        self._engine = None
        self._session_factory = None


database = Database(settings.effective_database_url, echo=settings.sql_debug)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = database.session()
    try:
        yield db
    finally:
        db.close()
