"""Database engine, session factory and request dependency."""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from radio_calico.core.settings import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import radio_calico.models  # noqa: E402,F401


def _engine_options(url: URL, *, pool_size: int, pool_timeout: float, pool_recycle: int) -> dict[str, Any]:
    if url.get_backend_name() == "sqlite":
        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_size": pool_size,
        "pool_timeout": pool_timeout,
        "pool_recycle": pool_recycle,
        "pool_pre_ping": True,
    }


class Database:
    """Owns the engine and session factory shared by all requests.

    One instance is built per application and handed to request handlers
    through `app.state`; every request opens and closes its own session.
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        pool_size: int = 20,
        pool_timeout: float = 2.0,
        pool_recycle: int = 30,
    ) -> None:
        self.url = make_url(url)
        self.engine = create_engine(
            self.url,
            echo=echo,
            **_engine_options(
                self.url,
                pool_size=pool_size,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle,
            ),
        )
        self.session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Database:
        """Build a database from application settings."""
        return cls(
            settings.effective_database_url,
            echo=settings.sql_debug,
            pool_size=settings.db_pool_size,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
        )

    @property
    def backend(self) -> str:
        """Return the dialect name, e.g. ``sqlite`` or ``postgresql``."""
        return self.engine.dialect.name

    def session(self) -> Session:
        """Open a new session bound to the engine."""
        return self.session_factory()

    def create_tables(self) -> None:
        """Create all database tables that do not exist yet."""
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables."""
        Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> bool:
        """Return True when the database answers a trivial query."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("Database ping failed: %s", exc)
            return False
        return True

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()


def get_database(request: Request) -> Database:
    """Return the database attached to the running application."""
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
