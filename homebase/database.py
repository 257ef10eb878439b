"""
Homebase Backend: Database Component
=====================================

What:  The data-access component: async engine, session factory, table
       creation, connectivity probe and shutdown.
How:   `Database` is constructed once by `create_app()` (or injected by tests),
       stored on `app.state.database`, and handed to each request through the
       `get_db_session` dependency.

Connection Pooling:
    PostgreSQL (asyncpg): pool_size + max_overflow from settings, pre-ping on,
    connections recycled hourly.
    SQLite (aiosqlite, tests): SQLAlchemy's default pool; sizing options do
    not apply.
"""

import logging
import ssl
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from homebase.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models; owns the shared metadata."""
    pass


def _unverified_ssl_context() -> ssl.SSLContext:
    # Encrypt the connection without validating the server certificate.
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


class Database:
    """
    Owns the engine and session factory for one database.

    Lifecycle:
        created at startup → sessions handed out per request → dispose() at shutdown
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        use_ssl: bool = False,
        echo: bool = False,
    ):
        self.url = url
        engine_kwargs: Dict[str, Any] = {"echo": echo}

        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=pool_pre_ping,
                pool_recycle=3600,
            )
            if use_ssl:
                engine_kwargs["connect_args"] = {"ssl": _unverified_ssl_context()}

        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)

        # expire_on_commit=False: rows returned by a handler are serialized
        # after the session commits.
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "Database":
        config = config or default_settings
        return cls(
            config.database_url,
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            use_ssl=config.database_ssl,
            echo=config.log_level == "DEBUG",
        )

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def create_tables(self) -> None:
        """Creates any missing tables for the registered models."""
        # Imported for their side effect of registering with Base.metadata
        from homebase.models import movie as _movie, property as _property  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def ping(self) -> bool:
        """Runs SELECT 1; returns False instead of raising when unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Closes every pooled connection. Called during application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Commits when the handler returns normally, rolls back on any exception and
    always closes the session, returning the connection to the pool.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
