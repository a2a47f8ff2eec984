"""
Blog API Backend — Database Context
=====================================

What:  The async SQLAlchemy engine, session factory and FastAPI session
       dependency.
How:   `Database` owns one engine (and its connection pool). The application
       factory builds exactly one instance per app and stores it on
       `app.state.database`; `get_db_session` reads it from there and yields a
       session per request that commits on success and rolls back on error.
Who:   Constructed by `create_app()`; used by route handlers through
       `Depends(get_db_session)` and by the health check.

Connection Pooling:
    pool_size=20, max_overflow=10 for server databases (at most 30
    connections), pool_pre_ping to discard stale connections, and
    pool_recycle=3600. SQLite keeps SQLAlchemy's default pool for its driver.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from blogapi.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers its table on `Base.metadata`, which Alembic and
    `Database.create_schema()` both read.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite leaves foreign key enforcement off unless asked per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Process-owned data access context: one engine plus its session factory.

    Attributes:
        engine:          AsyncEngine holding the connection pool
        session_factory: async_sessionmaker producing per-request sessions
    """

    def __init__(self, settings: Settings):
        engine_kwargs: Dict[str, Any] = {
            "pool_pre_ping": settings.db_pool_pre_ping,
            # SQL echo only when debugging
            "echo": settings.log_level == "DEBUG",
            # Bound values include emails; keep them out of SQL logs and errors
            "hide_parameters": True,
        }
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(settings.database_url, **engine_kwargs)

        if settings.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # expire_on_commit=False keeps loaded rows readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session that commits on success and rolls back on error.

        The session is always closed, returning its connection to the pool.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_schema(self) -> None:
        """Create any missing tables from the ORM metadata."""
        # Importing the models registers their tables on Base.metadata
        from blogapi.models import article, comment, user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured (%d tables)", len(Base.metadata.tables))

    async def ping(self) -> None:
        """Run `SELECT 1`; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close every pooled connection. Called on application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    The session comes from the `Database` owned by the application serving
    the request, so two apps built with different settings never share a pool.

    Example usage in a route:
        @router.get("/home")
        async def home(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
