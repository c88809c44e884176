"""
Tienda API: Database Engine and Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   A `Database` object owns the engine (and therefore the connection pool)
       and hands out one AsyncSession per request.
Who:   Created by the application lifespan and stored on `app.state.database`;
       route handlers receive sessions through `Depends(get_db_session)`.
When:  Engine is created at startup and disposed at shutdown.

The pool is not module-level state: tests build their own `Database` on an
in-memory SQLite engine and pass it to `create_app()`.
"""

from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from tienda.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    The tables already exist in the store; the metadata is used for mapping
    and by the test suite to build a throwaway schema.
    """
    pass


class Database:
    """
    Process-wide owner of the connection pool.

    Attributes:
        engine:           AsyncEngine holding the pool
        session_factory:  async_sessionmaker bound to the engine
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # expire_on_commit=False: inserted rows stay readable after commit
        # so they can be serialized into the response
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """
        Build the engine from application settings.

        pool_pre_ping catches connections dropped by the server between
        requests; pool_recycle keeps long-lived connections from going stale.
        """
        connect_args: Dict[str, Any] = {}
        if settings.database_ssl:
            # asyncpg: "require" encrypts without verifying the certificate
            connect_args["ssl"] = "require"

        engine = create_async_engine(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
            echo=settings.log_level == "DEBUG",
            connect_args=connect_args,
        )
        return cls(engine)

    async def dispose(self) -> None:
        """Gracefully closes all connections in the pool."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """Returns the Database attached to the running application."""
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database has not been initialized for this application")
    return database


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the application's factory
        2. Yields it to the route handler
        3. On error: rolls back so the connection returns to the pool clean
        4. Always: closes the session

    Writes commit inside the repository right after their single statement,
    so nothing is committed here.
    """
    database = get_database(request)
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
