"""
Database connection and session management for Player Backend.
Uses SQLAlchemy with async support (asyncpg or aiosqlite).
"""

from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from player_backend.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def enable_case_sensitive_like(engine: AsyncEngine) -> None:
    """
    Make LIKE case-sensitive on SQLite connections.
    Name/title filters are substring matches that respect letter case.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA case_sensitive_like = ON")
        cursor.close()


def build_engine(settings: Settings, **engine_options) -> AsyncEngine:
    """
    Create the async engine for a database URL.
    SQLite gets no pool sizing (unsupported) and case-sensitive LIKE.
    """
    if not settings.database_url.startswith("sqlite"):
        return create_async_engine(
            settings.database_url,
            echo=settings.debug_mode,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            **engine_options,
        )

    sqlite_engine = create_async_engine(
        settings.database_url,
        echo=settings.debug_mode,
        connect_args={"check_same_thread": False},
        **engine_options,
    )
    enable_case_sensitive_like(sqlite_engine)
    return sqlite_engine


engine = build_engine(get_settings())

# Create async session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db() -> None:
    """
    Initialize database tables.
    Creates all tables defined in models if they don't exist.
    """
    # Import all models to ensure they're registered with Base
    from player_backend.models import player  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections."""
    await engine.dispose()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session dependency.
    The whole request is one transaction: the service only flushes, and the
    commit happens here once the route has returned.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        await session.commit()

