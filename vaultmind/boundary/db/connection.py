"""
Database connection management.

Provides the async SQLAlchemy engine, the session factory and table
creation.

Dependencies: sqlalchemy, vaultmind.configs
System role: Database connection lifecycle management
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from vaultmind.boundary.db.base import Base
from vaultmind.configs import Settings, get_settings


def get_async_engine(settings: Settings | None = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Args:
        settings: Application settings (uses get_settings() if None)

    Returns:
        AsyncEngine: Configured async engine
    """
    db_config = (settings or get_settings()).database
    return create_async_engine(
        db_config.url,
        echo=db_config.echo_sql,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for manual transaction control.

    Args:
        engine: Engine to bind (created from settings if None)

    Returns:
        async_sessionmaker: Session factory with expire_on_commit disabled
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create every registered table that does not exist yet."""
    # Register models on Base.metadata
    from vaultmind.boundary.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
