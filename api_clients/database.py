"""Database engines and session factory"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import Settings

logger = logging.getLogger(__name__)


def create_sync_engine(settings: Settings) -> Engine:
    """Sync engine (for scripts and one-off maintenance)"""
    return create_engine(
        settings.sync_database_url,
        echo=settings.db_echo,
        pool_pre_ping=True,  # Verify connections before using
    )


def create_async_db_engine(settings: Settings) -> AsyncEngine:
    """Async engine (for the application)"""
    logger.info(
        f"Creating database engine (pool_size={settings.db_pool_size}, "
        f"max_overflow={settings.db_max_overflow})"
    )
    return create_async_engine(
        settings.async_database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def session_scope(session_factory: async_sessionmaker) -> AsyncIterator[AsyncSession]:
    """
    Transactional session

    Usage:
        async with session_scope(clients.session_factory) as session:
            ...

    Commits when the block exits normally, rolls back and re-raises otherwise.
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def ping_database(engine: AsyncEngine) -> bool:
    """Run SELECT 1; connection errors propagate"""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return True
