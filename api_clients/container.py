"""Composition root: builds the shared client handles once and closes them"""
import asyncio
import logging
from dataclasses import dataclass, field, replace

import redis
import redis.asyncio
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from .cache import create_async_cache_client, create_cache_client, ping_cache, policy_from_settings
from .config import Settings
from .database import create_async_db_engine, create_session_factory, create_sync_engine, ping_database
from .supervisor import ReconnectSupervisor

logger = logging.getLogger(__name__)


@dataclass
class Clients:
    """
    Database and cache handles for one process

    Build once at startup and pass to whatever needs them:

        async with Clients.build(Settings.from_env()) as clients:
            await clients.wait_ready()
            app.state.clients = clients
    """
    settings: Settings
    sync_engine: Engine
    async_engine: AsyncEngine
    session_factory: async_sessionmaker
    cache: redis.Redis
    async_cache: redis.asyncio.Redis
    closed: bool = field(default=False, init=False)
    _sync_closed: bool = field(default=False, init=False, repr=False)

    @classmethod
    def build(cls, settings: Settings) -> "Clients":
        async_engine = create_async_db_engine(settings)
        return cls(
            settings=settings,
            sync_engine=create_sync_engine(settings),
            async_engine=async_engine,
            session_factory=create_session_factory(async_engine),
            cache=create_cache_client(settings),
            async_cache=create_async_cache_client(settings),
        )

    def supervisors(self, cache_probe: redis.asyncio.Redis):
        policy = policy_from_settings(self.settings)
        return [
            ReconnectSupervisor("database", lambda: ping_database(self.async_engine), policy),
            ReconnectSupervisor("cache", lambda: ping_cache(cache_probe), policy),
        ]

    async def wait_ready(self):
        """Block until both the database and the cache answer a ping"""
        # single-attempt pings so every failure reaches the supervisor
        cache_probe = create_async_cache_client(replace(self.settings, redis_max_retries=0))
        try:
            await asyncio.gather(*(s.run_until_connected() for s in self.supervisors(cache_probe)))
        finally:
            await cache_probe.aclose()

    def close(self):
        """Release sync resources; the async ones need aclose()"""
        if self._sync_closed:
            return
        self._sync_closed = True
        try:
            self.sync_engine.dispose()
        finally:
            self.cache.close()

    async def aclose(self):
        if self.closed:
            return
        self.closed = True
        logger.info("Closing database and cache connections...")
        try:
            self.close()
        finally:
            try:
                await self.async_engine.dispose()
            finally:
                await self.async_cache.aclose()
        logger.info("Database and cache connections closed")

    async def __aenter__(self) -> "Clients":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
