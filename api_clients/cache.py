"""Redis clients that reconnect with the linear backoff policy"""
import logging
from typing import Optional

import redis
import redis.asyncio
from redis.asyncio.retry import Retry as AsyncRetry
from redis.exceptions import ConnectionError, TimeoutError
from redis.retry import Retry

from .backoff import LinearBackoff, RedisLinearBackoff
from .config import Settings

logger = logging.getLogger(__name__)

RETRY_ON = [ConnectionError, TimeoutError]


def policy_from_settings(settings: Settings) -> LinearBackoff:
    return LinearBackoff(step_ms=settings.backoff_step_ms, ceiling_ms=settings.backoff_ceiling_ms)


def create_cache_client(settings: Settings, policy: Optional[LinearBackoff] = None) -> redis.Redis:
    """
    Build a blocking redis client

    Args:
        settings: Validated settings
        policy: Backoff policy; defaults to the one described by settings

    Returns:
        redis.Redis that has not connected yet
    """
    policy = policy or policy_from_settings(settings)
    logger.info(f"Creating cache client for {settings.redis_host}:{settings.redis_port}/{settings.redis_db}")
    return redis.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        db=settings.redis_db,
        password=settings.redis_password,
        retry=Retry(RedisLinearBackoff(policy), settings.redis_max_retries),
        retry_on_error=list(RETRY_ON),
    )


def create_async_cache_client(settings: Settings, policy: Optional[LinearBackoff] = None) -> redis.asyncio.Redis:
    """Same as create_cache_client, for asyncio callers"""
    policy = policy or policy_from_settings(settings)
    logger.info(f"Creating async cache client for {settings.redis_host}:{settings.redis_port}/{settings.redis_db}")
    return redis.asyncio.Redis(
        host=settings.redis_host,
        port=settings.redis_port,
        db=settings.redis_db,
        password=settings.redis_password,
        retry=AsyncRetry(RedisLinearBackoff(policy), settings.redis_max_retries),
        retry_on_error=list(RETRY_ON),
    )


async def ping_cache(client: redis.asyncio.Redis) -> bool:
    return bool(await client.ping())
