# =============================================================================
# lib/redis_client.py - Redis Client Factory and Cache Wrapper
# =============================================================================
# The cache is optional. When REDIS_ENABLED is false no client is created,
# and when Redis is unreachable every read is a miss and every write a no-op.
# Callers never see a Redis exception.
#
# Usage:
#   cache = CacheClient(create_redis_client(settings))
#   value = await cache.get("first_hit")
# =============================================================================

from __future__ import annotations

import logging

import redis.asyncio as redis

from app.config import Settings

logger = logging.getLogger(__name__)


def create_redis_client(settings: Settings) -> redis.Redis | None:
    """
    Build the Redis client from settings, or None when the cache is disabled.

    The client keeps a connection pool and connects on first use.
    """
    if not settings.REDIS_ENABLED:
        logger.info("Redis cache disabled by configuration")
        return None

    client = redis.from_url(
        settings.REDIS_URI,
        decode_responses=True,
        socket_timeout=settings.REDIS_TIMEOUT_SECS,
        socket_connect_timeout=settings.REDIS_TIMEOUT_SECS,
    )
    logger.info("Redis client created (timeout=%ss)", settings.REDIS_TIMEOUT_SECS)
    return client


class CacheClient:
    """
    Async string cache over a shared Redis client.

    Holds no state of its own besides the client handle, so one instance
    serves every request.
    """

    def __init__(self, redis_client: redis.Redis | None) -> None:
        self.redis = redis_client

    def is_available(self) -> bool:
        """Return True if a Redis client is configured."""
        return self.redis is not None

    async def get(self, key: str) -> str | None:
        """Return the cached string, or None if missing or unavailable."""
        if self.redis is None:
            return None
        try:
            value = await self.redis.get(key)
        except redis.RedisError as e:
            logger.warning("Cache get failed for key %s: %s", key, e)
            return None
        logger.debug("Cache %s: %s", "HIT" if value is not None else "MISS", key)
        return value

    async def set(self, key: str, value: str, ttl: int | None = None, nx: bool = False) -> bool:
        """
        Store ``value``; returns True if Redis accepted it.

        With ``nx`` the key is only written if it doesn't exist yet, and
        False means another writer got there first.
        """
        if self.redis is None:
            return False
        try:
            stored = await self.redis.set(key, value, ex=ttl, nx=nx)
        except redis.RedisError as e:
            logger.warning("Cache set failed for key %s: %s", key, e)
            return False
        logger.debug("Cache SET%s: %s", " NX" if nx else "", key)
        return bool(stored)

    async def ping(self) -> bool:
        """Return True if Redis answers a ping."""
        if self.redis is None:
            return False
        try:
            return bool(await self.redis.ping())
        except redis.RedisError as e:
            logger.warning("Redis ping failed: %s", e)
            return False
