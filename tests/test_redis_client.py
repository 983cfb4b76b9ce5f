# =============================================================================
# tests/test_redis_client.py - Cache Wrapper Tests
# =============================================================================

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError, TimeoutError as RedisTimeoutError

from lib.redis_client import CacheClient, create_redis_client


@pytest.fixture
def redis_mock():
    mock = MagicMock()
    mock.get = AsyncMock(return_value="value")
    mock.set = AsyncMock(return_value=True)
    mock.ping = AsyncMock(return_value=True)
    return mock


class TestCreateRedisClient:
    def test_disabled_returns_none(self, settings):
        assert create_redis_client(settings) is None

    def test_enabled_builds_client_with_timeouts(self, settings):
        enabled = settings.model_copy(update={"REDIS_ENABLED": True, "REDIS_TIMEOUT_SECS": 2})

        client = create_redis_client(enabled)

        assert client is not None
        kwargs = client.connection_pool.connection_kwargs
        assert kwargs["socket_timeout"] == 2
        assert kwargs["decode_responses"] is True


class TestCacheClient:
    @pytest.mark.asyncio
    async def test_without_client_everything_misses(self):
        cache = CacheClient(None)

        assert cache.is_available() is False
        assert await cache.get("key") is None
        assert await cache.set("key", "value") is False
        assert await cache.ping() is False

    @pytest.mark.asyncio
    async def test_get_and_set(self, redis_mock):
        cache = CacheClient(redis_mock)

        assert await cache.get("key") == "value"
        assert await cache.set("key", "value", ttl=60) is True
        redis_mock.set.assert_awaited_once_with("key", "value", ex=60, nx=False)

    @pytest.mark.asyncio
    async def test_set_if_absent_reports_existing_key(self, redis_mock):
        # redis-py returns None when NX finds the key already set
        redis_mock.set.return_value = None
        cache = CacheClient(redis_mock)

        assert await cache.set("key", "value", nx=True) is False
        redis_mock.set.assert_awaited_once_with("key", "value", ex=None, nx=True)

    @pytest.mark.asyncio
    async def test_errors_become_misses(self, redis_mock):
        redis_mock.get.side_effect = RedisTimeoutError("slow")
        redis_mock.set.side_effect = RedisConnectionError("refused")
        redis_mock.ping.side_effect = RedisConnectionError("refused")
        cache = CacheClient(redis_mock)

        assert await cache.get("key") is None
        assert await cache.set("key", "value") is False
        assert await cache.ping() is False
