"""Tests for the Redis cache layer."""

from unittest.mock import AsyncMock, patch

import pytest
import redis

from url_shortener.core.cache import RedisCache, parse_address, put_best_effort
from url_shortener.core.exceptions import CacheError, CacheMissError


@pytest.fixture
def redis_client():
    """Mock an asyncio Redis client."""
    return AsyncMock()


@pytest.fixture
def redis_cache(redis_client):
    cache = RedisCache(address="localhost:6379", password="", db=0, timeout=1.0)
    cache.client = redis_client
    return cache


class TestRedisCache:
    """Tests for RedisCache."""

    @pytest.mark.asyncio
    async def test_get_hit(self, redis_cache, redis_client):
        redis_client.get.return_value = "https://example.com"
        assert await redis_cache.get("abc") == "https://example.com"
        redis_client.get.assert_awaited_once_with("abc")

    @pytest.mark.asyncio
    async def test_get_miss(self, redis_cache, redis_client):
        redis_client.get.return_value = None
        with pytest.raises(CacheMissError):
            await redis_cache.get("abc")

    @pytest.mark.asyncio
    async def test_get_connection_error_is_not_a_miss(self, redis_cache, redis_client):
        redis_client.get.side_effect = redis.exceptions.ConnectionError("refused")
        with pytest.raises(CacheError) as exc_info:
            await redis_cache.get("abc")
        assert not isinstance(exc_info.value, CacheMissError)

    @pytest.mark.asyncio
    async def test_put_sets_ttl(self, redis_cache, redis_client):
        await redis_cache.put("abc", "https://example.com", 300)
        redis_client.set.assert_awaited_once_with("abc", "https://example.com", ex=300)

    @pytest.mark.asyncio
    async def test_put_timeout(self, redis_cache, redis_client):
        redis_client.set.side_effect = redis.exceptions.TimeoutError()
        with pytest.raises(CacheError):
            await redis_cache.put("abc", "https://example.com", 300)

    @pytest.mark.asyncio
    async def test_not_connected(self):
        cache = RedisCache(address="localhost:6379")
        with pytest.raises(CacheError):
            await cache.get("abc")
        with pytest.raises(CacheError):
            await cache.put("abc", "https://example.com", 300)

    @pytest.mark.asyncio
    async def test_connect_without_address(self):
        cache = RedisCache(address="")
        await cache.connect()
        assert not cache.enabled

    @pytest.mark.asyncio
    async def test_connect_failure_disables_cache(self):
        client = AsyncMock()
        client.ping.side_effect = redis.exceptions.ConnectionError("refused")
        with patch("url_shortener.core.cache.redis.Redis", return_value=client):
            cache = RedisCache(address="localhost:6379")
            await cache.connect()
        assert not cache.enabled
        client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_connect_and_close(self):
        client = AsyncMock()
        with patch("url_shortener.core.cache.redis.Redis", return_value=client) as factory:
            cache = RedisCache(address="cache.internal:6380", password="pw", db=2, timeout=0.5)
            await cache.connect()

        assert cache.enabled
        kwargs = factory.call_args.kwargs
        assert kwargs["host"] == "cache.internal"
        assert kwargs["port"] == 6380
        assert kwargs["password"] == "pw"
        assert kwargs["db"] == 2
        assert kwargs["socket_timeout"] == 0.5

        await cache.close()
        client.aclose.assert_awaited_once()
        assert not cache.enabled


class TestPutBestEffort:
    """Tests for put_best_effort."""

    @pytest.mark.asyncio
    async def test_success(self, redis_cache):
        result = await put_best_effort(redis_cache, "abc", "https://example.com", 300)
        assert result.ok
        assert result.error is None

    @pytest.mark.asyncio
    async def test_failure_is_returned(self, redis_cache, redis_client):
        redis_client.set.side_effect = redis.exceptions.ConnectionError("refused")
        result = await put_best_effort(redis_cache, "abc", "https://example.com", 300)
        assert not result.ok
        assert isinstance(result.error, CacheError)


def test_parse_address():
    assert parse_address("localhost:6379") == ("localhost", 6379)
    assert parse_address("redis") == ("redis", 6379)
