"""Redis cache layer for URL shortener.

The cache is an optimization only. Every failure is reported as a
``CacheError`` so callers can fall back to the database; a missing key is
reported as ``CacheMissError``.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import redis.asyncio as redis
from redis.exceptions import RedisError

from .config import settings
from .exceptions import CacheError, CacheMissError

logger = logging.getLogger(__name__)


class URLCache(Protocol):
    """Key-value store with per-entry expiration."""

    async def get(self, key: str) -> str: ...

    async def put(self, key: str, value: str, ttl: int) -> None: ...


@dataclass(frozen=True)
class CacheWriteResult:
    """Outcome of a best-effort cache write."""

    key: str
    ok: bool
    error: Optional[Exception] = None


def parse_address(address: str) -> tuple[str, int]:
    """Split a ``host:port`` address, defaulting the port to 6379."""
    host, sep, port = address.rpartition(":")
    if not sep:
        return address, 6379
    return host, int(port)


class RedisCache:
    """Redis cache for alias to URL mappings."""

    def __init__(
        self,
        address: Optional[str] = None,
        password: Optional[str] = None,
        db: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize Redis cache.

        Args:
            address: Redis ``host:port``. Empty disables the cache.
            password: Optional Redis password
            db: Redis database number
            timeout: Socket connect/read timeout in seconds
        """
        self.address = settings.redis_address if address is None else address
        self.password = settings.redis_password if password is None else password
        self.db = settings.redis_db if db is None else db
        self.timeout = settings.cache_timeout if timeout is None else timeout
        self.client: Optional[redis.Redis] = None

    @property
    def enabled(self) -> bool:
        return self.client is not None

    async def connect(self) -> None:
        """Connect to Redis.

        A failed connection leaves the cache disabled; lookups then go
        straight to the database.
        """
        if not self.address:
            logger.info("Redis address not configured - caching disabled")
            return

        host, port = parse_address(self.address)
        client = redis.Redis(
            host=host,
            port=port,
            password=self.password or None,
            db=self.db,
            socket_timeout=self.timeout,
            socket_connect_timeout=self.timeout,
            decode_responses=True,
        )
        try:
            await client.ping()
        except RedisError as e:
            logger.error(f"Failed to connect to Redis at {self.address}: {e}")
            await client.aclose()
            return

        self.client = client
        logger.info(f"Connected to Redis at {self.address}")

    async def get(self, key: str) -> str:
        """Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value

        Raises:
            CacheMissError: The key is not cached.
            CacheError: Redis is unavailable or failed.
        """
        if self.client is None:
            raise CacheError("cache is not connected")

        try:
            value = await self.client.get(key)
        except RedisError as e:
            raise CacheError(f"cache get failed for {key!r}") from e

        if value is None:
            raise CacheMissError(key)
        return value

    async def put(self, key: str, value: str, ttl: int) -> None:
        """Set value in cache, replacing any existing entry.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Expiration in seconds

        Raises:
            CacheError: Redis is unavailable or failed.
        """
        if self.client is None:
            raise CacheError("cache is not connected")

        try:
            await self.client.set(key, value, ex=ttl)
        except RedisError as e:
            raise CacheError(f"cache set failed for {key!r}") from e

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            logger.info("Redis connection closed")


async def put_best_effort(
    cache: URLCache,
    key: str,
    value: str,
    ttl: int,
) -> CacheWriteResult:
    """Write to the cache, logging and returning any failure instead of raising."""
    try:
        await cache.put(key, value, ttl)
    except CacheError as e:
        logger.error(f"Failed to cache {key!r}: {e}")
        return CacheWriteResult(key=key, ok=False, error=e)
    return CacheWriteResult(key=key, ok=True)


# Global cache instance
cache = RedisCache()


def get_cache() -> RedisCache:
    """Get cache instance for dependency injection."""
    return cache
