"""Redirect path: cache first, database on miss, then write back."""

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.cache import CacheWriteResult, URLCache, put_best_effort
from ..core.database import URLStore
from ..core.exceptions import (
    CacheError,
    CacheMissError,
    InternalError,
    NotFoundError,
    StorageError,
    URLNotFoundError,
    ValidationError,
)
from ..utils.shortener import is_static_asset

logger = logging.getLogger(__name__)

SOURCE_CACHE = "cache"
SOURCE_STORE = "store"


@dataclass(frozen=True)
class LookupResult:
    url: str
    source: str
    cache_write: Optional[CacheWriteResult] = None


class LookupService:
    """Resolve aliases to their target URLs."""

    def __init__(self, store: URLStore, cache: URLCache, ttl: int, key_prefix: str = ""):
        self.store = store
        self.cache = cache
        self.ttl = ttl
        self.key_prefix = key_prefix

    async def resolve(self, alias: str) -> LookupResult:
        """Find the URL stored under ``alias``.

        Cache errors never reach the caller; they only cost a database read.

        Raises:
            ValidationError: The alias is empty.
            NotFoundError: Nothing is stored under the alias.
            InternalError: The store failed.
        """
        if not alias:
            logger.info("alias is empty")
            raise ValidationError("invalid request")
        if is_static_asset(alias):
            raise NotFoundError("not found")

        key = self.key_prefix + alias
        try:
            url = await self.cache.get(key)
        except CacheMissError:
            logger.debug(f"cache miss: alias={alias}")
        except CacheError as e:
            logger.error(f"failed to get url from cache: {e}")
        else:
            logger.info(f"got url from cache: alias={alias}")
            return LookupResult(url=url, source=SOURCE_CACHE)

        try:
            url = self.store.get_url(alias)
        except URLNotFoundError:
            logger.info(f"url not found: alias={alias}")
            raise NotFoundError("not found")
        except StorageError as e:
            logger.error(f"failed to get url: {e}")
            raise InternalError("internal error") from e

        logger.info(f"got url from storage: alias={alias}")
        cache_write = await put_best_effort(self.cache, key, url, self.ttl)
        return LookupResult(url=url, source=SOURCE_STORE, cache_write=cache_write)
