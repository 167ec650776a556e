"""Save path: validate, persist, then prime the cache."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..core.cache import CacheWriteResult, URLCache, put_best_effort
from ..core.database import URLStore
from ..core.exceptions import (
    AliasExistsError,
    ConflictError,
    InternalError,
    StorageError,
    ValidationError,
)
from ..utils.shortener import generate_alias, validate_alias, validate_target_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveResult:
    alias: str
    id: int
    cache_write: CacheWriteResult


class SaveService:
    """Create alias to URL mappings."""

    def __init__(
        self,
        store: URLStore,
        cache: URLCache,
        ttl: int,
        alias_length: int = 6,
        generation_attempts: int = 1,
        key_prefix: str = "",
        alias_factory: Callable[[int], str] = generate_alias,
    ):
        """Initialize the save service.

        Args:
            store: Durable mapping store
            cache: Cache primed after a successful save
            ttl: Cache entry lifetime in seconds
            alias_length: Length of generated aliases
            generation_attempts: Total tries for a generated alias that
                collides with a stored one. Caller-supplied aliases get one.
            key_prefix: Prefix prepended to aliases to form cache keys
            alias_factory: Produces a random alias of the given length
        """
        self.store = store
        self.cache = cache
        self.ttl = ttl
        self.alias_length = alias_length
        self.generation_attempts = max(1, generation_attempts)
        self.key_prefix = key_prefix
        self.alias_factory = alias_factory

    async def save(self, url: Optional[str], alias: Optional[str] = None) -> SaveResult:
        """Store ``url`` under ``alias``, generating an alias when none is given.

        Raises:
            ValidationError: URL missing or malformed, or alias malformed.
            ConflictError: The alias is already taken.
            InternalError: The store failed.
        """
        error = validate_target_url(url)
        if error is None and alias:
            error = validate_alias(alias)
        if error is not None:
            logger.info(f"Invalid save request: {error}")
            raise ValidationError(error)

        if alias:
            mapping_id = self._insert(url, alias)
        else:
            alias, mapping_id = self._insert_generated(url)

        cache_write = await put_best_effort(self.cache, self.key_prefix + alias, url, self.ttl)
        logger.info(f"url added: alias={alias} id={mapping_id}")
        return SaveResult(alias=alias, id=mapping_id, cache_write=cache_write)

    def _insert(self, url: str, alias: str) -> int:
        try:
            return self.store.save_url(url, alias)
        except AliasExistsError:
            logger.info(f"url already exists: alias={alias}")
            raise ConflictError("url already exists")
        except StorageError as e:
            logger.error(f"failed to add url: {e}")
            raise InternalError("failed to add url") from e

    def _insert_generated(self, url: str) -> tuple[str, int]:
        for attempt in range(1, self.generation_attempts + 1):
            alias = self.alias_factory(self.alias_length)
            try:
                return alias, self.store.save_url(url, alias)
            except AliasExistsError:
                logger.warning(
                    f"generated alias collided: alias={alias} "
                    f"attempt={attempt}/{self.generation_attempts}"
                )
            except StorageError as e:
                logger.error(f"failed to add url: {e}")
                raise InternalError("failed to add url") from e
        raise ConflictError("url already exists")
