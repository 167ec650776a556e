"""Services package - save and lookup orchestration."""

from fastapi import Depends

from ..core.cache import RedisCache, get_cache
from ..core.config import Settings, get_settings
from ..core.database import Database, get_db
from .lookup import LookupResult, LookupService
from .save import SaveResult, SaveService


def get_save_service(
    db: Database = Depends(get_db),
    cache: RedisCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
) -> SaveService:
    """Build a save service for dependency injection."""
    return SaveService(
        store=db,
        cache=cache,
        ttl=settings.cache_ttl_seconds,
        alias_length=settings.alias_length,
        generation_attempts=settings.alias_generation_attempts,
        key_prefix=settings.cache_key_prefix,
    )


def get_lookup_service(
    db: Database = Depends(get_db),
    cache: RedisCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
) -> LookupService:
    """Build a lookup service for dependency injection."""
    return LookupService(
        store=db,
        cache=cache,
        ttl=settings.cache_ttl_seconds,
        key_prefix=settings.cache_key_prefix,
    )


__all__ = [
    "LookupResult",
    "LookupService",
    "SaveResult",
    "SaveService",
    "get_lookup_service",
    "get_save_service",
]
