"""Core package - configuration, storage, cache and logging utilities."""

from .config import settings, get_settings
from .database import Database, db, get_db
from .cache import RedisCache, cache, get_cache

__all__ = [
    "settings",
    "get_settings",
    "Database",
    "db",
    "get_db",
    "RedisCache",
    "cache",
    "get_cache",
]
