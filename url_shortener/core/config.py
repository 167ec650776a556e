"""Application configuration settings."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="URL_SHORTENER_",
        extra="ignore",
    )

    # Environment: local, dev or prod
    env: str = "local"
    log_level: Optional[str] = None

    # Database
    database_url: str = "url_shortener.db"
    database_timeout: float = 5.0

    # Cache (an empty address disables caching)
    redis_address: str = "localhost:6379"
    redis_password: str = ""
    redis_db: int = 0
    cache_timeout: float = 1.0
    cache_ttl_seconds: int = 300
    cache_key_prefix: str = ""

    # Application
    app_title: str = "URL Shortener Service"
    app_version: str = "0.1.0"
    app_description: str = "Short aliases for long URLs, cached in Redis"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8082
    idle_timeout: int = 60
    shutdown_timeout: int = 10
    http_user: str = ""
    http_password: str = ""

    # Aliases
    alias_length: int = 6
    alias_generation_attempts: int = 1

    @property
    def auth_enabled(self) -> bool:
        """Whether saving requires HTTP Basic credentials."""
        return bool(self.http_user and self.http_password)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
