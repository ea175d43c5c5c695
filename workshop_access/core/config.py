"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from workshop_access.core.constants import (
    DEFAULT_INVALIDATION_CHANNEL,
    DEFAULT_PERMISSION_CACHE_TTL,
)


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults. validate_cache_and_redis
    rejects a non-positive decision TTL and an empty invalidation channel.
    """

    # App
    app_name: str = "workshop-access"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request identity: header carrying the authenticated actor id (set by the gateway)
    actor_header_name: str = "X-Actor-ID"

    # Permission decision cache
    permission_cache_ttl_seconds: float = DEFAULT_PERMISSION_CACHE_TTL

    # Redis invalidation fan-out (off by default: TTL bounds staleness across instances)
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    invalidation_channel: str = DEFAULT_INVALIDATION_CHANNEL

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_cache_and_redis(self) -> "Settings":
        """Validate decision cache TTL and invalidation channel."""
        if self.permission_cache_ttl_seconds <= 0:
            raise ValueError(
                "PERMISSION_CACHE_TTL_SECONDS must be positive, "
                f"got: {self.permission_cache_ttl_seconds!r}"
            )
        if self.redis_enabled and not self.invalidation_channel:
            raise ValueError(
                "INVALIDATION_CHANNEL is required when redis_enabled is true."
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
