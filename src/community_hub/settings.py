"""
community_hub.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the API, persistence and client layers.
- Hide secrets from repr/logging (JWT secret, bootstrap admin password).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Strict env-driven configuration with defaults that are safe for local dev.
    """

    model_config = SettingsConfigDict(env_prefix="COMMUNITY_", case_sensitive=False)

    # `dev` exposes internal error messages and auto-creates tables; `test` only auto-creates.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "community-hub"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3000
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:4200"])

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "community-hub"
    jwt_audience: str = "community-hub-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    access_token_ttl_minutes: int = 24 * 60

    # Optional administrator created on startup when both values are set.
    bootstrap_admin_email: str | None = None
    bootstrap_admin_password: str | None = Field(default=None, repr=False)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./community.db"

    # Listing
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)

    # Client-side quiet period before a filter change triggers a reload.
    list_debounce_seconds: float = 0.4


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Every layer receives this object explicitly (app factory, dependencies, client);
# nothing reads environment variables on its own.
