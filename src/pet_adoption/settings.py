"""
pet_adoption.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT secret).
- Offer a cached settings instance for the process entrypoint.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration with defaults that are safe for local dev.
    One instance is built at startup and stored on `app.state`.
    """

    model_config = SettingsConfigDict(env_prefix="PETADOPT_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "pet-adoption-api"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "pet-adoption-api"
    jwt_audience: str = "pet-adoption-spa"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    jwt_ttl_minutes: int = Field(default=60, ge=1)

    # bcrypt accepts cost factors 4..31; tests drop to 4 to stay fast.
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./pet_adoption.db"
    database_busy_timeout_s: float = Field(default=30.0, gt=0)

    # CORS (the SPA is served from its own origin)
    cors_origins: list[str] = ["*"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Request handlers read settings from `app.state.settings` (see `api.deps`), so
# tests can build an app with explicit settings without touching the cache.
