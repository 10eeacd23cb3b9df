"""
resource_hub.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the API, auth, persistence and authz layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RESOURCE_HUB_", case_sensitive=False)

    # dev/test create tables on startup and expose the dev token router.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "resource-hub"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "resource-hub"
    jwt_audience: str = "resource-hub-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    access_token_ttl_minutes: int = Field(default=60, ge=1)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./resource_hub.db"

    # Status returned for InsufficientRole / NotOwner. 401 matches the legacy API;
    # Unauthenticated is always 401.
    forbidden_status_code: Literal[401, 403] = 401


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Tests build their own `Settings(...)` and pass it to `create_app`; the cached
# instance is only used by the process entrypoint.
