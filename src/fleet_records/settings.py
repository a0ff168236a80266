"""
fleet_records.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (storage account API key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FLEET_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "fleet-records"
    log_level: str = "INFO"
    # Console rendering is easier to read in a local terminal.
    json_logs: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./fleet.db"
    # Caller-level timeout per statement; None disables it.
    query_timeout_s: float | None = 30.0

    # Storage usage (hosted Postgres account API, diagnostics only)
    storage_api_base_url: str = "https://console.neon.tech/api/v2"
    storage_project_id: str | None = None
    storage_api_key: str | None = Field(default=None, repr=False)
    storage_timeout_s: float = 10.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Every layer receives the same Settings object; tests build their own instance
# instead of mutating the cached one.
