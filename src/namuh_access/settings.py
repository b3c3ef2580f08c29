"""
namuh_access.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the API, session store and tier authority client.
- Hide secrets from repr/logging (JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="NAMUH_", case_sensitive=False)

    # Environment controls dev-only routes and auto-init of DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "namuh-access"
    log_level: str = "INFO"
    log_json: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "namuh-access"
    jwt_audience: str = "namuh-web"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    session_ttl_minutes: int = Field(default=60 * 24, ge=1)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./namuh_access.db"
    db_echo: bool = False
    db_busy_timeout_seconds: float = Field(default=5.0, gt=0)

    # Tier authority. None means the in-process reference authority (ASGI transport).
    tier_authority_url: str | None = None
    tier_authority_timeout_seconds: float = 5.0

    # Guard destinations (front-end routes)
    sign_in_route: str = "/login"
    applicant_home_route: str = "/dashboard"
    recruiter_home_route: str = "/recruiter/dashboard"
    upgrade_route: str = "/pricing"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Route destinations live here so the guard never hardcodes front-end paths.
