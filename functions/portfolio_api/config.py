"""
Configuration and settings for the portfolio backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_prefix: str = Field(default="/api")

    # Database binding (Postgres in production, SQLite locally)
    database_url: Optional[str] = Field(default=None)

    # Run without a database: every storage call becomes a no-op.
    offline_mode: bool = Field(
        default=False,
        validation_alias=AliasChoices("offline_mode", "PORTFOLIO_OFFLINE_MODE"),
    )
    environment: str = Field(
        default="production",
        validation_alias=AliasChoices("environment", "PORTFOLIO_ENV"),
    )

    # Cross-origin policy for /api/*
    cors_origin: str = Field(default="https://www.kichu.space")
    cors_max_age: int = Field(default=3600)

    # Where the admin token is read from on mutating routes.
    auth_transport: Literal["bearer", "cookie"] = Field(default="bearer")
    auth_cookie_name: str = Field(default="admin-auth")

    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
