"""Configuration management for the shorty service.

This module provides centralized configuration management using Pydantic BaseSettings
with environment variable support and caching for performance.

Flow Diagram — get_settings()
=============================
::
    ┌─────────────┐
    │  Call get_  │
    │  settings() │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Check cache  │
    │ (lru_cache)  │
    └──────┬──────┘
    HIT?  │
    ┌─────┴─────┐
    │ NO         │ YES
    ▼            ▼
┌─────────┐  ┌─────────┐
│ Create  │  │ Return  │
│ Settings│  │ cached  │
│ instance│  │ value   │
└─────────┘  └─────────┘

How to Use
===========
**Step 1 — Import**::
    from shorty.config import get_settings

**Step 2 — Get settings**::
    settings = get_settings()
    length = settings.SHORT_CODE_LENGTH

Key Behaviours
===============
- Settings are cached after first access.
- Environment variables (and an optional .env file) override defaults.
- Variable names are case-sensitive.

Classes:
    Settings:  Pydantic model for all configuration values.
"""

__all__ = ["Settings", "get_settings"]

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "shorty"
    APP_ENV: str = "development"
    BASE_URL: str = "http://localhost:8000"

    # Short code allocation
    SHORT_CODE_LENGTH: int = Field(6, ge=4)
    MAX_GENERATION_ATTEMPTS: int = Field(100, ge=1)
    # Path segments served by the app itself; a link under one of these would be unreachable.
    RESERVED_SHORTCODES: list[str] = ["health", "metrics", "docs", "redoc"]

    # Logging
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
