"""
Configuration management for the Casework service.

This module centralizes environment-driven configuration using Pydantic's
`BaseSettings`. The API, storage and LLM layers consume the shared `settings`
instance unless a test hands them an explicit `Settings` object.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import AnyUrl, Field, PositiveFloat, PositiveInt, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General application settings
    API_TITLE: str = "Casework API"
    API_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = Field("development", pattern=r"^(development|staging|production)$")
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: PositiveInt = 5000
    # Comma-separated in the environment, not JSON.
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])

    # Record store
    STORAGE_BACKEND: str = Field("memory", pattern=r"^(memory|mongodb)$")
    MONGODB_URL: AnyUrl = Field("mongodb://localhost:27017")
    MONGODB_DATABASE: str = "casework"
    SEED_DEFAULT_USERS: bool = True

    # LLM provider configuration
    OPENAI_API_KEY: Optional[str] = None
    ANTHROPIC_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o"
    CLAUDE_MODEL: str = "claude-3-5-sonnet-20240620"
    LLM_TIMEOUT_SECONDS: PositiveFloat = 20.0
    LLM_MAX_TOKENS: PositiveInt = 800

    @field_validator("ALLOWED_ORIGINS", mode="before")
    def _split_origins(cls, value: str | List[str]) -> List[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache()
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()


# Singleton-style settings instance for modules that prefer direct access.
settings = get_settings()
