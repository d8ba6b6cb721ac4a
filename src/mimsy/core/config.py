"""Configuration management for the Mimsy SDK.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once per
process and is immutable afterwards.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SDK and CLI configuration settings.

    Settings are loaded from environment variables prefixed with ``MIMSY_``
    and from a local .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MIMSY_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "Mimsy"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"

    # Content API Settings
    api_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the remote content API",
    )
    http_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for content API requests",
    )

    # Project Layout Settings
    schema_file: str = "mimsy.schema.json"
    config_file: str = "mimsy.config.json"
    collections_file: str = "src/lib/collections.py"
    snapshots_dir: str = ".mimsy/schemas"

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the API URL so paths can be appended directly."""
        return v.rstrip("/")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()
