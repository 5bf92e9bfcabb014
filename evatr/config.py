"""Library configuration via pydantic-settings.

Values are read from environment variables (``EVATR_`` prefix) or a ``.env``
file. Settings are organized into logical groups and composed into a single
Settings object.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """eVatR REST endpoint and transport settings."""

    model_config = SettingsConfigDict(env_prefix="EVATR_", env_file=".env", extra="ignore")

    host: str = Field(
        default="https://api.evatr.vies.bzst.de",
        description="eVatR API host (used for /api-docs)",
    )
    base_path: str = Field(default="/app/v1", description="Versioned API path below the host")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")

    @property
    def base_url(self) -> str:
        """Versioned API base URL."""
        return self.host.rstrip("/") + self.base_path


class StatusSettings(BaseSettings):
    """Status message registry loading settings."""

    model_config = SettingsConfigDict(env_prefix="EVATR_", env_file=".env", extra="ignore")

    status_file_loading: bool = Field(
        default=False,
        description="Prefer an on-disk statusmeldungen.json snapshot over the built-in table",
    )
    status_cache_ttl: float = Field(default=300.0, description="Snapshot cache TTL in seconds")
    status_file: str = Field(
        default="",
        description="Extra snapshot path, tried before the default locations",
    )


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.api.base_url
        settings.status.status_cache_ttl
    """

    model_config = SettingsConfigDict(env_prefix="EVATR_", env_file=".env", extra="ignore")

    log_level: str = Field(default="INFO")
    docs_dir: str = Field(default="./docs", description="Directory used by the update checker")

    api: ApiSettings = Field(default_factory=ApiSettings)
    status: StatusSettings = Field(default_factory=StatusSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper


# Module-level singleton; import this wherever settings are needed.
settings = Settings()
