"""
Configuration Management for Expensivibe

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The data core has no required configuration: every field has a default
so a host can start with an empty environment.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where and how the document is persisted."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSIVIBE_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["file", "memory"] = Field(
        default="file",
        description="Storage backend: JSON file on disk or process memory"
    )
    data_dir: Path = Field(
        default=Path(".local/expensivibe"),
        description="Directory holding the document file"
    )
    storage_key: str = Field(
        default="fgexpensivibe_data",
        min_length=1,
        description="Well-known key the document is stored under"
    )
    export_filename: str = Field(
        default="expensivibe_data.json",
        min_length=1,
        description="Fixed filename used for exported snapshots"
    )
    quota_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=0,
        description="Maximum serialized document size (0 disables the check)"
    )

    @field_validator("storage_key")
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        """The key becomes a filename, so path separators are rejected."""
        if "/" in v or "\\" in v:
            raise ValueError("storage_key must not contain path separators")
        return v


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSIVIBE_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    json_output: bool = Field(
        default=True,
        description="Render log lines as JSON (False = human-readable console)"
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSIVIBE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    strict_lookups: bool = Field(
        default=False,
        description="Raise NotFoundError when updating an unknown identifier"
    )
    strict_import: bool = Field(
        default=False,
        description="Reject imported snapshots that do not match the document shape"
    )
    currency_symbol: str = Field(
        default="RM",
        description="Symbol used by format_currency"
    )
    notification_history: int = Field(
        default=50,
        ge=0,
        le=1000,
        description="How many notifications the notifier keeps for polling hosts"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus "<name>_error"
    entries describing any failure. Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "logging", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
