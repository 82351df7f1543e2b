"""
Configuration Management for Donation Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The storage keys themselves ("transactions", "theme") are part of the
persisted format and are NOT configurable; only where the data lives is.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DONATION_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path.home() / ".donation_tracker",
        description="Directory holding the storage file"
    )
    file_name: str = Field(
        default="storage.json",
        min_length=1,
        description="Name of the JSON file backing the key-value store"
    )

    @field_validator('file_name')
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        """The storage file must live directly inside data_dir."""
        if Path(v).name != v:
            raise ValueError(f"file_name must be a bare file name, got {v!r}")
        return v

    @property
    def storage_path(self) -> Path:
        """Full path of the storage file."""
        return self.data_dir.expanduser() / self.file_name


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Display
    recent_transactions_limit: int = Field(
        default=8,
        ge=1,
        le=100,
        description="How many transactions the home screen lists"
    )
    currency_symbol: str = Field(
        default="€",
        max_length=3,
        description="Symbol shown in front of amounts"
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

    Returns a dict of {setting_name: is_valid}, plus a
    "<name>_error" entry for every group that failed to load.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
