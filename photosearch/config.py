"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class UnsplashSettings(BaseModel):
    access_key: SecretStr | None = Field(
        default=None,
        description="Unsplash access key sent as the client_id query parameter.",
    )
    base_url: HttpUrl = Field(default="https://api.unsplash.com/")
    request_timeout_seconds: int = Field(default=10, ge=1, le=120)

    @field_validator("access_key", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class HistorySettings(BaseModel):
    key: str = Field(default="searchHistory", min_length=1)
    max_entries: int = Field(default=5, ge=1, le=100)


class DatabaseSettings(BaseModel):
    dsn: str = Field(
        default="sqlite+aiosqlite:///photosearch.db",
        description="SQLAlchemy async DSN used by the history storage.",
    )
    echo: bool = False


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PHOTOSEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    unsplash: UnsplashSettings = Field(default_factory=UnsplashSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)


@lru_cache
def get_settings() -> AppSettings:
    """Return cached settings instance."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "HistorySettings",
    "UnsplashSettings",
    "get_settings",
]
