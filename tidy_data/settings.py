"""Runtime configuration.

Values come from environment variables prefixed with ``TIDY_DATA_`` or from
a ``.env`` file in the working directory.

Usage:
    from tidy_data.settings import get_settings

    limit = get_settings().PREVIEW_ROWS
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="TIDY_DATA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    LOG_LEVEL: str = Field(default="INFO", description="Root log level")
    PREVIEW_ROWS: int = Field(default=100, ge=0, description="Output rows (header included) shown in the response preview")
    DOWNLOAD_FILENAME: str = Field(default="tidy-data.csv", description="Attachment name for downloads")
    MAX_UPLOAD_BYTES: int = Field(default=10 * 1024 * 1024, gt=0, description="Largest accepted upload")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
