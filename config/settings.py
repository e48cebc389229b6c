"""
Global application settings built on Pydantic Settings.
Values come from environment variables (or a .env file) with defaults.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main storefront settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: Literal["development", "production", "testing"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Catalog API (mandatory, no built-in fallback)
    directus_url: str = Field(..., min_length=1)
    directus_token: SecretStr

    # Timeouts
    request_timeout: float = Field(default=30.0, gt=0, le=120)

    # Revalidation window for raw upstream responses (0 disables)
    cache_ttl_seconds: int = Field(default=300, ge=0, le=3600)
    cache_max_entries: int = Field(default=128, ge=1)

    # Pagination
    default_page_size: int = Field(default=30, ge=1)
    max_page_size: int = Field(default=1000, ge=1)

    # Size filter index
    size_index_path: Path = Field(default=Path("./public/size-filter-data.json"))
    size_index_page_size: int = Field(default=500, ge=1, le=5000)
    size_index_fallback_limit: int = Field(default=1000, ge=1)

    # Paths
    vendor_data_path: Path = Field(default=Path("./data"))
    log_path: Path = Field(default=Path("./logs"))

    @field_validator("directus_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Removes the trailing slash so paths can be joined safely."""
        return v.strip().rstrip("/")

    @property
    def is_production(self) -> bool:
        return self.env == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Returns the singleton settings instance.
    Cached so the .env file is read only once.
    """
    return Settings()
