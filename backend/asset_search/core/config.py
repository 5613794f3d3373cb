"""Runtime configuration helpers.

Classes:
    Settings: Pydantic settings model capturing environment-driven defaults.

Functions:
    get_settings(): Return a cached Settings instance for dependency injection.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Asset Search API"
    database_url: str = "sqlite+aiosqlite:///./data/asset_search.db"
    azure_openai_endpoint: Optional[str] = None
    azure_openai_api_key: SecretStr | None = None
    azure_openai_deployment_name: Optional[str] = None
    azure_openai_api_version: str = "2025-01-01-preview"
    embedding_dimensions: int | None = Field(default=1536, ge=1)
    embedding_timeout_seconds: float = Field(default=30.0, gt=0)
    embedding_max_attempts: int = Field(default=1, ge=1)
    search_default_limit: int = Field(default=60, ge=1)
    log_level: str = "INFO"
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])


@lru_cache()
def get_settings() -> Settings:
    return Settings()
