"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Empty MONGODB_URL / DATABASE values fall back to the defaults
    - All timeouts are strictly positive

Design Decisions:
    - Settings read from the environment and an optional .env file
    - Every setting has a default matching a local mongod
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MONGODB_URL = "mongodb://localhost:27017"
DEFAULT_DATABASE = "example"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    mongodb_url: str = DEFAULT_MONGODB_URL
    database: str = DEFAULT_DATABASE

    @field_validator("mongodb_url", mode="before")
    @classmethod
    def default_empty_url(cls, v: str | None) -> str:
        return v or DEFAULT_MONGODB_URL

    @field_validator("database", mode="before")
    @classmethod
    def default_empty_database(cls, v: str | None) -> str:
        return v or DEFAULT_DATABASE

    connect_timeout_seconds: float = Field(10.0, gt=0)
    ping_timeout_seconds: float = Field(10.0, gt=0)
    query_timeout_seconds: float = Field(5.0, gt=0)

    # HTTP
    host: str = "0.0.0.0"
    port: int = 8080

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
