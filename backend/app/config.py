"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - The storage connection string comes from MONGO_URI
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - mongo_db_name is only a fallback: a database named in the URI path wins
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    mongo_uri: str = "mongodb://localhost:27017/users_rest_api"
    mongo_db_name: str = "users_rest_api"
    mongo_server_selection_timeout_ms: int = 5000

    @field_validator("mongo_uri", mode="before")
    @classmethod
    def strip_mongo_uri(cls, v: str) -> str:
        """.env files often carry quotes or trailing whitespace."""
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
