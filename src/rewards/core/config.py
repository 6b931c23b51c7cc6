"""Application settings for the rewards service."""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven configuration values."""

    model_config = SettingsConfigDict(
        env_prefix="REWARDS_",
        env_file=".env",
        case_sensitive=False,
    )

    database_url: str = Field(
        default="sqlite:///./rewards.db",
        description="SQLAlchemy database URL (PostgreSQL in production).",
    )
    admin_identifiers: List[str] = Field(
        default_factory=lambda: ["admin@example.com"],
        min_length=1,
        description="E-mails or employee ids seeded into the admin registry.",
    )
    conflict_retry_attempts: int = Field(default=3, ge=1)
    conflict_retry_backoff_ms: int = Field(default=50, ge=0)
    default_page_size: int = Field(default=25, ge=1)
    max_page_size: int = Field(default=100, ge=1)
    leaderboard_size: int = Field(default=3, ge=1)
    serialize_sqlite_transactions: bool = Field(
        default=True,
        description="Open SQLite transactions with BEGIN IMMEDIATE so use cases serialize.",
    )
    log_level: str = Field(default="INFO")
    api_host: str = Field(default="0.0.0.0", description="Interface uvicorn binds to.")
    api_port: int = Field(default=8000, ge=1, le=65535)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
