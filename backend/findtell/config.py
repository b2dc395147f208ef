"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Components receive settings values through dependencies, never read os.environ

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Secrets default to None, not placeholders: a missing admin token must surface as
      a configuration fault, not as a token anyone could guess
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database (backs the key-value store)
    database_url: str = (
        "postgresql+asyncpg://findtell:findtell@db:5432/findtell"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 5

    # Admin gate
    admin_token: str | None = None

    # Lemon Squeezy licensing provider
    lemon_squeezy_api_key: str | None = None
    lemon_squeezy_product_id: str | None = None
    lemon_squeezy_api_url: str = "https://api.lemonsqueezy.com/v1"
    lemon_squeezy_timeout_seconds: float = 10.0
    lemon_squeezy_webhook_secret: str | None = None

    # Thumbnails
    thumbnail_cache_seconds: int = 3600

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
