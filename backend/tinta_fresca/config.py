"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - Store URL and identity-provider URL/keys have no defaults: missing ones stop the process
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings
"""

import logging
from functools import lru_cache

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def asyncpg_url(url: str) -> str:
    """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    database_url: str

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        return asyncpg_url(v) if isinstance(v, str) else v

    database_pool_size: int = 10
    database_max_overflow: int = 5

    # Identity provider
    supabase_url: str
    supabase_anon_key: str
    supabase_service_role_key: str
    identity_timeout_seconds: float = 10.0

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Authorization: unset means any authenticated identity may use /api/admin
    admin_role: str | None = None

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_settings_or_exit() -> Settings:
    """Load settings, exiting the process when required configuration is absent."""
    try:
        return get_settings()
    except ValidationError as e:
        missing = [
            ".".join(str(loc) for loc in err["loc"]).upper()
            for err in e.errors()
        ]
        logger.critical(
            f"Missing or invalid configuration: {', '.join(missing)}. "
            "Check your environment or .env file.",
        )
        raise SystemExit(1) from e
