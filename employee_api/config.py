"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Registry address and transport policy come from the environment (never hardcoded at call sites)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box against a local registry
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Upstream registry
    registry_base_url: str = "http://localhost:8112/api/v1/employee"

    @field_validator("registry_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Collection endpoint is addressed without a trailing slash."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    registry_timeout_seconds: float = Field(10.0, gt=0)
    registry_max_retries: int = Field(1, ge=0)
    registry_base_delay_ms: int = Field(200, ge=0)
    registry_max_delay_ms: int = Field(5_000, ge=0)

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
