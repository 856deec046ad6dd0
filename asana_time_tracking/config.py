"""Client Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - The access token comes from the environment or .env (never hardcoded)
    - get_settings() is cached (lru_cache): one instance per process
    - asana_base_url always ends with "/" so relative paths resolve under it

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every non-secret setting
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://app.asana.com/api/1.0/"


class Settings(BaseSettings):
    """Client settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Asana
    asana_access_token: str = ""
    asana_base_url: str = DEFAULT_BASE_URL
    asana_timeout_seconds: float = Field(30.0, gt=0)
    asana_max_retries: int = Field(3, ge=0)
    asana_initial_backoff_seconds: int = Field(1, ge=0)

    @field_validator("asana_base_url", mode="before")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """httpx drops the last path segment of a base URL without a trailing slash."""
        if isinstance(v, str) and not v.endswith("/"):
            return v + "/"
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
