"""Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a default: the library works without any environment
    - get_settings() is cached (lru_cache): single instance per process
    - Settings only affect declaration-time defaults and logging, never the
      behavior of a validator that has already been built

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - PARAMSPEC_ prefix: avoids clashing with the host application's own settings
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PARAMSPEC_", env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Field constructors
    enum_case_sensitive: bool = True
    regex_error_message: str = "Invalid"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
