"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a working default (no required environment variables)
    - daily_target_hours is strictly positive
    - get_settings() is cached (lru_cache) for the application shell only;
      AppCore receives its Settings explicitly at construction

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - LIFETRACKER_ env prefix keeps the variables namespaced
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="LIFETRACKER_", case_sensitive=False,
    )

    # Tracking
    daily_target_hours: float = 8.0
    default_task_name: str = "Untitled task"
    seed_default_categories: bool = True

    # Reminders (minutes), surfaced to the presentation layer
    work_reminder_interval: int | None = None
    break_reminder_interval: int | None = None

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("daily_target_hours")
    @classmethod
    def check_positive_target(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("daily_target_hours must be positive")
        return v

    @field_validator("default_task_name")
    @classmethod
    def strip_task_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("default_task_name cannot be empty or whitespace")
        return v

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
