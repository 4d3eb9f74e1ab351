"""
Application configuration using pydantic-settings.
Loads environment variables from .env file.

Nested config groups (FeedbackConfig, ThrottleConfig) are env-overridable
via the double-underscore delimiter, e.g.:
    FEEDBACK__AUTO_HIDE_MS=10000
    FEEDBACK__TEARDOWN_DELAY_MS=0
    THROTTLE__MAX_PER_SESSION=3
"""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FeedbackConfig(BaseModel):
    """Confidence prompt timings, in milliseconds."""

    # Cosmetic delay before the prompt becomes visible (0 = no entrance animation)
    entrance_delay_ms: int = Field(default=100, ge=0)
    auto_hide_ms: int = Field(default=20000, gt=0)
    # "Thanks for the feedback" acknowledgement shown after a rating
    ack_delay_ms: int = Field(default=1500, ge=0)
    # Exit animation window between hiding and notifying the host
    teardown_delay_ms: int = Field(default=200, ge=0)


class ThrottleConfig(BaseModel):
    """Session limits for raising the confidence prompt."""

    max_per_session: int = Field(default=2, ge=0)
    cooldown_seconds: int = Field(default=60, ge=0)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # App Settings
    debug: bool = False

    # Nested config groups (env-overridable via SECTION__KEY format)
    feedback: FeedbackConfig = Field(default_factory=FeedbackConfig)
    throttle: ThrottleConfig = Field(default_factory=ThrottleConfig)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
