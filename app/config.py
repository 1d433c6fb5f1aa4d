"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

EXPO_PUSH_SEND_URL = "https://exp.host/--/api/v2/push/send"
EXPO_MAX_BATCH_SIZE = 100


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify caller JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before locally issued access tokens expire",
        gt=0,
    )
    expo_push_url: str = Field(
        default=EXPO_PUSH_SEND_URL,
        description="Endpoint of the Expo push relay",
        min_length=1,
    )
    expo_access_token: str | None = Field(
        default=None,
        description="Optional Expo access token sent as a bearer credential",
    )
    push_batch_size: int = Field(
        default=EXPO_MAX_BATCH_SIZE,
        description="Maximum number of push messages per relay request",
        ge=1,
        le=EXPO_MAX_BATCH_SIZE,
    )
    push_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to every push relay request",
        gt=0,
    )
    push_max_retries: int = Field(
        default=3,
        description="Retries performed for retryable push relay failures",
        ge=0,
    )
    push_retry_backoff_seconds: float = Field(
        default=0.5,
        description="Base delay of the exponential backoff between relay retries",
        ge=0,
    )
    entity_fetch_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout applied to each related entity lookup",
        gt=0,
    )
    trigger_secret: str | None = Field(
        default=None,
        description="Shared secret expected in the X-Trigger-Secret header",
    )
    booking_status_policy: Literal["strict", "permissive"] = Field(
        default="strict",
        description="Whether booking status transitions are checked against the transition table",
    )
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Level of the root logger configured on startup",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser (JSON list)",
    )

    @model_validator(mode="after")
    def _validate_push_settings(self) -> "Settings":
        if not self.expo_push_url.startswith(("http://", "https://")):
            raise ValueError("EXPO_PUSH_URL must be an http(s) URL")
        if self.expo_access_token is not None and not self.expo_access_token.strip():
            self.expo_access_token = None
        if self.trigger_secret is not None and not self.trigger_secret.strip():
            self.trigger_secret = None
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = [
    "EXPO_MAX_BATCH_SIZE",
    "EXPO_PUSH_SEND_URL",
    "Settings",
    "get_settings",
    "reset_settings_cache",
]
