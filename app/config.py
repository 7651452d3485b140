"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    sendgrid_sender_name: str = Field(
        default="CareerSync",
        description="Display name attached to the sender address",
    )
    app_base_url: str = Field(
        default="https://app.careersync.com",
        description="Public URL of the web application used to build links in emails",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone (or UTC±HH:MM offset) used for send-time optimisation",
    )
    default_min_delay_minutes: int = Field(
        default=15,
        description="Minimum delay applied to scheduled notifications when none is provided",
        ge=0,
    )
    scheduled_batch_size: int = Field(
        default=50,
        description="Maximum number of due scheduled notifications promoted per run",
        gt=0,
    )
    send_time_strategy: Literal["engagement", "fixed"] = Field(
        default="engagement",
        description="Strategy used to pick the optimal delivery time of a notification",
    )
    engagement_lookback_days: int = Field(
        default=90,
        description="Window of engagement history considered by the send-time optimiser",
        gt=0,
    )
    engagement_min_events: int = Field(
        default=5,
        description="Minimum number of engagement events required to trust a send-time estimate",
        gt=0,
    )
    dispatch_api_key: str | None = Field(
        default=None,
        description="Shared secret required in the X-Api-Key header of trigger endpoints",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @property
    def normalized_base_url(self) -> str:
        """Return ``app_base_url`` without a trailing slash."""

        return self.app_base_url.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
