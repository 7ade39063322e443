"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

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
        default="sqlite:///./carecomm.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone (or UTC offset) used to evaluate quiet hours",
    )
    default_facility_id: int = Field(
        default=1,
        description="Facility recorded on audit rows when a request carries none",
        gt=0,
    )
    twilio_account_sid: str | None = Field(
        default=None, description="Twilio account SID used for SMS and voice calls"
    )
    twilio_auth_token: str | None = Field(
        default=None, description="Twilio auth token paired with the account SID"
    )
    twilio_from_number: str | None = Field(
        default=None,
        description="Twilio phone number used as the sender for SMS and voice calls",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending notification emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of notification emails",
        min_length=3,
    )
    fcm_project_id: str | None = Field(
        default=None, description="Firebase project that owns the push credentials"
    )
    fcm_credentials_path: str | None = Field(
        default=None,
        description="Path to the Firebase service account JSON file",
    )
    provider_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to outbound HTTP calls made by delivery providers",
        gt=0,
    )

    @model_validator(mode="after")
    def _validate_credential_groups(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")

        twilio_values = (
            self.twilio_account_sid,
            self.twilio_auth_token,
            self.twilio_from_number,
        )
        if any(twilio_values) and not all(twilio_values):
            raise ValueError(
                "TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN and TWILIO_FROM_NUMBER must be "
                "provided together"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
