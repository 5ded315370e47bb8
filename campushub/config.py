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
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str = Field(
        default="noreply@campushub.com",
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    openai_api_key: str | None = Field(
        default=None, description="API key for the hosted tag suggestion model"
    )
    openai_base_url: str | None = Field(
        default=None, description="Optional base URL for OpenAI compatible providers"
    )
    openai_model: str = Field(default="gpt-4.1-mini")
    openai_temperature: float = Field(default=0.2, ge=0, le=2)
    openai_max_output_tokens: int | None = Field(default=None)
    azure_storage_connection_string: str | None = Field(
        default=None, description="Connection string for the event image storage account"
    )
    azure_storage_container_name: str = Field(default="event-images")
    app_timezone: str | None = Field(default=None)
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma separated list of origins allowed to call the API",
    )

    @model_validator(mode="after")
    def _validate_sendgrid_sender(self) -> "Settings":
        if "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    def cors_origin_list(self) -> list[str]:
        """Return the configured CORS origins as a list."""

        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
