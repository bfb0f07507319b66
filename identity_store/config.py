"""Identity store configuration."""

from typing import Literal

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from identity_store.persistence.schema import DEFAULT_KEYSPACE


class DatabaseSettings(BaseModel):
    """Database configuration.

    Only the keyspace is configured here; contact points, credentials and
    load balancing belong to the session the application supplies.
    """

    keyspace: str = DEFAULT_KEYSPACE


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # If None, sends when a token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Identity store settings.

    Set environment variables to override, e.g.:

        ENVIRONMENT=production
        DATABASE__KEYSPACE=identity
        OBSERVABILITY__LOGFIRE_TOKEN=...
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows DATABASE__KEYSPACE syntax
        extra="ignore",
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    database: DatabaseSettings = DatabaseSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
