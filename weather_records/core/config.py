from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration settings.

    This class loads configuration values from environment variables
    and optionally from a `.env` file. It uses Pydantic Settings
    to provide type validation and default values.

    Environment variables take precedence over `.env` values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------
    # Application settings
    # ---------------------------------------------------------------------

    app_name: str = Field(
        default="weather-records",
        alias="APP_NAME",
        description="Application name displayed in logs and API documentation",
    )

    environment: str = Field(
        default="local",
        alias="ENVIRONMENT",
        description="Runtime environment (local, dev, prod)",
    )

    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    # ---------------------------------------------------------------------
    # Storage settings
    # ---------------------------------------------------------------------

    database_url: str = Field(
        default="sqlite+aiosqlite:///./weather_records.db",
        alias="DATABASE_URL",
        description="Local record store connection URL",
    )

    storage_slot: str = Field(
        default="weatherRecords",
        alias="STORAGE_SLOT",
        description="Name of the storage slot holding the serialized record collection",
    )

    # ---------------------------------------------------------------------
    # External weather providers (Open-Meteo)
    # ---------------------------------------------------------------------

    geocoding_url: str = Field(
        default="https://geocoding-api.open-meteo.com/v1/search",
        alias="GEOCODING_URL",
        description="Open-Meteo geocoding search endpoint",
    )

    forecast_url: str = Field(
        default="https://api.open-meteo.com/v1/forecast",
        alias="FORECAST_URL",
        description="Open-Meteo current conditions and forecast endpoint",
    )

    archive_url: str = Field(
        default="https://archive-api.open-meteo.com/v1/archive",
        alias="ARCHIVE_URL",
        description="Open-Meteo historical archive endpoint",
    )

    http_timeout_s: Optional[float] = Field(
        default=30.0,
        alias="HTTP_TIMEOUT_S",
        description="Timeout in seconds for upstream requests (unset waits indefinitely)",
    )


# Singleton settings instance
settings = Settings()
