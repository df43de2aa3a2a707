"""Application configuration management using Pydantic's BaseSettings."""

from functools import lru_cache
from typing import Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings

from app.core.exceptions import ConfigurationMissing


class Settings(BaseSettings):
    """Defines all configuration settings for the dashboard, loaded from .env file."""

    # API Keys
    weather_api_key: Optional[str] = None
    google_api_key: Optional[str] = None
    kommunicate_app_id: Optional[str] = None

    # Database
    mongodb_uri: str
    mongodb_timeout_ms: int = 5000

    # App settings
    debug: bool = True
    log_level: str = "INFO"
    default_location: str = "New Delhi"
    api_base_url: str = "http://localhost:8000"

    # OpenWeather settings
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    request_timeout_seconds: float = 10.0

    # Gemini settings
    gemini_model: str = "gemini-2.0-flash-exp"
    advisory_timeout_seconds: float = 30.0

    # Upper bound for one full dashboard cycle (both fetches + advisory)
    cycle_timeout_seconds: float = 60.0

    class Config:
        """Pydantic model configuration."""

        env_file = ".env"


def load_settings(**overrides) -> Settings:
    """Builds the settings, failing fast when a required value is absent."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = [
            ".".join(str(part) for part in error["loc"])
            for error in e.errors()
            if error["type"] == "missing"
        ]
        if missing:
            raise ConfigurationMissing(missing) from e
        raise


@lru_cache
def get_settings() -> Settings:
    """Returns the process-wide settings, built once on first use."""
    return load_settings()
