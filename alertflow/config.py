"""
Configuration settings for AlertFlow.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    APP_NAME: str = "AlertFlow"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Weather lookup
    WEATHER_API_URL: str = "https://api.open-meteo.com/v1/forecast"
    LOOKUP_TIMEOUT: float = 10.0  # Seconds
    HTTP_MAX_CONNECTIONS: int = 20
    HTTP_MAX_KEEPALIVE: int = 10

    # Alert drafts
    ALERT_SENDER: str = "weather-alerts@example.com"
    ALERT_SUBJECT: str = "Weather Alert"

    # Register the sample workflow on startup
    SEED_SAMPLE_WORKFLOW: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
