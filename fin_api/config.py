"""
Configuration Management Module

Environment-based settings for the finance API, read once at startup and
passed explicitly into the application factory.
"""

from datetime import timedelta
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """fin-api configuration"""

    model_config = SettingsConfigDict(
        env_prefix="FIN_API_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Database configuration
    database_url: str = "sqlite+aiosqlite:///fin_api.db"
    database_echo: bool = False  # Set to True for SQL logging
    auto_create_tables: bool = True

    # API configuration
    api_prefix: str = "/v1"

    # Security configuration
    jwt_secret: str = "change-me-in-production-fin-api-signing-key"
    jwt_algorithm: str = "HS256"
    jwt_expiry_hours: int = 24

    # Every use-case call is bounded by this budget
    context_timeout_seconds: float = 5.0

    # Logging configuration
    app_log_level: str = "INFO"
    third_party_log_level: str = "WARNING"
    log_file: Optional[str] = None  # If None, logs to stdout

    @property
    def token_expiry(self) -> timedelta:
        return timedelta(hours=self.jwt_expiry_hours)


def get_settings() -> Settings:
    """Load settings from the environment"""
    return Settings()
