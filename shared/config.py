"""
Centralized configuration for the Userhub services.

All settings are loaded from environment variables with sensible defaults.
Both the JSON API and the web front end read the same settings object.
"""

from datetime import timedelta
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="USERHUB_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Userhub API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    api_port: int = 8090
    web_port: int = 8080
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:8080"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Tokens
    domain: str = "example.com"
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_leeway_seconds: int = 0
    access_token_expiry_minutes: int = 15
    refresh_token_expiry_hours: int = 24
    refresh_grace_hours: int = 12

    # Database
    database_url: str = (
        "host=localhost port=5433 user=postgres password=postgres "
        "dbname=users sslmode=disable connect_timeout=5"
    )
    db_pool_min: int = 1
    db_pool_max: int = 10
    user_store: str = "postgres"  # "postgres" or "memory"

    # Web front end
    session_secret: str = "change-me-in-production"
    session_max_age: int = 24 * 60 * 60  # seconds
    templates_dir: str = ""

    @property
    def access_token_expiry(self) -> timedelta:
        return timedelta(minutes=self.access_token_expiry_minutes)

    @property
    def refresh_token_expiry(self) -> timedelta:
        return timedelta(hours=self.refresh_token_expiry_hours)

    @property
    def refresh_grace(self) -> timedelta:
        return timedelta(hours=self.refresh_grace_hours)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
