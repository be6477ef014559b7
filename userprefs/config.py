"""
Application configuration using environment variables.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import List, Literal


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "UserPrefs API"
    debug: bool = False
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 8080

    # Database (user directory)
    database_url: str = "sqlite:///:memory:"
    seed_users: bool = True

    # User settings store
    settings_merge_policy: Literal["shallow", "deep", "replace"] = "shallow"

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Rate limiting
    rate_limit: str = "100/minute"

    class Config:
        env_prefix = "USERPREFS_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
