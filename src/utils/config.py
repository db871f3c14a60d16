"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Application Settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # URL validation (HEAD requests against links found in content)
    URL_VALIDATION_TIMEOUT: float = 10.0
    URL_VALIDATION_CONCURRENCY: int = 5
    URL_VALIDATION_FOLLOW_REDIRECTS: bool = True
    URL_VALIDATION_USER_AGENT: str = "DefangSEOAnalyzer/0.1 (+https://defang.io)"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields in .env file
        case_sensitive = False  # Allow both UPPERCASE and lowercase


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()
