from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings - only define what needs validation."""

    # Persistence
    DATA_FILE: str = "data.json"

    # Server
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 3001
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # "development", "production", "test"
    LOG_LEVEL: str = "INFO"

    # Admin claim sent by the frontend (not verified)
    ADMIN_ROLE_HEADER: str = "x-role"
    ADMIN_ROLE_VALUE: str = "admin"

    CORS_ALLOW_ORIGIN: str = "*"

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    WRITE_RATE_LIMIT: str = "60/minute"

    # Issue certificates only for completed progress records
    CERTIFICATE_REQUIRES_COMPLETION: bool = False

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="allow",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    if not settings.DATA_FILE:
        msg = "DATA_FILE environment variable is not set"
        raise ValueError(msg)
    return settings
