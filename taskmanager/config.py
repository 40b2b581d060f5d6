"""
Task Manager - Configuration Management

Centralized configuration using Pydantic Settings.
Secrets and connection strings are loaded from environment variables.

A single Settings instance is built at startup and handed to the token
issuer, credential store and session ledger explicitly.
"""

from typing import List

from pydantic_settings import BaseSettings

from taskmanager.errors import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Attributes:
        DATABASE_URL: SQLAlchemy connection string
        SECRET_KEY: JWT signing key for access tokens
        JWT_ALGORITHM: JWT signature algorithm
        ACCESS_TOKEN_EXPIRE_MINUTES: Access token lifetime
        REFRESH_TOKEN_EXPIRE_DAYS: Refresh session lifetime
        BCRYPT_WORK_FACTOR: bcrypt cost (log2 rounds)
        ALLOWED_ORIGINS: CORS allowed origins
        LOG_LEVEL: Root log level for the service
    """
    
    # Database (PostgreSQL for production, SQLite for development)
    DATABASE_URL: str = "sqlite:///./taskmanager.db"
    
    # Security
    SECRET_KEY: str = ""  # Must be set via environment
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 10
    BCRYPT_WORK_FACTOR: int = 10
    
    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]
    
    LOG_LEVEL: str = "INFO"
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


def validate_settings(config: Settings) -> Settings:
    """
    Fail fast on missing required process inputs.
    
    Raises:
        ConfigurationError: If SECRET_KEY or DATABASE_URL is empty
    """
    missing = [
        name for name in ("SECRET_KEY", "DATABASE_URL")
        if not getattr(config, name)
    ]
    if missing:
        raise ConfigurationError(
            f"Missing required configuration: {', '.join(missing)}"
        )
    return config


settings = Settings()
