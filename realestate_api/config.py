"""
Configuration management using Pydantic settings.
Handles the database URL, JWT secret, pagination and bootstrap options from the environment.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings read from environment variables or a .env file."""

    # Application configuration
    app_name: str = "Real Estate Listings API"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database configuration - must be supplied externally
    database_url: str

    # JWT configuration
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # API configuration
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8080"]
    max_request_size: int = 1024 * 1024  # 1MB

    # Pagination
    default_page_size: int = 10
    favorite_page_sizes: List[int] = [5, 10, 30]

    # Listings can be browsed without a token unless disabled
    public_real_estate_reads: bool = True

    # Default administrator created on startup
    bootstrap_admin: bool = True
    admin_name: str = "Admin"
    admin_email: str = "admin@example.com"
    admin_password: Optional[str] = None

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v):
        """Ensure an async driver is used."""
        if not v:
            raise ValueError("DATABASE_URL is required")
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+asyncpg://", 1)
        if v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret_key(cls, v):
        """Validate JWT secret key strength."""
        if not v:
            raise ValueError("JWT_SECRET_KEY is required")
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters long")
        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "testing", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @field_validator("favorite_page_sizes")
    @classmethod
    def validate_favorite_page_sizes(cls, v):
        if not v or any(size < 1 for size in v):
            raise ValueError("Favorite page sizes must be positive integers")
        return sorted(set(v))

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one instance of settings throughout the app lifecycle.
    """
    return Settings()
