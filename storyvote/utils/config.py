"""
Configuration settings for the application.
"""

import os
from functools import lru_cache
from typing import List
from pydantic import ConfigDict
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    DATABASE_URL_DEV: str = os.getenv("DATABASE_URL_DEV", "")

    # Security
    ADMIN_API_KEY: str = os.getenv("ADMIN_API_KEY", "")
    IP_SALT: str = os.getenv("IP_SALT", "default-salt")

    # Voting sessions
    SESSION_TIMEZONE: str = os.getenv("SESSION_TIMEZONE", "UTC")
    ENFORCE_SESSION_WINDOW: bool = os.getenv("ENFORCE_SESSION_WINDOW", "True").lower() == "true"

    # Rate limiting (one submission and one vote per IP per slot)
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "True").lower() == "true"
    RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", str(24 * 60 * 60)))

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    RELOAD: bool = os.getenv("RELOAD", "True").lower() == "true"
    ALLOWED_ORIGINS: str = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:8000")

    # Development data
    SEED_DEMO_DATA: bool = os.getenv("SEED_DEMO_DATA", "False").lower() == "true"

    model_config = ConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="allow"
    )

    @property
    def allowed_origins(self) -> List[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
