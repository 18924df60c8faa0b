"""
Application configuration management
Loads environment variables and provides type-safe configuration access
Supports both local .env files and cloud environment variables
"""

from functools import lru_cache
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


def get_env_file() -> str | None:
    """
    Determine which .env file to use (if any).
    Priority: .env.production > .env > None (cloud env vars only)
    """
    if Path(".env.production").exists():
        return ".env.production"
    elif Path(".env").exists():
        return ".env"
    return None


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Built once when the application factory runs and stored on
    ``app.state.settings``. Request handlers read it from there.
    """

    model_config = SettingsConfigDict(
        env_file=get_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Database
    DATABASE_URL: str
    DATABASE_ECHO: bool = False
    DB_CREATE_TABLES: bool = True

    # Judge0 (RapidAPI hosted by default, self-hosted instances need no key)
    JUDGE0_API_URL: str = "https://judge0-ce.p.rapidapi.com"
    RAPIDAPI_KEY: str | None = None
    RAPIDAPI_HOST: str = "judge0-ce.p.rapidapi.com"
    JUDGE0_TIMEOUT_SECONDS: float = 30.0

    # Application URLs
    FRONTEND_URL: str = "http://localhost:3000"
    PORT: int = 5000

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "production"
    DEBUG: bool = False

    # CORS
    @property
    def CORS_ORIGINS(self) -> list[str]:
        """Get allowed CORS origins"""
        origins = [self.FRONTEND_URL]
        if self.ENVIRONMENT == "development":
            origins.extend([
                "http://localhost:3000",
                "http://localhost:5000"
            ])
        return origins

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_SIGNUP: str = "5/hour"
    RATE_LIMIT_LOGIN: str = "10/hour"


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment. Only called at process start."""
    return Settings()
