"""
Configuration management for the order preferences service.

Loads environment variables from .env file and provides typed access to configuration.

Two kinds of settings live here:
- Config: process-wide settings read once at import (secrets, paths, ports)
- ProviderCredentials: text-generation credentials, re-read from the
  environment on every summary request and never cached
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)


class Config:
    """Configuration class for the order preferences service."""

    # Auth
    JWT_SECRET = os.getenv("JWT_SECRET", "") or "dev-secret"
    TOKEN_TTL_HOURS = int(os.getenv("TOKEN_TTL_HOURS", "24"))
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Seeded login for local use and tests
    SEED_USER_EMAIL = os.getenv("SEED_USER_EMAIL", "user@weel.com")
    SEED_USER_PASSWORD = os.getenv("SEED_USER_PASSWORD", "password")

    # Server
    APP_PORT = int(os.getenv("APP_PORT", "8080"))
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Environment
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

    # Database
    DATABASE_PATH = os.getenv("DATABASE_PATH", "./orders.db")

    @classmethod
    def cors_origins(cls) -> List[str]:
        return [o.strip() for o in cls.CORS_ORIGINS.split(",") if o.strip()]

    @classmethod
    def validate(cls) -> bool:
        """Validate that required configuration is set."""
        if cls.ENVIRONMENT == "production" and cls.JWT_SECRET == "dev-secret":
            print("⚠️  JWT_SECRET is still the development default in production")
            print("   Please set it in .env file")
            return False

        return True


@dataclass(frozen=True)
class ProviderCredentials:
    """
    Text-generation provider settings, one credential slot per provider.

    Presence of the OpenAI key takes precedence over the Gemini key. A blank
    value means the provider is disabled.
    """

    openai_api_key: str = ""
    gemini_api_key: str = ""
    openai_model: Optional[str] = None
    gemini_model: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ProviderCredentials":
        """Read the current environment. Called per request."""
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            openai_model=os.getenv("OPENAI_MODEL") or None,
            gemini_model=os.getenv("GEMINI_MODEL") or None,
        )


if __name__ == "__main__":
    # Test configuration loading
    creds = ProviderCredentials.from_env()
    print("Configuration loaded:")
    print(f"  Environment: {Config.ENVIRONMENT}")
    print(f"  Database: {Config.DATABASE_PATH}")
    print(f"  Port: {Config.APP_PORT}")
    print(f"  OpenAI key: {'✓ Set' if creds.openai_api_key.strip() else '✗ Missing'}")
    print(f"  Gemini key: {'✓ Set' if creds.gemini_api_key.strip() else '✗ Missing'}")
