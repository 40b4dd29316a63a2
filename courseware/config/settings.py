"""
Runtime Settings

Centralized configuration for the courseware API.
All values are loaded from environment variables (a .env file at the
project root is honoured via python-dotenv).
"""
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
ENV_FILE = PROJECT_ROOT / ".env"

load_dotenv(dotenv_path=ENV_FILE)


def get_bool_env(key: str, default: bool = False) -> bool:
    """Get a boolean value from environment variable."""
    value = os.getenv(key, str(default)).lower()
    return value in ('true', '1', 'yes', 'on', 'enabled')


def get_list_env(key: str) -> List[str]:
    """Get a comma separated list from environment variable."""
    raw = os.getenv(key, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    """
    Application settings.

    To add a new setting:
    1. Read it from the environment in __init__
    2. Give it a safe default for local development
    3. Document it in .env.example
    """

    def __init__(self):
        # Database
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./courseware.db")
        self.SQL_ECHO: bool = get_bool_env("SQL_ECHO", False)

        # Runtime
        self.ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", 8000))

        # Startup behaviour
        self.SEED_ON_STARTUP: bool = get_bool_env("SEED_ON_STARTUP", False)

        # CORS
        self.ALLOWED_ORIGINS: List[str] = get_list_env("ALLOWED_ORIGINS")

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_sqlite(self) -> bool:
        return "sqlite" in self.DATABASE_URL.lower()

    def as_dict(self) -> dict:
        """Get all settings as a dictionary (used by the CLI)."""
        return {
            key: value
            for key, value in self.__dict__.items()
            if not key.startswith('_')
        }


settings = Settings()
