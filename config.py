"""
Application configuration module.

This module defines configuration classes for different environments
(development, testing, production). Configuration values are loaded
from environment variables with sensible defaults.
"""

import os
from datetime import timedelta
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent


def _env_flag(name: str, default: str) -> bool:
    """Read a boolean environment variable ("true"/"false")."""
    return os.environ.get(name, default).strip().lower() == "true"


class Config:
    """Base configuration with default settings."""

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-production")

    # Default data file location
    DATA_FILE: str = os.environ.get(
        "DATA_FILE",
        str(BASE_DIR / "instance" / "database.json")
    )

    # Server-side session records and the cookie that carries them share
    # one lifetime, counted from login.
    SESSION_LIFETIME_SECONDS: int = int(os.environ.get("SESSION_LIFETIME_SECONDS", "60"))
    PERMANENT_SESSION_LIFETIME: timedelta = timedelta(seconds=SESSION_LIFETIME_SECONDS)
    SESSION_REFRESH_EACH_REQUEST: bool = False

    SESSION_COOKIE_HTTPONLY: bool = True
    SESSION_COOKIE_SAMESITE: str = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
    SESSION_COOKIE_SECURE: bool = _env_flag("SESSION_COOKIE_SECURE", "false")

    # When false, any authenticated user may delete any task by id.
    ENFORCE_TASK_OWNERSHIP: bool = _env_flag("ENFORCE_TASK_OWNERSHIP", "false")


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Testing environment configuration."""

    DEBUG: bool = True
    TESTING: bool = True

    # Separate data file so test runs never touch development data
    DATA_FILE: str = os.environ.get(
        "TEST_DATA_FILE",
        str(BASE_DIR / "instance" / "test_database.json")
    )


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG: bool = False
    TESTING: bool = False
    SESSION_COOKIE_SECURE: bool = _env_flag("SESSION_COOKIE_SECURE", "true")


# Configuration mapping for easy access
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (development, testing, production).
             If None, uses FLASK_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
