"""
Configuration Management.

Loads secrets from config/.env (or the process environment) and settings
from config/settings/*.yaml.

Environment (.env):
    DB_PASSWORD, JWT_SECRET
    TELEGRAM_BOT_TOKEN, TELEGRAM_BOT_USERNAME, TELEGRAM_WEBAPP_URL

The three Telegram values default to empty strings so that a missing value
is reported by validate_telegram_env() instead of failing settings parsing.

Settings (YAML), one AppConfig attribute per file:
    application.yaml - App identity, server, cors, session cookie
    database.yaml    - Database connection settings
    logging.yaml     - Logging configuration
    features.yaml    - Feature flags
    security.yaml    - JWT settings
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from endorseme.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    FeaturesSchema,
    LoggingSchema,
    SecuritySchema,
)

PROJECT_ROOT_MARKER = ".project_root"


def find_project_root() -> Path:
    """Walk up from the working directory to the .project_root marker."""
    for directory in (Path.cwd(), *Path.cwd().parents):
        if (directory / PROJECT_ROOT_MARKER).exists():
            return directory
    raise RuntimeError(f"Project root not found. Ensure {PROJECT_ROOT_MARKER} file exists.")


def settings_dir() -> Path:
    return find_project_root() / "config" / "settings"


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Read one file from config/settings/. An empty file reads as {}."""
    path = settings_dir() / filename
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


class Settings(BaseSettings):
    """Secrets and deployment-specific values from config/.env."""

    db_password: str
    jwt_secret: str
    telegram_bot_token: str = ""
    telegram_bot_username: str = ""
    telegram_webapp_url: str = ""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class AppConfig(BaseModel):
    """Validated YAML settings."""

    application: ApplicationSchema
    database: DatabaseSchema
    logging: LoggingSchema
    features: FeaturesSchema
    security: SecuritySchema

    @classmethod
    def load(cls) -> "AppConfig":
        """
        Load and validate every settings file.

        Raises:
            ValueError: Naming the file whose contents do not match its schema
        """
        sections: dict[str, Any] = {}
        for name, field in cls.model_fields.items():
            filename = f"{name}.yaml"
            try:
                sections[name] = field.annotation.model_validate(load_yaml_config(filename))
            except ValidationError as e:
                raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e
        return cls(**sections)


@lru_cache
def get_settings() -> Settings:
    """Cached secrets, read from config/.env under the project root."""
    return Settings(_env_file=str(find_project_root() / "config" / ".env"))


@lru_cache
def get_app_config() -> AppConfig:
    """Cached YAML configuration."""
    return AppConfig.load()


def get_database_url() -> str:
    """asyncpg connection URL built from database.yaml and DB_PASSWORD."""
    db = get_app_config().database
    password = get_settings().db_password
    return f"postgresql+asyncpg://{db.user}:{password}@{db.host}:{db.port}/{db.name}"
