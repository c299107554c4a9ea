"""
Unified configuration for the database URL, logging and identity settings.

This module provides a single source of truth that works consistently across:
- Service (running in container or locally)
- CLI utilities (``todoboard init``, ``todoboard cli``)
- Tests

The database URL resolution:
1. Checks TODOBOARD_DATABASE_URL environment variable first
2. Falls back to a SQLite file under ``data/`` in the project root
3. Ensures the directory of a SQLite file exists

Pydantic Settings is used for type-safe configuration with support for
.env files and environment variable overrides.
"""
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default database location, relative to the project root
DEFAULT_DB_PATH = "data/todoboard.db"

# Container default (used when running in container)
CONTAINER_DB_PATH = "/app/data/todoboard.db"


def _is_container() -> bool:
    """Check if we're running in a container."""
    if os.path.exists("/.dockerenv"):
        return True
    if os.path.exists("/proc/1/cgroup"):
        try:
            with open("/proc/1/cgroup", "r") as f:
                content = f.read()
        except OSError:
            return False
        return "docker" in content or "containerd" in content or "kubepods" in content
    return False


class Settings(BaseSettings):
    """Application settings for Todoboard.

    All configuration values can be set via environment variables or .env file.
    Defaults are provided for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================================================
    # Database Configuration
    # ============================================================================
    database_url: str = ""  # Resolved by validator
    sql_echo: bool = False

    # ============================================================================
    # Logging Configuration
    # ============================================================================
    log_level: str = "INFO"
    log_format: str = "text"  # text or json

    # ============================================================================
    # Environment Configuration
    # ============================================================================
    environment: str = "development"
    debug: bool = False

    # ============================================================================
    # Identity Configuration
    # ============================================================================
    jwt_secret: str = "change-me-in-production-use-a-long-random-secret"
    jwt_algorithm: str = "HS256"
    access_token_expire_seconds: int = 3600
    refresh_token_expire_seconds: int = 14 * 24 * 3600

    # ============================================================================
    # Pagination
    # ============================================================================
    default_page_size: int = 10
    max_page_size: int = 100

    @field_validator("database_url", mode="before")
    @classmethod
    def resolve_database_url(cls, v: Optional[str]) -> str:
        """
        Resolve the SQLAlchemy database URL.

        Resolution order:
        1. TODOBOARD_DATABASE_URL environment variable
        2. Value from .env file or Settings field (if provided)
        3. Container SQLite path if running in container
        4. Local development SQLite path

        Args:
            v: Value from field or None

        Returns:
            SQLAlchemy URL string
        """
        env_url = os.getenv("TODOBOARD_DATABASE_URL")
        if env_url:
            return env_url

        if v:
            return v

        if _is_container():
            db_path = CONTAINER_DB_PATH
        else:
            project_root = Path(__file__).resolve().parent.parent
            db_path = str(project_root / DEFAULT_DB_PATH)

        return f"sqlite:///{os.path.abspath(db_path)}"

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        value = v.strip().lower()
        if value not in {"text", "json"}:
            raise ValueError("log_format must be 'text' or 'json'")
        return value


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    return Settings()


def sqlite_path_from_url(database_url: str) -> Optional[str]:
    """Return the filesystem path of a file-backed SQLite URL, else None."""
    prefix = "sqlite:///"
    if not database_url.startswith(prefix):
        return None
    path = database_url[len(prefix):]
    if not path or path == ":memory:":
        return None
    return path


def ensure_database_directory(database_url: Optional[str] = None) -> None:
    """
    Ensure the directory of a SQLite database file exists.

    Args:
        database_url: Database URL. If None, uses the configured URL.
    """
    if database_url is None:
        database_url = get_settings().database_url
    db_path = sqlite_path_from_url(database_url)
    if db_path is None:
        return
    db_dir = os.path.dirname(os.path.abspath(db_path))
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
