"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started locally without any setup.  In a production
deployment you should at least override ``SECRET_KEY`` and
``DATABASE_URL``.
"""

import os
from dataclasses import dataclass


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Campus Event Hub API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")
    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Path to the SQLite file backing the document store.  Relative
    # paths are resolved against the project root by ``core.db``.
    database_url: str = os.getenv("DATABASE_URL", "campus_event_hub.db")

    # Capacity of the in-process request activity log.
    activity_log_size: int = int(os.getenv("ACTIVITY_LOG_SIZE", "100"))

    # When enabled, creating, updating and deleting events requires the
    # ``admin`` role.  Off by default: any authenticated caller may
    # mutate any event.
    event_writes_admin_only: bool = _flag("EVENT_WRITES_ADMIN_ONLY")

    # Comma-separated list of allowed CORS origins; ``*`` allows all.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3001"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
