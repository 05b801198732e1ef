from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing or malformed."""


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PORT: TCP port to listen on (default 3000)
    - HOST: bind address (default '0.0.0.0')
    - DATABASE_URL: PostgreSQL connection string (required to start the server)
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; the local
      Vite dev origins by default
    - DB_POOL_MIN_SIZE / DB_POOL_MAX_SIZE: connection pool bounds (default 1 / 10)
    - LOG_LEVEL: root logging level (default 'INFO')
    """

    port: int
    host: str
    database_url: Optional[str]
    cors_allow_origins: List[str]
    db_pool_min_size: int
    db_pool_max_size: int
    log_level: str

    # PUBLIC_INTERFACE
    def require_database_url(self) -> str:
        """Return DATABASE_URL or raise ConfigurationError when it is not set."""
        if not self.database_url:
            raise ConfigurationError("Missing env DATABASE_URL")
        return self.database_url


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(name: str, value: str, minimum: int = 0) -> int:
    try:
        parsed = int(value.strip())
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e
    if parsed < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {parsed}")
    return parsed


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env as a comma-separated list.
    """
    return [o.strip() for o in origins_value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """
    Return application settings loaded from environment variables.

    DATABASE_URL is not checked here so the app object can be built (and its
    OpenAPI document generated) without a database; the bootstrap calls
    Settings.require_database_url() before serving.
    """
    port = _parse_int("PORT", _get_env("PORT", "3000"), minimum=1)
    host = _get_env("HOST", "0.0.0.0").strip()
    database_url = os.getenv("DATABASE_URL") or None

    origins = _parse_origins(_get_env("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS))

    pool_min = _parse_int("DB_POOL_MIN_SIZE", _get_env("DB_POOL_MIN_SIZE", "1"))
    pool_max = _parse_int("DB_POOL_MAX_SIZE", _get_env("DB_POOL_MAX_SIZE", "10"), minimum=1)
    if pool_min > pool_max:
        raise ConfigurationError("DB_POOL_MIN_SIZE must not exceed DB_POOL_MAX_SIZE")

    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()

    return Settings(
        port=port,
        host=host,
        database_url=database_url,
        cors_allow_origins=origins,
        db_pool_min_size=pool_min,
        db_pool_max_size=pool_max,
        log_level=log_level,
    )
