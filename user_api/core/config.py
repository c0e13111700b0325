"""
Configuration helpers for the user record service.

Settings are read from environment variables once and cached, so routers and
services never fetch os.environ directly.
"""

from dataclasses import dataclass, replace
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    host: str
    port: int
    users_file: str
    log_level: str
    log_file: str
    strict_storage: bool
    cors_allow_origin: str
    cors_allow_methods: str
    cors_allow_headers: str

    def with_overrides(self, **changes) -> "Settings":
        """Return a copy with every ``changes`` value that is not None applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "3000"), 3000),
        users_file=os.getenv("USERS_FILE", "users.json"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE", ""),
        strict_storage=_bool(os.getenv("STRICT_STORAGE"), False),
        cors_allow_origin=os.getenv("CORS_ALLOW_ORIGIN", "*"),
        cors_allow_methods=os.getenv("CORS_ALLOW_METHODS", "GET, POST, PATCH, DELETE"),
        cors_allow_headers=os.getenv("CORS_ALLOW_HEADERS", "Content-Type"),
    )
