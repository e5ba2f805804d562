"""Environment-driven settings for the resource service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

DEFAULT_DATABASE_URL = "sqlite:///./data/resources.db"
PRODUCTION_ENVIRONMENTS = {"production", "prod"}


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    environment: str = "development"
    cors_allowed_origins: Tuple[str, ...] = ("*",)
    sql_echo: bool = False
    price_feed_url: Optional[str] = None
    price_feed_timeout: float = 5.0

    @property
    def is_production(self) -> bool:
        return self.environment in PRODUCTION_ENVIRONMENTS


def _normalize_bool(value: str | None, default: bool = False) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def _split_origins(value: str | None) -> Tuple[str, ...]:
    if not value:
        return ("*",)
    origins = tuple(origin.strip() for origin in value.split(",") if origin.strip())
    return origins or ("*",)


def load_settings() -> Settings:
    """Build a fresh Settings instance from the current environment."""
    return Settings(
        database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", 3000),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        environment=os.getenv("APP_ENV", "development").strip().lower(),
        cors_allowed_origins=_split_origins(os.getenv("CORS_ALLOWED_ORIGINS")),
        sql_echo=_normalize_bool(os.getenv("SQL_ECHO")),
        price_feed_url=os.getenv("PRICE_FEED_URL") or None,
        price_feed_timeout=_env_float("PRICE_FEED_TIMEOUT", 5.0),
    )


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings sourced from the environment."""
    return load_settings()


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
