"""
Configuration helpers for the J.A.R.V.I.S showcase backend.

Routers and services never read os.environ directly; they receive a Settings
instance built from environment variables (and an optional .env file).
"""

from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import load_dotenv

DEV_ENVIRONMENTS = {"dev", "development"}


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    cors_origins: tuple[str, ...]
    cors_allow_all: bool
    rate_limit_window_seconds: float
    rate_limit_max_requests: int
    db_retry_delay_seconds: float
    db_connect_timeout_seconds: float
    client_build_dir: str
    host: str
    port: int
    log_level: str
    trust_proxy: bool = False

    @property
    def is_development(self) -> bool:
        return self.app_env in DEV_ENVIRONMENTS

    @property
    def is_production(self) -> bool:
        return self.app_env in {"prod", "production"}


def _int(value: str | None, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _float(value: str | None, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _origins(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ("http://localhost:3000",)
    return tuple(origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip())


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    load_dotenv(override=False)
    base = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    cors_raw = (os.getenv("CORS_ORIGIN") or "").strip()
    window_ms = _int(os.getenv("RATE_LIMIT_WINDOW_MS"), 15 * 60 * 1000)

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").strip().lower(),
        database_url=(os.getenv("DATABASE_URL") or "sqlite:///./jarvis.db").strip(),
        cors_origins=() if cors_raw == "*" else _origins(cors_raw),
        cors_allow_all=cors_raw == "*",
        rate_limit_window_seconds=max(1, window_ms) / 1000.0,
        rate_limit_max_requests=max(1, _int(os.getenv("RATE_LIMIT_MAX_REQUESTS"), 100)),
        db_retry_delay_seconds=max(0.1, _float(os.getenv("DB_RETRY_DELAY_SECONDS"), 5.0)),
        db_connect_timeout_seconds=max(1.0, _float(os.getenv("DB_CONNECT_TIMEOUT_SECONDS"), 5.0)),
        client_build_dir=os.getenv("CLIENT_BUILD_DIR", os.path.join(base, "client", "build")),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT"), 5000),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
        trust_proxy=_bool(os.getenv("TRUST_PROXY"), False),
    )
