from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
DEFAULT_CORS_ORIGIN_REGEX = r"^https://[a-zA-Z0-9-]+\.vercel\.app$"
DEFAULT_LITEAPI_BASE_URL = "https://api.liteapi.travel/v3.0"
PLACEHOLDER_LITEAPI_KEY = "demo_key"


def _load_database_url() -> str:
    url = os.getenv("DATABASE_URL", "sqlite:///./skitrip.db")
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://") and "+psycopg" not in url:
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def _load_float(name: str, default: float) -> float:
    try:
        value = float(os.getenv(name, str(default)))
    except ValueError:
        return default
    return value if value > 0 else default


def load_cors_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS")
    if raw:
        origins = [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]
        if origins:
            return origins
    return DEFAULT_CORS_ORIGINS.copy()


def load_cors_origin_regex() -> str | None:
    raw = (os.getenv("CORS_ALLOW_ORIGIN_REGEX") or "").strip()
    if raw:
        return raw
    return DEFAULT_CORS_ORIGIN_REGEX


def load_liteapi_key() -> str:
    return os.getenv("LITEAPI_PRIVATE_KEY") or os.getenv("LITEAPI_KEY") or PLACEHOLDER_LITEAPI_KEY


DATABASE_URL = _load_database_url()
LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LITEAPI_BASE_URL = (os.getenv("LITEAPI_BASE_URL") or DEFAULT_LITEAPI_BASE_URL).rstrip("/")
LITEAPI_TIMEOUT_SECONDS = _load_float("LITEAPI_TIMEOUT_SECONDS", 8.0)
DESTINATION_CACHE_TTL_SECONDS = _load_float("DESTINATION_CACHE_TTL_SECONDS", 30 * 60)
