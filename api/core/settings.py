"""
Process settings read from environment variables.

Values are read on every call so tests can change them with monkeypatch.
"""

from __future__ import annotations

import os

DEFAULT_FILES_API_URL = "http://localhost:8085/api/v1"
DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def files_api_url() -> str:
    return os.environ.get("FILES_API_URL", "").strip() or DEFAULT_FILES_API_URL


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip() or DEFAULT_CORS_ORIGINS
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "").strip().upper() or "INFO"


def log_format() -> str:
    return os.environ.get("LOG_FORMAT", "").strip().lower() or "text"


def auto_migrate() -> bool:
    return _env_bool("DB_AUTO_MIGRATE")
