"""
Environment-backed settings.

Every value is read on call so tests can override via `monkeypatch.setenv`.
Malformed numbers fall back to their defaults.
"""

from __future__ import annotations

import os

DEFAULT_APPLICATION_NAME = "carApp"
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 2000
DEFAULT_CORS_ORIGINS = (
    "http://localhost:9000",
    "http://127.0.0.1:9000",
)


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def application_name() -> str:
    return os.environ.get("APPLICATION_NAME", DEFAULT_APPLICATION_NAME).strip() or DEFAULT_APPLICATION_NAME


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def cors_allowed_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOWED_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def default_page_size() -> int:
    size = env_int("DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE)
    return size if size > 0 else DEFAULT_PAGE_SIZE


def max_page_size() -> int:
    size = env_int("MAX_PAGE_SIZE", MAX_PAGE_SIZE)
    return size if size > 0 else MAX_PAGE_SIZE
