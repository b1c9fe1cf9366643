"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (e.g.
HTTP_VERIFY, GITHUB_TIMEOUT, the OAuth app credentials and the
shareable-link prefix).
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


# Network / HTTP
HTTP_VERIFY = _env_bool("HTTP_VERIFY", True)
GITHUB_TIMEOUT = _env_float("GITHUB_TIMEOUT", 20.0)

# Shareable links: /<prefix>/<owner>/<repo>/<base>..<head>?filter=<glob>
SHARE_PATH_PREFIX = "/" + _env_str("SHARE_PATH_PREFIX", "/gh-dir-diff").strip("/")

# OAuth redirect service
OAUTH_WORKER_URL = _env_str("OAUTH_WORKER_URL", "http://localhost:8787").rstrip("/")
GITHUB_CLIENT_ID = _env_str("GITHUB_CLIENT_ID")
GITHUB_CLIENT_SECRET = _env_str("GITHUB_CLIENT_SECRET")
FRONTEND_URL = _env_str("FRONTEND_URL", "http://localhost:8000").rstrip("/")
CSRF_SECRET = _env_str("CSRF_SECRET")
OAUTH_HOST = _env_str("OAUTH_HOST", "127.0.0.1")
OAUTH_PORT = _env_int("OAUTH_PORT", 8787)

# Logging
LOG_LEVEL = _env_str("LOG_LEVEL", "INFO").upper()
