"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (e.g.
CRPT_API_URL, HTTP_VERIFY, throttle window/limit and shutdown timeout).
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


# CRPT document API
CRPT_API_URL = os.environ.get("CRPT_API_URL", "https://ismp.crpt.ru/api/v3/lk/documents/create").strip()
CRPT_TIMEOUT = _env_float("CRPT_TIMEOUT", 20.0)
CRPT_TOKEN = os.environ.get("CRPT_TOKEN", "").strip()

# Network / HTTP
HTTP_VERIFY = _env_bool("HTTP_VERIFY", True)

# Throttling: at most THROTTLE_REQUEST_LIMIT calls per THROTTLE_WINDOW_SECONDS
THROTTLE_WINDOW_SECONDS = _env_float("THROTTLE_WINDOW_SECONDS", 1.0)
THROTTLE_REQUEST_LIMIT = _env_int("THROTTLE_REQUEST_LIMIT", 5)
THROTTLE_MAX_QUEUE = _env_int("THROTTLE_MAX_QUEUE", 0)  # 0 = unbounded
SHUTDOWN_TIMEOUT = _env_float("SHUTDOWN_TIMEOUT", 10.0)

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
