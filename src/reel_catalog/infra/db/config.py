from __future__ import annotations

import os

DEFAULT_STORE_TIMEOUT_SECONDS = 5.0


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def store_timeout_seconds() -> float:
    raw = os.getenv("STORE_TIMEOUT_SECONDS")

    if not raw:
        return DEFAULT_STORE_TIMEOUT_SECONDS

    try:
        timeout = float(raw)
    except ValueError:
        raise RuntimeError(f"STORE_TIMEOUT_SECONDS must be a number, got {raw!r}") from None

    if timeout <= 0:
        raise RuntimeError("STORE_TIMEOUT_SECONDS must be > 0")

    return timeout
