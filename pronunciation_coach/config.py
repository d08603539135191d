from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_HOST_URL = "http://127.0.0.1:8000"
DEFAULT_CLIENT_ID = "pronunciation-coach"
DEFAULT_TIMEOUT = 120.0
DEFAULT_MAX_ATTEMPTS = 500

_ENV_PREFIX = "PRONUNCIATION_COACH_"


def _env(name: str, default: str = "") -> str:
    return os.getenv(f"{_ENV_PREFIX}{name}", default).strip()


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class CoachSettings:
    app_name: str = "Pronunciation Coach"
    host_url: str = DEFAULT_HOST_URL
    client_id: str = DEFAULT_CLIENT_ID
    timeout: float = DEFAULT_TIMEOUT
    language: str = "en"
    feedback_language: str = "en"
    log_dir: Optional[str] = None
    log_level: str = "INFO"
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    @classmethod
    def from_env(cls) -> "CoachSettings":
        return cls(
            host_url=(_env("HOST_URL") or DEFAULT_HOST_URL).rstrip("/"),
            client_id=_env("CLIENT_ID") or DEFAULT_CLIENT_ID,
            timeout=_env_float("TIMEOUT", DEFAULT_TIMEOUT),
            language=(_env("LANGUAGE") or "en").lower(),
            feedback_language=(_env("FEEDBACK_LANGUAGE") or "en").lower(),
            log_dir=_env("LOG_DIR") or None,
            log_level=(_env("LOG_LEVEL") or "INFO").upper(),
            max_attempts=_env_int("MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
        )


__all__ = ["CoachSettings"]
