from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - SEED_FIXTURES: 'true' (default) to load the seed tasks at startup
    - DEFAULT_ACTOR: user recorded as created_by for tasks created over HTTP. Default 'user1'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - NOTIFICATION_HISTORY: number of recent notifications kept for polling. Default 50
    - LOG_LEVEL: root log level name. Default 'INFO'
    """

    seed_fixtures: bool
    default_actor: str
    cors_allow_origins: List[str]
    notification_history: int
    log_level: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_int(value: str, default: int) -> int:
    try:
        return max(int(value.strip()), 0)
    except ValueError:
        return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        log_level = "INFO"

    return Settings(
        seed_fixtures=_parse_bool(_get_env("SEED_FIXTURES", "true"), True),
        default_actor=_get_env("DEFAULT_ACTOR", "user1").strip(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        notification_history=_parse_int(_get_env("NOTIFICATION_HISTORY", "50"), 50),
        log_level=log_level,
    )
