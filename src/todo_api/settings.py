from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: root logging level name (default: INFO)
    - HOST: bind address used by the bundled server runner (default: 0.0.0.0)
    - PORT: bind port used by the bundled server runner (default: 3001)
    - API_BASE_URL: origin the web page uses to reach the API. Empty (default)
      means the page's own origin.
    """

    cors_allow_origins: List[str]
    log_level: str
    host: str
    port: int
    api_base_url: Optional[str]


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
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
    level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        # Unknown level names fall back to INFO
        level = "INFO"

    api_base_url = os.getenv("API_BASE_URL", "").strip() or None

    return Settings(
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=level,
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_int(_get_env("PORT", "3001"), 3001),
        api_base_url=api_base_url.rstrip("/") if api_base_url else None,
    )


# PUBLIC_INTERFACE
def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging once, at the level named in settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
