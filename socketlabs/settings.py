from __future__ import annotations

import logging
import os
from urllib.parse import urlparse

from dotenv import load_dotenv

from socketlabs.client import API_URL
from socketlabs.errors import ConfigError
from socketlabs.models import ClientSettings


def load_settings() -> ClientSettings:
    load_dotenv()
    return ClientSettings(
        server_id=_require_env("SOCKETLABS_SERVER_ID"),
        api_key=_require_env("SOCKETLABS_API_KEY"),
        api_url=_api_url(os.getenv("SOCKETLABS_API_URL", API_URL)),
        timeout_sec=_optional_float("SOCKETLABS_TIMEOUT_SEC"),
        log_level=_log_level(os.getenv("LOG_LEVEL", "INFO")),
        log_file=os.getenv("LOG_FILE", "").strip() or None,
    )


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ConfigError(f"No {name} environment variable set.")
    return value


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"Error parsing {name}: {raw!r}") from exc


def _api_url(raw: str) -> str:
    url = raw.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"SOCKETLABS_API_URL must be an http(s) URL: {raw!r}")
    return url


def _log_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in logging.getLevelNamesMapping():
        raise ConfigError(f"Unknown LOG_LEVEL: {raw!r}")
    return level
