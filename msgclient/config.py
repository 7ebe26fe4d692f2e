"""Configuration for the messaging client and relay."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger("msgclient.config")

DEFAULT_APP_NAME = "Message Relay"
DEFAULT_APP_VERSION = "0.1.0"
DEFAULT_DOMAIN = "https://api.solapi.com"
DEFAULT_TIMEOUT = 10.0


def _load_env_file() -> None:
    """Load .env from root directory if present. Existing variables win."""
    env_path = Path(__file__).parent.parent / ".env"
    if not env_path.is_file():
        return
    try:
        lines = env_path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        logger.warning("Could not read %s: %s", env_path, exc)
        return
    for line in lines:
        stripped = line.strip()
        if stripped and not stripped.startswith("#") and "=" in stripped:
            key, value = stripped.split("=", 1)
            key, value = key.strip(), value.strip().strip("'\"")
            if key and value and key not in os.environ:
                os.environ[key] = value


_load_env_file()


def _env(name: str, fallback: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, fallback)


def _env_float(name: str, fallback: float) -> float:
    try:
        return float(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def parse_error_code_map(raw: Optional[str]) -> Dict[str, str]:
    """Parse `Code=KIND,Other=KIND` into a dict. Blank entries are skipped."""
    mapping: Dict[str, str] = {}
    if not raw:
        return mapping
    for item in raw.split(","):
        if "=" not in item:
            continue
        code, kind = item.split("=", 1)
        code, kind = code.strip(), kind.strip()
        if code and kind:
            mapping[code] = kind
    return mapping


class Settings(BaseModel):
    """Settings read from the environment at construction time."""

    # App metadata
    app_name: str = Field(default=DEFAULT_APP_NAME)
    app_version: str = Field(default=DEFAULT_APP_VERSION)
    env: str = Field(default_factory=lambda: _env("ENV", "dev"))
    log_level: str = Field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    enable_docs: bool = Field(default_factory=lambda: _env("RELAY_ENABLE_DOCS", "1") != "0")

    # Provider credentials and endpoint
    api_key: Optional[str] = Field(default_factory=lambda: _env("MESSAGE_API_KEY"))
    api_secret_key: Optional[str] = Field(default_factory=lambda: _env("MESSAGE_API_SECRET"))
    domain: str = Field(default_factory=lambda: _env("MESSAGE_API_DOMAIN", DEFAULT_DOMAIN))
    timeout: float = Field(default_factory=lambda: _env_float("MESSAGE_HTTP_TIMEOUT", DEFAULT_TIMEOUT))

    # Extra provider errorCode -> ErrorKind mappings
    error_code_map_raw: str = Field(default_factory=lambda: _env("MESSAGE_ERROR_CODE_MAP", ""))

    @property
    def error_code_map(self) -> Dict[str, str]:
        return parse_error_code_map(self.error_code_map_raw)

    @property
    def resolved_docs_url(self) -> Optional[str]:
        return "/docs" if self.enable_docs else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
