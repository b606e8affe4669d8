"""Constants and configuration for the processos search tool."""

from __future__ import annotations

import os
from pathlib import Path

import httpx

BASE_URL_ENV = "PROCESSOS_API_BASE_URL"

LAWSUITS_PATH = "/lawsuits"
TRIBUNAIS_PATH = "/lawsuits/tribunais"

DEFAULT_LIMIT = 20
DEBOUNCE_SECONDS = 0.5
PARTES_PER_PAGE = 5

TIMEOUT = httpx.Timeout(10.0, read=30.0)

THEME_STORAGE_KEY = "theme-mode"
THEME_FILE = Path(
    os.environ.get("PROCESSOS_THEME_FILE", Path.home() / ".config" / "processos" / "preferences.json")
)


class ConfigError(Exception):
    """Raised when a required setting is missing."""


def get_base_url() -> str:
    base_url = os.environ.get(BASE_URL_ENV, "").strip()
    if not base_url:
        raise ConfigError(f"{BASE_URL_ENV} is not set")
    return base_url.rstrip("/")
