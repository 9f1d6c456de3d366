"""
Environment variable loading for Release Delta.

- GITHUB_TOKEN: bearer token for the GitHub API (optional; anonymous otherwise)
- RELEASE_DELTA_API_URL: GitHub REST base URL (default: https://api.github.com)
- RELEASE_DELTA_TIMEOUT_SEC, RELEASE_DELTA_PER_PAGE: upstream request tuning
- RELEASE_DELTA_ASSET_PROJECT, RELEASE_DELTA_ASSET_SUFFIX: source archive naming
- RELEASE_DELTA_STRICT: reject versions missing from the release set
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is release_delta/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT_SEC = 30.0
# GitHub caps per_page at 100 for the releases listing
MAX_PER_PAGE = 100
DEFAULT_ASSET_PROJECT = "apache_airflow"
DEFAULT_ASSET_SUFFIX = ".tar.gz"
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8080

_TRUTHY = ("1", "true", "yes", "on")


def load_release_delta_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env vars."""
    if _ENV_PATH.is_file():
        load_dotenv(_ENV_PATH, override=False)


def _env_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def parse_bool(raw: str | None, default: bool = False) -> bool:
    """Interpret 1/true/yes/on (any case) as True; empty or None gives default."""
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def get_github_token() -> str | None:
    load_release_delta_env()
    token = (os.getenv("GITHUB_TOKEN") or "").strip()
    return token or None


def get_api_url() -> str:
    load_release_delta_env()
    return _env_str("RELEASE_DELTA_API_URL", DEFAULT_API_URL).rstrip("/")


def get_timeout_sec() -> float:
    load_release_delta_env()
    return _env_float("RELEASE_DELTA_TIMEOUT_SEC", DEFAULT_TIMEOUT_SEC)


def get_per_page() -> int:
    """Release page size, clamped to 1..100."""
    load_release_delta_env()
    value = _env_int("RELEASE_DELTA_PER_PAGE", MAX_PER_PAGE)
    return max(1, min(MAX_PER_PAGE, value))


def get_asset_project() -> str:
    load_release_delta_env()
    return _env_str("RELEASE_DELTA_ASSET_PROJECT", DEFAULT_ASSET_PROJECT)


def get_asset_suffix() -> str:
    load_release_delta_env()
    return _env_str("RELEASE_DELTA_ASSET_SUFFIX", DEFAULT_ASSET_SUFFIX)


def is_strict_default() -> bool:
    load_release_delta_env()
    return parse_bool(os.getenv("RELEASE_DELTA_STRICT"))


def get_api_host() -> str:
    load_release_delta_env()
    return _env_str("API_HOST", DEFAULT_API_HOST)


def get_api_port() -> int:
    load_release_delta_env()
    return _env_int("API_PORT", DEFAULT_API_PORT)
