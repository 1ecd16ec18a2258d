"""Runtime configuration defaults for catalog loading, location and export."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

CATALOG_SOURCE = "remote"
CATALOG_SOURCES = ("remote", "mock")
CATALOG_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vTziUOryoNtGBCpqIhdkM_jkEc9YAzVSYHC-CJNm3qxsxLuovUOrBjytfEIoP-DVi9gppBIl1VJy9iO/pub?output=csv"
)

# "library" saves into Downloads/Orders and shares on failure, "share" always shares.
EXPORT_MODE = "library"
EXPORT_MODES = ("library", "share")
EXPORT_SUBDIR = Path("Downloads") / "Orders"

GEOLOCATION_URL = "https://ipapi.co/json/"
HTTP_TIMEOUT_SECONDS = 10.0
DEBUG_LOG_PATH = "/tmp/field-order-debug.log"

_ENV_PREFIX = "FIELD_ORDER_"


def _env(name: str) -> str:
    return os.environ.get(f"{_ENV_PREFIX}{name}", "").strip()


def _choice(name: str, default: str, allowed: tuple[str, ...]) -> str:
    value = _env(name).lower() or default
    if value not in allowed:
        raise ValueError(f"{_ENV_PREFIX}{name} must be one of {', '.join(allowed)}, got {value!r}")
    return value


def resolve_catalog_source() -> str:
    return _choice("CATALOG_SOURCE", CATALOG_SOURCE, CATALOG_SOURCES)


def resolve_catalog_url() -> str:
    return _env("CATALOG_URL") or CATALOG_URL


def resolve_export_mode() -> str:
    return _choice("EXPORT_MODE", EXPORT_MODE, EXPORT_MODES)


def resolve_export_dir() -> Path:
    override = _env("EXPORT_DIR")
    return Path(override).expanduser() if override else Path.home()


def resolve_cache_dir() -> Path:
    override = _env("CACHE_DIR")
    if override:
        return Path(override).expanduser()
    return Path(tempfile.gettempdir()) / "field-order"


def resolve_fixed_location() -> str:
    """Return the raw ``lat,lon`` override, or an empty string when unset."""
    return _env("LOCATION")


def resolve_debug_log_path() -> Path:
    return Path(_env("DEBUG_LOG") or DEBUG_LOG_PATH)
