"""One-shot, best-effort location reading."""

from __future__ import annotations

import json
import logging
from typing import Callable

import requests

from field_order.config import GEOLOCATION_URL, HTTP_TIMEOUT_SECONDS, resolve_fixed_location
from field_order.errors import LocationUnavailable
from field_order.models import Location

logger = logging.getLogger(__name__)


def parse_coordinates(raw: str) -> Location:
    """Parse ``"lat,lon"`` into a Location."""
    parts = [part.strip() for part in raw.split(",")]
    if len(parts) != 2:
        raise LocationUnavailable(f"Expected 'lat,lon', got {raw!r}")
    try:
        latitude, longitude = float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise LocationUnavailable(f"Invalid coordinates {raw!r}") from exc
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        raise LocationUnavailable(f"Coordinates out of range: {raw!r}")
    return Location(latitude=latitude, longitude=longitude)


def read_position(url: str = GEOLOCATION_URL, timeout: float = HTTP_TIMEOUT_SECONDS) -> Location:
    """
    Read the current position once.

    Resolution order:
    1. FIELD_ORDER_LOCATION (if set)
    2. IP geolocation lookup at ``url``
    """
    fixed = resolve_fixed_location()
    if fixed:
        return parse_coordinates(fixed)

    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, json.JSONDecodeError) as exc:
        raise LocationUnavailable(f"Location lookup failed: {exc}") from exc

    if not isinstance(data, dict):
        raise LocationUnavailable("Location lookup returned no coordinates")
    try:
        return parse_coordinates(f"{data['latitude']},{data['longitude']}")
    except KeyError as exc:
        raise LocationUnavailable("Location lookup returned no coordinates") from exc


def fetch_location(granted: bool, reader: Callable[[], Location] = read_position) -> Location | None:
    """Return a position, or None when permission is denied or the read fails."""
    if not granted:
        logger.info("Location permission denied")
        return None
    try:
        location = reader()
    except LocationUnavailable as exc:
        logger.warning("Location unavailable: %s", exc)
        return None
    logger.info("Location captured")
    return location
