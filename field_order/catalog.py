"""Catalog loading from the published sheet or the static list."""

from __future__ import annotations

import csv
import io
import logging

import requests

from field_order.config import HTTP_TIMEOUT_SECONDS, resolve_catalog_url
from field_order.constant import CODE_COLUMN, DESCRIPTION_COLUMN, NAME_COLUMN
from field_order.data import MOCK_CATALOG
from field_order.errors import InitializationFailure
from field_order.models import Product

logger = logging.getLogger(__name__)


def parse_catalog_csv(text: str) -> list[Product]:
    """
    Parse sheet CSV text into products.

    Rows without a code or description are dropped. A repeated code keeps
    its first row.
    """
    reader = csv.DictReader(io.StringIO(text))
    try:
        fieldnames = [name.strip() for name in (reader.fieldnames or [])]
        missing = [col for col in (CODE_COLUMN, DESCRIPTION_COLUMN) if col not in fieldnames]
        if missing:
            raise InitializationFailure(f"Catalog is missing column(s): {', '.join(missing)}")
        reader.fieldnames = fieldnames

        products: list[Product] = []
        seen: set[str] = set()
        skipped = 0
        for row in reader:
            code = (row.get(CODE_COLUMN) or "").strip()
            description = (row.get(DESCRIPTION_COLUMN) or "").strip()
            if not code or not description:
                skipped += 1
                continue
            if code in seen:
                logger.warning("Duplicate product code %s ignored", code)
                continue
            seen.add(code)
            name = (row.get(NAME_COLUMN) or "").strip() or None
            products.append(Product(code=code, description=description, name=name))
    except csv.Error as exc:
        raise InitializationFailure(f"Catalog is not valid CSV: {exc}") from exc

    if skipped:
        logger.info("Dropped %d catalog row(s) without code or description", skipped)
    return products


def fetch_catalog(url: str, timeout: float = HTTP_TIMEOUT_SECONDS) -> list[Product]:
    """Fetch the catalog sheet once. No retry."""
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        logger.error("Failed to load products from %s: %s", url, exc)
        raise InitializationFailure(f"Failed to load products: {exc}") from exc

    # Published sheets omit the charset header and may carry a BOM.
    products = parse_catalog_csv(resp.content.decode("utf-8-sig", errors="replace"))
    logger.info("Loaded %d product(s) from %s", len(products), url)
    return products


def load_catalog(source: str, url: str | None = None) -> list[Product]:
    if source == "mock":
        return list(MOCK_CATALOG)
    if source == "remote":
        return fetch_catalog(url or resolve_catalog_url())
    raise InitializationFailure(f"Unknown catalog source: {source!r}")
