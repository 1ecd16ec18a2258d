"""Shared fixtures for field-order tests."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from field_order.export import ExportRoutine
from field_order.models import OrderForm, Product

FIXED_NOW = datetime(2026, 10, 17, 9, 30, 0, 123000, tzinfo=timezone.utc)
FIXED_FILE_NAME = "order_2026-10-17T09-30-00-123Z.csv"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer FIELD_ORDER_* overrides out of the tests."""
    for name in (
        "CATALOG_SOURCE",
        "CATALOG_URL",
        "EXPORT_MODE",
        "EXPORT_DIR",
        "CACHE_DIR",
        "LOCATION",
        "DEBUG_LOG",
    ):
        monkeypatch.delenv(f"FIELD_ORDER_{name}", raising=False)


@pytest.fixture
def products():
    return [
        Product(code="001", description="Toy Car"),
        Product(code="002", description="Building Blocks", name="Blocks"),
        Product(code="003", description="Plush Bear"),
    ]


@pytest.fixture
def form(products):
    return OrderForm(products=list(products))


@pytest.fixture
def share():
    return Mock()


@pytest.fixture
def make_routine(tmp_path, share):
    """Build an ExportRoutine writing under tmp_path with a fixed clock."""

    def _make(mode="library"):
        return ExportRoutine(
            mode=mode,
            export_dir=tmp_path / "home",
            cache_dir=tmp_path / "cache",
            share=share,
            clock=lambda: FIXED_NOW,
        )

    return _make


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def fixed_file_name():
    return FIXED_FILE_NAME
