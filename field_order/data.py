"""Static catalog data for the offline variant."""

from __future__ import annotations

from field_order.constant import MOCK_CATALOG_ROWS
from field_order.models import Product

MOCK_CATALOG: list[Product] = [
    Product(
        code=str(row["code"]),
        description=str(row["description"]),
        name=str(row["name"]) if row["name"] is not None else None,
    )
    for row in MOCK_CATALOG_ROWS
]


def display_name_for_product(product: Product) -> str:
    """Get the label shown in the products pane."""
    if product.name:
        return f"{product.description} ({product.name})"
    return product.description
