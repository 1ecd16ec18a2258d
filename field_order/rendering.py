"""Rendering helpers for the form panes."""

from __future__ import annotations

from rich.text import Text

from field_order.data import display_name_for_product
from field_order.models import CustomerInfo, Location, Product, parse_quantity


def badge_style(quantity: str) -> str:
    """Return a consistent badge style for quantity tags."""
    if parse_quantity(quantity) > 0:
        return "bold #0b1f0f on #5fbf72"
    if quantity:
        return "bold #ffffff on #b23a48"
    return "dim"


def format_product_label(product: Product, quantity: str) -> Text:
    """Render a product row with its quantity badge."""
    text = Text()
    text.append(f" {quantity or '-':>4} ", style=badge_style(quantity))
    text.append(f" {product.code}", style="bold")
    text.append(f"  {display_name_for_product(product)}")
    return text


def format_location(location: Location | None) -> str:
    if location is None:
        return "Not available"
    return f"{location.latitude:.5f}, {location.longitude:.5f}"


def format_customer_summary(customer: CustomerInfo, location: Location | None) -> Text:
    text = Text()
    for label, value in (("Store", customer.store), ("VAT", customer.vat), ("Notes", customer.notes)):
        text.append(f"{label}: ", style="bold")
        text.append(f"{value}\n" if value else "-\n", style="white" if value else "dim")
    text.append("Location: ", style="bold")
    text.append(format_location(location))
    return text
