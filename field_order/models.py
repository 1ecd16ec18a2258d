"""Domain models for field-order."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Iterable

_DIGITS_ONLY = re.compile(r"[0-9]*")


@dataclass(frozen=True)
class Product:
    """An orderable catalog row."""

    code: str
    description: str
    name: str | None = None


@dataclass(frozen=True)
class CustomerInfo:
    store: str = ""
    vat: str = ""
    notes: str = ""


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class ExportArtifact:
    """CSV text plus the generated file name."""

    file_name: str
    content: str


@dataclass(frozen=True)
class OrderSnapshot:
    """Frozen copy of the form handed to the export routine."""

    lines: tuple[tuple[Product, int], ...]
    customer: CustomerInfo
    location: Location | None


def parse_quantity(text: str | None) -> int:
    """Return the positive integer in ``text``, or 0 when it is empty or invalid."""
    if not text or not _DIGITS_ONLY.fullmatch(text):
        return 0
    return int(text)


@dataclass
class OrderForm:
    """In-memory form state: catalog, quantities, customer fields and location."""

    products: list[Product] = field(default_factory=list)
    quantities: dict[str, str] = field(default_factory=dict)
    customer: CustomerInfo = field(default_factory=CustomerInfo)
    location: Location | None = None

    def __post_init__(self) -> None:
        self._codes = {product.code for product in self.products}

    def load_products(self, products: Iterable[Product]) -> None:
        self.products = list(products)
        self._codes = {product.code for product in self.products}

    def set_quantity(self, code: str, text: str) -> bool:
        """Store a digit-only quantity. Returns False and keeps the old value otherwise."""
        if code not in self._codes or not _DIGITS_ONLY.fullmatch(text):
            return False
        if text:
            self.quantities[code] = text
        else:
            self.quantities.pop(code, None)
        return True

    def quantity_for(self, code: str) -> str:
        return self.quantities.get(code, "")

    def update_customer(self, **changes: str) -> None:
        self.customer = replace(self.customer, **changes)

    def ordered_lines(self) -> list[tuple[Product, int]]:
        lines = []
        for product in self.products:
            qty = parse_quantity(self.quantities.get(product.code))
            if qty > 0:
                lines.append((product, qty))
        return lines

    def snapshot(self) -> OrderSnapshot:
        return OrderSnapshot(lines=tuple(self.ordered_lines()), customer=self.customer, location=self.location)
