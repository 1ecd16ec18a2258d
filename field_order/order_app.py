"""Main Textual app class."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from field_order.catalog import load_catalog
from field_order.config import (
    resolve_cache_dir,
    resolve_catalog_source,
    resolve_export_dir,
    resolve_export_mode,
)
from field_order.customer_modal import CustomerModal
from field_order.errors import InitializationFailure, NoProductsSelected, OrderFormError
from field_order.export import ExportRoutine
from field_order.location import fetch_location, read_position
from field_order.models import CustomerInfo, Location, OrderForm, OrderSnapshot, Product
from field_order.permission_modal import PermissionModal
from field_order.rendering import format_customer_summary, format_product_label
from field_order.sharing import ClipboardSharer

logger = logging.getLogger(__name__)


def _default_catalog_loader() -> list[Product]:
    return load_catalog(resolve_catalog_source())


class OrderFormApp(App):
    """A Textual app for entering product quantities and exporting them as CSV."""

    TITLE = "Field Order"
    SUB_TITLE = "Order entry / CSV export"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #products-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #customer-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #customer-info {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #products-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    app_ready = reactive(False)
    exporting = reactive(False)
    selected_index = reactive(0)

    BINDINGS = [
        ("up", "move_selection(-1)", "Previous product"),
        ("down", "move_selection(1)", "Next product"),
        ("backspace", "backspace_quantity", "Delete digit"),
        Binding("ctrl+s", "export_csv", "Export CSV", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        catalog_loader: Callable[[], list[Product]] = _default_catalog_loader,
        location_reader: Callable[[], Location] = read_position,
        routine: ExportRoutine | None = None,
        ask_location: bool = True,
    ) -> None:
        super().__init__()
        self.form = OrderForm()
        self.catalog_loader = catalog_loader
        self.location_reader = location_reader
        self.ask_location = ask_location
        self.routine = routine or ExportRoutine(
            mode=resolve_export_mode(),
            export_dir=resolve_export_dir(),
            cache_dir=resolve_cache_dir(),
            share=ClipboardSharer(self.copy_to_clipboard),
        )
        self.system_status = "Loading app..."
        self._storage_granted: bool | None = None
        self._log_debug("app_init")

    def _log_debug(self, message: str) -> None:
        logger.debug(message)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="products-pane"):
                yield Static("Products", classes="pane-title")
                yield Static("Loading app...", id="products-list")
            with Vertical(id="customer-pane"):
                yield Static(id="status-bar")
                yield Static("Customer Information", classes="pane-title")
                yield Static(id="customer-info")

    def on_mount(self) -> None:
        self._refresh_all()
        self._initialize()

    @work(exclusive=True, group="init")
    async def _initialize(self) -> None:
        catalog_task = asyncio.ensure_future(asyncio.to_thread(self.catalog_loader))

        granted = False
        if self.ask_location:
            granted = await self._ask_permission(
                "Location", "Attach your current location to exported orders?"
            )
        self.form.location = await asyncio.to_thread(fetch_location, granted, self.location_reader)
        self._log_debug(f"init_location granted={granted} captured={self.form.location is not None}")

        try:
            products = await catalog_task
        except (InitializationFailure, ValueError) as exc:
            logger.error("Initialization failed: %s", exc)
            self._show_notice(InitializationFailure("Failed to load app data"))
            products = []
        self.form.load_products(products)
        self.selected_index = 0
        self.app_ready = True
        if self.system_status == "Loading app...":
            self.system_status = ""
        self._log_debug(f"init_ready products={len(products)}")
        self._refresh_all()

    async def _ask_permission(self, title: str, prompt: str) -> bool:
        return bool(await self.push_screen_wait(PermissionModal(f"{title} Permission", prompt)))

    def _modal_active(self) -> bool:
        return isinstance(self.screen, (CustomerModal, PermissionModal))

    def on_key(self, event: Key) -> None:
        if self._modal_active() or not self.app_ready:
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        char = event.character
        if char.isdigit():
            self._append_digit(char)
            event.stop()
            return

        key = char.lower()
        if key == "j":
            self.action_move_selection(1)
            event.stop()
            return

        if key == "k":
            self.action_move_selection(-1)
            event.stop()
            return

        if key == "d":
            self._set_selected_quantity("")
            event.stop()
            return

        if key == "c":
            self.push_screen(CustomerModal(self.form.customer), callback=self._on_customer_result)
            event.stop()

    def action_move_selection(self, delta: int) -> None:
        if self._modal_active() or not self.form.products:
            return
        self.selected_index = (self.selected_index + delta) % len(self.form.products)
        self._refresh_products()

    def action_backspace_quantity(self) -> None:
        if self._modal_active():
            return
        product = self._selected_product()
        if product is None:
            return
        current = self.form.quantity_for(product.code)
        if current:
            self._set_selected_quantity(current[:-1])

    def action_export_csv(self) -> None:
        self._log_debug(
            f"export_enter ready={self.app_ready} exporting={self.exporting} screen={type(self.screen).__name__}"
        )
        if self._modal_active() or not self.app_ready:
            self._log_debug("export_blocked reason=not_ready")
            return
        if self.exporting:
            self._log_debug("export_blocked reason=pending")
            return

        snapshot = self.form.snapshot()
        if not snapshot.lines:
            self._show_notice(NoProductsSelected())
            self._log_debug("export_blocked reason=no_products")
            return

        self.exporting = True
        self.system_status = "Exporting..."
        self._refresh_status()
        self._run_export(snapshot)

    @work(exclusive=True, group="export")
    async def _run_export(self, snapshot: OrderSnapshot) -> None:
        try:
            granted = True
            if self.routine.needs_storage_permission:
                if self._storage_granted is None:
                    self._storage_granted = await self._ask_permission(
                        "Storage", "Save exported orders to Downloads/Orders?"
                    )
                granted = self._storage_granted
            result = await self.routine.run_async(snapshot, storage_granted=granted)
        except OrderFormError as exc:
            logger.error("Export failed: %s", exc)
            self._show_notice(exc)
            self._log_debug(f"export_failed error={exc!r}")
        else:
            self.system_status = result.message
            self.notify(result.message, title="Success")
            self._log_debug(f"export_done file={result.artifact.file_name} shared={result.shared}")
        finally:
            self.exporting = False
            self._refresh_status()

    def _show_notice(self, exc: OrderFormError) -> None:
        message = str(exc) or "Could not export the file. Please try again."
        self.system_status = f"{exc.title}: {message}"
        self.notify(message, title=exc.title, severity="error")
        self._refresh_status()

    def _on_customer_result(self, customer: CustomerInfo | None) -> None:
        if customer is None:
            return
        self.form.customer = customer
        self._log_debug("customer_updated")
        self._refresh_customer()

    def _selected_product(self) -> Product | None:
        if not (0 <= self.selected_index < len(self.form.products)):
            return None
        return self.form.products[self.selected_index]

    def _append_digit(self, digit: str) -> None:
        product = self._selected_product()
        if product is None:
            return
        self._set_selected_quantity(self.form.quantity_for(product.code) + digit)

    def _set_selected_quantity(self, text: str) -> None:
        product = self._selected_product()
        if product is None:
            return
        if self.form.set_quantity(product.code, text):
            self._refresh_products()
            self._refresh_status()

    def _refresh_all(self) -> None:
        self._refresh_products()
        self._refresh_customer()
        self._refresh_status()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_products(self) -> None:
        try:
            products_widget = self.query_one("#products-list", Static)
        except NoMatches:
            return
        if not self.app_ready:
            products_widget.update("Loading app...")
            return
        products = self.form.products
        if not products:
            products_widget.update("No products available")
            return

        visible_rows = self._visible_rows(products_widget)
        start, end = self._window_bounds(len(products), visible_rows, self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            pointer = "➤ " if idx == self.selected_index else "  "
            lines.append(pointer)
            lines.append_text(format_product_label(products[idx], self.form.quantity_for(products[idx].code)))

        if end < len(products):
            lines.append("\n⋮", style="dim")

        products_widget.update(lines)

    def _refresh_customer(self) -> None:
        try:
            info = self.query_one("#customer-info", Static)
        except NoMatches:
            return
        info.update(format_customer_summary(self.form.customer, self.form.location))

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        ordered = len(self.form.ordered_lines())
        hint = "0-9 qty, J/K move, D clear, C customer. Ctrl+S export."
        if self.exporting:
            status = "Exporting..."
        else:
            status = self.system_status or f"{ordered} product(s) selected"
        bar.update(f"{hint}\n{status}")
