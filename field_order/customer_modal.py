"""Customer information modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from field_order.models import CustomerInfo

_FIELDS: list[tuple[str, str]] = [
    ("store", "Store Name"),
    ("vat", "VAT Number"),
    ("notes", "Notes"),
]
_MULTILINE_FIELDS = {"notes"}


class CustomerModal(ModalScreen[CustomerInfo | None]):
    """Centered modal to edit store name, VAT number and notes."""

    CSS = """
    CustomerModal {
        align: center middle;
        background: $background 60%;
    }

    #customer-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #customer-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #customer-body {
        margin-bottom: 1;
        color: white;
    }

    #customer-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)

    def __init__(self, customer: CustomerInfo) -> None:
        super().__init__()
        self.values = {key: getattr(customer, key) for key, _ in _FIELDS}

    def compose(self) -> ComposeResult:
        with Container(id="customer-dialog"):
            yield Static("Customer Information", id="customer-title")
            yield Static(id="customer-body")
            yield Static(
                "Type to edit. Tab/↑/↓ move, Ctrl+N new line in Notes, Enter next/confirm, Esc cancel",
                id="customer-help",
            )

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "ctrl+c"}:
            self.dismiss(None)
            event.stop()
            return

        if event.key in {"tab", "down"}:
            self._move_cursor(1)
            event.stop()
            return

        if event.key in {"shift+tab", "up"}:
            self._move_cursor(-1)
            event.stop()
            return

        if event.key == "enter":
            if self.cursor_index == len(_FIELDS) - 1:
                self._confirm()
            else:
                self._move_cursor(1)
            event.stop()
            return

        key = _FIELDS[self.cursor_index][0]
        if event.key == "ctrl+n":
            if key in _MULTILINE_FIELDS:
                self.values[key] += "\n"
                self._refresh_content()
            event.stop()
            return

        if event.key == "backspace":
            if self.values[key]:
                self.values[key] = self.values[key][:-1]
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.values[key] += event.character
            self._refresh_content()
            event.stop()
            return

        # Ignore all other non-text keys while editing.
        event.stop()

    def _move_cursor(self, delta: int) -> None:
        self.cursor_index = (self.cursor_index + delta) % len(_FIELDS)
        self._refresh_content()

    def _confirm(self) -> None:
        self.dismiss(CustomerInfo(**{key: value.strip() for key, value in self.values.items()}))

    def _refresh_content(self) -> None:
        body = self.query_one("#customer-body", Static)
        content = Text(style="white")
        for idx, (key, label) in enumerate(_FIELDS):
            if idx > 0:
                content.append("\n")
            active = idx == self.cursor_index
            pointer = "➤ " if active else "  "
            content.append(f"{pointer}{label}: ", style="bold white" if active else "white")
            content.append(self.values[key])
            if active:
                content.append("|", style="bold white")
        body.update(content)
