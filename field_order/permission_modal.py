"""Yes/no permission prompt modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class PermissionModal(ModalScreen[bool]):
    """Ask the user to allow or deny access to a platform service."""

    CSS = """
    PermissionModal {
        align: center middle;
        background: $background 60%;
    }

    #permission-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #permission-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #permission-prompt {
        color: white;
        margin-bottom: 1;
    }

    #permission-help {
        color: #dddddd;
    }
    """

    def __init__(self, title: str, prompt: str) -> None:
        super().__init__()
        self.title_text = title
        self.prompt_text = prompt

    def compose(self) -> ComposeResult:
        with Container(id="permission-dialog"):
            yield Static(self.title_text, id="permission-title")
            yield Static(self.prompt_text, id="permission-prompt")
            yield Static("Y/Enter allow. N/Esc deny.", id="permission-help")

    def on_key(self, event: Key) -> None:
        if event.key in {"y", "enter"}:
            self.dismiss(True)
            event.stop()
            return

        if event.key in {"n", "escape", "ctrl+c"}:
            self.dismiss(False)
            event.stop()
