"""Entry point for the field-order Textual app."""

from __future__ import annotations

import logging

from field_order.config import resolve_debug_log_path
from field_order.order_app import OrderFormApp


def configure_logging() -> None:
    """Route log records to the debug log; the TUI owns the terminal."""
    log_path = resolve_debug_log_path()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=log_path,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    # Keep HTTP client chatter out of the app trace.
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    OrderFormApp().run()


if __name__ == "__main__":
    main()
