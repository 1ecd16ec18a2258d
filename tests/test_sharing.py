"""Tests for share payloads and the clipboard share action."""
from pathlib import Path
from unittest.mock import Mock

import pytest

from field_order.errors import ShareFailure
from field_order.models import ExportArtifact
from field_order.sharing import ClipboardSharer, file_payload, inline_payload

ARTIFACT = ExportArtifact(file_name="order_x.csv", content="Code,Description,Quantity\n001,Toy Car,3")


def test_inline_payload_encodes_content():
    payload = inline_payload(ARTIFACT)

    assert payload.is_inline
    assert payload.message == "Here is the order export:"
    assert payload.url == "data:text/csv;base64,Q29kZSxEZXNjcmlwdGlvbixRdWFudGl0eQowMDEsVG95IENhciwz"


def test_clipboard_sharer_copies_content_for_inline_payload():
    copy = Mock()

    ClipboardSharer(copy)(inline_payload(ARTIFACT))

    copy.assert_called_once_with(ARTIFACT.content)


def test_clipboard_sharer_copies_path_for_file_payload():
    copy = Mock()

    ClipboardSharer(copy)(file_payload(Path("/tmp/field-order/order_x.csv")))

    copy.assert_called_once_with("/tmp/field-order/order_x.csv")


def test_clipboard_sharer_wraps_errors():
    copy = Mock(side_effect=OSError("no terminal"))

    with pytest.raises(ShareFailure, match="no terminal"):
        ClipboardSharer(copy)(inline_payload(ARTIFACT))
