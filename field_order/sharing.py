"""Share action used for the share export mode and the save fallback."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from field_order.constant import SHARE_MESSAGE, SHARE_TITLE
from field_order.errors import ShareFailure
from field_order.models import ExportArtifact


@dataclass(frozen=True)
class SharePayload:
    title: str
    message: str
    url: str
    content: str | None = None

    @property
    def is_inline(self) -> bool:
        return self.content is not None


def inline_payload(artifact: ExportArtifact) -> SharePayload:
    """Payload carrying the CSV itself as a base64 data URL."""
    encoded = base64.b64encode(artifact.content.encode("utf-8")).decode("ascii")
    return SharePayload(
        title=SHARE_TITLE,
        message=SHARE_MESSAGE,
        url=f"data:text/csv;base64,{encoded}",
        content=artifact.content,
    )


def file_payload(path: Path) -> SharePayload:
    return SharePayload(title=SHARE_TITLE, message=SHARE_MESSAGE, url=str(path))


class ClipboardSharer:
    """Share by copying to the terminal clipboard."""

    def __init__(self, copy: Callable[[str], None]) -> None:
        self._copy = copy

    def __call__(self, payload: SharePayload) -> None:
        text = payload.content if payload.is_inline else payload.url
        try:
            self._copy(text)
        except Exception as exc:
            raise ShareFailure(f"Could not share the export: {exc}") from exc
